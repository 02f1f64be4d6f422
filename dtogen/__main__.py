"""Entry point: python -m dtogen

  python -m dtogen schema person.schema.json --name Person --namespace MyApp
  python -m dtogen tools tools.yaml --namespace MyApp.Tools --output Tools.g.cs
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
