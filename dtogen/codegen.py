"""Render templates and write generated output.

Takes the context from context_builder and produces C# record source.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import jinja2

from .context_builder import DEFAULT_NAMESPACE, build_context
from .declarations import generate_declarations_from_schema, generate_declarations_from_tools
from .models import SchemaNode, ToolContract

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
RECORDS_TEMPLATE = "records.cs.j2"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render(context: dict[str, Any]) -> str:
    """Render the records template with a context from build_context."""
    template = _environment().get_template(RECORDS_TEMPLATE)
    return template.render(**context)


def generate_record(
    schema: SchemaNode,
    name: str,
    namespace: str = DEFAULT_NAMESPACE,
    on_collision: str = "error",
) -> str:
    """Render the record for ``schema`` and every record nested under it."""
    declarations = generate_declarations_from_schema(schema, name, on_collision=on_collision)
    return render(build_context(declarations, namespace))


def generate_from_tools(
    tools: Iterable[ToolContract],
    namespace: str = DEFAULT_NAMESPACE,
    on_collision: str = "error",
) -> str:
    """Render {Tool}Request records for every tool contract."""
    declarations = generate_declarations_from_tools(tools, on_collision=on_collision)
    return render(build_context(declarations, namespace))


def write_output(text: str, output_path: Path) -> Path:
    """Write generated source, creating parent directories as needed."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text)
    logger.debug("Wrote %s (%d bytes)", output_path, len(text))
    return output_path
