"""Build Jinja2 template context from generated declarations.

Flattens each Declaration into plain dicts for records.cs.j2 and prepares
documentation text for XML doc comments.
"""

from __future__ import annotations

from typing import Any, Iterable

from .models import Declaration, Field

DEFAULT_NAMESPACE = "Generated"

_XML_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;"}


def _escape_xml(text: str) -> str:
    return "".join(_XML_ESCAPES.get(c, c) for c in text)


def doc_lines(text: str | None) -> list[str]:
    """Split documentation into XML-escaped lines; empty text gives none."""
    if not text or not text.strip():
        return []
    return [_escape_xml(line.rstrip()) for line in text.strip().splitlines()]


def _field_context(field: Field) -> dict[str, Any]:
    return {
        "name": field.name,
        "json_name": field.json_name,
        "type": field.type.render(),
        "required": field.required,
        "doc_lines": doc_lines(field.documentation),
    }


def _declaration_context(declaration: Declaration) -> dict[str, Any]:
    return {
        "name": declaration.name,
        "doc_lines": doc_lines(declaration.documentation),
        "fields": [_field_context(f) for f in declaration.fields],
    }


def build_context(
    declarations: Iterable[Declaration],
    namespace: str = DEFAULT_NAMESPACE,
) -> dict[str, Any]:
    """Build the full template context for records.cs.j2."""
    items = [_declaration_context(d) for d in declarations]
    return {
        "namespace": namespace,
        "declarations": items,
        "declaration_count": len(items),
    }
