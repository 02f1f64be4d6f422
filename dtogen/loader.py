"""Load JSON Schema documents and tool manifests into the model.

Sources may be local .json/.yaml/.yml files or http(s) URLs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import httpx
import yaml

from .models import SchemaNode, SchemaParseError, SchemaType, ToolContract

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def _is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def _decode(text: str, yaml_source: bool, origin: str) -> Any:
    try:
        if yaml_source:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SchemaParseError(f"Cannot parse {origin}: {exc}") from exc


def load_document(source: str | Path, client: httpx.Client | None = None) -> dict[str, Any]:
    """Read a JSON or YAML document from a file path or URL."""
    origin = str(source)
    if _is_url(source):
        try:
            if client is not None:
                resp = client.get(origin)
            else:
                resp = httpx.get(origin, follow_redirects=True, timeout=30)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise SchemaParseError(f"Cannot fetch {origin}: {exc}") from exc
        content_type = resp.headers.get("content-type", "")
        yaml_source = "yaml" in content_type or origin.endswith((".yaml", ".yml"))
        text = resp.text
    else:
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SchemaParseError(f"Cannot read {origin}: {exc}") from exc
        yaml_source = path.suffix.lower() in _YAML_SUFFIXES

    document = _decode(text, yaml_source, origin)
    if not isinstance(document, dict):
        raise SchemaParseError(f"{origin} does not contain an object at the top level")
    logger.debug("Loaded %s", origin)
    return document


def _parse_type(raw: Any) -> tuple[SchemaType, bool]:
    """Return (type, nullable) for a 'type' keyword, which may be a list."""
    if isinstance(raw, list):
        non_null = [t for t in raw if t != "null"]
        is_nullable = len(non_null) < len(raw)
        if not non_null:
            return SchemaType.NULL, is_nullable
        return SchemaType.parse(non_null[0]), is_nullable
    return SchemaType.parse(raw), False


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _parse_subschema(data: Any) -> SchemaNode:
    """Nested schemas may be booleans; true and false both map to an untyped node."""
    if isinstance(data, bool):
        return SchemaNode()
    return parse_schema(data)


def parse_schema(data: Mapping[str, Any]) -> SchemaNode:
    """Convert a decoded JSON Schema object into a SchemaNode tree."""
    if not isinstance(data, Mapping):
        raise SchemaParseError(f"Schema must be an object, got {type(data).__name__}")

    schema_type, type_nullable = _parse_type(data.get("type"))

    items = data.get("items")
    properties = data.get("properties") or {}
    if not isinstance(properties, Mapping):
        raise SchemaParseError("'properties' must be an object")
    enum = data.get("enum")
    required = data.get("required")
    if not isinstance(required, list):
        required = []

    return SchemaNode(
        type=schema_type,
        ref=_optional_str(data, "$ref"),
        format=_optional_str(data, "format"),
        enum=tuple(enum) if isinstance(enum, list) else None,
        items=_parse_subschema(items) if isinstance(items, (Mapping, bool)) else None,
        # YAML reads keys such as on/yes/200 as bool or int
        properties={str(name): _parse_subschema(sub) for name, sub in properties.items()},
        required=frozenset(str(name) for name in required),
        title=_optional_str(data, "title"),
        description=_optional_str(data, "description"),
        nullable=bool(data.get("nullable", False)) or type_nullable,
    )


def parse_schema_json(text: str) -> SchemaNode:
    """Parse JSON text into a SchemaNode."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(f"Invalid schema JSON: {exc}") from exc
    return parse_schema(data)


def load_schema(source: str | Path, client: httpx.Client | None = None) -> SchemaNode:
    """Load and parse a schema document."""
    return parse_schema(load_document(source, client))


def _schema_text(value: Any, default: str = "{}") -> str:
    """Tool manifests may hold schemas inline or as JSON strings."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    return json.dumps(value)


def parse_tools(document: Mapping[str, Any]) -> list[ToolContract]:
    """Build tool contracts from a manifest: {"tools": [{"name", "parameters", ...}]}."""
    entries = document.get("tools")
    if not isinstance(entries, list):
        raise SchemaParseError("Tool manifest must contain a 'tools' list")

    tools: list[ToolContract] = []
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, Mapping) or not entry.get("name"):
            raise SchemaParseError(f"Tool entry without a name: {entry!r}")
        name = str(entry["name"])
        if name in seen:
            raise SchemaParseError(f"Duplicate tool name: {name}")
        seen.add(name)
        metadata = entry.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            raise SchemaParseError(f"Tool {name}: 'metadata' must be an object")
        tools.append(ToolContract(
            name=name,
            description=str(entry.get("description") or ""),
            parameters_schema_json=_schema_text(entry.get("parameters")),
            result_schema_json=_schema_text(entry.get("result")),
            metadata={str(k): str(v) for k, v in metadata.items()},
        ))
    return tools


def load_tools(source: str | Path, client: httpx.Client | None = None) -> list[ToolContract]:
    """Load a tool manifest from a file path or URL."""
    return parse_tools(load_document(source, client))
