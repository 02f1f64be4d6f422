"""Map JSON Schema fragments to C# type names.

Handles:
- $ref (name taken from the last path segment, never dereferenced)
- string formats (date-time, date, time, uri, uuid/guid)
- integer/number/boolean primitives
- arrays, with item naming context "{context}Item"
- objects: title, naming context, or an untyped dictionary
- explicit nullability, skipped for reference-like types
"""

from __future__ import annotations

from .models import SchemaNode, SchemaType, TypeDescriptor, is_reference_type
from .naming import ITEM_SUFFIX, ref_type_name, to_pascal_case

UNTYPED = "object"
NULLABLE_UNTYPED = "object?"
TEXT = "string"
UNTYPED_LIST = "IReadOnlyList<object>"
UNTYPED_MAP = "IReadOnlyDictionary<string, object>"

# String format hints (lowercased) -> target type
_STRING_FORMATS: dict[str, str] = {
    "date-time": "DateTimeOffset",
    "date": "DateOnly",
    "time": "TimeOnly",
    "uri": "Uri",
    "uuid": "Guid",
    "guid": "Guid",
}

_PRIMITIVES: dict[SchemaType, str] = {
    SchemaType.INTEGER: "int",
    SchemaType.NUMBER: "double",
    SchemaType.BOOLEAN: "bool",
}


def list_of(type_name: str) -> str:
    return f"IReadOnlyList<{type_name}>"


def _map_string_type(schema: SchemaNode) -> str:
    # Enum strings stay plain text; no enum type is synthesized.
    if schema.format:
        return _STRING_FORMATS.get(schema.format.lower(), TEXT)
    return TEXT


def _map_array_type(schema: SchemaNode, naming_context: str | None) -> str:
    if schema.items is None:
        return UNTYPED_LIST
    item_context = naming_context + ITEM_SUFFIX if naming_context else None
    return list_of(map_type(schema.items, item_context).render())


def _map_object_type(schema: SchemaNode, naming_context: str | None) -> str:
    if schema.title:
        return to_pascal_case(schema.title)
    if schema.properties and naming_context:
        return to_pascal_case(naming_context)
    return UNTYPED_MAP


def _map_base_type(schema: SchemaNode, naming_context: str | None) -> str:
    if schema.ref:
        return ref_type_name(schema.ref)

    schema_type = schema.type
    if schema_type is SchemaType.STRING:
        return _map_string_type(schema)
    if schema_type in _PRIMITIVES:
        return _PRIMITIVES[schema_type]
    if schema_type is SchemaType.ARRAY:
        return _map_array_type(schema, naming_context)
    if schema_type is SchemaType.OBJECT:
        return _map_object_type(schema, naming_context)
    if schema_type is SchemaType.NULL:
        return NULLABLE_UNTYPED
    return UNTYPED


def map_type(schema: SchemaNode, naming_context: str | None = None) -> TypeDescriptor:
    """Resolve a schema node to a TypeDescriptor.

    ``naming_context`` names an anonymous object that has properties; it is
    ignored for every other kind of node. Never raises.
    """
    base_type = _map_base_type(schema, naming_context)
    if base_type == NULLABLE_UNTYPED:
        return TypeDescriptor(base_type, is_nullable=True)
    is_nullable = schema.nullable and not is_reference_type(base_type)
    return TypeDescriptor(base_type, is_nullable=is_nullable)
