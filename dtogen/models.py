"""Immutable data model shared by the mapper, the generator and the loader.

SchemaNode mirrors the subset of JSON Schema the generator inspects.
TypeDescriptor, Field and Declaration are the generator's output.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping


class DtogenError(Exception):
    """Base class for generator errors."""


class SchemaParseError(DtogenError):
    """Raised when schema or tool manifest text cannot be turned into the model."""


class DuplicateDeclarationNameError(DtogenError):
    """Raised when two declarations in one run compose to the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate declaration name: {name}")
        self.name = name


class DuplicateFieldNameError(DtogenError):
    """Raised when two properties of one record map to the same field name."""

    def __init__(self, declaration: str, name: str) -> None:
        super().__init__(f"Duplicate field name {name} in {declaration}")
        self.declaration = declaration
        self.name = name


class SchemaType(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> SchemaType:
        """Case-insensitive lookup; anything unrecognized is UNKNOWN."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class SchemaNode:
    """One JSON Schema fragment."""

    type: SchemaType = SchemaType.UNKNOWN
    ref: str | None = None
    format: str | None = None
    enum: tuple[Any, ...] | None = None
    items: SchemaNode | None = None
    properties: Mapping[str, SchemaNode] = field(default_factory=lambda: MappingProxyType({}))
    required: frozenset[str] = frozenset()
    title: str | None = None
    description: str | None = None
    nullable: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.properties, MappingProxyType):
            object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        if not isinstance(self.required, frozenset):
            object.__setattr__(self, "required", frozenset(self.required))
        if self.enum is not None and not isinstance(self.enum, tuple):
            object.__setattr__(self, "enum", tuple(self.enum))

    def is_named_object(self) -> bool:
        """True for object nodes that get their own declaration."""
        if self.ref or self.type is not SchemaType.OBJECT:
            return False
        return bool(self.title) or bool(self.properties)


@dataclass(frozen=True)
class ToolContract:
    """A callable operation described by name and JSON Schema parameters."""

    name: str
    description: str = ""
    parameters_schema_json: str = "{}"
    result_schema_json: str = "{}"
    metadata: Mapping[str, str] = field(default_factory=dict)


# Target spellings that already admit absence and never take a "?" marker.
_REFERENCE_TYPES = {"string", "object", "object?"}
_REFERENCE_PREFIXES = ("IReadOnly", "Uri")

# Target value types that need "?" to hold null
VALUE_TYPES = frozenset({"int", "double", "bool", "DateTimeOffset", "DateOnly", "TimeOnly", "Guid"})


def is_reference_type(type_name: str) -> bool:
    """Check whether a target type name is reference-like (implicitly nullable)."""
    return type_name in _REFERENCE_TYPES or type_name.startswith(_REFERENCE_PREFIXES)


@dataclass(frozen=True)
class TypeDescriptor:
    """Resolved target type name plus nullability."""

    type_name: str
    is_nullable: bool = False

    def as_optional(self) -> TypeDescriptor:
        if self.is_nullable:
            return self
        return replace(self, is_nullable=True)

    def render(self) -> str:
        """Target-language spelling, e.g. ``int?`` for an optional int.

        Only value types take the marker; records, strings and collections
        are reference types and admit null as they are.
        """
        if self.is_nullable and self.type_name in VALUE_TYPES:
            return self.type_name + "?"
        return self.type_name


@dataclass(frozen=True)
class Field:
    name: str
    json_name: str
    type: TypeDescriptor
    documentation: str | None = None
    required: bool = False


@dataclass(frozen=True)
class Declaration:
    name: str
    documentation: str | None = None
    fields: tuple[Field, ...] = ()
