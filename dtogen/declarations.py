"""Walk schemas and tool contracts into a flat list of record declarations.

Every object reached through a property (directly or as array items) becomes
a peer declaration named {Parent}{Property}[Item], or after its title when it
has one. Parents are emitted before the declarations nested under them.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from .loader import parse_schema_json
from .models import (
    Declaration,
    DuplicateDeclarationNameError,
    DuplicateFieldNameError,
    Field,
    SchemaNode,
    SchemaType,
    ToolContract,
)
from .naming import ITEM_SUFFIX, compose_name, request_name, to_pascal_case, with_suffix
from .type_mapper import map_type

logger = logging.getLogger(__name__)

COLLISION_POLICIES = ("error", "suffix")


class _NameScope:
    """Names already used in one scope: the whole run, or one record's fields."""

    def __init__(self, on_collision: str = "error", owner: str | None = None) -> None:
        if on_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"on_collision must be one of {', '.join(COLLISION_POLICIES)}, got {on_collision!r}"
            )
        self.on_collision = on_collision
        self.owner = owner
        self.taken: set[str] = set()
        # C# members cannot share the enclosing record's name
        if owner is not None:
            self.taken.add(owner)

    def claim(self, name: str) -> str:
        if name in self.taken:
            if self.on_collision == "error":
                if self.owner is None:
                    raise DuplicateDeclarationNameError(name)
                raise DuplicateFieldNameError(self.owner, name)
            renamed = with_suffix(name, self.taken)
            if self.owner is None:
                logger.warning("Declaration name %s already used, renamed to %s", name, renamed)
            else:
                logger.warning("Field name %s in %s already used, renamed to %s", name, self.owner, renamed)
            name = renamed
        self.taken.add(name)
        return name


def _nested_node(prop_schema: SchemaNode) -> tuple[SchemaNode | None, int]:
    """The object node that needs its own declaration and its array depth."""
    node, depth = prop_schema, 0
    while node.type is SchemaType.ARRAY and node.items is not None and not node.ref:
        node, depth = node.items, depth + 1
    if node.is_named_object():
        return node, depth
    return None, 0


def _retitled(schema: SchemaNode, depth: int, name: str) -> SchemaNode:
    """Copy of ``schema`` whose object ``depth`` arrays down maps to ``name``."""
    if depth == 0:
        return replace(schema, title=name)
    return replace(schema, items=_retitled(schema.items, depth - 1, name))


def _emit(schema: SchemaNode, name: str, scope: _NameScope) -> list[Declaration]:
    fields: list[Field] = []
    field_names = _NameScope(scope.on_collision, owner=name)
    nested_declarations: list[Declaration] = []

    for prop_name, prop_schema in schema.properties.items():
        composed = compose_name(name, prop_name)
        field_type = map_type(prop_schema, composed)

        nested, depth = _nested_node(prop_schema)
        if nested is not None:
            target = map_type(nested, composed + ITEM_SUFFIX * depth).type_name
            nested_name = scope.claim(target)
            if nested_name != target:
                field_type = map_type(_retitled(prop_schema, depth, nested_name), composed)
            nested_declarations.extend(_emit(nested, nested_name, scope))

        is_required = prop_name in schema.required
        if not is_required:
            field_type = field_type.as_optional()

        fields.append(Field(
            name=field_names.claim(to_pascal_case(prop_name)),
            json_name=prop_name,
            type=field_type,
            documentation=prop_schema.description or None,
            required=is_required,
        ))

    declaration = Declaration(
        name=name,
        documentation=schema.description or None,
        fields=tuple(fields),
    )
    logger.debug("Emitted declaration %s (%d fields)", name, len(fields))
    return [declaration, *nested_declarations]


def _generate(schema: SchemaNode, root_name: str, scope: _NameScope) -> list[Declaration]:
    return _emit(schema, scope.claim(root_name), scope)


def generate_declarations_from_schema(
    schema: SchemaNode,
    root_name: str,
    *,
    on_collision: str = "error",
) -> list[Declaration]:
    """Generate the root declaration and every nested declaration under it.

    Raises DuplicateDeclarationNameError when two declarations compose to
    the same name, unless ``on_collision="suffix"`` is given, in which case
    later ones are renamed Name2, Name3, ...
    """
    return _generate(schema, root_name, _NameScope(on_collision))


def generate_declarations_from_tools(
    tools: Iterable[ToolContract],
    *,
    on_collision: str = "error",
) -> list[Declaration]:
    """Generate {Tool}Request declarations for each tool's parameter schema.

    All tools share one naming scope. A tool whose parameters are not valid
    JSON raises SchemaParseError.
    """
    scope = _NameScope(on_collision)
    declarations: list[Declaration] = []
    for tool in tools:
        schema = parse_schema_json(tool.parameters_schema_json)
        tool_declarations = _generate(schema, request_name(tool.name), scope)
        # The tool description documents the request when the schema has none
        root = tool_declarations[0]
        if root.documentation is None and tool.description:
            tool_declarations[0] = replace(root, documentation=tool.description)
        declarations.extend(tool_declarations)
    return declarations
