"""Casing and name composition for generated declarations.

Pattern: {ParentName}{PascalProperty}[Item]
  - object property            -> Person + address     -> PersonAddress
  - array of objects property  -> Order + items + Item -> OrderItemsItem
  - $ref                       -> last path segment    -> #/definitions/Widget -> Widget
  - tool contract              -> get_weather + Request -> GetWeatherRequest

Examples:
  to_pascal_case("get_weather")     -> GetWeather
  to_pascal_case("first-name")      -> FirstName
  to_pascal_case("userID")          -> UserID
  to_camel_case("Street Address")   -> streetAddress
"""

from __future__ import annotations

import re

# Characters that start a new word and are dropped from the output
_WORD_SEPARATORS = re.compile(r"[_\- ]+")

ITEM_SUFFIX = "Item"
REQUEST_SUFFIX = "Request"


def to_pascal_case(text: str) -> str:
    """Uppercase the first letter of every word; internal capitals are kept."""
    if not text:
        return text
    words = _WORD_SEPARATORS.split(text)
    return "".join(w[0].upper() + w[1:] for w in words if w)


def to_camel_case(text: str) -> str:
    """PascalCase with the first character lowercased."""
    pascal = to_pascal_case(text)
    if not pascal:
        return pascal
    return pascal[0].lower() + pascal[1:]


def ref_type_name(ref: str) -> str:
    """Type name for a $ref like '#/definitions/MyType' or '#/$defs/my_type'."""
    last = ref.split("/")[-1]
    return to_pascal_case(last) or "object"


def compose_name(parent: str, property_name: str, is_item: bool = False) -> str:
    """Name for a nested declaration reached through ``property_name``."""
    name = parent + to_pascal_case(property_name)
    if is_item:
        name += ITEM_SUFFIX
    return name


def request_name(tool_name: str) -> str:
    """Root declaration name for a tool contract's parameters."""
    return to_pascal_case(tool_name) + REQUEST_SUFFIX


def with_suffix(name: str, taken: set[str] | frozenset[str]) -> str:
    """Return ``name`` or the first of name2, name3, ... not in ``taken``."""
    if name not in taken:
        return name
    counter = 2
    while f"{name}{counter}" in taken:
        counter += 1
    return f"{name}{counter}"
