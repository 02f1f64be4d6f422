"""Tests for the type_mapper module."""

import pytest

from dtogen.models import SchemaNode, SchemaType
from dtogen.type_mapper import map_type


def _string(**kwargs) -> SchemaNode:
    return SchemaNode(type=SchemaType.STRING, **kwargs)


class TestPrimitives:
    """Test JSON Schema primitive -> C# type conversion."""

    def test_string(self):
        assert map_type(_string()).type_name == "string"

    def test_integer(self):
        assert map_type(SchemaNode(type=SchemaType.INTEGER)).type_name == "int"

    def test_number(self):
        assert map_type(SchemaNode(type=SchemaType.NUMBER)).type_name == "double"

    def test_boolean(self):
        assert map_type(SchemaNode(type=SchemaType.BOOLEAN)).type_name == "bool"

    def test_null(self):
        result = map_type(SchemaNode(type=SchemaType.NULL))
        assert result.type_name == "object?"
        assert result.is_nullable

    def test_unknown(self):
        """Missing or unsupported types degrade to object instead of failing."""
        assert map_type(SchemaNode()).type_name == "object"
        assert map_type(SchemaNode(type=SchemaType.parse("decimal"))).type_name == "object"

    def test_type_is_case_insensitive(self):
        assert map_type(SchemaNode(type=SchemaType.parse("Integer"))).type_name == "int"


class TestStringFormats:
    """Test string format hints."""

    @pytest.mark.parametrize(("fmt", "expected"), [
        ("date-time", "DateTimeOffset"),
        ("date", "DateOnly"),
        ("time", "TimeOnly"),
        ("uri", "Uri"),
        ("uuid", "Guid"),
        ("guid", "Guid"),
        ("DATE-TIME", "DateTimeOffset"),
    ])
    def test_known_formats(self, fmt, expected):
        assert map_type(_string(format=fmt)).type_name == expected

    def test_unknown_format(self):
        assert map_type(_string(format="email")).type_name == "string"

    def test_enum_stays_string(self):
        assert map_type(_string(enum=("red", "green"))).type_name == "string"


class TestArrays:
    """Test array wrapping and item naming."""

    def test_array_of_strings(self):
        schema = SchemaNode(type=SchemaType.ARRAY, items=_string())
        assert map_type(schema, "OrderTags").type_name == "IReadOnlyList<string>"

    def test_array_without_items(self):
        assert map_type(SchemaNode(type=SchemaType.ARRAY)).type_name == "IReadOnlyList<object>"

    def test_array_of_objects_uses_item_context(self):
        item = SchemaNode(type=SchemaType.OBJECT, properties={"id": SchemaNode(type=SchemaType.INTEGER)})
        schema = SchemaNode(type=SchemaType.ARRAY, items=item)
        assert map_type(schema, "OrderItems").type_name == "IReadOnlyList<OrderItemsItem>"

    def test_array_of_objects_without_context(self):
        item = SchemaNode(type=SchemaType.OBJECT, properties={"id": SchemaNode(type=SchemaType.INTEGER)})
        schema = SchemaNode(type=SchemaType.ARRAY, items=item)
        assert map_type(schema).type_name == "IReadOnlyList<IReadOnlyDictionary<string, object>>"

    def test_nullable_items(self):
        schema = SchemaNode(type=SchemaType.ARRAY, items=SchemaNode(type=SchemaType.INTEGER, nullable=True))
        assert map_type(schema).type_name == "IReadOnlyList<int?>"

    def test_nested_arrays(self):
        inner = SchemaNode(type=SchemaType.ARRAY, items=SchemaNode(type=SchemaType.NUMBER))
        schema = SchemaNode(type=SchemaType.ARRAY, items=inner)
        assert map_type(schema).type_name == "IReadOnlyList<IReadOnlyList<double>>"


class TestObjects:
    """Test object naming: title, naming context, or untyped dictionary."""

    def test_title_wins(self):
        schema = SchemaNode(type=SchemaType.OBJECT, title="shipping address",
                            properties={"street": _string()})
        assert map_type(schema, "PersonAddress").type_name == "ShippingAddress"

    def test_title_without_properties(self):
        assert map_type(SchemaNode(type=SchemaType.OBJECT, title="Empty")).type_name == "Empty"

    def test_naming_context(self):
        schema = SchemaNode(type=SchemaType.OBJECT, properties={"street": _string()})
        assert map_type(schema, "PersonAddress").type_name == "PersonAddress"

    def test_no_properties_is_dictionary(self):
        schema = SchemaNode(type=SchemaType.OBJECT)
        assert map_type(schema, "PersonExtra").type_name == "IReadOnlyDictionary<string, object>"

    def test_no_context_is_dictionary(self):
        schema = SchemaNode(type=SchemaType.OBJECT, properties={"street": _string()})
        assert map_type(schema).type_name == "IReadOnlyDictionary<string, object>"


class TestRefs:
    """Test $ref resolution by name only."""

    def test_ref(self):
        result = map_type(SchemaNode(ref="#/definitions/Widget"))
        assert result.type_name == "Widget"
        assert not result.is_nullable

    def test_ref_overrides_type(self):
        schema = SchemaNode(type=SchemaType.STRING, ref="#/$defs/order_line")
        assert map_type(schema).type_name == "OrderLine"

    def test_nullable_ref(self):
        result = map_type(SchemaNode(ref="#/definitions/Widget", nullable=True))
        assert result.type_name == "Widget"
        assert result.is_nullable


class TestNullability:
    """Test explicit nullable flag handling."""

    def test_nullable_value_type(self):
        result = map_type(SchemaNode(type=SchemaType.INTEGER, nullable=True))
        assert result.is_nullable
        assert result.render() == "int?"

    def test_nullable_datetime(self):
        assert map_type(_string(format="date-time", nullable=True)).render() == "DateTimeOffset?"

    @pytest.mark.parametrize("schema", [
        _string(nullable=True),
        _string(format="uri", nullable=True),
        SchemaNode(type=SchemaType.ARRAY, nullable=True),
        SchemaNode(type=SchemaType.OBJECT, nullable=True),
        SchemaNode(nullable=True),
    ])
    def test_reference_types_not_marked(self, schema):
        assert not map_type(schema).is_nullable

    def test_not_nullable_by_default(self):
        assert not map_type(SchemaNode(type=SchemaType.BOOLEAN)).is_nullable

    def test_deterministic(self):
        schema = SchemaNode(type=SchemaType.OBJECT, properties={"a": _string()})
        assert map_type(schema, "X") == map_type(schema, "X")
