"""Tests for the DynamicSchema wrapper returned by session parses."""

from __future__ import annotations

import io
import json

import pytest

from dynamic_schema_mapper.parser import SchemaParser
from dynamic_schema_mapper.schema import DynamicSchema
from dynamic_schema_mapper.tree.nodes import ValueKind

PAYLOAD = {
    "id": 1,
    "name": "Test",
    "active": True,
    "price": 99.99,
    "user": {"name": "Ada", "address": {"city": "London"}},
    "items": [{"name": "first"}, {"name": "second"}],
}


@pytest.fixture
def schema() -> DynamicSchema:
    return DynamicSchema(SchemaParser.parse(PAYLOAD))


class TestGetters:
    def test_typed_getters(self, schema: DynamicSchema) -> None:
        assert schema.get_int("id") == 1
        assert schema.get_string("name") == "Test"
        assert schema.get_bool("active") is True
        assert schema.get_float("price") == pytest.approx(99.99)

    def test_defaults(self, schema: DynamicSchema) -> None:
        assert schema.get_string("missing", "N/A") == "N/A"
        assert schema.get_int("missing", 5) == 5

    def test_item_access_is_get_string(self, schema: DynamicSchema) -> None:
        assert schema["name"] == "Test"
        assert schema["missing"] == ""

    def test_contains(self, schema: DynamicSchema) -> None:
        assert "name" in schema
        assert "missing" not in schema
        assert 1 not in schema


class TestNavigation:
    def test_get_nested_chain(self, schema: DynamicSchema) -> None:
        user = schema.get_nested("user")
        assert user is not None
        address = user.get_nested("address")
        assert address is not None
        assert address.get_string("city") == "London"

    def test_call_is_get_nested(self, schema: DynamicSchema) -> None:
        user = schema("user")
        assert user is not None
        assert user["name"] == "Ada"
        assert schema("name") is None

    def test_get_list(self, schema: DynamicSchema) -> None:
        items = schema.get_list("items")
        assert [item.get_string("name") for item in items] == ["first", "second"]
        assert schema.get_list("user") == []

    def test_resolve(self, schema: DynamicSchema) -> None:
        address = schema.resolve("user.address")
        assert address is not None
        assert address["city"] == "London"
        assert schema.resolve("user.phone.number") is None

    def test_get_value_at_path(self, schema: DynamicSchema) -> None:
        assert schema.get_value_at_path("items[1].name") == "second"
        assert schema.get_value_at_path("items[5].name") is None

    def test_keys_and_has_key(self, schema: DynamicSchema) -> None:
        assert schema.keys() == ["id", "name", "active", "price", "user", "items"]
        assert schema.has_key("user")

    def test_get_all_paths(self, schema: DynamicSchema) -> None:
        paths = schema.get_all_paths()
        assert "user.address.city" in paths
        assert "items[0].name" in paths


class TestRawAccess:
    def test_root_and_raw_value(self, schema: DynamicSchema) -> None:
        assert schema.kind is ValueKind.OBJECT
        assert schema.raw_value == PAYLOAD
        assert schema.root_node.is_object

    def test_to_json_string(self, schema: DynamicSchema) -> None:
        assert json.loads(schema.to_json_string()) == PAYLOAD
        assert json.loads(schema.to_json_string(pretty=True)) == PAYLOAD

    def test_get_schema_structure(self, schema: DynamicSchema) -> None:
        structure = schema.get_schema_structure()
        assert structure["type"] == "object"
        assert structure["properties"]["items"] == {
            "type": "list",
            "items": {"type": "object", "properties": {"name": {"type": "string"}}},
        }

    def test_repr(self, schema: DynamicSchema) -> None:
        assert repr(schema) == "DynamicSchema(keys: 6, type: object)"


class TestTreeRendering:
    def test_format_tree(self) -> None:
        schema = DynamicSchema(SchemaParser.parse({"a": 1, "b": ["x"]}))
        assert schema.format_tree() == (
            "object {\n"
            "  a:\n"
            "    integer: 1\n"
            "  b:\n"
            "    list [\n"
            "      [0]:\n"
            "        string: 'x'\n"
            "    ]\n"
            "}"
        )

    def test_print_tree_writes_to_file(self) -> None:
        schema = DynamicSchema(SchemaParser.parse(None))
        buffer = io.StringIO()
        schema.print_tree(file=buffer)
        assert buffer.getvalue() == "null: None\n"
