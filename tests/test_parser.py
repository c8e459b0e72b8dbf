"""Tests for SchemaParser: decoding, validation, descriptors and serialisation."""

from __future__ import annotations

import json

import pytest

from dynamic_schema_mapper.exceptions import (
    ParseError,
    SchemaMapperError,
    ValidationError,
)
from dynamic_schema_mapper.parser import (
    SchemaParser,
    extract_schema,
    parse,
    to_json_string,
)
from dynamic_schema_mapper.tree.nodes import ValueKind

ROUND_TRIP_CASES = [
    {"id": 1, "name": "Test", "active": True, "price": 99.99},
    {"nested": {"deep": {"deeper": [1, 2, {"x": None}]}}},
    [1, "two", 3.5, False, None, [], {}],
    42,
    None,
    {"unicode": "naïve café ✓", "escaped": "line\nbreak \"quoted\""},
]


class TestParse:
    def test_parses_json_text(self) -> None:
        node = parse('{"id": 1, "name": "Test"}')
        assert node.kind is ValueKind.OBJECT
        assert node.get_int("id") == 1

    def test_parses_bytes(self) -> None:
        node = parse(b'{"city": "K\xc3\xb6ln"}')
        assert node.get_string("city") == "Köln"

    def test_decoded_value_passed_through(self) -> None:
        data = {"a": [1, 2]}
        assert parse(data).raw_value == data

    def test_json_text_of_a_string(self) -> None:
        node = parse('"hello"')
        assert node.kind is ValueKind.STRING
        assert node.raw_value == "hello"

    def test_invalid_json_raises_parse_error(self) -> None:
        with pytest.raises(ParseError, match="Invalid JSON string") as exc_info:
            parse("{not json")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_parse_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("")

    def test_parse_error_carries_decoder_message(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("[1, 2,")
        assert "Expecting value" in str(exc_info.value)

    def test_text_too_deep_for_decoder_raises_parse_error(self) -> None:
        depth = 200_000
        with pytest.raises(ParseError, match="Invalid JSON string"):
            parse("[" * depth + "]" * depth)


class TestParseWithValidation:
    def test_null_allowed_by_default(self) -> None:
        node = SchemaParser.parse_with_validation("null")
        assert node.kind is ValueKind.NULL

    def test_null_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Null values are not allowed"):
            SchemaParser.parse_with_validation(None, allow_null=False)

    def test_require_object_rejects_list(self) -> None:
        with pytest.raises(ValidationError, match="Root must be an object"):
            SchemaParser.parse_with_validation([1, 2], require_object=True)

    def test_require_object_rejects_null(self) -> None:
        with pytest.raises(ValidationError):
            SchemaParser.parse_with_validation("null", require_object=True)

    def test_require_object_accepts_object(self) -> None:
        node = SchemaParser.parse_with_validation({"a": 1}, require_object=True)
        assert node.is_object

    def test_decode_errors_still_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            SchemaParser.parse_with_validation("{", require_object=True)

    def test_errors_share_base_class(self) -> None:
        assert issubclass(ParseError, SchemaMapperError)
        assert issubclass(ValidationError, SchemaMapperError)


class TestExtractSchema:
    def test_primitive(self) -> None:
        assert extract_schema(parse(3.5)) == {"type": "float"}
        assert extract_schema(parse(None)) == {"type": "null"}

    def test_object(self) -> None:
        descriptor = extract_schema(parse({"id": 1, "name": "x", "ok": True}))
        assert descriptor == {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string"},
                "ok": {"type": "boolean"},
            },
        }

    def test_list_uses_first_element(self) -> None:
        descriptor = extract_schema(parse([{"a": 1}, "ignored"]))
        assert descriptor == {
            "type": "list",
            "items": {"type": "object", "properties": {"a": {"type": "integer"}}},
        }

    def test_empty_list_has_unknown_items(self) -> None:
        assert extract_schema(parse([])) == {
            "type": "list",
            "items": {"type": "unknown"},
        }

    def test_descriptor_is_json_serialisable(self) -> None:
        descriptor = extract_schema(parse({"a": [{"b": None}]}))
        assert json.loads(json.dumps(descriptor)) == descriptor

    def test_property_order_follows_keys(self) -> None:
        descriptor = extract_schema(parse({"z": 1, "a": 2}))
        assert list(descriptor["properties"]) == ["z", "a"]


class TestToJsonString:
    @pytest.mark.parametrize("data", ROUND_TRIP_CASES)
    def test_compact_round_trip(self, data: object) -> None:
        assert json.loads(to_json_string(parse(data))) == data

    @pytest.mark.parametrize("data", ROUND_TRIP_CASES)
    def test_text_round_trip(self, data: object) -> None:
        text = json.dumps(data)
        assert json.loads(to_json_string(parse(text))) == data

    def test_compact_has_no_whitespace(self) -> None:
        assert to_json_string(parse({"a": [1, 2]})) == '{"a":[1,2]}'

    def test_pretty_uses_two_space_indent(self) -> None:
        text = to_json_string(parse({"a": 1}), pretty=True)
        assert text == '{\n  "a": 1\n}'

    def test_key_order_preserved(self) -> None:
        assert to_json_string(parse('{"b": 1, "a": 2}')) == '{"b":1,"a":2}'

    def test_unknown_values_rendered_as_text(self) -> None:
        class Token:
            def __str__(self) -> str:
                return "tok"

        assert to_json_string(parse({"t": Token()})) == '{"t":"tok"}'


class TestPathDelegates:
    def test_get_all_paths(self) -> None:
        node = parse({"a": {"b": 1}})
        assert SchemaParser.get_all_paths(node) == ["a", "a.b"]

    def test_get_value_at_path(self) -> None:
        node = parse({"a": {"b": [10, 20]}})
        assert SchemaParser.get_value_at_path(node, "a.b[1]") == 20
