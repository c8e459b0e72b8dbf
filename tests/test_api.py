"""Unit tests for the module-level API backed by the shared default session."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from dynamic_schema_mapper import (
    ChangeKind,
    DynamicSchema,
    ParseError,
    SchemaChange,
    SchemaSession,
    ValidationError,
    compare_schemas,
    disable_schema_detection,
    enable_schema_detection,
    get_default_session,
    parse,
    parse_with_validation,
    reset_cache,
)


@pytest.fixture(autouse=True)
def clean_default_session() -> Iterator[None]:
    get_default_session().reset()
    yield
    get_default_session().reset()


class TestDefaultSession:
    def test_is_a_shared_session(self) -> None:
        assert isinstance(get_default_session(), SchemaSession)
        assert get_default_session() is get_default_session()

    def test_parse(self) -> None:
        schema = parse('{"id": 1, "name": "Test", "active": true, "price": 99.99}')
        assert isinstance(schema, DynamicSchema)
        assert schema.get_int("id") == 1
        assert schema.get_string("name") == "Test"
        assert schema.get_bool("active") is True
        assert schema.get_float("price") == pytest.approx(99.99)

    def test_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            parse("{")
        with pytest.raises(ValidationError):
            parse_with_validation("null", allow_null=False)

    def test_detection_cycle(self) -> None:
        seen: list[list[SchemaChange]] = []
        enable_schema_detection(seen.append)

        parse({"id": 1, "name": "Test"})
        parse({"id": 1, "name": "Test", "email": "x@y.com"})
        assert seen == [[SchemaChange(ChangeKind.ADDED, "email", new_type="string")]]

        reset_cache()
        parse({"other": True})
        assert len(seen) == 1

        disable_schema_detection()
        parse({"yet": "another"})
        assert len(seen) == 1

    def test_compare_schemas(self) -> None:
        old = parse({"value": "s"})
        new = parse({"value": 123})
        assert compare_schemas(old, new) == [
            SchemaChange(ChangeKind.TYPE_CHANGED, "value", "string", "integer")
        ]
