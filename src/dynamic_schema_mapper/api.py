"""Module-level convenience API backed by one shared default session.

These functions mirror ``SchemaSession`` for callers that want a single,
process-wide detector.  The shared session guards its own state with a lock,
so the functions are safe to call from several threads.  Code that needs
isolation (tests, independent API clients) should create its own
``SchemaSession`` instead.
"""

from __future__ import annotations

from typing import Any

from dynamic_schema_mapper.diff.changes import SchemaChange
from dynamic_schema_mapper.schema import DynamicSchema
from dynamic_schema_mapper.session import SchemaChangeListener, SchemaSession

__all__ = [
    "compare_schemas",
    "disable_schema_detection",
    "enable_schema_detection",
    "get_default_session",
    "parse",
    "parse_with_validation",
    "reset_cache",
]

_default_session = SchemaSession()


def get_default_session() -> SchemaSession:
    """Return the shared session used by the module-level functions."""
    return _default_session


def parse(data: Any) -> DynamicSchema:
    """Parse JSON text or a decoded value with the shared session.

    Args:
        data: JSON text (``str``/``bytes``) or any dynamic value.

    Returns:
        A ``DynamicSchema`` over the parsed tree.

    Raises:
        ParseError: If ``data`` is text that is not valid JSON.
    """
    return _default_session.parse(data)


def parse_with_validation(
    data: Any,
    allow_null: bool = True,
    require_object: bool = False,
) -> DynamicSchema:
    """Parse with root validation using the shared session.

    Raises:
        ParseError: If ``data`` is text that is not valid JSON.
        ValidationError: If the root is null while ``allow_null`` is False,
            or not an object while ``require_object`` is True.
    """
    return _default_session.parse_with_validation(
        data, allow_null=allow_null, require_object=require_object
    )


def enable_schema_detection(callback: SchemaChangeListener) -> None:
    _default_session.enable_schema_detection(callback)


def disable_schema_detection() -> None:
    _default_session.disable_schema_detection()


def reset_cache() -> None:
    _default_session.reset_cache()


def compare_schemas(old: DynamicSchema, new: DynamicSchema) -> list[SchemaChange]:
    """Tree-level diff of two parsed payloads; the shared session is not touched."""
    return _default_session.compare_schemas(old, new)
