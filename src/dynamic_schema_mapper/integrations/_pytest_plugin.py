"""pytest plugin for dynamic-schema-mapper.

Auto-discovered by pytest via the pytest11 entry point declared in
pyproject.toml.  When the package is installed (even in editable mode),
pytest discovers this plugin automatically -- no conftest.py changes are
needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from dynamic_schema_mapper import SchemaDiff, SchemaParser, SchemaSession


@pytest.fixture
def schema_session() -> Iterator[SchemaSession]:
    """Fixture that yields a fresh, isolated ``SchemaSession``.

    Function-scoped so cached descriptors and listeners never leak between
    tests.  The session is reset on teardown.
    """
    session = SchemaSession()
    yield session
    session.reset()


@pytest.fixture(scope="session")
def assert_no_breaking_changes() -> Any:
    """Fixture that returns a callable backward-compatibility asserter.

    The fixture is session-scoped because the returned callable is stateless
    (it runs a tree-level ``SchemaDiff.compare`` per call).

    Usage in tests::

        def test_v2_is_compatible(assert_no_breaking_changes):
            assert_no_breaking_changes(v1_payload, v2_payload)

    Returns:
        A callable ``_assert(old, new) -> list[SchemaChange]`` that raises
        ``AssertionError`` listing the breaking changes when any field was
        removed or changed type, and otherwise returns all detected changes.
    """

    def _assert(old: Any, new: Any) -> Any:
        """Assert that ``new`` only adds to the structure of ``old``.

        Args:
            old: Reference payload (JSON text or decoded value).
            new: Payload under test.

        Raises:
            AssertionError: When removals or type changes are detected, with
                a message containing the grouped change summary.
        """
        changes = SchemaDiff.compare(SchemaParser.parse(old), SchemaParser.parse(new))
        breaking = SchemaDiff.get_breaking_changes(changes)
        if breaking:
            raise AssertionError(
                f"Breaking schema changes detected: {len(breaking)}\n"
                f"{SchemaDiff.summarize(breaking)}"
            )
        return changes

    return _assert
