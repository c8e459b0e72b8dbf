"""Integration tests for the public API surface.

All imports are from the top-level ``dynamic_schema_mapper`` package, never
from internal submodules.  Walks the typical client flow: parse a payload,
read typed fields, navigate paths, detect a backend change, persist the
learned shape and pick it up again in a fresh session.
"""

from __future__ import annotations

from pathlib import Path

import dynamic_schema_mapper
from dynamic_schema_mapper import (
    ChangeKind,
    SchemaCacheManager,
    SchemaChange,
    SchemaDiff,
    SchemaSession,
)
from dynamic_schema_mapper.backends import FileBackend

V1 = """
{
  "id": 7,
  "name": "Widget",
  "price": "19.90",
  "in_stock": "true",
  "supplier": {"name": "ACME", "address": {"city": "Berlin"}},
  "variants": [{"sku": "W-1", "color": "red"}]
}
"""

V2 = """
{
  "id": "7",
  "name": "Widget",
  "price": 19.9,
  "supplier": {"name": "ACME", "address": {"city": "Berlin", "zip": "10115"}},
  "variants": [{"sku": "W-1", "color": "red", "size": "L"}],
  "rating": 4.5
}
"""


class TestExports:
    def test_all_names_importable(self) -> None:
        for name in dynamic_schema_mapper.__all__:
            assert hasattr(dynamic_schema_mapper, name), name

    def test_version(self) -> None:
        assert dynamic_schema_mapper.__version__ == "0.1.0"


class TestClientFlow:
    def test_typed_reads_tolerate_backend_drift(self) -> None:
        session = SchemaSession()
        v1 = session.parse(V1)
        v2 = session.parse(V2)

        for product in (v1, v2):
            assert product.get_int("id") == 7
            assert product.get_float("price") == 19.9
            assert product.get_value_at_path("supplier.address.city") == "Berlin"
            assert product.get_value_at_path("variants[0].sku") == "W-1"

        assert v1.get_bool("in_stock") is True
        assert v2.get_bool("in_stock", default=False) is False

    def test_detection_and_breaking_report(self) -> None:
        session = SchemaSession()
        seen: list[list[SchemaChange]] = []
        session.enable_schema_detection(seen.append)

        session.parse(V1)
        session.parse(V2)

        assert len(seen) == 1
        changes = seen[0]
        assert [(c.kind, c.path) for c in changes] == [
            (ChangeKind.ADDED, "rating"),
            (ChangeKind.REMOVED, "in_stock"),
            (ChangeKind.TYPE_CHANGED, "id"),
            (ChangeKind.TYPE_CHANGED, "price"),
            (ChangeKind.ADDED, "supplier.address.zip"),
        ]
        assert SchemaDiff.has_breaking_changes(changes)
        assert [c.path for c in SchemaDiff.get_breaking_changes(changes)] == [
            "in_stock",
            "id",
            "price",
        ]

    def test_tree_diff_sees_list_items(self) -> None:
        session = SchemaSession()
        changes = session.compare_schemas(session.parse(V1), session.parse(V2))
        expected = SchemaChange(ChangeKind.ADDED, "variants[*].size", new_type="string")
        assert expected in changes

    def test_shape_survives_restart(self, tmp_path: Path) -> None:
        store_file = tmp_path / "schemas.json"

        first = SchemaSession()
        first.parse(V1)
        store = SchemaCacheManager("shop", backend=FileBackend(store_file))
        first.persist(store, "product")

        second = SchemaSession()
        seen: list[list[SchemaChange]] = []
        second.enable_schema_detection(seen.append)
        assert second.restore(
            SchemaCacheManager("shop", backend=FileBackend(store_file)), "product"
        )
        second.parse(V2)
        assert len(seen) == 1
