"""Diff subpackage: structural change detection between value shapes."""

from dynamic_schema_mapper.diff.changes import ChangeKind, SchemaChange
from dynamic_schema_mapper.diff.engine import (
    SchemaDiff,
    compare,
    compare_schema_structure,
    get_breaking_changes,
    has_breaking_changes,
    summarize,
)

__all__ = [
    "ChangeKind",
    "SchemaChange",
    "SchemaDiff",
    "compare",
    "compare_schema_structure",
    "get_breaking_changes",
    "has_breaking_changes",
    "summarize",
]
