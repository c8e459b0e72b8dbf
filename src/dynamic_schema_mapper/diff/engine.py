"""SchemaDiff: recursive structural comparison of trees or descriptors.

Two entry points with deliberately different reach:

- ``compare(old_tree, new_tree)`` walks full ValueNode trees and descends
  into lists through their first elements (path suffix ``[*]``).
- ``compare_schema_structure(old, new)`` walks structural descriptors only
  and never looks inside list items.  The session facade uses it so that
  only descriptors, not whole trees, have to be kept between parses.

Both stop at the first kind mismatch on a path: a TYPE_CHANGED record
invalidates any deeper comparison below it.  Value differences between
primitives of the same kind are not structural changes.

Key ordering is deterministic: additions follow the new shape's key order,
removals and recursion follow the old shape's key order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dynamic_schema_mapper.diff.changes import ChangeKind, SchemaChange
from dynamic_schema_mapper.tree.nodes import ValueKind, ValueNode

__all__ = [
    "SchemaDiff",
    "compare",
    "compare_schema_structure",
    "get_breaking_changes",
    "has_breaking_changes",
    "summarize",
]


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _record_key_changes(
    path: str,
    old_types: Mapping[str, Any],
    new_types: Mapping[str, Any],
    changes: list[SchemaChange],
) -> None:
    """Append ADDED (new key order) then REMOVED (old key order) records."""
    for key, type_name in new_types.items():
        if key not in old_types:
            changes.append(
                SchemaChange(
                    kind=ChangeKind.ADDED, path=_join(path, key), new_type=type_name
                )
            )
    for key, type_name in old_types.items():
        if key not in new_types:
            changes.append(
                SchemaChange(
                    kind=ChangeKind.REMOVED, path=_join(path, key), old_type=type_name
                )
            )


class SchemaDiff:
    """Stateless namespace of diff operations.

    Example::

        old = SchemaParser.parse({"id": 1, "name": "Test"})
        new = SchemaParser.parse({"id": 2, "name": "Test 2", "email": "x@y.com"})
        SchemaDiff.compare(old, new)
        # [SchemaChange(kind=ChangeKind.ADDED, path="email", new_type="string")]
    """

    # ------------------------------------------------------------------
    # Tree comparison
    # ------------------------------------------------------------------

    @staticmethod
    def compare(old: ValueNode, new: ValueNode) -> list[SchemaChange]:
        """Compare two trees and return the ordered list of structural changes."""
        changes: list[SchemaChange] = []
        # Depth-first; pairs are pushed in reverse so they pop in key order
        stack: list[tuple[ValueNode, ValueNode, str]] = [(old, new, "")]

        while stack:
            old_node, new_node, path = stack.pop()

            if old_node.kind is not new_node.kind:
                changes.append(
                    SchemaChange(
                        kind=ChangeKind.TYPE_CHANGED,
                        path=path,
                        old_type=old_node.kind.value,
                        new_type=new_node.kind.value,
                    )
                )
                continue

            if old_node.kind is ValueKind.OBJECT:
                old_children = old_node.children or {}
                new_children = new_node.children or {}
                _record_key_changes(
                    path,
                    {key: child.kind.value for key, child in old_children.items()},
                    {key: child.kind.value for key, child in new_children.items()},
                    changes,
                )
                common = [key for key in old_children if key in new_children]
                for key in reversed(common):
                    stack.append(
                        (old_children[key], new_children[key], _join(path, key))
                    )

            elif old_node.kind is ValueKind.LIST:
                # Element-count changes alone are not structural changes
                if old_node.items and new_node.items:
                    stack.append(
                        (old_node.items[0], new_node.items[0], f"{path}[*]")
                    )

        return changes

    # ------------------------------------------------------------------
    # Descriptor comparison
    # ------------------------------------------------------------------

    @staticmethod
    def compare_schema_structure(
        old: Mapping[str, Any],
        new: Mapping[str, Any],
    ) -> list[SchemaChange]:
        """Compare two structural descriptors (see ``SchemaParser.extract_schema``).

        Mirrors ``compare`` for objects and kind mismatches but does not
        descend into list items.
        """
        changes: list[SchemaChange] = []
        object_type = ValueKind.OBJECT.value
        stack: list[tuple[Mapping[str, Any], Mapping[str, Any], str]] = [
            (old, new, "")
        ]

        while stack:
            old_desc, new_desc, path = stack.pop()
            old_type = old_desc.get("type")
            new_type = new_desc.get("type")

            if old_type == object_type and new_type == object_type:
                old_props: Mapping[str, Any] = old_desc.get("properties") or {}
                new_props: Mapping[str, Any] = new_desc.get("properties") or {}
                _record_key_changes(
                    path,
                    {key: desc.get("type") for key, desc in old_props.items()},
                    {key: desc.get("type") for key, desc in new_props.items()},
                    changes,
                )
                common = [key for key in old_props if key in new_props]
                for key in reversed(common):
                    stack.append((old_props[key], new_props[key], _join(path, key)))

            elif old_type != new_type:
                changes.append(
                    SchemaChange(
                        kind=ChangeKind.TYPE_CHANGED,
                        path=path,
                        old_type=old_type,
                        new_type=new_type,
                    )
                )

        return changes

    # ------------------------------------------------------------------
    # Post-processing
    # ------------------------------------------------------------------

    @staticmethod
    def summarize(changes: list[SchemaChange]) -> str:
        """Render a human-readable report grouped by change kind.

        Groups appear in order of their first record; records keep their
        original order within a group.
        """
        if not changes:
            return "No schema changes detected"

        grouped: dict[ChangeKind, list[SchemaChange]] = {}
        for change in changes:
            grouped.setdefault(change.kind, []).append(change)

        lines = [f"Schema Changes Detected ({len(changes)} total):", ""]
        for kind, group in grouped.items():
            lines.append(f"{kind.display_name}:")
            for change in group:
                lines.append(f"  • {change.path}")
                if change.old_type is not None and change.new_type is not None:
                    lines.append(f"    {change.old_type} → {change.new_type}")
            lines.append("")

        return "\n".join(lines) + "\n"

    @staticmethod
    def has_breaking_changes(changes: list[SchemaChange]) -> bool:
        return any(change.is_breaking for change in changes)

    @staticmethod
    def get_breaking_changes(changes: list[SchemaChange]) -> list[SchemaChange]:
        """Return the REMOVED and TYPE_CHANGED records, in original order."""
        return [change for change in changes if change.is_breaking]


compare = SchemaDiff.compare
compare_schema_structure = SchemaDiff.compare_schema_structure
summarize = SchemaDiff.summarize
has_breaking_changes = SchemaDiff.has_breaking_changes
get_breaking_changes = SchemaDiff.get_breaking_changes
