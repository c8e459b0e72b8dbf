"""DynamicSchema: the typed view handed back to callers by a parse.

A thin, immutable wrapper around a root ValueNode.  Getters delegate to the
node; navigation (``get_nested``, ``get_list``, ``resolve``) wraps results
again so chained access stays in one type::

    schema = session.parse(payload)
    city = schema.resolve("user.address")  # DynamicSchema | None
    name = schema["name"]                   # same as schema.get_string("name")
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from dynamic_schema_mapper.parser import SchemaDescriptor, SchemaParser
from dynamic_schema_mapper.tree.nodes import ValueKind, ValueNode
from dynamic_schema_mapper.tree.paths import resolve_path

__all__ = ["DynamicSchema"]


class DynamicSchema:
    """Typed accessor surface over one parsed payload."""

    __slots__ = ("_root",)

    def __init__(self, root: ValueNode) -> None:
        self._root = root

    # ------------------------------------------------------------------
    # Typed getters
    # ------------------------------------------------------------------

    def get_string(self, key: str, default: str = "") -> str:
        return self._root.get_string(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        return self._root.get_int(key, default)

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._root.get_float(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self._root.get_bool(key, default)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get_nested(self, key: str) -> DynamicSchema | None:
        """Return the object at ``key`` as a DynamicSchema, or None."""
        node = self._root.get_nested(key)
        return DynamicSchema(node) if node is not None else None

    def get_list(self, key: str) -> list[DynamicSchema]:
        """Return the items of the list at ``key``; empty if absent or not a list."""
        return [DynamicSchema(node) for node in self._root.get_list(key)]

    def resolve(self, path: str) -> DynamicSchema | None:
        """Return the value at a dot/bracket ``path`` as a DynamicSchema, or None.

        Any missing hop makes the whole lookup None, so
        ``schema.resolve("a.b.c")`` replaces a chain of ``get_nested`` calls.
        """
        node = resolve_path(self._root, path)
        return DynamicSchema(node) if node is not None else None

    def get_value_at_path(self, path: str) -> Any:
        """Return the raw value at a dot/bracket ``path``, or None."""
        return SchemaParser.get_value_at_path(self._root, path)

    def keys(self) -> list[str]:
        return self._root.keys()

    def has_key(self, key: str) -> bool:
        return self._root.has_key(key)

    def get_all_paths(self) -> list[str]:
        return SchemaParser.get_all_paths(self._root)

    # ------------------------------------------------------------------
    # Raw access and serialisation
    # ------------------------------------------------------------------

    @property
    def root_node(self) -> ValueNode:
        return self._root

    @property
    def raw_value(self) -> Any:
        return self._root.raw_value

    @property
    def kind(self) -> ValueKind:
        return self._root.kind

    def to_json_string(self, pretty: bool = False) -> str:
        return SchemaParser.to_json_string(self._root, pretty=pretty)

    def get_schema_structure(self) -> SchemaDescriptor:
        """Return the structural descriptor (types only, no values)."""
        return SchemaParser.extract_schema(self._root)

    # ------------------------------------------------------------------
    # Debugging
    # ------------------------------------------------------------------

    def format_tree(self) -> str:
        """Render the tree as indented text, one node per line."""
        return "\n".join(_format_lines(self._root))

    def print_tree(self, file: TextIO | None = None) -> None:
        print(self.format_tree(), file=file if file is not None else sys.stdout)

    # ------------------------------------------------------------------
    # Python protocol sugar
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> str:
        return self.get_string(key)

    def __call__(self, key: str) -> DynamicSchema | None:
        return self.get_nested(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_key(key)

    def __repr__(self) -> str:
        return f"DynamicSchema(keys: {len(self.keys())}, type: {self.kind})"


def _format_lines(root: ValueNode) -> list[str]:
    lines: list[str] = []
    # Entries are either a finished line or a (node, indent) still to expand
    stack: list[str | tuple[ValueNode, int]] = [(root, 0)]

    while stack:
        entry = stack.pop()
        if isinstance(entry, str):
            lines.append(entry)
            continue

        node, indent = entry
        prefix = "  " * indent
        if node.is_object:
            lines.append(f"{prefix}object {{")
            stack.append(f"{prefix}}}")
            for key, child in reversed(list((node.children or {}).items())):
                stack.append((child, indent + 2))
                stack.append(f"{prefix}  {key}:")
        elif node.is_list:
            lines.append(f"{prefix}list [")
            stack.append(f"{prefix}]")
            items = node.list_items
            for idx in reversed(range(len(items))):
                stack.append((items[idx], indent + 2))
                stack.append(f"{prefix}  [{idx}]:")
        else:
            lines.append(f"{prefix}{node.kind}: {node.raw_value!r}")

    return lines
