"""Dot/bracket path navigation over ValueNode trees.

Path syntax is ``segment(.segment)*`` where each segment is an object key,
optionally suffixed with ``[index]`` to index into the list stored at that
key, e.g. ``"user.addresses[0].city"``.

Resolution never raises: a missing key, a hop through the wrong kind, or an
out-of-range index all resolve to None.
"""

from __future__ import annotations

import re
from typing import Any

from dynamic_schema_mapper.tree.nodes import ValueNode

__all__ = ["get_all_paths", "get_value_at_path", "resolve_path"]

# "items[3]" -> key="items", index="3"
_INDEXED_SEGMENT = re.compile(r"^(?P<key>[^\[\]]+)\[(?P<index>\d+)\]$")


def get_all_paths(node: ValueNode, prefix: str = "") -> list[str]:
    """Enumerate the dot-notation path of every reachable object key.

    Traversal is depth-first in insertion-key order.  Lists are crossed once
    through their first element, which is addressed as ``prefix[0]``; the
    remaining elements are assumed to share its shape.

    Args:
        node:   Root (or any sub-root) of a ValueNode tree.
        prefix: Path of ``node`` itself.  Defaults to "" (root).

    Returns:
        Paths such as ``["id", "items", "items[0].name"]``.
    """
    paths: list[str] = []
    # (path, node, whether the path itself is reported)
    stack: list[tuple[str, ValueNode, bool]] = [(prefix, node, False)]

    while stack:
        path, current, reported = stack.pop()
        if reported:
            paths.append(path)

        if current.children is not None:
            for key in reversed(current.keys()):
                full_path = f"{path}.{key}" if path else key
                stack.append((full_path, current.children[key], True))
        elif current.items:
            stack.append((f"{path}[0]", current.items[0], False))

    return paths


def resolve_path(node: ValueNode, path: str) -> ValueNode | None:
    """Walk ``path`` from ``node`` and return the node found there, or None."""
    current: ValueNode | None = node

    for segment in path.split("."):
        if current is None:
            return None

        match = _INDEXED_SEGMENT.match(segment)
        if match is None:
            current = current.child(segment)
            continue

        list_node = current.child(match.group("key"))
        if list_node is None or not list_node.is_list:
            return None
        index = int(match.group("index"))
        items = list_node.list_items
        if index >= len(items):
            return None
        current = items[index]

    return current


def get_value_at_path(node: ValueNode, path: str) -> Any:
    """Return the raw value at ``path`` (not the node wrapper), or None."""
    found = resolve_path(node, path)
    if found is None:
        return None
    return found.raw_value
