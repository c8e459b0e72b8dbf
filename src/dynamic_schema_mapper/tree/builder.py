"""NodeBuilder: converts any dynamic Python value into a typed ValueNode tree.

Uses stack-driven dispatch to convert mappings, sequences and scalar values
into ValueNode objects.  Mapping keys are converted to ``str`` (JSON object
keys are always text) and insertion order is preserved.  Values JSON has no
type for are kept as UNKNOWN nodes rather than rejected.

numpy scalars and arrays are unwrapped to plain Python values first, so the
output of array-producing pipelines can be parsed without a manual
``tolist()``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np

from dynamic_schema_mapper.tree.nodes import ValueKind, ValueNode

__all__ = ["NodeBuilder", "build_node"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


def _unwrap_numpy(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass
class NodeBuilder:
    """Converts any dynamic value into a typed ValueNode tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True), and
    str MUST be checked before the sequence branch.

    Containers are walked with an explicit stack rather than Python
    recursion, so nesting depth is bounded by memory only.  Structural
    nodes keep a detached plain copy of their payload as ``value``;
    mutating the input after building does not change the tree.

    Example::
        builder = NodeBuilder()
        node = builder.build({"name": "John", "tags": ["a"]})
        # node: OBJECT -> {"name": STRING, "tags": LIST -> [STRING]}
    """

    def build(self, value: Any) -> ValueNode:
        """Classify ``value`` by runtime shape and build its node.

        Args:
            value: Any value; JSON-compatible values map to a concrete kind,
                   everything else becomes an UNKNOWN node.

        Returns:
            The root ValueNode of the built tree.
        """
        value = _unwrap_numpy(value)
        if _is_container(value):
            return self._build_container(value)
        return self.primitive(value)

    def primitive(self, value: Any) -> ValueNode:
        """Build a leaf node; the kind is resolved from the scalar's type."""
        return ValueNode(kind=_resolve_primitive_kind(value), value=value)

    def object(self, mapping: Mapping[Any, Any]) -> ValueNode:
        """Build an OBJECT node, classifying each value recursively."""
        return self._build_container(mapping)

    def list(self, sequence: list[Any] | tuple[Any, ...]) -> ValueNode:
        """Build a LIST node, classifying each element recursively."""
        return self._build_container(sequence)

    def _build_container(self, root: Any) -> ValueNode:
        stack = [_PendingContainer(root)]
        # ids of the containers currently open on the stack
        open_ids = {id(root)}
        while True:
            frame = stack[-1]
            for key, child in frame.remaining:
                child = _unwrap_numpy(child)
                if _is_container(child):
                    if id(child) in open_ids:
                        msg = "Cannot build a tree from a self-referencing value"
                        raise ValueError(msg)
                    open_ids.add(id(child))
                    stack.append(_PendingContainer(child, key))
                    break
                frame.built.append((key, self.primitive(child)))
            else:
                stack.pop()
                open_ids.discard(id(frame.source))
                node = frame.finish()
                if not stack:
                    return node
                stack[-1].built.append((frame.key, node))


class _PendingContainer:
    """A mapping or sequence whose children are still being built."""

    __slots__ = ("built", "is_mapping", "key", "remaining", "source")

    def __init__(self, source: Any, key: str | None = None) -> None:
        self.key = key
        self.source = source
        self.is_mapping = isinstance(source, Mapping)
        self.remaining: Iterator[tuple[str | None, Any]] = (
            ((str(k), v) for k, v in source.items())
            if self.is_mapping
            else ((None, v) for v in source)
        )
        self.built: list[tuple[str | None, ValueNode]] = []

    def finish(self) -> ValueNode:
        if self.is_mapping:
            children = {str(key): node for key, node in self.built}
            return ValueNode(
                kind=ValueKind.OBJECT,
                value={key: node.value for key, node in children.items()},
                children=MappingProxyType(children),
            )
        items = tuple(node for _, node in self.built)
        return ValueNode(
            kind=ValueKind.LIST,
            value=[node.value for node in items],
            items=items,
        )


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _resolve_primitive_kind(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.STRING
    # CRITICAL: bool MUST be checked before int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    return ValueKind.UNKNOWN


# Module-level builder (stateless, safe to share)
_builder = NodeBuilder()


def build_node(value: Any) -> ValueNode:
    """Build a ValueNode tree from ``value`` using the shared builder."""
    return _builder.build(value)
