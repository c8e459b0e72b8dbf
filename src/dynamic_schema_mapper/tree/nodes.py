"""ValueNode dataclass and ValueKind StrEnum for typed JSON trees.

A ValueNode wraps one parsed unit of JSON-shaped data.  The kind tag is
fixed at construction and checked before any kind-specific payload is read,
so the typed getters never have to guess what they are looking at.

Nodes are built by ``NodeBuilder`` (see ``tree.builder``); constructing one
by hand is supported but the kind/payload invariant is enforced.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["PRIMITIVE_KINDS", "ValueKind", "ValueNode"]


class ValueKind(StrEnum):
    """Closed set of node kinds.

    StrEnum values are the lowercased member names and double as the type
    labels written into structural descriptors and change records:
    - STRING  -> "string"
    - INTEGER -> "integer"
    - FLOAT   -> "float"
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    - OBJECT  -> "object"  : JSON object {}
    - LIST    -> "list"    : JSON array []
    - UNKNOWN -> "unknown" : any value JSON has no type for
    """

    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    NULL = auto()
    OBJECT = auto()
    LIST = auto()
    UNKNOWN = auto()


PRIMITIVE_KINDS = frozenset(
    {
        ValueKind.STRING,
        ValueKind.INTEGER,
        ValueKind.FLOAT,
        ValueKind.BOOLEAN,
        ValueKind.NULL,
    }
)

_TRUE_TEXT = frozenset({"true", "1"})
_FALSE_TEXT = frozenset({"false", "0"})


@dataclass(frozen=True, slots=True)
class ValueNode:
    """A typed node in the parsed value tree.

    Attributes:
        kind:     Which kind of value this node holds (see ValueKind).
        value:    The raw payload: the scalar for leaves, a plain dict / list
                  copy for structural nodes built by ``NodeBuilder``.
        children: Key -> child mapping, insertion ordered.  Populated iff
                  ``kind`` is OBJECT.
        items:    Ordered child nodes.  Populated iff ``kind`` is LIST.
    """

    kind: ValueKind
    value: Any = None
    children: Mapping[str, ValueNode] | None = None
    items: tuple[ValueNode, ...] | None = None

    def __post_init__(self) -> None:
        if (self.children is not None) != (self.kind is ValueKind.OBJECT):
            msg = f"children must be set iff kind is object, got kind={self.kind}"
            raise ValueError(msg)
        if (self.items is not None) != (self.kind is ValueKind.LIST):
            msg = f"items must be set iff kind is list, got kind={self.kind}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Kind predicates
    # ------------------------------------------------------------------

    @property
    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    @property
    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    @property
    def is_primitive(self) -> bool:
        return self.kind in PRIMITIVE_KINDS

    @property
    def raw_value(self) -> Any:
        return self.value

    @property
    def list_items(self) -> list[ValueNode]:
        """Child nodes of a LIST node; empty for every other kind."""
        return list(self.items) if self.items is not None else []

    # ------------------------------------------------------------------
    # Object navigation
    # ------------------------------------------------------------------

    def keys(self) -> list[str]:
        """Insertion-ordered keys of an OBJECT node; empty otherwise."""
        return list(self.children) if self.children is not None else []

    def has_key(self, key: str) -> bool:
        return self.children is not None and key in self.children

    def child(self, key: str) -> ValueNode | None:
        """Return the child at ``key`` whatever its kind, or None."""
        if self.children is None:
            return None
        return self.children.get(key)

    def get_nested(self, key: str) -> ValueNode | None:
        """Return the OBJECT child at ``key``, or None if absent or not an object."""
        node = self.child(key)
        if node is None or not node.is_object:
            return None
        return node

    def get_list(self, key: str) -> list[ValueNode]:
        """Return the items of the LIST child at ``key``, or an empty list."""
        node = self.child(key)
        if node is None or not node.is_list:
            return []
        return node.list_items

    # ------------------------------------------------------------------
    # Typed getters (never raise)
    # ------------------------------------------------------------------

    def get_string(self, key: str, default: str = "") -> str:
        """Return the value at ``key`` as text.

        Strings are returned as-is, numbers are formatted with ``str`` and
        booleans as ``"true"``/``"false"``.  Null, structural and unknown
        values fall back to ``default``.
        """
        node = self.child(key)
        if node is None:
            return default
        if node.kind is ValueKind.STRING:
            return node.value
        if node.kind is ValueKind.BOOLEAN:
            return "true" if node.value else "false"
        if node.kind in (ValueKind.INTEGER, ValueKind.FLOAT):
            return str(node.value)
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Return the value at ``key`` as an int.

        Floats are truncated toward zero; numeric text is parsed.  Booleans,
        non-finite floats and unparseable text fall back to ``default``.
        """
        node = self.child(key)
        if node is None:
            return default
        if node.kind is ValueKind.INTEGER:
            return node.value
        if node.kind is ValueKind.FLOAT:
            if not math.isfinite(node.value):
                return default
            return int(node.value)
        if node.kind is ValueKind.STRING:
            if not _is_numeric_text(node.value):
                return default
            try:
                return int(node.value)
            except ValueError:
                return default
        return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        """Return the value at ``key`` as a float; ints widen, text is parsed."""
        node = self.child(key)
        if node is None:
            return default
        if node.kind is ValueKind.FLOAT:
            return node.value
        if node.kind is ValueKind.INTEGER:
            try:
                return float(node.value)
            except OverflowError:
                return default
        if node.kind is ValueKind.STRING:
            if not _is_numeric_text(node.value):
                return default
            try:
                return float(node.value)
            except ValueError:
                return default
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return the value at ``key`` as a bool.

        Accepts native booleans plus the case-insensitive literals
        ``"true"``/``"1"`` and ``"false"``/``"0"`` (integers 1 and 0 match
        through their text form).
        """
        node = self.child(key)
        if node is None:
            return default
        if node.kind is ValueKind.BOOLEAN:
            return node.value
        if node.kind not in (ValueKind.STRING, ValueKind.INTEGER):
            return default
        text = str(node.value).lower()
        if text in _TRUE_TEXT:
            return True
        if text in _FALSE_TEXT:
            return False
        return default

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def to_plain(self) -> Any:
        """Project the tree back to plain JSON-equivalent Python data."""
        pending: list[tuple[ValueNode, Any]] = []
        root = _plain_shell(self, pending)
        while pending:
            node, out = pending.pop()
            if node.children is not None:
                for key, child in node.children.items():
                    out[key] = _plain_shell(child, pending)
            else:
                out.extend(_plain_shell(child, pending) for child in node.items or ())
        return root

    def __repr__(self) -> str:
        if self.is_object:
            return f"ValueNode(object with {len(self.keys())} keys)"
        if self.is_list:
            return f"ValueNode(list with {len(self.list_items)} items)"
        return f"ValueNode({self.kind}: {self.value!r})"


def _is_numeric_text(text: str) -> bool:
    # int()/float() also accept Python digit separators such as "4_2"
    return "_" not in text


def _plain_shell(node: ValueNode, pending: list[tuple[ValueNode, Any]]) -> Any:
    """Return the plain container for ``node``, queued to be filled later."""
    if node.children is not None:
        out: Any = {}
    elif node.items is not None:
        out = []
    else:
        return node.value
    pending.append((node, out))
    return out
