"""Tree subpackage for typed value-tree primitives.

Re-exports the public API for the tree module:
- ValueNode: frozen dataclass wrapping one parsed unit of JSON-shaped data
- ValueKind: StrEnum of the eight node kinds
- NodeBuilder / build_node: convert any dynamic value into a ValueNode tree
- get_all_paths / get_value_at_path / resolve_path: dot/bracket navigation
"""

from dynamic_schema_mapper.tree.builder import NodeBuilder, build_node
from dynamic_schema_mapper.tree.nodes import PRIMITIVE_KINDS, ValueKind, ValueNode
from dynamic_schema_mapper.tree.paths import (
    get_all_paths,
    get_value_at_path,
    resolve_path,
)

__all__ = [
    "PRIMITIVE_KINDS",
    "NodeBuilder",
    "ValueKind",
    "ValueNode",
    "build_node",
    "get_all_paths",
    "get_value_at_path",
    "resolve_path",
]
