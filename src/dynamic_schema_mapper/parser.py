"""SchemaParser: JSON input -> ValueNode tree, plus descriptor extraction.

The parser is stateless.  It decodes JSON text (when given text), builds the
typed tree via ``NodeBuilder``, optionally validates the root, and derives
value-stripped structural descriptors used for change detection.

Descriptor shape::

    primitive -> {"type": "<kind>"}
    object    -> {"type": "object", "properties": {key: descriptor, ...}}
    list      -> {"type": "list", "items": descriptor-of-first-element}
                 ({"type": "unknown"} as items for an empty list)

Only the first element of a list informs its descriptor; heterogeneous lists
are summarised by their head.
"""

from __future__ import annotations

import json
from typing import Any

from dynamic_schema_mapper.exceptions import ParseError, ValidationError
from dynamic_schema_mapper.tree.builder import build_node
from dynamic_schema_mapper.tree.nodes import ValueKind, ValueNode
from dynamic_schema_mapper.tree.paths import get_all_paths, get_value_at_path

__all__ = [
    "SchemaDescriptor",
    "SchemaParser",
    "extract_schema",
    "parse",
    "parse_with_validation",
    "to_json_string",
]

SchemaDescriptor = dict[str, Any]

_UNKNOWN_DESCRIPTOR: SchemaDescriptor = {"type": ValueKind.UNKNOWN.value}


class SchemaParser:
    """Stateless namespace of parsing and tree-inspection operations.

    Example::

        node = SchemaParser.parse('{"id": 1, "tags": ["a", "b"]}')
        SchemaParser.extract_schema(node)
        # {"type": "object", "properties": {
        #     "id": {"type": "integer"},
        #     "tags": {"type": "list", "items": {"type": "string"}}}}
    """

    @staticmethod
    def parse(data: Any) -> ValueNode:
        """Parse JSON text or an already-decoded value into a ValueNode tree.

        Args:
            data: JSON text (``str``/``bytes``/``bytearray``) or any dynamic
                  value.

        Returns:
            The root ValueNode.

        Raises:
            ParseError: If ``data`` is text that is not valid JSON.
        """
        if isinstance(data, (str, bytes, bytearray)):
            try:
                data = json.loads(data)
            except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
                msg = f"Invalid JSON string: {exc}"
                raise ParseError(msg) from exc
        return build_node(data)

    @staticmethod
    def parse_with_validation(
        data: Any,
        allow_null: bool = True,
        require_object: bool = False,
    ) -> ValueNode:
        """Parse ``data`` and check the root against the requested constraints.

        Raises:
            ParseError: If ``data`` is text that is not valid JSON.
            ValidationError: If the root is null while ``allow_null`` is False,
                or is not an object while ``require_object`` is True.
        """
        node = SchemaParser.parse(data)

        if not allow_null and node.kind is ValueKind.NULL:
            msg = "Null values are not allowed"
            raise ValidationError(msg)

        if require_object and not node.is_object:
            msg = "Root must be an object/map"
            raise ValidationError(msg)

        return node

    @staticmethod
    def extract_schema(node: ValueNode) -> SchemaDescriptor:
        """Return the value-stripped structural descriptor of ``node``."""
        pending: list[tuple[ValueNode, SchemaDescriptor]] = []
        root = _descriptor_shell(node, pending)

        while pending:
            current, descriptor = pending.pop()
            if current.children is not None:
                properties = descriptor["properties"]
                for key, child in current.children.items():
                    properties[key] = _descriptor_shell(child, pending)
            elif current.items:
                descriptor["items"] = _descriptor_shell(current.items[0], pending)
            else:
                descriptor["items"] = dict(_UNKNOWN_DESCRIPTOR)

        return root

    @staticmethod
    def to_json_string(node: ValueNode, pretty: bool = False) -> str:
        """Serialise the tree back to JSON text.

        Compact by default; two-space indentation when ``pretty`` is True.
        Payloads of UNKNOWN nodes are rendered with ``str``.
        """
        if pretty:
            return json.dumps(
                node.to_plain(), indent=2, ensure_ascii=False, default=str
            )
        return json.dumps(
            node.to_plain(), separators=(",", ":"), ensure_ascii=False, default=str
        )

    @staticmethod
    def get_all_paths(node: ValueNode) -> list[str]:
        return get_all_paths(node)

    @staticmethod
    def get_value_at_path(node: ValueNode, path: str) -> Any:
        return get_value_at_path(node, path)


def _descriptor_shell(
    node: ValueNode, pending: list[tuple[ValueNode, SchemaDescriptor]]
) -> SchemaDescriptor:
    """Return the descriptor for ``node``; structural ones are filled later."""
    if node.is_object:
        descriptor: SchemaDescriptor = {
            "type": ValueKind.OBJECT.value,
            "properties": {},
        }
    elif node.is_list:
        descriptor = {"type": ValueKind.LIST.value}
    else:
        return {"type": node.kind.value}
    pending.append((node, descriptor))
    return descriptor


parse = SchemaParser.parse
parse_with_validation = SchemaParser.parse_with_validation
extract_schema = SchemaParser.extract_schema
to_json_string = SchemaParser.to_json_string
