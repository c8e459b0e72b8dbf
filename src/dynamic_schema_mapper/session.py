"""SchemaSession: parse facade with automatic schema change detection.

A session remembers the structural descriptor of the last payload it parsed
and, on every further parse, diffs the new descriptor against it::

    Empty     --parse-->       Populated   (cache descriptor, no notification)
    Populated --parse-->       Populated   (diff, notify listener if changes,
                                             always replace descriptor)
    any       --reset_cache--> Empty

Only descriptors are kept between parses, never whole trees, so detection
uses ``SchemaDiff.compare_schema_structure`` and does not look inside list
items.  ``compare_schemas`` offers the full tree-level diff on demand.

All state lives on the instance: tests and independent clients create their
own session.  Every mutation (extract -> compare -> notify -> replace) runs
under one re-entrant lock, so a listener may call back into its session.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from dynamic_schema_mapper.diff.changes import SchemaChange
from dynamic_schema_mapper.diff.engine import SchemaDiff
from dynamic_schema_mapper.parser import SchemaDescriptor, SchemaParser
from dynamic_schema_mapper.schema import DynamicSchema

if TYPE_CHECKING:
    from dynamic_schema_mapper.cache import SchemaCacheManager
    from dynamic_schema_mapper.tree.nodes import ValueNode

__all__ = ["SchemaChangeListener", "SchemaSession"]

logger = logging.getLogger(__name__)

SchemaChangeListener = Callable[[list[SchemaChange]], Any]


class SchemaSession:
    """Owns the last-seen descriptor and a single change listener.

    Example::

        session = SchemaSession()
        session.enable_schema_detection(lambda changes: print(changes))

        session.parse({"id": 1, "name": "Test"})   # first parse: cached only
        session.parse({"id": 2, "email": "x@y"})   # listener gets 2 changes
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._cached_schema: SchemaDescriptor | None = None
        self._listener: SchemaChangeListener | None = None

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, data: Any) -> DynamicSchema:
        """Parse ``data`` and run change detection against the previous parse.

        Raises:
            ParseError: If ``data`` is text that is not valid JSON.  The
                session state is left untouched.
        """
        node = SchemaParser.parse(data)
        self._detect_schema_changes(node)
        return DynamicSchema(node)

    def parse_with_validation(
        self,
        data: Any,
        allow_null: bool = True,
        require_object: bool = False,
    ) -> DynamicSchema:
        """Like ``parse`` with root validation.

        Raises:
            ParseError: If ``data`` is text that is not valid JSON.
            ValidationError: If the root violates a requested constraint.
                The session state is left untouched.
        """
        node = SchemaParser.parse_with_validation(
            data, allow_null=allow_null, require_object=require_object
        )
        self._detect_schema_changes(node)
        return DynamicSchema(node)

    def _detect_schema_changes(self, node: ValueNode) -> None:
        current = SchemaParser.extract_schema(node)

        with self._lock:
            previous = self._cached_schema
            if previous is None:
                self._cached_schema = current
                return

            try:
                changes = SchemaDiff.compare_schema_structure(previous, current)
                if changes:
                    logger.debug("Detected %d schema change(s)", len(changes))
                    if self._listener is not None:
                        self._listener(changes)
            finally:
                self._cached_schema = current

    # ------------------------------------------------------------------
    # Listener management
    # ------------------------------------------------------------------

    def enable_schema_detection(self, callback: SchemaChangeListener) -> None:
        """Register ``callback``, silently replacing any previous listener."""
        with self._lock:
            self._listener = callback

    def disable_schema_detection(self) -> None:
        with self._lock:
            self._listener = None

    @property
    def detection_enabled(self) -> bool:
        return self._listener is not None

    # ------------------------------------------------------------------
    # Cached state
    # ------------------------------------------------------------------

    @property
    def cached_schema(self) -> SchemaDescriptor | None:
        """A copy of the cached descriptor, or None when the session is empty."""
        with self._lock:
            if self._cached_schema is None:
                return None
            return _copy_descriptor(self._cached_schema)

    def reset_cache(self) -> None:
        """Forget the cached descriptor; the next parse acts as the first."""
        with self._lock:
            self._cached_schema = None

    def reset(self) -> None:
        """Forget both the cached descriptor and the listener."""
        with self._lock:
            self._cached_schema = None
            self._listener = None

    # ------------------------------------------------------------------
    # Ad hoc comparison
    # ------------------------------------------------------------------

    def compare_schemas(
        self, old: DynamicSchema, new: DynamicSchema
    ) -> list[SchemaChange]:
        """Tree-level diff of two parsed payloads; session state is not touched."""
        return SchemaDiff.compare(old.root_node, new.root_node)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self, store: SchemaCacheManager, key: str) -> bool:
        """Save the cached descriptor to ``store`` under ``key``.

        Returns False (and saves nothing) when the session is empty.
        """
        with self._lock:
            if self._cached_schema is None:
                return False
            store.save_schema(key, self._cached_schema)
            return True

    def restore(self, store: SchemaCacheManager, key: str) -> bool:
        """Seed the cache from ``store`` so detection spans process restarts.

        Returns True if a descriptor was found.  An absent, expired or
        unreadable entry leaves the session unchanged.
        """
        schema = store.load_schema(key)
        if schema is None:
            return False
        with self._lock:
            self._cached_schema = schema
        return True

    def __repr__(self) -> str:
        state = "populated" if self._cached_schema is not None else "empty"
        return (
            f"SchemaSession(state: {state}, "
            f"detection_enabled: {self.detection_enabled})"
        )


def _copy_descriptor(descriptor: SchemaDescriptor) -> SchemaDescriptor:
    """Deep-copy a descriptor without recursing once per nesting level."""
    root: SchemaDescriptor = {}
    stack = [(descriptor, root)]
    while stack:
        source, target = stack.pop()
        for key, value in source.items():
            if isinstance(value, dict):
                target[key] = {}
                stack.append((value, target[key]))
            else:
                target[key] = copy.deepcopy(value)
    return root
