"""SchemaCacheManager: durable storage of structural descriptors.

Stores descriptors as JSON text in any ``KeyValueBackend`` under namespaced
keys, together with an epoch-millisecond timestamp::

    dynamic_schema_cache_<namespace>_<key>            -> '{"type": "object", ...}'
    dynamic_schema_cache_<namespace>_<key>_timestamp  -> '1760870400000'

Caching is optional functionality: every backend failure is logged at debug
level and reported as absence (None, [] or False).  Nothing here ever raises
into a parse or a diff.

Example::

    from datetime import timedelta
    from dynamic_schema_mapper.backends import FileBackend
    from dynamic_schema_mapper.cache import SchemaCacheManager

    manager = SchemaCacheManager(
        "my_app",
        cache_duration=timedelta(hours=24),
        backend=FileBackend("~/.cache/my_app/schemas.json"),
    )
    manager.save_schema("users", schema.get_schema_structure())
    cached = manager.load_schema("users")  # None when absent or expired
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from dynamic_schema_mapper.backends.memory import MemoryBackend
from dynamic_schema_mapper.config import (
    DEFAULT_CACHE_DURATION,
    DEFAULT_KEY_PREFIX,
    CacheConfig,
)
from dynamic_schema_mapper.parser import SchemaDescriptor
from dynamic_schema_mapper.protocols import KeyValueBackend

__all__ = ["CacheMetadata", "SchemaCacheManager"]

logger = logging.getLogger(__name__)

_TIMESTAMP_SUFFIX = "_timestamp"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class CacheMetadata:
    """Metadata about one cached descriptor.

    Attributes:
        key:        The caller-facing key (without namespace prefix).
        cached_at:  When the descriptor was stored; None if the timestamp is
                    missing or unreadable (such entries count as expired
                    unless expiry is disabled).
        size_bytes: Length of the stored JSON text.
        is_expired: True when older than the manager's freshness window.
    """

    key: str
    cached_at: datetime | None
    size_bytes: int
    is_expired: bool

    @property
    def size_formatted(self) -> str:
        if self.size_bytes < 1024:
            return f"{self.size_bytes} B"
        if self.size_bytes < 1024 * 1024:
            return f"{self.size_bytes / 1024:.1f} KB"
        return f"{self.size_bytes / (1024 * 1024):.1f} MB"

    def __str__(self) -> str:
        return (
            f"CacheMetadata(key: {self.key}, cached_at: {self.cached_at}, "
            f"size: {self.size_formatted}, expired: {self.is_expired})"
        )


class SchemaCacheManager:
    """Namespaced, expiring store of structural descriptors.

    Args:
        namespace: Namespace for all keys, or a full ``CacheConfig``.
        cache_duration: Freshness window; ignored when ``namespace`` is a
            ``CacheConfig``.  ``None`` disables expiry.
        backend: Storage backend.  Defaults to a private ``MemoryBackend``.
        clock: Returns the current aware datetime.  Injectable for tests.
    """

    def __init__(
        self,
        namespace: str | CacheConfig,
        cache_duration: timedelta | None = DEFAULT_CACHE_DURATION,
        backend: KeyValueBackend | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if isinstance(namespace, CacheConfig):
            self._config = namespace
        else:
            self._config = CacheConfig(
                namespace=namespace,
                cache_duration=cache_duration,
                key_prefix=DEFAULT_KEY_PREFIX,
            )
        self._backend: KeyValueBackend = (
            backend if backend is not None else MemoryBackend()
        )
        self._clock = clock

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def namespace(self) -> str:
        return self._config.namespace

    @property
    def cache_duration(self) -> timedelta | None:
        return self._config.cache_duration

    # ------------------------------------------------------------------
    # Descriptor storage
    # ------------------------------------------------------------------

    def save_schema(self, key: str, schema: SchemaDescriptor) -> None:
        """Store ``schema`` under ``key`` with the current timestamp."""
        try:
            payload = json.dumps(schema)
            millis = int(self._clock().timestamp() * 1000)
            self._backend.set(self._cache_key(key), payload)
            self._backend.set(self._timestamp_key(key), str(millis))
        except Exception:
            logger.debug("Failed to save schema %r", key, exc_info=True)

    def load_schema(self, key: str) -> SchemaDescriptor | None:
        """Return the descriptor stored under ``key``.

        Returns None when absent, unreadable, not shaped like a descriptor,
        or stale.  A stale entry (older than the freshness window, or missing
        its timestamp while expiry is enabled) is removed.
        """
        try:
            payload = self._backend.get(self._cache_key(key))
            if payload is None:
                return None

            if self._is_expired(self._read_timestamp(key)):
                logger.debug("Cached schema %r expired, removing", key)
                self.clear_schema(key)
                return None

            schema = json.loads(payload)
        except Exception:
            logger.debug("Failed to load schema %r", key, exc_info=True)
            return None

        if not _is_descriptor(schema):
            logger.debug("Cached schema %r is not a well-formed descriptor", key)
            return None
        return schema

    def clear_schema(self, key: str) -> None:
        try:
            self._backend.delete(self._cache_key(key))
            self._backend.delete(self._timestamp_key(key))
        except Exception:
            logger.debug("Failed to clear schema %r", key, exc_info=True)

    def clear_all(self) -> None:
        """Remove every entry of this namespace, leaving other namespaces alone."""
        prefix = self._config.namespace_prefix
        try:
            for stored_key in self._backend.keys():
                if stored_key.startswith(prefix):
                    self._backend.delete(stored_key)
        except Exception:
            logger.debug(
                "Failed to clear namespace %r", self.namespace, exc_info=True
            )

    def get_cached_keys(self) -> list[str]:
        """Return the caller-facing keys cached in this namespace."""
        prefix = self._config.namespace_prefix
        try:
            stored = self._backend.keys()
        except Exception:
            logger.debug(
                "Failed to list keys of namespace %r", self.namespace, exc_info=True
            )
            return []
        return [
            stored_key[len(prefix) :]
            for stored_key in stored
            if stored_key.startswith(prefix)
            and not stored_key.endswith(_TIMESTAMP_SUFFIX)
        ]

    def has_valid_cache(self, key: str) -> bool:
        return self.load_schema(key) is not None

    def get_cache_metadata(self, key: str) -> CacheMetadata | None:
        """Return metadata for ``key`` without evicting it, or None if absent."""
        try:
            payload = self._backend.get(self._cache_key(key))
            if payload is None:
                return None
            cached_at = self._read_timestamp(key)
        except Exception:
            logger.debug("Failed to read metadata for %r", key, exc_info=True)
            return None

        return CacheMetadata(
            key=key,
            cached_at=cached_at,
            size_bytes=len(payload.encode("utf-8")),
            is_expired=self._is_expired(cached_at),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _cache_key(self, key: str) -> str:
        return f"{self._config.namespace_prefix}{key}"

    def _timestamp_key(self, key: str) -> str:
        return f"{self._cache_key(key)}{_TIMESTAMP_SUFFIX}"

    def _read_timestamp(self, key: str) -> datetime | None:
        raw: Any = self._backend.get(self._timestamp_key(key))
        if raw is None:
            return None
        try:
            millis = int(raw)
        except ValueError:
            return None
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)

    def _is_expired(self, cached_at: datetime | None) -> bool:
        duration = self._config.cache_duration
        if duration is None:
            return False
        if cached_at is None:
            # Payload outlived its timestamp, e.g. after backend eviction
            return True
        return self._clock() - cached_at > duration


def _is_descriptor(value: Any) -> bool:
    """Check the shape ``SchemaParser.extract_schema`` produces.

    Every descriptor is a dict with a string ``type``; ``properties`` (when
    present) maps keys to descriptors and ``items`` (when present) is one.
    """
    stack = [value]
    while stack:
        current = stack.pop()
        if not isinstance(current, dict) or not isinstance(current.get("type"), str):
            return False
        if "properties" in current:
            properties = current["properties"]
            if not isinstance(properties, dict):
                return False
            stack.extend(properties.values())
        if "items" in current:
            stack.append(current["items"])
    return True
