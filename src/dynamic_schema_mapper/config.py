"""CacheConfig: settings for persisting structural descriptors.

CacheConfig is a frozen (immutable) dataclass validated on construction,
so an invalid namespace or freshness window fails fast instead of
producing unreadable cache keys later.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

__all__ = ["DEFAULT_CACHE_DURATION", "DEFAULT_KEY_PREFIX", "CacheConfig"]

DEFAULT_KEY_PREFIX = "dynamic_schema_cache_"
DEFAULT_CACHE_DURATION = timedelta(days=7)


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for ``SchemaCacheManager``.

    Attributes:
        namespace: Groups cached descriptors; ``clear_all`` and
            ``get_cached_keys`` operate on a single namespace.
        cache_duration: Freshness window.  Entries older than this are
            removed on the next load.  ``None`` disables expiry.
        key_prefix: Prefix shared by every key this package writes to a
            backend.
    """

    namespace: str
    cache_duration: timedelta | None = DEFAULT_CACHE_DURATION
    key_prefix: str = DEFAULT_KEY_PREFIX

    def __post_init__(self) -> None:
        if not self.namespace:
            msg = "namespace must be a non-empty string"
            raise ValueError(msg)
        if any(ch.isspace() for ch in self.namespace):
            msg = f"namespace must not contain whitespace, got {self.namespace!r}"
            raise ValueError(msg)
        if self.cache_duration is not None and self.cache_duration <= timedelta(0):
            msg = f"cache_duration must be positive, got {self.cache_duration}"
            raise ValueError(msg)
        if not self.key_prefix:
            msg = "key_prefix must be a non-empty string"
            raise ValueError(msg)

    @property
    def namespace_prefix(self) -> str:
        """Prefix of every cache key belonging to this namespace."""
        return f"{self.key_prefix}{self.namespace}_"
