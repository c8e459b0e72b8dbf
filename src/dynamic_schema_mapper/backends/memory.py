"""MemoryBackend: bounded in-process key/value store.

Backed by a ``cachetools.LRUCache`` so a long-running process that caches
descriptors for many endpoints cannot grow without bound.  Eviction of the
least-recently-used entry is silent.  An evicted descriptor reads as absent;
a descriptor whose timestamp key alone was evicted is treated as stale by
the cache manager, so it cannot outlive its freshness window.
"""

from __future__ import annotations

from cachetools import LRUCache

__all__ = ["MemoryBackend"]


class MemoryBackend:
    """LRU-bounded in-memory backend satisfying ``KeyValueBackend``.

    Each instance owns its own ``LRUCache``; separate instances never share
    state.

    Args:
        max_size: Maximum number of stored keys.  Note that every cached
            descriptor uses two keys (payload and timestamp).  Defaults to
            1024.
    """

    def __init__(self, max_size: int = 1024) -> None:
        self._cache: LRUCache[str, str] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def get(self, key: str) -> str | None:
        return self._cache.get(key)

    def set(self, key: str, value: str) -> None:
        self._cache[key] = value

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._cache.keys())
