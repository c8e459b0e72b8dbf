"""Backends subpackage for the schema cache.

Both backends satisfy the ``KeyValueBackend`` Protocol structurally:
- MemoryBackend: LRU-bounded in-process store (cachetools)
- FileBackend:   single JSON document on disk, atomically replaced on write
"""

from dynamic_schema_mapper.backends.file import FileBackend
from dynamic_schema_mapper.backends.memory import MemoryBackend

__all__ = ["FileBackend", "MemoryBackend"]
