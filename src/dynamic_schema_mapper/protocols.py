"""KeyValueBackend Protocol: storage extension point for the schema cache.

Defines the structural interface every storage backend must satisfy.  Users
can plug in their own store (Redis, sqlite, a settings service, ...) without
inheriting from any base class; any class with conformant methods passes
``isinstance`` checks.

Example::

    from dynamic_schema_mapper.protocols import KeyValueBackend

    class DictBackend:
        def __init__(self) -> None:
            self.data: dict[str, str] = {}

        def get(self, key: str) -> str | None:
            return self.data.get(key)

        def set(self, key: str, value: str) -> None:
            self.data[key] = value

        def delete(self, key: str) -> None:
            self.data.pop(key, None)

        def keys(self) -> list[str]:
            return list(self.data)

    assert isinstance(DictBackend(), KeyValueBackend)  # structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["KeyValueBackend"]


@runtime_checkable
class KeyValueBackend(Protocol):
    """Structural protocol for string key/value stores.

    Backends may raise on I/O failure; ``SchemaCacheManager`` absorbs every
    backend exception and reports it as a missing entry.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...
