"""FileBackend: key/value store persisted as one JSON document on disk.

The whole store is a single JSON object ``{key: value}``.  Every write
rewrites the document through a temporary file and ``os.replace`` so a crash
mid-write leaves the previous document intact.  Reads go to disk each time;
the store is meant for a handful of descriptors, not bulk data.

Errors (unreadable file, invalid JSON, permission problems) are raised to
the caller; ``SchemaCacheManager`` is the layer that absorbs them.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

__all__ = ["FileBackend"]


class FileBackend:
    """JSON-file backend satisfying ``KeyValueBackend``.

    Args:
        path: Location of the JSON document.  Parent directories are created
            on first write.  A missing file reads as an empty store.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def keys(self) -> list[str]:
        return list(self._load())

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = f"{self._path} does not contain a JSON object"
            raise ValueError(msg)
        return data

    def _dump(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
