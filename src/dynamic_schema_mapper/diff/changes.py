"""SchemaChange dataclass and ChangeKind StrEnum for diff output."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = ["ChangeKind", "SchemaChange"]


class ChangeKind(StrEnum):
    """Kinds of structural change.

    - ADDED        -> "added"        : key present only in the new shape
    - REMOVED      -> "removed"      : key present only in the old shape
    - TYPE_CHANGED -> "type_changed" : same position, different kind
    """

    ADDED = auto()
    REMOVED = auto()
    TYPE_CHANGED = auto()

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_breaking(self) -> bool:
        """Removals and type changes can break consumers; additions cannot."""
        return self is not ChangeKind.ADDED


_DISPLAY_NAMES = {
    ChangeKind.ADDED: "Fields Added",
    ChangeKind.REMOVED: "Fields Removed",
    ChangeKind.TYPE_CHANGED: "Type Changed",
}


@dataclass(frozen=True, slots=True)
class SchemaChange:
    """One detected structural difference.

    Attributes:
        kind:     What changed (see ChangeKind).
        path:     Dot-notation path of the change; "" is the root and
                  ``[*]`` marks a hop into list items.
        old_type: Kind label in the old shape (REMOVED, TYPE_CHANGED).
        new_type: Kind label in the new shape (ADDED, TYPE_CHANGED).
    """

    kind: ChangeKind
    path: str
    old_type: str | None = None
    new_type: str | None = None

    @property
    def is_breaking(self) -> bool:
        return self.kind.is_breaking

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind.value, "path": self.path}
        if self.old_type is not None:
            data["old_type"] = self.old_type
        if self.new_type is not None:
            data["new_type"] = self.new_type
        return data

    def __str__(self) -> str:
        text = f"{self.kind.display_name}: {self.path}"
        if self.old_type is not None and self.new_type is not None:
            return f"{text} ({self.old_type} → {self.new_type})"
        if self.old_type is not None:
            return f"{text} (was: {self.old_type})"
        if self.new_type is not None:
            return f"{text} (now: {self.new_type})"
        return text
