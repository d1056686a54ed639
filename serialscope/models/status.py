from dataclasses import dataclass
from enum import Enum

DIFFERENT_FROM_PREVIOUS = "(different from previous)"


class StatusKind(str, Enum):
    """Outcome of comparing a live value with the baseline."""

    UNCHANGED = "Unchanged"
    """The live value matches the baseline."""

    CHANGED = "Changed"
    """The baseline holds a different value."""

    NEW = "New"
    """No usable live value, or nothing to compare against."""

    @property
    def severity(self) -> int:
        """Rank used to summarize several results: CHANGED > NEW > UNCHANGED."""
        return _SEVERITY[self]


_SEVERITY = {
    StatusKind.UNCHANGED: 0,
    StatusKind.NEW: 1,
    StatusKind.CHANGED: 2,
}


@dataclass(frozen=True)
class SerialStatus:
    kind: StatusKind
    old: str | None = None
    """Previous value. Only set for CHANGED."""

    @classmethod
    def unchanged(cls) -> "SerialStatus":
        return cls(StatusKind.UNCHANGED)

    @classmethod
    def changed(cls, old: str) -> "SerialStatus":
        return cls(StatusKind.CHANGED, old)

    @classmethod
    def new(cls) -> "SerialStatus":
        return cls(StatusKind.NEW)

    @property
    def is_unchanged(self) -> bool:
        return self.kind == StatusKind.UNCHANGED

    @property
    def is_changed(self) -> bool:
        return self.kind == StatusKind.CHANGED

    @property
    def is_new(self) -> bool:
        return self.kind == StatusKind.NEW

    def worse_than(self, other: "SerialStatus") -> bool:
        return self.kind.severity > other.kind.severity

    def __str__(self) -> str:
        if self.kind == StatusKind.CHANGED:
            return f"Changed (was: {self.old})"
        return self.kind.value
