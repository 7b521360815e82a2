"""Result of an interactive selection."""
from enum import Enum
from dataclasses import dataclass
from typing import Any


class SelectionKind(Enum):
    """How a selection prompt ended."""
    CHOSEN = "chosen"
    CANCELLED = "cancelled"
    CLEARED = "cleared"  # The user picked the "(none)" sentinel


@dataclass(frozen=True)
class Selection:
    """Outcome of a picker: a chosen item, a cancel, or the sentinel."""
    kind: SelectionKind
    item: Any = None

    @classmethod
    def chosen(cls, item: Any) -> "Selection":
        return cls(SelectionKind.CHOSEN, item)

    @classmethod
    def cancelled(cls) -> "Selection":
        return cls(SelectionKind.CANCELLED)

    @classmethod
    def cleared(cls) -> "Selection":
        return cls(SelectionKind.CLEARED)

    @property
    def is_chosen(self) -> bool:
        return self.kind is SelectionKind.CHOSEN

    @property
    def is_cancelled(self) -> bool:
        return self.kind is SelectionKind.CANCELLED

    @property
    def is_cleared(self) -> bool:
        return self.kind is SelectionKind.CLEARED
