"""Data models for wtt."""

from .outcome import Advisory, StepReport
from .selection import Selection, SelectionKind
from .worktree import WorktreeRecord

__all__ = [
    "Advisory",
    "StepReport",
    "Selection",
    "SelectionKind",
    "WorktreeRecord",
]
