"""Display columns for worktrees."""

from wtt.constants import DETACHED_LABEL
from wtt.models.worktree import WorktreeRecord


def format_branch(record: WorktreeRecord) -> str:
    """Short branch name, or "(detached)"."""
    return record.branch_name or DETACHED_LABEL


def worktree_columns(record: WorktreeRecord) -> tuple[str, str]:
    """Picker columns for a worktree: branch, path."""
    return format_branch(record), record.path
