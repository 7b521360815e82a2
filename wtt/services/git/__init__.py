"""Git-related services for wtt."""

from .operations import GitOperations
from .worktrees import WorktreeService, branch_to_path, parse_worktree_porcelain

__all__ = [
    "GitOperations",
    "WorktreeService",
    "branch_to_path",
    "parse_worktree_porcelain",
]
