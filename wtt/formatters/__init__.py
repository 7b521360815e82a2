"""Formatting utilities for wtt.

Picker rows are built from column tuples, organized by what is listed:
- worktree: worktree records
- repo: registered repository paths
"""

from .worktree import format_branch, worktree_columns
from .repo import repo_name, repo_columns

__all__ = [
    # Worktree
    "format_branch",
    "worktree_columns",
    # Repo
    "repo_name",
    "repo_columns",
]
