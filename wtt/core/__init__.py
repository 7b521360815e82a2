"""Command orchestration for wtt."""

from .worktree_manager import WorktreeManager

__all__ = ["WorktreeManager"]
