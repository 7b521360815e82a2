"""Worktree data models."""

from dataclasses import dataclass

from wtt.constants import BRANCH_REF_PREFIX, DETACHED_LABEL


@dataclass(frozen=True)
class WorktreeRecord:
    """One working directory reported by `git worktree list --porcelain`."""

    path: str
    head_commit: str = ""
    branch_ref: str = ""  # Empty for a detached checkout

    @property
    def branch_name(self) -> str:
        """Short branch name, or an empty string when detached."""
        if self.branch_ref.startswith(BRANCH_REF_PREFIX):
            return self.branch_ref[len(BRANCH_REF_PREFIX):]
        return self.branch_ref

    @property
    def is_detached(self) -> bool:
        return not self.branch_ref

    def matches_branch(self, branch: str) -> bool:
        """True if this worktree has `branch` checked out (short or full ref)."""
        if not branch or self.is_detached:
            return False
        return self.branch_ref in (branch, f"{BRANCH_REF_PREFIX}{branch}")

    def __str__(self) -> str:
        return f"{self.branch_name or DETACHED_LABEL} @ {self.path}"
