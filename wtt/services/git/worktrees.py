"""Worktree operations service for wtt."""

import os
from pathlib import Path
from typing import Optional, Union

from wtt.constants import PATH_SEPARATORS, PATH_SEPARATOR_SUBSTITUTE
from wtt.exceptions import (
    GitOperationError,
    WorktreeCreateError,
    WorktreeNotFoundError,
    WorktreeRemoveError,
)
from wtt.logging_config import get_logger
from wtt.models.worktree import WorktreeRecord
from wtt.utils.process import CommandRunner, GitRunner

logger = get_logger(__name__)


def parse_worktree_porcelain(output: str) -> list[WorktreeRecord]:
    """Parse `git worktree list --porcelain` output into records.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Unknown lines are ignored, a block without a ``worktree`` line is
    dropped, and a final block without a trailing blank line is kept.
    Never raises.
    """
    records: list[WorktreeRecord] = []
    current: dict[str, str] = {}

    def flush():
        if current.get("path"):
            records.append(WorktreeRecord(
                path=current["path"],
                head_commit=current.get("head", ""),
                branch_ref=current.get("branch", ""),
            ))
        current.clear()

    for line in output.splitlines():
        if not line.strip():
            flush()
            continue
        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):]
        elif line.startswith("HEAD "):
            current["head"] = line[len("HEAD "):]
        elif line.startswith("branch "):
            current["branch"] = line[len("branch "):]

    flush()
    return records


def branch_to_path(branch: str) -> str:
    """Convert a branch name to a directory name: feature/login -> feature-login."""
    name = branch
    for sep in PATH_SEPARATORS:
        name = name.replace(sep, PATH_SEPARATOR_SUBSTITUTE)
    if os.sep not in PATH_SEPARATORS:
        name = name.replace(os.sep, PATH_SEPARATOR_SUBSTITUTE)
    return name


class WorktreeService:
    """Service for listing, adding and removing worktrees of one repository."""

    def __init__(self, repo_root: Union[str, Path], runner: Optional[CommandRunner] = None):
        """Initialize the worktree service.

        Args:
            repo_root: Path to the main working directory of the repository
            runner: Command runner for git (defaults to GitRunner)
        """
        self.repo_root = str(repo_root)
        self.runner = runner or GitRunner()

    def _git(self, *args: str):
        return self.runner.run(["git", "-C", self.repo_root, *args])

    def list_worktrees(self) -> list[WorktreeRecord]:
        """List all worktrees; the first record is the main working directory.

        Raises:
            GitOperationError: If git cannot list worktrees
        """
        result = self._git("worktree", "list", "--porcelain")
        if not result.ok:
            raise GitOperationError("worktree list", result.output)

        records = parse_worktree_porcelain(result.stdout)
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def removable_worktrees(self) -> list[WorktreeRecord]:
        """Linked worktrees only; the main working directory is never removable."""
        return self.list_worktrees()[1:]

    def find_by_branch(self, branch: str, include_main: bool = True) -> WorktreeRecord:
        """Find the worktree that has `branch` checked out.

        Raises:
            WorktreeNotFoundError: If no worktree matches
        """
        records = self.list_worktrees()
        if not include_main:
            records = records[1:]
        for record in records:
            if record.matches_branch(branch):
                return record
        raise WorktreeNotFoundError(branch)

    def create(self, base_dir: Union[str, Path], branch: str, base_ref: Optional[str] = None) -> Path:
        """Create a worktree with a new branch under base_dir.

        Args:
            base_dir: Absolute directory the worktree directory is created in
            branch: Name of the new branch
            base_ref: Optional commit, branch or tag to start from (default HEAD)

        Returns:
            Path of the new worktree

        Raises:
            WorktreeCreateError: If git worktree add fails
        """
        worktree_path = Path(base_dir) / branch_to_path(branch)
        args = ["worktree", "add", "-b", branch, str(worktree_path)]
        if base_ref:
            args.append(base_ref)

        result = self._git(*args)
        if not result.ok:
            raise WorktreeCreateError(branch, result.output)

        logger.info(f"Created worktree at {worktree_path} for branch {branch}")
        return worktree_path

    def remove(self, path: Union[str, Path], force: bool = False) -> None:
        """Remove the worktree at path.

        Args:
            path: Path to the worktree directory
            force: Remove even with modified or untracked files

        Raises:
            WorktreeRemoveError: If git worktree remove fails
        """
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(path))

        result = self._git(*args)
        if not result.ok:
            raise WorktreeRemoveError(str(path), result.output)
        logger.info(f"Removed worktree at {path}")

    @staticmethod
    def remove_empty_parent(path: Union[str, Path]) -> bool:
        """Delete the parent directory of a removed worktree if nothing is left in it."""
        parent = Path(path).parent
        try:
            if parent.is_dir() and not any(parent.iterdir()):
                parent.rmdir()
                logger.debug(f"Removed empty directory {parent}")
                return True
        except OSError as e:
            logger.debug(f"Could not remove {parent}: {e}")
        return False
