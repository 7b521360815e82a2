"""Repository-level git queries for wtt."""

import os
from pathlib import Path
from typing import Optional, Union

from wtt.exceptions import InvalidBranchNameError
from wtt.logging_config import get_logger
from wtt.services.git.worktrees import parse_worktree_porcelain
from wtt.utils.process import CommandRunner, GitRunner

logger = get_logger(__name__)


class GitOperations:
    """Git queries that are not tied to a single repository."""

    def __init__(self, runner: Optional[CommandRunner] = None):
        self.runner = runner or GitRunner()

    def repo_root(self, cwd: Union[str, Path, None] = None) -> Optional[Path]:
        """Top-level directory of the working tree containing cwd, or None."""
        result = self.runner.run(["git", "rev-parse", "--show-toplevel"], cwd=cwd or os.getcwd())
        if not result.ok:
            logger.debug(f"Not inside a git repository: {cwd or os.getcwd()}")
            return None
        root = result.stdout.strip()
        return Path(root) if root else None

    def main_repo_root_of(self, path: Union[str, Path]) -> Optional[Path]:
        """Resolve any path inside a repository (or one of its linked
        worktrees) to the main working directory.

        Returns None if the path is gone or no longer under git.
        """
        result = self.runner.run(["git", "-C", str(path), "worktree", "list", "--porcelain"])
        if not result.ok:
            logger.debug(f"Could not resolve main repository of {path}: {result.output}")
            return None
        records = parse_worktree_porcelain(result.stdout)
        if not records:
            return None
        return Path(records[0].path)

    def validate_branch_name(self, name: str, cwd: Union[str, Path, None] = None) -> None:
        """Check a branch name with `git check-ref-format --branch`.

        Raises:
            InvalidBranchNameError: If the name is empty or rejected by git
        """
        if not name:
            raise InvalidBranchNameError(name)
        result = self.runner.run(["git", "check-ref-format", "--branch", name], cwd=cwd)
        if not result.ok:
            raise InvalidBranchNameError(name)
