"""Populate a freshly created worktree with files the repository does not track."""

import os
import shutil
from pathlib import Path
from typing import Iterable, Optional, Union

from wtt.config import RepoConfig
from wtt.logging_config import get_logger
from wtt.models.outcome import StepReport
from wtt.utils.process import CommandRunner, SubprocessRunner

logger = get_logger(__name__)


class PopulateService:
    """Copies, links and runs setup commands for a new worktree.

    Every step is best-effort: a source that does not exist is skipped
    silently, and any other failure is recorded as an advisory in the
    returned StepReport instead of being raised.
    """

    def __init__(self, source_root: Union[str, Path], runner: Optional[CommandRunner] = None):
        """Initialize the service.

        Args:
            source_root: Main working directory that files are taken from
            runner: Command runner for post-create commands
        """
        self.source_root = Path(source_root)
        self.runner = runner or SubprocessRunner()

    def populate(self, worktree_path: Union[str, Path], config: RepoConfig) -> StepReport:
        """Run every configured step against worktree_path, in order."""
        dest = Path(worktree_path)
        report = StepReport()
        report.extend(self.copy_files(dest, config.copy_files))
        report.extend(self.copy_dirs(dest, config.copy_dirs))
        report.extend(self.symlink_files(dest, config.symlink_files))
        report.extend(self.run_post_create(dest, config.post_create))
        return report

    def copy_files(self, dest: Path, files: Iterable[str]) -> StepReport:
        report = StepReport()
        for rel in files:
            src = self.source_root / rel
            if not src.exists():
                logger.debug(f"Skipping missing file {src}")
                continue
            target = dest / rel
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, target)
            except OSError as e:
                report.warn("copy_files", rel, _describe(e))
                continue
            logger.debug(f"Copied {src} -> {target}")
            report.done(rel)
        return report

    def copy_dirs(self, dest: Path, dirs: Iterable[str]) -> StepReport:
        """Copy directories recursively, keeping file and directory modes."""
        report = StepReport()
        for rel in dirs:
            src = self.source_root / rel
            if not src.exists():
                logger.debug(f"Skipping missing directory {src}")
                continue
            target = dest / rel
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copytree(src, target, symlinks=True, dirs_exist_ok=True)
            except (OSError, shutil.Error) as e:
                report.warn("copy_dirs", rel, _describe(e))
                continue
            logger.debug(f"Copied directory {src} -> {target}")
            report.done(rel)
        return report

    def symlink_files(self, dest: Path, files: Iterable[str]) -> StepReport:
        """Link files back to the main working directory so both share them."""
        report = StepReport()
        for rel in files:
            src = self.source_root / rel
            if not src.exists():
                logger.debug(f"Skipping missing file {src}")
                continue
            target = dest / rel
            if target.exists() or target.is_symlink():
                report.warn("symlink_files", rel, f"{target} already exists")
                continue
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                os.symlink(src.resolve(), target)
            except OSError as e:
                report.warn("symlink_files", rel, _describe(e))
                continue
            logger.debug(f"Linked {target} -> {src}")
            report.done(rel)
        return report

    def run_post_create(self, dest: Path, commands: Iterable[str]) -> StepReport:
        """Run shell commands inside the worktree; a failure does not stop the rest."""
        report = StepReport()
        for command in commands:
            logger.info(f"Running: {command}")
            try:
                result = self.runner.run(
                    ["sh", "-c", command],
                    cwd=dest,
                    capture_stdout=False,
                    capture_stderr=False,
                )
            except OSError as e:
                report.warn("post_create", command, _describe(e))
                continue
            if not result.ok:
                report.warn("post_create", command, f"exited with status {result.returncode}")
                continue
            report.done(command)
        return report


def _describe(error: Exception) -> str:
    if isinstance(error, OSError) and error.strerror:
        return error.strerror
    return str(error)
