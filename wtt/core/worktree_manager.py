"""Command handlers for wtt.

WorktreeManager ties the services together: it resolves the active
repository, loads its configuration, drives git and the picker, and prints
the resulting path (and nothing else) on stdout for the shell wrapper.
"""

import os
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from rich.console import Console

from wtt.config import config_path, load_repo_config, write_config_template
from wtt.constants import COMPANION_COMMAND, CONFIG_FILE_NAME
from wtt.exceptions import NoCandidatesError, NotInRepositoryError
from wtt.formatters import repo_columns, repo_name, worktree_columns
from wtt.logging_config import get_logger
from wtt.models.outcome import Advisory
from wtt.services.git import GitOperations, WorktreeService
from wtt.services.populate_service import PopulateService
from wtt.services.registry_service import RepositoryRegistry
from wtt.services.selection_service import SelectionService, sentinel_label
from wtt.utils.namegen import generate_branch_name
from wtt.utils.process import CommandRunner, GitRunner, SubprocessRunner

logger = get_logger(__name__)

NO_REPOS_HINT = "No repos registered yet. Run any wtt command from inside a git repo first."


class WorktreeManager:
    """Entry point for every wtt command."""

    def __init__(
        self,
        cwd: Union[str, Path, None] = None,
        registry: Optional[RepositoryRegistry] = None,
        selector: Optional[SelectionService] = None,
        git_runner: Optional[CommandRunner] = None,
        runner: Optional[CommandRunner] = None,
        console: Optional[Console] = None,
        stdout: Optional[TextIO] = None,
    ):
        """Initialize the manager.

        Args:
            cwd: Directory the command was invoked from
            registry: Repository registry (defaults to the per-user one)
            selector: Selection presenter
            git_runner: Runner for git commands
            runner: Runner for the picker, post-create commands and the companion tool
            console: Diagnostic console (stderr)
            stdout: Stream the result path is written to
        """
        self.cwd = Path(cwd) if cwd is not None else Path(os.getcwd())
        self.git_runner = git_runner or GitRunner()
        self.runner = runner or SubprocessRunner()
        self.git = GitOperations(self.git_runner)
        self.registry = registry or RepositoryRegistry()
        self.console = console or Console(stderr=True)
        self.selector = selector or SelectionService(console=self.console, runner=self.runner)
        self.stdout = stdout if stdout is not None else sys.stdout

    # Output

    def _emit(self, value: Union[str, Path]) -> None:
        """Write the command's single result line to stdout."""
        self.stdout.write(f"{value}\n")
        self.stdout.flush()

    def _info(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def _warn(self, message: str) -> None:
        self.console.print(f"Warning: {message}", style="yellow", markup=False, highlight=False, soft_wrap=True)

    def _advise(self, advisory: Advisory) -> None:
        self._warn(str(advisory))

    # Repository resolution

    def resolve_repo_root(self) -> Path:
        """Main working directory of the repository containing cwd, else the saved one.

        Raises:
            NotInRepositoryError: If neither is available
        """
        toplevel = self.git.repo_root(self.cwd)
        if toplevel is not None:
            return self.git.main_repo_root_of(toplevel) or toplevel

        current = self.registry.get_current()
        if current:
            logger.debug(f"Using saved repo context {current}")
            return Path(current)
        raise NotInRepositoryError()

    def _active_repo(self) -> Path:
        """Resolve the repository and remember it in the registry."""
        root = self.resolve_repo_root()
        advisory = self.registry.register(root)
        if advisory is not None:
            # Registration failures never fail a command
            logger.info(f"Not registered: {advisory}")
        return root

    def _worktrees(self, root: Path) -> WorktreeService:
        return WorktreeService(root, self.git_runner)

    # Worktree commands

    def create(self, branch: Optional[str] = None, base: Optional[str] = None,
               launch_companion: bool = False) -> Path:
        """Create a worktree for a new branch and print its path.

        Args:
            branch: Branch name; a random one is generated when omitted
            base: Commit, branch or tag to start from
            launch_companion: Start the companion tool inside the new worktree
        """
        root = self._active_repo()
        name = repo_name(str(root))
        config = load_repo_config(root, name)

        if branch is None:
            branch = generate_branch_name(name)
        else:
            self.git.validate_branch_name(branch, cwd=root)

        self._info(f"Creating worktree for branch {branch!r}...")
        path = self._worktrees(root).create(config.worktree_base(root), branch, base)

        report = PopulateService(root, self.runner).populate(path, config)
        for advisory in report.advisories:
            self._advise(advisory)

        if launch_companion:
            self._launch_companion(path)

        self._emit(path)
        return path

    def _launch_companion(self, path: Path) -> None:
        try:
            result = self.runner.run(COMPANION_COMMAND, cwd=path, attach_tty=True)
        except OSError as e:
            self._warn(f"cannot start {COMPANION_COMMAND[0]}: {e}")
            return
        if not result.ok:
            self._info(f"{COMPANION_COMMAND[0]} exited with status {result.returncode}")

    def jump(self, branch: str) -> Path:
        """Print the path of the worktree that has branch checked out."""
        root = self._active_repo()
        record = self._worktrees(root).find_by_branch(branch)
        path = Path(record.path)
        self._emit(path)
        return path

    def select_worktree(self) -> Optional[Path]:
        """Pick any worktree (main included) and print its path."""
        root = self._active_repo()
        records = self._worktrees(root).list_worktrees()
        selection = self.selector.select(records, worktree_columns, "Select a worktree")
        if not selection.is_chosen:
            return None
        path = Path(selection.item.path)
        self._emit(path)
        return path

    def remove(self, branch: Optional[str] = None, force: bool = False) -> Optional[Path]:
        """Remove a linked worktree, by branch or interactively.

        Without force the user must confirm, and git refuses to drop
        uncommitted or untracked changes. Nothing is printed on stdout.
        """
        root = self._active_repo()
        worktrees = self._worktrees(root)

        if branch is None:
            removable = worktrees.removable_worktrees()
            if not removable:
                raise NoCandidatesError("no worktrees to remove")
            selection = self.selector.select(removable, worktree_columns, "Select a worktree to remove")
            if not selection.is_chosen:
                return None
            record = selection.item
        else:
            record = worktrees.find_by_branch(branch, include_main=False)

        label = record.branch_name or record.path
        if not force and not self.selector.confirm(f"Remove worktree at {record.path}?"):
            self._info("Aborted.")
            return None

        worktrees.remove(record.path, force=force)
        worktrees.remove_empty_parent(record.path)
        self._info(f"Removed worktree for branch {label!r}")
        return Path(record.path)

    def context(self) -> Optional[str]:
        """Print the active repository's name; print nothing when there is none."""
        try:
            root = self.resolve_repo_root()
        except NotInRepositoryError:
            return None
        name = repo_name(str(root))
        self._emit(name)
        return name

    def init_config(self, force: bool = False) -> Optional[Path]:
        """Scaffold .wtt.toml in the repository root."""
        root = self.resolve_repo_root()
        if not write_config_template(root, force=force):
            self._info(f"`{CONFIG_FILE_NAME}` already exists. Use `wtt init -f` to overwrite.")
            return None
        path = config_path(root)
        self._info(f"Created {path}")
        return path

    # Repository registry commands

    def known_repos(self) -> list[str]:
        """Registered repositories, cleaned up against what git still knows."""
        return self.registry.canonicalize(self.git.main_repo_root_of)

    def switch_repo(self) -> Optional[str]:
        """Pick a registered repository and make it the current one."""
        repos = self.known_repos()
        if not repos:
            self._info(NO_REPOS_HINT)
            return None

        selection = self.selector.select(repos, repo_columns, "Select a repo")
        if not selection.is_chosen:
            return None
        self.registry.set_current(selection.item)
        self._info(f"Switched to repo: {repo_name(selection.item)}")
        return selection.item

    def pick_repo(self) -> Optional[str]:
        """Like switch_repo, with a leading "(none)" option that clears the context."""
        repos = self.known_repos()
        if not repos:
            self._info(NO_REPOS_HINT)
            return None

        selection = self.selector.select(
            repos, repo_columns, "Select a repo", sentinel=sentinel_label("clear repo context")
        )
        if selection.is_cleared:
            self.registry.clear_current()
            self._info("Cleared repo context.")
            return None
        if not selection.is_chosen:
            return None
        self.registry.set_current(selection.item)
        self._info(f"Switched to repo: {repo_name(selection.item)}")
        return selection.item

    def remove_repo(self, force: bool = False) -> Optional[str]:
        """Forget a registered repository; clears the context if it was current."""
        repos = self.known_repos()
        if not repos:
            self._info("No repos registered yet.")
            return None

        selection = self.selector.select(repos, repo_columns, "Select a repo to forget")
        if not selection.is_chosen:
            return None
        selected = selection.item
        name = repo_name(selected)

        if not force and not self.selector.confirm(f"Remove {name} from known repos?"):
            self._info("Aborted.")
            return None

        self.registry.remove(selected)
        if self.registry.get_current() == selected:
            self.registry.clear_current()
            self._info(f"Removed {name} and cleared repo context.")
        else:
            self._info(f"Removed {name} from known repos.")
        return selected
