"""Pytest fixtures for wtt tests"""
import io
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import git
import pytest
from rich.console import Console

from wtt.core import WorktreeManager
from wtt.services.registry_service import RepositoryRegistry
from wtt.services.selection_service import SelectionService
from wtt.utils.process import CommandResult


@dataclass
class RecordedCall:
    """One command seen by FakeRunner."""

    args: list
    cwd: Optional[str]
    stdin: Optional[str]
    capture_stdout: bool
    capture_stderr: bool
    attach_tty: bool


class FakeRunner:
    """Command runner that records calls and replays canned results.

    A response registered with ``respond("worktree", "list", ...)`` is
    returned for any command whose arguments contain all of those tokens.
    Unmatched commands succeed with empty output.
    """

    def __init__(self):
        self.calls: list[RecordedCall] = []
        self.responses: list[tuple[tuple, CommandResult]] = []

    def respond(self, *tokens, returncode=0, stdout="", stderr=""):
        self.responses.append((tokens, CommandResult(returncode, stdout, stderr)))

    def run(self, args, cwd=None, stdin=None, *, capture_stdout=True,
            capture_stderr=True, attach_tty=False):
        args = list(args)
        self.calls.append(RecordedCall(
            args=args,
            cwd=str(cwd) if cwd is not None else None,
            stdin=stdin,
            capture_stdout=capture_stdout,
            capture_stderr=capture_stderr,
            attach_tty=attach_tty,
        ))
        for tokens, result in self.responses:
            if all(token in args for token in tokens):
                return result
        return CommandResult(0)


def console_text(console: Console) -> str:
    """Everything printed to a console created by the console fixture."""
    return console.file.getvalue()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they do not outlive a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Git reports resolved paths; resolve here so comparisons line up
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository named "myrepo" for testing."""
    repo_path = temp_dir / "myrepo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    (repo_path / "README.md").write_text("# Test Repository\n")
    (repo_path / ".gitignore").write_text(".env\n.venv/\n")
    repo.index.add(["README.md", ".gitignore"])
    repo.index.commit("Initial commit")

    try:
        repo.git.branch("-M", "main")
    except git.exc.GitCommandError:
        pass

    yield repo

    repo.close()


@pytest.fixture
def repo_path(git_repo):
    """Working directory of the git_repo fixture."""
    return Path(git_repo.working_dir)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def registry(temp_dir):
    """Registry isolated from the user's real state."""
    return RepositoryRegistry(temp_dir / "config")


@pytest.fixture
def console():
    """Console writing into a buffer, without colours or wrapping."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def make_selector(console):
    """Build a numbered-prompt selector that reads the given answers."""

    def _make(*answers: str, runner=None) -> SelectionService:
        stdin = io.StringIO("".join(f"{answer}\n" for answer in answers))
        return SelectionService(console=console, stdin=stdin, runner=runner, picker=None)

    return _make


@pytest.fixture
def make_manager(registry, console, make_selector):
    """Build a WorktreeManager around the real git binary.

    The returned manager has its stdout buffer available as ``manager.stdout``.
    """

    def _make(cwd, *answers: str, runner=None) -> WorktreeManager:
        return WorktreeManager(
            cwd=cwd,
            registry=registry,
            selector=make_selector(*answers),
            runner=runner,
            console=console,
            stdout=io.StringIO(),
        )

    return _make
