"""Command execution for wtt.

Every external program wtt talks to (git, the fzf picker, post-create shell
commands, the companion tool) is reached through a runner exposing
``run(args, cwd, stdin) -> CommandResult``. Services take a runner in their
constructor so tests can pass a fake one.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

import git

from wtt.exceptions import GitNotFoundError
from wtt.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

_STDERR_FD = 2


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of one command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, for error messages."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


class CommandRunner(Protocol):
    """Anything that can run an external command."""

    def run(
        self,
        args: Sequence[str],
        cwd: Optional[PathLike] = None,
        stdin: Optional[str] = None,
        *,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        attach_tty: bool = False,
    ) -> CommandResult:
        ...


class SubprocessRunner:
    """Run commands with subprocess (no shell, argument lists only).

    Uncaptured stdout goes to our stderr: stdout is reserved for the single
    path the shell wrapper reads. Uncaptured stderr is inherited.
    """

    def run(
        self,
        args: Sequence[str],
        cwd: Optional[PathLike] = None,
        stdin: Optional[str] = None,
        *,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        attach_tty: bool = False,
    ) -> CommandResult:
        cmd = list(args)
        logger.debug(f"Running {cmd} in {cwd or '.'}")

        if attach_tty:
            return self._run_attached(cmd, cwd)

        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            input=stdin,
            stdout=subprocess.PIPE if capture_stdout else _STDERR_FD,
            stderr=subprocess.PIPE if capture_stderr else None,
            text=True,
            check=False,
        )
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    @staticmethod
    def _run_attached(cmd: list[str], cwd: Optional[PathLike]) -> CommandResult:
        """Run an interactive program on the controlling terminal."""
        with open("/dev/tty", "r+") as tty:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                stdin=tty,
                stdout=tty,
                stderr=tty,
                check=False,
            )
        return CommandResult(returncode=result.returncode)


class GitRunner:
    """Run git commands through GitPython.

    Only ``git`` commands are accepted; output is always captured and
    nothing is fed on stdin.
    """

    def run(
        self,
        args: Sequence[str],
        cwd: Optional[PathLike] = None,
        stdin: Optional[str] = None,
        *,
        capture_stdout: bool = True,
        capture_stderr: bool = True,
        attach_tty: bool = False,
    ) -> CommandResult:
        cmd = list(args)
        if not cmd or cmd[0] != "git":
            raise ValueError(f"GitRunner only runs git commands, got {cmd!r}")
        if stdin is not None or attach_tty:
            raise ValueError("GitRunner does not support stdin or terminal attachment")

        logger.debug(f"Running {cmd} in {cwd or '.'}")
        try:
            status, stdout, stderr = git.Git(str(cwd) if cwd else None).execute(
                cmd,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise GitNotFoundError(str(e)) from e

        if status != 0:
            logger.debug(f"git exited with {status}: {stderr}")
        return CommandResult(returncode=status, stdout=stdout, stderr=stderr)
