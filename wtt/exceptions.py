"""Custom exceptions for wtt"""

from typing import Optional


class WttError(Exception):
    """Base exception for all wtt errors."""
    pass


class NotInRepositoryError(WttError):
    """Exception raised when no repository can be resolved."""

    def __init__(self):
        super().__init__(
            "not inside a git repository (run 'wtt repo' to set a repo context)"
        )


class ConfigParseError(WttError):
    """Exception raised when a .wtt.toml file is not well-formed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"parsing {path}: {detail}")


class InvalidBranchNameError(WttError):
    """Exception raised when git rejects a branch name."""

    def __init__(self, branch: str):
        self.branch = branch
        if branch:
            super().__init__(f"invalid branch name {branch!r}")
        else:
            super().__init__("branch name cannot be empty")


class GitNotFoundError(WttError):
    """Exception raised when the git executable cannot be run."""

    def __init__(self, message: Optional[str] = None):
        error_msg = "git executable not found"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class GitOperationError(WttError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"git {operation} failed"
        if message:
            error_msg += f":\n{message}"

        super().__init__(error_msg)


class WorktreeCreateError(GitOperationError):
    """Exception raised when `git worktree add` fails."""

    def __init__(self, branch: str, output: Optional[str] = None):
        self.branch = branch
        super().__init__("worktree add", output)


class WorktreeRemoveError(GitOperationError):
    """Exception raised when `git worktree remove` fails."""

    def __init__(self, path: str, output: Optional[str] = None):
        self.path = path
        super().__init__("worktree remove", output)


class WorktreeNotFoundError(WttError):
    """Exception raised when no worktree is checked out for a branch."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"no worktree found for branch {branch!r}")


class PickerError(WttError):
    """Exception raised when the picker fails or returns something unusable."""
    pass


class NoCandidatesError(WttError):
    """Exception raised when there is nothing to choose from."""
    pass


class UnsupportedShellError(WttError):
    """Exception raised for shells without an integration snippet."""

    def __init__(self, shell: str, supported: tuple):
        self.shell = shell
        super().__init__(
            f"unsupported shell {shell!r}; supported: {', '.join(supported)}"
        )
