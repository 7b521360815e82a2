"""Display columns for registered repositories."""

import os


def repo_name(path: str) -> str:
    """Base name of a repository path."""
    return os.path.basename(os.path.normpath(path))


def repo_columns(path: str) -> tuple[str, str]:
    """Picker columns for a repository: name, path."""
    return repo_name(path), path
