"""Per-repository configuration (.wtt.toml) for wtt"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from wtt.constants import CONFIG_FILE_NAME, CONFIG_TEMPLATE, DEFAULT_COPY_FILES
from wtt.exceptions import ConfigParseError
from wtt.logging_config import get_logger

logger = get_logger(__name__)

LIST_FIELDS = ("copy_files", "copy_dirs", "symlink_files", "post_create")


@dataclass
class RepoConfig:
    """Effective settings for one repository."""

    worktree_dir: str
    copy_files: List[str] = field(default_factory=lambda: list(DEFAULT_COPY_FILES))
    copy_dirs: List[str] = field(default_factory=list)
    symlink_files: List[str] = field(default_factory=list)
    post_create: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktree_dir()
        for name in LIST_FIELDS:
            self._validate_string_list(name)

    def _validate_worktree_dir(self):
        """Validate worktree_dir is a non-empty string."""
        if not isinstance(self.worktree_dir, str) or not self.worktree_dir.strip():
            raise ValueError("worktree_dir must be a non-empty string")

    def _validate_string_list(self, name: str):
        """Validate a list field holds only strings."""
        value = getattr(self, name)
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"{name} must be a list of strings")

    @classmethod
    def defaults(cls, repo_name: str) -> "RepoConfig":
        """Built-in settings used when no override file exists."""
        return cls(worktree_dir=f"../{repo_name}-worktrees")

    def merged_with(self, overrides: dict) -> "RepoConfig":
        """Return a copy where every non-empty override replaces the default.

        Lists are replaced whole, never merged element-wise.
        """
        values = {
            "worktree_dir": self.worktree_dir,
            "copy_files": list(self.copy_files),
            "copy_dirs": list(self.copy_dirs),
            "symlink_files": list(self.symlink_files),
            "post_create": list(self.post_create),
        }
        for key in values:
            if overrides.get(key):
                values[key] = overrides[key]
        return RepoConfig(**values)

    def worktree_base(self, repo_root: Union[str, Path]) -> Path:
        """Absolute directory new worktrees are created under."""
        base = os.path.expanduser(self.worktree_dir)
        if not os.path.isabs(base):
            base = os.path.join(str(repo_root), base)
        return Path(os.path.normpath(base))

    def to_dict(self) -> dict:
        return {
            "worktree_dir": self.worktree_dir,
            "copy_files": self.copy_files,
            "copy_dirs": self.copy_dirs,
            "symlink_files": self.symlink_files,
            "post_create": self.post_create,
        }


def config_path(repo_root: Union[str, Path]) -> Path:
    return Path(repo_root) / CONFIG_FILE_NAME


def load_repo_config(repo_root: Union[str, Path], repo_name: str) -> RepoConfig:
    """Load .wtt.toml from repo_root and merge it over the defaults.

    Args:
        repo_root: Repository root directory
        repo_name: Base name of the repository, used for the default worktree_dir

    Returns:
        The effective RepoConfig

    Raises:
        ConfigParseError: If the file exists but is not valid TOML or has
            fields of the wrong type
    """
    cfg = RepoConfig.defaults(repo_name)
    path = config_path(repo_root)
    if not path.exists():
        logger.debug(f"No {CONFIG_FILE_NAME} in {repo_root}, using defaults")
        return cfg

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(str(path), str(e)) from e
    except OSError as e:
        raise ConfigParseError(str(path), e.strerror or str(e)) from e

    _check_types(str(path), data)
    merged = cfg.merged_with(data)
    logger.debug(f"Loaded {path}: {merged.to_dict()}")
    return merged


def _check_types(path: str, data: dict) -> None:
    worktree_dir = data.get("worktree_dir")
    if worktree_dir is not None and not isinstance(worktree_dir, str):
        raise ConfigParseError(path, "worktree_dir must be a string")
    for name in LIST_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ConfigParseError(path, f"{name} must be a list of strings")


def write_config_template(repo_root: Union[str, Path], force: bool = False) -> bool:
    """Scaffold .wtt.toml in repo_root.

    Returns:
        True if the file was written, False if it already existed
    """
    path = config_path(repo_root)
    if path.exists() and not force:
        return False
    path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    logger.info(f"Wrote {path}")
    return True
