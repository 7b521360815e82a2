"""Shared constants for wtt."""

from typing import List

# Per-repository override file, looked up at the repository root
CONFIG_FILE_NAME = ".wtt.toml"
DEFAULT_COPY_FILES: List[str] = [".gitignore"]

# Per-user state
CONFIG_DIR_ENV = "WTT_CONFIG_DIR"
REPOS_FILE = "repos"
CURRENT_REPO_FILE = "current_repo"
LOCK_FILE = ".lock"
LOG_FILE = "wtt.log"

# Picker
PICKER_COMMAND = "fzf"
PICKER_CANCEL_EXIT_CODE = 130  # fzf exits with 130 on ctrl-c / esc
SENTINEL_INDEX = -1

# Labels
DETACHED_LABEL = "(detached)"
NONE_LABEL = "(none)"
BRANCH_REF_PREFIX = "refs/heads/"

# Branch name to directory name
PATH_SEPARATORS = ("/", "\\")
PATH_SEPARATOR_SUBSTITUTE = "-"

# Companion tool launched by `create --claude`
COMPANION_COMMAND: List[str] = ["claude"]

SUPPORTED_SHELLS = ("zsh", "bash", "fish")

# Scaffolded by `wtt init`
CONFIG_TEMPLATE = """# wtt configuration

# Directory for worktrees (relative to repo root)
# worktree_dir = "../<reponame>-worktrees"

# Files to copy into new worktrees
copy_files = [".env", ".gitignore"]

# Directories to copy into new worktrees
# copy_dirs = []

# Files to symlink (shared with main repo) into new worktrees
symlink_files = [".claude/settings.local.json"]

# Commands to run after creating a worktree
# post_create = []
"""
