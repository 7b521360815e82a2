"""File-backed registry of known repositories and the current repo pointer."""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from wtt.constants import CONFIG_DIR_ENV, CURRENT_REPO_FILE, LOCK_FILE, REPOS_FILE
from wtt.logging_config import get_logger
from wtt.models.outcome import Advisory

# Import fcntl for POSIX file locking (Unix/Linux/macOS)
try:
    import fcntl
    HAS_FCNTL = True
except ImportError:
    HAS_FCNTL = False

logger = get_logger(__name__)

PathLike = Union[str, Path]


def default_config_dir() -> Path:
    """Per-user state directory: $WTT_CONFIG_DIR, $XDG_CONFIG_HOME/wtt or ~/.config/wtt."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / "wtt"
    return Path.home() / ".config" / "wtt"


class RepositoryRegistry:
    """Known repository roots plus one "current repository" pointer.

    State lives in two flat files under config_dir: ``repos`` (one absolute
    path per line) and ``current_repo`` (a single path). Pass a temporary
    directory as config_dir to isolate tests from the user's real state.
    """

    def __init__(self, config_dir: Optional[PathLike] = None):
        """Initialize the registry.

        Args:
            config_dir: Directory holding the state files (defaults to default_config_dir())
        """
        self.config_dir = Path(config_dir) if config_dir is not None else default_config_dir()
        self.repos_file = self.config_dir / REPOS_FILE
        self.current_file = self.config_dir / CURRENT_REPO_FILE
        self.lock_file = self.config_dir / LOCK_FILE

    @contextmanager
    def _locked(self):
        """Hold an exclusive lock for a read-modify-write of the state files."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        if not HAS_FCNTL:
            logger.debug("File locking not available on this platform")
            yield
            return

        with open(self.lock_file, "a") as handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def _write_atomic(self, path: Path, text: str) -> None:
        """Write to a temp file, then rename over path."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        temp_file = path.with_suffix(".tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
            temp_file.replace(path)
        finally:
            if temp_file.exists():
                temp_file.unlink()

    def _read_repos(self) -> List[str]:
        if not self.repos_file.exists():
            return []
        lines = self.repos_file.read_text(encoding="utf-8").splitlines()
        return [line.strip() for line in lines if line.strip()]

    def _write_repos(self, repos: Iterable[str]) -> None:
        self._write_atomic(self.repos_file, "".join(f"{repo}\n" for repo in repos))

    def list(self) -> List[str]:
        """All registered repository paths, in registration order."""
        return self._read_repos()

    def register(self, path: PathLike) -> Optional[Advisory]:
        """Add path if not already present.

        Registration is a convenience index, so failures are returned as an
        Advisory instead of raised.
        """
        repo = str(path)
        try:
            with self._locked():
                repos = self._read_repos()
                if repo in repos:
                    return None
                repos.append(repo)
                self._write_repos(repos)
        except OSError as e:
            logger.debug(f"Could not register {repo}: {e}")
            return Advisory("register", repo, e.strerror or str(e))
        logger.debug(f"Registered {repo}")
        return None

    def remove(self, path: PathLike) -> bool:
        """Drop path from the registry. Returns True if it was present."""
        repo = str(path)
        with self._locked():
            repos = self._read_repos()
            if repo not in repos:
                return False
            self._write_repos(r for r in repos if r != repo)
        logger.debug(f"Removed {repo} from registry")
        return True

    def get_current(self) -> Optional[str]:
        """The current repository, or None when unset."""
        if not self.current_file.exists():
            return None
        value = self.current_file.read_text(encoding="utf-8").strip()
        return value or None

    def set_current(self, path: PathLike) -> None:
        with self._locked():
            self._write_atomic(self.current_file, f"{path}\n")
        logger.debug(f"Current repository set to {path}")

    def clear_current(self) -> None:
        with self._locked():
            try:
                self.current_file.unlink()
            except FileNotFoundError:
                pass
        logger.debug("Current repository cleared")

    def canonicalize(self, resolve: Callable[[str], Optional[PathLike]]) -> List[str]:
        """Resolve every entry to its main working directory and deduplicate.

        Entries that no longer resolve (deleted, or no longer a repository)
        are dropped. First-seen order is kept. The file is rewritten only
        when the result differs from what was stored.

        Args:
            resolve: Maps a stored path to its main repository root, or None

        Returns:
            The canonical list
        """
        with self._locked():
            repos = self._read_repos()
            canonical: List[str] = []
            for repo in repos:
                main = resolve(repo)
                if main is None:
                    logger.debug(f"Dropping stale registry entry {repo}")
                    continue
                main = str(main)
                if main not in canonical:
                    canonical.append(main)
            if canonical != repos:
                self._write_repos(canonical)
                logger.info(f"Registry cleaned up: {len(repos)} -> {len(canonical)} entries")
        return canonical
