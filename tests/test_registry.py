"""Tests for the repository registry"""
import multiprocessing

import pytest

from wtt.services.git import GitOperations
from wtt.services.registry_service import HAS_FCNTL, RepositoryRegistry, default_config_dir


def register_many(config_dir, worker, count):
    """Register count distinct paths from one process."""
    registry = RepositoryRegistry(config_dir)
    for i in range(count):
        advisory = registry.register(f"/src/worker{worker}/repo{i}")
        if advisory is not None:
            raise RuntimeError(str(advisory))


class TestDefaultConfigDir:
    """Test locating the per-user state directory."""

    def test_env_override(self, monkeypatch, temp_dir):
        monkeypatch.setenv("WTT_CONFIG_DIR", str(temp_dir / "state"))
        assert default_config_dir() == temp_dir / "state"

    def test_xdg_config_home(self, monkeypatch, temp_dir):
        monkeypatch.delenv("WTT_CONFIG_DIR", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir))
        assert default_config_dir() == temp_dir / "wtt"

    def test_home_fallback(self, monkeypatch, temp_dir):
        monkeypatch.delenv("WTT_CONFIG_DIR", raising=False)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(temp_dir))
        assert default_config_dir() == temp_dir / ".config" / "wtt"


class TestRegister:
    """Test adding and removing repositories."""

    def test_empty_registry(self, registry):
        """A registry with no state files is empty."""
        assert registry.list() == []
        assert registry.get_current() is None

    def test_register_keeps_order(self, registry):
        assert registry.register("/src/a") is None
        assert registry.register("/src/b") is None
        assert registry.list() == ["/src/a", "/src/b"]

    def test_register_is_idempotent(self, registry):
        """Registering twice stores the path once."""
        registry.register("/src/a")
        registry.register("/src/a")
        assert registry.list() == ["/src/a"]
        assert registry.repos_file.read_text() == "/src/a\n"

    def test_register_failure_is_advisory(self, temp_dir):
        """An unwritable state directory yields an Advisory, not an exception."""
        blocker = temp_dir / "not-a-dir"
        blocker.write_text("")
        registry = RepositoryRegistry(blocker / "config")

        advisory = registry.register("/src/a")

        assert advisory is not None
        assert advisory.step == "register"
        assert advisory.target == "/src/a"

    def test_remove(self, registry):
        registry.register("/src/a")
        registry.register("/src/b")

        assert registry.remove("/src/a") is True
        assert registry.remove("/src/missing") is False
        assert registry.list() == ["/src/b"]

    def test_blank_lines_ignored(self, registry):
        registry.config_dir.mkdir(parents=True)
        registry.repos_file.write_text("/src/a\n\n  \n/src/b\n")
        assert registry.list() == ["/src/a", "/src/b"]

    def test_no_temp_files_left(self, registry):
        registry.register("/src/a")
        registry.set_current("/src/a")
        assert not list(registry.config_dir.glob("*.tmp"))


class TestCurrentRepository:
    """Test the current repository pointer."""

    def test_set_and_get(self, registry):
        registry.set_current("/src/a")
        assert registry.get_current() == "/src/a"
        assert registry.current_file.read_text() == "/src/a\n"

    def test_set_replaces(self, registry):
        registry.set_current("/src/a")
        registry.set_current("/src/b")
        assert registry.get_current() == "/src/b"

    def test_clear(self, registry):
        registry.set_current("/src/a")
        registry.clear_current()
        assert registry.get_current() is None

    def test_clear_when_unset(self, registry):
        """Clearing an unset pointer is not an error."""
        registry.clear_current()
        assert registry.get_current() is None

    def test_empty_file_reads_as_unset(self, registry):
        registry.config_dir.mkdir(parents=True)
        registry.current_file.write_text("\n")
        assert registry.get_current() is None

    def test_independent_of_list(self, registry):
        """Setting the current repository does not register it."""
        registry.set_current("/src/a")
        assert registry.list() == []


class TestCanonicalize:
    """Test resolving entries to main repositories."""

    def test_collapses_and_drops(self, registry):
        """Worktree entries collapse onto their main repo, stale ones go."""
        for path in ("/src/a-worktrees/x", "/src/gone", "/src/a", "/src/b"):
            registry.register(path)
        mains = {"/src/a-worktrees/x": "/src/a", "/src/a": "/src/a", "/src/b": "/src/b"}

        result = registry.canonicalize(mains.get)

        assert result == ["/src/a", "/src/b"]
        assert registry.list() == ["/src/a", "/src/b"]

    def test_unchanged_list_not_rewritten(self, registry):
        registry.register("/src/a")
        before = registry.repos_file.stat().st_mtime_ns

        assert registry.canonicalize(lambda p: p) == ["/src/a"]
        assert registry.repos_file.stat().st_mtime_ns == before

    def test_current_pointer_untouched(self, registry):
        registry.register("/src/gone")
        registry.set_current("/src/gone")

        assert registry.canonicalize(lambda p: None) == []
        assert registry.get_current() == "/src/gone"

    def test_with_real_worktree(self, registry, git_repo, repo_path, temp_dir):
        """A registered linked worktree resolves to the main working directory."""
        worktree = temp_dir / "myrepo-worktrees" / "feature"
        git_repo.git.worktree("add", "-b", "feature", str(worktree))
        registry.register(worktree)
        registry.register(repo_path)
        registry.register(temp_dir / "nowhere")

        result = registry.canonicalize(GitOperations().main_repo_root_of)

        assert result == [str(repo_path)]


@pytest.mark.parametrize("count", [1, 20])
def test_sequential_registrations(registry, count):
    """Many registrations through separate instances all land."""
    for i in range(count):
        RepositoryRegistry(registry.config_dir).register(f"/src/repo{i}")
    assert len(registry.list()) == count


@pytest.mark.skipif(not HAS_FCNTL, reason="registry locking needs fcntl")
def test_concurrent_registrations(registry):
    """Processes registering at the same time never lose each other's entries."""
    workers, per_worker = 8, 25
    ctx = multiprocessing.get_context("fork")
    processes = [
        ctx.Process(target=register_many, args=(str(registry.config_dir), worker, per_worker))
        for worker in range(workers)
    ]
    for process in processes:
        process.start()
    for process in processes:
        process.join(timeout=60)

    assert [process.exitcode for process in processes] == [0] * workers
    entries = registry.list()
    assert len(entries) == workers * per_worker
    assert len(set(entries)) == workers * per_worker
    assert set(entries) == {
        f"/src/worker{w}/repo{i}" for w in range(workers) for i in range(per_worker)
    }
