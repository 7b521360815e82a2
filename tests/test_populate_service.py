"""Tests for populating new worktrees"""
import os

import pytest

from wtt.config import RepoConfig
from wtt.services.populate_service import PopulateService


@pytest.fixture
def source(temp_dir):
    """A main working directory with untracked files to carry over."""
    root = temp_dir / "main"
    root.mkdir()
    (root / ".env").write_text("SECRET=1\n")
    (root / "config").mkdir()
    (root / "config" / "local.yml").write_text("debug: true\n")
    venv = root / ".venv" / "bin"
    venv.mkdir(parents=True)
    tool = venv / "tool"
    tool.write_text("#!/bin/sh\n")
    tool.chmod(0o755)
    (root / ".claude").mkdir()
    (root / ".claude" / "settings.local.json").write_text("{}\n")
    return root


@pytest.fixture
def dest(temp_dir):
    path = temp_dir / "worktree"
    path.mkdir()
    return path


class TestCopyFiles:
    """Test copying individual files."""

    def test_copies_nested_file(self, source, dest):
        report = PopulateService(source).copy_files(dest, [".env", "config/local.yml"])

        assert report.ok
        assert report.completed == [".env", "config/local.yml"]
        assert (dest / ".env").read_text() == "SECRET=1\n"
        assert (dest / "config" / "local.yml").read_text() == "debug: true\n"

    def test_missing_source_skipped_silently(self, source, dest):
        report = PopulateService(source).copy_files(dest, [".env.local", ".env"])

        assert report.ok
        assert report.completed == [".env"]
        assert not (dest / ".env.local").exists()

    def test_failure_is_advisory(self, source, dest):
        """A directory named like a file is reported and the rest continues."""
        report = PopulateService(source).copy_files(dest, ["config", ".env"])

        assert [a.target for a in report.advisories] == ["config"]
        assert report.advisories[0].step == "copy_files"
        assert (dest / ".env").exists()


class TestCopyDirs:
    """Test copying directory trees."""

    def test_copies_tree_with_modes(self, source, dest):
        report = PopulateService(source).copy_dirs(dest, [".venv"])

        tool = dest / ".venv" / "bin" / "tool"
        assert report.completed == [".venv"]
        assert tool.read_text() == "#!/bin/sh\n"
        assert os.access(tool, os.X_OK)

    def test_merges_into_existing_directory(self, source, dest):
        (dest / ".venv").mkdir()
        (dest / ".venv" / "keep").write_text("x")

        report = PopulateService(source).copy_dirs(dest, [".venv"])

        assert report.ok
        assert (dest / ".venv" / "keep").exists()
        assert (dest / ".venv" / "bin" / "tool").exists()

    def test_missing_dir_skipped(self, source, dest):
        assert PopulateService(source).copy_dirs(dest, ["node_modules"]).completed == []


class TestSymlinkFiles:
    """Test linking files back to the main working directory."""

    def test_links_to_absolute_source(self, source, dest):
        report = PopulateService(source).symlink_files(dest, [".claude/settings.local.json"])

        link = dest / ".claude" / "settings.local.json"
        assert report.ok
        assert link.is_symlink()
        assert os.path.isabs(os.readlink(link))
        assert link.resolve() == (source / ".claude" / "settings.local.json").resolve()

    def test_existing_target_is_advisory(self, source, dest):
        (dest / ".env").write_text("OTHER=1\n")

        report = PopulateService(source).symlink_files(dest, [".env"])

        assert len(report.advisories) == 1
        assert "already exists" in report.advisories[0].message
        assert (dest / ".env").read_text() == "OTHER=1\n"

    def test_missing_source_skipped(self, source, dest):
        report = PopulateService(source).symlink_files(dest, ["missing.json"])
        assert report.ok
        assert not (dest / "missing.json").exists()


class TestPostCreate:
    """Test running setup commands."""

    def test_runs_in_worktree_through_shell(self, source, dest, fake_runner):
        report = PopulateService(source, fake_runner).run_post_create(dest, ["make setup"])

        call = fake_runner.calls[0]
        assert call.args == ["sh", "-c", "make setup"]
        assert call.cwd == str(dest)
        assert call.capture_stdout is False
        assert report.completed == ["make setup"]

    def test_failure_does_not_stop_the_rest(self, source, dest, fake_runner):
        fake_runner.respond("false", returncode=1)

        report = PopulateService(source, fake_runner).run_post_create(dest, ["false", "true"])

        assert [call.args[2] for call in fake_runner.calls] == ["false", "true"]
        assert report.completed == ["true"]
        assert str(report.advisories[0]) == "post_create: false: exited with status 1"

    def test_real_shell_command(self, source, dest):
        report = PopulateService(source).run_post_create(dest, ["touch marker"])

        assert report.ok
        assert (dest / "marker").exists()


class TestPopulate:
    """Test the full sequence."""

    def test_all_steps(self, source, dest, fake_runner):
        config = RepoConfig(
            worktree_dir="../trees",
            copy_files=[".env"],
            copy_dirs=["config"],
            symlink_files=[".claude/settings.local.json"],
            post_create=["echo hi"],
        )

        report = PopulateService(source, fake_runner).populate(dest, config)

        assert report.ok
        assert report.completed == [".env", "config", ".claude/settings.local.json", "echo hi"]

    def test_advisories_collected_across_steps(self, source, dest, fake_runner):
        (dest / ".env").write_text("")
        fake_runner.respond("exit 3", returncode=3)
        config = RepoConfig(
            worktree_dir="../trees",
            copy_files=["config"],
            symlink_files=[".env"],
            post_create=["exit 3"],
        )

        report = PopulateService(source, fake_runner).populate(dest, config)

        assert [a.step for a in report.advisories] == ["copy_files", "symlink_files", "post_create"]
