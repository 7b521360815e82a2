"""Tests for shell integration snippets and branch name generation"""
import random

import pytest

from wtt.exceptions import UnsupportedShellError
from wtt.shell import init_script
from wtt.utils.namegen import ADJECTIVES, NOUNS, generate_branch_name


class TestInitScript:
    """Test the snippets printed by --init."""

    @pytest.mark.parametrize("shell", ["zsh", "bash", "fish"])
    def test_wrapper_calls_binary(self, shell):
        script = init_script(shell)
        assert "command wtt-bin" in script
        assert "2>/dev/tty" in script
        assert "wtt-bin context" in script

    @pytest.mark.parametrize("shell", ["zsh", "bash"])
    def test_posix_wrapper_changes_directory(self, shell):
        script = init_script(shell)
        assert "wtt() {" in script
        assert 'cd "$output"' in script

    def test_fish_function(self):
        assert "function wtt" in init_script("fish")

    def test_unsupported_shell(self):
        with pytest.raises(UnsupportedShellError) as exc_info:
            init_script("tcsh")
        assert "tcsh" in str(exc_info.value)


class TestGenerateBranchName:
    """Test random branch names."""

    def test_format(self):
        name = generate_branch_name("myrepo", random.Random(7))
        repo, adjective, noun = name.split("-")
        assert repo == "myrepo"
        assert adjective in ADJECTIVES
        assert noun in NOUNS

    def test_deterministic_with_seed(self):
        assert generate_branch_name("x", random.Random(1)) == generate_branch_name("x", random.Random(1))

    def test_valid_words(self):
        """Words never contain separators that would change the path."""
        for word in ADJECTIVES + NOUNS:
            assert word.isalpha()
            assert word == word.lower()
