"""Command-line argument parsing for wtt."""

import argparse
import sys
from typing import List, Optional

from wtt.__version__ import __version__
from wtt.constants import SUPPORTED_SHELLS

COMMANDS = ("create", "list", "ls", "remove", "rm", "context", "repo", "init", "version", "go")

# Global options that consume the following token
_OPTIONS_WITH_VALUE = ("--init",)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wtt",
        description="Git worktree manager: create, remove and navigate worktrees",
        epilog="Shell setup: eval \"$(wtt-bin --init zsh)\" (or bash, fish). "
        "`wtt <branch>` jumps to the worktree of an existing branch.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"wtt {__version__}")
    parser.add_argument(
        "--init",
        metavar="SHELL",
        choices=SUPPORTED_SHELLS,
        help=f"Print the shell integration function ({', '.join(SUPPORTED_SHELLS)})",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = subparsers.add_parser("create", help="Create a new worktree")
    p.add_argument("branch", nargs="?", help="Branch name (random when omitted)")
    p.add_argument(
        "-b", "--base",
        help="Base commit/branch/ref to create the worktree from (default: HEAD)",
    )
    p.add_argument(
        "-c", "--claude", action="store_true", help="Start Claude Code in the new worktree"
    )

    subparsers.add_parser("list", aliases=["ls"], help="List and navigate worktrees")

    p = subparsers.add_parser("remove", aliases=["rm"], help="Remove a worktree")
    p.add_argument("branch", nargs="?", help="Branch whose worktree to remove (picker when omitted)")
    p.add_argument(
        "-f", "--force", action="store_true",
        help="Skip the confirmation and remove even with local changes",
    )

    subparsers.add_parser(
        "context",
        help="Print the active repo name (for prompts); inside a linked worktree "
        "this is the main repository's name",
    )

    p = subparsers.add_parser("repo", help="Select the active repository context")
    repo_sub = p.add_subparsers(dest="repo_command", metavar="ACTION")
    repo_sub.add_parser("list", help="Pick the active repository, or clear it")
    rp = repo_sub.add_parser("remove", help="Remove a repository from the known repos list")
    rp.add_argument("-f", "--force", action="store_true", help="Skip confirmation prompt")

    p = subparsers.add_parser("init", help="Create a .wtt.toml configuration file")
    p.add_argument("-f", "--force", action="store_true", help="Overwrite existing .wtt.toml")

    subparsers.add_parser("version", help="Print version")

    p = subparsers.add_parser("go", help="Print the worktree path of a branch")
    p.add_argument("branch", help="Branch name")

    return parser


def _with_branch_shortcut(argv: List[str]) -> List[str]:
    """Rewrite `wtt <branch>` to `wtt go <branch>`."""
    skip_next = False
    for i, token in enumerate(argv):
        if skip_next:
            skip_next = False
            continue
        if token == "--":
            return argv
        if token.startswith("-"):
            skip_next = token in _OPTIONS_WITH_VALUE
            continue
        if token in COMMANDS:
            return argv
        return argv[:i] + ["go"] + argv[i:]
    return argv


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    if argv is None:
        argv = sys.argv[1:]
    return create_parser().parse_args(_with_branch_shortcut(list(argv)))
