"""Utility functions for wtt.

This package provides utility modules:
- process: the command runners every external program goes through
- namegen: random branch names
"""

from .process import CommandResult, CommandRunner, SubprocessRunner, GitRunner
from .namegen import generate_branch_name

__all__ = [
    # Process
    "CommandResult",
    "CommandRunner",
    "SubprocessRunner",
    "GitRunner",
    # Names
    "generate_branch_name",
]
