"""Command-line interface for wtt"""

import sys
from typing import List, Optional

from rich.console import Console

from wtt.__version__ import __version__
from wtt.cli.args import create_parser, parse_args
from wtt.core import WorktreeManager
from wtt.logging_config import setup_logging
from wtt.services.registry_service import default_config_dir
from wtt.shell import init_script

# Diagnostics only; stdout carries nothing but the result path
console = Console(stderr=True)


def run_command(parsed_args, manager: WorktreeManager) -> None:
    """Dispatch a parsed command to the manager."""
    command = parsed_args.command

    if command == "create":
        manager.create(parsed_args.branch, base=parsed_args.base, launch_companion=parsed_args.claude)
    elif command in ("list", "ls"):
        manager.select_worktree()
    elif command in ("remove", "rm"):
        manager.remove(parsed_args.branch, force=parsed_args.force)
    elif command == "context":
        manager.context()
    elif command == "repo":
        if parsed_args.repo_command == "list":
            manager.pick_repo()
        elif parsed_args.repo_command == "remove":
            manager.remove_repo(force=parsed_args.force)
        else:
            manager.switch_repo()
    elif command == "init":
        manager.init_config(force=parsed_args.force)
    elif command == "go":
        manager.jump(parsed_args.branch)
    else:
        raise ValueError(f"unknown command {command!r}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    try:
        setup_logging(
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
            log_dir=default_config_dir(),
        )

        if parsed_args.init:
            sys.stdout.write(init_script(parsed_args.init))
            return 0

        if parsed_args.command is None:
            create_parser().print_help()
            return 0

        if parsed_args.command == "version":
            sys.stdout.write(f"{__version__}\n")
            return 0

        run_command(parsed_args, WorktreeManager(console=console))
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 130
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True)
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
