"""
wtp CLI - Exec command.

Run a program inside another worktree without changing directory.
"""

import logging
import subprocess

import typer

from wtp.cli.common import open_manager
from wtp.cli.errors import ExitCode, print_error
from wtp.core.worktree.manager import WorktreeError

logger = logging.getLogger(__name__)


def main(
    name: str = typer.Argument(..., help="Worktree name, branch, '@' or 'root'"),
    command: list[str] = typer.Argument(..., help="Command and its arguments"),
) -> None:
    """
    Execute a command in a worktree.

    The command runs with the worktree as its working directory and shares
    the terminal. wtp exits with the command's exit status.

    Examples:
        wtp exec feature/auth -- npm test
        wtp exec @ -- git status --short
    """
    # Options after the worktree name are not parsed, so '--' may arrive here
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print_error(
            "Command is required",
            solution="wtp exec <worktree> -- <command> [args...]",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    manager = open_manager()

    try:
        worktree = manager.find(name)
    except WorktreeError as e:
        print_error(str(e), solution="wtp list  # see all worktrees")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    logger.debug("Running %s in %s", command, worktree.path)
    try:
        result = subprocess.run(command, cwd=worktree.path)
    except OSError as e:
        print_error(f"command failed in worktree '{name}': {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if result.returncode > 0:
        raise typer.Exit(result.returncode)
    if result.returncode < 0:
        # Killed by a signal; report it the way a shell does
        raise typer.Exit(128 - result.returncode)
