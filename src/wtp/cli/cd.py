"""
wtp CLI - Cd command.

Print the absolute path of a worktree. A process cannot change its parent
shell's directory, so the shell function from ``wtp hook`` captures this
output and runs ``cd`` itself.
"""

import sys

import typer

from wtp.cli.common import open_manager
from wtp.cli.errors import ExitCode, print_error
from wtp.core.worktree.manager import WorktreeError


def cd(
    name: str = typer.Argument(..., help="Worktree name, branch, '@' or 'root'"),
) -> None:
    """
    Output the absolute path to a worktree.

    Examples:
        cd "$(wtp cd feature/auth)"     # Without shell integration
        wtp cd feature/auth             # With eval "$(wtp hook bash)"
        wtp cd @                        # Back to the main worktree
    """
    manager = open_manager()

    try:
        worktree = manager.find(name)
    except WorktreeError as e:
        print_error(str(e), solution="wtp list  # see all worktrees")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    sys.stdout.write(f"{worktree.path}\n")
