"""
wtp CLI - List command.

Show all worktrees of the repository.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wtp.cli.common import open_manager
from wtp.cli.errors import ExitCode, print_error
from wtp.cli.remove import is_path_within
from wtp.core.worktree.manager import WorktreeError

console = Console()


def list_worktrees(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show full paths and lock status",
    ),
) -> None:
    """
    Show all worktrees in the repository.

    The main worktree is shown as '@'; the current worktree is marked with '*'.

    Examples:
        wtp list              # Show all worktrees
        wtp list --verbose    # Include paths and lock status
    """
    manager = open_manager()

    try:
        worktrees = [w for w in manager.list() if not w.is_bare]
    except WorktreeError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not worktrees:
        console.print("[yellow]No worktrees found[/yellow]")
        return

    cwd = Path.cwd()
    # The innermost worktree containing cwd is the current one
    current = max(
        (w for w in worktrees if is_path_within(w.path, cwd)),
        key=lambda w: len(str(w.path)),
        default=None,
    )

    table = Table(title="Git Worktrees")
    table.add_column("Name", style="cyan")
    table.add_column("Branch", style="green")
    table.add_column("Commit", style="blue")
    if verbose:
        table.add_column("Path")
        table.add_column("Locked", style="red")

    for wt in worktrees:
        name = escape(manager.display_name(wt))
        if wt is current:
            name += "*"
        branch = escape(wt.branch_name) if wt.branch_name else "[dim]detached[/dim]"
        commit = wt.commit[:7] if wt.commit else "unknown"

        if verbose:
            locked_status = "locked" if wt.is_locked else ""
            table.add_row(name, branch, commit, escape(str(wt.path)), locked_status)
        else:
            table.add_row(name, branch, commit)

    console.print(table)
