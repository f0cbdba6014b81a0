"""
Standardized error handling and exit codes for the wtp CLI.

Errors are printed with an optional reason and a suggested next step.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for wtp CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Git, filesystem or hook failure."""

    USER_ERROR = 2
    """Invalid arguments or configuration (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_not_git_repo_error() -> None:
    """Print error when not in a git repository."""
    print_error(
        "Not in a git repository",
        reason="wtp manages worktrees of an existing git repository",
        solution="git init  # or cd to an existing repository",
    )


def print_config_error(error: Exception) -> None:
    """Print error when .wtp.yml is invalid."""
    print_error(
        str(error),
        reason="Hooks and defaults are read from .wtp.yml at the repository root",
        solution="Fix .wtp.yml, or run 'wtp init' in a fresh repository for a template",
    )
