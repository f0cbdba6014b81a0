"""
wtp CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging

import typer
from rich.console import Console

from wtp import __version__
from wtp.cli import add, cd, exec_cmd, hook, init_cmd, list, remove

app = typer.Typer(
    name="wtp",
    help="Git worktree management with lifecycle hooks",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    wtp - Worktree Plus.

    Creates and removes git worktrees and runs the hooks configured in
    .wtp.yml: copy files such as .env into new worktrees and run setup
    commands, with their output streamed as it happens.

    Quick Start:
        1. wtp init                  # Write .wtp.yml
        2. wtp add -b feature/x      # New branch + worktree + hooks
        3. wtp remove feature/x      # Remove it again

    Shell integration (wtp cd changes directory):
        eval "$(wtp hook bash)"
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    ctx.obj = {"debug": debug}


app.command(name="init")(init_cmd.main)
app.command(name="add")(add.add)
app.command(name="remove")(remove.remove)
app.command(name="list")(list.list_worktrees)
app.command(name="cd")(cd.cd)
# Everything after the worktree name belongs to the command being run
app.command(name="exec", context_settings={"allow_interspersed_args": False})(exec_cmd.main)
app.command(name="hook")(hook.hook)


@app.command()
def version() -> None:
    """Show wtp version."""
    console.print(f"wtp version {__version__}")


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
