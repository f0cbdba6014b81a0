"""Helpers shared by CLI commands."""

import sys

import typer

from wtp.cli.errors import ExitCode, print_config_error, print_not_git_repo_error
from wtp.core.config.loader import ConfigError
from wtp.core.config.models import WtpConfig
from wtp.core.hooks.sink import FlushingWriter
from wtp.core.worktree.manager import WorktreeError, WorktreeManager


def stdout_sink() -> FlushingWriter:
    """Byte sink over the current stdout that flushes after every write."""
    sys.stdout.flush()
    return FlushingWriter(sys.stdout.buffer)


def open_manager(config: WtpConfig | None = None) -> WorktreeManager:
    """
    Create a WorktreeManager for the current directory.

    Raises:
        typer.Exit: If not in a git repository or .wtp.yml is invalid
    """
    try:
        return WorktreeManager(config=config)
    except ConfigError as e:
        print_config_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)
    except WorktreeError:
        print_not_git_repo_error()
        raise typer.Exit(ExitCode.GENERAL_ERROR)
