"""
Init command implementation for wtp.

Writes a commented .wtp.yml template at the repository root.
"""

import logging

import typer
from rich.console import Console

from wtp.cli.common import open_manager
from wtp.cli.errors import ExitCode, print_error
from wtp.core.config.loader import ConfigError, write_default_config
from wtp.core.config.models import WtpConfig

console = Console()
logger = logging.getLogger(__name__)


def main() -> None:
    """
    Create a .wtp.yml configuration file.

    The template documents every hook phase with commented examples. An
    existing file is never overwritten.
    """
    # Skip loading .wtp.yml; it may not exist yet or may be broken
    manager = open_manager(config=WtpConfig())

    try:
        config_path = write_default_config(manager.repo_root)
    except ConfigError as e:
        print_error(str(e), solution="Edit the existing file instead")
        raise typer.Exit(ExitCode.USER_ERROR)

    logger.debug("Wrote %s", config_path)
    console.print(f"[green]✓[/green] Created configuration file: {config_path}")
    console.print("  Edit it to add post_create, pre_remove and post_remove hooks.")
