"""
wtp CLI - Remove command.

Remove a worktree, running pre-remove hooks before and post-remove hooks after.
"""

import os
from pathlib import Path

import typer
from rich.console import Console

from wtp.cli.common import open_manager, stdout_sink
from wtp.cli.errors import ExitCode, print_error, print_warning
from wtp.core.hooks import HookError, HookExecutor
from wtp.core.worktree.manager import WorktreeError

console = Console()


def is_path_within(target: Path, path: Path) -> bool:
    """Return True if path is target or lies inside it."""
    rel = os.path.relpath(os.path.realpath(path), os.path.realpath(target))
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)


def remove(
    name: str = typer.Argument(..., help="Worktree name, branch, or directory name"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Force removal even if worktree is dirty",
    ),
    with_branch: bool = typer.Option(
        False,
        "--with-branch",
        help="Also remove the branch after removing worktree",
    ),
    force_branch: bool = typer.Option(
        False,
        "--force-branch",
        help="Force branch deletion even if not merged (requires --with-branch)",
    ),
) -> None:
    """
    Remove a worktree.

    Pre-remove hooks run first while the worktree still exists; if one fails
    the worktree is left in place. Post-remove hooks run after removal and
    only warn on failure.

    Examples:
        wtp remove feature-old                  # Remove worktree
        wtp remove -f feature-dirty             # Force remove dirty worktree
        wtp remove --with-branch feature-done   # Also delete the branch
    """
    if force_branch and not with_branch:
        print_error(
            "--force-branch requires --with-branch",
            solution=f"wtp remove --with-branch --force-branch {name}",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    manager = open_manager()

    try:
        worktree = manager.find(name)
    except WorktreeError as e:
        print_error(str(e), solution="wtp list  # see all worktrees")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if worktree.is_main:
        print_error("Cannot remove the main worktree")
        raise typer.Exit(ExitCode.USER_ERROR)

    if is_path_within(worktree.path, Path.cwd()):
        print_error(
            f"Cannot remove worktree '{name}' while you are inside it",
            reason=f"Current directory is within {worktree.path}",
            solution="cd to the main worktree first",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    executor = HookExecutor(manager.config, manager.repo_root)

    if manager.config.has_pre_remove_hooks():
        console.print("\nExecuting pre-remove hooks...")
        try:
            executor.execute_pre_remove_hooks(stdout_sink(), worktree.path)
        except HookError as e:
            print_error(
                f"Pre-remove hook failed: {e}",
                reason="The worktree was not removed",
            )
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        console.print("[green]✓[/green] All hooks executed successfully")

    try:
        manager.remove(worktree.path, force=force)
    except WorktreeError as e:
        print_error(str(e), solution=f"wtp remove --force {name}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print(f"Removed worktree '{name}' at {worktree.path}", markup=False)

    branch_name = worktree.branch_name
    branch_error: WorktreeError | None = None
    if with_branch and branch_name:
        try:
            manager.delete_branch(branch_name, force=force_branch)
            console.print(f"Removed branch '{branch_name}'", markup=False)
        except WorktreeError as e:
            # The worktree is gone either way; post-remove hooks still run
            branch_error = e
            print_error(str(e), solution=f"git branch -D {branch_name}")

    if manager.config.has_post_remove_hooks():
        console.print("\nExecuting post-remove hooks...")
        try:
            executor.execute_post_remove_hooks(stdout_sink(), worktree.path)
            console.print("[green]✓[/green] All hooks executed successfully")
        except HookError as e:
            print_warning(f"Hook execution failed: {e}")

    if branch_error is not None:
        raise typer.Exit(ExitCode.GENERAL_ERROR)
