"""
wtp CLI - Add command.

Create a worktree and run the post-create hooks from .wtp.yml.
"""

import typer
from rich.console import Console

from wtp.cli.common import open_manager, stdout_sink
from wtp.cli.errors import ExitCode, print_error, print_warning
from wtp.core.config.models import Hook, HookType
from wtp.core.hooks import HookError, HookExecutor
from wtp.core.hooks.command_hook import run_command_hook
from wtp.core.worktree.manager import WorktreeError

console = Console()


def add(
    branch: str | None = typer.Argument(
        None,
        help="Existing branch to check out, or the start point when --branch is used",
    ),
    new_branch: str | None = typer.Option(
        None,
        "--branch",
        "-b",
        help="Create a new branch",
    ),
    exec_command: str | None = typer.Option(
        None,
        "--exec",
        help="Execute command in newly created worktree after hooks",
    ),
) -> None:
    """
    Create a new worktree.

    Creates a worktree under the configured base directory, then runs the
    post-create hooks. A failing hook is reported as a warning; the worktree
    is kept.

    Examples:
        wtp add feature/auth                     # Worktree for an existing branch
        wtp add -b new-feature                   # Create new branch and worktree
        wtp add -b hotfix/urgent main            # New branch starting at main
        wtp add -b feature/x --exec "npm test"   # Run a command afterwards
    """
    if not new_branch and not branch:
        print_error(
            "Branch name is required",
            solution="wtp add <existing-branch>  # or wtp add -b <new-branch> [<commit>]",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    manager = open_manager()

    try:
        if new_branch:
            worktree = manager.create(new_branch, create_branch=True, start_point=branch)
        else:
            assert branch is not None
            worktree = manager.create(branch)
    except WorktreeError as e:
        print_error(str(e), solution="git branch -a  # check the branch name")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    branch_name = worktree.branch_name or ""

    if manager.config.has_post_create_hooks():
        console.print("\nExecuting post-create hooks...")
        executor = HookExecutor(manager.config, manager.repo_root)
        try:
            executor.execute_post_create_hooks(stdout_sink(), worktree.path)
            console.print("[green]✓[/green] All hooks executed successfully")
        except HookError as e:
            print_warning(f"Hook execution failed: {e}")

    if exec_command and exec_command.strip():
        console.print(f"\nExecuting --exec command: {exec_command}", markup=False)
        hook = Hook(type=HookType.COMMAND, command=exec_command)
        try:
            run_command_hook(stdout_sink(), hook, worktree.path, manager.repo_root)
        except HookError as e:
            print_error(
                f"worktree was created at '{worktree.path}', but --exec command failed: {e}"
            )
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print("\n[green]✓[/green] Worktree created successfully!")
    console.print(f"  Path:   [cyan]{worktree.path}[/cyan]")
    console.print(f"  Branch: [cyan]{branch_name}[/cyan]")
    console.print(f"  Commit: [blue]{worktree.commit[:7]}[/blue]")
