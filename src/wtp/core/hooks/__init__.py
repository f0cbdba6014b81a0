"""
Lifecycle hook execution for worktrees.

Hooks are configured per phase in .wtp.yml and come in two types: copy hooks
move files between the repository and a worktree, command hooks run shell
commands with output streamed live to the caller.

Key Classes:
    HookExecutor: Runs a phase's hooks in order
    SynchronizedWriter: Lock-guarded sink shared by concurrent stream readers
    FlushingWriter: Sink wrapper that flushes after every write

Usage:
    from wtp.core.hooks import HookExecutor, HookExecutionError

    executor = HookExecutor(config, repo_root)
    try:
        executor.execute_post_create_hooks(sink, worktree_path)
    except HookExecutionError as e:
        print(f"Hook {e.index} failed: {e.cause}")
"""

from wtp.core.hooks.errors import (
    CommandHookError,
    CopyHookError,
    HookConfigurationError,
    HookError,
    HookExecutionError,
    PathEscapeError,
)
from wtp.core.hooks.executor import HookExecutor, Phase, PhasePaths
from wtp.core.hooks.paths import ensure_within_base, resolve_hook_path
from wtp.core.hooks.sink import FlushingWriter, SynchronizedWriter

__all__ = [
    "HookExecutor",
    "Phase",
    "PhasePaths",
    "FlushingWriter",
    "SynchronizedWriter",
    "ensure_within_base",
    "resolve_hook_path",
    "HookError",
    "HookConfigurationError",
    "HookExecutionError",
    "PathEscapeError",
    "CopyHookError",
    "CommandHookError",
]
