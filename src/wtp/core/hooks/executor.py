"""
Hook executor for worktree lifecycle phases.

Runs the configured hook list for a phase strictly in declaration order,
dispatching each entry to the copy or command runner. Relative paths resolve
against phase-specific bases:

- post-create: copy from repository root to the new worktree, commands in the worktree
- pre-remove: copy from the worktree to the repository root, commands in the worktree
- post-remove: copy from repository root to the worktree path, commands in the
  worktree path, or the repository root once that directory is gone

The first failing hook stops the phase. Output written before the failure
stays in the sink; hooks after it never run.

Usage:
    from wtp.core.hooks import HookExecutor

    executor = HookExecutor(config, repo_root)
    executor.execute_post_create_hooks(sys.stdout.buffer, worktree_path)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from wtp.core.config.models import Hook, HookType, WtpConfig
from wtp.core.hooks.command_hook import run_command_hook
from wtp.core.hooks.copy_hook import run_copy_hook
from wtp.core.hooks.errors import HookConfigurationError, HookExecutionError
from wtp.core.hooks.sink import Sink, write_line

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Worktree lifecycle phase."""

    POST_CREATE = "post-create"
    PRE_REMOVE = "pre-remove"
    POST_REMOVE = "post-remove"


@dataclass(frozen=True)
class PhasePaths:
    """
    Base directories for one phase invocation.

    Attributes:
        source_base: Base for relative copy ``from`` values
        destination_base: Base for relative copy ``to`` values
        command_base: Default working directory for commands
        command_fallback: Working directory used when command_base no longer exists
    """

    source_base: Path
    destination_base: Path
    command_base: Path
    command_fallback: Path | None = None

    @classmethod
    def for_phase(cls, phase: Phase, repo_root: Path, worktree_path: Path) -> "PhasePaths":
        if phase == Phase.PRE_REMOVE:
            return cls(worktree_path, repo_root, worktree_path)
        if phase == Phase.POST_REMOVE:
            return cls(repo_root, worktree_path, worktree_path, command_fallback=repo_root)
        return cls(repo_root, worktree_path, worktree_path)


class HookExecutor:
    """
    Executes lifecycle hooks for a repository.

    Attributes:
        config: Loaded configuration (None means no hooks)
        repo_root: Main repository root
    """

    def __init__(self, config: WtpConfig | None, repo_root: str | Path):
        self.config = config
        self.repo_root = Path(repo_root)

    def execute_post_create_hooks(self, sink: Sink, worktree_path: str | Path) -> None:
        """Run post-create hooks after a worktree has been created."""
        hooks = self.config.hooks.post_create if self.config else []
        self._execute_phase(sink, Phase.POST_CREATE, hooks, Path(worktree_path))

    def execute_pre_remove_hooks(self, sink: Sink, worktree_path: str | Path) -> None:
        """Run pre-remove hooks while the worktree still exists."""
        hooks = self.config.hooks.pre_remove if self.config else []
        self._execute_phase(sink, Phase.PRE_REMOVE, hooks, Path(worktree_path))

    def execute_post_remove_hooks(self, sink: Sink, worktree_path: str | Path) -> None:
        """Run post-remove hooks; the worktree directory is already gone."""
        hooks = self.config.hooks.post_remove if self.config else []
        self._execute_phase(sink, Phase.POST_REMOVE, hooks, Path(worktree_path))

    def _execute_phase(
        self,
        sink: Sink,
        phase: Phase,
        hooks: list[Hook],
        worktree_path: Path,
    ) -> None:
        if not hooks:
            return

        paths = PhasePaths.for_phase(phase, self.repo_root, worktree_path)
        self.execute_hooks(sink, hooks, paths)

    def execute_hooks(self, sink: Sink, hooks: list[Hook], paths: PhasePaths) -> None:
        """
        Run hooks in order against the given base paths.

        Args:
            sink: Destination for progress lines and command output
            hooks: Ordered hook list
            paths: Base directories for this phase

        Raises:
            HookExecutionError: For the first hook that fails, with its 1-based index
        """
        total = len(hooks)
        logger.info("Running %d hook(s)", total)

        for index, hook in enumerate(hooks, start=1):
            write_line(sink, f"\n→ Running hook {index} of {total}...\n")

            try:
                self._execute_hook(sink, hook, paths)
            except Exception as e:
                hook_type = _type_name(hook)
                logger.debug("Hook %d (%s) failed: %s", index, hook_type, e)
                raise HookExecutionError(index, hook_type, e) from e

            write_line(sink, f"✓ Hook {index} completed\n")

    def _execute_hook(self, sink: Sink, hook: Hook, paths: PhasePaths) -> None:
        if hook.type == HookType.COPY:
            run_copy_hook(sink, hook, paths.source_base, paths.destination_base)
        elif hook.type == HookType.COMMAND:
            run_command_hook(
                sink,
                hook,
                paths.command_base,
                self.repo_root,
                cwd_fallback=paths.command_fallback,
            )
        else:
            raise HookConfigurationError(f"unknown hook type: {_type_name(hook)}")


def _type_name(hook: Hook) -> str:
    return hook.type.value if isinstance(hook.type, HookType) else str(hook.type)
