"""
Git worktree management for wtp.

Example:
    >>> from wtp.core.worktree import WorktreeManager
    >>> manager = WorktreeManager()
    >>> for worktree in manager.list():
    ...     print(worktree.path)
"""

from .manager import (
    Worktree,
    WorktreeError,
    WorktreeManager,
    WorktreeNotFoundError,
)

__all__ = [
    "WorktreeManager",
    "Worktree",
    "WorktreeError",
    "WorktreeNotFoundError",
]
