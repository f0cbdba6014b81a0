"""
Path resolution and containment checks for hook fields.

Relative `from`, `to` and `work_dir` values are resolved against a
phase-specific base directory and must stay inside it. Absolute values are
explicit overrides and are never checked.
"""

import os
from pathlib import Path

from wtp.core.hooks.errors import PathEscapeError


def ensure_within_base(base: str | Path, target: str | Path) -> None:
    """
    Verify that target is located within base.

    Args:
        base: Base directory
        target: Absolute, normalised candidate path

    Raises:
        PathEscapeError: If target resolves to base's parent or anything above it
    """
    rel = os.path.relpath(target, base)
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        raise PathEscapeError(str(target), str(base))


def resolve_hook_path(base: str | Path, value: str) -> Path:
    """
    Resolve a user-supplied hook path against a base directory.

    Args:
        base: Directory that relative values are joined to
        value: Path from the hook configuration

    Returns:
        Normalised absolute path

    Raises:
        PathEscapeError: If a relative value escapes base
    """
    if os.path.isabs(value):
        return Path(os.path.normpath(value))

    resolved = os.path.normpath(os.path.join(base, value))
    ensure_within_base(base, resolved)
    return Path(resolved)
