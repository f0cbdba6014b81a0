"""
Copy hook runner.

Copies a file or directory tree from the phase's source base to its
destination base. File modes are carried over so executable scripts stay
executable in the new location.
"""

import logging
import os
import shutil
import stat
from pathlib import Path

from wtp.core.config.models import Hook
from wtp.core.hooks.errors import CopyHookError
from wtp.core.hooks.paths import resolve_hook_path
from wtp.core.hooks.sink import Sink, write_line

logger = logging.getLogger(__name__)

DIRECTORY_PERMISSIONS = 0o755


def run_copy_hook(
    sink: Sink,
    hook: Hook,
    source_base: str | Path,
    destination_base: str | Path,
) -> None:
    """
    Execute a copy hook.

    Args:
        sink: Output sink for the progress line
        hook: Copy hook (``from`` and optional ``to``)
        source_base: Directory relative ``from`` values resolve against
        destination_base: Directory relative ``to`` values resolve against

    Raises:
        PathEscapeError: If a relative path leaves its base
        CopyHookError: If the source is missing/unreadable or any copy step fails
    """
    src_path = resolve_hook_path(source_base, hook.from_ or "")
    dst_path = resolve_hook_path(destination_base, hook.destination)

    try:
        src_info = src_path.stat()
    except FileNotFoundError as e:
        raise CopyHookError(f"source path does not exist: {src_path}") from e
    except OSError as e:
        raise CopyHookError(f"failed to stat source path {src_path}: {e}") from e

    if not src_info.st_mode & stat.S_IRUSR:
        raise CopyHookError(f"permission denied: source path is not readable: {src_path}")

    try:
        dst_path.parent.mkdir(mode=DIRECTORY_PERMISSIONS, parents=True, exist_ok=True)
    except OSError as e:
        raise CopyHookError(f"failed to create destination directory: {e}") from e

    rel_src = os.path.relpath(src_path, source_base)
    rel_dst = os.path.relpath(dst_path, destination_base)
    write_line(sink, f"  Copying: {rel_src} → {rel_dst}\n")
    logger.debug("Copying %s to %s", src_path, dst_path)

    if stat.S_ISDIR(src_info.st_mode):
        copy_dir(src_path, dst_path)
    else:
        copy_file(src_path, dst_path)


def copy_file(src: Path, dst: Path) -> None:
    """Copy a single file byte-for-byte and apply the source's permission bits."""
    try:
        src_info = src.stat()
    except OSError as e:
        raise CopyHookError(f"failed to open source file: {e}") from e

    if not src_info.st_mode & stat.S_IRUSR:
        raise CopyHookError(f"failed to copy file: source file is not readable: {src}")

    _ensure_dir_writable(dst.parent, "failed to create destination file")

    try:
        with src.open("rb") as source_file, dst.open("wb") as dest_file:
            shutil.copyfileobj(source_file, dest_file)
    except OSError as e:
        raise CopyHookError(f"failed to copy file {src}: {e}") from e

    try:
        os.chmod(dst, stat.S_IMODE(src_info.st_mode))
    except OSError as e:
        raise CopyHookError(f"failed to set file permissions on {dst}: {e}") from e


def copy_dir(src: Path, dst: Path) -> None:
    """Recursively copy a directory, creating each level with the source's mode."""
    try:
        src_info = src.stat()
    except OSError as e:
        raise CopyHookError(f"failed to stat source directory: {e}") from e

    if not src_info.st_mode & stat.S_IRUSR:
        raise CopyHookError(f"failed to read source directory: permission denied: {src}")

    _ensure_dir_writable(dst.parent, "failed to create destination directory")

    try:
        dst.mkdir(mode=stat.S_IMODE(src_info.st_mode), parents=True, exist_ok=True)
        entries = sorted(os.scandir(src), key=lambda entry: entry.name)
    except OSError as e:
        raise CopyHookError(f"failed to copy directory {src}: {e}") from e

    for entry in entries:
        src_path = src / entry.name
        dst_path = dst / entry.name
        if entry.is_dir():
            copy_dir(src_path, dst_path)
        else:
            copy_file(src_path, dst_path)


def _ensure_dir_writable(path: Path, context: str) -> None:
    try:
        info = path.stat()
    except OSError as e:
        raise CopyHookError(f"{context}: {e}") from e

    if not stat.S_ISDIR(info.st_mode):
        raise CopyHookError(f"{context}: not a directory: {path}")

    if not info.st_mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH):
        raise CopyHookError(f"{context}: write permission denied for directory: {path}")
