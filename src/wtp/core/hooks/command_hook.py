"""
Command hook runner.

Runs a configured command string through the platform shell so users can
write pipelines and expansions. Stdout and stderr are drained by two reader
threads that write each chunk to a shared SynchronizedWriter as it arrives,
so output shows up while the command is still running.
"""

import logging
import os
import subprocess
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import IO

from wtp.core.config.models import Hook
from wtp.core.hooks.errors import CommandHookError
from wtp.core.hooks.paths import resolve_hook_path
from wtp.core.hooks.sink import Sink, SynchronizedWriter, write_line

logger = logging.getLogger(__name__)

SHELL_INTEGRATION_ENV = "WTP_SHELL_INTEGRATION"
WORKTREE_PATH_ENV = "GIT_WTP_WORKTREE_PATH"
REPO_ROOT_ENV = "GIT_WTP_REPO_ROOT"

READ_CHUNK_SIZE = 4096


def shell_command(command: str) -> list[str]:
    """Build the argv that hands a command string to the platform shell."""
    if os.name == "nt":
        return ["cmd", "/c", command]
    return ["sh", "-c", command]


def build_hook_environment(
    hook: Hook,
    worktree_path: str | Path,
    repo_root: str | Path,
    base_env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Build the environment for a command hook.

    Starts from a copy of the inherited environment with the shell
    integration marker removed, then layers the hook's ``env`` and the two
    path variables on top. The calling process's environment is not touched.

    Args:
        hook: Command hook
        worktree_path: Value for GIT_WTP_WORKTREE_PATH
        repo_root: Value for GIT_WTP_REPO_ROOT
        base_env: Environment to inherit (defaults to os.environ)

    Returns:
        New environment dictionary for the child process
    """
    inherited = os.environ if base_env is None else base_env
    env = {k: v for k, v in inherited.items() if k != SHELL_INTEGRATION_ENV}
    env.update(hook.env)
    env[WORKTREE_PATH_ENV] = str(worktree_path)
    env[REPO_ROOT_ENV] = str(repo_root)
    return env


def run_command_hook(
    sink: Sink,
    hook: Hook,
    command_base: str | Path,
    repo_root: str | Path,
    cwd_fallback: str | Path | None = None,
) -> None:
    """
    Execute a command hook, streaming its output to sink.

    Args:
        sink: Output sink shared by both output streams
        hook: Command hook
        command_base: Default working directory; relative ``work_dir`` resolves here
        repo_root: Repository root exposed to the command
        cwd_fallback: Directory to run in when command_base has been deleted
            and no work_dir is configured (post-remove)

    Raises:
        PathEscapeError: If a relative work_dir leaves command_base
        CommandHookError: If the command cannot start, exits non-zero, or
            its output cannot be streamed
    """
    command = hook.command or ""
    if hook.work_dir:
        work_dir = resolve_hook_path(command_base, hook.work_dir)
    else:
        work_dir = Path(command_base)
        if cwd_fallback is not None and not work_dir.is_dir():
            work_dir = Path(cwd_fallback)
    env = build_hook_environment(hook, command_base, repo_root)

    write_line(sink, f"  Running: {command}\n")
    logger.debug("Running command hook %r in %s", command, work_dir)

    try:
        process = subprocess.Popen(
            shell_command(command),
            cwd=str(work_dir),
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        raise CommandHookError(f"command failed: failed to start command: {e}") from e

    synchronized = SynchronizedWriter(sink)
    stream_errors: list[Exception] = []
    readers = [
        threading.Thread(
            target=_stream_output,
            args=(process, stream, synchronized, stream_errors),
            name=f"wtp-hook-{name}",
            daemon=True,
        )
        for name, stream in (("stdout", process.stdout), ("stderr", process.stderr))
    ]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()

    exit_code = process.wait()

    if stream_errors:
        raise CommandHookError(
            f"output streaming failed: {stream_errors[0]}", exit_code=exit_code
        ) from stream_errors[0]

    if exit_code != 0:
        raise CommandHookError(
            f"command failed: exit status {exit_code}", exit_code=exit_code
        )


def _stream_output(
    process: subprocess.Popen,
    stream: IO[bytes] | None,
    sink: SynchronizedWriter,
    errors: list[Exception],
) -> None:
    """
    Copy one child stream to the sink until end-of-stream.

    After a sink write fails the reader keeps draining and discards the rest,
    so the child never blocks on a full pipe. If the pipe itself cannot be
    read the child is killed.
    """
    if stream is None:
        return

    failed = False
    with stream:
        while True:
            try:
                chunk = stream.read1(READ_CHUNK_SIZE)  # type: ignore[attr-defined]
            except OSError as e:
                logger.debug("Reading hook output failed: %s", e)
                errors.append(e)
                process.kill()
                return
            if not chunk:
                return
            if failed:
                continue
            try:
                sink.write(chunk)
            except Exception as e:
                logger.debug("Hook output sink failed: %s", e)
                errors.append(e)
                failed = True
