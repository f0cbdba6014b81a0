"""
Exceptions raised by the hook execution engine.

Every failure aborts the remaining hooks of the current phase. The executor
wraps the underlying cause in a HookExecutionError that carries the 1-based
position and type of the failing hook.
"""


class HookError(Exception):
    """Base exception for hook execution."""

    pass


class HookConfigurationError(HookError):
    """Raised when a hook cannot be dispatched (e.g. unknown hook type)."""

    pass


class PathEscapeError(HookError):
    """Raised when a relative hook path resolves outside its base directory."""

    def __init__(self, target: str, base: str):
        self.target = target
        self.base = base
        super().__init__(f"path {target} escapes base directory {base}")


class CopyHookError(HookError):
    """Raised when a copy hook fails on the filesystem."""

    pass


class CommandHookError(HookError):
    """Raised when a command hook cannot be spawned, exits non-zero or fails to stream."""

    def __init__(self, message: str, exit_code: int | None = None):
        self.exit_code = exit_code
        super().__init__(message)


class HookExecutionError(HookError):
    """
    Raised by the executor when a hook in a phase fails.

    Attributes:
        index: 1-based position of the failing hook in its phase
        hook_type: Type of the failing hook ("copy", "command", or the unknown value)
        cause: The underlying error
    """

    def __init__(self, index: int, hook_type: str, cause: Exception):
        self.index = index
        self.hook_type = hook_type
        self.cause = cause
        super().__init__(f"failed to execute hook {index} ({hook_type}): {cause}")
