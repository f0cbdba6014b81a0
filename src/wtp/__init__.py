"""
wtp - Worktree Plus

A git worktree wrapper that runs declarative lifecycle hooks (file copies and
setup commands) when worktrees are created and removed.
"""

__version__ = "0.4.0"

from wtp.core.config.models import Hook, HookType, WtpConfig

__all__ = ["Hook", "HookType", "WtpConfig", "__version__"]
