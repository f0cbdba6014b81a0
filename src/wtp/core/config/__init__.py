"""
Configuration system for wtp.

Usage:
    from wtp.core.config import load_config

    config = load_config(repo_root)
    for hook in config.hooks.post_create:
        print(hook.type)
"""

from .loader import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEMPLATE,
    ConfigError,
    load_config,
    write_default_config,
)
from .models import DefaultsConfig, Hook, HooksConfig, HookType, WtpConfig

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG_TEMPLATE",
    "ConfigError",
    "load_config",
    "write_default_config",
    "DefaultsConfig",
    "Hook",
    "HooksConfig",
    "HookType",
    "WtpConfig",
]
