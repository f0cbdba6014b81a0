"""
Configuration loading for wtp.

Implements the configuration precedence chain:
    defaults < .wtp.yml < env vars

The project file lives at the repository root. Hook lists are validated here,
before they ever reach the hook executor.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import WtpConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".wtp.yml"
CONFIG_FILE_PERMISSIONS = 0o600

DEFAULT_CONFIG_TEMPLATE = """\
# wtp configuration
version: "1.0"

defaults:
  # Directory for new worktrees (relative to the repository root)
  base_dir: ../worktrees

hooks:
  # Run after a worktree is created.
  # Copy paths: "from" is relative to the repository root, "to" to the new worktree.
  post_create:
    # - type: copy
    #   from: .env.example
    #   to: .env
    # - type: command
    #   command: npm install
    #   env:
    #     NODE_ENV: development

  # Run before a worktree is removed.
  # Copy paths: "from" is relative to the worktree, "to" to the repository root.
  pre_remove:
    # - type: copy
    #   from: .env
    #   to: backups/.env

  # Run after a worktree is removed. Commands run in the removed worktree's path.
  post_remove:
    # - type: command
    #   command: echo "removed $GIT_WTP_WORKTREE_PATH"
"""


class ConfigError(Exception):
    """Raised when .wtp.yml cannot be read, parsed or validated."""

    pass


def get_config_path(repo_root: Path) -> Path:
    """
    Get path to the project configuration file.

    Args:
        repo_root: Main repository root

    Returns:
        Path to .wtp.yml in the repository root
    """
    return repo_root / CONFIG_FILE_NAME


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        WTP_BASE_DIR - overrides defaults.base_dir

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if base_dir := os.environ.get("WTP_BASE_DIR"):
        defaults = dict(result.get("defaults") or {})
        defaults["base_dir"] = base_dir
        result["defaults"] = defaults

    return result


def _format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as 'hooks.post_create[2]: message' lines."""
    lines: list[str] = []
    for detail in error.errors():
        location = ""
        for part in detail["loc"]:
            if isinstance(part, int):
                # Hook positions are reported 1-based, like the executor does
                location += f"[{part + 1}]"
            else:
                location += f".{part}" if location else str(part)
        message = detail["msg"].removeprefix("Value error, ")
        lines.append(f"{location}: {message}" if location else message)
    return "; ".join(lines)


def load_config(repo_root: Path) -> WtpConfig:
    """
    Load configuration for a repository.

    Args:
        repo_root: Main repository root

    Returns:
        Validated WtpConfig (defaults when no .wtp.yml exists)

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or fails validation
    """
    config_path = get_config_path(Path(repo_root).resolve())

    config_dict: dict[str, Any] = {}
    if config_path.exists():
        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config file: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"failed to parse config file: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"failed to parse config file: {config_path} is not a mapping")
        config_dict = data
        logger.debug("Loaded config from %s", config_path)
    else:
        logger.debug("No config at %s, using defaults", config_path)

    # YAML leaves a phase whose entries are all commented out as null
    hooks = config_dict.get("hooks")
    if isinstance(hooks, dict):
        config_dict["hooks"] = {k: v for k, v in hooks.items() if v is not None}
    elif hooks is None:
        config_dict.pop("hooks", None)

    config_dict = apply_env_overrides(config_dict)

    try:
        return WtpConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {_format_validation_error(e)}") from e


def write_default_config(repo_root: Path) -> Path:
    """
    Write the commented template configuration.

    Raises:
        ConfigError: If a configuration file already exists
    """
    config_path = get_config_path(repo_root)
    if config_path.exists():
        raise ConfigError(f"configuration file already exists: {config_path}")
    config_path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    config_path.chmod(CONFIG_FILE_PERMISSIONS)
    return config_path
