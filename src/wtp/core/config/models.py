"""
Configuration data models for wtp.

These models define the structure of the .wtp.yml file at the repository
root, with validation and type safety via Pydantic.
"""

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CURRENT_VERSION = "1.0"
DEFAULT_BASE_DIR = "../worktrees"


def scalar_text(value: Any) -> Any:
    """
    Render a YAML scalar as the text a user wrote for a string field.

    Unquoted numbers and booleans (``PORT: 3000``, ``DEBUG: true``,
    ``version: 1.0``) arrive from the YAML parser as int, float or bool.
    Anything that is not such a scalar is returned unchanged for normal
    validation.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class HookType(str, Enum):
    """Kind of lifecycle hook."""

    COPY = "copy"
    COMMAND = "command"


class Hook(BaseModel):
    """
    A single lifecycle step.

    Copy hooks move a file or directory tree between the repository and a
    worktree. Command hooks run a shell command string. The fields a hook
    carries must match its type.
    """
    type: HookType = Field(description="Hook type: 'copy' or 'command'")
    from_: str | None = Field(
        default=None,
        alias="from",
        description="Copy source, relative to the phase's source base"
    )
    to: str | None = Field(
        default=None,
        description="Copy destination, relative to the phase's destination base"
    )
    command: str | None = Field(
        default=None,
        description="Shell command string (interpreted by sh -c)"
    )
    work_dir: str | None = Field(
        default=None,
        description="Working directory for command hooks"
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment variables for command hooks"
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("from_", "to", "command", "work_dir", mode="before")
    @classmethod
    def coerce_scalar_text(cls, v: Any) -> Any:
        """Accept unquoted YAML numbers and booleans for text fields."""
        return scalar_text(v)

    @field_validator("env", mode="before")
    @classmethod
    def coerce_env_values(cls, v: Any) -> Any:
        """Accept unquoted numbers and booleans as env values; null becomes empty."""
        if not isinstance(v, dict):
            return v
        return {
            scalar_text(key): "" if value is None else scalar_text(value)
            for key, value in v.items()
        }

    @model_validator(mode="after")
    def check_fields_match_type(self) -> "Hook":
        """Reject field combinations that do not belong to the hook type."""
        if self.type == HookType.COPY:
            if not self.from_:
                raise ValueError("copy hook requires 'from' field")
            if self.command:
                raise ValueError("copy hook should not have 'command' field")
        elif self.type == HookType.COMMAND:
            if not self.command:
                raise ValueError("command hook requires 'command' field")
            if self.from_ or self.to:
                raise ValueError("command hook should not have 'from' or 'to' fields")
        return self

    @property
    def destination(self) -> str:
        """Copy destination, defaulting to the basename of the source."""
        if self.to:
            return self.to
        return os.path.basename(os.path.normpath(self.from_ or ""))


class HooksConfig(BaseModel):
    """Ordered hook lists per lifecycle phase."""
    post_create: list[Hook] = Field(
        default_factory=list,
        description="Hooks run after a worktree is created"
    )
    pre_remove: list[Hook] = Field(
        default_factory=list,
        description="Hooks run before a worktree is removed"
    )
    post_remove: list[Hook] = Field(
        default_factory=list,
        description="Hooks run after a worktree is removed"
    )


class DefaultsConfig(BaseModel):
    """Default values for worktree placement."""
    base_dir: str = Field(
        default=DEFAULT_BASE_DIR,
        description="Directory for new worktrees, relative to the repository root"
    )

    @field_validator("base_dir", mode="before")
    @classmethod
    def coerce_base_dir(cls, v: Any) -> Any:
        return scalar_text(v)


class WtpConfig(BaseModel):
    """
    Root configuration model for wtp.

    Loaded from .wtp.yml at the repository root. A missing file means
    defaults with no hooks.
    """
    version: str = Field(
        default=CURRENT_VERSION,
        description="Configuration format version"
    )
    defaults: DefaultsConfig = Field(
        default_factory=DefaultsConfig,
        description="Worktree placement defaults"
    )
    hooks: HooksConfig = Field(
        default_factory=HooksConfig,
        description="Lifecycle hooks"
    )

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> Any:
        """Accept an unquoted ``version: 1.0``."""
        return scalar_text(v)

    def has_post_create_hooks(self) -> bool:
        return len(self.hooks.post_create) > 0

    def has_pre_remove_hooks(self) -> bool:
        return len(self.hooks.pre_remove) > 0

    def has_post_remove_hooks(self) -> bool:
        return len(self.hooks.post_remove) > 0

    def resolve_worktree_path(self, repo_root: str | os.PathLike[str], name: str) -> str:
        """
        Resolve the directory for a worktree.

        Args:
            repo_root: Main repository root
            name: Worktree name (usually the branch name)

        Returns:
            Normalised path of the worktree directory
        """
        base_dir = self.defaults.base_dir
        if not os.path.isabs(base_dir):
            base_dir = os.path.join(repo_root, base_dir)
        return os.path.normpath(os.path.join(base_dir, name))
