"""
Git worktree manager implementation.

This module provides the WorktreeManager class for creating, listing, finding
and removing git worktrees under the configured base directory.
"""

import builtins
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from wtp.core.config.loader import load_config
from wtp.core.config.models import WtpConfig

logger = logging.getLogger(__name__)


class WorktreeError(Exception):
    """Base exception for worktree operations."""

    pass


class WorktreeNotFoundError(WorktreeError):
    """Raised when a worktree cannot be found."""

    def __init__(self, name: str, available: builtins.list[str] | None = None):
        self.name = name
        self.available = available or []
        message = f"worktree '{name}' not found"
        if self.available:
            message += "\n\nAvailable worktrees:"
            for candidate in self.available:
                message += f"\n  • {candidate}"
        else:
            message += "\n\nNo worktrees found."
        super().__init__(message)


@dataclass
class Worktree:
    """
    Represents a git worktree.

    Attributes:
        path: Absolute path to the worktree directory
        branch: Branch ref (None for detached HEAD)
        commit: Commit SHA
        is_bare: Whether this is the bare repository
        is_locked: Whether the worktree is locked
        is_main: Whether this is the main working tree
    """

    path: Path
    branch: str | None
    commit: str
    is_bare: bool = False
    is_locked: bool = False
    is_main: bool = False

    @property
    def branch_name(self) -> str | None:
        """Branch without the refs/heads/ prefix."""
        if self.branch and self.branch.startswith("refs/heads/"):
            return self.branch[len("refs/heads/") :]
        return self.branch


class WorktreeManager:
    """
    Manages git worktrees for a repository.

    Worktrees are placed under ``defaults.base_dir`` from .wtp.yml, resolved
    against the main repository root (not the worktree the command runs in).

    Example:
        >>> manager = WorktreeManager()
        >>> worktree = manager.create("feature/auth", create_branch=True)
        >>> print(f"Created worktree at: {worktree.path}")
        >>> manager.remove(worktree.path)
    """

    def __init__(self, repo_path: Path | None = None, config: WtpConfig | None = None):
        """
        Initialize the worktree manager.

        Args:
            repo_path: Path inside a git repository (defaults to current directory)
            config: Configuration (loaded from the repository root if not provided)

        Raises:
            WorktreeError: If not in a git repository
        """
        self.repo_path = repo_path or Path.cwd()

        try:
            self.repo = Repo(self.repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise WorktreeError(f"not in a git repository: {self.repo_path}") from e

        self.repo_root = self._find_main_root()
        self.config = config if config is not None else load_config(self.repo_root)

    @property
    def worktree_base(self) -> Path:
        """Directory new worktrees are created in."""
        return Path(self.config.resolve_worktree_path(self.repo_root, ""))

    def _find_main_root(self) -> Path:
        try:
            common_dir = self.repo.git.rev_parse("--git-common-dir")
        except GitCommandError as e:
            raise WorktreeError(f"failed to locate repository root: {e.stderr}") from e

        common_path = Path(common_dir)
        if not common_path.is_absolute():
            common_path = Path(self.repo.working_dir) / common_path
        common_path = Path(os.path.realpath(common_path))

        if common_path.name == ".git":
            return common_path.parent
        return Path(self.repo.working_dir)

    def create(
        self,
        branch: str,
        create_branch: bool = False,
        start_point: str | None = None,
    ) -> Worktree:
        """
        Create a worktree for a branch.

        Args:
            branch: Branch to check out (or to create with create_branch)
            create_branch: Create ``branch`` as a new branch
            start_point: Commit the new branch starts from (defaults to HEAD)

        Returns:
            Worktree object representing the created worktree

        Raises:
            WorktreeError: If the destination exists or git fails
        """
        worktree_path = Path(self.config.resolve_worktree_path(self.repo_root, branch))

        if worktree_path.exists():
            raise WorktreeError(f"worktree already exists at: {worktree_path}")

        worktree_path.parent.mkdir(parents=True, exist_ok=True)

        # Format: git worktree add [-b <new-branch>] <path> [<commit-ish>]
        cmd = ["worktree", "add"]
        if create_branch:
            cmd.extend(["-b", branch, str(worktree_path)])
            if start_point:
                cmd.append(start_point)
        else:
            cmd.extend([str(worktree_path), branch])

        logger.debug("Running git %s", " ".join(cmd))
        try:
            self.repo.git.execute(["git", *cmd])
        except GitCommandError as e:
            raise WorktreeError(
                f"failed to create worktree at '{worktree_path}' for branch '{branch}': "
                f"{_stderr(e)}"
            ) from e

        commit_sha = Repo(worktree_path).head.commit.hexsha
        return Worktree(path=worktree_path, branch=f"refs/heads/{branch}", commit=commit_sha)

    def list(self) -> builtins.list[Worktree]:
        """
        List all worktrees in the repository.

        Returns:
            List of Worktree objects; the main working tree comes first

        Raises:
            WorktreeError: If listing worktrees fails
        """
        try:
            output = self.repo.git.worktree("list", "--porcelain")
        except GitCommandError as e:
            raise WorktreeError(f"failed to list worktrees: {_stderr(e)}") from e

        worktrees: builtins.list[Worktree] = []
        current: dict[str, str | bool] = {}

        for line in output.splitlines():
            line = line.strip()
            if not line:
                # Empty line ends an entry
                if current:
                    worktrees.append(self._parse_worktree(current, is_main=not worktrees))
                    current = {}
                continue

            if line.startswith("worktree "):
                current["path"] = line[len("worktree ") :]
            elif line.startswith("HEAD "):
                current["commit"] = line[len("HEAD ") :]
            elif line.startswith("branch "):
                current["branch"] = line[len("branch ") :]
            elif line == "bare":
                current["is_bare"] = True
            elif line == "locked" or line.startswith("locked "):
                current["is_locked"] = True

        if current:
            worktrees.append(self._parse_worktree(current, is_main=not worktrees))

        return worktrees

    def _parse_worktree(self, data: dict[str, str | bool], is_main: bool) -> Worktree:
        """Parse worktree data dict into Worktree object."""
        return Worktree(
            path=Path(str(data.get("path", ""))),
            branch=str(data["branch"]) if "branch" in data else None,
            commit=str(data.get("commit", "")),
            is_bare=bool(data.get("is_bare", False)),
            is_locked=bool(data.get("is_locked", False)),
            is_main=is_main,
        )

    def display_name(self, worktree: Worktree) -> str:
        """Name used on the command line: '@' for the main tree, else the path under base_dir."""
        if worktree.is_main:
            return "@"
        rel = os.path.relpath(worktree.path, self.worktree_base)
        if rel == os.pardir or rel.startswith(os.pardir + os.sep):
            return worktree.path.name
        return rel

    def find(self, name: str) -> Worktree:
        """
        Find a worktree by name, branch, or directory name.

        A trailing '*' (the current-worktree marker printed by ``wtp list``)
        is ignored, and 'root' is accepted as an alias for '@'.

        Args:
            name: Name relative to base_dir, branch name, or directory name

        Returns:
            Matching worktree

        Raises:
            WorktreeNotFoundError: If nothing matches
        """
        worktrees = [w for w in self.list() if not w.is_bare]
        wanted = name.removesuffix("*")

        for match in (
            lambda w: self.display_name(w) == wanted,
            lambda w: w.branch_name == wanted,
            lambda w: w.path.name == wanted,
            lambda w: w.is_main and wanted == "root",
        ):
            for worktree in worktrees:
                if match(worktree):
                    return worktree

        raise WorktreeNotFoundError(
            name, [self.display_name(w) for w in worktrees if not w.is_main]
        )

    def remove(self, path: Path, force: bool = False) -> None:
        """
        Remove a worktree.

        Args:
            path: Path to the worktree directory
            force: Force removal even if worktree has uncommitted changes

        Raises:
            WorktreeError: If removal fails
        """
        cmd = ["worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.append(str(path))

        logger.debug("Running git %s", " ".join(cmd))
        try:
            self.repo.git.execute(["git", *cmd])
        except GitCommandError as e:
            raise WorktreeError(f"failed to remove worktree at '{path}': {_stderr(e)}") from e

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """
        Delete a local branch.

        Raises:
            WorktreeError: If git refuses (e.g. unmerged without force)
        """
        try:
            self.repo.git.branch("-D" if force else "-d", branch)
        except GitCommandError as e:
            raise WorktreeError(f"failed to delete branch '{branch}': {_stderr(e)}") from e


def _stderr(error: GitCommandError) -> str:
    return str(error.stderr or error).strip()
