"""
Pytest configuration and shared fixtures.

Provides temporary repository/worktree directory pairs for hook tests and
real git repositories (via GitPython) for worktree and CLI tests.
"""

import io
from pathlib import Path

import pytest
from git import Repo

# ==============================================================================
# Directory Fixtures
# ==============================================================================

@pytest.fixture
def repo_root(tmp_path):
    """Provide a plain directory standing in for the repository root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root

@pytest.fixture
def worktree_path(tmp_path):
    """Provide a plain directory standing in for a freshly created worktree."""
    path = tmp_path / "worktrees" / "feature"
    path.mkdir(parents=True)
    return path

@pytest.fixture
def sink():
    """Provide an in-memory byte sink."""
    return io.BytesIO()

# ==============================================================================
# Git Fixtures
# ==============================================================================

@pytest.fixture
def git_repo(tmp_path) -> Path:
    """
    Provide a real git repository with one commit on 'main'.

    Worktrees created with the default base_dir land in tmp_path/worktrees.
    """
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    repo = Repo.init(repo_dir)

    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("commit", "gpgsign", "false")

    (repo_dir / "README.md").write_text("# test\n")
    repo.git.add("README.md")
    repo.git.commit("-m", "initial commit")
    repo.git.branch("-M", "main")
    repo.close()

    return repo_dir
