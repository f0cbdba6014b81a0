"""
Tests for the copy hook runner.

Covers file and directory copies, permission preservation, default
destinations, containment checks and filesystem failures.
"""

import io
import stat

import pytest

from wtp.core.config.models import Hook, HookType
from wtp.core.hooks import CopyHookError, PathEscapeError
from wtp.core.hooks.copy_hook import run_copy_hook


def copy_hook(source: str, to: str | None = None) -> Hook:
    return Hook(type=HookType.COPY, from_=source, to=to)


def tree_listing(root):
    """Relative paths of everything under root."""
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


class TestCopyFile:
    """Test copying single files."""

    def test_content_and_mode_are_preserved(self, repo_root, worktree_path, sink):
        source = repo_root / "setup.sh"
        source.write_bytes(b"#!/bin/sh\necho \xe2\x9c\x93\n")
        source.chmod(0o750)

        run_copy_hook(sink, copy_hook("setup.sh"), repo_root, worktree_path)

        destination = worktree_path / "setup.sh"
        assert destination.read_bytes() == source.read_bytes()
        assert stat.S_IMODE(destination.stat().st_mode) == 0o750

    def test_renames_with_to(self, repo_root, worktree_path, sink):
        (repo_root / ".env.example").write_text("KEY=value\n")

        run_copy_hook(sink, copy_hook(".env.example", ".env"), repo_root, worktree_path)

        assert (worktree_path / ".env").read_text() == "KEY=value\n"
        assert sink.getvalue().decode() == "  Copying: .env.example → .env\n"

    def test_to_defaults_to_basename(self, repo_root, worktree_path, sink):
        (repo_root / "config").mkdir()
        (repo_root / "config" / "local.yml").write_text("debug: true\n")

        run_copy_hook(sink, copy_hook("config/local.yml"), repo_root, worktree_path)

        assert (worktree_path / "local.yml").read_text() == "debug: true\n"

    def test_creates_missing_destination_parents(self, repo_root, worktree_path, sink):
        (repo_root / "settings.json").write_text("{}")

        run_copy_hook(
            sink, copy_hook("settings.json", ".vscode/nested/settings.json"), repo_root, worktree_path
        )

        assert (worktree_path / ".vscode" / "nested" / "settings.json").read_text() == "{}"

    def test_overwrites_existing_destination(self, repo_root, worktree_path, sink):
        (repo_root / ".env").write_text("new")
        (worktree_path / ".env").write_text("old contents that are longer")

        run_copy_hook(sink, copy_hook(".env"), repo_root, worktree_path)

        assert (worktree_path / ".env").read_text() == "new"

    def test_absolute_destination_is_allowed(self, repo_root, worktree_path, tmp_path, sink):
        (repo_root / "shared.txt").write_text("shared")
        outside = tmp_path / "elsewhere" / "shared.txt"
        outside.parent.mkdir()

        run_copy_hook(sink, copy_hook("shared.txt", str(outside)), repo_root, worktree_path)

        assert outside.read_text() == "shared"


class TestCopyDirectory:
    """Test recursive directory copies."""

    def test_copies_nested_tree(self, repo_root, worktree_path, sink):
        source = repo_root / "fixtures"
        (source / "level1" / "level2").mkdir(parents=True)
        (source / "top.txt").write_text("top")
        (source / "level1" / "mid.txt").write_text("mid")
        (source / "level1" / "level2" / "deep.bin").write_bytes(b"\x00\x01\x02")
        (source / "level1" / "level2" / "run.sh").write_text("#!/bin/sh\n")
        (source / "level1" / "level2" / "run.sh").chmod(0o755)

        run_copy_hook(sink, copy_hook("fixtures", "data"), repo_root, worktree_path)

        destination = worktree_path / "data"
        assert tree_listing(destination) == tree_listing(source)
        assert (destination / "level1" / "level2" / "deep.bin").read_bytes() == b"\x00\x01\x02"
        assert stat.S_IMODE((destination / "level1" / "level2" / "run.sh").stat().st_mode) == 0o755
        assert sink.getvalue().decode() == "  Copying: fixtures → data\n"

    def test_copies_empty_directory(self, repo_root, worktree_path, sink):
        (repo_root / "empty").mkdir()

        run_copy_hook(sink, copy_hook("empty"), repo_root, worktree_path)

        assert (worktree_path / "empty").is_dir()
        assert list((worktree_path / "empty").iterdir()) == []


class TestCopyContainment:
    """Test that relative paths cannot leave their base."""

    @pytest.mark.parametrize("to", ["../escaped.txt", "../../escaped.txt", "sub/../../escaped.txt"])
    def test_escaping_destination_is_rejected(self, repo_root, worktree_path, sink, to):
        (repo_root / "secret.txt").write_text("secret")
        before = tree_listing(worktree_path.parent.parent)

        with pytest.raises(PathEscapeError):
            run_copy_hook(sink, copy_hook("secret.txt", to), repo_root, worktree_path)

        assert tree_listing(worktree_path.parent.parent) == before
        assert sink.getvalue() == b""

    def test_escaping_source_is_rejected(self, repo_root, worktree_path, tmp_path, sink):
        (tmp_path / "outside.txt").write_text("outside")

        with pytest.raises(PathEscapeError):
            run_copy_hook(sink, copy_hook("../outside.txt"), repo_root, worktree_path)

        assert not (worktree_path / "outside.txt").exists()


class TestCopyFailures:
    """Test filesystem failures."""

    def test_missing_source(self, repo_root, worktree_path, sink):
        with pytest.raises(CopyHookError, match="source path does not exist"):
            run_copy_hook(sink, copy_hook("missing.txt"), repo_root, worktree_path)

        assert sink.getvalue() == b""

    def test_unreadable_source(self, repo_root, worktree_path, sink):
        source = repo_root / "locked.txt"
        source.write_text("locked")
        source.chmod(0o200)

        try:
            with pytest.raises(CopyHookError, match="permission denied"):
                run_copy_hook(sink, copy_hook("locked.txt"), repo_root, worktree_path)
        finally:
            source.chmod(0o600)

        assert not (worktree_path / "locked.txt").exists()

    def test_unwritable_destination_directory(self, repo_root, worktree_path, sink):
        (repo_root / "file.txt").write_text("data")
        readonly = worktree_path / "readonly"
        readonly.mkdir()
        readonly.chmod(0o555)

        try:
            with pytest.raises(CopyHookError, match="write permission denied"):
                run_copy_hook(sink, copy_hook("file.txt", "readonly/file.txt"), repo_root, worktree_path)
        finally:
            readonly.chmod(0o755)

    def test_error_chains_cause(self, repo_root, worktree_path):
        with pytest.raises(CopyHookError) as exc_info:
            run_copy_hook(io.BytesIO(), copy_hook("nope"), repo_root, worktree_path)

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
