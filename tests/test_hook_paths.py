"""
Tests for hook path resolution and containment checks.
"""

import os

import pytest

from wtp.core.hooks import PathEscapeError, ensure_within_base, resolve_hook_path


class TestEnsureWithinBase:
    """Test the containment check."""

    def test_child_path_is_allowed(self, tmp_path):
        ensure_within_base(tmp_path, tmp_path / "a" / "b")

    def test_base_itself_is_allowed(self, tmp_path):
        ensure_within_base(tmp_path, tmp_path)

    def test_parent_is_rejected(self, tmp_path):
        with pytest.raises(PathEscapeError, match="escapes base directory"):
            ensure_within_base(tmp_path / "base", tmp_path)

    def test_sibling_is_rejected(self, tmp_path):
        with pytest.raises(PathEscapeError):
            ensure_within_base(tmp_path / "base", tmp_path / "other" / "file")

    def test_dotdot_prefixed_name_is_allowed(self, tmp_path):
        """A file literally named '..foo' inside base does not escape."""
        ensure_within_base(tmp_path, tmp_path / "..foo")

    def test_error_carries_paths(self, tmp_path):
        base = tmp_path / "base"
        with pytest.raises(PathEscapeError) as exc_info:
            ensure_within_base(base, tmp_path / "etc")

        assert exc_info.value.base == str(base)
        assert exc_info.value.target == str(tmp_path / "etc")


class TestResolveHookPath:
    """Test resolving configured values against a base directory."""

    def test_relative_value_is_joined_and_normalised(self, tmp_path):
        resolved = resolve_hook_path(tmp_path, "config/./app/../app.env")
        assert resolved == tmp_path / "config" / "app.env"

    def test_relative_escape_is_rejected(self, tmp_path):
        with pytest.raises(PathEscapeError):
            resolve_hook_path(tmp_path / "base", "../../etc/passwd")

    def test_relative_escape_that_returns_is_allowed(self, tmp_path):
        base = tmp_path / "base"
        assert resolve_hook_path(base, "sub/../file") == base / "file"

    def test_absolute_value_bypasses_check(self, tmp_path):
        outside = tmp_path / "outside" / "file"
        resolved = resolve_hook_path(tmp_path / "base", str(outside))
        assert resolved == outside

    def test_absolute_value_is_normalised(self, tmp_path):
        resolved = resolve_hook_path(tmp_path, str(tmp_path) + os.sep + "a" + os.sep + ".." + os.sep + "b")
        assert resolved == tmp_path / "b"
