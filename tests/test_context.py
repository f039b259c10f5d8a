"""Tests for context module."""

from __future__ import annotations

import os
import stat
from pathlib import Path as FilePath
from unittest.mock import MagicMock

import pytest

from pathtype.context import (
    PathContext,
    create_context,
    default_context,
    set_default_context,
)
from pathtype.errors import PathNotADirectoryError, PathNotFoundError
from pathtype.filesystem import RealFileSystem
from pathtype.flavors import DarwinFlavor, PosixFlavor, WindowsFlavor, host_flavor_name
from pathtype.path import Path
from pathtype.settings import GLOB_DEPTH_LIMIT, MAX_SYMLINKS, Settings


def _st(mode: int) -> os.stat_result:
    return os.stat_result((mode, 0, 0, 0, 0, 0, 0, 0, 0, 0))


class TestPathContext:
    """Tests for PathContext dataclass."""

    def test_create_with_all_dependencies(self, mock_filesystem: MagicMock) -> None:
        """Test creating context with all dependencies."""
        flavor = WindowsFlavor()
        ctx = PathContext(
            flavor=flavor,
            filesystem=mock_filesystem,
            environ={"A": "b"},
            cwd="C:\\x",
            max_symlinks=3,
            glob_depth_limit=4,
        )
        assert ctx.flavor is flavor
        assert ctx.filesystem is mock_filesystem
        assert ctx.environ == {"A": "b"}
        assert ctx.cwd == "C:\\x"
        assert ctx.max_symlinks == 3
        assert ctx.glob_depth_limit == 4

    def test_defaults(self) -> None:
        """Test context creates host defaults if not provided."""
        ctx = PathContext()
        assert ctx.flavor.name == host_flavor_name()
        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.environ is os.environ
        assert ctx.cwd is None
        assert ctx.max_symlinks == MAX_SYMLINKS
        assert ctx.glob_depth_limit == GLOB_DEPTH_LIMIT


class TestResolve:
    """Tests for PathContext.resolve."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a/b", "/work/a/b"),
            ("file/", "/work/file/"),
            ("link/../c", "/work/link/../c"),
            ("./x", "/work/./x"),
        ],
    )
    def test_relative_prefixed_with_cwd(
        self, posix_ctx: PathContext, path: str, expected: str
    ) -> None:
        """Test relative paths are prefixed with the fixed directory, not cleaned."""
        assert posix_ctx.resolve(path) == expected

    def test_cwd_with_trailing_separator(self, posix_ctx: PathContext) -> None:
        """Test no separator is doubled after a root directory."""
        posix_ctx.cwd = "/"
        assert posix_ctx.resolve("a") == "/a"

    def test_absolute_unchanged(self, posix_ctx: PathContext) -> None:
        """Test absolute paths pass through."""
        assert posix_ctx.resolve("/etc/hosts") == "/etc/hosts"

    def test_empty_unchanged(self, posix_ctx: PathContext) -> None:
        """Test the empty path is not turned into the working directory."""
        assert posix_ctx.resolve("") == ""

    def test_no_fixed_cwd(self, posix_ctx: PathContext) -> None:
        """Test paths pass through when the process directory is used."""
        posix_ctx.cwd = None
        assert posix_ctx.resolve("a/b") == "a/b"

    def test_windows(self, windows_ctx: PathContext) -> None:
        """Test resolution with Windows rules."""
        assert windows_ctx.resolve("a/b") == "C:\\work\\a/b"
        assert windows_ctx.resolve("D:\\x") == "D:\\x"
        assert windows_ctx.resolve("\\x") == "C:\\x"
        assert windows_ctx.resolve("D:x") == "D:x"


class TestGetwdAndChdir:
    """Tests for working directory handling."""

    def test_getwd_fixed(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test a fixed directory does not touch the filesystem."""
        assert posix_ctx.getwd() == "/work"
        mock_filesystem.getcwd.assert_not_called()

    def test_getwd_process(self, posix_ctx: PathContext) -> None:
        """Test the filesystem is asked without a fixed directory."""
        posix_ctx.cwd = None
        assert posix_ctx.getwd() == "/mock/cwd"

    def test_chdir_fixed(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test chdir only updates the context when the directory is fixed."""
        mock_filesystem.stat.return_value = _st(stat.S_IFDIR | 0o755)
        posix_ctx.chdir("sub/../other")
        assert posix_ctx.cwd == "/work/other"
        mock_filesystem.stat.assert_called_once_with("/work/sub/../other")
        mock_filesystem.chdir.assert_not_called()

    def test_chdir_fixed_absolute(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test an absolute target replaces the directory."""
        mock_filesystem.stat.return_value = _st(stat.S_IFDIR | 0o755)
        posix_ctx.chdir("/srv")
        assert posix_ctx.cwd == "/srv"

    def test_chdir_fixed_not_dir(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test the target must be a directory."""
        mock_filesystem.stat.return_value = _st(stat.S_IFREG | 0o644)
        with pytest.raises(PathNotADirectoryError) as exc_info:
            posix_ctx.chdir("file")
        assert exc_info.value.op == "chdir"
        assert posix_ctx.cwd == "/work"

    def test_chdir_fixed_missing(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test a missing target is reported with the chdir operation."""
        mock_filesystem.stat.side_effect = FileNotFoundError(2, "No such file or directory")
        with pytest.raises(PathNotFoundError) as exc_info:
            posix_ctx.chdir("gone")
        assert str(exc_info.value) == "chdir gone: No such file or directory"

    def test_chdir_process(self, posix_ctx: PathContext, mock_filesystem: MagicMock) -> None:
        """Test chdir is delegated without a fixed directory."""
        posix_ctx.cwd = None
        posix_ctx.chdir("/srv")
        mock_filesystem.chdir.assert_called_once_with("/srv")

    def test_chdir_real(self, fs_ctx: PathContext, tree: FilePath) -> None:
        """Test relative paths follow a fixed chdir on the real filesystem."""
        fs_ctx.chdir("root")
        assert Path("top.txt", fs_ctx).read_file() == b"top"

    def test_chdir_seen_by_paths_sharing_the_context(
        self, posix_ctx: PathContext, mock_filesystem: MagicMock
    ) -> None:
        """Test chdir moves every Path built on the same context, like os.chdir."""
        mock_filesystem.stat.return_value = _st(stat.S_IFDIR | 0o755)
        other = Path("f", posix_ctx)
        Path("sub", posix_ctx).chdir()
        assert other.abs().text == "/work/sub/f"
        private = PathContext(flavor=PosixFlavor(), filesystem=mock_filesystem, cwd="/work")
        assert Path("f", private).abs().text == "/work/f"


class TestCreateContext:
    """Tests for create_context factory."""

    def test_from_settings(self) -> None:
        """Test settings are applied to the context."""
        settings = Settings(flavor="windows", cwd="C:\\x", max_symlinks=5, glob_depth_limit=6)
        ctx = create_context(settings)
        assert isinstance(ctx.flavor, WindowsFlavor)
        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.cwd == "C:\\x"
        assert ctx.max_symlinks == 5
        assert ctx.glob_depth_limit == 6

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings are loaded when none are given."""
        monkeypatch.setenv("PATHTYPE_FLAVOR", "darwin")
        ctx = create_context()
        assert isinstance(ctx.flavor, DarwinFlavor)


class TestDefaultContext:
    """Tests for the process-wide context."""

    def test_cached(self) -> None:
        """Test the default context is built once."""
        assert default_context() is default_context()

    def test_uses_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default context reads PATHTYPE_ variables."""
        monkeypatch.setenv("PATHTYPE_MAX_SYMLINKS", "7")
        set_default_context(None)
        assert default_context().max_symlinks == 7

    def test_set_and_reset(self, posix_ctx: PathContext) -> None:
        """Test replacing and resetting the default."""
        set_default_context(posix_ctx)
        assert default_context() is posix_ctx
        assert Path("x").ctx is posix_ctx
        set_default_context(None)
        assert default_context() is not posix_ctx

    def test_paths_use_default(self) -> None:
        """Test paths built without a context share the default one."""
        assert Path("a").ctx is Path("b").ctx is default_context()

    def test_posix_fixture_flavor(self, posix_ctx: PathContext) -> None:
        """Test injected flavors are used by paths."""
        assert isinstance(Path("a", posix_ctx).flavor, PosixFlavor)
