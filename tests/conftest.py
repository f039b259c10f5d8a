"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path as FilePath
from unittest.mock import MagicMock

import pytest

from pathtype.context import PathContext, set_default_context
from pathtype.filesystem import RealFileSystem
from pathtype.flavors import DarwinFlavor, PosixFlavor, WindowsFlavor, host_flavor


@pytest.fixture(autouse=True)
def reset_default_context() -> Iterator[None]:
    """Keep the process-wide context from leaking between tests."""
    yield
    set_default_context(None)


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.getcwd.return_value = "/mock/cwd"
    fs.list_dir.return_value = []
    fs.read_dir.return_value = []
    return fs


# ============================================================================
# Lexical Contexts
# ============================================================================


@pytest.fixture
def posix_ctx(mock_filesystem: MagicMock) -> PathContext:
    """POSIX rules with a fixed working directory and no real I/O."""
    return PathContext(
        flavor=PosixFlavor(),
        filesystem=mock_filesystem,
        environ={},
        cwd="/work",
    )


@pytest.fixture
def darwin_ctx(mock_filesystem: MagicMock) -> PathContext:
    """macOS rules with no real I/O."""
    return PathContext(flavor=DarwinFlavor(), filesystem=mock_filesystem, environ={}, cwd="/work")


@pytest.fixture
def windows_ctx(mock_filesystem: MagicMock) -> PathContext:
    """Windows rules with a fixed working directory and no real I/O."""
    return PathContext(
        flavor=WindowsFlavor(),
        filesystem=mock_filesystem,
        environ={},
        cwd="C:\\work",
    )


# ============================================================================
# Real Filesystem Contexts
# ============================================================================


@pytest.fixture
def fs_ctx(tmp_path: FilePath) -> PathContext:
    """Host rules and the real filesystem, anchored at tmp_path."""
    return PathContext(
        flavor=host_flavor(),
        filesystem=RealFileSystem(),
        environ=dict(os.environ),
        cwd=str(tmp_path),
    )


@pytest.fixture
def tree(tmp_path: FilePath) -> FilePath:
    """Create a small directory tree.

    Layout::

        root/
            a/
                x.txt
                y.md
            b/
                c/
                    z.txt
            top.txt
    """
    root = tmp_path / "root"
    (root / "a").mkdir(parents=True)
    (root / "b" / "c").mkdir(parents=True)
    (root / "a" / "x.txt").write_text("x")
    (root / "a" / "y.md").write_text("y")
    (root / "b" / "c" / "z.txt").write_text("z")
    (root / "top.txt").write_text("top")
    return root
