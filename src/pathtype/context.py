"""Path context for dependency injection.

Everything a Path needs from the outside world lives here: the platform
flavor, the filesystem, the environment mapping and the working directory.
Tests construct a PathContext directly with a fixed ``cwd`` and a chosen
flavor instead of mutating process state.
"""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Mapping
from dataclasses import dataclass, field

from pathtype import lexical
from pathtype.errors import PathNotADirectoryError, wrap_os_errors
from pathtype.flavors import BaseFlavor, get_flavor, host_flavor
from pathtype.protocols import FileSystem
from pathtype.settings import GLOB_DEPTH_LIMIT, MAX_SYMLINKS, Settings


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from pathtype.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class PathContext:
    """Container for the collaborators of Path values.

    Attributes:
        flavor: Lexical rules (separator, volumes, escaping).
        filesystem: Filesystem calls.
        environ: Environment used for well-known directory lookups.
        cwd: Fixed working directory. When None the process working
            directory is used.
        max_symlinks: Link limit for symlink evaluation.
        glob_depth_limit: Recursion limit for glob patterns.

    A fixed ``cwd`` stands in for the process working directory, so
    ``chdir`` updates it in place and every Path sharing the context sees
    the new directory, as every caller of os.chdir would. Give a Path its
    own context to keep its relative paths anchored.
    """

    flavor: BaseFlavor = field(default_factory=host_flavor)
    filesystem: FileSystem = field(default_factory=_default_filesystem)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    cwd: str | None = None
    max_symlinks: int = MAX_SYMLINKS
    glob_depth_limit: int = GLOB_DEPTH_LIMIT

    def getwd(self) -> str:
        """Current working directory, fixed or from the process."""
        if self.cwd is not None:
            return self.cwd
        with wrap_os_errors("getwd", "."):
            return self.filesystem.getcwd()

    def chdir(self, path: str) -> None:
        """Change the working directory.

        With a fixed ``cwd`` only the context changes; the target must still
        exist and be a directory.
        """
        if self.cwd is None:
            with wrap_os_errors("chdir", path):
                self.filesystem.chdir(path)
            return
        with wrap_os_errors("chdir", path):
            st = self.filesystem.stat(self.resolve(path))
        if not stat.S_ISDIR(st.st_mode):
            raise PathNotADirectoryError(
                "chdir", path, errno.ENOTDIR, os.strerror(errno.ENOTDIR)
            )
        self.cwd = lexical.abs_path(self.flavor, path, self.cwd)

    def resolve(self, path: str) -> str:
        """Path to hand to the OS for ``path``.

        Relative paths are prefixed with a fixed ``cwd`` when one is set and
        passed through unchanged otherwise. The text is not cleaned, so
        trailing separators and ``..`` after a symlink keep their OS meaning.
        """
        if self.cwd is None or path == "" or self.flavor.is_abs(path):
            return path
        if lexical.volume_name(self.flavor, path):
            # drive-relative, e.g. C:foo
            return path
        if self.flavor.is_sep(path[0]):
            return lexical.volume_name(self.flavor, self.cwd) + path
        if self.cwd and self.flavor.is_sep(self.cwd[-1]):
            return self.cwd + path
        return self.cwd + self.flavor.sep + path


def create_context(settings: Settings | None = None) -> PathContext:
    """Factory for path contexts.

    Use this in production code. For tests, construct PathContext directly
    with test doubles.

    Args:
        settings: Settings to apply; defaults to ``Settings.load()``.

    Returns:
        Configured PathContext.
    """
    from pathtype.filesystem import RealFileSystem

    settings = settings or Settings.load()
    return PathContext(
        flavor=get_flavor(settings.flavor),
        filesystem=RealFileSystem(),
        cwd=settings.cwd,
        max_symlinks=settings.max_symlinks,
        glob_depth_limit=settings.glob_depth_limit,
    )


_default: PathContext | None = None


def default_context() -> PathContext:
    """Process-wide context used by Paths constructed without one."""
    global _default
    if _default is None:
        _default = create_context(Settings.from_env())
    return _default


def set_default_context(ctx: PathContext | None) -> None:
    """Replace the process-wide context (None resets it)."""
    global _default
    _default = ctx
