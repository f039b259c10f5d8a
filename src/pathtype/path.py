"""The Path value type.

A Path is a frozen wrapper around path text. Lexical methods never touch the
filesystem; the remaining methods are one-call pass-throughs to the context's
filesystem with errors annotated by operation and path.

Example:
    >>> Path("a").join("b", "c")
    Path('a/b/c')
    >>> Path("/a").rel("/a/b/c")
    Path('b/c')
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, TYPE_CHECKING, Any, BinaryIO, Union

from pathtype import fsview, globbing, lexical, symlinks, walk as walking
from pathtype.context import PathContext, default_context
from pathtype.errors import PathError, wrap_os_errors
from pathtype.pattern import match as match_pattern
from pathtype.protocols import FS
from pathtype.types import DirEntry, FileInfo

if TYPE_CHECKING:
    from pathtype.flavors import BaseFlavor

__all__ = ["Path", "PathLike", "split_list"]

PathLike = Union[str, "Path", os.PathLike]


def _text(value: PathLike) -> str:
    if isinstance(value, Path):
        return value.text
    return os.fspath(value)


def _ns(t: datetime | float) -> int:
    if isinstance(t, datetime):
        t = t.timestamp()
    return int(t * 1_000_000_000)


@dataclass(frozen=True)
class Path:
    """Immutable path text with path operations as methods.

    Equality and hashing use the text only; two Paths with equal text are
    equal whatever their context. Any string is a valid Path, including "".

    Attributes:
        text: The path text, never modified.
        ctx: Flavor, filesystem and working directory used by the methods.
            Paths derived from this one share it.
    """

    text: str = ""
    ctx: PathContext = field(default_factory=default_context, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            object.__setattr__(self, "text", _text(self.text))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Path({self.text!r})"

    def __fspath__(self) -> str:
        return self.text

    def __truediv__(self, other: PathLike) -> Path:
        return self.join(other)

    def _derive(self, text: str) -> Path:
        return Path(text, self.ctx)

    def _os(self) -> str:
        return self.ctx.resolve(self.text)

    @property
    def flavor(self) -> BaseFlavor:
        return self.ctx.flavor

    # =========================================================================
    # Lexical operations
    # =========================================================================

    def clean(self) -> Path:
        """Shortest path equivalent to this one by purely lexical processing.

        Multiple separators collapse to one, ``.`` elements are dropped,
        inner ``..`` elements are removed with the element before them, and
        ``..`` elements at the start of a rooted path are dropped. The result
        ends in a separator only for a root; an empty result is ``.``.
        """
        return self._derive(lexical.clean(self.flavor, self.text))

    def base(self) -> Path:
        """Last element, ignoring trailing separators.

        ``.`` for an empty path; a single separator for an all-separator path.
        """
        return self._derive(lexical.base(self.flavor, self.text))

    def dir(self) -> Path:
        """All but the last element, cleaned. ``.`` for an empty path."""
        return self._derive(lexical.dir(self.flavor, self.text))

    def split(self) -> tuple[Path, Path]:
        """Split after the final separator into ``(dir, file)``.

        ``dir.text + file.text == self.text`` always holds.
        """
        d, f = lexical.split(self.flavor, self.text)
        return self._derive(d), self._derive(f)

    def ext(self) -> str:
        """Extension of the final element (``.js`` for ``main.test.js``)."""
        return lexical.ext(self.flavor, self.text)

    def is_abs(self) -> bool:
        return lexical.is_abs(self.flavor, self.text)

    def volume_name(self) -> Path:
        """Leading volume name; empty except on Windows."""
        return self._derive(lexical.volume_name(self.flavor, self.text))

    def join(self, *elems: PathLike) -> Path:
        """Join elements onto this path and clean the result.

        Empty elements are ignored. If every element including this path is
        empty the result is the empty path.
        """
        return self._derive(lexical.join(self.flavor, self.text, *(_text(e) for e in elems)))

    def rel(self, target: PathLike) -> Path:
        """Relative path that reaches ``target`` when joined to this path.

        Raises:
            RelationError: If only one of the paths is rooted, their volumes
                differ, or the answer depends on the working directory.
        """
        return self._derive(lexical.rel(self.flavor, self.text, _text(target)))

    def match(self, pattern: str) -> bool:
        """Report whether the whole path matches a shell pattern.

        Raises:
            BadPatternError: If the pattern is malformed.
        """
        return match_pattern(self.flavor, pattern, self.text)

    def to_slash(self) -> Path:
        return self._derive(lexical.to_slash(self.flavor, self.text))

    def from_slash(self) -> Path:
        return self._derive(lexical.from_slash(self.flavor, self.text))

    def valid_path(self) -> bool:
        """Report whether this path is a valid name for an FS view."""
        return lexical.valid_path(self.text)

    def abs(self) -> Path:
        """Absolute, cleaned form using the context's working directory."""
        return self._derive(lexical.abs_path(self.flavor, self.text, self.ctx.getwd()))

    # =========================================================================
    # Metadata
    # =========================================================================

    def stat(self, fsys: FS | None = None) -> FileInfo:
        """Describe the file, following symbolic links.

        Args:
            fsys: Optional FS view; when given this path is a name in it.
        """
        if fsys is not None:
            return fsview.stat_fs(fsys, self.text)
        with wrap_os_errors("stat", self.text):
            st = self.ctx.filesystem.stat(self._os())
        return FileInfo.from_stat(lexical.base(self.flavor, self.text), st)

    def lstat(self) -> FileInfo:
        """Describe the file without following a final symbolic link."""
        with wrap_os_errors("lstat", self.text):
            st = self.ctx.filesystem.lstat(self._os())
        return FileInfo.from_stat(lexical.base(self.flavor, self.text), st)

    def exists(self) -> bool:
        try:
            self.stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        return True

    def is_dir(self) -> bool:
        try:
            return self.stat().is_dir
        except (FileNotFoundError, NotADirectoryError):
            return False

    def is_file(self) -> bool:
        try:
            return self.stat().is_regular
        except (FileNotFoundError, NotADirectoryError):
            return False

    def is_symlink(self) -> bool:
        try:
            return self.lstat().is_symlink
        except (FileNotFoundError, NotADirectoryError):
            return False

    # =========================================================================
    # Creation
    # =========================================================================

    def create(self) -> BinaryIO:
        """Create or truncate the file and open it for reading and writing."""
        with wrap_os_errors("open", self.text):
            return self.ctx.filesystem.open(self._os(), "w+b", 0o666)

    def open(self, mode: str = "rb", perm: int = 0o666) -> IO[Any]:
        """Open the file with a builtin ``open`` mode string."""
        with wrap_os_errors("open", self.text):
            return self.ctx.filesystem.open(self._os(), mode, perm)

    def read_file(self) -> bytes:
        with wrap_os_errors("open", self.text):
            return self.ctx.filesystem.read_file(self._os())

    def write_file(self, data: bytes, perm: int = 0o666) -> None:
        """Write data, creating the file with ``perm`` or truncating it."""
        with wrap_os_errors("open", self.text):
            self.ctx.filesystem.write_file(self._os(), data, perm)

    def mkdir(self, perm: int = 0o777) -> None:
        with wrap_os_errors("mkdir", self.text):
            self.ctx.filesystem.mkdir(self._os(), perm)

    def mkdir_all(self, perm: int = 0o777) -> None:
        """Create the directory and any missing parents.

        Does nothing if the directory already exists.
        """
        with wrap_os_errors("mkdir", self.text):
            self.ctx.filesystem.makedirs(self._os(), perm)

    def mkdir_temp(self, pattern: str = "") -> Path:
        """Create a new directory inside this one with a random name.

        The random part replaces the last ``*`` of ``pattern`` or is appended
        to it. An empty path means the default temporary directory. The caller
        removes the directory.
        """
        prefix, suffix = self._temp_affixes("mkdir_temp", pattern)
        parent = self._temp_parent()
        with wrap_os_errors("mkdir_temp", parent.text):
            created = self.ctx.filesystem.mkdtemp(parent._os(), prefix, suffix)
        return parent._temp_child(created)

    def create_temp(self, pattern: str = "") -> tuple[Path, BinaryIO]:
        """Create and open a new file inside this directory with a random name.

        Returns:
            Tuple of (path of the new file, file opened for reading and writing).
        """
        prefix, suffix = self._temp_affixes("create_temp", pattern)
        parent = self._temp_parent()
        with wrap_os_errors("create_temp", parent.text):
            handle, created = self.ctx.filesystem.mkstemp(parent._os(), prefix, suffix)
        return parent._temp_child(created), handle

    def _temp_affixes(self, op: str, pattern: str) -> tuple[str, str]:
        if any(self.flavor.is_sep(c) for c in pattern):
            raise PathError(op, pattern, errno.EINVAL, "pattern contains path separator")
        prefix, star, suffix = pattern.rpartition("*")
        if not star:
            return pattern, ""
        return prefix, suffix

    def _temp_parent(self) -> Path:
        if self.text == "":
            return self._derive(self.flavor.temp_dir(self.ctx.environ))
        return self

    def _temp_child(self, created: str) -> Path:
        name = lexical.base(self.flavor, created)
        if self.text.endswith(self.flavor.sep):
            return self._derive(self.text + name)
        return self._derive(self.text + self.flavor.sep + name)

    def symlink(self, newname: PathLike) -> None:
        """Create ``newname`` as a symbolic link to this path."""
        new = _text(newname)
        with wrap_os_errors("symlink", self.text, new):
            self.ctx.filesystem.symlink(self.text, self.ctx.resolve(new))

    def link(self, newname: PathLike) -> None:
        """Create ``newname`` as a hard link to this path."""
        new = _text(newname)
        with wrap_os_errors("link", self.text, new):
            self.ctx.filesystem.link(self._os(), self.ctx.resolve(new))

    # =========================================================================
    # Mutation
    # =========================================================================

    def chmod(self, mode: int) -> None:
        with wrap_os_errors("chmod", self.text):
            self.ctx.filesystem.chmod(self._os(), mode)

    def chown(self, uid: int, gid: int) -> None:
        """Change owner and group; -1 leaves a value unchanged."""
        with wrap_os_errors("chown", self.text):
            self.ctx.filesystem.chown(self._os(), uid, gid)

    def lchown(self, uid: int, gid: int) -> None:
        with wrap_os_errors("lchown", self.text):
            self.ctx.filesystem.lchown(self._os(), uid, gid)

    def chtimes(self, atime: datetime | float, mtime: datetime | float) -> None:
        """Set access and modification times (datetimes or epoch seconds)."""
        with wrap_os_errors("chtimes", self.text):
            self.ctx.filesystem.utime(self._os(), _ns(atime), _ns(mtime))

    def truncate(self, size: int) -> None:
        with wrap_os_errors("truncate", self.text):
            self.ctx.filesystem.truncate(self._os(), size)

    def rename(self, newpath: PathLike) -> Path:
        """Rename (move) to ``newpath``, replacing it unless it is a directory.

        Returns:
            The new path.
        """
        new = _text(newpath)
        with wrap_os_errors("rename", self.text, new):
            self.ctx.filesystem.rename(self._os(), self.ctx.resolve(new))
        return self._derive(new)

    def chdir(self) -> None:
        """Make this directory the context's working directory."""
        self.ctx.chdir(self.text)

    # =========================================================================
    # Removal
    # =========================================================================

    def remove(self) -> None:
        """Remove the file or empty directory."""
        with wrap_os_errors("remove", self.text):
            self.ctx.filesystem.remove(self._os())

    def remove_all(self) -> None:
        """Remove this path and everything it contains.

        A missing path is not an error. Removal continues past failures and
        the first one is raised afterwards.
        """
        if self.text == "":
            return
        if self._ends_with_dot():
            raise PathError("remove_all", self.text, errno.EINVAL, os.strerror(errno.EINVAL))
        with wrap_os_errors("remove_all", self.text):
            self.ctx.filesystem.remove_all(self._os())

    def _ends_with_dot(self) -> bool:
        t = self.text
        if t == ".":
            return True
        return len(t) >= 2 and t[-1] == "." and self.flavor.is_sep(t[-2])

    # =========================================================================
    # Traversal
    # =========================================================================

    def read_dir(self, fsys: FS | None = None) -> list[DirEntry]:
        """Entries of this directory sorted by name.

        Args:
            fsys: Optional FS view; when given this path is a name in it.
        """
        if fsys is not None:
            return fsview.read_dir(fsys, self.text)
        with wrap_os_errors("read_dir", self.text):
            return self.ctx.filesystem.read_dir(self._os())

    def glob(self, pattern: str) -> list[Path]:
        """Paths matching ``pattern`` joined onto this path.

        Raises:
            BadPatternError: If the pattern is malformed.
        """
        joined = self.flavor.join([self.text, pattern])
        return [self._derive(m) for m in globbing.glob(self.ctx, joined)]

    def walk(self, visitor: walking.WalkFunc) -> None:
        """Walk the tree rooted here in lexical order; see ``pathtype.walk``."""
        walking.walk(self, visitor)

    def walk_dir(self, visitor: walking.WalkDirFunc) -> None:
        """Walk the tree rooted here passing DirEntry values."""
        walking.walk_dir(self, visitor)

    # =========================================================================
    # Symbolic links
    # =========================================================================

    def readlink(self) -> Path:
        with wrap_os_errors("readlink", self.text):
            return self._derive(self.ctx.filesystem.readlink(self._os()))

    def eval_symlinks(self) -> Path:
        """Path with every symbolic link resolved, cleaned.

        Raises:
            TooManyLinksError: If the link limit is exceeded.
        """
        return self._derive(symlinks.eval_symlinks(self.ctx, self.text))

    # =========================================================================
    # FS views
    # =========================================================================

    def dir_fs(self) -> fsview.DirFS:
        """FS view of the tree rooted at this directory."""
        return fsview.DirFS(self.text, self.ctx)

    def sub(self, fsys: FS) -> FS:
        """FS view of the subtree of ``fsys`` at this name."""
        return fsview.sub(fsys, self.text)


def split_list(value: str, ctx: PathContext | None = None) -> list[Path]:
    """Split a PATH-style list on the list separator.

    An empty string gives an empty list.
    """
    ctx = ctx or default_context()
    return [Path(item, ctx) for item in lexical.split_list(ctx.flavor, value)]
