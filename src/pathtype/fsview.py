"""Read-only file system views addressed by slash-separated names.

A view hides the host's path syntax: names are always ``/``-separated,
unrooted and free of ``.`` and ``..`` elements. ``DirFS`` exposes a host
directory, ``MapFS`` keeps files in memory, and ``sub`` narrows any view to
one of its directories.
"""

from __future__ import annotations

import errno
import io
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, BinaryIO

from pathtype import lexical
from pathtype.errors import (
    PathError,
    PathIsADirectoryError,
    PathNotADirectoryError,
    PathNotFoundError,
    wrap_os_errors,
)
from pathtype.protocols import FS
from pathtype.types import DirEntry, FileInfo

if TYPE_CHECKING:
    from pathtype.context import PathContext

__all__ = ["DirFS", "MapFS", "MapFile", "SubFS", "read_dir", "read_file", "stat_fs", "sub"]

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def _invalid(op: str, name: str) -> PathError:
    return PathError(op, name, errno.EINVAL, os.strerror(errno.EINVAL))


def _name_base(name: str) -> str:
    return name.rsplit("/", 1)[-1]


class DirFS:
    """View of the host directory tree rooted at ``root``.

    This only prefixes names with ``root``; a symbolic link inside the tree
    can still lead outside it.
    """

    def __init__(self, root: str, ctx: PathContext) -> None:
        self.root = root
        self.ctx = ctx

    def __repr__(self) -> str:
        return f"DirFS({self.root!r})"

    def _full(self, op: str, name: str) -> str:
        if not lexical.valid_path(name) or self.root == "":
            raise _invalid(op, name)
        full = self.root if name == "." else self.root + "/" + name
        return self.ctx.resolve(full)

    def open(self, name: str) -> BinaryIO:
        full = self._full("open", name)
        with wrap_os_errors("open", name):
            return self.ctx.filesystem.open(full, "rb")

    def stat(self, name: str) -> FileInfo:
        full = self._full("stat", name)
        with wrap_os_errors("stat", name):
            st = self.ctx.filesystem.stat(full)
        return FileInfo.from_stat(lexical.base(self.ctx.flavor, full), st)

    def read_dir(self, name: str) -> list[DirEntry]:
        full = self._full("read_dir", name)
        with wrap_os_errors("read_dir", name):
            return self.ctx.filesystem.read_dir(full)

    def read_file(self, name: str) -> bytes:
        full = self._full("read_file", name)
        with wrap_os_errors("read_file", name):
            return self.ctx.filesystem.read_file(full)

    def sub(self, name: str) -> DirFS:
        if not lexical.valid_path(name):
            raise _invalid("sub", name)
        if name == ".":
            return self
        return DirFS(self.root + "/" + name, self.ctx)


@dataclass
class MapFile:
    """A file held by MapFS.

    Attributes:
        data: File content.
        mode: ``st_mode`` bits; include ``stat.S_IFDIR`` for an explicit
            directory. Permission bits alone mean a regular file.
        mtime: Modification time.
    """

    data: bytes = b""
    mode: int = 0o644
    mtime: datetime = field(default_factory=lambda: _EPOCH)

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)


class MapFS:
    """In-memory view backed by a mapping of names to MapFile.

    Parent directories do not need entries of their own; any prefix of a
    file name is a directory.
    """

    def __init__(self, files: dict[str, MapFile] | None = None) -> None:
        self.files: dict[str, MapFile] = dict(files or {})

    def __repr__(self) -> str:
        return f"MapFS({sorted(self.files)!r})"

    def _lookup(self, op: str, name: str) -> MapFile | None:
        """Return the file for ``name``, None for an implicit directory."""
        if not lexical.valid_path(name):
            raise _invalid(op, name)
        entry = self.files.get(name)
        if entry is not None:
            return entry
        if self._is_implicit_dir(name):
            return None
        raise PathNotFoundError(op, name, errno.ENOENT, os.strerror(errno.ENOENT))

    def _is_implicit_dir(self, name: str) -> bool:
        if name == ".":
            return True
        prefix = name + "/"
        return any(key.startswith(prefix) for key in self.files)

    def _info(self, name: str, entry: MapFile | None) -> FileInfo:
        if entry is None:
            return FileInfo(_name_base(name), 0, stat.S_IFDIR | 0o555, _EPOCH)
        mode = entry.mode if stat.S_IFMT(entry.mode) else stat.S_IFREG | entry.mode
        return FileInfo(_name_base(name), len(entry.data), mode, entry.mtime)

    def open(self, name: str) -> BinaryIO:
        entry = self._lookup("open", name)
        if entry is None or entry.is_dir:
            raise PathIsADirectoryError("open", name, errno.EISDIR, os.strerror(errno.EISDIR))
        return io.BytesIO(entry.data)

    def stat(self, name: str) -> FileInfo:
        return self._info(name, self._lookup("stat", name))

    def read_file(self, name: str) -> bytes:
        with self.open(name) as f:
            return f.read()

    def read_dir(self, name: str) -> list[DirEntry]:
        entry = self._lookup("read_dir", name)
        if entry is not None and not entry.is_dir:
            raise PathNotADirectoryError(
                "read_dir", name, errno.ENOTDIR, os.strerror(errno.ENOTDIR)
            )
        prefix = "" if name == "." else name + "/"
        children: dict[str, bool] = {}
        for key, value in self.files.items():
            if not key.startswith(prefix) or key == name:
                continue
            child, _, rest = key[len(prefix) :].partition("/")
            children[child] = children.get(child, False) or bool(rest) or value.is_dir

        entries = []
        for child in sorted(children):
            full = prefix + child
            entry = self.files.get(full)
            if children[child] and (entry is None or not entry.is_dir):
                entry = None
            entries.append(DirEntry.from_info(self._info(full, entry)))
        return entries


class SubFS:
    """View of the subtree of ``fsys`` rooted at directory ``dir``."""

    def __init__(self, fsys: FS, dir: str) -> None:
        self.fsys = fsys
        self.dir = dir

    def __repr__(self) -> str:
        return f"SubFS({self.fsys!r}, {self.dir!r})"

    def _full(self, op: str, name: str) -> str:
        if not lexical.valid_path(name):
            raise _invalid(op, name)
        if name == ".":
            return self.dir
        return self.dir + "/" + name

    def open(self, name: str) -> BinaryIO:
        return self.fsys.open(self._full("open", name))

    def stat(self, name: str) -> FileInfo:
        return self.fsys.stat(self._full("stat", name))

    def read_dir(self, name: str) -> list[DirEntry]:
        return self.fsys.read_dir(self._full("read_dir", name))

    def read_file(self, name: str) -> bytes:
        return self.fsys.read_file(self._full("read_file", name))

    def sub(self, name: str) -> FS:
        if not lexical.valid_path(name):
            raise _invalid("sub", name)
        if name == ".":
            return self
        return SubFS(self.fsys, self._full("sub", name))


def sub(fsys: FS, dir: str) -> FS:
    """View of the subtree of ``fsys`` rooted at ``dir``.

    Raises:
        PathError: If ``dir`` is not a valid name.
    """
    if not lexical.valid_path(dir):
        raise _invalid("sub", dir)
    if dir == ".":
        return fsys
    narrow = getattr(fsys, "sub", None)
    if narrow is not None:
        return narrow(dir)
    return SubFS(fsys, dir)


def read_dir(fsys: FS, name: str) -> list[DirEntry]:
    """Entries of the named directory of ``fsys`` sorted by name."""
    return sorted(fsys.read_dir(name), key=lambda e: e.name)


def read_file(fsys: FS, name: str) -> bytes:
    """Content of the named file of ``fsys``."""
    return fsys.read_file(name)


def stat_fs(fsys: FS, name: str) -> FileInfo:
    """FileInfo for the named file of ``fsys``."""
    return fsys.stat(name)
