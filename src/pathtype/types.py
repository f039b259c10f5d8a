"""Shared data types for pathtype."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

__all__ = ["DirEntry", "FileInfo"]


@dataclass(frozen=True)
class FileInfo:
    """Metadata describing a file.

    Attributes:
        name: Base name of the file.
        size: Length in bytes.
        mode: Full ``st_mode`` value (type and permission bits).
        mtime: Modification time (UTC).
    """

    name: str
    size: int
    mode: int
    mtime: datetime

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> FileInfo:
        """Build a FileInfo from an ``os.stat_result``."""
        return cls(
            name=name,
            size=st.st_size,
            mode=st.st_mode,
            mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def is_regular(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def perm(self) -> int:
        """Permission bits only."""
        return stat.S_IMODE(self.mode)


@dataclass(frozen=True)
class DirEntry:
    """An entry read from a directory.

    ``info()`` is evaluated on demand so that walking a tree does not stat
    every entry.
    """

    name: str
    is_dir: bool
    is_symlink: bool = False
    _info: Callable[[], FileInfo] | None = field(default=None, repr=False, compare=False)

    def info(self) -> FileInfo:
        """Return the entry's FileInfo.

        Raises:
            OSError: If the entry can no longer be stat'ed.
        """
        if self._info is None:
            raise FileNotFoundError(f"no file info for {self.name}")
        return self._info()

    @classmethod
    def from_info(cls, info: FileInfo) -> DirEntry:
        """Wrap an already-known FileInfo as a DirEntry."""
        return cls(
            name=info.name,
            is_dir=info.is_dir,
            is_symlink=info.is_symlink,
            _info=lambda: info,
        )
