"""Filesystem abstraction over the host operating system.

RealFileSystem wraps ``os``, ``shutil`` and ``tempfile`` one call at a time.
It adds no retries, caching or validation; errors are whatever the OS raised.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import sys
import tempfile
from typing import IO, Any, BinaryIO

from pathtype.types import DirEntry, FileInfo

logger = logging.getLogger(__name__)


class RealFileSystem:
    """Production filesystem implementation.

    Satisfies the FileSystem protocol structurally.
    """

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def open(self, path: str, mode: str = "rb", perm: int = 0o666) -> IO[Any]:
        """Open a file, creating it with ``perm`` if the mode allows creation."""
        return open(path, mode, opener=lambda p, flags: os.open(p, flags, perm))

    def read_file(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_file(self, path: str, data: bytes, perm: int = 0o666) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as f:
            f.write(data)

    def mkdir(self, path: str, perm: int = 0o777) -> None:
        os.mkdir(path, perm)

    def makedirs(self, path: str, perm: int = 0o777) -> None:
        os.makedirs(path, perm, exist_ok=True)

    def mkdtemp(self, dir: str, prefix: str, suffix: str) -> str:
        created = tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=dir)
        logger.debug("Created temporary directory %s", created)
        return created

    def mkstemp(self, dir: str, prefix: str, suffix: str) -> tuple[BinaryIO, str]:
        fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=dir)
        logger.debug("Created temporary file %s", name)
        return os.fdopen(fd, "w+b"), name

    def chmod(self, path: str, mode: int) -> None:
        os.chmod(path, mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        os.chown(path, uid, gid)

    def lchown(self, path: str, uid: int, gid: int) -> None:
        os.lchown(path, uid, gid)

    def utime(self, path: str, atime_ns: int, mtime_ns: int) -> None:
        os.utime(path, ns=(atime_ns, mtime_ns))

    def truncate(self, path: str, size: int) -> None:
        os.truncate(path, size)

    def rename(self, src: str, dst: str) -> None:
        os.replace(src, dst)

    def symlink(self, target: str, link: str) -> None:
        os.symlink(target, link)

    def link(self, src: str, dst: str) -> None:
        os.link(src, dst)

    def readlink(self, path: str) -> str:
        return os.readlink(path)

    def remove(self, path: str) -> None:
        """Remove a file, or failing that an empty directory.

        The unlink error is reported unless the path is a directory.
        """
        try:
            os.unlink(path)
            return
        except OSError as e:
            err = e
        try:
            os.rmdir(path)
            return
        except NotADirectoryError:
            pass
        except OSError as e:
            err = e
        raise err

    def remove_all(self, path: str) -> None:
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return
        if not stat.S_ISDIR(st.st_mode):
            try:
                os.unlink(path)
            except FileNotFoundError:
                pass
            return

        failures: list[OSError] = []

        def record(func: Any, failed_path: str, exc: BaseException) -> None:
            if isinstance(exc, FileNotFoundError):
                return
            logger.debug("remove_all: %s failed on %s: %s", func.__name__, failed_path, exc)
            if isinstance(exc, OSError):
                failures.append(exc)
            else:
                raise exc

        shutil.rmtree(path, onexc=record)
        if failures:
            raise failures[0]

    def list_dir(self, path: str) -> list[str]:
        return os.listdir(path)

    def read_dir(self, path: str) -> list[DirEntry]:
        with os.scandir(path) as it:
            entries = [_dir_entry(e) for e in it]
        entries.sort(key=lambda e: e.name)
        return entries

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        os.chdir(path)

    def executable(self) -> str:
        if not sys.executable:
            raise OSError(errno.ENOENT, "executable path is unknown")
        return os.path.abspath(sys.executable)


def _dir_entry(entry: os.DirEntry[str]) -> DirEntry:
    return DirEntry(
        name=entry.name,
        is_dir=entry.is_dir(follow_symlinks=False),
        is_symlink=entry.is_symlink(),
        _info=lambda: FileInfo.from_stat(entry.name, entry.stat(follow_symlinks=False)),
    )
