"""Protocol definitions for the filesystem collaborators.

Path values never call ``os`` directly; they go through a FileSystem so that
tests can substitute a double and so that every call goes through one place
where errors are annotated.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

import os
from typing import BinaryIO, IO, Any, Protocol, runtime_checkable

from pathtype.types import DirEntry, FileInfo


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for host operating system filesystem calls.

    Paths are plain strings already resolved against the working directory.
    Implementations raise ``OSError`` exactly as the OS reports it; callers
    are responsible for annotating errors.
    """

    def stat(self, path: str) -> os.stat_result:
        """Stat a path, following symbolic links.

        Args:
            path: Path to stat.

        Returns:
            Stat result.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        ...

    def lstat(self, path: str) -> os.stat_result:
        """Stat a path without following a final symbolic link.

        Args:
            path: Path to stat.

        Returns:
            Stat result.
        """
        ...

    def open(self, path: str, mode: str = "rb", perm: int = 0o666) -> IO[Any]:
        """Open a file.

        Args:
            path: Path to the file.
            mode: Mode string as accepted by the builtin ``open``.
            perm: Permission bits (before umask) if the file is created.

        Returns:
            Open file object; the caller closes it.
        """
        ...

    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: Path to the file.

        Returns:
            File content.
        """
        ...

    def write_file(self, path: str, data: bytes, perm: int = 0o666) -> None:
        """Write data to a file, creating or truncating it.

        Args:
            path: Path to the file.
            data: Content to write.
            perm: Permission bits (before umask) if the file is created.
        """
        ...

    def mkdir(self, path: str, perm: int = 0o777) -> None:
        """Create a single directory.

        Args:
            path: Path to create.
            perm: Permission bits (before umask).

        Raises:
            FileExistsError: If path already exists.
        """
        ...

    def makedirs(self, path: str, perm: int = 0o777) -> None:
        """Create a directory and any missing parents.

        Args:
            path: Path to create.
            perm: Permission bits (before umask) for created directories.
        """
        ...

    def mkdtemp(self, dir: str, prefix: str, suffix: str) -> str:
        """Create a new uniquely-named directory.

        Args:
            dir: Parent directory.
            prefix: Name prefix.
            suffix: Name suffix.

        Returns:
            Path of the created directory.
        """
        ...

    def mkstemp(self, dir: str, prefix: str, suffix: str) -> tuple[BinaryIO, str]:
        """Create and open a new uniquely-named file.

        Args:
            dir: Parent directory.
            prefix: Name prefix.
            suffix: Name suffix.

        Returns:
            Tuple of (binary file opened for reading and writing, its path).
        """
        ...

    def chmod(self, path: str, mode: int) -> None:
        """Change the mode of a file, following symbolic links."""
        ...

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change the owner of a file, following symbolic links."""
        ...

    def lchown(self, path: str, uid: int, gid: int) -> None:
        """Change the owner of a symbolic link itself."""
        ...

    def utime(self, path: str, atime_ns: int, mtime_ns: int) -> None:
        """Set access and modification times in nanoseconds."""
        ...

    def truncate(self, path: str, size: int) -> None:
        """Change the size of a file."""
        ...

    def rename(self, src: str, dst: str) -> None:
        """Rename (move) a file, replacing ``dst`` if it is not a directory."""
        ...

    def symlink(self, target: str, link: str) -> None:
        """Create ``link`` as a symbolic link to ``target``."""
        ...

    def link(self, src: str, dst: str) -> None:
        """Create ``dst`` as a hard link to ``src``."""
        ...

    def readlink(self, path: str) -> str:
        """Return the destination of a symbolic link."""
        ...

    def remove(self, path: str) -> None:
        """Remove a file or an empty directory."""
        ...

    def remove_all(self, path: str) -> None:
        """Remove a path and everything below it.

        A missing path is not an error. Removal continues past failures and
        the first failure is raised at the end.
        """
        ...

    def list_dir(self, path: str) -> list[str]:
        """Names of the entries of a directory, in no particular order."""
        ...

    def read_dir(self, path: str) -> list[DirEntry]:
        """Entries of a directory sorted by name.

        Args:
            path: Directory to read.

        Returns:
            List of DirEntry objects.
        """
        ...

    def getcwd(self) -> str:
        """Current working directory of the process."""
        ...

    def chdir(self, path: str) -> None:
        """Change the working directory of the process."""
        ...

    def executable(self) -> str:
        """Path of the executable that started the process."""
        ...


@runtime_checkable
class FS(Protocol):
    """Protocol for read-only, slash-separated file system views.

    Names are valid FS names (see ``lexical.valid_path``): unrooted,
    slash-separated, no ``.`` or ``..`` elements, with ``.`` naming the root.
    """

    def open(self, name: str) -> BinaryIO:
        """Open the named file for reading.

        Args:
            name: Name of the file.

        Returns:
            Binary file object; the caller closes it.
        """
        ...

    def stat(self, name: str) -> FileInfo:
        """Describe the named file.

        Args:
            name: Name of the file.

        Returns:
            FileInfo for the file.
        """
        ...

    def read_dir(self, name: str) -> list[DirEntry]:
        """Entries of the named directory sorted by name.

        Args:
            name: Name of the directory.

        Returns:
            List of DirEntry objects.
        """
        ...

    def read_file(self, name: str) -> bytes:
        """Content of the named file.

        Args:
            name: Name of the file.

        Returns:
            File content.
        """
        ...
