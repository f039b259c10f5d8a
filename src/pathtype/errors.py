"""Exception types raised by pathtype.

Two families exist. Lexical errors are deterministic functions of the input
text. OS errors wrap whatever the operating system reported, adding the
operation name and the operand path while keeping the builtin exception kind
(a missing file is still a ``FileNotFoundError``).
"""

from __future__ import annotations

import errno
from collections.abc import Iterator
from contextlib import contextmanager

__all__ = [
    "BadPatternError",
    "EnvironmentLookupError",
    "PathError",
    "PathExistsError",
    "PathIsADirectoryError",
    "PathNotADirectoryError",
    "PathNotFoundError",
    "PathPermissionError",
    "PathTypeError",
    "RelationError",
    "TooManyLinksError",
    "wrap_os_errors",
]


class PathTypeError(Exception):
    """Base class for all pathtype errors."""

    pass


class BadPatternError(PathTypeError, ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, message: str = "syntax error in pattern") -> None:
        super().__init__(message)


class RelationError(PathTypeError, ValueError):
    """Raised when no relative path exists between two paths."""

    def __init__(self, base: str, target: str) -> None:
        super().__init__(f"Rel: can't make {target} relative to {base}")
        self.base = base
        self.target = target


class EnvironmentLookupError(PathTypeError, LookupError):
    """Raised when a well-known directory cannot be determined."""

    pass


class PathError(PathTypeError, OSError):
    """An OS error annotated with the failing operation and its operand.

    Attributes:
        op: Operation name (``stat``, ``rename``, ...).
        filename: Path the operation was applied to.
        filename2: Second path for two-path operations (``rename``, ``symlink``).
    """

    def __init__(
        self,
        op: str,
        path: str,
        err_no: int | None,
        strerror: str | None,
        path2: str | None = None,
    ) -> None:
        super().__init__(err_no, strerror, path, None, path2)
        self.op = op

    def __str__(self) -> str:
        if self.filename2 is not None:
            return f"{self.op} {self.filename} {self.filename2}: {self.strerror}"
        return f"{self.op} {self.filename}: {self.strerror}"

    def __reduce__(self):
        return (
            type(self),
            (self.op, self.filename, self.errno, self.strerror, self.filename2),
        )


class PathNotFoundError(PathError, FileNotFoundError):
    pass


class PathExistsError(PathError, FileExistsError):
    pass


class PathPermissionError(PathError, PermissionError):
    pass


class PathNotADirectoryError(PathError, NotADirectoryError):
    pass


class PathIsADirectoryError(PathError, IsADirectoryError):
    pass


class TooManyLinksError(PathError):
    """Raised when symlink resolution exceeds the link limit."""

    def __init__(self, op: str, path: str, limit: int) -> None:
        super().__init__(op, path, errno.ELOOP, f"too many links (limit {limit})")
        self.limit = limit

    def __reduce__(self):
        return (type(self), (self.op, self.filename, self.limit))


# Checked in order; the first builtin kind the caught error is an instance of wins.
_KINDS: list[tuple[type[OSError], type[PathError]]] = [
    (FileNotFoundError, PathNotFoundError),
    (FileExistsError, PathExistsError),
    (PermissionError, PathPermissionError),
    (NotADirectoryError, PathNotADirectoryError),
    (IsADirectoryError, PathIsADirectoryError),
]


def path_error_for(
    op: str, path: str, exc: OSError, path2: str | None = None
) -> PathError:
    """Build the PathError subclass matching the kind of ``exc``.

    Args:
        op: Operation name.
        path: Operand path as given by the caller.
        exc: The error reported by the operating system.
        path2: Optional second operand.

    Returns:
        A PathError instance (not raised).
    """
    if isinstance(exc, PathError):
        return exc
    cls = PathError
    for kind, wrapped in _KINDS:
        if isinstance(exc, kind):
            cls = wrapped
            break
    strerror = exc.strerror or str(exc)
    return cls(op, path, exc.errno, strerror, path2)


@contextmanager
def wrap_os_errors(op: str, path: str, path2: str | None = None) -> Iterator[None]:
    """Re-raise any OSError from the block as a PathError naming ``op``.

    Example:
        >>> with wrap_os_errors("remove", "/nope"):
        ...     os.remove("/nope")
        Traceback (most recent call last):
        pathtype.errors.PathNotFoundError: remove /nope: No such file or directory
    """
    try:
        yield
    except PathError:
        raise
    except OSError as e:
        raise path_error_for(op, path, e, path2) from e
