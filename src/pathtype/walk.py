"""Lexical-order directory traversal with a visitor.

The visitor is called once per entry and returns a WalkAction telling the
traversal what to do next. Returning None is the same as returning CONTINUE.
Exceptions raised by the visitor propagate to the caller unchanged.

Symbolic links are reported but never followed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from pathtype.types import DirEntry, FileInfo

if TYPE_CHECKING:
    from pathtype.path import Path

logger = logging.getLogger(__name__)

__all__ = [
    "Abort",
    "CONTINUE",
    "Continue",
    "SKIP_SUBTREE",
    "SkipSubtree",
    "WalkAction",
    "WalkDirFunc",
    "WalkFunc",
    "walk",
    "walk_dir",
]


class WalkAction:
    """Base class for visitor results."""

    __slots__ = ()


@dataclass(frozen=True)
class Continue(WalkAction):
    """Keep going."""


@dataclass(frozen=True)
class SkipSubtree(WalkAction):
    """Skip the current directory.

    Returned for a file, skips the remaining entries of the directory
    containing that file.
    """


@dataclass(frozen=True)
class Abort(WalkAction):
    """Stop the walk.

    Attributes:
        error: Raised to the walk's caller. None stops without an error.
    """

    error: BaseException | None = None


CONTINUE = Continue()
SKIP_SUBTREE = SkipSubtree()

VisitResult = Union[WalkAction, None]
WalkFunc = Callable[["Path", FileInfo | None, BaseException | None], VisitResult]
WalkDirFunc = Callable[["Path", DirEntry | None, BaseException | None], VisitResult]


def walk(root: Path, visitor: WalkFunc) -> None:
    """Walk the tree rooted at ``root``, calling ``visitor`` for each entry.

    The visitor receives the entry's FileInfo (from lstat). A directory is
    read before the visitor sees it; if reading fails the error is passed
    along and the directory is not descended into. If an entry cannot be
    lstat'ed the visitor gets ``info=None`` and the error.

    Raises:
        BaseException: The error of an ``Abort(error)`` returned by the
            visitor, or anything the visitor raised.
    """
    try:
        info = root.lstat()
    except OSError as e:
        action = _visit(visitor, root, None, e)
    else:
        action = _walk(root, info, visitor)
    _finish(action)


def walk_dir(root: Path, visitor: WalkDirFunc) -> None:
    """Walk the tree rooted at ``root`` passing DirEntry values.

    Unlike ``walk`` the visitor sees a directory before it is read; a read
    failure causes a second call for the same directory with the error.
    Entries are not stat'ed unless the visitor asks for ``entry.info()``.
    """
    try:
        info = root.lstat()
    except OSError as e:
        action = _visit(visitor, root, None, e)
    else:
        action = _walk_dir(root, DirEntry.from_info(info), visitor)
    _finish(action)


def _walk(path: Path, info: FileInfo, visitor: WalkFunc) -> WalkAction:
    if not info.is_dir:
        return _visit(visitor, path, info, None)

    err: OSError | None = None
    names: list[str] = []
    try:
        names = [entry.name for entry in path.read_dir()]
    except OSError as e:
        err = e

    action = _visit(visitor, path, info, err)
    if err is not None or not isinstance(action, Continue):
        return action

    for name in names:
        child = path.join(name)
        try:
            child_info = child.lstat()
        except OSError as e:
            action = _visit(visitor, child, None, e)
            if isinstance(action, Abort):
                return action
            continue

        action = _walk(child, child_info, visitor)
        if isinstance(action, Continue):
            continue
        if isinstance(action, SkipSubtree) and child_info.is_dir:
            logger.debug("walk: skipped %s", child)
            continue
        return action
    return CONTINUE


def _walk_dir(path: Path, entry: DirEntry, visitor: WalkDirFunc) -> WalkAction:
    action = _visit(visitor, path, entry, None)
    if not isinstance(action, Continue) or not entry.is_dir:
        if isinstance(action, SkipSubtree) and entry.is_dir:
            logger.debug("walk_dir: skipped %s", path)
            return CONTINUE
        return action

    entries: list[DirEntry] = []
    try:
        entries = path.read_dir()
    except OSError as e:
        action = _visit(visitor, path, entry, e)
        if isinstance(action, SkipSubtree):
            return CONTINUE
        if not isinstance(action, Continue):
            return action

    for child in entries:
        action = _walk_dir(path.join(child.name), child, visitor)
        if isinstance(action, SkipSubtree):
            break
        if not isinstance(action, Continue):
            return action
    return CONTINUE


def _visit(
    visitor: Callable[..., VisitResult],
    path: Path,
    info: object,
    err: BaseException | None,
) -> WalkAction:
    result = visitor(path, info, err)
    if result is None:
        return CONTINUE
    if not isinstance(result, WalkAction):
        raise TypeError(f"walk visitor must return a WalkAction or None, got {result!r}")
    return result


def _finish(action: WalkAction) -> None:
    if isinstance(action, Abort) and action.error is not None:
        raise action.error
