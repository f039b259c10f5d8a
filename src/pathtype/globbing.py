"""Filesystem globbing built on the pattern matcher."""

from __future__ import annotations

import logging
import stat
from typing import TYPE_CHECKING

from pathtype import lexical
from pathtype.errors import BadPatternError
from pathtype.pattern import match

if TYPE_CHECKING:
    from pathtype.context import PathContext

logger = logging.getLogger(__name__)


def glob(ctx: PathContext, pattern: str) -> list[str]:
    """Names of all files matching ``pattern``.

    Hierarchical patterns such as ``/usr/*/bin/ed`` are supported; each
    element is matched with ``pattern.match``. Directory read errors are
    ignored. A pattern without metacharacters is returned as is when it
    exists.

    Args:
        ctx: Context providing flavor and filesystem.
        pattern: Glob pattern.

    Returns:
        Matching names, sorted within each directory.

    Raises:
        BadPatternError: If the pattern is malformed.
    """
    return _glob(ctx, pattern, 0)


def _glob(ctx: PathContext, pattern: str, depth: int) -> list[str]:
    flavor = ctx.flavor
    if depth >= ctx.glob_depth_limit:
        raise BadPatternError()
    # Check the pattern is well-formed.
    match(flavor, pattern, "")

    if not lexical.has_meta(flavor, pattern):
        try:
            ctx.filesystem.lstat(ctx.resolve(pattern))
        except OSError:
            return []
        return [pattern]

    dir_part, file_part = lexical.split(flavor, pattern)
    vol_len, dir_part = _clean_glob_dir(ctx, dir_part)

    if not lexical.has_meta(flavor, dir_part[vol_len:]):
        return _glob_in(ctx, dir_part, file_part, [])

    # Prevent infinite recursion.
    if dir_part == pattern:
        raise BadPatternError()

    matches: list[str] = []
    for d in _glob(ctx, dir_part, depth + 1):
        _glob_in(ctx, d, file_part, matches)
    return matches


def _clean_glob_dir(ctx: PathContext, path: str) -> tuple[int, str]:
    """Drop the trailing separator of a split directory part.

    Returns:
        Tuple of (length of the volume prefix to skip, cleaned directory).
    """
    flavor = ctx.flavor
    vol_len = flavor.volume_name_len(path)
    if path == "":
        return 0, "."
    if vol_len + 1 == len(path) and flavor.is_sep(path[-1]):
        # /, \, C:\ and C:/
        return vol_len + 1, path
    if vol_len == len(path) and len(path) == 2:
        # C: becomes C:.
        return vol_len, path + "."
    if vol_len >= len(path):
        vol_len = len(path) - 1
    return vol_len, path[:-1]


def _glob_in(ctx: PathContext, directory: str, pattern: str, matches: list[str]) -> list[str]:
    """Append the entries of ``directory`` matching ``pattern`` to ``matches``."""
    fs = ctx.filesystem
    real = ctx.resolve(directory)
    try:
        st = fs.stat(real)
        if not stat.S_ISDIR(st.st_mode):
            return matches
        names = fs.list_dir(real)
    except OSError as e:
        logger.debug("glob: ignoring %s: %s", directory, e)
        return matches

    for name in sorted(names):
        if match(ctx.flavor, pattern, name):
            matches.append(ctx.flavor.join([directory, name]))
    return matches
