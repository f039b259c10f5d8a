"""Symbolic link evaluation."""

from __future__ import annotations

import errno
import logging
import os
import stat
from typing import TYPE_CHECKING

from pathtype import lexical
from pathtype.errors import PathNotADirectoryError, TooManyLinksError, wrap_os_errors

if TYPE_CHECKING:
    from pathtype.context import PathContext
    from pathtype.flavors import Flavor

logger = logging.getLogger(__name__)


def eval_symlinks(ctx: PathContext, path: str) -> str:
    """Return ``path`` with every symbolic link component resolved.

    Components are resolved one at a time from the left. A relative path
    stays relative unless a link points somewhere absolute. The result is
    cleaned.

    Args:
        ctx: Context providing flavor, filesystem and the link limit.
        path: Path to evaluate.

    Returns:
        The evaluated path.

    Raises:
        PathError: If a component cannot be lstat'ed or read.
        PathNotADirectoryError: If a non-final component is not a directory.
        TooManyLinksError: If more than ``ctx.max_symlinks`` links are followed.
    """
    flavor = ctx.flavor
    fs = ctx.filesystem
    sep = flavor.sep
    original = path

    vol_len = flavor.volume_name_len(path)
    if vol_len < len(path) and flavor.is_sep(path[vol_len]):
        vol_len += 1
    vol = path[:vol_len]
    dest = vol
    links_walked = 0

    end = vol_len
    while True:
        start = end
        if start >= len(path):
            break
        while start < len(path) and flavor.is_sep(path[start]):
            start += 1
        end = start
        while end < len(path) and not flavor.is_sep(path[end]):
            end += 1

        elem = path[start:end]
        if elem == "":
            break
        if elem == ".":
            continue
        if elem == "..":
            r = _last_sep(flavor, dest, vol_len)
            if r < vol_len or dest[r + 1 :] == "..":
                # Nothing left to back out of; keep the "..".
                if len(dest) > vol_len:
                    dest += sep
                dest += ".."
            else:
                dest = dest[:r]
            continue

        if len(dest) > flavor.volume_name_len(dest) and not flavor.is_sep(dest[-1]):
            dest += sep
        dest += elem

        with wrap_os_errors("lstat", dest):
            st = fs.lstat(ctx.resolve(dest))
        if not stat.S_ISLNK(st.st_mode):
            if not stat.S_ISDIR(st.st_mode) and end < len(path):
                raise PathNotADirectoryError(
                    "eval_symlinks", dest, errno.ENOTDIR, os.strerror(errno.ENOTDIR)
                )
            continue

        links_walked += 1
        if links_walked > ctx.max_symlinks:
            raise TooManyLinksError("eval_symlinks", original, ctx.max_symlinks)

        with wrap_os_errors("readlink", dest):
            link = fs.readlink(ctx.resolve(dest))
        logger.debug("eval_symlinks: %s -> %s", dest, link)

        path = link + path[end:]
        v = flavor.volume_name_len(link)
        if v > 0:
            # Link to a volume is absolute.
            if v < len(link) and flavor.is_sep(link[v]):
                v += 1
            vol = link[:v]
            vol_len = v
            dest = vol
            end = v
        elif link and flavor.is_sep(link[0]):
            vol = link[:1]
            vol_len = 1
            dest = vol
            end = 1
        else:
            # Relative link replaces the last component of dest.
            r = _last_sep(flavor, dest, vol_len)
            dest = vol if r < vol_len else dest[:r]
            end = 0

    return lexical.clean(flavor, dest)


def _last_sep(flavor: Flavor, path: str, floor: int) -> int:
    """Index of the last separator at or after ``floor``, else ``floor - 1``."""
    r = len(path) - 1
    while r >= floor:
        if flavor.is_sep(path[r]):
            break
        r -= 1
    return r
