"""Lexical path operations.

Every function here works on path text alone and never touches the
filesystem. Platform differences come from the flavor argument, so both
POSIX and Windows behavior can be exercised from any host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtype.errors import RelationError

if TYPE_CHECKING:
    from pathtype.flavors import Flavor

__all__ = [
    "abs_path",
    "base",
    "clean",
    "dir",
    "ext",
    "from_slash",
    "has_meta",
    "is_abs",
    "join",
    "rel",
    "split",
    "split_list",
    "to_slash",
    "valid_path",
    "volume_name",
]


def volume_name(flavor: Flavor, path: str) -> str:
    """Leading volume name (``C:`` or ``\\\\host\\share``), empty on POSIX."""
    return path[: flavor.volume_name_len(path)]


def is_abs(flavor: Flavor, path: str) -> bool:
    """Report whether ``path`` is absolute."""
    return flavor.is_abs(path)


def to_slash(flavor: Flavor, path: str) -> str:
    """Replace each separator with ``/``."""
    if flavor.sep == "/":
        return path
    return path.replace(flavor.sep, "/")


def from_slash(flavor: Flavor, path: str) -> str:
    """Replace each ``/`` with the flavor separator."""
    if flavor.sep == "/":
        return path
    return path.replace("/", flavor.sep)


def clean(flavor: Flavor, path: str) -> str:
    """Return the shortest path name equivalent to ``path``.

    Applies these rules until nothing changes:

    1. Replace multiple separators with a single one.
    2. Eliminate each ``.`` element.
    3. Eliminate each inner ``..`` element with the non-``..`` element
       preceding it.
    4. Eliminate ``..`` elements that begin a rooted path.

    The result ends in a separator only if it is a root. An empty result
    becomes ``.``. Finally, slashes are replaced with the flavor separator.
    """
    vol_len = flavor.volume_name_len(path)
    rest = path[vol_len:]
    if rest == "":
        if vol_len > 1 and flavor.is_sep(path[0]) and flavor.is_sep(path[1]):
            # bare UNC volume
            return from_slash(flavor, path)
        return path + "."

    rooted = flavor.is_sep(rest[0])
    out: list[str] = []
    for elem in _elements(flavor, rest):
        if elem == "" or elem == ".":
            continue
        if elem == "..":
            if out and out[-1] != "..":
                out.pop()
            elif not rooted:
                out.append("..")
            continue
        out.append(elem)

    cleaned = flavor.sep.join(out)
    if rooted:
        cleaned = flavor.sep + cleaned
    if cleaned == "":
        cleaned = "."
    cleaned = flavor.post_clean(rest, cleaned, vol_len)
    return from_slash(flavor, path[:vol_len] + cleaned)


def split(flavor: Flavor, path: str) -> tuple[str, str]:
    """Split ``path`` immediately after its final separator.

    Returns:
        ``(dir, file)`` with ``dir + file == path``. Without a separator,
        ``dir`` is empty.
    """
    vol_len = flavor.volume_name_len(path)
    i = len(path) - 1
    while i >= vol_len and not flavor.is_sep(path[i]):
        i -= 1
    return path[: i + 1], path[i + 1 :]


def base(flavor: Flavor, path: str) -> str:
    """Last element of ``path``, ignoring trailing separators."""
    if path == "":
        return "."
    end = len(path)
    while end > 0 and flavor.is_sep(path[end - 1]):
        end -= 1
    path = path[:end]
    path = path[flavor.volume_name_len(path) :]
    i = len(path) - 1
    while i >= 0 and not flavor.is_sep(path[i]):
        i -= 1
    if i >= 0:
        path = path[i + 1 :]
    if path == "":
        return flavor.sep
    return path


def dir(flavor: Flavor, path: str) -> str:  # noqa: A001
    """All but the last element of ``path``, cleaned."""
    vol = volume_name(flavor, path)
    i = len(path) - 1
    while i >= len(vol) and not flavor.is_sep(path[i]):
        i -= 1
    parent = clean(flavor, path[len(vol) : i + 1])
    if parent == "." and len(vol) > 2:
        # UNC volume with nothing after it
        return vol
    return vol + parent


def ext(flavor: Flavor, path: str) -> str:
    """File name extension of the final element.

    The extension starts at the last dot of the final element. A dot that is
    the first character of the element does not start an extension, so
    ``.bashrc`` has none.
    """
    i = len(path) - 1
    while i >= 0 and not flavor.is_sep(path[i]):
        if path[i] == ".":
            if i == 0 or flavor.is_sep(path[i - 1]):
                return ""
            return path[i:]
        i -= 1
    return ""


def join(flavor: Flavor, *elems: str) -> str:
    """Join elements with one separator and clean the result.

    Empty elements are ignored; if all are empty the result is ``""``.
    """
    return flavor.join(elems)


def split_list(flavor: Flavor, value: str) -> list[str]:
    """Split a PATH-style list. An empty string yields an empty list."""
    return flavor.split_list(value)


def rel(flavor: Flavor, basepath: str, targpath: str) -> str:
    """Relative path from ``basepath`` to ``targpath``, lexically.

    ``clean(join(basepath, rel(basepath, targpath)))`` equals
    ``clean(targpath)``.

    Raises:
        RelationError: If one path is rooted and the other is not, the
            volumes differ, or reaching the target would require knowing
            the name of a directory above ``basepath``.
    """
    base_vol = volume_name(flavor, basepath)
    targ_vol = volume_name(flavor, targpath)
    base_clean = clean(flavor, basepath)
    targ_clean = clean(flavor, targpath)
    if flavor.same_word(targ_clean, base_clean):
        return "."

    b = base_clean[len(base_vol) :]
    t = targ_clean[len(targ_vol) :]
    if b == ".":
        b = ""
    elif b == "" and flavor.volume_name_len(base_vol) > 2:
        # UNC root
        b = flavor.sep
    if t == ".":
        t = ""

    base_rooted = b.startswith(flavor.sep)
    targ_rooted = t.startswith(flavor.sep)
    if base_rooted != targ_rooted or not flavor.same_word(base_vol, targ_vol):
        raise RelationError(basepath, targpath)

    base_elems = _clean_elements(flavor, b)
    targ_elems = _clean_elements(flavor, t)
    common = 0
    for be, te in zip(base_elems, targ_elems):
        if not flavor.same_word(be, te):
            break
        common += 1

    if common < len(base_elems) and base_elems[common] == "..":
        raise RelationError(basepath, targpath)

    ups = [".."] * (len(base_elems) - common)
    return flavor.sep.join(ups + targ_elems[common:])


def abs_path(flavor: Flavor, path: str, cwd: str) -> str:
    """Absolute form of ``path``, joining relative paths onto ``cwd``."""
    if flavor.is_abs(path):
        return clean(flavor, path)
    return flavor.join([cwd, path])


def has_meta(flavor: Flavor, pattern: str) -> bool:
    """Report whether ``pattern`` contains any glob metacharacter."""
    magic = "*?[\\" if flavor.escaping else "*?["
    return any(c in magic for c in pattern)


def valid_path(name: str) -> bool:
    """Report whether ``name`` is a valid name for an FS view.

    Valid names are unrooted, slash-separated, UTF-8 encodable, and contain
    no empty, ``.`` or ``..`` elements. The root is named ``.``.
    """
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    if name == ".":
        return True
    return all(elem not in ("", ".", "..") for elem in name.split("/"))


def _elements(flavor: Flavor, path: str) -> list[str]:
    """Split on any separator the flavor recognizes, keeping empties."""
    if flavor.sep != "/" and flavor.is_sep("/"):
        path = path.replace("/", flavor.sep)
    return path.split(flavor.sep)


def _clean_elements(flavor: Flavor, cleaned: str) -> list[str]:
    """Elements of an already-cleaned, volume-free path."""
    stripped = cleaned[1:] if cleaned.startswith(flavor.sep) else cleaned
    if stripped == "":
        return []
    return stripped.split(flavor.sep)
