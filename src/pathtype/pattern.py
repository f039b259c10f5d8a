"""Shell-style pattern matching against whole path names.

Pattern syntax::

    pattern:
        { term }
    term:
        '*'         any sequence of non-separator characters
        '?'         any single non-separator character
        '[' [ '^' ] { character-range } ']'
                    character class (must be non-empty)
        c           character c (c != '*', '?', '\\', '[')
        '\\' c      character c

    character-range:
        c           character c (c != '\\', '-', ']')
        '\\' c      character c
        lo '-' hi   character c for lo <= c <= hi

Escaping is disabled for flavors where ``\\`` is a separator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathtype.errors import BadPatternError

if TYPE_CHECKING:
    from pathtype.flavors import Flavor

__all__ = ["match"]


def match(flavor: Flavor, pattern: str, name: str) -> bool:
    """Report whether ``name`` matches the shell pattern as a whole.

    ``*`` and ``?`` never match the flavor separator.

    Raises:
        BadPatternError: If the pattern is malformed. The whole pattern is
            checked, even the part after the first failed chunk.
    """
    while pattern:
        star, chunk, pattern = _scan_chunk(flavor, pattern)
        if star and chunk == "":
            # Trailing * matches the rest of the name unless it has a separator.
            return flavor.sep not in name

        rest = _match_chunk(flavor, chunk, name)
        # The last chunk must consume the whole name.
        if rest is not None and (rest == "" or pattern):
            name = rest
            continue

        if star:
            # Retry after skipping i+1 characters; never skip a separator.
            matched = False
            for i, c in enumerate(name):
                if c == flavor.sep:
                    break
                rest = _match_chunk(flavor, chunk, name[i + 1 :])
                if rest is not None:
                    if not pattern and rest:
                        continue
                    name = rest
                    matched = True
                    break
            if matched:
                continue

        # Report malformed input even when the match already failed.
        while pattern:
            _, chunk, pattern = _scan_chunk(flavor, pattern)
            _match_chunk(flavor, chunk, "")
        return False

    return name == ""


def _scan_chunk(flavor: Flavor, pattern: str) -> tuple[bool, str, str]:
    """Split off leading stars and the literal chunk up to the next star."""
    star = False
    while pattern.startswith("*"):
        pattern = pattern[1:]
        star = True

    in_range = False
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "\\":
            if flavor.escaping and i + 1 < len(pattern):
                i += 1
        elif c == "[":
            in_range = True
        elif c == "]":
            in_range = False
        elif c == "*" and not in_range:
            break
        i += 1
    return star, pattern[:i], pattern[i:]


def _match_chunk(flavor: Flavor, chunk: str, s: str) -> str | None:
    """Match ``chunk`` against the start of ``s``.

    Returns:
        The unmatched remainder of ``s``, or None if the chunk does not match.

    Raises:
        BadPatternError: If the chunk is malformed. Parsing continues after a
            failed match so that errors are always detected.
    """
    failed = False
    while chunk:
        if not failed and s == "":
            failed = True
        c = chunk[0]
        if c == "[":
            r = ""
            if not failed:
                r, s = s[0], s[1:]
            chunk = chunk[1:]
            negated = chunk.startswith("^")
            if negated:
                chunk = chunk[1:]
            matched = False
            nrange = 0
            while True:
                if chunk.startswith("]") and nrange > 0:
                    chunk = chunk[1:]
                    break
                lo, chunk = _get_esc(flavor, chunk)
                hi = lo
                if chunk[0] == "-":
                    hi, chunk = _get_esc(flavor, chunk[1:])
                if not failed and lo <= r <= hi:
                    matched = True
                nrange += 1
            if matched == negated:
                failed = True
        elif c == "?":
            if not failed:
                if s[0] == flavor.sep:
                    failed = True
                s = s[1:]
            chunk = chunk[1:]
        else:
            if c == "\\" and flavor.escaping:
                chunk = chunk[1:]
                if chunk == "":
                    raise BadPatternError()
            if not failed:
                if chunk[0] != s[0]:
                    failed = True
                s = s[1:]
            chunk = chunk[1:]
    if failed:
        return None
    return s


def _get_esc(flavor: Flavor, chunk: str) -> tuple[str, str]:
    """Read one possibly-escaped character of a character class."""
    if chunk == "" or chunk[0] in "-]":
        raise BadPatternError()
    if chunk[0] == "\\" and flavor.escaping:
        chunk = chunk[1:]
        if chunk == "":
            raise BadPatternError()
    r, rest = chunk[0], chunk[1:]
    if rest == "":
        raise BadPatternError()
    return r, rest
