"""POSIX flavor: ``/`` separators, no volumes, ``\\`` escapes in patterns."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pathtype import lexical
from pathtype.errors import EnvironmentLookupError
from pathtype.flavors.base import BaseFlavor


class PosixFlavor(BaseFlavor):
    """Linux and other Unix-like systems."""

    name = "posix"
    sep = "/"
    list_sep = ":"
    escaping = True
    case_sensitive = True

    def volume_name_len(self, path: str) -> int:
        return 0

    def is_abs(self, path: str) -> bool:
        return path.startswith("/")

    def join(self, elems: Sequence[str]) -> str:
        parts = [e for e in elems if e != ""]
        if not parts:
            return ""
        return lexical.clean(self, "/".join(parts))


class DarwinFlavor(PosixFlavor):
    """macOS: POSIX lexical rules, Library-based user directories."""

    name = "darwin"

    def cache_dir(self, environ: Mapping[str, str]) -> str:
        return self._library_dir(environ, "Caches")

    def config_dir(self, environ: Mapping[str, str]) -> str:
        return self._library_dir(environ, "Application Support")

    def _library_dir(self, environ: Mapping[str, str], leaf: str) -> str:
        home = environ.get("HOME", "")
        if home == "":
            raise EnvironmentLookupError("$HOME is not defined")
        return f"{home}/Library/{leaf}"
