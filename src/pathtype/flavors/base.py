"""Base flavor implementation with shared behavior.

A flavor captures everything platform-specific about path text: the
separator, the list separator, volume syntax, whether ``\\`` escapes in
patterns, case sensitivity of comparisons, and where the well-known user
directories live. The lexical engine is written once against this interface.

Pattern: Strategy - one flavor instance is selected at startup (or injected in
tests) and passed to the lexical functions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from pathtype.errors import EnvironmentLookupError


class BaseFlavor(ABC):
    """Base class for flavors.

    Subclasses set the class attributes and implement volume and absolute-path
    detection plus joining, which is where the platforms genuinely diverge.
    """

    name: str
    sep: str
    list_sep: str
    escaping: bool
    case_sensitive: bool

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

    def is_sep(self, c: str) -> bool:
        """Report whether ``c`` is a path separator for this flavor."""
        return c == self.sep

    @abstractmethod
    def volume_name_len(self, path: str) -> int:
        """Length of the leading volume name of ``path`` (0 if none)."""
        ...

    @abstractmethod
    def is_abs(self, path: str) -> bool:
        """Report whether ``path`` is absolute."""
        ...

    @abstractmethod
    def join(self, elems: Sequence[str]) -> str:
        """Join path elements and clean the result."""
        ...

    def post_clean(self, rest: str, cleaned: str, vol_len: int) -> str:
        """Adjust a cleaned path so it cannot change meaning.

        Args:
            rest: Input path with the volume removed.
            cleaned: Cleaned output (flavor separators, volume removed).
            vol_len: Length of the volume that was removed.

        Returns:
            The adjusted cleaned path. The default returns it unchanged.
        """
        return cleaned

    def split_list(self, value: str) -> list[str]:
        """Split a list of paths joined by the list separator."""
        if value == "":
            return []
        return value.split(self.list_sep)

    def same_word(self, a: str, b: str) -> bool:
        """Compare two path elements the way this flavor's filesystem would."""
        if self.case_sensitive:
            return a == b
        return a.casefold() == b.casefold()

    # -------------------------------------------------------------------------
    # Well-known directories
    # -------------------------------------------------------------------------

    def temp_dir(self, environ: Mapping[str, str]) -> str:
        """Default directory for temporary files."""
        return environ.get("TMPDIR") or "/tmp"

    def home_dir(self, environ: Mapping[str, str]) -> str:
        """Current user's home directory.

        Raises:
            EnvironmentLookupError: If ``$HOME`` is not set.
        """
        home = environ.get("HOME", "")
        if not home:
            raise EnvironmentLookupError("$HOME is not defined")
        return home

    def cache_dir(self, environ: Mapping[str, str]) -> str:
        """Root directory for user-specific cached data."""
        return self._xdg_dir(environ, "XDG_CACHE_HOME", ".cache")

    def config_dir(self, environ: Mapping[str, str]) -> str:
        """Root directory for user-specific configuration data."""
        return self._xdg_dir(environ, "XDG_CONFIG_HOME", ".config")

    def _xdg_dir(self, environ: Mapping[str, str], var: str, fallback: str) -> str:
        value = environ.get(var, "")
        if value == "":
            home = environ.get("HOME", "")
            if home == "":
                raise EnvironmentLookupError(f"neither ${var} nor $HOME are defined")
            return home + self.sep + fallback
        if not self.is_abs(value):
            raise EnvironmentLookupError(f"path in ${var} is relative")
        return value
