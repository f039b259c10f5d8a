"""Platform flavors for path text."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from .base import BaseFlavor
from .posix import DarwinFlavor, PosixFlavor
from .windows import WindowsFlavor


@runtime_checkable
class Flavor(Protocol):
    """Protocol defining the interface the lexical engine needs.

    New platforms can be supported by adding a flavor without touching the
    lexical algorithms.
    """

    name: str
    sep: str
    list_sep: str
    escaping: bool
    case_sensitive: bool

    def is_sep(self, c: str) -> bool:
        raise NotImplementedError

    def volume_name_len(self, path: str) -> int:
        raise NotImplementedError

    def is_abs(self, path: str) -> bool:
        raise NotImplementedError

    def join(self, elems: Sequence[str]) -> str:
        raise NotImplementedError

    def post_clean(self, rest: str, cleaned: str, vol_len: int) -> str:
        raise NotImplementedError

    def split_list(self, value: str) -> list[str]:
        raise NotImplementedError

    def same_word(self, a: str, b: str) -> bool:
        raise NotImplementedError

    def temp_dir(self, environ: Mapping[str, str]) -> str:
        raise NotImplementedError

    def home_dir(self, environ: Mapping[str, str]) -> str:
        raise NotImplementedError

    def cache_dir(self, environ: Mapping[str, str]) -> str:
        raise NotImplementedError

    def config_dir(self, environ: Mapping[str, str]) -> str:
        raise NotImplementedError


__all__ = [
    "BaseFlavor",
    "DarwinFlavor",
    "Flavor",
    "PosixFlavor",
    "WindowsFlavor",
    "FLAVORS",
    "get_flavor",
    "host_flavor",
    "host_flavor_name",
]


FLAVORS: dict[str, type[BaseFlavor]] = {
    "posix": PosixFlavor,
    "darwin": DarwinFlavor,
    "windows": WindowsFlavor,
}


def host_flavor_name(platform: str | None = None) -> str:
    """Name of the flavor matching a ``sys.platform`` value.

    Args:
        platform: Platform string; defaults to ``sys.platform``.

    Returns:
        One of the keys of FLAVORS.
    """
    platform = platform or sys.platform
    if platform == "win32":
        return "windows"
    if platform == "darwin":
        return "darwin"
    return "posix"


def get_flavor(name: str) -> BaseFlavor:
    """Get a flavor instance by name.

    Args:
        name: Flavor name (posix, darwin, windows) or "auto" for the host.

    Returns:
        Flavor instance.

    Raises:
        ValueError: If the flavor is not supported.
    """
    if name == "auto":
        name = host_flavor_name()
    if name not in FLAVORS:
        raise ValueError(f"Unknown flavor: {name}. Supported: {list(FLAVORS.keys())}")
    return FLAVORS[name]()


def host_flavor() -> BaseFlavor:
    """Flavor of the running interpreter's platform."""
    return get_flavor(host_flavor_name())
