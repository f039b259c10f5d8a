"""Process and user environment queries returning Path values."""

from __future__ import annotations

from pathtype.context import PathContext, default_context
from pathtype.errors import wrap_os_errors
from pathtype.path import Path

__all__ = [
    "executable",
    "getwd",
    "temp_dir",
    "user_cache_dir",
    "user_config_dir",
    "user_home_dir",
]


def getwd(ctx: PathContext | None = None) -> Path:
    """Rooted path of the current directory."""
    ctx = ctx or default_context()
    return Path(ctx.getwd(), ctx)


def temp_dir(ctx: PathContext | None = None) -> Path:
    """Default directory for temporary files.

    On POSIX this is ``$TMPDIR`` if set, else ``/tmp``. The directory is not
    guaranteed to exist.
    """
    ctx = ctx or default_context()
    return Path(ctx.flavor.temp_dir(ctx.environ), ctx)


def user_home_dir(ctx: PathContext | None = None) -> Path:
    """Current user's home directory.

    Raises:
        EnvironmentLookupError: If the home variable is not set.
    """
    ctx = ctx or default_context()
    return Path(ctx.flavor.home_dir(ctx.environ), ctx)


def user_cache_dir(ctx: PathContext | None = None) -> Path:
    """Root directory for user-specific cached data.

    ``$XDG_CACHE_HOME`` or ``~/.cache`` on POSIX, ``~/Library/Caches`` on
    macOS, ``%LocalAppData%`` on Windows.

    Raises:
        EnvironmentLookupError: If the location cannot be determined.
    """
    ctx = ctx or default_context()
    return Path(ctx.flavor.cache_dir(ctx.environ), ctx)


def user_config_dir(ctx: PathContext | None = None) -> Path:
    """Root directory for user-specific configuration data.

    ``$XDG_CONFIG_HOME`` or ``~/.config`` on POSIX,
    ``~/Library/Application Support`` on macOS, ``%AppData%`` on Windows.

    Raises:
        EnvironmentLookupError: If the location cannot be determined.
    """
    ctx = ctx or default_context()
    return Path(ctx.flavor.config_dir(ctx.environ), ctx)


def executable(ctx: PathContext | None = None) -> Path:
    """Path of the executable that started the current process."""
    ctx = ctx or default_context()
    with wrap_os_errors("executable", ""):
        return Path(ctx.filesystem.executable(), ctx)
