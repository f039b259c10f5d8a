"""Paths as a value type with lexical and filesystem operations as methods."""

__version__ = "0.1.0"

from pathtype.context import PathContext, create_context, default_context, set_default_context
from pathtype.environment import (
    executable,
    getwd,
    temp_dir,
    user_cache_dir,
    user_config_dir,
    user_home_dir,
)
from pathtype.errors import (
    BadPatternError,
    EnvironmentLookupError,
    PathError,
    PathExistsError,
    PathIsADirectoryError,
    PathNotADirectoryError,
    PathNotFoundError,
    PathPermissionError,
    PathTypeError,
    RelationError,
    TooManyLinksError,
)
from pathtype.fsview import DirFS, MapFile, MapFS
from pathtype.path import Path, split_list
from pathtype.settings import Settings
from pathtype.types import DirEntry, FileInfo
from pathtype.walk import CONTINUE, SKIP_SUBTREE, Abort, Continue, SkipSubtree, WalkAction

__all__ = [
    "__version__",
    "Abort",
    "BadPatternError",
    "CONTINUE",
    "Continue",
    "DirEntry",
    "DirFS",
    "EnvironmentLookupError",
    "FileInfo",
    "MapFS",
    "MapFile",
    "Path",
    "PathContext",
    "PathError",
    "PathExistsError",
    "PathIsADirectoryError",
    "PathNotADirectoryError",
    "PathNotFoundError",
    "PathPermissionError",
    "PathTypeError",
    "RelationError",
    "SKIP_SUBTREE",
    "Settings",
    "SkipSubtree",
    "TooManyLinksError",
    "WalkAction",
    "create_context",
    "default_context",
    "executable",
    "getwd",
    "set_default_context",
    "split_list",
    "temp_dir",
    "user_cache_dir",
    "user_config_dir",
    "user_home_dir",
]
