"""Configuration for pathtype.

Settings come from, in increasing precedence: defaults, an optional YAML file,
and ``PATHTYPE_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "PATHTYPE_"

# Default limits
MAX_SYMLINKS = 255
GLOB_DEPTH_LIMIT = 10000


class Settings(BaseModel):
    """Library and CLI settings."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    flavor: Literal["auto", "posix", "darwin", "windows"] = "auto"
    max_symlinks: int = Field(default=MAX_SYMLINKS, gt=0, alias="maxSymlinks")
    glob_depth_limit: int = Field(default=GLOB_DEPTH_LIMIT, gt=0, alias="globDepthLimit")
    cwd: str | None = None

    @classmethod
    def from_file(cls, path: Path) -> Settings:
        """Load settings from a YAML file.

        Args:
            path: Path to the YAML file.

        Returns:
            Parsed Settings.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the YAML is invalid or has unknown keys.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid settings file {path}: expected a mapping")
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Load settings from ``PATHTYPE_*`` environment variables."""
        return cls.model_validate(_env_values(environ))

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        """Combine defaults, an optional YAML file and the environment.

        Args:
            path: Optional YAML settings file.
            environ: Environment mapping (defaults to ``os.environ``).

        Returns:
            Merged Settings.
        """
        data: dict[str, Any] = {}
        if path is not None:
            data.update(cls.from_file(path).model_dump(exclude_unset=True))
        data.update(_env_values(environ))
        return cls.model_validate(data)


def _env_values(environ: Mapping[str, str] | None) -> dict[str, str]:
    environ = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for field_name in Settings.model_fields:
        value = environ.get(ENV_PREFIX + field_name.upper())
        if value:
            values[field_name] = value
    return values
