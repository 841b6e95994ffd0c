"""Settings — run defaults loaded from an optional YAML file.

A ``.xmlsort.yaml`` in the working directory (or any file passed with
``--config``) can set defaults for the command line::

    extensions: [xml, config]
    ignored_names: [Script]
    indent: "  "
    newline: "\\r\\n"

Positional command-line arguments always win over the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from xmlsort.errors import ConfigError

DEFAULT_CONFIG_FILE = ".xmlsort.yaml"


class Settings(BaseModel):
    """Options for one xmlsort run."""

    model_config = ConfigDict(extra="forbid")

    extensions: list[str] = Field(default_factory=lambda: ["xml"])
    ignored_names: list[str] = Field(default_factory=list)
    indent: Optional[str] = "  "  # None writes compact output
    newline: Literal["\n", "\r\n"] = "\n"

    @field_validator("extensions", "ignored_names")
    @classmethod
    def _drop_empty(cls, values: list[str]) -> list[str]:
        return [v for v in values if v]


def split_list(value: str) -> list[str]:
    """Split a ``;``-separated command-line list, dropping empty entries."""
    return [part for part in value.split(";") if part]


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from ``path``, or from ``.xmlsort.yaml`` if it exists.

    An explicitly given file must exist; a missing default file means defaults.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.is_file():
            return Settings()
    path = Path(path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
