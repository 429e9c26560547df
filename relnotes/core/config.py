"""Typed configuration loading.

The optional `release-notes.toml` only tunes how the gh CLI is driven:

    [gh]
    executable = "gh"
    item_limit = 200
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "GhConfig",
    "config_path",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "release-notes.toml"
CONFIG_ENV_VAR = "RELEASE_NOTES_CONFIG"

DEFAULT_GH_EXECUTABLE = "gh"
# Project boards rarely hold more items than this per release.
DEFAULT_ITEM_LIMIT = 200


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GhConfig:
    executable: str = DEFAULT_GH_EXECUTABLE
    item_limit: int = DEFAULT_ITEM_LIMIT


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    gh: GhConfig = field(default_factory=GhConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        gh: StrDict = get_table(data, "gh") or {}

        item_limit = get_int(gh, "item_limit")
        if item_limit is not None and item_limit <= 0:
            raise ValueError(f"gh.item_limit must be positive, got {item_limit}")

        return cls(
            gh=GhConfig(
                executable=get_str(gh, "executable") or DEFAULT_GH_EXECUTABLE,
                item_limit=item_limit or DEFAULT_ITEM_LIMIT,
            ),
        )


def config_path(cwd: Path | None = None) -> Path:
    """Return the config location: $RELEASE_NOTES_CONFIG, else ./release-notes.toml."""
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return (cwd or Path.cwd()) / CONFIG_FILE_NAME


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to release-notes.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the default Config."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
