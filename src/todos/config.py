"""Startup configuration for the todos shell.

Settings come from an optional TOML file with a ``[todos]`` table::

    [todos]
    case_sensitive_search = false
    seed = true
    format = "table"
    log_level = "WARNING"

The file is read once when the shell starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import tomli

from todos.errors import ConfigError
from todos.formatter import FormatType

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """Process-wide settings for the shell."""

    case_sensitive_search: bool = False
    seed: bool = True
    format: FormatType = FormatType.TABLE
    log_level: str = "WARNING"


def _validate(table: dict, source: Path) -> dict:
    """Check types and values of the ``[todos]`` table.

    Raises:
        ConfigError: If a known key has a wrong type or value.
    """
    known = {f.name for f in fields(Config)}
    unexpected = set(table) - known
    if unexpected:
        logger.warning(f"Ignoring unknown keys in {source}: {sorted(unexpected)}")

    values: dict = {}
    for key in ("case_sensitive_search", "seed"):
        if key in table:
            if not isinstance(table[key], bool):
                raise ConfigError(
                    f"Invalid config in {source}: '{key}' must be a bool, "
                    f"got {type(table[key]).__name__}"
                )
            values[key] = table[key]

    if "format" in table:
        try:
            values["format"] = FormatType(table["format"])
        except ValueError as e:
            choices = ", ".join(f.value for f in FormatType)
            raise ConfigError(
                f"Invalid config in {source}: 'format' must be one of {choices}"
            ) from e

    if "log_level" in table:
        level = table["log_level"]
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid config in {source}: 'log_level' must be one of {', '.join(LOG_LEVELS)}"
            )
        values["log_level"] = level.upper()

    return values


def load_config(path: str | Path | None = None) -> Config:
    """Load settings from a TOML file.

    Args:
        path: Config file. ``None`` returns the defaults.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid TOML,
            or holds invalid values.
    """
    if path is None:
        return Config()

    source = Path(path).expanduser()
    try:
        with source.open("rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {source}: {e}") from e

    table = data.get("todos", {})
    if not isinstance(table, dict):
        raise ConfigError(f"Invalid config in {source}: 'todos' must be a table")

    config = Config(**_validate(table, source))
    logger.debug(f"Loaded config from {source}: {config}")
    return config
