# topmark:header:start
#
#   project      : TestFeed
#   file         : io.py
#   file_relpath : src/testfeed/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources and extract typed values.

This module reads TestFeed configuration from on-disk TOML files
(`testfeed.toml` / `pyproject.toml`). Parsing is done with `tomlkit` and
returned as plain `dict` structures; the getters below pull typed values out
of those dicts and log (rather than raise) when a value has the wrong shape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from testfeed.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from testfeed.config.logging import TestfeedLogger

TomlTable = dict[str, Any]

logger: TestfeedLogger = get_logger(__name__)


class ConfigLoadError(Exception):
    """Raised when a configuration file exists but cannot be read or parsed."""


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``testfeed.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigLoadError(f"Cannot read config file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigLoadError(f"Invalid TOML in {path}: {e}") from e

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        TomlTable: The sub-table, or an empty dict when absent or not a table.
    """
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.warning("Expected a table for %r, got %r; ignoring", key, value)
    return {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The string value, or ``None`` when absent or not a string.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Expected a string for %r, got %r; ignoring", key, value)
    return None


def get_float_value_or_none(table: TomlTable, key: str) -> float | None:
    """Extract an optional numeric value from a TOML table.

    Integers are widened to ``float``. Booleans are rejected even though they
    are ``int`` subclasses.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        float | None: The numeric value, or ``None`` when absent or not numeric.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    logger.warning("Expected a number for %r, got %r; ignoring", key, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional integer value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        int | None: The integer value, or ``None`` when absent or not an integer.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected an integer for %r, got %r; ignoring", key, value)
    return None
