# topmark:header:start
#
#   project      : WheelCI
#   file         : io.py
#   file_relpath : src/wheelci/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML configuration sources.

This module provides I/O helpers for reading WheelCI settings from:
- a standalone ``wheelci.toml`` document (settings at the top level), and
- ``pyproject.toml`` (settings under ``[tool.wheelci]``).

Parsing is done with `tomlkit` and returned as plain `dict` structures; the
typed getters below validate individual values and raise `ConfigError` with
the offending key in the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from wheelci.config.keys import Toml
from wheelci.config.logging import get_logger
from wheelci.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from wheelci.config.logging import WheelciLogger

TomlTable = dict[str, Any]

logger: WheelciLogger = get_logger(__name__)


# --- Type guards ---


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        obj (object): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``obj`` is a ``dict[str, Any]``.
    """
    return isinstance(obj, dict)


def is_str_list(obj: object) -> TypeGuard[list[str]]:
    """Type guard for a string list value."""
    return isinstance(obj, list) and all(isinstance(x, str) for x in obj)


# --- Parsing ---


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Name of the source, for error messages.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: Any = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {source}: {exc}") from exc
    return doc.unwrap()


def load_toml_dict(path: Path) -> TomlTable:
    """Read and parse a TOML file.

    Args:
        path (Path): File to read.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    logger.debug("Loaded config source %s", path)
    return parse_toml_text(text, source=str(path))


def extract_wheelci_table(doc: TomlTable) -> TomlTable:
    """Return the WheelCI settings table of a parsed document.

    A ``pyproject.toml`` keeps the settings under ``[tool.wheelci]``; a
    standalone ``wheelci.toml`` keeps them at the top level.

    Args:
        doc (TomlTable): Parsed TOML document.

    Returns:
        TomlTable: The settings table (empty when a pyproject has none).
    """
    tool: Any = doc.get(Toml.SECTION_TOOL)
    if is_toml_table(tool):
        section: Any = tool.get(Toml.SECTION_WHEELCI, {})
        if not is_toml_table(section):
            raise ConfigError(f"[{Toml.SECTION_TOOL}.{Toml.SECTION_WHEELCI}] must be a table")
        return section
    if any(key in doc for key in Toml.PYPROJECT_MARKERS):
        # A pyproject without a [tool] table holds no WheelCI settings
        return {}
    return doc


# --- Checked getters ---


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Return a boolean value, or None when the key is absent.

    Raises:
        ConfigError: If the value is present but not a boolean.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    return value


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Return a string value, or None when the key is absent.

    Raises:
        ConfigError: If the value is present but not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def get_string_list_value_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Return a list of strings, or None when the key is absent.

    A single string is accepted as a one-element list.

    Raises:
        ConfigError: If the value is present but not a string or list of strings.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not is_str_list(value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return list(value)


def warn_unknown_keys(table: TomlTable) -> list[str]:
    """Log and return keys that are not part of the configuration schema."""
    unknown: list[str] = sorted(k for k in table if k not in Toml.ALLOWED_KEYS)
    for key in unknown:
        logger.warning("Ignoring unknown config key '%s'", key)
    return unknown


# --- Rendering ---


def to_toml(table: TomlTable) -> str:
    """Serialize a plain dict to TOML text."""
    return tomlkit.dumps(table)


def nest_under_tool_section(table: TomlTable) -> TomlTable:
    """Wrap a settings table as ``{"tool": {"wheelci": table}}``."""
    return {Toml.SECTION_TOOL: {Toml.SECTION_WHEELCI: table}}
