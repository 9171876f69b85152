# topmark:header:start
#
#   project      : odfgrep
#   file         : loaders.py
#   file_relpath : src/odfgrep/config/loaders.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Load TOML configuration sources.

Configuration is read from, in order of preference:

1. an explicit ``--config FILE``,
2. ``odfgrep.toml`` in the working directory,
3. the ``[tool.odfgrep]`` table of ``pyproject.toml`` in the working directory.

Parsing is done with `tomlkit` and unwrapped to plain `dict` structures.
Recognized tables and keys::

    [search]
    syntax = "basic"        # basic | extended | perl | fixed
    ignore_case = false
    meta = false
    deleted = false
    max_count = 0

    [output]
    filename = "auto"       # auto | always | never
    color = "auto"          # auto | always | never

Values of the wrong type are ignored with a warning; unreadable files and
malformed TOML raise `ConfigError`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from odfgrep.config.logging import get_logger
from odfgrep.config.model import MutableConfig
from odfgrep.config.types import ColorMode, FilenamePolicy
from odfgrep.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from odfgrep.core.errors import ConfigError
from odfgrep.search.pattern import SyntaxFlavor

if TYPE_CHECKING:
    from odfgrep.config.types import TomlTable

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)


# --- TOML file I/O ---


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file into a plain dict.

    Args:
        path (Path): File to read.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        return tomlkit.parse(text).unwrap()
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def discover_config_file(cwd: Path | None = None) -> tuple[Path, bool] | None:
    """Find a configuration source in ``cwd``.

    Returns:
        tuple[Path, bool] | None: The file and whether it is a ``pyproject.toml``
            (whose settings live under ``[tool.odfgrep]``), or ``None``.
    """
    base = cwd or Path.cwd()
    candidate = base / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate, False
    pyproject = base / PYPROJECT_FILE_NAME
    if pyproject.is_file():
        return pyproject, True
    return None


def load_config(
    path: Path | None = None,
    *,
    no_config: bool = False,
    cwd: Path | None = None,
) -> MutableConfig:
    """Load the configuration layer that sits between defaults and the CLI.

    Args:
        path (Path | None): Explicit config file; disables discovery.
        no_config (bool): Skip discovery (an explicit ``path`` is still read).
        cwd (Path | None): Directory searched by discovery; defaults to the CWD.

    Returns:
        MutableConfig: Values from the configuration file, or an empty builder.

    Raises:
        ConfigError: If the selected file cannot be read or parsed.
    """
    if path is not None:
        return from_toml_dict(load_toml_dict(path), source=path)
    if no_config:
        return MutableConfig()

    found = discover_config_file(cwd)
    if found is None:
        logger.debug("No configuration file found")
        return MutableConfig()

    file, is_pyproject = found
    data = load_toml_dict(file)
    if is_pyproject:
        tool = data.get("tool")
        table = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
        if not isinstance(table, dict):
            logger.debug("%s has no [tool.%s] table", file, PYPROJECT_TOOL_TABLE)
            return MutableConfig()
        data = table
    return from_toml_dict(data, source=file)


def from_toml_dict(data: TomlTable, *, source: Path | str) -> MutableConfig:
    """Build a `MutableConfig` from a parsed configuration table."""
    search = _get_table(data, "search", source)
    output = _get_table(data, "output", source)

    config = MutableConfig(
        syntax=_get_enum(search, "syntax", SyntaxFlavor, source),
        ignore_case=_get_bool(search, "ignore_case", source),
        search_meta=_get_bool(search, "meta", source),
        search_deleted=_get_bool(search, "deleted", source),
        max_count=_get_count(search, "max_count", source),
        filename_policy=_get_enum(output, "filename", FilenamePolicy, source),
        color_mode=_get_enum(output, "color", ColorMode, source),
        config_files=[source],
    )
    logger.debug("Loaded configuration from %s: %s", source, config)
    return config


# --- Checked getters ---


def _get_table(data: TomlTable, key: str, source: Path | str) -> TomlTable:
    value: Any = data.get(key, {})
    if isinstance(value, dict):
        return value
    logger.warning("%s: [%s] must be a table, ignoring it", source, key)
    return {}


def _get_bool(table: TomlTable, key: str, source: Path | str) -> bool | None:
    value: Any = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    logger.warning("%s: '%s' must be true or false, ignoring %r", source, key, value)
    return None


def _get_count(table: TomlTable, key: str, source: Path | str) -> int | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    logger.warning("%s: '%s' must be a non-negative integer, ignoring %r", source, key, value)
    return None


def _get_enum(table: TomlTable, key: str, enum_cls: type[E], source: Path | str) -> E | None:
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        for member in enum_cls:
            if member.value == value.lower():
                return member
    choices = ", ".join(str(m.value) for m in enum_cls)
    logger.warning("%s: '%s' must be one of %s, ignoring %r", source, key, choices, value)
    return None
