# topmark:header:start
#
#   project      : odfgrep
#   file         : types.py
#   file_relpath : src/odfgrep/config/types.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Enumerations shared by the configuration model and the CLI."""

from __future__ import annotations

from enum import Enum
from typing import Any

# Parsed TOML table as plain Python containers
TomlTable = dict[str, Any]


class FilenamePolicy(str, Enum):
    """When to prefix output with the document name."""

    AUTO = "auto"  # only when several documents are searched
    ALWAYS = "always"
    NEVER = "never"


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"
