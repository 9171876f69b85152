# topmark:header:start
#
#   project      : odfgrep
#   file         : constants.py
#   file_relpath : src/odfgrep/constants.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""odfgrep Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

ODFGREP_VERSION: str = get_version("odfgrep")

# Environment variables
LOG_LEVEL_ENV_VAR: str = "ODFGREP_LOG_LEVEL"

# Configuration discovery
CONFIG_FILE_NAME: str = "odfgrep.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_TABLE: str = "odfgrep"

# Package members
CONTENT_MEMBER: str = "content.xml"
META_MEMBER: str = "meta.xml"

# Element local names (namespaces are ignored when classifying nodes)
BODY_TAG: str = "body"
META_TAG: str = "meta"
DELETION_TAG: str = "deletion"
USER_DEFINED_TAG: str = "user-defined"
NAME_ATTRIBUTE: str = "name"

# Elements that yield exactly one text unit each
TEXT_BLOCK_TAGS: frozenset[str] = frozenset({"p", "h"})

# Children of <office:body> that hold searchable content, in order of preference
BODY_CONTENT_TAGS: tuple[str, ...] = ("text", "spreadsheet", "presentation", "drawing")
