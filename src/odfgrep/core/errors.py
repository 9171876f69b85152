# topmark:header:start
#
#   project      : odfgrep
#   file         : errors.py
#   file_relpath : src/odfgrep/core/errors.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Domain exceptions raised by the search engine.

These exceptions carry no CLI concerns. The engine maps them to a scope:

- `EncodingError`, `ContainerError` (and `MemberNotFoundError`) and
  `DocumentParseError` abort the current document only.
- `PatternError` and `ConfigError` are fatal for the whole run and are raised
  before any document is opened.
"""

from __future__ import annotations


class OdfgrepError(Exception):
    """Base class for all odfgrep domain errors."""


class EncodingError(OdfgrepError):
    """A byte sequence violates the UTF-8 structure it claims to follow.

    Attributes:
        offset (int): Offset of the offending byte within the decoded buffer.
    """

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(f"{message} at byte offset {offset}")
        self.offset = offset


class ContainerError(OdfgrepError):
    """The document package cannot be opened or one of its members cannot be read."""


class MemberNotFoundError(ContainerError):
    """The document package has no member with the requested name."""


class DocumentParseError(OdfgrepError):
    """A package member is not well-formed XML."""


class PatternError(OdfgrepError):
    """The search pattern cannot be compiled."""


class ConfigError(OdfgrepError):
    """A configuration file cannot be read or parsed."""
