# topmark:header:start
#
#   project      : odfgrep
#   file         : model.py
#   file_relpath : src/odfgrep/config/model.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Run configuration model and merge policy.

This module defines:
    - `Config`: an immutable snapshot of everything a run needs, built once
      after argument parsing and passed by reference to the engine.
    - `MutableConfig`: a mutable builder used while merging defaults, the
      configuration file and command-line options; it is frozen into a
      `Config` and can be thawed back for edits.

Precedence (lowest to highest): built-in defaults, configuration file,
command line. In `MutableConfig`, ``None`` means "not set, inherit".

Immutability:
    `Config` stores tuples and is ``frozen=True``. Use `Config.thaw` → edit →
    `MutableConfig.freeze` rather than mutating a runtime `Config`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from odfgrep.config.logging import get_logger
from odfgrep.config.types import ColorMode, FilenamePolicy
from odfgrep.search.actions import ActionKind
from odfgrep.search.pattern import SyntaxFlavor

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)

_T = TypeVar("_T")


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for one run.

    Attributes:
        patterns (tuple[str, ...]): Patterns to search for; any may match.
        syntax (SyntaxFlavor): Pattern syntax.
        ignore_case (bool): Match case-insensitively.
        invert (bool): Accept units the pattern does not match.
        max_count (int): Per-document cutoff; 0 means unbounded.
        search_meta (bool): Search ``meta.xml`` before ``content.xml``.
        search_deleted (bool): Search tracked-changes deleted text.
        action (ActionKind): Output action.
        filename_policy (FilenamePolicy): When to prefix output with the document name.
        color_mode (ColorMode): Colorized output intent.
        documents (tuple[str, ...]): Documents to search, in order.
        config_files (tuple[Path | str, ...]): Configuration sources that were merged.
    """

    patterns: tuple[str, ...] = ()
    syntax: SyntaxFlavor = SyntaxFlavor.BASIC
    ignore_case: bool = False
    invert: bool = False
    max_count: int = 0
    search_meta: bool = False
    search_deleted: bool = False
    action: ActionKind = ActionKind.ECHO_TEXT
    filename_policy: FilenamePolicy = FilenamePolicy.AUTO
    color_mode: ColorMode = ColorMode.AUTO
    documents: tuple[str, ...] = ()
    config_files: tuple[Path | str, ...] = ()

    @property
    def with_filename(self) -> bool:
        """Whether output is prefixed with the document name."""
        if self.filename_policy is FilenamePolicy.AUTO:
            return len(self.documents) > 1
        return self.filename_policy is FilenamePolicy.ALWAYS

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            patterns=list(self.patterns),
            syntax=self.syntax,
            ignore_case=self.ignore_case,
            invert=self.invert,
            max_count=self.max_count,
            search_meta=self.search_meta,
            search_deleted=self.search_deleted,
            action=self.action,
            filename_policy=self.filename_policy,
            color_mode=self.color_mode,
            documents=list(self.documents),
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while merging sources.

    Scalar fields default to ``None`` ("inherit"); `freeze` substitutes the
    built-in defaults of `Config` for whatever is still unset.
    """

    patterns: list[str] = field(default_factory=lambda: [])
    syntax: SyntaxFlavor | None = None
    ignore_case: bool | None = None
    invert: bool | None = None
    max_count: int | None = None
    search_meta: bool | None = None
    search_deleted: bool | None = None
    action: ActionKind | None = None
    filename_policy: FilenamePolicy | None = None
    color_mode: ColorMode | None = None
    documents: list[str] = field(default_factory=lambda: [])
    config_files: list[Path | str] = field(default_factory=lambda: [])

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where set values of ``other`` override this one.

        Lists are replaced, not concatenated, when ``other`` has entries;
        ``config_files`` accumulate.
        """
        return MutableConfig(
            patterns=list(other.patterns or self.patterns),
            syntax=_pick(other.syntax, self.syntax),
            ignore_case=_pick(other.ignore_case, self.ignore_case),
            invert=_pick(other.invert, self.invert),
            max_count=_pick(other.max_count, self.max_count),
            search_meta=_pick(other.search_meta, self.search_meta),
            search_deleted=_pick(other.search_deleted, self.search_deleted),
            action=_pick(other.action, self.action),
            filename_policy=_pick(other.filename_policy, self.filename_policy),
            color_mode=_pick(other.color_mode, self.color_mode),
            documents=list(other.documents or self.documents),
            config_files=[*self.config_files, *other.config_files],
        )

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Raises:
            ValueError: If ``max_count`` is negative.
        """
        defaults = Config()
        max_count = _pick(self.max_count, defaults.max_count)
        if max_count < 0:
            raise ValueError(f"max_count must not be negative, got {max_count}")

        config = Config(
            patterns=tuple(self.patterns),
            syntax=_pick(self.syntax, defaults.syntax),
            ignore_case=_pick(self.ignore_case, defaults.ignore_case),
            invert=_pick(self.invert, defaults.invert),
            max_count=max_count,
            search_meta=_pick(self.search_meta, defaults.search_meta),
            search_deleted=_pick(self.search_deleted, defaults.search_deleted),
            action=_pick(self.action, defaults.action),
            filename_policy=_pick(self.filename_policy, defaults.filename_policy),
            color_mode=_pick(self.color_mode, defaults.color_mode),
            documents=tuple(self.documents),
            config_files=tuple(self.config_files),
        )
        logger.trace("Frozen config: %s", config)
        return config


def _pick(value: _T | None, fallback: _T) -> _T:
    return fallback if value is None else value

