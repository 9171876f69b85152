# topmark:header:start
#
#   project      : odfgrep
#   file         : matcher.py
#   file_relpath : src/odfgrep/search/matcher.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Match engine: per-document match state and run-level status.

`MatchEngine.offer` decides for a single text unit whether it is accepted
(the pattern matches, XOR the inversion flag), enforces the per-document
max-count cutoff and hands accepted units to the action. The running count is
reset by `MatchEngine.begin_document` and reported to the action by
`MatchEngine.end_document`.

Run status resolution:
    - `RunStatus.MATCH_FOUND` once any unit of any document was handed to the
      action. Later read errors do not change it.
    - `RunStatus.READ_ERROR` when a document failed and nothing matched so far.
      A later match still turns it into `RunStatus.MATCH_FOUND`.
    - `RunStatus.NO_MATCH` otherwise.

The pattern is matched against the decoded code points; the action receives
the unit's original bytes, decoded with the ``surrogateescape`` handler so
that writing them back with the same handler reproduces them exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from odfgrep.config.logging import get_logger
from odfgrep.core.exit_codes import ExitCode
from odfgrep.search.decoder import decode

if TYPE_CHECKING:
    from odfgrep.search.actions import Action, Terminate, Verdict
    from odfgrep.search.pattern import CompiledPattern
    from odfgrep.search.walker import TextUnit

logger = get_logger(__name__)


class RunStatus(Enum):
    """Overall outcome of a run, mapped to the process exit code."""

    NO_MATCH = ExitCode.NO_MATCH
    MATCH_FOUND = ExitCode.SUCCESS
    READ_ERROR = ExitCode.IO_ERROR
    USAGE_ERROR = ExitCode.USAGE_ERROR

    @property
    def exit_code(self) -> ExitCode:
        """Exit code reported for this status."""
        return ExitCode(self.value)


@dataclass(slots=True)
class MatchContext:
    """Mutable match state of a run.

    Attributes:
        pattern (CompiledPattern): Compiled once per run, never replaced.
        invert (bool): Accept units the pattern does *not* match.
        max_count (int): Per-document cutoff; 0 means unbounded.
        count (int): Units handed to the action in the current document.
        status (RunStatus): Run-level status.
    """

    pattern: CompiledPattern
    invert: bool = False
    max_count: int = 0
    count: int = 0
    status: RunStatus = RunStatus.NO_MATCH

    def record_match(self) -> None:
        """Mark the run as having found a match."""
        self.status = RunStatus.MATCH_FOUND

    def record_read_error(self) -> None:
        """Mark a failed document unless a match was already found."""
        if self.status is not RunStatus.MATCH_FOUND:
            self.status = RunStatus.READ_ERROR

    @property
    def at_cap(self) -> bool:
        """True once the current document reached the max-count cutoff."""
        return self.max_count != 0 and self.count == self.max_count


class MatchEngine:
    """Apply the compiled pattern to text units and route hits to the action.

    Args:
        pattern (CompiledPattern): The run's pattern.
        action (Action): The run's single output action.
        invert (bool): Accept non-matching units instead of matching ones.
        max_count (int): Per-document cutoff; 0 means unbounded.
    """

    def __init__(
        self,
        pattern: CompiledPattern,
        action: Action,
        *,
        invert: bool = False,
        max_count: int = 0,
    ) -> None:
        if max_count < 0:
            raise ValueError(f"max_count must not be negative, got {max_count}")
        self.context = MatchContext(pattern=pattern, invert=invert, max_count=max_count)
        self.action = action

    @property
    def status(self) -> RunStatus:
        """Current run-level status."""
        return self.context.status

    def begin_document(self) -> None:
        """Reset the running count for a new document."""
        self.context.count = 0

    def offer(self, unit: TextUnit) -> Verdict:
        """Test one text unit and perform the action if it is accepted.

        Args:
            unit (TextUnit): The unit to test.

        Returns:
            Verdict: ``True`` to keep searching the document, else the action's
                stopping verdict.

        Raises:
            EncodingError: If the unit's bytes are not structurally valid UTF-8.
        """
        ctx = self.context
        text = decode(unit.raw)
        accepted = ctx.pattern.search(text) != ctx.invert
        if not accepted:
            return True
        if ctx.at_cap:
            logger.trace("Max count %d reached in %s, skipping unit", ctx.max_count, unit.label)
            return True

        # Bytes the structural decoder normalized (overlong forms) reach the
        # action unchanged, carried as surrogate escapes
        original = unit.raw.decode("utf-8", errors="surrogateescape")
        verdict = self.action.perform(original, unit.label)
        ctx.record_match()
        ctx.count += 1
        return verdict

    def end_document(self, document: str) -> None:
        """Report the document's count to the action and reset it."""
        logger.debug("%s: %d accepted unit(s)", document, self.context.count)
        self.action.on_document_end(document, self.context.count)
        self.context.count = 0

    def end_run(self) -> Terminate | None:
        """Notify the action that all documents were processed."""
        return self.action.on_run_end()
