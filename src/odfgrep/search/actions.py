# topmark:header:start
#
#   project      : odfgrep
#   file         : actions.py
#   file_relpath : src/odfgrep/search/actions.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Output actions: what to do with accepted text units.

Exactly one action instance serves a whole run. The matcher calls
`Action.perform` for every accepted unit (up to the max-count cutoff),
`Action.on_document_end` after each document that was searched to the end or
stopped early, and `Action.on_run_end` once after the last document.

`perform` returns a verdict that steers the walker:

- ``True``: keep searching the current document.
- ``False``: stop searching the current document.
- `Terminate`: end the whole run now with the given exit code. This is how
  ``--quiet`` short-circuits: the value travels back through the matcher and
  the engine instead of exiting the process in place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from odfgrep.config.logging import get_logger
from odfgrep.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from odfgrep.core.console_api import ConsoleLike
    from odfgrep.search.walker import Label

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Terminate:
    """Request to end the run immediately.

    Attributes:
        exit_code (ExitCode): Exit code of the run.
    """

    exit_code: ExitCode


Verdict = bool | Terminate


class ActionKind(str, Enum):
    """Output action selected on the command line."""

    ECHO_TEXT = "echo-text"
    COUNT = "count"
    ECHO_FILE = "files-with-matches"
    ECHO_NO_MATCH = "files-without-match"
    QUIET = "quiet"


class Action(ABC):
    """Base class for all output actions.

    Args:
        console (ConsoleLike): Destination of program output.
        with_filename (bool): Prefix per-unit and per-document output with the label.
    """

    kind: ActionKind

    def __init__(self, console: ConsoleLike, *, with_filename: bool = False) -> None:
        self.console = console
        self.with_filename = with_filename

    @abstractmethod
    def perform(self, text: str, label: Label) -> Verdict:
        """Handle one accepted text unit.

        Args:
            text (str): The unit's text.
            label (Label): Where the text comes from.

        Returns:
            Verdict: Whether and how to continue.
        """

    def on_document_end(self, document: str, count: int) -> None:
        """Finish one document; ``count`` is the number of units passed to `perform`."""

    def on_run_end(self) -> Terminate | None:
        """Finish the run; may end it with a specific exit code."""
        return None

    def _prefix(self, label: Label | str) -> str:
        if not self.with_filename:
            return ""
        name = self.console.styled(str(label), fg="magenta")
        return f"{name}{self.console.styled(':', fg='cyan')} "

    def __repr__(self) -> str:
        return f"{type(self).__name__}(with_filename={self.with_filename})"


class CountAction(Action):
    """Print the number of accepted units per document."""

    kind = ActionKind.COUNT

    def perform(self, text: str, label: Label) -> Verdict:
        return True

    def on_document_end(self, document: str, count: int) -> None:
        self.console.print(f"{self._prefix(document)}{count}")


class EchoTextAction(Action):
    """Print every accepted unit (the default)."""

    kind = ActionKind.ECHO_TEXT

    def perform(self, text: str, label: Label) -> Verdict:
        self.console.print(f"{self._prefix(label)}{text}")
        return True


class EchoFileAction(Action):
    """Print the name of each document with an accepted unit.

    Only presence matters, so searching a document stops at its first hit.
    """

    kind = ActionKind.ECHO_FILE

    def perform(self, text: str, label: Label) -> Verdict:
        self.console.print(self.console.styled(label.document, fg="magenta"))
        return False


class EchoNoMatchAction(Action):
    """Print the name of each document without any accepted unit."""

    kind = ActionKind.ECHO_NO_MATCH

    def perform(self, text: str, label: Label) -> Verdict:
        return False

    def on_document_end(self, document: str, count: int) -> None:
        if count == 0:
            self.console.print(self.console.styled(document, fg="magenta"))


class QuietAction(Action):
    """Print nothing; the exit code alone tells whether anything matched."""

    kind = ActionKind.QUIET

    def perform(self, text: str, label: Label) -> Verdict:
        return Terminate(ExitCode.SUCCESS)

    def on_run_end(self) -> Terminate | None:
        # Only reached when no document matched
        return Terminate(ExitCode.NO_MATCH)


ACTIONS: dict[ActionKind, type[Action]] = {
    cls.kind: cls
    for cls in (CountAction, EchoTextAction, EchoFileAction, EchoNoMatchAction, QuietAction)
}


def make_action(kind: ActionKind, console: ConsoleLike, *, with_filename: bool) -> Action:
    """Instantiate the action for ``kind``."""
    action = ACTIONS[kind](console, with_filename=with_filename)
    logger.debug("Selected action %r", action)
    return action
