# topmark:header:start
#
#   project      : odfgrep
#   file         : engine.py
#   file_relpath : src/odfgrep/search/engine.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Execution of a search run over a list of documents (engine layer).

Design goals:
  - No CLI dependencies: Do not import Click or anything under ``odfgrep.cli``
    from here. Program output goes through the `ConsoleLike` handed in by the
    caller; diagnostics go to the package logger.
  - Structured result: `Searcher.run` returns an `ExitCode`; it never exits
    the process, even for ``--quiet``.

Error scopes:
  - Per document: `ContainerError` (including `MemberNotFoundError`),
    `DocumentParseError` and `EncodingError` abort the current document. The
    error is reported, the run status records a read error, and the search
    continues with the next document. A document aborted this way gets no
    end-of-document notification.
  - Per run: a `Terminate` verdict from the action ends the run immediately.
  - `PatternError` is raised by `Searcher.__init__`, before any document is
    opened.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from odfgrep.config.logging import get_logger
from odfgrep.constants import CONTENT_MEMBER, META_MEMBER
from odfgrep.core.errors import ContainerError, DocumentParseError, EncodingError
from odfgrep.search.actions import Terminate, make_action
from odfgrep.search.container import open_container, read_member
from odfgrep.search.matcher import MatchEngine
from odfgrep.search.pattern import compile_pattern
from odfgrep.search.tree import parse_document
from odfgrep.search.walker import (
    Label,
    find_content_root,
    iter_content_units,
    iter_meta_units,
    walk,
)

if TYPE_CHECKING:
    from zipfile import ZipFile

    from odfgrep.config.model import Config
    from odfgrep.core.console_api import ConsoleLike
    from odfgrep.core.exit_codes import ExitCode
    from odfgrep.search.actions import Action, Verdict
    from odfgrep.search.matcher import RunStatus

logger = get_logger(__name__)


class Searcher:
    """Search every document of a run with a single pattern and action.

    Args:
        config (Config): The run configuration.
        console (ConsoleLike): Destination of matches and error reports.
        action (Action | None): Output action; built from ``config`` when omitted.

    Raises:
        PatternError: If the configured patterns do not compile.
    """

    def __init__(self, config: Config, console: ConsoleLike, action: Action | None = None) -> None:
        self.config = config
        self.console = console
        pattern = compile_pattern(
            config.patterns,
            flavor=config.syntax,
            ignore_case=config.ignore_case,
        )
        if action is None:
            action = make_action(config.action, console, with_filename=config.with_filename)
        self.matcher = MatchEngine(
            pattern,
            action,
            invert=config.invert,
            max_count=config.max_count,
        )

    @property
    def status(self) -> RunStatus:
        """Run-level status so far."""
        return self.matcher.status

    def run(self) -> ExitCode:
        """Search all documents in order and return the run's exit code."""
        for document in self.config.documents:
            verdict = self.search_document(document)
            if isinstance(verdict, Terminate):
                logger.debug("Run terminated by %s with %s", document, verdict.exit_code.name)
                return verdict.exit_code

        final = self.matcher.end_run()
        if final is not None:
            return final.exit_code
        return self.status.exit_code

    def search_document(self, document: str) -> Verdict:
        """Search one document.

        Returns:
            Verdict: The verdict that ended the document's search, ``True`` if it
                was searched to the end or aborted by an error.
        """
        logger.info("Searching %s", document)
        self.matcher.begin_document()
        try:
            with open_container(document) as package:
                verdict = self._search_package(package, document)
        except (ContainerError, DocumentParseError, EncodingError) as e:
            logger.error("Skipping %s: %s", document, e)
            self.console.error(f"odfgrep: {document}: {e}")
            self.matcher.context.record_read_error()
            return True

        if isinstance(verdict, Terminate):
            return verdict
        self.matcher.end_document(document)
        return verdict

    def _search_package(self, package: ZipFile, document: str) -> Verdict:
        if self.config.search_meta:
            meta_root = parse_document(read_member(package, META_MEMBER), META_MEMBER)
            verdict = walk(iter_meta_units(meta_root, document), self.matcher.offer)
            if verdict is not True:
                return verdict

        content_root = parse_document(read_member(package, CONTENT_MEMBER), CONTENT_MEMBER)
        text_root = find_content_root(content_root)
        if text_root is None:
            logger.warning("%s: no searchable body in %s", document, CONTENT_MEMBER)
            return True
        units = iter_content_units(
            text_root,
            Label(document),
            search_deleted=self.config.search_deleted,
        )
        return walk(units, self.matcher.offer)


def run_search(config: Config, console: ConsoleLike) -> ExitCode:
    """Compile the pattern, search all documents and return the exit code.

    Raises:
        PatternError: If the configured patterns do not compile.
    """
    return Searcher(config, console).run()
