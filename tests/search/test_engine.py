# topmark:header:start
#
#   project      : odfgrep
#   file         : test_engine.py
#   file_relpath : tests/search/test_engine.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""End-to-end tests of the search engine over real packages."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from odfgrep.config.types import FilenamePolicy
from odfgrep.core.errors import PatternError
from odfgrep.core.exit_codes import ExitCode
from odfgrep.search.actions import ActionKind
from odfgrep.search.engine import Searcher, run_search
from odfgrep.search.pattern import SyntaxFlavor
from tests.conftest import RecordingConsole, make_config
from tests.documents import content_xml, corrupt_member, make_document, write_package

if TYPE_CHECKING:
    from pathlib import Path

META = (
    "<dc:title>Annual budget 2025</dc:title>"
    '<meta:user-defined meta:name="Owner">Finance budget team</meta:user-defined>'
)


@pytest.fixture
def report(tmp_path: Path) -> str:
    return str(
        make_document(
            tmp_path / "report.odt",
            "The budget is approved.",
            "Nothing to see here.",
            "A second budget line.",
            meta_fields=META,
        )
    )


@pytest.fixture
def minutes(tmp_path: Path) -> str:
    return str(make_document(tmp_path / "minutes.odt", "Meeting minutes.", "No decisions."))


def search(console: RecordingConsole, *documents: str, **overrides: object) -> ExitCode:
    overrides.setdefault("patterns", ["budget"])
    return run_search(make_config(documents=list(documents), **overrides), console)


def test_echo_text_single_document(console: RecordingConsole, report: str) -> None:
    assert search(console, report) is ExitCode.SUCCESS
    assert console.lines == ["The budget is approved.", "A second budget line."]


def test_echo_text_prefixes_when_several_documents(
    console: RecordingConsole, report: str, minutes: str
) -> None:
    assert search(console, report, minutes) is ExitCode.SUCCESS
    assert console.lines == [
        f"{report}: The budget is approved.",
        f"{report}: A second budget line.",
    ]


def test_no_filename_policy(console: RecordingConsole, report: str, minutes: str) -> None:
    search(console, report, minutes, filename_policy=FilenamePolicy.NEVER)
    assert console.lines == ["The budget is approved.", "A second budget line."]


def test_no_match(console: RecordingConsole, minutes: str) -> None:
    assert search(console, minutes) is ExitCode.NO_MATCH
    assert console.lines == []


def test_count(console: RecordingConsole, report: str, minutes: str) -> None:
    search(console, report, action=ActionKind.COUNT, filename_policy=FilenamePolicy.NEVER)
    search(console, report, minutes, action=ActionKind.COUNT)
    assert console.lines == ["2", f"{report}: 2", f"{minutes}: 0"]


def test_count_with_max_count(console: RecordingConsole, report: str) -> None:
    search(console, report, action=ActionKind.COUNT, max_count=1)
    assert console.lines == ["1"]


def test_invert(console: RecordingConsole, report: str) -> None:
    assert search(console, report, invert=True) is ExitCode.SUCCESS
    assert console.lines == ["Nothing to see here."]


def test_files_with_matches_stops_each_document(
    console: RecordingConsole, report: str, minutes: str
) -> None:
    assert search(console, report, minutes, report, action=ActionKind.ECHO_FILE) is ExitCode.SUCCESS
    assert console.lines == [report, report]


def test_files_without_match(console: RecordingConsole, report: str, minutes: str) -> None:
    assert search(console, report, minutes, action=ActionKind.ECHO_NO_MATCH) is ExitCode.SUCCESS
    assert console.lines == [minutes]


def test_quiet_terminates_on_first_match(
    console: RecordingConsole, tmp_path: Path, report: str
) -> None:
    missing = str(tmp_path / "missing.odt")
    # The run ends before the unreadable document is opened
    assert search(console, report, missing, action=ActionKind.QUIET) is ExitCode.SUCCESS
    assert console.lines == []
    assert console.errors == []


def test_quiet_without_match(console: RecordingConsole, minutes: str) -> None:
    assert search(console, minutes, action=ActionKind.QUIET) is ExitCode.NO_MATCH


def test_meta_is_searched_first_with_field_labels(console: RecordingConsole, report: str) -> None:
    search(console, report, search_meta=True, filename_policy=FilenamePolicy.ALWAYS)
    assert console.lines == [
        f"{report}<title>: Annual budget 2025",
        f"{report}<user-defined:Owner>: Finance budget team",
        f"{report}: The budget is approved.",
        f"{report}: A second budget line.",
    ]


def test_meta_hit_stops_files_with_matches_once(console: RecordingConsole, report: str) -> None:
    search(console, report, search_meta=True, action=ActionKind.ECHO_FILE)
    assert console.lines == [report]


def test_meta_requested_but_missing_is_a_read_error(
    console: RecordingConsole, minutes: str
) -> None:
    assert search(console, minutes, search_meta=True) is ExitCode.IO_ERROR
    assert len(console.errors) == 1
    assert "meta.xml" in console.errors[0]


def test_deleted_text(console: RecordingConsole, tmp_path: Path) -> None:
    body = (
        "<text:tracked-changes><text:changed-region><text:deletion>"
        "<text:p>old budget</text:p>"
        "</text:deletion></text:changed-region></text:tracked-changes>"
        "<text:p>new plan</text:p>"
    )
    doc = str(make_document(tmp_path / "tracked.odt", body=body))
    assert search(console, doc) is ExitCode.NO_MATCH
    assert search(console, doc, search_deleted=True) is ExitCode.SUCCESS
    assert console.lines == ["old budget"]


def test_read_error_then_match_is_success(
    console: RecordingConsole, tmp_path: Path, report: str
) -> None:
    missing = str(tmp_path / "missing.odt")
    assert search(console, missing, report) is ExitCode.SUCCESS
    assert console.errors[0].startswith(f"odfgrep: {missing}: ")
    assert f"{report}: The budget is approved." in console.lines


def test_match_then_read_error_is_success(
    console: RecordingConsole, tmp_path: Path, report: str
) -> None:
    broken = str(write_package(tmp_path / "broken.odt", content="<unclosed>"))
    assert search(console, report, broken) is ExitCode.SUCCESS
    assert len(console.errors) == 1


def test_read_error_without_match(console: RecordingConsole, tmp_path: Path, minutes: str) -> None:
    no_content = str(write_package(tmp_path / "empty.odt", content=None))
    assert search(console, no_content, minutes) is ExitCode.IO_ERROR
    assert "content.xml" in console.errors[0]


def test_corrupt_document_does_not_stop_the_run(
    console: RecordingConsole, tmp_path: Path, report: str
) -> None:
    bad = str(corrupt_member(make_document(tmp_path / "bad.odt", "budget"), "content.xml"))
    assert search(console, bad, report) is ExitCode.SUCCESS
    assert len(console.errors) == 1
    assert console.errors[0].startswith(f"odfgrep: {bad}: ")
    assert f"{report}: The budget is approved." in console.lines


def test_corrupt_document_alone_is_a_read_error(
    console: RecordingConsole, tmp_path: Path
) -> None:
    bad = str(corrupt_member(make_document(tmp_path / "bad.odt", "budget"), "content.xml"))
    assert search(console, bad) is ExitCode.IO_ERROR
    assert console.lines == []


def test_aborted_document_gets_no_count(console: RecordingConsole, tmp_path: Path) -> None:
    missing = str(tmp_path / "missing.odt")
    search(console, missing, action=ActionKind.COUNT)
    search(console, missing, action=ActionKind.ECHO_NO_MATCH)
    assert console.lines == []


def test_document_without_body(console: RecordingConsole, tmp_path: Path) -> None:
    xml = '<office:document-content xmlns:office="urn:x"/>'
    doc = str(write_package(tmp_path / "nobody.odt", content=xml))
    assert search(console, doc, action=ActionKind.COUNT) is ExitCode.NO_MATCH
    assert console.lines == ["0"]


def test_spreadsheet(console: RecordingConsole, tmp_path: Path) -> None:
    body = (
        "<table:table><table:table-row>"
        "<table:table-cell><text:p>budget</text:p></table:table-cell>"
        "</table:table-row></table:table>"
    )
    doc = tmp_path / "sheet.ods"
    write_package(doc, content=content_xml(body, kind="spreadsheet"))
    assert search(console, str(doc)) is ExitCode.SUCCESS
    assert console.lines == ["budget"]


def test_extended_syntax_and_ignore_case(console: RecordingConsole, report: str) -> None:
    code = search(
        console,
        report,
        patterns=["^(the|a) "],
        syntax=SyntaxFlavor.EXTENDED,
        ignore_case=True,
    )
    assert code is ExitCode.SUCCESS
    assert console.lines == ["The budget is approved.", "A second budget line."]


def test_invalid_pattern_raises_before_any_document(console: RecordingConsole) -> None:
    config = make_config(patterns=["[unclosed"], documents=["never-opened.odt"])
    with pytest.raises(PatternError):
        Searcher(config, console)
    assert console.errors == []
