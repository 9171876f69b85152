# topmark:header:start
#
#   project      : odfgrep
#   file         : test_walker.py
#   file_relpath : tests/search/test_walker.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Tests for the content and metadata walkers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from odfgrep.core.exit_codes import ExitCode
from odfgrep.search.actions import Terminate
from odfgrep.search.tree import parse_document
from odfgrep.search.walker import (
    Label,
    TextUnit,
    find_content_root,
    iter_content_units,
    iter_meta_units,
    walk,
)
from tests.documents import content_xml, meta_xml

if TYPE_CHECKING:
    from collections.abc import Iterator

TRACKED_BODY = (
    "<text:h>Title</text:h>"
    "<text:tracked-changes><text:changed-region>"
    "<text:deletion><text:p>removed words</text:p></text:deletion>"
    "</text:changed-region></text:tracked-changes>"
    "<text:p>first <text:span>styled</text:span> paragraph</text:p>"
    "<text:section><text:list><text:list-item>"
    "<text:p>nested item</text:p>"
    "</text:list-item></text:list></text:section>"
    "<text:p>outer<text:note><text:note-body>"
    "<text:p>footnote</text:p>"
    "</text:note-body></text:note></text:p>"
)


def content_texts(body: str, *, search_deleted: bool = False, kind: str = "text") -> list[str]:
    root = find_content_root(parse_document(content_xml(body, kind=kind).encode(), "content.xml"))
    assert root is not None
    units = iter_content_units(root, Label("doc.odt"), search_deleted=search_deleted)
    return [u.raw.decode() for u in units]


def test_paragraphs_and_headings_are_units_in_document_order() -> None:
    assert content_texts(TRACKED_BODY) == [
        "Title",
        "first styled paragraph",
        "nested item",
        "outerfootnote",
    ]


def test_deleted_text_is_skipped_by_default_and_searched_on_request() -> None:
    assert "removed words" not in content_texts(TRACKED_BODY)
    assert content_texts(TRACKED_BODY, search_deleted=True) == [
        "Title",
        "removed words",
        "first styled paragraph",
        "nested item",
        "outerfootnote",
    ]


def test_units_carry_the_document_label() -> None:
    root = find_content_root(parse_document(content_xml("<text:p>x</text:p>").encode(), "c"))
    assert root is not None
    (unit,) = list(iter_content_units(root, Label("a.odt")))
    assert unit.label == Label("a.odt")
    assert str(unit.label) == "a.odt"


def test_spreadsheet_cells_are_searched() -> None:
    body = (
        "<table:table><table:table-row>"
        "<table:table-cell><text:p>Q1</text:p></table:table-cell>"
        "<table:table-cell><text:p>1200</text:p></table:table-cell>"
        "</table:table-row></table:table>"
    )
    assert content_texts(body, kind="spreadsheet") == ["Q1", "1200"]


def test_missing_body_has_no_content_root() -> None:
    data = b'<office:document-content xmlns:office="urn:x"/>'
    assert find_content_root(parse_document(data, "content.xml")) is None


def test_meta_units_are_labelled_by_field() -> None:
    fields = (
        "<dc:title>Quarterly report</dc:title>"
        "<meta:initial-creator>Ada</meta:initial-creator>"
        '<meta:user-defined meta:name="Project">Apollo</meta:user-defined>'
    )
    units = list(iter_meta_units(parse_document(meta_xml(fields).encode(), "meta.xml"), "r.odt"))
    assert [(str(u.label), u.raw.decode()) for u in units] == [
        ("r.odt<title>", "Quarterly report"),
        ("r.odt<initial-creator>", "Ada"),
        ("r.odt<user-defined:Project>", "Apollo"),
    ]


def test_meta_without_meta_element_yields_nothing() -> None:
    data = b'<office:document-meta xmlns:office="urn:x"/>'
    assert list(iter_meta_units(parse_document(data, "meta.xml"), "r.odt")) == []


def test_walk_stops_on_first_stopping_verdict_and_is_lazy() -> None:
    produced: list[str] = []

    def units() -> Iterator[TextUnit]:
        for text in ("a", "b", "c"):
            produced.append(text)
            yield TextUnit(raw=text.encode(), label=Label("d"))

    offered: list[str] = []

    def offer(unit: TextUnit) -> bool:
        offered.append(unit.raw.decode())
        return unit.raw != b"b"

    assert walk(units(), offer) is False
    assert offered == ["a", "b"]
    # Generator was not advanced past the stopping unit
    assert produced == ["a", "b"]


def test_walk_propagates_terminate() -> None:
    stop = Terminate(ExitCode.SUCCESS)
    unit = TextUnit(raw=b"x", label=Label("d"))
    assert walk([unit, unit], lambda _unit: stop) is stop


def test_walk_of_nothing_continues() -> None:
    assert walk([], lambda _unit: False) is True
