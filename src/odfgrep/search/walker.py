# topmark:header:start
#
#   project      : odfgrep
#   file         : walker.py
#   file_relpath : src/odfgrep/search/walker.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Content walker: turn a parsed ODF stream into text units.

Two modes exist:

- **Content mode** walks the body of ``content.xml`` depth-first, pre-order.
  A paragraph (``<text:p>``) or heading (``<text:h>``) yields one text unit
  and is not descended into. A ``<text:deletion>`` subtree (tracked-changes
  deleted text) is skipped unless deleted text is searched. Every other
  element is descended into: sections, lists, tables, frames and so on.
- **Metadata mode** yields one text unit per field of ``meta.xml``.

The walkers are lazy generators: no node is visited before its unit is
requested, so a consumer that stops iterating stops the traversal on the spot.
`walk` is that consumer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from odfgrep.config.logging import get_logger
from odfgrep.constants import (
    BODY_CONTENT_TAGS,
    BODY_TAG,
    DELETION_TAG,
    META_TAG,
    NAME_ATTRIBUTE,
    TEXT_BLOCK_TAGS,
    USER_DEFINED_TAG,
)
from odfgrep.search.tree import attribute, element_children, first_child, flattened_text, local_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from lxml import etree

    from odfgrep.search.actions import Verdict

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Label:
    """Qualifying label of a text unit.

    Attributes:
        document (str): The document path as given by the user.
        field (str | None): Metadata field name, for units from ``meta.xml``.
    """

    document: str
    field: str | None = None

    def __str__(self) -> str:
        if self.field is None:
            return self.document
        return f"{self.document}<{self.field}>"


@dataclass(frozen=True, slots=True)
class TextUnit:
    """One paragraph, heading or metadata field offered to the matcher.

    Attributes:
        raw (bytes): UTF-8 encoded text, markup removed.
        label (Label): Where the text comes from.
    """

    raw: bytes
    label: Label


def find_content_root(root: etree._Element) -> etree._Element | None:
    """Locate the searchable subtree of a ``content.xml`` root.

    Returns ``<office:text>`` under ``<office:body>``, or the spreadsheet,
    presentation or drawing body of other document kinds.
    """
    body = first_child(root, BODY_TAG)
    if body is None:
        logger.debug("No <%s> element under <%s>", BODY_TAG, local_name(root))
        return None
    return first_child(body, *BODY_CONTENT_TAGS)


def iter_content_units(
    parent: etree._Element,
    label: Label,
    *,
    search_deleted: bool = False,
) -> Iterator[TextUnit]:
    """Yield the text units below ``parent`` in document order.

    Args:
        parent (etree._Element): Container whose children are walked.
        label (Label): Label attached to every unit.
        search_deleted (bool): Descend into deletion markers instead of skipping them.

    Yields:
        TextUnit: One unit per paragraph or heading.
    """
    for node in element_children(parent):
        name = local_name(node)
        if name in TEXT_BLOCK_TAGS:
            yield TextUnit(raw=flattened_text(node), label=label)
        elif search_deleted or name != DELETION_TAG:
            yield from iter_content_units(node, label, search_deleted=search_deleted)
        else:
            logger.trace("Skipping deleted text in %s", label)


def iter_meta_units(root: etree._Element, document: str) -> Iterator[TextUnit]:
    """Yield one text unit per metadata field of a ``meta.xml`` root.

    The root is ``<office:document-meta>`` and its single child
    ``<office:meta>`` holds the fields. Each unit is labelled with the field's
    local name; user-defined fields use their ``meta:name`` as well.
    """
    meta = first_child(root, META_TAG)
    if meta is None:
        logger.debug("No <%s> element in metadata of %s", META_TAG, document)
        return
    for node in element_children(meta):
        field = local_name(node)
        if field == USER_DEFINED_TAG:
            name = attribute(node, NAME_ATTRIBUTE)
            if name:
                field = f"{field}:{name}"
        yield TextUnit(raw=flattened_text(node), label=Label(document, field))


def walk(units: Iterable[TextUnit], offer: Callable[[TextUnit], Verdict]) -> Verdict:
    """Offer each unit in turn until a verdict other than "continue" comes back.

    Args:
        units (Iterable[TextUnit]): Units to offer, usually a lazy walker.
        offer (Callable[[TextUnit], Verdict]): Receives each unit and decides whether
            to go on.

    Returns:
        Verdict: ``True`` if all units were offered, else the stopping verdict.
    """
    for unit in units:
        verdict = offer(unit)
        if verdict is not True:
            return verdict
    return True
