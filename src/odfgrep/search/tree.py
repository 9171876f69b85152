# topmark:header:start
#
#   project      : odfgrep
#   file         : tree.py
#   file_relpath : src/odfgrep/search/tree.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""XML tree helpers on top of lxml.

Nodes are classified by their *local* name: ODF prefixes (``text:``,
``office:``...) are bound to namespaces that do not matter for searching.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from odfgrep.config.logging import get_logger
from odfgrep.core.errors import DocumentParseError

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        remove_comments=True,
        remove_pis=True,
    )


def parse_document(data: bytes, member: str) -> etree._Element:
    """Parse a package member and return its root element.

    Args:
        data (bytes): The raw XML stream.
        member (str): Member name, used in error messages.

    Returns:
        etree._Element: The root element.

    Raises:
        DocumentParseError: If ``data`` is not well-formed XML.
    """
    try:
        return etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(f"{member}: {e}") from e


def local_name(node: etree._Element) -> str:
    """Return the tag name of ``node`` without its namespace."""
    return etree.QName(node).localname


def element_children(node: etree._Element) -> Iterator[etree._Element]:
    """Iterate over the element children of ``node`` in document order."""
    return node.iterchildren(etree.Element)


def first_child(node: etree._Element, *names: str) -> etree._Element | None:
    """Return the first element child whose local name is one of ``names``.

    When several names are given, the earlier name wins regardless of
    document order.
    """
    children = list(element_children(node))
    for name in names:
        for child in children:
            if local_name(child) == name:
                return child
    return None


def attribute(node: etree._Element, name: str) -> str | None:
    """Look up an attribute by local name, ignoring its namespace."""
    for key, value in node.attrib.items():
        if etree.QName(key).localname == name:
            return value
    return None


def flattened_text(node: etree._Element) -> bytes:
    """Return the UTF-8 encoded text of all descendants of ``node``, markup ignored."""
    return etree.tostring(node, method="text", encoding="utf-8", with_tail=False)
