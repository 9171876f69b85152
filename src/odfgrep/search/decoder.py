# topmark:header:start
#
#   project      : odfgrep
#   file         : decoder.py
#   file_relpath : src/odfgrep/search/decoder.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Structural UTF-8 decoder.

`decode` turns the raw bytes of a text unit into a code point sequence (a
``str``). Only the structure of each sequence is checked: lead and
continuation bytes must have the right bit patterns and the right count.
Overlong forms and surrogate code points are accepted, so callers must not
assume full Unicode conformance of the result.

Buffers that are strictly valid UTF-8 take the codec fast path; the codec
produces the same code points as the structural loop for every such buffer.
"""

from __future__ import annotations

import sys
from typing import Final

from odfgrep.config.logging import get_logger
from odfgrep.core.errors import EncodingError

logger = get_logger(__name__)

# (lead mask, lead value, payload mask, continuation count)
_LEAD_FORMS: Final[tuple[tuple[int, int, int, int], ...]] = (
    (0xE0, 0xC0, 0x1F, 1),
    (0xF0, 0xE0, 0x0F, 2),
    (0xF8, 0xF0, 0x07, 3),
)


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def decode(data: bytes) -> str:
    """Decode a UTF-8 byte buffer into a code point sequence.

    Args:
        data (bytes): The encoded text.

    Returns:
        str: The decoded code points.

    Raises:
        EncodingError: If a continuation byte appears in lead position, a lead byte
            is not followed by the required number of continuation bytes, a byte
            is not a valid lead byte, or the value is not a Unicode code point.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.trace("Strict UTF-8 decoding failed, falling back to structural decoding")
    return _decode_structural(data)


def _decode_structural(data: bytes) -> str:
    code_points: list[str] = []
    size = len(data)
    pos = 0
    while pos < size:
        lead = data[pos]
        if lead < 0x80:
            code_points.append(chr(lead))
            pos += 1
            continue
        if _is_continuation(lead):
            raise EncodingError("unexpected continuation byte", offset=pos)

        for lead_mask, lead_value, payload_mask, count in _LEAD_FORMS:
            if lead & lead_mask == lead_value:
                break
        else:
            raise EncodingError(f"invalid lead byte 0x{lead:02x}", offset=pos)

        code = lead & payload_mask
        for offset in range(pos + 1, pos + 1 + count):
            if offset >= size:
                raise EncodingError("truncated multi-byte sequence", offset=offset)
            byte = data[offset]
            if not _is_continuation(byte):
                raise EncodingError("invalid continuation byte", offset=offset)
            code = (code << 6) | (byte & 0x3F)

        if code > sys.maxunicode:
            raise EncodingError(f"code point U+{code:X} out of range", offset=pos)
        code_points.append(chr(code))
        pos += 1 + count

    return "".join(code_points)
