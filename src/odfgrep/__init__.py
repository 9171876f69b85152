# topmark:header:start
#
#   project      : odfgrep
#   file         : __init__.py
#   file_relpath : src/odfgrep/__init__.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""odfgrep package.

odfgrep searches OpenDocument files (ZIP containers of XML streams) for a
pattern in the manner of ``grep``. Paragraphs and headings of the document
body, and optionally the fields of the metadata stream, are matched one by one
and reported through a selectable output action.
"""

from __future__ import annotations
