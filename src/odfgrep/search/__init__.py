# topmark:header:start
#
#   project      : odfgrep
#   file         : __init__.py
#   file_relpath : src/odfgrep/search/__init__.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Document search engine.

Leaves first:

- `decoder`: UTF-8 bytes to code points.
- `container` and `tree`: thin adapters over ``zipfile`` and ``lxml``.
- `pattern`: pattern compilation for the grep syntax flavors.
- `walker`: document-ordered text units.
- `actions`: output strategies.
- `matcher`: per-document match state and run status.
- `engine`: the run over all documents.

Nothing in this package imports Click; program output goes through a
`ConsoleLike` handed in by the caller.
"""

from __future__ import annotations
