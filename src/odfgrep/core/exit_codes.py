# topmark:header:start
#
#   project      : odfgrep
#   file         : exit_codes.py
#   file_relpath : src/odfgrep/core/exit_codes.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Exit codes for odfgrep.

odfgrep follows the ``grep`` convention so that shell scripts can test for a
match with ``if odfgrep -q ...``. Click reports its own usage errors with exit
status 2, which collides with ``IO_ERROR``; the CLI remaps those to
``USAGE_ERROR``.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for odfgrep.

    Attributes:
        SUCCESS: At least one text unit was accepted in at least one document.
        NO_MATCH: No text unit was accepted in any document.
        IO_ERROR: Some document could not be read or parsed, and nothing matched.
        USAGE_ERROR: Invalid invocation, invalid pattern or invalid configuration.
    """

    SUCCESS = 0
    NO_MATCH = 1
    IO_ERROR = 2
    USAGE_ERROR = 3
