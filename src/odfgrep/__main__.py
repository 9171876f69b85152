# topmark:header:start
#
#   project      : odfgrep
#   file         : __main__.py
#   file_relpath : src/odfgrep/__main__.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Module entry point for running odfgrep via ``python -m odfgrep``.

It delegates directly to :func:`odfgrep.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how odfgrep is launched.

Examples:
    Search a document using the module interface::

        python -m odfgrep -i budget report.odt
"""

from __future__ import annotations

from odfgrep.cli.main import cli

if __name__ == "__main__":
    cli()
