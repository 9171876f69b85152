# topmark:header:start
#
#   project      : odfgrep
#   file         : __init__.py
#   file_relpath : src/odfgrep/core/__init__.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Core, framework-agnostic building blocks shared by the engine and the CLI."""

from __future__ import annotations
