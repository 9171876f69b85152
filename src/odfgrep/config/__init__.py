# topmark:header:start
#
#   project      : odfgrep
#   file         : __init__.py
#   file_relpath : src/odfgrep/config/__init__.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Configuration for odfgrep: logging, the run configuration model and TOML loading.

Submodules:
    - `odfgrep.config.logging`: logger class, TRACE level and log setup.
    - `odfgrep.config.model`: immutable `Config` and mutable `MutableConfig`.
    - `odfgrep.config.loaders`: discovery and parsing of TOML configuration files.
"""

from __future__ import annotations
