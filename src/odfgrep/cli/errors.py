# topmark:header:start
#
#   project      : odfgrep
#   file         : errors.py
#   file_relpath : src/odfgrep/cli/errors.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Exceptions for the odfgrep CLI.

Usage:
    Raise these exceptions in the command to signal errors with standardized
    messages and exit codes.

Styling:
    Exceptions are printed through the project console stored in the Click
    context, or a plain console once the context is gone (see `show()`).
"""

from __future__ import annotations

from typing import IO, Any

import click

from odfgrep.cli.console import get_console_safely
from odfgrep.core.exit_codes import ExitCode


class OdfgrepCliError(click.ClickException):
    """Base class for all odfgrep CLI errors."""

    exit_code = ExitCode.IO_ERROR

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text, without color."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error through the project console, grep style."""
        get_console_safely().error(f"odfgrep: {self.format_message()}")


class OdfgrepUsageError(OdfgrepCliError):
    """Error for invocation errors: bad flags, missing pattern, invalid pattern or config."""

    exit_code = ExitCode.USAGE_ERROR
