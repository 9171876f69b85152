# topmark:header:start
#
#   project      : odfgrep
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Pytest configuration for the odfgrep test suite.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `odfgrep.config.model.MutableConfig` and `freeze()` them, or
    use `make_config`. Do not mutate a frozen `Config`; thaw it instead.
"""

from __future__ import annotations

from typing import Any

import pytest

from odfgrep.config import logging
from odfgrep.config.model import Config, MutableConfig


@pytest.fixture(autouse=True)
def silence_odfgrep_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure odfgrep's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise on stderr of CLI runs when the
    developer has exported ODFGREP_LOG_LEVEL in their shell.
    """
    monkeypatch.delenv("ODFGREP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level for all tests so every logging call is exercised."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Field values applied to the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m = MutableConfig()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


class RecordingConsole:
    """`ConsoleLike` that records program output instead of printing it."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def print(self, text: str = "", *, nl: bool = True) -> None:
        self.lines.append(text)

    def warn(self, text: str, *, nl: bool = True) -> None:
        self.warnings.append(text)

    def error(self, text: str, *, nl: bool = True) -> None:
        self.errors.append(text)

    def styled(self, text: str, **style_kwargs: object) -> str:
        return text


@pytest.fixture
def console() -> RecordingConsole:
    """A fresh recording console."""
    return RecordingConsole()

