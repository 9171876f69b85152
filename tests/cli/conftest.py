# topmark:header:start
#
#   project      : odfgrep
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""CLI test helpers for running odfgrep in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click command, so relative document names and
configuration discovery resolve against the temporary test directory.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from odfgrep.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def run_cli_in(tmp_path: Path, argv: Sequence[str]) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (Sequence[str]): CLI argument vector, e.g. ``["-c", "budget", "a.odt"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, list(argv))
    finally:
        os.chdir(cwd)


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on files in ``tmp_path``
    (e.g., ``--help`` / ``--version``) or when all provided paths are absolute.
    """
    return CliRunner().invoke(cli, list(argv))
