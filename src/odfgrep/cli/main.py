# topmark:header:start
#
#   project      : odfgrep
#   file         : main.py
#   file_relpath : src/odfgrep/cli/main.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""The ``odfgrep`` command.

Key ideas:
- Shared state (logging, console) is initialized once and placed into ``ctx.obj``.
- Options are collected into a `MutableConfig`, merged over the configuration
  file and frozen before the engine runs.
- The engine returns an `ExitCode`; the command exits with it.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from odfgrep.cli.console import ClickConsole
from odfgrep.cli.errors import OdfgrepUsageError
from odfgrep.cli.options import (
    common_action_options,
    common_config_options,
    common_output_options,
    common_pattern_options,
    common_search_options,
    read_pattern_files,
    resolve_action,
    resolve_color_mode,
    resolve_filename_policy,
    resolve_syntax,
    split_positionals,
)
from odfgrep.config.loaders import load_config
from odfgrep.config.logging import get_logger, resolve_env_log_level, setup_logging
from odfgrep.config.model import MutableConfig
from odfgrep.constants import ODFGREP_VERSION
from odfgrep.core.errors import ConfigError, PatternError
from odfgrep.core.exit_codes import ExitCode
from odfgrep.search.engine import run_search

if TYPE_CHECKING:
    from odfgrep.config.model import Config
    from odfgrep.config.types import ColorMode

logger = get_logger(__name__)


class GrepCommand(click.Command):
    """Click command reporting parse errors with the usage exit code.

    Click exits with status 2 on usage errors, which odfgrep reserves for
    documents that could not be read.
    """

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: click.Context | None = None,
        **extra: Any,
    ) -> click.Context:
        """Create the context, remapping Click usage errors to `ExitCode.USAGE_ERROR`."""
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = ExitCode.USAGE_ERROR
            raise


def init_common_state(ctx: click.Context, *, color_mode: ColorMode | None) -> ClickConsole:
    """Initialize logging and the program-output console on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        color_mode (ColorMode | None): Color mode from ``--color`` (or ``None``).

    Returns:
        ClickConsole: The console stored under ``ctx.obj["console"]``.
    """
    ctx.obj = ctx.obj or {}

    # Configure internal logging via env:
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color = resolve_color_mode(cli_mode=color_mode)
    ctx.color = enable_color
    console = ClickConsole(enable_color=enable_color)
    ctx.obj["console"] = console
    return console


def build_config(
    *,
    cli_config: MutableConfig,
    config_path: str | None,
    no_config: bool,
) -> Config:
    """Merge the configuration file under the command-line options and freeze.

    Raises:
        OdfgrepUsageError: If the configuration file is invalid.
    """
    try:
        file_config = load_config(
            Path(config_path) if config_path is not None else None,
            no_config=no_config,
        )
    except ConfigError as e:
        raise OdfgrepUsageError(str(e)) from e
    try:
        return file_config.merge_with(cli_config).freeze()
    except ValueError as e:
        raise OdfgrepUsageError(str(e)) from e


@click.command(
    name="odfgrep",
    cls=GrepCommand,
    context_settings={"help_option_names": ["--help"]},
    help="Search for PATTERN in the text of each OpenDocument DOCUMENT.",
)
@click.version_option(ODFGREP_VERSION, "-V", "--version", prog_name="odfgrep")
@common_action_options
@common_pattern_options
@common_search_options
@common_output_options
@common_config_options
@click.argument("args", nargs=-1, metavar="[PATTERN] DOCUMENT...")
@click.pass_context
def cli(
    ctx: click.Context,
    *,
    count: bool,
    files_with_matches: bool,
    files_without_match: bool,
    quiet: bool,
    regexps: tuple[str, ...],
    pattern_files: tuple[str, ...],
    basic_regexp: bool,
    extended_regexp: bool,
    perl_regexp: bool,
    fixed_strings: bool,
    ignore_case: bool | None,
    invert: bool,
    search_meta: bool | None,
    search_deleted: bool | None,
    max_count: int | None,
    with_filename: bool,
    no_filename: bool,
    color_mode: ColorMode | None,
    config_path: str | None,
    no_config: bool,
    args: tuple[str, ...],
) -> None:
    """Entry point for the odfgrep CLI."""
    console = init_common_state(ctx, color_mode=color_mode)

    syntax = resolve_syntax(
        basic_regexp=basic_regexp,
        extended_regexp=extended_regexp,
        perl_regexp=perl_regexp,
        fixed_strings=fixed_strings,
    )
    filename_policy = resolve_filename_policy(with_filename=with_filename, no_filename=no_filename)
    action = resolve_action(
        count=count,
        files_with_matches=files_with_matches,
        files_without_match=files_without_match,
        quiet=quiet,
    )

    patterns = [*regexps, *read_pattern_files(pattern_files)]
    have_patterns = bool(regexps or pattern_files)
    positional_pattern, documents = split_positionals(args, have_patterns=have_patterns)
    if positional_pattern is not None:
        patterns.append(positional_pattern)
    if not have_patterns and positional_pattern is None:
        raise OdfgrepUsageError("no pattern given")
    if not documents:
        raise OdfgrepUsageError("no documents given")

    cli_config = MutableConfig(
        patterns=patterns,
        syntax=syntax,
        ignore_case=ignore_case,
        invert=invert or None,
        max_count=max_count,
        search_meta=search_meta,
        search_deleted=search_deleted,
        action=action,
        filename_policy=filename_policy,
        color_mode=color_mode,
        documents=documents,
    )
    config = build_config(cli_config=cli_config, config_path=config_path, no_config=no_config)
    logger.debug("Effective configuration: %s", config)

    # The configuration file may change the color mode chosen before it was read.
    if color_mode is None:
        console.enable_color = resolve_color_mode(cli_mode=config.color_mode)
        ctx.color = console.enable_color

    try:
        code = run_search(config, console)
    except PatternError as e:
        raise OdfgrepUsageError(str(e)) from e

    ctx.exit(int(code))


if __name__ == "__main__":
    cli()
