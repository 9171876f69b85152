# topmark:header:start
#
#   project      : odfgrep
#   file         : options.py
#   file_relpath : src/odfgrep/cli/options.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Reusable Click options and their resolution logic.

Option groups mirror grep's option set: output action, pattern selection and
syntax, what to search, output prefixing and color. Options that exclude each
other are plain flags resolved here, so conflicts are reported as usage errors
instead of being decided silently by parameter order.
"""

from __future__ import annotations

import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from odfgrep.cli.cli_types import EnumChoiceParam
from odfgrep.cli.errors import OdfgrepUsageError
from odfgrep.config.logging import get_logger
from odfgrep.config.types import ColorMode, FilenamePolicy
from odfgrep.search.actions import ActionKind
from odfgrep.search.pattern import SyntaxFlavor

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)


def common_action_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the output action flags ``-c``, ``-l``, ``-L`` and ``-q``."""
    f = click.option(
        "-c",
        "--count",
        "count",
        is_flag=True,
        help="Print only a count of matching paragraphs per document.",
    )(f)
    f = click.option(
        "-l",
        "--files-with-matches",
        "files_with_matches",
        is_flag=True,
        help="Print only the names of documents with a match.",
    )(f)
    f = click.option(
        "-L",
        "--files-without-match",
        "files_without_match",
        is_flag=True,
        help="Print only the names of documents without a match.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        "--silent",
        "quiet",
        is_flag=True,
        help="Print nothing; exit with status 0 on the first match.",
    )(f)
    return f


def common_pattern_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add pattern selection and syntax options."""
    f = click.option(
        "-e",
        "--regexp",
        "regexps",
        multiple=True,
        metavar="PATTERN",
        help="Use PATTERN for matching; repeatable. Use this if PATTERN starts with '-'.",
    )(f)
    f = click.option(
        "-f",
        "--file",
        "pattern_files",
        multiple=True,
        metavar="FILE",
        type=click.Path(dir_okay=False, path_type=str),
        help="Read patterns from FILE, one per line.",
    )(f)
    f = click.option(
        "-G",
        "--basic-regexp",
        "basic_regexp",
        is_flag=True,
        help="PATTERN is a POSIX basic regular expression (default).",
    )(f)
    f = click.option(
        "-E",
        "--extended-regexp",
        "extended_regexp",
        is_flag=True,
        help="PATTERN is a POSIX extended regular expression.",
    )(f)
    f = click.option(
        "-P",
        "--perl-regexp",
        "perl_regexp",
        is_flag=True,
        help="PATTERN is a Perl-style (Python re) regular expression.",
    )(f)
    f = click.option(
        "-F",
        "--fixed-strings",
        "fixed_strings",
        is_flag=True,
        help="PATTERN is a literal string.",
    )(f)
    f = click.option(
        "-i",
        "--ignore-case/--no-ignore-case",
        "ignore_case",
        default=None,
        help="Ignore case distinctions.",
    )(f)
    f = click.option(
        "-v",
        "--invert-match",
        "invert",
        is_flag=True,
        help="Select paragraphs that do not match.",
    )(f)
    f = underscored_trap_option("--ignore_case", "--invert_match", "--fixed_strings")(f)
    return f


def common_search_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add options that control what is searched."""
    f = click.option(
        "-M",
        "--meta/--no-meta",
        "search_meta",
        default=None,
        help="Also search the document metadata (meta.xml).",
    )(f)
    f = click.option(
        "-d",
        "--deleted/--no-deleted",
        "search_deleted",
        default=None,
        help="Also search tracked-changes deleted text.",
    )(f)
    f = click.option(
        "-m",
        "--max-count",
        "max_count",
        type=click.IntRange(min=0),
        default=None,
        metavar="NUM",
        help="Stop reporting after NUM matches per document (0 means no limit).",
    )(f)
    f = underscored_trap_option("--max_count")(f)
    return f


def common_output_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add filename prefix and color options."""
    f = click.option(
        "-H",
        "--with-filename",
        "with_filename",
        is_flag=True,
        help="Print the document name for each match.",
    )(f)
    f = click.option(
        "-h",
        "--no-filename",
        "no_filename",
        is_flag=True,
        help="Never print document names with matches.",
    )(f)
    f = click.option(
        "--color",
        "--colour",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help=f"Colorize output ({', '.join(m.value for m in ColorMode)}).",
    )(f)
    f = underscored_trap_option("--with_filename", "--no_filename")(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore odfgrep.toml and pyproject.toml in the working directory.",
    )(f)
    f = click.option(
        "--config",
        "config_path",
        metavar="FILE",
        type=click.Path(exists=True, dir_okay=False, readable=True, path_type=str),
        default=None,
        help="Read settings from FILE instead of discovering a config file.",
    )(f)
    f = underscored_trap_option("--no_config")(f)
    return f


def trap_underscored_option(
    ctx: click.Context,
    param: click.Parameter,
    value: object,
) -> None:
    """Raise a helpful error for underscored long options (e.g., --max_count).

    Runs during option parsing (is_eager=True) so we can show a friendly hint
    instead of the generic "No such option" error.
    """
    name = getattr(param, "name", None)
    src = ctx.get_parameter_source(name) if name else None
    if src is not ParameterSource.COMMANDLINE:
        return

    typed = [opt for opt in param.opts if opt in sys.argv] or param.opts
    bad = typed[0] if typed else "--?"
    suggestion = bad.replace("_", "-")
    raise click.UsageError(f"Unknown option: {bad}. Did you mean {suggestion}?")


def underscored_trap_option(*names: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register hidden underscored spellings that raise a helpful error.

    The hidden option gets a unique destination name so Click's parameter
    source tracking does not overlap with the real option's destination.

    Args:
        *names: One or more underscored long option names to trap,
            e.g. "--max_count".

    Returns:
        A decorator compatible with Click's option stacking.
    """
    if not names:
        raise ValueError("underscored_trap_option requires at least one option name")

    first = names[0]
    dest = f"_trap_{first.lstrip('-').replace('-', '_')}"

    return click.option(
        *names,
        dest,
        hidden=True,
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=trap_underscored_option,
    )


# --- Resolution helpers ---


def resolve_action(
    *,
    count: bool,
    files_with_matches: bool,
    files_without_match: bool,
    quiet: bool,
) -> ActionKind | None:
    """Resolve the output action flags.

    ``-q`` overrides every other action, then ``-L``, ``-l`` and ``-c``, as in
    GNU grep. Returns ``None`` when no action flag was given.
    """
    if quiet:
        return ActionKind.QUIET
    if files_without_match:
        return ActionKind.ECHO_NO_MATCH
    if files_with_matches:
        return ActionKind.ECHO_FILE
    if count:
        return ActionKind.COUNT
    return None


def resolve_syntax(
    *,
    basic_regexp: bool,
    extended_regexp: bool,
    perl_regexp: bool,
    fixed_strings: bool,
) -> SyntaxFlavor | None:
    """Resolve the ``-G``/``-E``/``-P``/``-F`` flags.

    Raises:
        OdfgrepUsageError: If more than one syntax flag is given.
    """
    chosen = [
        flavor
        for flavor, flag in (
            (SyntaxFlavor.BASIC, basic_regexp),
            (SyntaxFlavor.EXTENDED, extended_regexp),
            (SyntaxFlavor.PERL, perl_regexp),
            (SyntaxFlavor.FIXED, fixed_strings),
        )
        if flag
    ]
    if len(chosen) > 1:
        raise OdfgrepUsageError("conflicting matchers specified")
    return chosen[0] if chosen else None


def resolve_filename_policy(*, with_filename: bool, no_filename: bool) -> FilenamePolicy | None:
    """Resolve ``-H``/``-h``.

    Raises:
        OdfgrepUsageError: If both flags are given.
    """
    if with_filename and no_filename:
        raise OdfgrepUsageError("options -H and -h are mutually exclusive")
    if with_filename:
        return FilenamePolicy.ALWAYS
    if no_filename:
        return FilenamePolicy.NEVER
    return None


def read_pattern_files(paths: tuple[str, ...] | list[str]) -> list[str]:
    """Read patterns from files, one per line.

    A trailing newline does not add an empty pattern; blank lines inside a
    file do, and an empty pattern matches every paragraph.

    Raises:
        OdfgrepUsageError: If a file cannot be read.
    """
    patterns: list[str] = []
    for path in paths:
        try:
            with click.open_file(path, encoding="utf-8") as stream:
                text = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise OdfgrepUsageError(f"{path}: {getattr(e, 'strerror', None) or e}") from e
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        logger.debug("Read %d pattern(s) from %s", len(lines), path)
        patterns.extend(line.rstrip("\r") for line in lines)
    return patterns


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode: Color mode from the CLI or the config file (auto, always, never).
        stdout_isatty: Whether stdout is a TTY; if None, auto-detected.

    Returns:
        True if color output should be enabled, False otherwise.

    Behavior:
        Honors --color=always/never.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def split_positionals(
    args: tuple[str, ...],
    *,
    have_patterns: bool,
) -> tuple[str | None, list[str]]:
    """Split positional arguments into (pattern, documents).

    Without ``-e``/``-f`` the first positional argument is the pattern.
    """
    if have_patterns:
        return None, list(args)
    if not args:
        return None, []
    return args[0], list(args[1:])
