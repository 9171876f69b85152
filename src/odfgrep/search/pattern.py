# topmark:header:start
#
#   project      : odfgrep
#   file         : pattern.py
#   file_relpath : src/odfgrep/search/pattern.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Pattern compilation for the grep syntax flavors.

Patterns are compiled once per run into a `CompiledPattern` backed by the
standard ``re`` module. POSIX basic and extended expressions are translated
to ``re`` syntax first:

- BRE (``-G``, the default): ``\\( \\) \\{ \\} \\| \\+ \\?`` are operators and
  their bare forms are literal characters (GNU flavour).
- ERE (``-E``): operators are bare.
- Both: ``\\<`` and ``\\>`` match at the start and end of a word, POSIX
  bracket classes such as ``[[:digit:]]`` are supported (ASCII ranges), and a
  repetition operator with nothing to repeat is a literal character.

Perl syntax (``-P``) is handed to ``re`` unchanged and fixed strings (``-F``)
are escaped. Several patterns form an alternation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from odfgrep.config.logging import get_logger
from odfgrep.core.errors import PatternError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


class SyntaxFlavor(str, Enum):
    """Pattern syntax selected on the command line."""

    BASIC = "basic"
    EXTENDED = "extended"
    PERL = "perl"
    FIXED = "fixed"


POSIX_CLASSES: Final[dict[str, str]] = {
    "alnum": "0-9A-Za-z",
    "alpha": "A-Za-z",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "\\x21-\\x7e",
    "lower": "a-z",
    "print": "\\x20-\\x7e",
    "punct": re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    "space": "\\s",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}

WORD_START: Final[str] = r"\b(?=\w)"
WORD_END: Final[str] = r"\b(?<=\w)"

# Escapes that keep their ``re`` meaning in both POSIX flavors
_PASSTHROUGH_ESCAPES: Final[frozenset[str]] = frozenset("wWsSbB123456789")

# GNU start/end of buffer
_BUFFER_ANCHORS: Final[dict[str, str]] = {"`": r"\A", "'": r"\Z"}

_INTERVAL_BODY: Final[re.Pattern[str]] = re.compile(r"\d+(,\d*)?|,\d+")

_BRE_OPERATORS: Final[dict[str, str]] = {
    "(": "(",
    ")": ")",
    "{": "{",
    "}": "}",
    "|": "|",
    "+": "+",
    "?": "?",
}

_REPEAT_CHARS: Final[frozenset[str]] = frozenset("*+?{")

_DIGITS: Final[str] = "0123456789"
_NONZERO_DIGITS: Final[str] = "123456789"
_OCTAL_DIGITS: Final[str] = "01234567"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled search pattern.

    Attributes:
        source (tuple[str, ...]): The patterns as given by the user.
        flavor (SyntaxFlavor): The syntax they were written in.
        regex (re.Pattern[str]): The compiled alternation.
    """

    source: tuple[str, ...]
    flavor: SyntaxFlavor
    regex: re.Pattern[str]

    def search(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in ``text``."""
        return self.regex.search(text) is not None


def compile_pattern(
    patterns: Sequence[str],
    *,
    flavor: SyntaxFlavor = SyntaxFlavor.BASIC,
    ignore_case: bool = False,
) -> CompiledPattern:
    """Compile one or more patterns into a single `CompiledPattern`.

    Args:
        patterns (Sequence[str]): Patterns to combine; a text unit matches when any matches.
        flavor (SyntaxFlavor): Syntax of the patterns.
        ignore_case (bool): Match case-insensitively.

    Returns:
        CompiledPattern: The compiled pattern.

    Raises:
        PatternError: If no pattern is given or a pattern is invalid.
    """
    if not patterns:
        raise PatternError("no pattern given")

    flags = re.IGNORECASE if ignore_case else 0
    translated: list[str] = []
    groups = 0
    for source in patterns:
        expression = to_python_regex(source, flavor)
        try:
            own_groups = re.compile(expression, flags).groups
        except re.error as e:
            raise PatternError(f"invalid {flavor.value} pattern: {e}") from e
        # Groups of the earlier alternatives come first in the combined expression
        translated.append(shift_backreferences(expression, groups))
        groups += own_groups

    expression = translated[0] if len(translated) == 1 else "|".join(f"(?:{t})" for t in translated)
    logger.debug("Compiled %s pattern(s) %r as %r", flavor.value, list(patterns), expression)

    try:
        regex = re.compile(expression, flags)
    except re.error as e:
        raise PatternError(f"invalid {flavor.value} pattern: {e}") from e
    return CompiledPattern(source=tuple(patterns), flavor=flavor, regex=regex)


def shift_backreferences(expression: str, offset: int) -> str:
    """Renumber the numeric backreferences of an ``re`` expression.

    ``\\N`` becomes ``(?:\\M)`` with ``M = N + offset``; the group keeps a
    following digit from joining the number. Escapes inside character classes
    and three-digit octal escapes are not backreferences and are copied as is.

    Args:
        expression (str): A valid ``re`` expression.
        offset (int): Number of capturing groups that precede it.

    Returns:
        str: The expression with its backreferences renumbered.
    """
    if offset == 0:
        return expression

    out: list[str] = []
    size = len(expression)
    pos = 0
    in_class = False
    while pos < size:
        char = expression[pos]
        if char == "\\" and pos + 1 < size:
            if in_class or expression[pos + 1] not in _NONZERO_DIGITS:
                out.append(expression[pos : pos + 2])
                pos += 2
                continue
            end = pos + 2
            if end < size and expression[end] in _DIGITS:
                if (
                    expression[pos + 1] in _OCTAL_DIGITS
                    and expression[end] in _OCTAL_DIGITS
                    and end + 1 < size
                    and expression[end + 1] in _OCTAL_DIGITS
                ):
                    out.append(expression[pos : end + 2])
                    pos = end + 2
                    continue
                end += 1
            out.append(f"(?:\\{int(expression[pos + 1 : end]) + offset})")
            pos = end
            continue
        if char == "[" and not in_class:
            in_class = True
            out.append(char)
            pos += 1
            # A ``]`` right after ``[`` or ``[^`` is a literal
            if pos < size and expression[pos] == "^":
                out.append("^")
                pos += 1
            if pos < size and expression[pos] == "]":
                out.append("]")
                pos += 1
            continue
        if char == "]" and in_class:
            in_class = False
        out.append(char)
        pos += 1
    return "".join(out)


def to_python_regex(pattern: str, flavor: SyntaxFlavor) -> str:
    """Translate a single pattern to ``re`` syntax.

    Raises:
        PatternError: If a POSIX pattern is structurally invalid.
    """
    if flavor is SyntaxFlavor.FIXED:
        return re.escape(pattern)
    if flavor is SyntaxFlavor.PERL:
        return pattern
    return _PosixTranslator(pattern, basic=flavor is SyntaxFlavor.BASIC).translate()


class _PosixTranslator:
    """Single-pass translator from POSIX BRE/ERE to ``re`` syntax."""

    def __init__(self, pattern: str, *, basic: bool) -> None:
        self.pattern = pattern
        self.basic = basic
        self.pos = 0
        self.out: list[str] = []
        # True where a repetition operator would have nothing to repeat
        self.at_expression_start = True

    def translate(self) -> str:
        size = len(self.pattern)
        while self.pos < size:
            char = self.pattern[self.pos]
            self.pos += 1
            if char == "\\":
                self._escape()
            elif char == "[":
                self._emit(self._bracket())
            elif char == "^":
                self._anchor_start()
            elif char == "$":
                self._anchor_end()
            elif self.basic and char in _BRE_OPERATORS:
                self._emit(re.escape(char))
            elif char in _REPEAT_CHARS and self.at_expression_start:
                self._emit(re.escape(char))
            elif not self.basic and char in "(|":
                self.out.append(char)
                self.at_expression_start = True
            elif not self.basic and char == "{":
                self._interval()
            elif char in _REPEAT_CHARS:
                self.out.append(char)
            else:
                self._emit(char if char in ".)" else re.escape(char))
        return "".join(self.out)

    def _emit(self, token: str) -> None:
        self.out.append(token)
        self.at_expression_start = False

    def _interval(self) -> None:
        """Copy an ERE ``{m,n}`` interval; anything else makes ``{`` a literal."""
        end = self.pattern.find("}", self.pos)
        body = self.pattern[self.pos : end] if end >= 0 else ""
        if end >= 0 and _INTERVAL_BODY.fullmatch(body):
            self.out.append("{" + body + "}")
            self.pos = end + 1
        else:
            self._emit(re.escape("{"))

    def _escape(self) -> None:
        if self.pos >= len(self.pattern):
            raise PatternError("trailing backslash")
        char = self.pattern[self.pos]
        self.pos += 1
        if char == "<":
            self._emit(WORD_START)
        elif char == ">":
            self._emit(WORD_END)
        elif char in _BUFFER_ANCHORS:
            self._emit(_BUFFER_ANCHORS[char])
        elif char in _PASSTHROUGH_ESCAPES:
            self._emit(f"\\{char}")
        elif self.basic and char in _BRE_OPERATORS:
            self._bre_operator(char)
        else:
            self._emit(re.escape(char))

    def _bre_operator(self, char: str) -> None:
        if char in "(|":
            self.out.append(_BRE_OPERATORS[char])
            self.at_expression_start = True
        elif char in "+?{" and self.at_expression_start:
            self._emit(re.escape(char))
        elif char in "+?{":
            self.out.append(_BRE_OPERATORS[char])
        else:
            self._emit(_BRE_OPERATORS[char])

    def _anchor_start(self) -> None:
        # In BRE, ``^`` is an anchor only where an expression starts
        if self.basic and not self.at_expression_start:
            self._emit(re.escape("^"))
        else:
            self.out.append("^")

    def _anchor_end(self) -> None:
        rest = self.pattern[self.pos :]
        at_end = not rest or (rest.startswith("\\)") or rest.startswith("\\|"))
        if self.basic and not at_end:
            self._emit(re.escape("$"))
        else:
            self._emit("$")

    def _bracket(self) -> str:
        """Translate a bracket expression; ``self.pos`` is just past the ``[``."""
        pattern = self.pattern
        size = len(pattern)
        items: list[str] = []
        negate = False
        if self.pos < size and pattern[self.pos] == "^":
            negate = True
            self.pos += 1
        # A ``]`` first in the list is a literal
        if self.pos < size and pattern[self.pos] == "]":
            items.append("\\]")
            self.pos += 1

        while True:
            if self.pos >= size:
                raise PatternError("unmatched [ in pattern")
            char = pattern[self.pos]
            if char == "]":
                self.pos += 1
                break
            if pattern.startswith("[:", self.pos):
                end = pattern.find(":]", self.pos + 2)
                if end < 0:
                    raise PatternError("unterminated character class")
                name = pattern[self.pos + 2 : end]
                if name not in POSIX_CLASSES:
                    raise PatternError(f"invalid character class '{name}'")
                items.append(POSIX_CLASSES[name])
                self.pos = end + 2
                continue
            if char == "-" and items and self.pos + 1 < size and pattern[self.pos + 1] != "]":
                items.append("-")
            elif char in "\\[]^-&~|":
                # Backslash is literal inside POSIX brackets
                items.append(f"\\{char}")
            else:
                items.append(char)
            self.pos += 1

        return "[" + ("^" if negate else "") + "".join(items) + "]"
