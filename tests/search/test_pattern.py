# topmark:header:start
#
#   project      : odfgrep
#   file         : test_pattern.py
#   file_relpath : tests/search/test_pattern.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""Tests for pattern translation and compilation."""

from __future__ import annotations

import pytest

from odfgrep.core.errors import PatternError
from odfgrep.search.pattern import SyntaxFlavor, compile_pattern, shift_backreferences


def matches(pattern: str, text: str, flavor: SyntaxFlavor = SyntaxFlavor.BASIC) -> bool:
    return compile_pattern([pattern], flavor=flavor).search(text)


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        ("budget", "The budget is approved.", True),
        ("a.c", "abc", True),
        ("^The", "The end", True),
        ("^end", "The end", False),
        ("end$", "The end", True),
        ("a*b", "b", True),
        # Bare ERE operators are literal in BRE
        ("a+", "aa", False),
        ("a+", "a+", True),
        ("(x)", "(x)", True),
        ("a|b", "a|b", True),
        ("a|b", "a", False),
        ("a{2}", "a{2}", True),
        # Backslashed operators are GNU BRE extensions
        (r"a\+", "caat", True),
        (r"colou\?r", "color", True),
        (r"\(ab\)\{2\}", "abab", True),
        (r"\(ab\)\{2\}", "ab", False),
        (r"cat\|dog", "hotdog", True),
        (r"\(a\)\1", "aa", True),
        # ^ and $ in the middle of a BRE are literal
        ("a^b", "a^b", True),
        ("a$b", "a$b", True),
        # A leading star is literal
        ("*x", "*x", True),
        ("*x", "x", False),
    ],
)
def test_basic_syntax(pattern: str, text: str, expected: bool) -> None:
    assert matches(pattern, text) is expected


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        ("colou?r", "color", True),
        ("a+b", "aaab", True),
        ("(cat|dog)s", "dogs", True),
        ("x{2,3}", "axxb", True),
        ("x{2,3}", "axb", False),
        ("x{,2}y", "y", True),
        # Not an interval: literal brace
        ("a{b", "a{b", True),
        (r"\(", "(", True),
        ("^(a|b)$", "b", True),
    ],
)
def test_extended_syntax(pattern: str, text: str, expected: bool) -> None:
    assert matches(pattern, text, SyntaxFlavor.EXTENDED) is expected


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        ("[[:digit:]]+", "room 42", True),
        ("^[[:upper:]][[:lower:]]*$", "Hello", True),
        ("^[[:upper:]][[:lower:]]*$", "hello", False),
        ("[[:space:]]", "a b", True),
        ("[^[:alnum:]]", "abc123", False),
        ("[[:punct:]]", "wow!", True),
        ("[]x]", "]", True),
        ("[a-c]", "b", True),
        ("[a-]", "-", True),
        (r"[\]", "\\", True),
    ],
)
def test_bracket_expressions(pattern: str, text: str, expected: bool) -> None:
    assert matches(pattern, text, SyntaxFlavor.EXTENDED) is expected


@pytest.mark.parametrize(
    ("pattern", "text", "expected"),
    [
        (r"\<cat\>", "the cat sat", True),
        (r"\<cat\>", "concatenate", False),
        (r"\<cat", "catalog", True),
        (r"cat\>", "bobcat", True),
        (r"\bcat\b", "a cat", True),
        (r"\w\+", "word", True),
    ],
)
def test_word_boundaries(pattern: str, text: str, expected: bool) -> None:
    assert matches(pattern, text) is expected


def test_fixed_strings_are_literal() -> None:
    assert matches("a.c*", "xa.c*y", SyntaxFlavor.FIXED)
    assert not matches("a.c*", "abc", SyntaxFlavor.FIXED)


def test_perl_syntax_is_passed_through() -> None:
    assert matches(r"\d{3}(?=px)", "width: 120px", SyntaxFlavor.PERL)
    assert not matches(r"(?<!\$)\b\d+", "$5", SyntaxFlavor.PERL)


def test_ignore_case() -> None:
    pattern = compile_pattern(["budget"], ignore_case=True)
    assert pattern.search("BUDGET 2025")


def test_multiple_patterns_form_an_alternation() -> None:
    pattern = compile_pattern(["alpha", "be+ta"], flavor=SyntaxFlavor.EXTENDED)
    assert pattern.search("alphabet")
    assert pattern.search("beeta")
    assert not pattern.search("gamma")
    assert pattern.source == ("alpha", "be+ta")


def test_backreferences_in_later_patterns() -> None:
    basic = compile_pattern([r"\(a\)\1", r"\(b\)\1"])
    assert basic.search("bb")
    assert basic.search("aa")
    assert not basic.search("ab")
    extended = compile_pattern([r"(x)(y)\2", r"(b)\1"], flavor=SyntaxFlavor.EXTENDED)
    assert extended.search("bb")
    assert extended.search("xyy")
    perl = compile_pattern([r"(a)\1", r"(b)\1"], flavor=SyntaxFlavor.PERL)
    assert perl.search("bb")


@pytest.mark.parametrize(
    ("expression", "offset", "expected"),
    [
        (r"(b)\1", 0, r"(b)\1"),
        (r"(b)\1", 2, r"(b)(?:\3)"),
        (r"(b)\10", 1, r"(b)(?:\11)"),
        (r"[\1](b)\1", 1, r"[\1](b)(?:\2)"),
        (r"[]\1](b)\1", 1, r"[]\1](b)(?:\2)"),
        (r"\101\\1", 1, r"\101\\1"),
    ],
)
def test_shift_backreferences(expression: str, offset: int, expected: str) -> None:
    assert shift_backreferences(expression, offset) == expected


def test_empty_pattern_matches_everything() -> None:
    assert compile_pattern([""]).search("anything")
    assert compile_pattern([""]).search("")


def test_no_pattern_is_an_error() -> None:
    with pytest.raises(PatternError, match="no pattern"):
        compile_pattern([])


@pytest.mark.parametrize(
    ("pattern", "flavor"),
    [
        ("[abc", SyntaxFlavor.BASIC),
        ("[[:bogus:]]", SyntaxFlavor.EXTENDED),
        ("abc\\", SyntaxFlavor.BASIC),
        (r"\(ab", SyntaxFlavor.BASIC),
        ("(ab", SyntaxFlavor.EXTENDED),
        ("(?P<", SyntaxFlavor.PERL),
    ],
)
def test_invalid_patterns_raise_pattern_error(pattern: str, flavor: SyntaxFlavor) -> None:
    with pytest.raises(PatternError):
        compile_pattern([pattern], flavor=flavor)
