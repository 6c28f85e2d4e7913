"""Tests for word wrapping and character-level fallback."""

from __future__ import annotations

import pytest

from leadsheet.styles import FontRole
from leadsheet.text_wrap import WrapError, break_word_to_width, truncate_text, wrap_text

REG = FontRole.REGULAR

SAMPLES = [
    "Hotel Polo Towers",
    "12, Airport Road, Near Debbarma Memorial School, Agartala, Tripura 799010, India",
    "linkedin.com/company/the-lake-view-chakraborty-eco-retreat",
    "a  b\tc\nd",
    "ThisIsOneExtremelyLongUnbreakableWordThatExceedsColumnWidth and then some words",
]


def squash(lines: list[str]) -> str:
    return "".join("".join(line.split()) for line in lines)


def test_empty_and_blank_input() -> None:
    assert wrap_text("", 50, lambda *a: 0, REG, 9) == []
    assert wrap_text("   \t\n", 50, lambda *a: 0, REG, 9) == []


def test_greedy_packing(mono) -> None:
    assert wrap_text("aaa bbb ccc", 7, mono, REG, 1) == ["aaa bbb", "ccc"]
    assert wrap_text("aaa bbb ccc", 11, mono, REG, 1) == ["aaa bbb ccc"]


def test_whitespace_runs_collapse_to_single_space(mono) -> None:
    assert wrap_text("a   b\t\tc", 20, mono, REG, 1) == ["a b c"]


def test_break_word_segments(mono) -> None:
    assert break_word_to_width("abcdefgh", 3, mono, REG, 1) == ["abc", "def", "gh"]
    assert break_word_to_width("abc", 3, mono, REG, 1) == ["abc"]


def test_continuation_segments_start_new_lines(mono) -> None:
    assert wrap_text("a abcdefgh ij", 6, mono, REG, 1) == ["a", "abcdef", "gh ij"]


def test_wrap_invariant(measure) -> None:
    for text in SAMPLES:
        for width in (30, 68, 88, 223):
            for line in wrap_text(text, width, measure, REG, 9):
                assert measure(line, REG, 9) <= width


def test_token_order_preserved(measure) -> None:
    text = "Green Valley Homestay, Ramnagar Road No. 4, Agartala"
    lines = wrap_text(text, 68, measure, REG, 9)
    assert len(lines) > 1
    tokens = [token for line in lines for token in line.split()]
    assert tokens == text.split()


def test_characters_preserved_with_broken_words(measure) -> None:
    for text in SAMPLES:
        lines = wrap_text(text, 40, measure, REG, 9)
        assert squash(lines) == "".join(text.split())


def test_wrap_is_idempotent(measure) -> None:
    for text in SAMPLES:
        assert wrap_text(text, 68, measure, REG, 9) == wrap_text(text, 68, measure, REG, 9)


def test_long_unbreakable_word_in_80pt_column(measure) -> None:
    word = "ThisIsOneExtremelyLongUnbreakableWordThatExceedsColumnWidth"
    usable = 80 - 2 * 6
    assert measure(word, REG, 9) > usable

    segments = break_word_to_width(word, usable, measure, REG, 9)
    assert len(segments) > 1
    assert all(measure(s, REG, 9) <= usable for s in segments)
    assert "".join(segments) == word
    assert wrap_text(word, usable, measure, REG, 9) == segments


def test_character_wider_than_column_raises(measure) -> None:
    with pytest.raises(WrapError, match="cannot fit"):
        wrap_text("Wide", 3, measure, REG, 9)


def test_non_positive_width_raises(measure) -> None:
    with pytest.raises(WrapError):
        wrap_text("text", 0, measure, REG, 9)


def test_truncate_text(measure) -> None:
    assert truncate_text("Name", 100, measure, FontRole.BOLD, 10) == "Name"
    short = truncate_text("Business Registration Number", 50, measure, FontRole.BOLD, 10)
    assert short.endswith("...")
    assert measure(short, FontRole.BOLD, 10) <= 50
    assert truncate_text("Anything", 2, measure, FontRole.BOLD, 10) == ""
