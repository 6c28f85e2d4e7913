"""Word wrapping of cell text to a fixed column width."""

from typing import Callable, List

from .config import LayoutError
from .styles import FontRole

# measure(text, font_role, font_size) -> rendered width in points
Measure = Callable[[str, FontRole, float], float]


class WrapError(LayoutError):
    """Raised when text cannot be wrapped to the requested width."""


def truncate_text(
    text: str,
    max_width: float,
    measure: Measure,
    font_role: FontRole,
    font_size: float,
) -> str:
    """Truncate text to fit within max_width, adding '...' if needed."""
    if not text:
        return text

    if measure(text, font_role, font_size) <= max_width:
        return text

    ellipsis = "..."
    available_width = max_width - measure(ellipsis, font_role, font_size)

    if available_width <= 0:
        return ""

    # Start from full text and reduce
    for i in range(len(text) - 1, 0, -1):
        truncated = text[:i].rstrip()
        if measure(truncated, font_role, font_size) <= available_width:
            return truncated + ellipsis

    return ellipsis


def break_word_to_width(
    word: str,
    max_width: float,
    measure: Measure,
    font_role: FontRole,
    font_size: float,
) -> List[str]:
    """
    Split a single word into segments no wider than max_width.

    A word that already fits is returned unchanged. Otherwise characters are
    accumulated until the next one would overflow, at which point the buffer
    is flushed as a segment. Joining the segments gives back the word.

    Raises:
        WrapError: if a single character is wider than max_width.
    """
    if measure(word, font_role, font_size) <= max_width:
        return [word]

    parts: List[str] = []
    current = ""

    for char in word:
        test = current + char
        if measure(test, font_role, font_size) <= max_width:
            current = test
            continue

        char_width = measure(char, font_role, font_size)
        if char_width > max_width:
            raise WrapError(
                f"Character {char!r} is {char_width:.2f}pt wide and cannot fit "
                f"in {max_width:.2f}pt"
            )
        if current:
            parts.append(current)
        current = char

    if current:
        parts.append(current)

    return parts


def wrap_text(
    text: str,
    max_width: float,
    measure: Measure,
    font_role: FontRole,
    font_size: float,
) -> List[str]:
    """
    Greedily pack whitespace-separated words onto lines of at most max_width.

    Words wider than max_width are broken with break_word_to_width; the
    continuation segments of a broken word always start a new line.
    Empty or whitespace-only text produces no lines.
    """
    if max_width <= 0:
        raise WrapError(f"Wrap width must be positive, got {max_width}")

    lines: List[str] = []
    current_line = ""

    for word in text.split():
        segments = break_word_to_width(word, max_width, measure, font_role, font_size)
        for index, segment in enumerate(segments):
            candidate = f"{current_line} {segment}" if current_line else segment
            if index == 0 and measure(candidate, font_role, font_size) <= max_width:
                current_line = candidate
            else:
                if current_line:
                    lines.append(current_line)
                current_line = segment

    if current_line:
        lines.append(current_line)

    return lines
