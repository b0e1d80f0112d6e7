"""
Width-aware text helpers used to lay out progress bar lines.

Widths are measured in terminal cells with a simple heuristic: ASCII code
points take one cell, everything else takes two. This holds for the CJK
titles the downloader deals with, but it is not a full East-Asian-width table.
"""

import math

SOLID_GLYPH = "▇"
DOT_GLYPH = "·"
MOUTH_GLYPHS = (">", "<")
ELLIPSIS = ".."


def char_width(char: str) -> int:
    """Returns the cell width of a single code point."""
    return 1 if ord(char) <= 127 else 2


def display_width(text: str) -> int:
    """Returns the number of terminal cells `text` occupies."""
    return sum(char_width(char) for char in text)


def truncate_by_width(text: str, max_width: int) -> str:
    """
    Shortens `text` so that it fits in `max_width` cells.

    Text that already fits is returned unchanged. Otherwise the longest prefix
    that leaves room for the ".." suffix is kept.

    Args:
        text: The string to shorten.
        max_width: The number of cells available.

    Returns:
        A string whose display width never exceeds `max_width`.
    """
    if display_width(text) <= max_width:
        return text
    if max_width < len(ELLIPSIS):
        return "." * max(0, max_width)

    target_width = max_width - len(ELLIPSIS)
    used = 0
    for index, char in enumerate(text):
        width = char_width(char)
        if used + width > target_width:
            return text[:index] + ELLIPSIS
        used += width
    return text


def pad_to_width(text: str, width: int) -> str:
    """Right-pads `text` with spaces up to `width` cells."""
    return text + " " * max(0, width - display_width(text))


def bar_position(percent: float, width: int) -> int:
    """Index of the leading edge of the filled region, within [0, width - 1]."""
    position = math.floor(percent / 100 * width)
    return min(max(position, 0), width - 1)


def render_bar(percent: float, width: int, complete: bool = False) -> str:
    """
    Renders the body of a bar (without brackets), exactly `width` cells wide.

    The cell after the filled region holds a "mouth" glyph that alternates with
    the parity of the fill position, or the solid glyph once complete.
    """
    position = bar_position(percent, width)
    if complete:
        mouth = SOLID_GLYPH
    else:
        mouth = MOUTH_GLYPHS[position % 2]
    return SOLID_GLYPH * position + mouth + DOT_GLYPH * (width - position - 1)
