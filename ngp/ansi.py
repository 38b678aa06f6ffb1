"""ANSI-aware measurement and clipping for result rows.

Match text comes straight from arbitrary files, so rows are cleaned as they
are clipped: color sequences we add survive, tabs become spaces, and raw
control characters never reach the terminal.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return the number of terminal columns ``ch`` occupies at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def _cells(text: str) -> Iterator[tuple[str, int]]:
    # Yields (chunk, columns); escape sequences are zero-width chunks.
    col = 0
    pos = 0
    while pos < len(text):
        escape = ANSI_ESCAPE_RE.match(text, pos) if text[pos] == "\x1b" else None
        if escape is not None:
            yield escape.group(0), 0
            pos = escape.end()
            continue
        ch = text[pos]
        pos += 1
        if ch == "\t":
            width = char_display_width(ch, col)
            yield " " * width, width
        elif unicodedata.category(ch) == "Cc":
            continue
        else:
            width = char_display_width(ch, col)
            yield ch, width
        col += width


def display_width(text: str) -> int:
    return sum(width for _chunk, width in _cells(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences before the cut are kept and do not count toward the
    width. A wide character or tab that would straddle the edge is dropped.
    """
    if max_cols <= 0:
        return ""
    kept: list[str] = []
    used = 0
    for chunk, width in _cells(text):
        if used >= max_cols:
            break
        if used + width > max_cols:
            break
        kept.append(chunk)
        used += width
    return "".join(kept)


__all__ = ["ANSI_ESCAPE_RE", "TAB_STOP", "char_display_width", "clip_ansi_line", "display_width"]
