"""Rendering for the results browser.

Composes one full ANSI frame per draw: the visible page of entries, with the
cursor row in reverse video, followed by a status row.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width
from ..paths import display_path
from ..results import Entry, FileMarker
from ..ui_theme import DEFAULT_THEME, UITheme

SEARCHING_LABEL = "searching…"


@dataclass
class RenderContext:
    entries: list[Entry]
    cursor: int
    max_lines: int
    width: int
    pattern: str
    offset: int = 0
    total: int = 0
    file_count: int = 0
    done: bool = False
    status_message: str = ""
    theme: UITheme = DEFAULT_THEME


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return theme.reverse + " " + theme.reset
    return theme.reverse + text.replace(theme.reset, theme.reset + theme.reverse) + theme.reset


def format_entry_row(entry: Entry, width: int, theme: UITheme, selected: bool = False) -> str:
    """Render one entry as a styled row clipped to ``width`` columns."""
    if isinstance(entry, FileMarker):
        row = f"{theme.file_marker}{display_path(entry.path)}{theme.reset}"
    else:
        row = (
            f"{theme.line_number}{entry.line_number}:{theme.reset}"
            f"{theme.match_text}{entry.text}{theme.reset}"
        )
    row = clip_ansi_line(row, width)
    if selected:
        return selected_with_ansi(row, theme)
    return row


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_text(context: RenderContext) -> tuple[str, str]:
    matches = context.total - context.file_count
    left = f"ngp: {context.pattern!r} {matches} matches in {context.file_count} files"
    if context.status_message:
        left = f"{left} | {context.status_message}"
    if context.total:
        position = f"{context.offset + context.cursor + 1}/{context.total}"
    else:
        position = "0/0"
    right = position if context.done else f"{SEARCHING_LABEL} {position}"
    return left, right


def compose_page(context: RenderContext) -> str:
    out: list[str] = ["\033[H\033[J"]
    theme = context.theme
    content_rows = max(1, context.max_lines)
    for row in range(content_rows):
        if row < len(context.entries):
            out.append(
                format_entry_row(
                    context.entries[row],
                    context.width,
                    theme,
                    selected=row == context.cursor,
                )
            )
        out.append("\r\n")
    left, right = status_text(context)
    status = build_status_line(left, context.width, right)
    if display_width(status) > context.width:
        status = clip_ansi_line(status, context.width)
    style = theme.status if context.done else theme.status_busy
    out.append(f"{style}{status}{theme.reset}")
    return "".join(out)


def render_page(context: RenderContext) -> None:
    os.write(sys.stdout.fileno(), compose_page(context).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "SEARCHING_LABEL",
    "build_status_line",
    "compose_page",
    "format_entry_row",
    "render_page",
    "selected_with_ansi",
    "status_text",
]
