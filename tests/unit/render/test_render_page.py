"""Rendering tests for result rows, the status row, and full-page frames."""

from __future__ import annotations

import unittest

from ngp.ansi import ANSI_ESCAPE_RE, display_width
from ngp.render import (
    RenderContext,
    build_status_line,
    compose_page,
    format_entry_row,
    selected_with_ansi,
    status_text,
)
from ngp.results import FileMarker, MatchLine
from ngp.ui_theme import DEFAULT_THEME, PLAIN_THEME, resolve_theme


def _strip(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class EntryRowTests(unittest.TestCase):
    def test_marker_row_shows_display_path(self) -> None:
        row = format_entry_row(FileMarker(path=".//src/a.c"), 80, PLAIN_THEME)
        self.assertEqual(_strip(row), "src/a.c")

    def test_marker_row_uses_marker_color(self) -> None:
        row = format_entry_row(FileMarker(path="./a.c"), 80, DEFAULT_THEME)
        self.assertTrue(row.startswith(DEFAULT_THEME.file_marker))

    def test_match_row_shows_number_and_text(self) -> None:
        row = format_entry_row(MatchLine(path="a.c", line_number=12, text="hello"), 80, PLAIN_THEME)
        self.assertEqual(_strip(row), "12:hello")

    def test_rows_are_clipped_to_width(self) -> None:
        row = format_entry_row(MatchLine(path="a.c", line_number=12, text="hello world"), 6, DEFAULT_THEME)
        self.assertEqual(display_width(row), 6)
        self.assertEqual(_strip(row), "12:hel")

    def test_control_characters_are_dropped(self) -> None:
        row = format_entry_row(MatchLine(path="a.c", line_number=1, text="a\x1b]0;title\x07b"), 80, PLAIN_THEME)
        self.assertNotIn("\x07", row)

    def test_selected_row_keeps_reverse_video_across_resets(self) -> None:
        text = f"{DEFAULT_THEME.line_number}1:{DEFAULT_THEME.reset}x"
        selected = selected_with_ansi(text, DEFAULT_THEME)
        self.assertTrue(selected.startswith(DEFAULT_THEME.reverse))
        self.assertIn(DEFAULT_THEME.reset + DEFAULT_THEME.reverse, selected)
        self.assertTrue(selected.endswith(DEFAULT_THEME.reset))

    def test_selected_empty_row_is_still_visible(self) -> None:
        self.assertEqual(selected_with_ansi("", PLAIN_THEME), "\033[7m \033[0m")


class StatusLineTests(unittest.TestCase):
    def test_status_pads_between_left_and_right(self) -> None:
        self.assertEqual(build_status_line("abc", 10, "xy"), "abc    xy")

    def test_status_prefers_right_text_when_narrow(self) -> None:
        self.assertEqual(build_status_line("abc", 3, "12345"), "45")

    def test_status_text_while_searching(self) -> None:
        context = RenderContext(
            entries=[],
            cursor=1,
            max_lines=3,
            width=80,
            pattern="needle",
            offset=3,
            total=5,
            file_count=2,
        )
        self.assertEqual(
            status_text(context),
            ("ngp: 'needle' 3 matches in 2 files", "searching… 5/5"),
        )

    def test_status_text_when_done_with_message(self) -> None:
        context = RenderContext(
            entries=[],
            cursor=0,
            max_lines=3,
            width=80,
            pattern="x",
            done=True,
            status_message="Failed to launch editor: boom",
        )
        self.assertEqual(
            status_text(context),
            ("ngp: 'x' 0 matches in 0 files | Failed to launch editor: boom", "0/0"),
        )


class ComposePageTests(unittest.TestCase):
    def _context(self, **overrides) -> RenderContext:
        values = dict(
            entries=[
                FileMarker(path="./a.c"),
                MatchLine(path="./a.c", line_number=1, text="one"),
                MatchLine(path="./a.c", line_number=2, text="two"),
            ],
            cursor=1,
            max_lines=5,
            width=40,
            pattern="o",
            total=3,
            file_count=1,
            done=True,
            theme=PLAIN_THEME,
        )
        values.update(overrides)
        return RenderContext(**values)

    def test_frame_clears_screen_and_fills_every_row(self) -> None:
        frame = compose_page(self._context())
        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertEqual(frame.count("\r\n"), 5)
        rows = frame[len("\033[H\033[J"):].split("\r\n")
        self.assertEqual(_strip(rows[0]), "a.c")
        self.assertTrue(rows[1].startswith(PLAIN_THEME.reverse))
        self.assertEqual(_strip(rows[1]), "1:one")
        self.assertEqual(_strip(rows[2]), "2:two")
        self.assertEqual(rows[3], "")
        self.assertIn("2/3", rows[-1])

    def test_status_row_fits_width(self) -> None:
        frame = compose_page(self._context(width=12, pattern="a-very-long-pattern"))
        status = frame.split("\r\n")[-1]
        self.assertLessEqual(display_width(status), 12)

    def test_busy_status_style_until_done(self) -> None:
        frame = compose_page(self._context(done=False, theme=DEFAULT_THEME))
        status = frame.split("\r\n")[-1]
        self.assertTrue(status.startswith(DEFAULT_THEME.status_busy))


class ThemeSelectionTests(unittest.TestCase):
    def test_no_color_forces_plain_theme(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme("plain"), PLAIN_THEME)

    def test_unknown_theme_falls_back_to_default(self) -> None:
        self.assertIs(resolve_theme("neon"), DEFAULT_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertEqual(resolve_theme(" Ocean ").name, "ocean")


if __name__ == "__main__":
    unittest.main()
