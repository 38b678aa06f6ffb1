"""Tests for the polling input/render loop."""

from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from unittest import mock

from ngp.render import RenderContext
from ngp.results import ResultStore
from ngp.runtime import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from ngp.runtime.loop import page_size_for
from ngp.runtime.navigation import Navigator


class _FakeTerminal:
    def __init__(self) -> None:
        self.events: list[str] = []

    @contextmanager
    def raw_mode(self):
        self.events.append("enter")
        try:
            yield
        finally:
            self.events.append("exit")


def _store(*lines: str, done: bool = False) -> ResultStore:
    store = ResultStore()
    with store.locked():
        if lines:
            store.append_file_run("./a.c", lines[:1])
            for line in lines[1:]:
                store.append_match_line("./a.c", line)
        if done:
            store.mark_done()
    return store


def _keys(*keys: str):
    pending = list(keys)

    def read_key(_fd: int, timeout_ms: int | None = None) -> str:
        return pending.pop(0) if pending else "q"

    return read_key


class RuntimeLoopTests(unittest.TestCase):
    def _run(
        self,
        store: ResultStore,
        keys: tuple[str, ...],
        *,
        sizes: list[tuple[int, int]] | None = None,
        open_selection=None,
    ) -> tuple[list[RenderContext], Navigator, _FakeTerminal]:
        rendered: list[RenderContext] = []
        size_iter = list(sizes or [(80, 6)])

        def terminal_size() -> os.terminal_size:
            if len(size_iter) > 1:
                return os.terminal_size(size_iter.pop(0))
            return os.terminal_size(size_iter[0])

        navigator = Navigator(store, 3)
        terminal = _FakeTerminal()
        callbacks = RuntimeLoopCallbacks(
            open_selection=open_selection or (lambda _index: None),
            render=rendered.append,
            terminal_size=terminal_size,
        )
        with mock.patch("ngp.runtime.loop.read_key", side_effect=_keys(*keys)), mock.patch(
            "ngp.runtime.loop.time.sleep"
        ):
            run_main_loop(
                store,
                navigator,
                terminal,
                0,
                "needle",
                RuntimeLoopTiming(poll_interval_seconds=0.0),
                callbacks,
            )
        return rendered, navigator, terminal

    def test_terminates_when_walker_done_with_zero_results(self) -> None:
        store = _store(done=True)
        with mock.patch("ngp.runtime.loop.read_key", return_value="") as read_key, mock.patch(
            "ngp.runtime.loop.time.sleep"
        ):
            rendered: list[RenderContext] = []
            run_main_loop(
                store,
                Navigator(store, 3),
                _FakeTerminal(),
                0,
                "needle",
                RuntimeLoopTiming(),
                RuntimeLoopCallbacks(
                    open_selection=lambda _index: None,
                    render=rendered.append,
                    terminal_size=lambda: os.terminal_size((80, 6)),
                ),
            )
        self.assertEqual(read_key.call_count, 1)
        self.assertEqual(len(rendered), 1)
        self.assertEqual(rendered[0].total, 0)
        self.assertTrue(rendered[0].done)

    def test_quit_key_exits_and_restores_terminal(self) -> None:
        rendered, _navigator, terminal = self._run(_store("1:x\n"), ("q",))
        self.assertEqual(rendered, [])
        self.assertEqual(terminal.events, ["enter", "exit"])

    def test_navigation_keys_move_cursor_and_redraw(self) -> None:
        store = _store("1:a\n", "2:b\n", "3:c\n", done=True)
        rendered, navigator, _terminal = self._run(store, ("", "j", "j", "k", "q"))
        self.assertEqual([ctx.cursor for ctx in rendered], [1, 2, 3, 2])
        self.assertEqual(navigator.page_size, page_size_for(6))
        self.assertEqual(rendered[-1].max_lines, 5)
        self.assertEqual(rendered[-1].file_count, 1)

    def test_unchanged_frames_are_not_redrawn(self) -> None:
        store = _store("1:a\n", done=True)
        rendered, _navigator, _terminal = self._run(store, ("", "", "x", ""))
        self.assertEqual(len(rendered), 1)

    def test_select_opens_selected_index_and_shows_message(self) -> None:
        store = _store("1:a\n", "2:b\n", done=True)
        opened: list[int] = []

        def open_selection(index: int) -> str | None:
            opened.append(index)
            return "Failed to launch editor: boom"

        rendered, _navigator, _terminal = self._run(
            store, ("", "j", "p"), open_selection=open_selection
        )
        self.assertEqual(opened, [2])
        self.assertEqual(rendered[-1].status_message, "Failed to launch editor: boom")

    def test_enter_also_selects(self) -> None:
        store = _store("1:a\n", done=True)
        opened: list[int] = []
        self._run(store, ("", "ENTER_CR"), open_selection=lambda index: opened.append(index))
        self.assertEqual(opened, [1])

    def test_resize_updates_page_size(self) -> None:
        store = _store(*[f"{n}:x\n" for n in range(1, 30)], done=True)
        rendered, navigator, _terminal = self._run(
            store, ("", "", ""), sizes=[(80, 10), (80, 10), (40, 4)]
        )
        self.assertEqual(navigator.page_size, 3)
        self.assertEqual(rendered[0].max_lines, 9)
        self.assertEqual(rendered[-1].max_lines, 3)
        self.assertEqual(rendered[-1].width, 40)

    def test_walker_failure_is_reraised_after_terminal_restore(self) -> None:
        store = _store("1:a\n")
        with store.locked():
            store.record_failure(MemoryError("out"))
        terminal = _FakeTerminal()
        with mock.patch("ngp.runtime.loop.read_key", return_value=""), mock.patch(
            "ngp.runtime.loop.time.sleep"
        ):
            with self.assertRaises(MemoryError):
                run_main_loop(
                    store,
                    Navigator(store, 3),
                    terminal,
                    0,
                    "needle",
                    RuntimeLoopTiming(),
                    RuntimeLoopCallbacks(
                        open_selection=lambda _index: None,
                        render=lambda _ctx: None,
                        terminal_size=lambda: os.terminal_size((80, 6)),
                    ),
                )
        self.assertEqual(terminal.events, ["enter", "exit"])

    def test_ctrl_c_raises_keyboard_interrupt(self) -> None:
        with self.assertRaises(KeyboardInterrupt):
            self._run(_store("1:a\n"), ("CTRL_C",))


if __name__ == "__main__":
    unittest.main()
