"""Main interactive event loop for the results browser.

Polls for one key per tick, dispatches it to the navigator or opener, and
redraws from a snapshot taken under the store lock. The loop never waits on
the walker; it re-reads the store on every tick.
"""

from __future__ import annotations

import os
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..input import BrowserKeyActions, build_key_registry, handle_key, read_key
from ..render import RenderContext, render_page
from ..results import ResultStore
from ..ui_theme import DEFAULT_THEME, UITheme
from .navigation import Navigator
from .terminal import TerminalController

STATUS_ROWS = 1


def _default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_interval_seconds: float = 0.01
    key_timeout_ms: int = 0


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    ``open_selection`` receives the selected absolute index and returns an
    optional status message.
    """

    open_selection: Callable[[int], str | None]
    render: Callable[[RenderContext], None] = render_page
    terminal_size: Callable[[], os.terminal_size] = field(default=_default_terminal_size)


def page_size_for(term_lines: int) -> int:
    return max(1, term_lines - STATUS_ROWS)


def _locked(store: ResultStore, action: Callable[[], None]) -> Callable[[], None]:
    def run() -> None:
        with store.locked():
            action()

    return run


def run_main_loop(
    store: ResultStore,
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    pattern: str,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run the browser until quit, or until the walker finishes with no results.

    A failure recorded by the walker is re-raised here so it unwinds through
    the terminal's ``raw_mode`` restoration.
    """
    status_message = ""
    force_redraw = True

    def select() -> None:
        nonlocal status_message, force_redraw
        status_message = callbacks.open_selection(navigator.selected_index()) or ""
        force_redraw = True

    registry = build_key_registry(
        BrowserKeyActions(
            cursor_down=_locked(store, navigator.cursor_down),
            cursor_up=_locked(store, navigator.cursor_up),
            page_down=_locked(store, navigator.page_down),
            page_up=_locked(store, navigator.page_up),
            select=select,
        )
    )

    last_size: tuple[int, int] | None = None
    last_frame: tuple | None = None
    with terminal.raw_mode():
        while True:
            term = callbacks.terminal_size()
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                with store.locked():
                    navigator.resize(page_size_for(term.lines))
                force_redraw = True

            key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            if handle_key(key, registry):
                return

            time.sleep(timing.poll_interval_seconds)

            with store.locked():
                failure = store.failure()
                if failure is not None:
                    raise failure
                navigator.settle()
                total = store.count()
                done = store.is_done()
                context = RenderContext(
                    entries=navigator.visible_entries(),
                    cursor=navigator.cursor,
                    max_lines=navigator.page_size,
                    width=term.columns,
                    pattern=pattern,
                    offset=navigator.offset,
                    total=total,
                    file_count=store.file_count(),
                    done=done,
                    status_message=status_message,
                    theme=theme,
                )

            frame = (size, navigator.offset, navigator.cursor, total, done, status_message)
            if force_redraw or frame != last_frame:
                callbacks.render(context)
                last_frame = frame
                force_redraw = False

            if done and total == 0:
                return


__all__ = [
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "STATUS_ROWS",
    "page_size_for",
    "run_main_loop",
]
