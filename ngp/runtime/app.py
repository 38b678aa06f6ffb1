"""Runtime composition layer for ngp.

Builds the shared result store, starts the walker thread, and runs the
interactive loop. On interrupt the terminal is restored first, then the
walker is stopped and joined with a bounded wait; store memory is never
released while the walker may still write to it.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial
from typing import TextIO

from ..paths import display_path
from ..results import FileMarker, ResultStore
from ..search import SearchRequest, Walker
from ..ui_theme import resolve_theme
from .config import Config
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, page_size_for, run_main_loop
from .navigation import Navigator
from .opener import open_selected
from .terminal import TerminalController

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 0.01
INTERRUPT_JOIN_SECONDS = 1.0
INTERRUPT_EXIT_STATUS = 130


def print_results(request: SearchRequest, out: TextIO) -> int:
    """Run the search in the foreground and print results without the TUI."""
    store = ResultStore()
    Walker(store, request).run()
    with store.locked():
        failure = store.failure()
        entries = store.entries_between(0, store.count())
    if failure is not None:
        raise failure
    for entry in entries:
        if isinstance(entry, FileMarker):
            out.write(f"{display_path(entry.path)}\n")
        else:
            out.write(f"{entry.label}\n")
    return 0 if entries else 1


def run_browser(request: SearchRequest, config: Config, *, no_color: bool = False) -> int:
    """Search ``request.directory`` and browse results; return an exit status.

    Falls back to plain output when stdin or stdout is not a terminal.
    """
    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        return print_results(request, sys.stdout)

    store = ResultStore()
    walker = Walker(store, request)
    try:
        walker.start()
    except RuntimeError as exc:
        logger.error("cannot create walker thread: %s", exc)
        print(f"ngp: cannot create thread: {exc}", file=sys.stderr)
        return 1

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    navigator = Navigator(store, page_size_for(24))
    callbacks = RuntimeLoopCallbacks(
        open_selection=partial(
            open_selected,
            store,
            template=config.editor,
            pattern=request.pattern,
            suspend=terminal.suspended,
        ),
    )
    try:
        run_main_loop(
            store,
            navigator,
            terminal,
            stdin_fd,
            request.pattern,
            RuntimeLoopTiming(poll_interval_seconds=POLL_INTERVAL_SECONDS),
            callbacks,
            theme=resolve_theme(config.theme, no_color=no_color),
        )
    except KeyboardInterrupt:
        logger.info("interrupted; stopping walker")
        walker.stop()
        if not walker.join(timeout=INTERRUPT_JOIN_SECONDS):
            logger.warning("walker did not stop within %.1fs", INTERRUPT_JOIN_SECONDS)
        return INTERRUPT_EXIT_STATUS

    walker.stop()
    walker.join(timeout=INTERRUPT_JOIN_SECONDS)
    with store.locked():
        no_results = store.is_done() and store.count() == 0
    if no_results:
        print(f"ngp: no match found for {request.pattern!r}", file=sys.stderr)
    return 0


__all__ = ["INTERRUPT_EXIT_STATUS", "INTERRUPT_JOIN_SECONDS", "print_results", "run_browser"]
