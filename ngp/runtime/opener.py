"""Editor launch for a selected match.

Runs the configured editor command while temporarily leaving raw/alternate
screen mode. Returns an error message string instead of raising, so the
browser can show it in the status row.
"""

from __future__ import annotations

import contextlib
import logging
import shlex
import signal
import subprocess
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from ..paths import extract_line_number, sanitize_path
from ..results import MatchLine, ResultStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorTarget:
    line_number: str
    path: str


@contextlib.contextmanager
def ignoring_interrupts() -> Iterator[None]:
    """Ignore SIGINT in this process while a foreground child owns the terminal."""
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def resolve_target(store: ResultStore, index: int) -> EditorTarget | None:
    """Return the (line, file) pair at ``index``; caller holds the store lock."""
    if not 0 <= index < store.count():
        return None
    entry = store.entry_at(index)
    if not isinstance(entry, MatchLine):
        return None
    return EditorTarget(line_number=extract_line_number(entry.label), path=entry.path)


def format_editor_command(template: str, target: EditorTarget, pattern: str) -> str:
    """Fill ``{line}``, ``{file}`` and ``{pattern}`` (or ``{0}``-``{2}``) in ``template``.

    The pattern is shell-quoted since the command line is run by the shell.
    """
    line = target.line_number
    path = sanitize_path(target.path)
    quoted = shlex.quote(pattern)
    return template.format(line, path, quoted, line=line, file=path, pattern=quoted)


def open_selected(
    store: ResultStore,
    index: int,
    template: str,
    pattern: str,
    suspend: Callable[[], contextlib.AbstractContextManager],
) -> str | None:
    """Run the editor on the match at ``index`` and block until it exits."""
    with store.locked():
        target = resolve_target(store, index)
    if target is None:
        return None
    try:
        command = format_editor_command(template, target, pattern)
    except (IndexError, KeyError, ValueError) as exc:
        return f"Invalid editor template: {exc}"

    logger.info("opening editor: %s", command)
    with suspend(), ignoring_interrupts():
        try:
            subprocess.run(command, shell=True, check=False)
        except OSError as exc:
            logger.warning("failed to launch editor %r: %s", command, exc)
            return f"Failed to launch editor: {exc}"
    return None


__all__ = [
    "EditorTarget",
    "format_editor_command",
    "ignoring_interrupts",
    "open_selected",
    "resolve_target",
]
