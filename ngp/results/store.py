"""Lock-guarded, append-only store of search results.

The store is the only mutable state shared between the walker thread and the
main loop. It performs no locking of its own: every accessor expects the
caller to hold the lock, taken through ``locked()`` or ``with_lock()``.
"""

from __future__ import annotations

import contextlib
import re
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import TypeVar

from .types import Entry, FileMarker, MatchLine, is_marker

MAX_MATCH_TEXT_CHARS = 1024
_MATCH_LINE_RE = re.compile(r"^(\d+):(.*)$", re.DOTALL)

T = TypeVar("T")


def parse_match_line(raw_line: str, max_chars: int = MAX_MATCH_TEXT_CHARS) -> tuple[int, str]:
    """Split ``"<lineNumber>:<content>"`` into its number and text.

    A trailing newline and one carriage return are dropped. Lines without a
    numeric prefix keep their full text with line number ``0``. Overlong text
    is truncated rather than rejected.
    """
    clean = raw_line.rstrip("\n")
    if clean.endswith("\r"):
        clean = clean[:-1]
    match = _MATCH_LINE_RE.match(clean)
    if match is None:
        line_number, text = 0, clean
    else:
        line_number, text = int(match.group(1)), match.group(2)
    if len(text) > max_chars:
        text = text[: max(1, max_chars - 3)] + "..."
    return line_number, text


class ResultStore:
    """Ordered entries plus the walker's completion state."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[Entry] = []
        self._file_count = 0
        self._done = False
        self._failure: BaseException | None = None

    @contextlib.contextmanager
    def locked(self) -> Iterator[ResultStore]:
        with self._lock:
            yield self

    def with_lock(self, fn: Callable[[ResultStore], T]) -> T:
        """Run ``fn(store)`` while holding the lock and return its result."""
        with self._lock:
            return fn(self)

    def append_file_marker(self, path: str) -> None:
        self._entries.append(FileMarker(path=path))
        self._file_count += 1

    def append_match_line(self, path: str, raw_line: str) -> None:
        line_number, text = parse_match_line(raw_line)
        self._entries.append(MatchLine(path=path, line_number=line_number, text=text))

    def append_file_run(self, path: str, raw_lines: Iterable[str]) -> None:
        """Append a marker followed by its first lines in one lock hold."""
        self.append_file_marker(path)
        for raw_line in raw_lines:
            self.append_match_line(path, raw_line)

    def count(self) -> int:
        return len(self._entries)

    def entry_at(self, index: int) -> Entry:
        if index < 0:
            raise IndexError(index)
        return self._entries[index]

    def entries_between(self, start: int, stop: int) -> list[Entry]:
        start = max(0, start)
        return self._entries[start:max(start, stop)]

    def is_marker_at(self, index: int) -> bool:
        if not 0 <= index < len(self._entries):
            return False
        return is_marker(self._entries[index])

    def file_count(self) -> int:
        return self._file_count

    def mark_done(self) -> None:
        self._done = True

    def is_done(self) -> bool:
        return self._done

    def record_failure(self, exc: BaseException) -> None:
        if self._failure is None:
            self._failure = exc

    def failure(self) -> BaseException | None:
        return self._failure


__all__ = ["MAX_MATCH_TEXT_CHARS", "ResultStore", "parse_match_line"]
