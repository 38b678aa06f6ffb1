"""Background directory walker that feeds the result store.

The walker traverses depth-first in raw ``os.scandir`` order, runs the
matcher on each eligible file, and appends results under the store lock.
The lock is never held while waiting on the matcher process.
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading

from ..results import ResultStore
from .matcher import matcher_lines, reap_matcher, spawn_matcher
from .request import SearchRequest

logger = logging.getLogger(__name__)

SKIPPED_NAMES = frozenset({".", "..", ".git"})


class Walker:
    """One-shot producer with a cooperative stop flag."""

    def __init__(self, store: ResultStore, request: SearchRequest) -> None:
        self.store = store
        self.request = request
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._proc: subprocess.Popen | None = None

    def start(self) -> None:
        """Spawn the walker thread; raises ``RuntimeError`` if it cannot start."""
        self._thread = threading.Thread(
            target=self.run,
            name="ngp-walker",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the walker to finish early and kill any in-flight matcher."""
        self._stop.set()
        proc = self._proc
        if proc is not None and proc.poll() is None:
            proc.kill()

    def stopped(self) -> bool:
        return self._stop.is_set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread and return whether it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def run(self) -> None:
        try:
            self.walk_directory(self.request.directory)
        except Exception as exc:
            logger.exception("walker failed in %s", self.request.directory)
            with self.store.locked():
                self.store.record_failure(exc)
        finally:
            with self.store.locked():
                self.store.mark_done()

    def walk_directory(self, directory: str) -> None:
        try:
            scanner = os.scandir(directory)
        except OSError:
            return
        with scanner:
            for entry in scanner:
                if self._stop.is_set():
                    return
                if entry.name in SKIPPED_NAMES:
                    continue
                try:
                    if entry.is_symlink():
                        continue
                    is_dir = entry.is_dir(follow_symlinks=False)
                    is_file = not is_dir and entry.is_file(follow_symlinks=False)
                except OSError:
                    continue
                path = os.path.join(directory, entry.name)
                if is_dir:
                    self.walk_directory(path)
                elif is_file and self.request.is_eligible(entry.name):
                    self.search_file(path)

    def search_file(self, path: str) -> None:
        """Run the matcher on ``path`` and append its hits as one file run."""
        try:
            proc = spawn_matcher(self.request.pattern, path, self.request.matcher_options())
        except OSError as exc:
            logger.warning("failed to run matcher on %s: %s", path, exc)
            return
        self._proc = proc
        try:
            first = True
            for raw_line in matcher_lines(proc):
                if self._stop.is_set():
                    break
                with self.store.locked():
                    if first:
                        self.store.append_file_run(path, [raw_line])
                        first = False
                    else:
                        self.store.append_match_line(path, raw_line)
        finally:
            self._proc = None
            reap_matcher(proc)


__all__ = ["SKIPPED_NAMES", "Walker"]
