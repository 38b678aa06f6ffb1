"""External matcher invocation for a single file.

``grep -n`` is run with an argv list, so no shell quoting is involved here.
Output is streamed line by line to keep the walker's lock holds short.
"""

from __future__ import annotations

import io
import subprocess

MATCHER_EXECUTABLE = "grep"


def matcher_command(pattern: str, path: str, options: list[str] | None = None) -> list[str]:
    return [MATCHER_EXECUTABLE, "-n", *(options or []), "-e", pattern, "--", path]


def spawn_matcher(pattern: str, path: str, options: list[str] | None = None) -> subprocess.Popen:
    """Start the matcher for ``path``; raises ``OSError`` if it cannot spawn."""
    return subprocess.Popen(
        matcher_command(pattern, path, options),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
    )


def matcher_lines(proc: subprocess.Popen) -> io.TextIOWrapper:
    """Decode matcher output one grep record at a time.

    Records end at ``\\n`` only; a ``\\r`` inside matched text stays part of
    its line and a trailing one is left for ``parse_match_line`` to strip.
    """
    assert proc.stdout is not None
    return io.TextIOWrapper(proc.stdout, encoding="utf-8", errors="replace", newline="\n")


def reap_matcher(proc: subprocess.Popen) -> None:
    """Kill ``proc`` if it is still running, then collect its exit status."""
    if proc.poll() is None:
        proc.kill()
    if proc.stdout is not None:
        proc.stdout.close()
    proc.wait()


__all__ = ["MATCHER_EXECUTABLE", "matcher_command", "matcher_lines", "reap_matcher", "spawn_matcher"]
