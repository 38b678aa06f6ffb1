"""Path helpers for display rows and editor command lines."""

from __future__ import annotations

import re

_DUPLICATE_SEPARATOR_RE = re.compile(r"/{2,}")


def collapse_separators(path: str) -> str:
    return _DUPLICATE_SEPARATOR_RE.sub("/", path)


def sanitize_path(path: str) -> str:
    """Escape embedded spaces so ``path`` survives a shell command line."""
    return collapse_separators(path).replace(" ", "\\ ")


def display_path(path: str) -> str:
    """Return the on-screen form of ``path``.

    Accepts raw or sanitized paths: escaped spaces are restored, duplicate
    separators collapsed, and a leading ``./`` dropped.
    """
    shown = collapse_separators(path.replace("\\ ", " "))
    if shown.startswith("./") and len(shown) > 2:
        shown = shown[2:]
    return shown


def extract_line_number(raw_line: str) -> str:
    """Return the first token of ``raw_line`` split on spaces and colons."""
    for token in re.split(r"[ :]", raw_line):
        if token:
            return token
    return ""


__all__ = ["collapse_separators", "display_path", "extract_line_number", "sanitize_path"]
