"""Result entry types shared by the walker, navigator, and renderer.

An entry is either a ``FileMarker`` (start of one file's run of matches) or a
``MatchLine`` (one matched line). Both are immutable once appended.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileMarker:
    """Header row that opens one file's contiguous run of matches."""

    path: str


@dataclass(frozen=True)
class MatchLine:
    """One matched line reported by the external matcher."""

    path: str
    line_number: int
    text: str

    @property
    def label(self) -> str:
        return f"{self.line_number}:{self.text}"


Entry = FileMarker | MatchLine


def is_marker(entry: Entry) -> bool:
    return isinstance(entry, FileMarker)


__all__ = ["Entry", "FileMarker", "MatchLine", "is_marker"]
