"""Search result model: entry variants and the shared result store."""

from .store import MAX_MATCH_TEXT_CHARS, ResultStore, parse_match_line
from .types import Entry, FileMarker, MatchLine, is_marker

__all__ = [
    "Entry",
    "FileMarker",
    "MatchLine",
    "MAX_MATCH_TEXT_CHARS",
    "ResultStore",
    "is_marker",
    "parse_match_line",
]
