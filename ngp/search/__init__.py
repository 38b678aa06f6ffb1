"""Search producer: request description, matcher process, and tree walker."""

from .matcher import MATCHER_EXECUTABLE, matcher_command, matcher_lines, reap_matcher, spawn_matcher
from .request import LANGUAGE_EXTENSIONS, SearchRequest
from .walker import SKIPPED_NAMES, Walker

__all__ = [
    "LANGUAGE_EXTENSIONS",
    "MATCHER_EXECUTABLE",
    "SKIPPED_NAMES",
    "SearchRequest",
    "Walker",
    "matcher_command",
    "matcher_lines",
    "reap_matcher",
    "spawn_matcher",
]
