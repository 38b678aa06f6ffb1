"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the result rows and the status bar.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    file_marker: str
    line_number: str
    match_text: str
    status: str
    status_busy: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    file_marker="\033[1;32m",
    line_number="\033[33m",
    match_text="\033[37m",
    status="\033[2m",
    status_busy="\033[35m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    file_marker="\033[1;38;5;45m",
    line_number="\033[38;5;153m",
    match_text="\033[38;5;252m",
    status="\033[2;38;5;110m",
    status_busy="\033[38;5;215m",
)

# No colors, but the cursor row stays reverse-video so it remains visible.
PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    reset="\033[0m",
    file_marker="",
    line_number="",
    match_text="",
    status="",
    status_busy="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color or (name or "").strip().lower() == PLAIN_THEME.name:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "normalize_theme_name",
    "resolve_theme",
]
