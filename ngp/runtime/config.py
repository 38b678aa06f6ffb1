"""JSON config lookup.

The config supplies the ``editor`` command template and optional display and
logging preferences. Lookup tries the per-user file first, then the legacy
dotfile, then the system-wide file. Having no usable config is fatal.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import site_config_dir, user_config_dir, user_log_dir

APP_NAME = "ngp"
CONFIG_FILENAME = "config.json"
USER_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".ngprc.json"
SITE_CONFIG_PATH = Path(site_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "ngp.log"
DEFAULT_LOG_LEVEL = "WARNING"


class ConfigError(Exception):
    """Raised when no config file provides a usable editor template."""


@dataclass(frozen=True)
class Config:
    editor: str
    theme: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    source: Path | None = None


def config_search_paths() -> tuple[Path, ...]:
    return (USER_CONFIG_PATH, LEGACY_CONFIG_PATH, SITE_CONFIG_PATH)


def load_config_data(path: Path) -> dict[str, object] | None:
    """Load one JSON object from ``path``, or ``None`` if missing or malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _optional_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _coerce_log_level(value: str | None) -> str:
    if value is None:
        return DEFAULT_LOG_LEVEL
    candidate = value.upper()
    if isinstance(logging.getLevelName(candidate), int):
        return candidate
    return DEFAULT_LOG_LEVEL


def load_config(paths: tuple[Path, ...] | None = None) -> Config:
    """Return the first readable config, raising ``ConfigError`` if none is usable."""
    searched = paths if paths is not None else config_search_paths()
    for path in searched:
        data = load_config_data(path)
        if data is None:
            continue
        editor = _optional_string(data, "editor")
        if editor is None:
            raise ConfigError(f"{path}: no editor string found")
        return Config(
            editor=editor,
            theme=_optional_string(data, "theme"),
            log_level=_coerce_log_level(_optional_string(data, "log_level")),
            source=path,
        )
    tried = ", ".join(str(path) for path in searched)
    raise ConfigError(f"no readable configuration file found (tried {tried})")


__all__ = [
    "APP_NAME",
    "Config",
    "ConfigError",
    "LEGACY_CONFIG_PATH",
    "LOG_PATH",
    "SITE_CONFIG_PATH",
    "USER_CONFIG_PATH",
    "config_search_paths",
    "load_config",
    "load_config_data",
]
