"""Key bindings for the results browser.

Handlers return ``True`` to request a quit; anything else keeps the loop going.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .key_registry import KeyComboBinding, KeyComboRegistry

CURSOR_DOWN_KEYS = ("DOWN", "j")
CURSOR_UP_KEYS = ("UP", "k")
PAGE_DOWN_KEYS = ("PAGE_DOWN", "J")
PAGE_UP_KEYS = ("PAGE_UP", "K")
SELECT_KEYS = ("p", "ENTER_CR", "ENTER_LF")
QUIT_KEYS = ("q",)
INTERRUPT_KEYS = ("CTRL_C",)


@dataclass(frozen=True)
class BrowserKeyActions:
    cursor_down: Callable[[], None]
    cursor_up: Callable[[], None]
    page_down: Callable[[], None]
    page_up: Callable[[], None]
    select: Callable[[], None]


def _quit() -> bool:
    return True


def _interrupt() -> bool:
    # Raw mode disables ISIG, so Ctrl-C arrives as a byte rather than SIGINT.
    raise KeyboardInterrupt


def build_key_registry(actions: BrowserKeyActions) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(CURSOR_DOWN_KEYS, actions.cursor_down),
        KeyComboBinding(CURSOR_UP_KEYS, actions.cursor_up),
        KeyComboBinding(PAGE_DOWN_KEYS, actions.page_down),
        KeyComboBinding(PAGE_UP_KEYS, actions.page_up),
        KeyComboBinding(SELECT_KEYS, actions.select),
        KeyComboBinding(QUIT_KEYS, _quit),
        KeyComboBinding(INTERRUPT_KEYS, _interrupt),
    )


def handle_key(key: str, registry: KeyComboRegistry) -> bool:
    """Dispatch ``key`` and return whether the browser should quit."""
    if not key:
        return False
    return registry.dispatch(key) is True
