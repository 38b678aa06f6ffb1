"""Input-layer public API for key decoding and browser key dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
key bindings used by the runtime loop.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import BrowserKeyActions, build_key_registry, handle_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "BrowserKeyActions",
    "KeyComboBinding",
    "KeyComboRegistry",
    "build_key_registry",
    "handle_key",
]
