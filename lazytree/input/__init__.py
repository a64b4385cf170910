"""Input-layer public API: terminal key decoding and key bindings."""

from .key_registry import KeyBinding, KeyRegistry
from .keys import (
    ABORT_KEYS,
    DEFAULT_BINDINGS,
    ENTER_KEYS,
    default_key_registry,
    is_mouse_key,
    is_printable_key,
    parse_mouse_col_row,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyBinding",
    "KeyRegistry",
    "ABORT_KEYS",
    "ENTER_KEYS",
    "DEFAULT_BINDINGS",
    "default_key_registry",
    "is_mouse_key",
    "is_printable_key",
    "parse_mouse_col_row",
]
