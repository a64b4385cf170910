"""Default key bindings and key-token helpers for the tree view."""

from __future__ import annotations

from .key_registry import KeyBinding, KeyRegistry

ABORT_KEYS = frozenset({"ESC", "CTRL_G"})
ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})

DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("UP", "CTRL_P"), "goto_up"),
    KeyBinding(("DOWN", "CTRL_N"), "goto_down"),
    KeyBinding(("LEFT",), "goto_left"),
    KeyBinding(("RIGHT",), "goto_right"),
    KeyBinding(("PGUP",), "goto_page_up"),
    KeyBinding(("PGDN",), "goto_page_down"),
    KeyBinding(("HOME",), "goto_home"),
    KeyBinding(("END",), "goto_end"),
    KeyBinding(tuple(ENTER_KEYS), "enter"),
    KeyBinding(("F1",), "help"),
    KeyBinding(("F2",), "rescan"),
    KeyBinding(("F3",), "forget"),
    KeyBinding(("F4",), "toggle_navigation_mode"),
    KeyBinding(("F5",), "copy"),
    KeyBinding(("F6",), "move"),
    KeyBinding(("F8", "DELETE"), "delete"),
    KeyBinding(("F10", "CTRL_C"), "quit"),
    KeyBinding(("CTRL_S",), "search_begin"),
)


def default_key_registry() -> KeyRegistry:
    return KeyRegistry(DEFAULT_BINDINGS)


def is_printable_key(key: str) -> bool:
    """True for single printable characters (search input)."""
    return len(key) == 1 and key.isprintable()


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def is_mouse_key(key: str) -> bool:
    return key.startswith("MOUSE")
