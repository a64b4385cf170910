"""Status-line prompts used by copy, move, and delete.

Dialogs read keys through the same decoder as the main loop and redraw the
screen with the prompt text in place of the status line.
"""

from __future__ import annotations

from collections.abc import Callable

from ..input.keys import ABORT_KEYS, ENTER_KEYS, is_printable_key


class StatusLineDialogs:
    """Line-edit prompt and yes/no confirmation drawn by ``show``."""

    def __init__(self, *, read_key: Callable[[], str], show: Callable[[str], None]) -> None:
        self._read_key = read_key
        self._show = show

    def prompt(self, label: str, initial: str = "") -> str | None:
        """Edit a line of text; ``None`` when aborted or left empty."""
        text = initial
        while True:
            self._show(f"{label} {text}")
            key = self._read_key()
            if key in ENTER_KEYS:
                stripped = text.strip()
                return stripped or None
            if not key or key in ABORT_KEYS or key == "CTRL_C":
                return None
            if key == "BACKSPACE":
                text = text[:-1]
            elif key == "CTRL_U":
                text = ""
            elif is_printable_key(key):
                text += key

    def confirm(self, question: str) -> bool:
        self._show(f"{question} (y/n)")
        while True:
            key = self._read_key()
            if key in {"y", "Y"}:
                return True
            if not key or key in {"n", "N", "CTRL_C"} or key in ABORT_KEYS or key in ENTER_KEYS:
                return False
