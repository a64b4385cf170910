"""Raw-mode terminal ownership for one tree browser run.

Switches to the alternate screen with SGR mouse reporting, repaints whole
frames, and always restores the saved tty attributes on exit.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

_ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_LEAVE_SEQUENCE = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Terminal state for a session reading ``stdin_fd`` and drawing on ``stdout_fd``."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attributes = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Raw input, alternate screen, hidden cursor, mouse reporting on."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, _ENTER_SEQUENCE)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, _LEAVE_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attributes)

    def size(self) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal we draw on."""
        try:
            cols, rows = os.get_terminal_size(self.stdout_fd)
        except OSError:
            cols, rows = shutil.get_terminal_size((80, 24))
        return rows, cols

    def write_frame(self, lines: list[str]) -> None:
        """Repaint the whole screen from the top-left corner."""
        body = "\r\n".join(f"{line}\x1b[K" for line in lines)
        os.write(self.stdout_fd, f"\x1b[H{body}\x1b[J".encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Hold TUI mode for the body of the ``with`` block."""
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()
