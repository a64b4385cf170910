"""Tree-view mouse interpretation for selection, paging, and activation.

Clicks resolve a terminal row through the cursor's ``visible_line_map`` from
the last render. Handlers stay thin: they select, page, or hand a command
name back to the command dispatcher.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ..input.keys import parse_mouse_col_row
from ..navigation import NavigationCursor
from .layout import TreeViewLayout

DOUBLE_CLICK_SECONDS = 0.35


class TreeMouseHandler:
    """Translate mouse key tokens into cursor moves and commands.

    ``execute`` receives command names (``goto_page_up``, ``enter``, ...) so
    paging and activation follow the same path as keyboard input.
    """

    def __init__(
        self,
        *,
        cursor: NavigationCursor,
        layout: Callable[[], TreeViewLayout],
        execute: Callable[[str], bool],
        double_click_seconds: float = DOUBLE_CLICK_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cursor = cursor
        self._layout = layout
        self._execute = execute
        self._double_click_seconds = double_click_seconds
        self._monotonic = monotonic
        self._last_click_path: str | None = None
        self._last_click_time = 0.0

    def handle(self, key: str) -> bool:
        """Handle one ``MOUSE*`` token; return whether it was consumed."""
        if key.startswith("MOUSE_WHEEL_UP:"):
            return self._execute("goto_up")
        if key.startswith("MOUSE_WHEEL_DOWN:"):
            return self._execute("goto_down")
        if key.startswith("MOUSE_LEFT_DOWN:"):
            col, row = parse_mouse_col_row(key)
            if col is None or row is None:
                return True
            return self.handle_click(col, row)
        # Button releases and other buttons are consumed without effect.
        return key.startswith("MOUSE")

    def handle_click(self, col: int, row: int) -> bool:
        """Select the clicked line; a second click on it within the window enters.

        ``col``/``row`` are 1-based terminal coordinates. A click on the
        panel's top border is left unhandled; clicks below the tree lines
        page down.
        """
        layout = self._layout()
        if not 1 <= col <= layout.cols or row > layout.widget_lines:
            return True
        line = layout.tree_row_for_mouse(row)
        if line < 0:
            self._reset_click()
            return False
        if line >= layout.tree_lines:
            self._reset_click()
            return self._execute("goto_page_down")

        cursor = self._cursor
        if not cursor.select_line(line):
            self._reset_click()
            return True

        selected = cursor.selected
        path = selected.path if selected is not None else None
        now = self._monotonic()
        is_double = path is not None and path == self._last_click_path and (
            now - self._last_click_time
        ) <= self._double_click_seconds
        if is_double:
            self._reset_click()
            return self._execute("enter")
        self._last_click_path = path
        self._last_click_time = now
        return True

    def _reset_click(self) -> None:
        self._last_click_path = None
        self._last_click_time = 0.0
