"""Geometry of a tree view inside the terminal."""

from __future__ import annotations

from dataclasses import dataclass

KEY_BAR_ROWS = 1
MODAL_FOOTER_ROWS = 2


@dataclass(frozen=True)
class TreeViewLayout:
    """Screen geometry for a panel-embedded or modal tree view.

    ``rows``/``cols`` describe the whole terminal. The view widget is the
    terminal minus the key bar. A panel draws a border and, optionally, a
    mini-info status area inside it; a modal view keeps its tree lines
    unframed and shows its status below a separator.
    """

    rows: int
    cols: int
    is_panel: bool = False
    show_mini_info: bool = True

    @property
    def widget_lines(self) -> int:
        if self.is_panel:
            return max(1, self.rows - KEY_BAR_ROWS)
        return max(1, self.rows - KEY_BAR_ROWS - MODAL_FOOTER_ROWS)

    @property
    def tree_lines(self) -> int:
        """Number of lines available for tree entries."""
        if self.is_panel:
            reserved = 2 + (2 if self.show_mini_info else 0)
            return max(1, self.widget_lines - reserved)
        return self.widget_lines

    @property
    def tree_cols(self) -> int:
        if self.is_panel:
            return max(1, self.cols - 2)
        return max(1, self.cols)

    @property
    def first_tree_row(self) -> int:
        """1-based terminal row of the first tree line (mouse coordinates)."""
        return 2 if self.is_panel else 1

    def tree_row_for_mouse(self, row: int) -> int:
        """Translate a 1-based terminal row into a 0-based tree line index.

        The result may be negative (above the tree) or ``>= tree_lines``
        (below it).
        """
        return row - self.first_tree_row

    def resized(self, rows: int, cols: int) -> TreeViewLayout:
        return TreeViewLayout(rows=rows, cols=cols, is_panel=self.is_panel, show_mini_info=self.show_mini_info)
