"""Full-screen composition of a tree view: frame, status line, and key bar."""

from __future__ import annotations

from ..navigation import NavigationCursor, TraversalMode
from ..render.ansi import display_width, fit_to_width, pad_to_width
from ..render.help import render_help_overlay
from ..ui_theme import DEFAULT_THEME, UITheme
from .layout import TreeViewLayout
from .rendering import UNICODE_GLYPHS, TreeFrame, TreeGlyphs, TreeViewportRenderer

PANEL_TITLE = "Directory tree"


def key_bar_labels(mode: TraversalMode) -> tuple[tuple[str, str], ...]:
    """Function-key labels; F4 shows the active navigation mode."""
    return (
        ("1", "Help"),
        ("2", "Rescan"),
        ("3", "Forget"),
        ("4", mode.label),
        ("5", "Copy"),
        ("6", "RenMov"),
        ("7", ""),
        ("8", "Rmdir"),
        ("9", ""),
        ("10", "Quit"),
    )


def render_key_bar(mode: TraversalMode, cols: int, theme: UITheme | None = None) -> str:
    active = theme or DEFAULT_THEME
    labels = key_bar_labels(mode)
    cell = max(1, cols // len(labels))
    parts: list[str] = []
    for key, label in labels:
        label_cols = max(0, cell - len(key))
        parts.append(f"{active.key_bar_key}{key}{active.reset}{active.key_bar_label}{label[:label_cols].ljust(label_cols)}{active.reset}")
    return pad_to_width("".join(parts), cols)


class TreePane:
    """Render a cursor into complete screen lines for one layout."""

    def __init__(
        self,
        layout: TreeViewLayout,
        *,
        theme: UITheme | None = None,
        glyphs: TreeGlyphs = UNICODE_GLYPHS,
    ) -> None:
        self.theme = theme or DEFAULT_THEME
        self.glyphs = glyphs
        self.layout = layout
        self.renderer = TreeViewportRenderer(layout.tree_cols, layout.tree_lines, theme=self.theme, glyphs=glyphs)

    def resize(self, rows: int, cols: int) -> None:
        self.layout = self.layout.resized(rows, cols)
        self.renderer = TreeViewportRenderer(
            self.layout.tree_cols,
            self.layout.tree_lines,
            theme=self.theme,
            glyphs=self.glyphs,
        )

    def render(
        self,
        cursor: NavigationCursor,
        *,
        message: str = "",
        help_visible: bool = False,
        active: bool = True,
    ) -> tuple[list[str], TreeFrame]:
        """Return ``(screen_lines, frame)``; ``screen_lines`` fills the terminal."""
        layout = self.layout
        cursor.set_window_height(layout.tree_lines)
        frame = self.renderer.build_frame(cursor)
        if help_visible:
            body = render_help_overlay(layout.tree_cols, layout.tree_lines, self.theme)
        else:
            body = self.renderer.render_lines(frame, active=active)

        status = self._status_line(frame, message)
        if layout.is_panel:
            lines = self._panel_lines(body, status)
        else:
            lines = self._modal_lines(body, status)
        if message and layout.is_panel and not layout.show_mini_info:
            lines.append(pad_to_width(f"{self.theme.message}{fit_to_width(message, layout.cols)}{self.theme.reset}", layout.cols))
        else:
            lines.append(render_key_bar(cursor.traversal_mode, layout.cols, self.theme))
        return lines[: layout.rows], frame

    def _status_line(self, frame: TreeFrame, message: str) -> str:
        theme = self.theme
        cols = self.layout.tree_cols
        if message:
            return pad_to_width(f"{theme.message}{fit_to_width(message, cols)}{theme.reset}", cols)
        color = theme.status_search if frame.searching else theme.status
        return pad_to_width(f"{color}{frame.status}{theme.reset}", cols)

    def _panel_lines(self, body: list[str], status: str) -> list[str]:
        theme = self.theme
        glyphs = self.glyphs
        top_left, top_right, bottom_left, bottom_right, left_tee, right_tee = glyphs.box
        inner = self.layout.tree_cols
        title = f" {PANEL_TITLE} "
        if display_width(title) > inner:
            title = ""
        left = (inner - len(title)) // 2
        right = inner - len(title) - left
        border = theme.border
        reset = theme.reset
        lines = [
            f"{border}{top_left}{glyphs.hline * left}{reset}{theme.title}{title}{reset}"
            f"{border}{glyphs.hline * right}{top_right}{reset}"
        ]
        side = f"{border}{glyphs.vline}{reset}"
        lines.extend(f"{side}{row}{side}" for row in body)
        if self.layout.show_mini_info:
            lines.append(f"{border}{left_tee}{glyphs.hline * inner}{right_tee}{reset}")
            lines.append(f"{side}{status}{side}")
        lines.append(f"{border}{bottom_left}{glyphs.hline * inner}{bottom_right}{reset}")
        return lines

    def _modal_lines(self, body: list[str], status: str) -> list[str]:
        theme = self.theme
        lines = list(body)
        lines.append(f"{theme.border}{self.glyphs.hline * self.layout.cols}{theme.reset}")
        lines.append(status)
        return lines
