"""Help overlay content for the tree view.

Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import pad_to_width

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "MOVE",
        (
            ("Up/Down", "previous/next directory"),
            ("PgUp/PgDn", "page"),
            ("Home/End", "first/last directory"),
            ("Left/Right", "parent/child (hierarchical mode)"),
            ("F4", "toggle linear/hierarchical movement"),
        ),
    ),
    (
        "SEARCH",
        (
            ("type", "jump to directory whose name starts with text"),
            ("Backspace", "shorten search text"),
            ("Ctrl+S", "start search / next match"),
            ("Esc", "stop searching"),
        ),
    ),
    (
        "ACTIONS",
        (
            ("Enter", "choose directory"),
            ("F2", "rescan selected directory"),
            ("F3", "forget selected directory"),
            ("F5/F6/F8", "copy/move/delete"),
            ("F1", "toggle this help"),
            ("F10/Ctrl+C", "quit"),
        ),
    ),
)


def help_lines(theme: UITheme | None = None) -> list[str]:
    """Return styled help lines, one section heading followed by its keys."""
    active = theme or DEFAULT_THEME
    key_width = max(len(key) for _title, keys in HELP_SECTIONS for key, _text in keys)
    lines: list[str] = []
    for title, keys in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{active.help_heading}{title}{active.reset}")
        for key, text in keys:
            lines.append(f"  {active.help_key}{key.ljust(key_width)}{active.reset}  {text}")
    lines.append("")
    lines.append(f"{active.help_dim}press any key to close{active.reset}")
    return lines


def render_help_overlay(width: int, height: int, theme: UITheme | None = None) -> list[str]:
    """Return exactly ``height`` lines of help text padded to ``width``."""
    lines = help_lines(theme)[:height]
    while len(lines) < height:
        lines.append("")
    return [pad_to_width(line, width) for line in lines]
