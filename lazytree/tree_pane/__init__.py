"""Tree-view UI components: layout, viewport rendering, screen composition, mouse."""

from .events import DOUBLE_CLICK_SECONDS, TreeMouseHandler
from .layout import TreeViewLayout
from .pane import PANEL_TITLE, TreePane, key_bar_labels, render_key_bar
from .rendering import (
    ASCII_GLYPHS,
    UNICODE_GLYPHS,
    TreeFrame,
    TreeGlyphs,
    TreeRow,
    TreeViewportRenderer,
)

__all__ = [
    "DOUBLE_CLICK_SECONDS",
    "TreeMouseHandler",
    "TreeViewLayout",
    "PANEL_TITLE",
    "TreePane",
    "key_bar_labels",
    "render_key_bar",
    "ASCII_GLYPHS",
    "UNICODE_GLYPHS",
    "TreeFrame",
    "TreeGlyphs",
    "TreeRow",
    "TreeViewportRenderer",
]
