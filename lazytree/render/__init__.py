"""Presentation helpers: ANSI measurement and the help overlay."""

from __future__ import annotations

from .ansi import (
    ANSI_ESCAPE_RE,
    char_display_width,
    clip_ansi_line,
    display_width,
    fit_to_width,
    pad_to_width,
    sanitize,
    selected_with_ansi,
)
from .help import help_lines, render_help_overlay

__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_to_width",
    "pad_to_width",
    "sanitize",
    "selected_with_ansi",
    "help_lines",
    "render_help_overlay",
]
