"""ANSI-aware text measurement and clipping.

Escape sequences are preserved and never count toward display width, so tree
rows stay aligned when colors and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return terminal column width for ANSI-styled text."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    return sum(char_display_width(ch) for ch in plain)


def sanitize(text: str) -> str:
    """Replace control characters (e.g. newlines in directory names) with ``?``."""
    return "".join("?" if unicodedata.category(ch) == "Cc" else ch for ch in text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def fit_to_width(text: str, max_cols: int) -> str:
    """Left-fit plain text into ``max_cols`` columns, marking cuts with ``~``.

    The cut keeps the head and the tail of the text so long leaf names stay
    recognizable.
    """
    if max_cols <= 0:
        return ""
    text = sanitize(text)
    if display_width(text) <= max_cols:
        return text
    if max_cols <= 2:
        return clip_ansi_line(text, max_cols)
    head_cols = (max_cols - 1) // 2
    tail_cols = max_cols - 1 - head_cols
    head = clip_ansi_line(text, head_cols)
    tail_chars: list[str] = []
    used = 0
    for ch in reversed(text):
        w = char_display_width(ch)
        if used + w > tail_cols:
            break
        tail_chars.append(ch)
        used += w
    return f"{head}~{''.join(reversed(tail_chars))}"


def pad_to_width(text: str, width: int) -> str:
    """Clip or right-pad styled ``text`` to exactly ``width`` display columns."""
    clipped = clip_ansi_line(text, width)
    missing = width - display_width(clipped)
    if missing > 0:
        return clipped + (" " * missing)
    return clipped


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"
