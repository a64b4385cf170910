"""Viewport projection of a cursor onto a fixed number of tree lines.

The renderer picks the top entry by stepping backward from the selection with
the cursor's active strategy, then paints literal list order downward. Each
painted entry gets ancestor guide columns and a tee/corner connector chosen
from sibling masks.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..navigation import LINEAR, VIEWPORT_MARGIN, Direction, NavigationCursor
from ..render.ansi import fit_to_width, pad_to_width, selected_with_ansi
from ..tree_index import TreeEntry, TreeIndex
from ..ui_theme import DEFAULT_THEME, UITheme

# Guide columns stop once fewer than this many columns would remain for the label.
MIN_LABEL_COLS = 9
GUIDE_COLS = 3


@dataclass(frozen=True)
class TreeGlyphs:
    """Connector glyphs; ``box`` holds frame corners then left/right tees."""

    vline: str
    tee: str
    corner: str
    hline: str
    box: str = "┌┐└┘├┤"


UNICODE_GLYPHS = TreeGlyphs(vline="│", tee="├", corner="└", hline="─")
ASCII_GLYPHS = TreeGlyphs(vline="|", tee="+", corner="`", hline="-", box="++++++")


@dataclass(frozen=True)
class TreeRow:
    """One painted tree line before styling."""

    entry: TreeEntry
    guides: str
    connector: str
    label: str
    selected: bool

    @property
    def is_top_level(self) -> bool:
        return not self.connector

    @property
    def text(self) -> str:
        return f"{self.guides}{self.connector}{self.label}"


@dataclass(frozen=True)
class TreeFrame:
    """Render result: rows, the line-to-entry map, and the status text."""

    rows: tuple[TreeRow, ...]
    line_map: tuple[TreeEntry, ...]
    selected_row: int | None
    topdepth: int
    status: str
    searching: bool

    def entry_at(self, line: int) -> TreeEntry | None:
        if 0 <= line < len(self.line_map):
            return self.line_map[line]
        return None


class TreeViewportRenderer:
    """Build ``TreeFrame`` snapshots for a window of ``height`` x ``width`` cells."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        theme: UITheme | None = None,
        glyphs: TreeGlyphs = UNICODE_GLYPHS,
    ) -> None:
        self.width = max(1, width)
        self.height = max(1, height)
        self.theme = theme or DEFAULT_THEME
        self.glyphs = glyphs

    def build_frame(self, cursor: NavigationCursor) -> TreeFrame:
        """Project ``cursor`` onto the window and sync its line bookkeeping.

        Writes the painted entries to ``cursor.visible_line_map`` and the
        achieved distance between the top line and the selection back into
        ``cursor.viewport_offset``.
        """
        index = cursor.index
        selected = cursor.ensure_selection()
        if selected is None:
            cursor.visible_line_map = []
            return TreeFrame(
                rows=(),
                line_map=(),
                selected_row=None,
                topdepth=0,
                status=self._status_text(cursor),
                searching=cursor.is_searching,
            )

        top, distance = self._find_top(cursor, selected)
        painted: list[TreeEntry] = []
        current: TreeEntry | None = top
        while current is not None and len(painted) < self.height:
            painted.append(current)
            current = LINEAR.step(index, current, Direction.FORWARD)

        topdepth = min(entry.depth for entry in painted)
        rows = tuple(self._build_row(index, entry, topdepth, entry is selected) for entry in painted)

        cursor.viewport_offset = distance
        cursor.visible_line_map = list(painted)
        return TreeFrame(
            rows=rows,
            line_map=tuple(painted),
            selected_row=distance,
            topdepth=topdepth,
            status=self._status_text(cursor),
            searching=cursor.is_searching,
        )

    def _find_top(self, cursor: NavigationCursor, selected: TreeEntry) -> tuple[TreeEntry, int]:
        """Step backward ``viewport_offset`` times with the cursor's strategy.

        Stops early when a step would put more lines above the selection than
        the bottom margin allows, which only happens when hierarchical steps
        jump over subtrees. A larger offset left by a mouse click is kept.
        """
        index = cursor.index
        strategy = cursor.strategy
        top = selected
        limit = min(self.height - 1, max(self.height - VIEWPORT_MARGIN - 1, cursor.viewport_offset))
        distance = 0
        steps = 0
        while steps < cursor.viewport_offset:
            candidate = strategy.step(index, top, Direction.BACKWARD)
            if candidate is None:
                break
            gap = index.position(top) - index.position(candidate)
            if distance + gap > limit:
                break
            top = candidate
            distance += gap
            steps += 1
        return top, distance

    def _build_row(self, index: TreeIndex, entry: TreeEntry, topdepth: int, selected: bool) -> TreeRow:
        if entry.depth == topdepth:
            return TreeRow(
                entry=entry,
                guides="",
                connector="",
                label=fit_to_width(entry.path, self.width),
                selected=selected,
            )

        glyphs = self.glyphs
        guides: list[str] = []
        for level in range(entry.depth - topdepth - 1):
            if self.width - 8 - GUIDE_COLS * level < MIN_LABEL_COLS:
                break
            bar = glyphs.vline if entry.has_sibling_bit(level + topdepth + 1) else " "
            guides.append(f" {bar} ")

        following = index.next_entry(entry)
        continues = following is not None and following.has_sibling_bit(entry.depth)
        corner = glyphs.tee if continues else glyphs.corner
        connector = f" {corner}{glyphs.hline} "
        label_cols = self.width - GUIDE_COLS * len(guides) - len(connector)
        return TreeRow(
            entry=entry,
            guides="".join(guides),
            connector=connector,
            label=fit_to_width(entry.leaf_name, label_cols),
            selected=selected,
        )

    def _status_text(self, cursor: NavigationCursor) -> str:
        if cursor.is_searching:
            return fit_to_width(f"/{cursor.search_buffer}", self.width)
        if cursor.selected is None:
            return ""
        return fit_to_width(cursor.selected.path, self.width)

    def format_row(self, row: TreeRow, *, active: bool = True) -> str:
        """Style one row; the selection is highlighted only in an active view."""
        theme = self.theme
        if row.is_top_level:
            text = f"{theme.tree_root_path}{row.label}{theme.reset}"
        else:
            text = (
                f"{theme.tree_guide}{row.guides}{row.connector}{theme.reset}"
                f"{theme.tree_dir}{row.label}{theme.reset}"
            )
        text = pad_to_width(text, self.width)
        if row.selected and active:
            if not theme.reverse:
                return pad_to_width(f"> {row.text}", self.width)
            return selected_with_ansi(text)
        return text

    def render_lines(self, frame: TreeFrame, *, active: bool = True) -> list[str]:
        """Return exactly ``height`` padded, styled lines for ``frame``."""
        lines = [self.format_row(row, active=active) for row in frame.rows]
        blank = " " * self.width
        while len(lines) < self.height:
            lines.append(blank)
        return lines
