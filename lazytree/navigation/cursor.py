"""Selection cursor over a shared ``TreeIndex``.

A cursor owns its selection, viewport offset, traversal mode, and search
state. It registers a removal hook on the index when created and must be
closed (or used as a context manager) to deregister it.
"""

from __future__ import annotations

import structlog

from ..tree_index import RemovalEvent, TreeEntry, TreeIndex
from .strategy import LINEAR, Direction, TraversalMode, TraversalStrategy, strategy_for

VIEWPORT_MARGIN = 3

logger = structlog.get_logger(__name__)


class NavigationCursor:
    """Current selection plus viewport bookkeeping for one open view.

    ``viewport_offset`` is the number of lines between the window top and the
    selected line. Every move adjusts it by the steps actually taken and then
    clamps it with ``recenter``.
    """

    def __init__(
        self,
        index: TreeIndex,
        window_height: int,
        *,
        traversal_mode: TraversalMode = TraversalMode.LINEAR,
        is_panel: bool = False,
    ) -> None:
        self.index = index
        self.window_height = max(1, window_height)
        self.traversal_mode = traversal_mode
        self.is_panel = is_panel
        self.selected: TreeEntry | None = index.first()
        self.viewport_offset = self.window_height // 2
        self.is_searching = False
        self.search_buffer = ""
        self.visible_line_map: list[TreeEntry] = []
        self._attached = False
        self.attach()

    def __enter__(self) -> NavigationCursor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def strategy(self) -> TraversalStrategy:
        return strategy_for(self.traversal_mode)

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """Register the selection-repair hook with the index."""
        if not self._attached:
            self.index.register_change_hook(self._on_entry_removed)
            self._attached = True

    def close(self) -> None:
        """Deregister from the index; the cursor must not be moved afterwards."""
        if self._attached:
            self.index.unregister_change_hook(self._on_entry_removed)
            self._attached = False
        self.visible_line_map = []

    def _on_entry_removed(self, event: RemovalEvent) -> None:
        if self.selected is not event.entry:
            return
        replacement = event.next if event.next is not None else event.prev
        logger.debug(
            "selection_repaired",
            removed=event.entry.path,
            selected=replacement.path if replacement is not None else None,
        )
        self.selected = replacement

    def ensure_selection(self) -> TreeEntry | None:
        """Select ``first()`` when nothing (or a detached entry) is selected."""
        if self.selected is None or self.selected not in self.index:
            self.selected = self.index.first()
            self.viewport_offset = 0
        return self.selected

    def set_window_height(self, window_height: int) -> None:
        """Adopt a new window height, recentering only when it changed."""
        window_height = max(1, window_height)
        if window_height != self.window_height:
            self.window_height = window_height
            self.recenter()

    def recenter(self) -> None:
        """Keep the selection at least ``VIEWPORT_MARGIN`` lines from either edge."""
        if self.viewport_offset < VIEWPORT_MARGIN:
            self.viewport_offset = VIEWPORT_MARGIN
        elif self.viewport_offset >= self.window_height - VIEWPORT_MARGIN:
            self.viewport_offset = self.window_height - VIEWPORT_MARGIN - 1
        self.viewport_offset = max(0, self.viewport_offset)

    def toggle_traversal_mode(self) -> TraversalMode:
        self.traversal_mode = self.traversal_mode.toggled()
        return self.traversal_mode

    def move_backward(self, n: int) -> int:
        """Move up to ``n`` steps toward the start; return steps taken."""
        return self._move(n, Direction.BACKWARD)

    def move_forward(self, n: int) -> int:
        """Move up to ``n`` steps toward the end; return steps taken."""
        return self._move(n, Direction.FORWARD)

    def _move(self, n: int, direction: Direction) -> int:
        current = self.ensure_selection()
        if current is None:
            return 0
        self.selected, steps = self.strategy.move_relative(self.index, current, n, direction)
        self.viewport_offset += steps * int(direction)
        self.recenter()
        return steps

    def move_to_parent(self) -> bool:
        """Select the nearest shallower predecessor; return whether it changed.

        Falls back to ``first()`` when no shallower entry precedes the
        selection.
        """
        old = self.ensure_selection()
        if old is None:
            return False
        current: TreeEntry | None = old
        while current is not None:
            current = LINEAR.step(self.index, current, Direction.BACKWARD)
            if current is None:
                break
            self.viewport_offset -= 1
            if current.depth < old.depth:
                break
        if current is None:
            current = self.index.first()
        self.selected = current
        self.recenter()
        return self.selected is not old

    def move_to_child(self) -> bool:
        """Select the first child, rescanning the selection once if it has none.

        Returns ``False`` (selection unchanged) when the directory has no
        subdirectories even after the rescan.
        """
        current = self.ensure_selection()
        if current is None:
            return False
        if self._select_first_child(current):
            return True
        # Rescan removals only touch children, so ``current`` stays selected.
        self.index.rescan(current.path)
        return self._select_first_child(current)

    def _select_first_child(self, current: TreeEntry) -> bool:
        successor = LINEAR.step(self.index, current, Direction.FORWARD)
        if successor is None or successor.depth <= current.depth:
            return False
        self.selected = successor
        self.viewport_offset += 1
        self.recenter()
        return True

    def move_to_top(self) -> None:
        self.selected = self.index.first()
        self.viewport_offset = 0

    def move_to_bottom(self) -> None:
        self.selected = self.index.last()
        self.viewport_offset = self.window_height - VIEWPORT_MARGIN - 1

    def select_path(self, path: str) -> bool:
        """Select an indexed path (the chdir notification); ``False`` if unknown."""
        entry = self.index.lookup(path)
        if entry is None:
            return False
        self.selected = entry
        self.recenter()
        return True

    def select_line(self, row: int) -> bool:
        """Select the entry painted on window ``row`` by the last render."""
        if not 0 <= row < len(self.visible_line_map):
            return False
        entry = self.visible_line_map[row]
        if entry not in self.index:
            return False
        self.selected = entry
        self.viewport_offset = row
        return True
