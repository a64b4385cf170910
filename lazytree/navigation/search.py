"""Incremental leaf-name prefix search driven by a cursor.

Each keystroke rescans the index from the selection with wraparound, so the
cost per keystroke is O(index size). That is fine for interactive directory
caches but is the scaling limit of this search.
"""

from __future__ import annotations

from ..tree_index import TreeEntry
from .cursor import NavigationCursor
from .strategy import LINEAR, Direction


class IncrementalSearch:
    """Prefix search state machine bound to one ``NavigationCursor``.

    The cursor carries ``is_searching``/``search_buffer``; this class edits
    them and moves the selection to matches.
    """

    def __init__(self, cursor: NavigationCursor) -> None:
        self.cursor = cursor

    @property
    def buffer(self) -> str:
        return self.cursor.search_buffer

    def begin(self) -> None:
        """Enter searching mode with an empty buffer."""
        self.cursor.is_searching = True
        self.cursor.search_buffer = ""

    def end(self) -> None:
        self.cursor.is_searching = False

    def search(self, buffer: str) -> bool:
        """Select the first entry at or after the selection whose leaf starts with ``buffer``."""
        start = self.cursor.ensure_selection()
        if start is None:
            return False
        return self._scan(start, buffer, include_start=True)

    def search_next(self) -> bool:
        """Advance to the next match after the selection, wrapping once.

        The current selection is not a candidate, so ``False`` means no other
        entry matches the buffer.
        """
        start = self.cursor.ensure_selection()
        if start is None:
            return False
        return self._scan(start, self.cursor.search_buffer, include_start=False)

    def type_char(self, ch: str) -> bool:
        """Append ``ch`` and search; a failing character is dropped again."""
        candidate = self.cursor.search_buffer + ch
        if not self.search(candidate):
            return False
        self.cursor.search_buffer = candidate
        return True

    def backspace(self) -> bool:
        if self.cursor.search_buffer:
            self.cursor.search_buffer = self.cursor.search_buffer[:-1]
        return self.search(self.cursor.search_buffer)

    def _scan(self, start: TreeEntry, buffer: str, *, include_start: bool) -> bool:
        cursor = self.cursor
        scanned = 0
        current = start
        if not include_start:
            current = self._advance(current)
            scanned = 1
        while not (current is start and scanned):
            if current.leaf_name.startswith(buffer):
                cursor.selected = current
                cursor.viewport_offset += scanned
                cursor.recenter()
                return True
            current = self._advance(current)
            scanned += 1
        cursor.recenter()
        return False

    def _advance(self, entry: TreeEntry) -> TreeEntry:
        following = LINEAR.step(self.cursor.index, entry, Direction.FORWARD)
        if following is None:
            first = self.cursor.index.first()
            assert first is not None
            return first
        return following
