"""Ordered in-memory directory index with removal hooks.

Entries live in one list sorted by path components, so the descendants of
every directory are exactly the run of deeper entries that follows it.
Previous/next links are positions in that list and are bounds-checked.
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable, Iterable, Iterator

import structlog

from ..errors import IndexInvariantError
from .fs import list_subdirectories
from .types import (
    PATH_SEP,
    ChangeHook,
    RemovalEvent,
    RescanResult,
    TreeEntry,
    normalize_path,
)

logger = structlog.get_logger(__name__)

ListChildren = Callable[[str, bool], tuple[list[str], OSError | None]]


def _ancestor_paths(path: str) -> list[str]:
    """Return proper ancestors of ``path``, root first."""
    ancestors: list[str] = []
    current = path
    while current != PATH_SEP:
        current = posixpath.dirname(current)
        ancestors.append(current)
    ancestors.reverse()
    return ancestors


class TreeIndex:
    """Sorted directory entries keyed by unique absolute path.

    Every indexed path also has its ancestors indexed, which keeps the
    contiguous-children invariant independent of insertion order. Removal
    hooks fire synchronously, once per removed entry, while the removed run
    is still linked into the list. Hooks must not mutate the index.
    """

    def __init__(
        self,
        paths: Iterable[str] = (),
        *,
        show_hidden: bool = False,
        list_children: ListChildren | None = None,
    ) -> None:
        self.show_hidden = show_hidden
        self._list_children = list_children if list_children is not None else list_subdirectories
        self._entries: list[TreeEntry] = []
        self._by_path: dict[str, TreeEntry] = {}
        self._hooks: list[ChangeHook] = []
        self._insert_many(paths)

    @classmethod
    def from_paths(cls, paths: Iterable[str], **kwargs) -> TreeIndex:
        """Build an index from cached paths; duplicates collapse to one entry."""
        return cls(paths, **kwargs)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TreeEntry]:
        return iter(tuple(self._entries))

    def __contains__(self, item: object) -> bool:
        if isinstance(item, TreeEntry):
            return self._owns(item)
        if isinstance(item, str):
            return self.lookup(item) is not None
        return False

    def first(self) -> TreeEntry | None:
        return self._entries[0] if self._entries else None

    def last(self) -> TreeEntry | None:
        return self._entries[-1] if self._entries else None

    def lookup(self, path: str) -> TreeEntry | None:
        """Return the entry for ``path``; relative or unknown paths give ``None``."""
        try:
            normalized = normalize_path(path)
        except ValueError:
            return None
        return self._by_path.get(normalized)

    def entries(self) -> tuple[TreeEntry, ...]:
        return tuple(self._entries)

    def paths(self) -> list[str]:
        """Return indexed paths in sequence order (the persisted form)."""
        return [entry.path for entry in self._entries]

    def position(self, entry: TreeEntry) -> int:
        """Return the sequence position of a live entry."""
        if not self._owns(entry):
            raise ValueError(f"entry is not part of this index: {entry.path}")
        return entry.position

    def next_entry(self, entry: TreeEntry) -> TreeEntry | None:
        if not self._owns(entry):
            return None
        pos = entry.position + 1
        return self._entries[pos] if pos < len(self._entries) else None

    def prev_entry(self, entry: TreeEntry) -> TreeEntry | None:
        if not self._owns(entry):
            return None
        pos = entry.position - 1
        return self._entries[pos] if pos >= 0 else None

    def descendants(self, entry: TreeEntry) -> tuple[TreeEntry, ...]:
        """Return the contiguous run of entries below ``entry``."""
        start = self.position(entry)
        return tuple(self._entries[start + 1 : self._subtree_end(start)])

    def children(self, entry: TreeEntry) -> list[TreeEntry]:
        """Return direct children of ``entry`` in sequence order."""
        return [child for child in self.descendants(entry) if child.depth == entry.depth + 1]

    def add(self, path: str) -> TreeEntry:
        """Insert ``path`` (and missing ancestors) keeping sequence order.

        Adding an already indexed path returns the existing entry unchanged.
        """
        normalized = normalize_path(path)
        existing = self._by_path.get(normalized)
        if existing is not None:
            return existing
        self._insert_many([normalized])
        return self._by_path[normalized]

    def remove(self, path: str) -> tuple[str, ...]:
        """Remove ``path`` and its descendant run; return removed paths.

        Unknown paths are a no-op and return an empty tuple.
        """
        entry = self.lookup(path)
        if entry is None:
            return ()
        return self._remove_entry(entry)

    def rescan(self, path: str) -> RescanResult:
        """Re-read the direct children of ``path`` from the filesystem.

        Vanished children are removed with their subtrees (firing hooks) and
        newly found children are inserted. Deeper entries of surviving
        children are kept. A scan error leaves the index unchanged.
        """
        entry = self.lookup(path)
        if entry is None:
            entry = self.add(path)

        found, scan_error = self._list_children(entry.path, self.show_hidden)
        if scan_error is not None:
            logger.warning("index_rescan_failed", path=entry.path, error=str(scan_error))
            return RescanResult(path=entry.path, error=str(scan_error))

        found_paths = {normalize_path(child) for child in found}
        removed: list[str] = []
        for child in self.children(entry):
            if child.path not in found_paths:
                removed.extend(self._remove_entry(child))
        added = self._insert_many(sorted(found_paths.difference(self._by_path)))

        logger.info("index_rescanned", path=entry.path, added=len(added), removed=len(removed))
        return RescanResult(path=entry.path, added=tuple(added), removed=tuple(removed))

    def register_change_hook(self, hook: ChangeHook) -> None:
        """Register a removal hook; registering the same hook twice is a no-op."""
        if hook not in self._hooks:
            self._hooks.append(hook)

    def unregister_change_hook(self, hook: ChangeHook) -> None:
        if hook in self._hooks:
            self._hooks.remove(hook)

    @property
    def hook_count(self) -> int:
        return len(self._hooks)

    def check_invariants(self) -> None:
        """Raise ``IndexInvariantError`` when ordering or uniqueness is broken."""
        entries = self._entries
        if len(entries) != len(self._by_path):
            raise IndexInvariantError("path map and sequence disagree in size")
        for pos, entry in enumerate(entries):
            if self._by_path.get(entry.path) is not entry or entry.position != pos or not entry.alive:
                raise IndexInvariantError(f"stale bookkeeping for {entry.path}")
            if pos and entries[pos - 1].key >= entry.key:
                raise IndexInvariantError(f"{entry.path} is out of order or duplicated")
            if entry.path != PATH_SEP and posixpath.dirname(entry.path) not in self._by_path:
                raise IndexInvariantError(f"parent of {entry.path} is not indexed")
            prefix = entry.path.rstrip(PATH_SEP) + PATH_SEP
            run = {child.path for child in entries[pos + 1 : self._subtree_end(pos)]}
            expected = {other for other in self._by_path if other != entry.path and other.startswith(prefix)}
            if run != expected:
                raise IndexInvariantError(f"descendants of {entry.path} are not contiguous")

    def _owns(self, entry: TreeEntry) -> bool:
        pos = entry.position
        return entry.alive and 0 <= pos < len(self._entries) and self._entries[pos] is entry

    def _subtree_end(self, start: int) -> int:
        depth = self._entries[start].depth
        end = start + 1
        while end < len(self._entries) and self._entries[end].depth > depth:
            end += 1
        return end

    def _insert_many(self, paths: Iterable[str]) -> list[str]:
        """Insert paths plus missing ancestors; return the newly added paths."""
        added: list[str] = []
        for raw_path in paths:
            normalized = normalize_path(raw_path)
            for candidate in (*_ancestor_paths(normalized), normalized):
                if candidate in self._by_path:
                    continue
                entry = TreeEntry.for_path(candidate)
                self._by_path[candidate] = entry
                self._entries.append(entry)
                added.append(candidate)
        if added:
            self._entries.sort(key=lambda entry: entry.key)
            self._reindex()
        return added

    def _remove_entry(self, entry: TreeEntry) -> tuple[str, ...]:
        start = entry.position
        end = self._subtree_end(start)
        doomed = self._entries[start:end]
        prev_entry = self._entries[start - 1] if start > 0 else None
        next_entry = self._entries[end] if end < len(self._entries) else None

        for removed in doomed:
            event = RemovalEvent(entry=removed, prev=prev_entry, next=next_entry)
            for hook in tuple(self._hooks):
                hook(event)

        del self._entries[start:end]
        for removed in doomed:
            removed.alive = False
            removed.position = -1
            del self._by_path[removed.path]
        self._reindex()
        logger.debug("index_entries_removed", path=entry.path, count=len(doomed))
        return tuple(removed.path for removed in doomed)

    def _reindex(self) -> None:
        """Refresh positions and sibling masks after a structural change."""
        entries = self._entries
        has_later_sibling = [False] * len(entries)
        ancestors_of: list[tuple[int, ...]] = []
        stack: list[int] = []
        for pos, entry in enumerate(entries):
            entry.position = pos
            while stack and entries[stack[-1]].depth >= entry.depth:
                popped = stack.pop()
                if entries[popped].depth == entry.depth:
                    has_later_sibling[popped] = True
            ancestors_of.append(tuple(stack))
            stack.append(pos)

        for pos, entry in enumerate(entries):
            mask = 1 << entry.depth
            for ancestor_pos in ancestors_of[pos]:
                if has_later_sibling[ancestor_pos]:
                    mask |= 1 << entries[ancestor_pos].depth
            entry.sibling_mask = mask
