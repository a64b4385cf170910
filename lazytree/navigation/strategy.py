"""Stateless stepping algorithms over a ``TreeIndex``.

``LinearTraversal`` walks raw sequence adjacency. ``HierarchicalTraversal``
only lands on entries that share the current entry's parent, skipping whole
subtrees and stopping at the parent's boundary.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from ..tree_index import TreeEntry, TreeIndex, parent_prefix


class Direction(IntEnum):
    BACKWARD = -1
    FORWARD = 1


class TraversalMode(str, Enum):
    """Per-cursor movement semantics; values are persisted in config."""

    LINEAR = "linear"
    HIERARCHICAL = "hierarchical"

    def toggled(self) -> TraversalMode:
        if self is TraversalMode.LINEAR:
            return TraversalMode.HIERARCHICAL
        return TraversalMode.LINEAR

    @property
    def label(self) -> str:
        """Key-bar label for the active mode."""
        return "Static" if self is TraversalMode.HIERARCHICAL else "Dynamc"


def is_same_parent(a: TreeEntry, b: TreeEntry) -> bool:
    """Return whether two entries at one depth share a parent.

    Compares the path text up to and including the last separator, so
    ``/a/b`` and ``/ab/c`` are not siblings even though ``/a`` is a prefix
    of ``/ab``.
    """
    return a.depth == b.depth and parent_prefix(a.path) == parent_prefix(b.path)


def _adjacent(index: TreeIndex, entry: TreeEntry, direction: Direction) -> TreeEntry | None:
    if direction is Direction.FORWARD:
        return index.next_entry(entry)
    return index.prev_entry(entry)


class TraversalStrategy:
    """Base class: ``step`` is implemented by subclasses, ``move_relative`` is shared."""

    mode: TraversalMode

    def step(self, index: TreeIndex, current: TreeEntry, direction: Direction) -> TreeEntry | None:
        raise NotImplementedError

    def move_relative(
        self,
        index: TreeIndex,
        current: TreeEntry,
        n: int,
        direction: Direction,
    ) -> tuple[TreeEntry, int]:
        """Apply ``step`` up to ``|n|`` times; return ``(entry, steps_taken)``.

        A negative ``n`` walks the opposite direction. Stops early at the
        first step that yields nothing.
        """
        if n < 0:
            n = -n
            direction = Direction(-direction)
        steps = 0
        while steps < n:
            candidate = self.step(index, current, direction)
            if candidate is None:
                break
            current = candidate
            steps += 1
        return current, steps


class LinearTraversal(TraversalStrategy):
    mode = TraversalMode.LINEAR

    def step(self, index: TreeIndex, current: TreeEntry, direction: Direction) -> TreeEntry | None:
        return _adjacent(index, current, direction)


class HierarchicalTraversal(TraversalStrategy):
    mode = TraversalMode.HIERARCHICAL

    def step(self, index: TreeIndex, current: TreeEntry, direction: Direction) -> TreeEntry | None:
        """Return the nearest sibling of ``current`` in ``direction``.

        Deeper entries (children, grandchildren) are skipped. A shallower
        entry, or a same-depth entry under a different parent, marks the end
        of the parent's run and yields ``None``.
        """
        candidate = _adjacent(index, current, direction)
        while candidate is not None:
            if candidate.depth < current.depth:
                return None
            if candidate.depth == current.depth:
                return candidate if is_same_parent(candidate, current) else None
            candidate = _adjacent(index, candidate, direction)
        return None


LINEAR = LinearTraversal()
HIERARCHICAL = HierarchicalTraversal()

_STRATEGIES: dict[TraversalMode, TraversalStrategy] = {
    TraversalMode.LINEAR: LINEAR,
    TraversalMode.HIERARCHICAL: HIERARCHICAL,
}


def strategy_for(mode: TraversalMode) -> TraversalStrategy:
    return _STRATEGIES[mode]
