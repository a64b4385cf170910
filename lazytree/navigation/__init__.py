"""Cursor movement, traversal strategies, and incremental search."""

from __future__ import annotations

from .cursor import VIEWPORT_MARGIN, NavigationCursor
from .search import IncrementalSearch
from .strategy import (
    HIERARCHICAL,
    LINEAR,
    Direction,
    HierarchicalTraversal,
    LinearTraversal,
    TraversalMode,
    TraversalStrategy,
    is_same_parent,
    strategy_for,
)

__all__ = [
    "VIEWPORT_MARGIN",
    "NavigationCursor",
    "IncrementalSearch",
    "Direction",
    "TraversalMode",
    "TraversalStrategy",
    "LinearTraversal",
    "HierarchicalTraversal",
    "LINEAR",
    "HIERARCHICAL",
    "is_same_parent",
    "strategy_for",
]
