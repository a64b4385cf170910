"""Directory index: ordered entries, filesystem rescan, and persisted cache.

This package contains non-UI primitives:
- ``TreeEntry`` and path helpers
- ``TreeIndex`` with lookup/rescan/remove and removal hooks
- JSON cache load/save helpers
"""

from __future__ import annotations

from .cache import load_cached_paths, load_index, save_cached_paths, save_index
from .fs import join_child, list_subdirectories
from .index import TreeIndex
from .types import (
    PATH_SEP,
    ChangeHook,
    RemovalEvent,
    RescanResult,
    TreeEntry,
    leaf_name_of,
    normalize_path,
    parent_prefix,
    path_depth,
)

__all__ = [
    "PATH_SEP",
    "ChangeHook",
    "RemovalEvent",
    "RescanResult",
    "TreeEntry",
    "TreeIndex",
    "join_child",
    "leaf_name_of",
    "list_subdirectories",
    "load_cached_paths",
    "load_index",
    "normalize_path",
    "parent_prefix",
    "path_depth",
    "save_cached_paths",
    "save_index",
]
