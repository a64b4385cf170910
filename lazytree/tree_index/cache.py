"""Persisted directory cache: load at startup, save at teardown.

The cache is a JSON object ``{"version": 1, "paths": [...]}`` stored in the
platform cache directory. Loading degrades to an empty index; saving reports
failures through ``IndexSaveError`` so the caller can tell the operator.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from platformdirs import user_cache_dir

from ..errors import IndexLoadError, IndexSaveError
from .index import TreeIndex

APP_NAME = "lazytree"
CACHE_FILENAME = "tree.json"
CACHE_VERSION = 1
CACHE_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / CACHE_FILENAME

logger = structlog.get_logger(__name__)


def load_cached_paths(cache_path: Path | None = None) -> list[str]:
    """Read the cached directory list.

    Raises ``IndexLoadError`` when the file is missing, unreadable, malformed,
    or has an unexpected shape. Non-string and relative items are dropped.
    """
    path = cache_path if cache_path is not None else CACHE_PATH
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IndexLoadError(path, exc.strerror or str(exc)) from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise IndexLoadError(path, f"malformed JSON ({exc})") from exc
    if not isinstance(data, dict) or not isinstance(data.get("paths"), list):
        raise IndexLoadError(path, "expected an object with a 'paths' list")
    if data.get("version") != CACHE_VERSION:
        raise IndexLoadError(path, f"unsupported cache version {data.get('version')!r}")
    return [item for item in data["paths"] if isinstance(item, str) and item.startswith("/")]


def save_cached_paths(paths: list[str], cache_path: Path | None = None) -> None:
    """Write the directory list, raising ``IndexSaveError`` on any I/O failure."""
    path = cache_path if cache_path is not None else CACHE_PATH
    payload = {"version": CACHE_VERSION, "paths": list(paths)}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise IndexSaveError(path, exc.strerror or str(exc)) from exc


def load_index(cache_path: Path | None = None, *, show_hidden: bool = False) -> TreeIndex:
    """Build a ``TreeIndex`` from the cache, or an empty one if loading fails."""
    try:
        paths = load_cached_paths(cache_path)
    except IndexLoadError as exc:
        logger.warning("tree_cache_load_failed", path=str(exc.path), reason=exc.reason)
        return TreeIndex(show_hidden=show_hidden)
    index = TreeIndex.from_paths(paths, show_hidden=show_hidden)
    logger.info("tree_cache_loaded", path=str(cache_path or CACHE_PATH), entries=len(index))
    return index


def save_index(index: TreeIndex, cache_path: Path | None = None) -> None:
    """Persist ``index`` paths in sequence order."""
    save_cached_paths(index.paths(), cache_path)
    logger.info("tree_cache_saved", path=str(cache_path or CACHE_PATH), entries=len(index))
