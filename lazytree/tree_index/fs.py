"""Filesystem scanning used by ``TreeIndex.rescan``."""

from __future__ import annotations

import os

from .types import PATH_SEP


def join_child(directory: str, name: str) -> str:
    """Join an index path and a child name without doubling the root separator."""
    if directory == PATH_SEP:
        return PATH_SEP + name
    return directory + PATH_SEP + name


def list_subdirectories(directory: str, show_hidden: bool) -> tuple[list[str], OSError | None]:
    """List child directory paths of ``directory`` in sorted order.

    Returns ``(paths, scan_error)``. ``scan_error`` is set when the directory
    itself cannot be scanned; unreadable children are skipped silently.
    Symlinks to directories are not followed.
    """
    children: list[str] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    continue
                if is_dir:
                    children.append(join_child(directory, name))
    except OSError as exc:
        return [], exc
    children.sort()
    return children, None
