"""Entry datatypes and path helpers for the directory index."""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import PurePosixPath

PATH_SEP = "/"


def normalize_path(path: str | PurePosixPath) -> str:
    """Return an absolute, separator-normalized POSIX path string.

    Trailing separators and ``.``/``..`` components are collapsed so string
    prefix tests on entry paths match their structural parent relation.
    """
    text = str(path)
    if not text.startswith(PATH_SEP):
        raise ValueError(f"index paths must be absolute: {text!r}")
    normalized = posixpath.normpath(text)
    # POSIX keeps a leading "//" as implementation-defined; fold it to "/".
    if normalized.startswith("//"):
        normalized = PATH_SEP + normalized.lstrip(PATH_SEP)
    return normalized


def path_depth(path: str) -> int:
    """Return the number of components below the filesystem root."""
    return len(PurePosixPath(path).parts) - 1


def leaf_name_of(path: str) -> str:
    """Return the last path component (``/`` for the root itself)."""
    name = PurePosixPath(path).name
    return name or PATH_SEP


def parent_prefix(path: str) -> str:
    """Return ``path`` up to and including its last separator."""
    return path[: path.rfind(PATH_SEP) + 1]


def sort_key(path: str) -> tuple[str, ...]:
    """Order paths by component so every subtree forms a contiguous run."""
    return PurePosixPath(path).parts


@dataclass(eq=False)
class TreeEntry:
    """One directory in the index.

    Entries compare by identity: cursors hold references and removal repair
    checks ``selected is removed``. ``position`` is maintained by the owning
    ``TreeIndex`` and is only meaningful while ``alive`` is true.
    """

    path: str
    depth: int
    leaf_name: str
    sibling_mask: int = 0
    position: int = field(default=-1, repr=False)
    alive: bool = field(default=True, repr=False)
    key: tuple[str, ...] = field(default=(), repr=False)

    @classmethod
    def for_path(cls, path: str) -> TreeEntry:
        """Build a detached entry with depth/leaf name derived from ``path``."""
        normalized = normalize_path(path)
        return cls(
            path=normalized,
            depth=path_depth(normalized),
            leaf_name=leaf_name_of(normalized),
            key=sort_key(normalized),
        )

    def has_sibling_bit(self, level: int) -> bool:
        """Return whether ``sibling_mask`` has the bit for ``level`` set."""
        return level >= 0 and bool(self.sibling_mask & (1 << level))


@dataclass(frozen=True)
class RemovalEvent:
    """Notification for one entry about to leave the index.

    ``prev``/``next`` are the nearest surviving neighbors around the removed
    run, still linked when the hook fires.
    """

    entry: TreeEntry
    prev: TreeEntry | None
    next: TreeEntry | None


ChangeHook = Callable[[RemovalEvent], None]


@dataclass(frozen=True)
class RescanResult:
    """Structural diff produced by one ``TreeIndex.rescan`` call."""

    path: str
    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    error: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)
