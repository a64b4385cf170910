"""Exception kinds raised by index persistence and external collaborators.

Navigation never raises for "nothing to do": moves return step counts and
searches return booleans. These types cover the failures that cross module
boundaries and are turned into user-facing messages at dispatch time.
"""

from __future__ import annotations

from pathlib import Path


class LazyTreeError(Exception):
    """Base class for all lazytree errors."""


class IndexLoadError(LazyTreeError):
    """Persisted directory cache is missing, unreadable, or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot load directory cache {path}: {reason}")
        self.path = path
        self.reason = reason


class IndexSaveError(LazyTreeError):
    """Persisted directory cache could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot open the {path} file for writing:\n{reason}")
        self.path = path
        self.reason = reason


class IndexInvariantError(LazyTreeError):
    """Ordering or uniqueness invariant of a ``TreeIndex`` is broken."""


class ExternalOperationFailure(LazyTreeError):
    """Copy/move/delete/chdir collaborator failed; message is user-facing."""
