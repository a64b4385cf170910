"""Filesystem side effects triggered from the tree view.

Every operation raises ``ExternalOperationFailure`` with a user-facing
message instead of leaking ``OSError``.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import structlog

from ..errors import ExternalOperationFailure

logger = structlog.get_logger(__name__)


class FileOperations:
    """Copy, move, delete, and chdir collaborator for ``TreeCommands``."""

    def copy_dir(self, source: str, destination: str) -> str:
        """Copy ``source`` recursively; return the created directory path.

        When ``destination`` is an existing directory the copy is placed
        inside it under the source's name.
        """
        target = Path(destination)
        if target.is_dir():
            target = target / Path(source).name
        try:
            shutil.copytree(source, target, symlinks=True)
        except (OSError, shutil.Error) as exc:
            raise ExternalOperationFailure(f"Cannot copy {source} to {target}: {exc}") from exc
        logger.info("directory_copied", source=source, target=str(target))
        return str(target)

    def move_dir(self, source: str, destination: str) -> str:
        """Move ``source`` into the existing directory ``destination``."""
        if not Path(destination).is_dir():
            raise ExternalOperationFailure(f"Destination must be a directory: {destination}")
        try:
            moved = shutil.move(source, destination)
        except (OSError, shutil.Error) as exc:
            raise ExternalOperationFailure(f"Cannot move {source} to {destination}: {exc}") from exc
        logger.info("directory_moved", source=source, target=str(moved))
        return str(moved)

    def delete_dir(self, path: str) -> None:
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise ExternalOperationFailure(f"Cannot delete {path}: {exc.strerror or exc}") from exc
        logger.info("directory_deleted", path=path)

    def change_directory(self, path: str) -> None:
        try:
            os.chdir(path)
        except OSError as exc:
            raise ExternalOperationFailure(f"Cannot chdir to {path}: {exc.strerror or exc}") from exc
        logger.info("directory_changed", path=path)
