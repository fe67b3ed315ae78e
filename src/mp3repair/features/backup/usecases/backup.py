"""
Summary: Copy tracks aside before their tags are rewritten, and delete those copies later.
Why: A repair must be reversible until the user confirms the result with postrepair.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from mp3repair.config.settings import BACKUP_DIR_NAME
from mp3repair.platform.filesystem import ensure_directory, remove_tree
from mp3repair.platform.logging import ReconcileEvent, logger


class BackupError(Exception):
    """Raised when a track cannot be copied into its album's backup directory."""

    def __init__(self, source: Path, error: OSError) -> None:
        super().__init__(f"BackupFailed error for {source}: {error.strerror or error}")
        self.source: Path = source


def backup_directory(album_path: Path) -> Path:
    return album_path / BACKUP_DIR_NAME


def backup_track(track_path: Path, album_path: Path) -> Path:
    """Copy ``track_path`` to ``<album>/pre-repair-backup/<name>``, replacing older copies."""

    destination = backup_directory(album_path) / track_path.name
    try:
        _ = ensure_directory(destination.parent)
        _ = shutil.copy2(track_path, destination)
    except OSError as exc:
        raise BackupError(track_path, exc) from exc
    logger.debug(
        "Backed up %s to %s",
        track_path,
        destination,
        extra={
            "event": ReconcileEvent.BACKUP_CREATED,
            "path": str(track_path),
            "destination": str(destination),
        },
    )
    return destination


@dataclass(slots=True)
class CleanupResult:
    """Outcome of deleting one album's backup directory."""

    album_path: Path
    deleted: bool
    error: str | None = None


def cleanup_album(album_path: Path) -> CleanupResult:
    """Delete the album's backup directory; a missing directory is not an error."""

    directory = backup_directory(album_path)
    try:
        deleted = remove_tree(directory)
    except OSError as exc:
        logger.error(
            "Could not delete %s: %s",
            directory,
            exc,
            extra={
                "event": ReconcileEvent.BACKUP_DELETE_FAILED,
                "path": str(directory),
                "error_message": str(exc),
            },
        )
        return CleanupResult(album_path=album_path, deleted=False, error=str(exc))
    if deleted:
        logger.info(
            "Deleted %s",
            directory,
            extra={"event": ReconcileEvent.BACKUP_DELETED, "path": str(directory)},
        )
    return CleanupResult(album_path=album_path, deleted=deleted)


__all__ = ["BackupError", "CleanupResult", "backup_directory", "backup_track", "cleanup_album"]
