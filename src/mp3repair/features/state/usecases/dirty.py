"""
Summary: Sentinel file recording that a repair changed files since the last reset.
Why: Later read-only commands can tell that anything derived from tags is stale.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from mp3repair.config.settings import DIRTY_FILE_NAME
from mp3repair.platform.filesystem import ensure_directory
from mp3repair.platform.logging import ReconcileEvent, logger


class DirtyState(Protocol):
    """Operations every dirty marker offers."""

    def mark(self) -> None: ...

    def clear(self) -> bool: ...

    def exists(self) -> bool: ...


class DirtyMarker:
    """Zero-length ``metadata.dirty`` file inside the state directory."""

    def __init__(self, state_dir: Path) -> None:
        self.path: Path = state_dir / DIRTY_FILE_NAME

    def mark(self) -> None:
        _ = self.path.write_bytes(b"")

    def clear(self) -> bool:
        """Remove the marker; return whether one was present."""

        if not self.path.exists():
            return False
        self.path.unlink()
        return True

    def exists(self) -> bool:
        return self.path.is_file()


class NullDirtyMarker:
    """Stand-in used when the state directory is unusable; never dirty."""

    def mark(self) -> None:
        return None

    def clear(self) -> bool:
        return False

    def exists(self) -> bool:
        return False


def open_dirty_marker(state_dir: Path) -> DirtyState:
    """Return a marker rooted at ``state_dir``, degrading to a no-op on failure."""

    try:
        _ = ensure_directory(state_dir)
    except OSError as exc:
        logger.warning(
            "State directory %s is unavailable; dirty tracking is disabled: %s",
            state_dir,
            exc,
            extra={"event": ReconcileEvent.STATE_UNAVAILABLE, "path": str(state_dir)},
        )
        return NullDirtyMarker()
    return DirtyMarker(state_dir)


__all__ = ["DirtyMarker", "DirtyState", "NullDirtyMarker", "open_dirty_marker"]
