"""
Summary: Structured event identifiers attached to log records as ``event`` extras.
Why: The console handler styles records by event instead of parsing message text.
"""

from __future__ import annotations

from enum import StrEnum


class ReconcileEvent(StrEnum):
    """Structured event identifiers for metadata checks and repairs."""

    TRACK_READ_ERROR = "reconcile.track.read_error"
    NO_CONSENSUS = "reconcile.consensus.ambiguous"
    TRACK_FIXED = "repair.track.fixed"
    TRACK_FAILED = "repair.track.failed"
    BACKUP_CREATED = "repair.backup.created"
    BACKUP_FAILED = "repair.backup.failed"
    DIRTY_MARKED = "repair.dirty.marked"
    BACKUP_DELETED = "postrepair.backup.deleted"
    BACKUP_DELETE_FAILED = "postrepair.backup.error"
    DIRTY_CLEARED = "reset.dirty.cleared"
    STATE_UNAVAILABLE = "state.dirty.unavailable"


__all__ = ["ReconcileEvent"]
