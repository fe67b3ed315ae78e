"""
Summary: Reset command clearing the marker that records a repair changed files.
Why: Downstream consumers rebuild from the library once the marker is set, then reset it.
"""

from __future__ import annotations

from typing import final

from mp3repair.features.state.usecases.dirty import open_dirty_marker
from mp3repair.platform.logging import ReconcileEvent, logger
from mp3repair.ui.cli.args.options import ResetArgs


@final
class ResetCommand:
    """Clear the dirty marker left by a repair."""

    def __init__(self, args: ResetArgs) -> None:
        self.args = args

    def execute(self) -> bool:
        """Remove the marker; return ``False`` when removal failed."""

        marker = open_dirty_marker(self.args.state_dir)
        if not marker.exists():
            logger.info("Metadata is not marked dirty; nothing to reset")
            return True
        try:
            _ = marker.clear()
        except OSError as exc:
            logger.error("Could not clear the dirty marker in %s: %s", self.args.state_dir, exc)
            return False
        logger.info(
            "Cleared dirty marker",
            extra={
                "event": ReconcileEvent.DIRTY_CLEARED,
                "path": str(self.args.state_dir),
            },
        )
        return True
