"""
Summary: Check or repair every track of a scanned library.
Why: Reads fan out over a bounded pool; every write waits for reads and consensus to finish.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from mp3repair.config.settings import MAX_OPEN_FILES, clamp_max_open_files
from mp3repair.features.backup.usecases.backup import BackupError, backup_track
from mp3repair.features.library.domain.models import Library, Track
from mp3repair.features.metadata.domain.models import SOURCES, Source, TrackMetadata
from mp3repair.features.metadata.usecases.consensus import resolve_library
from mp3repair.features.metadata.usecases.differences import (
    Conflicts,
    ExternalValues,
    find_differences,
)
from mp3repair.features.metadata.usecases.loader import load_metadata
from mp3repair.features.reconciliation.domain.models import (
    MISSING_TAG_CAUSES,
    ReconcileSummary,
    RepairResult,
    TrackAssessment,
    TrackStatus,
)
from mp3repair.features.reconciliation.usecases.reporting import (
    describe_differences,
    unreadable_reason,
)
from mp3repair.features.state.usecases.dirty import DirtyState
from mp3repair.features.tags.adapters.tag_file import write_tags
from mp3repair.features.tags.domain.errors import TagError
from mp3repair.platform.logging import ReconcileEvent, logger

MetadataLoader = Callable[[Path], TrackMetadata]
ProgressCallback = Callable[[Track], None]


class Reconciler:
    """Check or repair every track of a library against its directory layout."""

    def __init__(
        self,
        library: Library,
        *,
        max_open_files: int = MAX_OPEN_FILES,
        loader: MetadataLoader = load_metadata,
    ) -> None:
        self.library = library
        self.max_open_files = clamp_max_open_files(max_open_files)
        self._loader = loader
        self._resolved = False

    # Reading -----------------------------------------------------------------

    def _load(self, track: Track) -> TrackMetadata:
        return self._loader(track.path)

    def read_metadata(self, progress: ProgressCallback | None = None) -> None:
        """Load metadata for every track not yet loaded, then resolve consensus."""

        pending = [track for track in self.library.tracks if track.metadata is None]
        if pending:
            with ThreadPoolExecutor(max_workers=self.max_open_files) as pool:
                for track, metadata in zip(pending, pool.map(self._load, pending), strict=True):
                    track.metadata = metadata
                    if progress is not None:
                        progress(track)
        self._report_read_errors(pending)
        resolve_library(self.library)
        self._resolved = True

    def _report_read_errors(self, tracks: list[Track]) -> None:
        for track in tracks:
            metadata = track.metadata
            if metadata is None:
                continue
            for source in SOURCES:
                cause = metadata.error_cause[source]
                if not cause:
                    continue
                if cause in MISSING_TAG_CAUSES:
                    logger.debug("%s: %s", track.path, cause)
                    continue
                logger.error(
                    "Could not read %s metadata from %s: %s",
                    source.label,
                    track.path,
                    cause,
                    extra={
                        "event": ReconcileEvent.TRACK_READ_ERROR,
                        "path": str(track.path),
                        "base_path": str(self.library.root),
                        "error_message": f"{source.label}: {cause}",
                    },
                )

    # Comparison --------------------------------------------------------------

    def external_values(self, track: Track) -> ExternalValues:
        album = self.library.album_of(track)
        artist = self.library.artist_of(album)
        return ExternalValues(
            artist=artist.canonical_name,
            album=album.canonical_title,
            title=track.name,
            track_number=track.number,
            genre=album.canonical_genre,
            year=album.canonical_year,
            mcdi=album.canonical_mcdi,
        )

    def assess(self, track: Track) -> TrackAssessment:
        """Compare one track against its resolved canonical values."""

        metadata = track.metadata
        reason = unreadable_reason(metadata)
        if metadata is None or reason is not None:
            return TrackAssessment(
                track=track,
                status=TrackStatus.NO_METADATA,
                report=[reason] if reason else [],
            )
        conflicts: Conflicts = find_differences(metadata, self.external_values(track))
        if not metadata.requires_edit():
            status = TrackStatus.CLEAN
        elif metadata.error_causes():
            status = TrackStatus.PARTIAL_ERROR
        else:
            status = TrackStatus.NEEDS_EDIT
        return TrackAssessment(
            track=track,
            status=status,
            conflicts=conflicts,
            report=describe_differences(metadata),
        )

    def check(self, progress: ProgressCallback | None = None) -> ReconcileSummary:
        """Report mode: compare every track without touching any file."""

        if not self._resolved:
            self.read_metadata(progress)
        return ReconcileSummary(assessments=[self.assess(track) for track in self.library.tracks])

    # Repair ------------------------------------------------------------------

    def _repair_track(self, track: Track) -> RepairResult:
        metadata = track.metadata
        if metadata is None:
            return RepairResult(track=track, fixed=False, error="metadata has not been read")
        album = self.library.album_of(track)
        try:
            _ = backup_track(track.path, album.path)
        except BackupError as exc:
            logger.error(
                "%s",
                exc,
                extra={
                    "event": ReconcileEvent.BACKUP_FAILED,
                    "path": str(track.path),
                    "base_path": str(self.library.root),
                    "error_message": str(exc),
                },
            )
            return RepairResult(track=track, fixed=False, error=str(exc))
        try:
            _ = write_tags(
                track.path,
                id3v1_edits=metadata.edits_for(Source.V1),
                id3v2_edits=metadata.edits_for(Source.V2),
            )
        except TagError as exc:
            logger.error(
                "Failed to repair %s: %s",
                track.path,
                exc,
                extra={
                    "event": ReconcileEvent.TRACK_FAILED,
                    "path": str(track.path),
                    "base_path": str(self.library.root),
                    "error_message": str(exc),
                },
            )
            return RepairResult(track=track, fixed=False, error=str(exc))
        logger.info(
            "Repaired %s",
            track.path,
            extra={
                "event": ReconcileEvent.TRACK_FIXED,
                "path": str(track.path),
                "base_path": str(self.library.root),
            },
        )
        return RepairResult(track=track, fixed=True)

    def repair(
        self,
        marker: DirtyState,
        *,
        dry_run: bool = False,
        progress: ProgressCallback | None = None,
    ) -> ReconcileSummary:
        """Repair mode: back up and rewrite every track whose tags disagree."""

        summary = self.check(progress)
        summary.dry_run = dry_run
        if dry_run:
            return summary
        for assessment in summary.needing_edit:
            summary.repairs.append(self._repair_track(assessment.track))
        if summary.fixed:
            try:
                marker.mark()
            except OSError as exc:
                logger.error("Could not mark metadata dirty: %s", exc)
            else:
                logger.debug(
                    "Marked metadata dirty",
                    extra={"event": ReconcileEvent.DIRTY_MARKED},
                )
        return summary


__all__ = ["MetadataLoader", "ProgressCallback", "Reconciler"]
