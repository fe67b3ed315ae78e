"""
Summary: Data structures describing the outcome of checking and repairing tracks.
Why: Reporting, display and exit codes all read one summary of per-track results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

from mp3repair.features.library.domain.models import Track
from mp3repair.features.metadata.usecases.differences import Conflicts
from mp3repair.features.tags.domain.errors import NO_ID3V1_METADATA, NO_ID3V2_METADATA

MISSING_TAG_CAUSES: Final[frozenset[str]] = frozenset({NO_ID3V1_METADATA, NO_ID3V2_METADATA})


class TrackStatus(StrEnum):
    """Classification of a track after its tags were compared."""

    NO_METADATA = "no-metadata"
    PARTIAL_ERROR = "partial-error"
    CLEAN = "clean"
    NEEDS_EDIT = "needs-edit"

    @property
    def repairable(self) -> bool:
        return self in (TrackStatus.PARTIAL_ERROR, TrackStatus.NEEDS_EDIT)


@dataclass(slots=True)
class TrackAssessment:
    """Differences found for one track."""

    track: Track
    status: TrackStatus
    conflicts: Conflicts = field(default_factory=Conflicts)
    report: list[str] = field(default_factory=list)

    @property
    def read_errors(self) -> list[str]:
        """Error causes other than a tag simply being absent."""

        metadata = self.track.metadata
        if metadata is None:
            return []
        return [cause for cause in metadata.error_causes() if cause not in MISSING_TAG_CAUSES]


@dataclass(slots=True)
class RepairResult:
    """Outcome of rewriting one track's tags."""

    track: Track
    fixed: bool
    error: str | None = None


@dataclass(slots=True)
class ReconcileSummary:
    """Everything a check or repair run produced."""

    assessments: list[TrackAssessment] = field(default_factory=list)
    repairs: list[RepairResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def needing_edit(self) -> list[TrackAssessment]:
        return [item for item in self.assessments if item.status.repairable]

    @property
    def without_metadata(self) -> list[TrackAssessment]:
        return [item for item in self.assessments if item.status is TrackStatus.NO_METADATA]

    @property
    def fixed(self) -> list[RepairResult]:
        return [result for result in self.repairs if result.fixed]

    @property
    def failed(self) -> list[RepairResult]:
        return [result for result in self.repairs if result.error is not None]

    @property
    def unreadable(self) -> list[TrackAssessment]:
        return [item for item in self.assessments if item.read_errors]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed) or bool(self.unreadable)


__all__ = [
    "MISSING_TAG_CAUSES",
    "ReconcileSummary",
    "RepairResult",
    "TrackAssessment",
    "TrackStatus",
]
