"""
Summary: Turn corrections recorded on a track into human-readable difference lines.
Why: Check output lists every disagreeing field in a stable order, ID3V1 before ID3V2.
"""

from __future__ import annotations

from typing import Final

from mp3repair.features.metadata.domain.models import SOURCES, Source, TrackMetadata
from mp3repair.features.reconciliation.domain.models import MISSING_TAG_CAUSES
from mp3repair.features.tags.domain.text import quote

NOT_READ: Final[str] = "differences cannot be determined: metadata has not been read"
NO_METADATA: Final[str] = "differences cannot be determined: the track file contains no metadata"
CORRUPTED: Final[str] = "differences cannot be determined: track metadata may be corrupted"

# (field, phrase) in report order
_NAMED_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("title", "track name"),
    ("album", "album name"),
    ("artist", "artist name"),
    ("genre", "album genre"),
    ("year", "album year"),
)


def unreadable_reason(metadata: TrackMetadata | None) -> str | None:
    """Explain why differences cannot be computed, or ``None`` when they can."""

    if metadata is None:
        return NOT_READ
    if metadata.is_valid():
        return None
    if set(metadata.error_causes()) <= MISSING_TAG_CAUSES:
        return NO_METADATA
    return CORRUPTED


def _disagreement(source: Source, original: object, subject: str) -> str:
    return f"{source.label} metadata [{original}] does not agree with {subject}"


def describe_differences(metadata: TrackMetadata) -> list[str]:
    """List one line per source and field whose correction is pending."""

    lines: list[str] = []
    for source in SOURCES:
        number = metadata.corrected[source].track_number
        if number is not None:
            lines.append(
                _disagreement(source, metadata.original[source].track_number, f"track number {number}")
            )
    for field_name, phrase in _NAMED_FIELDS:
        for source in SOURCES:
            value = getattr(metadata.corrected[source], field_name)
            if value is not None:
                original = getattr(metadata.original[source], field_name)
                lines.append(_disagreement(source, original, f"{phrase} {quote(value)}"))
    mcdi = metadata.corrected.v2.mcdi
    if mcdi is not None:
        lines.append(
            _disagreement(
                Source.V2,
                metadata.original.v2.mcdi.hex(),
                f"the MCDI frame {quote(mcdi.hex())}",
            )
        )
    return lines


__all__ = [
    "CORRUPTED",
    "NOT_READ",
    "NO_METADATA",
    "describe_differences",
    "unreadable_reason",
]
