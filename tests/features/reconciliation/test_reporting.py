"""Tests for difference report lines."""

from __future__ import annotations

from mp3repair.features.metadata.domain.models import Source, TagFields, TrackMetadata
from mp3repair.features.metadata.usecases.differences import ExternalValues, find_differences
from mp3repair.features.reconciliation.usecases.reporting import (
    CORRUPTED,
    NO_METADATA,
    NOT_READ,
    describe_differences,
    unreadable_reason,
)
from mp3repair.features.tags.domain.errors import (
    NO_ID3V1_METADATA,
    NO_ID3V2_METADATA,
    TRACK_NUMBER_NOT_DIGIT,
)


def test_lines_follow_field_order_with_v1_first() -> None:
    metadata = TrackMetadata()
    metadata.set_fields(Source.V1, TagFields(artist="Band", album="Old", title="Sng", track_number=3))
    metadata.set_fields(
        Source.V2,
        TagFields(artist="Band", album="Old", title="Sng", track_number=3, genre="Jazz", mcdi=b"\x01"),
    )

    _ = find_differences(
        metadata,
        ExternalValues(
            artist="Band",
            album="New",
            title="Song",
            track_number=4,
            genre="Rock",
            mcdi=b"\x02",
        ),
    )

    assert describe_differences(metadata) == [
        "ID3V1 metadata [3] does not agree with track number 4",
        "ID3V2 metadata [3] does not agree with track number 4",
        'ID3V1 metadata [Sng] does not agree with track name "Song"',
        'ID3V2 metadata [Sng] does not agree with track name "Song"',
        'ID3V1 metadata [Old] does not agree with album name "New"',
        'ID3V2 metadata [Old] does not agree with album name "New"',
        'ID3V1 metadata [] does not agree with album genre "Rock"',
        'ID3V2 metadata [Jazz] does not agree with album genre "Rock"',
        'ID3V2 metadata [01] does not agree with the MCDI frame "02"',
    ]


def test_clean_track_has_no_lines() -> None:
    metadata = TrackMetadata()
    metadata.set_fields(Source.V2, TagFields(title="Song", track_number=1))
    metadata.set_error(Source.V1, NO_ID3V1_METADATA)

    assert describe_differences(metadata) == []


def test_unreadable_reasons() -> None:
    missing = TrackMetadata()
    missing.set_error(Source.V1, NO_ID3V1_METADATA)
    missing.set_error(Source.V2, NO_ID3V2_METADATA)
    corrupted = TrackMetadata()
    corrupted.set_error(Source.V1, NO_ID3V1_METADATA)
    corrupted.set_error(Source.V2, TRACK_NUMBER_NOT_DIGIT)

    assert unreadable_reason(None) == NOT_READ
    assert unreadable_reason(missing) == NO_METADATA
    assert unreadable_reason(corrupted) == CORRUPTED
    assert unreadable_reason(TrackMetadata()) is None
