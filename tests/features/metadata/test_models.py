"""Tests for the per-track metadata record."""

from __future__ import annotations

from mp3repair.features.metadata.domain.models import (
    FIELD_NAMES,
    Source,
    TagFields,
    TrackMetadata,
)
from mp3repair.features.tags.domain.edits import TagEdits


def _populated() -> TrackMetadata:
    metadata = TrackMetadata()
    metadata.set_fields(Source.V1, TagFields(artist="v1 artist", track_number=1))
    metadata.set_fields(Source.V2, TagFields(artist="v2 artist", track_number=2, mcdi=b"\x01"))
    return metadata


def test_canonical_source_prefers_v2() -> None:
    metadata = _populated()

    assert metadata.canonical_source is Source.V2
    assert metadata.is_valid()
    assert metadata.canonical_artist == "v2 artist"
    assert metadata.canonical_mcdi == b"\x01"


def test_canonical_source_falls_back_to_v1() -> None:
    metadata = _populated()
    metadata.set_error(Source.V2, "broken")

    assert metadata.canonical_source is Source.V1
    assert metadata.canonical_track_number == 1
    assert metadata.original.v2 == TagFields()


def test_no_readable_source_is_invalid() -> None:
    metadata = _populated()
    metadata.set_error(Source.V1, "first")
    metadata.set_error(Source.V2, "second")

    assert metadata.canonical_source is None
    assert not metadata.is_valid()
    assert metadata.error_causes() == ["first", "second"]
    assert metadata.canonical_artist == ""


def test_edits_only_for_sources_requiring_edit() -> None:
    metadata = _populated()
    metadata.correct_field(Source.V1, "artist", "fixed")
    metadata.set_edit_required(Source.V1)

    assert metadata.requires_edit()
    assert metadata.edits_for(Source.V1) == TagEdits(artist="fixed")
    assert metadata.edits_for(Source.V2) is None


def test_field_names_cover_every_tag_field() -> None:
    assert FIELD_NAMES == ("artist", "album", "title", "genre", "year", "track_number", "mcdi")
    assert Source.V1.label == "ID3V1"
    assert Source.V2.label == "ID3V2"
