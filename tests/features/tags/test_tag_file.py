"""Tests for reading and atomically rewriting tag regions of a file."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from mp3_builders import (
    AUDIO,
    audio_region,
    build_id3v1,
    build_id3v2,
    text_frames,
    v2_tag_length,
    write_mp3,
)
from mp3repair.features.tags.adapters.tag_file import atomic_write, read_tags, write_tags
from mp3repair.features.tags.domain.edits import TagEdits
from mp3repair.features.tags.domain.errors import (
    NO_ID3V1_METADATA,
    NO_ID3V2_METADATA,
    FileOpenError,
    FileRenameError,
    TagMalformedError,
    TagMissingError,
)
from mp3repair.features.tags.domain.id3v2 import read_view


@pytest.fixture
def tagged_file(tmp_path: Path) -> Path:
    return write_mp3(
        tmp_path / "01 Song.mp3",
        v2=build_id3v2(text_frames(title="Song", artist="Band", track="1"), padding=24),
        v1=build_id3v1(title="Song", artist="Band", track=1, comment="note"),
    )


def test_read_tags_reads_both_regions(tagged_file: Path) -> None:
    tags = read_tags(tagged_file)

    assert tags.id3v1 is not None and tags.id3v1.title == "Song"
    assert tags.id3v2 is not None and read_view(tags.id3v2).artist == "Band"
    start, end = tags.payload_range
    assert tagged_file.read_bytes()[start:end] == AUDIO


def test_read_tags_without_tags_records_missing_causes(tmp_path: Path) -> None:
    tags = read_tags(write_mp3(tmp_path / "bare.mp3"))

    assert tags.id3v1 is None and tags.id3v2 is None
    assert isinstance(tags.id3v1_error, TagMissingError)
    assert str(tags.id3v1_error) == NO_ID3V1_METADATA
    assert str(tags.id3v2_error) == NO_ID3V2_METADATA


def test_read_tags_tiny_file(tmp_path: Path) -> None:
    path = tmp_path / "tiny.mp3"
    _ = path.write_bytes(b"ID")

    tags = read_tags(path)

    assert str(tags.id3v2_error) == NO_ID3V2_METADATA
    assert str(tags.id3v1_error) == NO_ID3V1_METADATA


def test_read_tags_keeps_v1_when_v2_is_malformed(tmp_path: Path) -> None:
    bad_v2 = b"ID3\x02\x00\x00\x00\x00\x00\x00"
    path = write_mp3(tmp_path / "bad.mp3", v2=bad_v2, v1=build_id3v1(title="Fine"))

    tags = read_tags(path)

    assert isinstance(tags.id3v2_error, TagMalformedError)
    assert tags.id3v1 is not None and tags.id3v1.title == "Fine"


def test_read_tags_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileOpenError):
        _ = read_tags(tmp_path / "absent.mp3")


def test_write_tags_without_edits_leaves_file_identical(tagged_file: Path) -> None:
    before = tagged_file.read_bytes()

    assert write_tags(tagged_file) is False
    assert write_tags(tagged_file, id3v1_edits=TagEdits(), id3v2_edits=TagEdits()) is False
    assert tagged_file.read_bytes() == before


def test_write_tags_preserves_audio_and_mode(tagged_file: Path) -> None:
    os.chmod(tagged_file, 0o640)
    before = tagged_file.read_bytes()

    changed = write_tags(
        tagged_file,
        id3v1_edits=TagEdits(title="A much longer replacement title", track_number=2),
        id3v2_edits=TagEdits(title="A much longer replacement title", track_number=2),
    )

    after = tagged_file.read_bytes()
    assert changed is True
    assert audio_region(after, v2_tag_length(after), True) == audio_region(
        before, v2_tag_length(before), True
    )
    tags = read_tags(tagged_file)
    assert tags.id3v1 is not None
    assert tags.id3v1.read_track() == (2, True)
    assert tags.id3v1.comment == "note"
    assert tags.id3v2 is not None
    assert read_view(tags.id3v2).track_number == 2
    assert stat.S_IMODE(tagged_file.stat().st_mode) == 0o640
    assert [entry.name for entry in tagged_file.parent.iterdir()] == [tagged_file.name]


def test_write_tags_keeps_unreadable_v2_inside_payload(tmp_path: Path) -> None:
    bad_v2 = b"ID3\x02\x00\x00\x00\x00\x00\x00"
    path = write_mp3(tmp_path / "bad.mp3", v2=bad_v2, v1=build_id3v1(title="Old"))

    assert write_tags(path, id3v1_edits=TagEdits(title="New"), id3v2_edits=TagEdits(title="New"))

    data = path.read_bytes()
    assert data.startswith(bad_v2 + AUDIO)
    tags = read_tags(path)
    assert tags.id3v1 is not None and tags.id3v1.title == "New"


def test_write_tags_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileOpenError):
        _ = write_tags(tmp_path / "absent.mp3", id3v1_edits=TagEdits(title="x"))


def test_atomic_write_failure_removes_temp_file(tagged_file: Path, mocker: MockerFixture) -> None:
    before = tagged_file.read_bytes()
    _ = mocker.patch(
        "mp3repair.features.tags.adapters.tag_file.os.replace",
        side_effect=OSError(18, "Invalid cross-device link"),
    )

    with pytest.raises(FileRenameError, match="Invalid cross-device link"):
        atomic_write(tagged_file, b"replacement")

    assert tagged_file.read_bytes() == before
    assert [entry.name for entry in tagged_file.parent.iterdir()] == [tagged_file.name]
