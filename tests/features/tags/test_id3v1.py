"""Tests for the ID3v1 trailer codec."""

from __future__ import annotations

import pytest

from mp3_builders import build_id3v1
from mp3repair.features.tags.domain.edits import TagEdits
from mp3repair.features.tags.domain.errors import NO_ID3V1_METADATA, TagMalformedError, TagMissingError
from mp3repair.features.tags.domain.id3v1 import ID3v1Tag, leading_year

REFERENCE_TAG = build_id3v1(
    title="Ringo - Pop Profile [Interview",
    artist="The Beatles",
    album="On Air: Live At The BBC, Volum",
    year="2013",
    track=29,
    genre=12,
)


def test_parse_reference_tag_diagnostics() -> None:
    """A pure ID3v1 tag renders exactly six diagnostic lines."""

    tag = ID3v1Tag.parse(REFERENCE_TAG)

    assert tag.diagnostics() == [
        'Artist: "The Beatles"',
        'Album: "On Air: Live At The BBC, Volum"',
        'Title: "Ringo - Pop Profile [Interview"',
        "Track: 29",
        'Year: "2013"',
        'Genre: "Other"',
    ]


def test_parse_round_trips_bytes() -> None:
    raw = build_id3v1(title="Song", artist="Band", comment="ripped", track=3, genre=17)

    assert ID3v1Tag.parse(raw).to_bytes() == raw


def test_parse_rejects_missing_marker() -> None:
    with pytest.raises(TagMissingError, match=NO_ID3V1_METADATA):
        _ = ID3v1Tag.parse(b"\x00" * 128)


def test_constructor_rejects_wrong_length() -> None:
    with pytest.raises(TagMalformedError):
        _ = ID3v1Tag(b"TAG")


def test_trailing_spaces_and_nuls_end_strings() -> None:
    raw = bytearray(build_id3v1())
    raw[3:33] = b"Padded   ".ljust(30, b" ")
    raw[33:63] = b"Artist\x00garbage".ljust(30, b"\x00")

    tag = ID3v1Tag.parse(bytes(raw))

    assert tag.title == "Padded"
    assert tag.artist == "Artist"


def test_read_track_requires_zero_byte() -> None:
    raw = bytearray(build_id3v1(track=7))
    assert ID3v1Tag.parse(bytes(raw)).read_track() == (7, True)

    raw[125] = 0x41
    assert ID3v1Tag.parse(bytes(raw)).read_track() == (0, False)

    assert ID3v1Tag.parse(build_id3v1(track=0)).read_track() == (0, False)


def test_read_genre_and_year() -> None:
    tag = ID3v1Tag.parse(build_id3v1(year="1968", genre=17))
    assert tag.read_genre() == ("Rock", True)
    assert tag.read_year() == (1968, True)

    unknown = ID3v1Tag.parse(build_id3v1(year="19x8", genre=250))
    assert unknown.read_genre() == ("", False)
    assert unknown.read_year() == (0, False)


@pytest.mark.parametrize("track", [0, 256, -1])
def test_set_track_out_of_range_leaves_bytes_untouched(track: int) -> None:
    raw = build_id3v1(track=29)
    tag = ID3v1Tag.parse(raw)

    assert tag.set_track(track) is False
    assert tag.to_bytes() == raw


def test_set_year_bounds() -> None:
    tag = ID3v1Tag.parse(build_id3v1(year="2001"))

    assert tag.set_year(999) is False
    assert tag.year == "2001"
    assert tag.set_year(1999) is True
    assert tag.year == "1999"


def test_set_genre_is_case_insensitive_and_knows_r_and_b() -> None:
    tag = ID3v1Tag.parse(build_id3v1())

    assert tag.set_genre("classic rock") is True
    assert tag.read_genre() == ("Classic Rock", True)
    assert tag.set_genre("R&B") is True
    assert tag.read_genre() == ("Rhythm and Blues", True)
    assert tag.set_genre("Not A Genre") is False


def test_set_title_truncates_and_transliterates() -> None:
    tag = ID3v1Tag.parse(build_id3v1())

    tag.set_title("A" * 40)
    assert tag.title == "A" * 30

    tag.set_artist("Café Ωmega")
    assert tag.artist == "Café Omega"


def test_apply_edits_falls_back_to_other_genre_and_keeps_comment() -> None:
    tag = ID3v1Tag.parse(build_id3v1(comment="keep me", genre=17))

    tag.apply_edits(
        TagEdits(title="New", genre="Shoegaze Deluxe", year="1994 (remaster)", track_number=4)
    )

    assert tag.title == "New"
    assert tag.read_genre() == ("Other", True)
    assert tag.year == "1994"
    assert tag.read_track() == (4, True)
    assert tag.comment == "keep me"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1968", 1968), (" 2004-05-01", 2004), ("68", None), ("", None), ("abcd", None)],
)
def test_leading_year(value: str, expected: int | None) -> None:
    assert leading_year(value) == expected
