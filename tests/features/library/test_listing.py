"""Tests for building library listings."""

from __future__ import annotations

from pathlib import Path

import pytest

from mp3repair.features.library.domain.models import Library
from mp3repair.features.library.usecases.listing import (
    LibraryListing,
    ListingError,
    ListingOptions,
    TrackSort,
)


@pytest.fixture
def library(tmp_path: Path) -> Library:
    library = Library(tmp_path)
    zed = library.add_artist("Zed", tmp_path / "Zed")
    band = library.add_artist("Band", tmp_path / "Band")
    record = library.add_album(band, "Record", band.path / "Record")
    _ = library.add_track(record, 2, "Beta", record.path / "02 Beta.mp3")
    _ = library.add_track(record, 1, "Alpha", record.path / "01 Alpha.mp3")
    demo = library.add_album(zed, "Demo", zed.path / "Demo")
    _ = library.add_track(demo, 1, "Take", demo.path / "01 Take.mp3")
    return library


def _render(listing: LibraryListing) -> list[str]:
    return [" " * line.indent + line.text for line in listing.lines()]


def test_default_listing_is_a_sorted_tree(library: Library) -> None:
    assert _render(LibraryListing(library, ListingOptions())) == [
        "Artist: Band",
        "  Album: Record",
        "     1. Alpha",
        "     2. Beta",
        "Artist: Zed",
        "  Album: Demo",
        "     1. Take",
    ]


def test_hidden_artists_annotate_albums(library: Library) -> None:
    options = ListingOptions(artists=False, tracks=False, annotate=True)

    assert _render(LibraryListing(library, options)) == [
        'Album: "Demo" by "Zed"',
        'Album: "Record" by "Band"',
    ]


def test_tracks_only_sorted_by_title_with_annotations(library: Library) -> None:
    options = ListingOptions(artists=False, albums=False, annotate=True, sort=TrackSort.TITLE)

    assert _render(LibraryListing(library, options)) == [
        '"Alpha" on "Record" by "Band"',
        '"Beta" on "Record" by "Band"',
        '"Take" on "Demo" by "Zed"',
    ]


def test_artists_only(library: Library) -> None:
    options = ListingOptions(albums=False, tracks=False)

    assert _render(LibraryListing(library, options)) == ["Artist: Band", "Artist: Zed"]


@pytest.mark.parametrize(
    ("options", "message"),
    [
        (ListingOptions(artists=False, albums=False, tracks=False), "nothing to list"),
        (ListingOptions(albums=False), "requires albums"),
    ],
)
def test_invalid_options_raise(library: Library, options: ListingOptions, message: str) -> None:
    with pytest.raises(ListingError, match=message):
        _ = LibraryListing(library, options)


def test_details_require_a_reader(library: Library) -> None:
    with pytest.raises(ListingError, match="without a way to read them"):
        _ = LibraryListing(library, ListingOptions(details=True))


def test_details_follow_each_track(library: Library) -> None:
    def reader(path: Path) -> dict[str, str]:
        return {"Composer": "Someone", "Year": "1999"} if path.name == "02 Beta.mp3" else {}

    options = ListingOptions(artists=False, details=True)
    lines = _render(LibraryListing(library, options, details_reader=reader))

    assert lines[-4:] == [
        "   2. Beta",
        "    Details:",
        '      Composer = "Someone"',
        '      Year = "1999"',
    ]
