"""
Summary: Lay out artists, albums and tracks as indented listing lines.
Why: The list command shows any combination of the three levels, with optional annotations and details.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from mp3repair.features.library.domain.models import Album, Artist, Library, Track
from mp3repair.features.tags.domain.text import quote

INDENT_STEP = 2

DetailsReader = Callable[[Path], dict[str, str]]


class ListingError(Exception):
    """Raised when the listing options cannot produce a listing."""


class TrackSort(StrEnum):
    NUMBER = "number"
    TITLE = "title"


@dataclass(frozen=True, slots=True)
class ListingOptions:
    """Which levels to show and how to present tracks."""

    artists: bool = True
    albums: bool = True
    tracks: bool = True
    annotate: bool = False
    sort: TrackSort = TrackSort.NUMBER
    details: bool = False

    def validate(self) -> None:
        if not (self.artists or self.albums or self.tracks):
            raise ListingError("nothing to list: artists, albums and tracks are all hidden")
        if self.tracks and self.sort is TrackSort.NUMBER and not self.albums:
            raise ListingError("sorting tracks by number requires albums to be listed")


@dataclass(frozen=True, slots=True)
class ListingLine:
    indent: int
    text: str


class LibraryListing:
    """Produce listing lines for a scanned library."""

    def __init__(
        self,
        library: Library,
        options: ListingOptions,
        details_reader: DetailsReader | None = None,
    ) -> None:
        options.validate()
        if options.details and details_reader is None:
            raise ListingError("track details were requested without a way to read them")
        self.library = library
        self.options = options
        self.details_reader = details_reader

    def lines(self) -> list[ListingLine]:
        """Return every line of the listing in display order."""

        lines: list[ListingLine] = []
        if self.options.artists:
            for artist in sorted(self.library.artists, key=lambda item: item.name):
                lines.append(ListingLine(0, f"Artist: {artist.name}"))
                self._albums(lines, self.library.albums_of(artist), INDENT_STEP)
        else:
            self._albums(lines, self.library.albums, 0)
        return lines

    # Albums ------------------------------------------------------------------

    def album_label(self, album: Album) -> str:
        if self.options.annotate and not self.options.artists:
            artist: Artist = self.library.artist_of(album)
            return f"{quote(album.name)} by {quote(artist.name)}"
        return album.name

    def _albums(self, lines: list[ListingLine], albums: Iterable[Album], indent: int) -> None:
        if not self.options.albums:
            tracks = [track for album in albums for track in self.library.tracks_of(album)]
            self._tracks(lines, tracks, indent)
            return
        for label, album in sorted(
            ((self.album_label(album), album) for album in albums), key=lambda pair: pair[0]
        ):
            lines.append(ListingLine(indent, f"Album: {label}"))
            self._tracks(lines, self.library.tracks_of(album), indent + INDENT_STEP)

    # Tracks ------------------------------------------------------------------

    def track_label(self, track: Track) -> str:
        if not self.options.annotate or self.options.albums:
            return track.name
        album = self.library.album_of(track)
        label = f"{quote(track.name)} on {quote(album.name)}"
        if not self.options.artists:
            label += f" by {quote(self.library.artist_of(album).name)}"
        return label

    def _tracks(self, lines: list[ListingLine], tracks: list[Track], indent: int) -> None:
        if not self.options.tracks:
            return
        if self.options.sort is TrackSort.NUMBER:
            for track in sorted(tracks, key=lambda item: (item.number, item.name)):
                lines.append(ListingLine(indent, f"{track.number:2d}. {track.name}"))
                self._details(lines, track, indent + INDENT_STEP)
            return
        for label, track in sorted(
            ((self.track_label(track), track) for track in tracks), key=lambda pair: pair[0]
        ):
            lines.append(ListingLine(indent, label))
            self._details(lines, track, indent + INDENT_STEP)

    def _details(self, lines: list[ListingLine], track: Track, indent: int) -> None:
        if not self.options.details or self.details_reader is None:
            return
        details = self.details_reader(track.path)
        if not details:
            return
        lines.append(ListingLine(indent, "Details:"))
        for name in sorted(details):
            lines.append(ListingLine(indent + INDENT_STEP, f"{name} = {quote(details[name])}"))


__all__ = [
    "DetailsReader",
    "LibraryListing",
    "ListingError",
    "ListingLine",
    "ListingOptions",
    "TrackSort",
]
