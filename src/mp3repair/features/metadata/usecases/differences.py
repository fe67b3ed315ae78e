"""
Summary: Compare stored tag values against names implied by the library layout.
Why: Each dialect has its own equality rules; differing fields receive corrections.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from mp3repair.features.metadata.domain.models import SOURCES, Source, TrackMetadata
from mp3repair.features.tags.domain.genres import OTHER_GENRE
from mp3repair.features.tags.domain.id3v1 import NAME_LENGTH
from mp3repair.features.tags.domain.text import is_illegal_in_filenames, to_latin1

_YEAR_ANNOTATION: Final[re.Pattern[str]] = re.compile(r"\s*\([^()]*\)\s*$")


def _runes_match(external: str, metadata: str) -> bool:
    if external == metadata:
        return True
    if len(external) != len(metadata):
        return False
    return all(
        expected == actual or is_illegal_in_filenames(actual)
        for expected, actual in zip(external, metadata, strict=True)
    )


def id3v2_names_match(external: str, metadata: str) -> bool:
    """Case-insensitive match that lets filename-illegal metadata characters match anything."""

    return _runes_match(external.lower(), metadata.lower().rstrip(" "))


def id3v1_names_match(external: str, metadata: str) -> bool:
    """Like ``id3v2_names_match`` but against what an ID3v1 field can hold."""

    folded = to_latin1(external).lower()[:NAME_LENGTH].rstrip(" ")
    return _runes_match(folded, metadata.lower().rstrip(" "))


def id3v1_genres_match(external: str, metadata: str) -> bool:
    if metadata.lower() == OTHER_GENRE.lower():
        return True
    return external.lower() == metadata.lower()


def id3v2_genres_match(external: str, metadata: str) -> bool:
    return external == metadata


def _strip_year_annotation(year: str) -> str:
    return _YEAR_ANNOTATION.sub("", year)


def years_match(metadata_year: str, external_year: str) -> bool:
    """Lenient year equality: ``"1968"`` matches ``"1968 (2018)"`` but not ``""``."""

    if not metadata_year or not external_year:
        return not metadata_year and not external_year
    stored = _strip_year_annotation(metadata_year)
    expected = _strip_year_annotation(external_year)
    if not stored or not expected:
        return metadata_year == external_year
    return stored.startswith(expected) or expected.startswith(stored)


NameMatcher = Callable[[str, str], bool]

NAME_MATCHERS: Final[dict[Source, NameMatcher]] = {
    Source.V1: id3v1_names_match,
    Source.V2: id3v2_names_match,
}
GENRE_MATCHERS: Final[dict[Source, NameMatcher]] = {
    Source.V1: id3v1_genres_match,
    Source.V2: id3v2_genres_match,
}


@dataclass(frozen=True, slots=True)
class ExternalValues:
    """Canonical values for one track; ``None`` skips the comparison for that field."""

    artist: str
    album: str
    title: str
    track_number: int
    genre: str | None = None
    year: str | None = None
    mcdi: bytes | None = None


def _readable_sources(metadata: TrackMetadata) -> list[Source]:
    return [source for source in SOURCES if not metadata.has_error(source)]


def _correct(metadata: TrackMetadata, source: Source, name: str, value: str | int | bytes) -> None:
    metadata.correct_field(source, name, value)
    metadata.set_edit_required(source)


def track_number_differs(metadata: TrackMetadata, number: int) -> bool:
    differs = False
    for source in _readable_sources(metadata):
        if metadata.original[source].track_number != number:
            _correct(metadata, source, "track_number", number)
            differs = True
    return differs


def _name_differs(metadata: TrackMetadata, name: str, field_name: str) -> bool:
    differs = False
    for source in _readable_sources(metadata):
        stored = getattr(metadata.original[source], field_name)
        if not NAME_MATCHERS[source](name, stored):
            _correct(metadata, source, field_name, name)
            differs = True
    return differs


def title_differs(metadata: TrackMetadata, title: str) -> bool:
    return _name_differs(metadata, title, "title")


def album_differs(metadata: TrackMetadata, album: str) -> bool:
    return _name_differs(metadata, album, "album")


def artist_differs(metadata: TrackMetadata, artist: str) -> bool:
    return _name_differs(metadata, artist, "artist")


def genre_differs(metadata: TrackMetadata, genre: str) -> bool:
    differs = False
    for source in _readable_sources(metadata):
        if not GENRE_MATCHERS[source](genre, metadata.original[source].genre):
            _correct(metadata, source, "genre", genre)
            differs = True
    return differs


def year_differs(metadata: TrackMetadata, year: str) -> bool:
    differs = False
    for source in _readable_sources(metadata):
        if not years_match(metadata.original[source].year, year):
            _correct(metadata, source, "year", year)
            differs = True
    return differs


def mcdi_differs(metadata: TrackMetadata, mcdi: bytes) -> bool:
    if metadata.has_error(Source.V2) or metadata.original.v2.mcdi == mcdi:
        return False
    _correct(metadata, Source.V2, "mcdi", mcdi)
    return True


@dataclass(slots=True)
class Conflicts:
    """Which fields disagreed in at least one readable tag."""

    track_number: bool = False
    title: bool = False
    album: bool = False
    artist: bool = False
    genre: bool = False
    year: bool = False
    mcdi: bool = False

    def any(self) -> bool:
        return (
            self.track_number
            or self.title
            or self.album
            or self.artist
            or self.genre
            or self.year
            or self.mcdi
        )


def find_differences(metadata: TrackMetadata, external: ExternalValues) -> Conflicts:
    """Run every comparison, filling in corrections and edit flags on ``metadata``."""

    conflicts = Conflicts(
        track_number=track_number_differs(metadata, external.track_number),
        title=title_differs(metadata, external.title),
        album=album_differs(metadata, external.album),
        artist=artist_differs(metadata, external.artist),
    )
    if external.genre is not None:
        conflicts.genre = genre_differs(metadata, external.genre)
    if external.year is not None:
        conflicts.year = year_differs(metadata, external.year)
    if external.mcdi is not None:
        conflicts.mcdi = mcdi_differs(metadata, external.mcdi)
    return conflicts


__all__ = [
    "Conflicts",
    "ExternalValues",
    "GENRE_MATCHERS",
    "NAME_MATCHERS",
    "album_differs",
    "artist_differs",
    "find_differences",
    "genre_differs",
    "id3v1_genres_match",
    "id3v1_names_match",
    "id3v2_genres_match",
    "id3v2_names_match",
    "mcdi_differs",
    "title_differs",
    "track_number_differs",
    "year_differs",
    "years_match",
]
