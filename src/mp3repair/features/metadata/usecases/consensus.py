"""
Summary: Pick album and artist canonical values by plurality vote across tracks.
Why: A single stray tag must not override what the rest of an album agrees on.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass

from mp3repair.features.library.domain.models import Album, Artist, Library, Track
from mp3repair.features.metadata.domain.models import TrackMetadata
from mp3repair.features.metadata.usecases.differences import NAME_MATCHERS
from mp3repair.platform.logging import logger
from mp3repair.platform.logging.events import ReconcileEvent


@dataclass(frozen=True, slots=True)
class Choice[K: Hashable]:
    """Result of a vote; ``selected`` is false when no value has a plurality."""

    value: K | None
    selected: bool


def plurality_choice[K: Hashable](candidates: Mapping[K, int]) -> Choice[K]:
    """Return the value with strictly more votes than every other one.

    An empty candidate map selects nothing in particular, and is not ambiguous.
    """

    if not candidates:
        return Choice(value=None, selected=True)
    ranked = Counter(candidates).most_common(2)
    if len(ranked) > 1 and ranked[0][1] == ranked[1][1]:
        return Choice(value=None, selected=False)
    return Choice(value=ranked[0][0], selected=True)


def _instances(count: int) -> str:
    return "1 instance" if count == 1 else f"{count} instances"


def format_candidates[K: Hashable](
    candidates: Mapping[K, int], render: Callable[[K], str] = str
) -> str:
    """Render ``{"a": 2 instances, "b": 1 instance}`` with keys in sorted order."""

    entries = sorted(
        f'"{render(key)}": {_instances(count)}' for key, count in candidates.items()
    )
    return "{" + ", ".join(entries) + "}"


def report_ambiguity[K: Hashable](
    field: str,
    context: str,
    candidates: Mapping[K, int],
    render: Callable[[K], str] = str,
) -> None:
    logger.warning(
        "There are multiple %s fields for %s, and there is no unambiguously preferred choice; candidates are %s.",
        field,
        context,
        format_candidates(candidates, render),
        extra={
            "event": ReconcileEvent.NO_CONSENSUS,
            "field": field,
            "context": context,
        },
    )


def _valid_metadata(tracks: Iterable[Track]) -> list[TrackMetadata]:
    return [
        track.metadata
        for track in tracks
        if track.metadata is not None and track.metadata.is_valid()
    ]


def _canonical_name_matches(metadata: TrackMetadata, name: str, stored: str) -> bool:
    source = metadata.canonical_source
    return source is not None and NAME_MATCHERS[source](name, stored)


def _is_genre_candidate(genre: str) -> bool:
    folded = genre.lower()
    return bool(folded) and not folded.startswith("unknown")


def resolve_artist(library: Library, artist: Artist) -> None:
    """Set the artist's canonical name from its tracks' canonical artist values."""

    names: Counter[str] = Counter()
    for metadata in _valid_metadata(library.tracks_of_artist(artist)):
        if _canonical_name_matches(metadata, artist.name, metadata.canonical_artist):
            names[metadata.canonical_artist] += 1
    choice = plurality_choice(names)
    if not choice.selected:
        report_ambiguity("artist name", f'"{artist.name}"', names)
        return
    if choice.value:
        artist.canonical_name = choice.value


def resolve_album(library: Library, album: Album) -> None:
    """Stamp the values the album's tracks agree on."""

    artist = library.artist_of(album)
    context = f'"{album.name}" by "{artist.name}"'
    titles: Counter[str] = Counter()
    genres: Counter[str] = Counter()
    years: Counter[str] = Counter()
    mcdis: Counter[bytes] = Counter()

    for metadata in _valid_metadata(library.tracks_of(album)):
        if _canonical_name_matches(metadata, album.name, metadata.canonical_album):
            titles[metadata.canonical_album] += 1
        if _is_genre_candidate(metadata.canonical_genre):
            genres[metadata.canonical_genre] += 1
        if metadata.canonical_year:
            years[metadata.canonical_year] += 1
        mcdis[metadata.canonical_mcdi] += 1

    title = plurality_choice(titles)
    if not title.selected:
        report_ambiguity("album title", context, titles)
    elif title.value:
        album.canonical_title = title.value

    genre = plurality_choice(genres)
    if not genre.selected:
        report_ambiguity("genre", context, genres)
    else:
        album.canonical_genre = genre.value

    year = plurality_choice(years)
    if not year.selected:
        report_ambiguity("year", context, years)
    else:
        album.canonical_year = year.value

    mcdi = plurality_choice(mcdis)
    if not mcdi.selected:
        report_ambiguity("MCDI frame", context, mcdis, bytes.hex)
    else:
        album.canonical_mcdi = mcdi.value


def resolve_library(library: Library) -> None:
    """Resolve every artist, then every album of that artist."""

    for artist in library.artists:
        resolve_artist(library, artist)
        for album in library.albums_of(artist):
            resolve_album(library, album)


__all__ = [
    "Choice",
    "format_candidates",
    "plurality_choice",
    "report_ambiguity",
    "resolve_album",
    "resolve_artist",
    "resolve_library",
]
