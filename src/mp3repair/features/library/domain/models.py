"""
Summary: Flat id-linked tables describing a scanned music library.
Why: Tracks reference albums and albums reference artists by id, never by ownership.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from mp3repair.features.metadata.domain.models import TrackMetadata


@dataclass(slots=True)
class Artist:
    """An artist directory and its resolved canonical name."""

    artist_id: int
    name: str
    path: Path
    album_ids: list[int] = field(default_factory=list)
    canonical_name: str = ""

    def __post_init__(self) -> None:
        if not self.canonical_name:
            self.canonical_name = self.name


@dataclass(slots=True)
class Album:
    """An album directory plus the values its tracks agreed on."""

    album_id: int
    artist_id: int
    name: str
    path: Path
    track_ids: list[int] = field(default_factory=list)
    canonical_title: str = ""
    canonical_genre: str | None = None
    canonical_year: str | None = None
    canonical_mcdi: bytes | None = None

    def __post_init__(self) -> None:
        if not self.canonical_title:
            self.canonical_title = self.name


@dataclass(slots=True)
class Track:
    """A track file; number and name come from its file name."""

    track_id: int
    album_id: int
    number: int
    name: str
    path: Path
    metadata: TrackMetadata | None = None

    @property
    def file_name(self) -> str:
        return self.path.name


class Library:
    """Owns every table built from one music root."""

    def __init__(self, root: Path) -> None:
        self.root: Path = root
        self._artists: list[Artist] = []
        self._albums: list[Album] = []
        self._tracks: list[Track] = []

    # Construction ------------------------------------------------------------

    def add_artist(self, name: str, path: Path) -> Artist:
        artist = Artist(artist_id=len(self._artists), name=name, path=path)
        self._artists.append(artist)
        return artist

    def add_album(self, artist: Artist, name: str, path: Path) -> Album:
        album = Album(
            album_id=len(self._albums),
            artist_id=artist.artist_id,
            name=name,
            path=path,
        )
        self._albums.append(album)
        artist.album_ids.append(album.album_id)
        return album

    def add_track(self, album: Album, number: int, name: str, path: Path) -> Track:
        track = Track(
            track_id=len(self._tracks),
            album_id=album.album_id,
            number=number,
            name=name,
            path=path,
        )
        self._tracks.append(track)
        album.track_ids.append(track.track_id)
        return track

    # Lookups -----------------------------------------------------------------

    @property
    def artists(self) -> tuple[Artist, ...]:
        return tuple(self._artists)

    @property
    def albums(self) -> tuple[Album, ...]:
        return tuple(self._albums)

    @property
    def tracks(self) -> tuple[Track, ...]:
        return tuple(self._tracks)

    def album_of(self, track: Track) -> Album:
        return self._albums[track.album_id]

    def artist_of(self, album: Album) -> Artist:
        return self._artists[album.artist_id]

    def albums_of(self, artist: Artist) -> list[Album]:
        return [self._albums[album_id] for album_id in artist.album_ids]

    def tracks_of(self, album: Album) -> list[Track]:
        return [self._tracks[track_id] for track_id in album.track_ids]

    def tracks_of_artist(self, artist: Artist) -> Iterator[Track]:
        for album in self.albums_of(artist):
            yield from self.tracks_of(album)

    def is_empty(self) -> bool:
        return not self._tracks


__all__ = ["Album", "Artist", "Library", "Track"]
