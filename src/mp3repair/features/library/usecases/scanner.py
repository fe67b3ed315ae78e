"""
Summary: Walk <root>/<artist>/<album>/<NN name>.mp3 and build the library tables.
Why: Directory names supply canonical artist and album names; file names supply number and title.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from mp3repair.config.config import DEFAULT_FILTER
from mp3repair.config.settings import BACKUP_DIR_NAME, DEFAULT_FILE_EXTENSION
from mp3repair.features.library.domain.models import Library
from mp3repair.platform.logging import logger


class ScanError(Exception):
    """Raised when the search parameters are unusable."""


@dataclass(frozen=True, slots=True)
class ScanRequest:
    """Where to look and which directories and files qualify."""

    root: Path
    file_extension: str = DEFAULT_FILE_EXTENSION
    artist_filter: str = DEFAULT_FILTER
    album_filter: str = DEFAULT_FILTER
    include_empty: bool = False


@dataclass(frozen=True, slots=True)
class TrackName:
    number: int
    name: str


def track_name_pattern(extension: str) -> re.Pattern[str]:
    """Compile the file-name pattern for ``extension`` (which must look like ``.mp3``)."""

    bare = extension.removeprefix(".")
    if not extension.startswith(".") or not bare or "." in bare:
        raise ScanError(
            f"the extension {extension!r} must contain exactly one '.' and '.' must be the first character"
        )
    return re.compile(r"^\d+[\s-].+\." + re.escape(bare) + r"$")


def parse_track_name(file_name: str, pattern: re.Pattern[str], extension: str) -> TrackName | None:
    """Split ``"03 Song.mp3"`` or ``"03-Song.mp3"`` into number and name."""

    if pattern.match(file_name) is None:
        return None
    digits = re.match(r"\d+", file_name)
    if digits is None:
        return None
    name = file_name[digits.end() + 1 : len(file_name) - len(extension)]
    return TrackName(number=int(digits.group()), name=name)


def compile_filter(pattern: str, label: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ScanError(f"{label} filter is invalid: {exc}") from exc


def _subdirectories(directory: Path) -> list[Path]:
    return sorted(entry for entry in directory.iterdir() if entry.is_dir())


def scan_library(request: ScanRequest) -> Library:
    """Build a ``Library`` of every qualifying track under ``request.root``."""

    root = request.root.expanduser()
    if not root.is_dir():
        raise ScanError(f"top directory {str(root)!r} is not a directory")
    pattern = track_name_pattern(request.file_extension)
    artist_filter = compile_filter(request.artist_filter, "artist")
    album_filter = compile_filter(request.album_filter, "album")

    library = Library(root)
    for artist_dir in _subdirectories(root):
        if artist_filter.search(artist_dir.name) is None:
            continue
        albums: list[tuple[Path, list[tuple[TrackName, Path]]]] = []
        album_dirs = [entry for entry in _subdirectories(artist_dir) if entry.name != BACKUP_DIR_NAME]
        for album_dir in album_dirs:
            if album_filter.search(album_dir.name) is None:
                continue
            tracks: list[tuple[TrackName, Path]] = []
            for entry in sorted(album_dir.iterdir()):
                if not entry.is_file():
                    continue
                parsed = parse_track_name(entry.name, pattern, request.file_extension)
                if parsed is None:
                    logger.debug("Ignoring %s: not a track file name", entry)
                    continue
                tracks.append((parsed, entry))
            if tracks or request.include_empty:
                albums.append((album_dir, tracks))
        # Artists with no album directories at all count as empty; fully filtered artists are dropped.
        if not albums and not (request.include_empty and not album_dirs):
            continue
        artist = library.add_artist(artist_dir.name, artist_dir)
        for album_dir, tracks in albums:
            album = library.add_album(artist, album_dir.name, album_dir)
            for parsed, path in tracks:
                _ = library.add_track(album, parsed.number, parsed.name, path)

    logger.debug(
        "Scanned %s: %d artists, %d albums, %d tracks",
        root,
        len(library.artists),
        len(library.albums),
        len(library.tracks),
    )
    return library


__all__ = [
    "ScanError",
    "ScanRequest",
    "TrackName",
    "compile_filter",
    "parse_track_name",
    "scan_library",
    "track_name_pattern",
]
