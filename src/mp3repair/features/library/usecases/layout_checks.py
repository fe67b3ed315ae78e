"""
Summary: Find empty artist and album directories and gaps or duplicates in track numbering.
Why: These problems come from the directory layout alone and need no tag reads.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum

from mp3repair.features.library.domain.models import Album, Artist, Library
from mp3repair.features.tags.domain.text import quote


class IssueKind(StrEnum):
    EMPTY = "empty"
    NUMBERING = "numbering"


@dataclass(frozen=True, slots=True)
class LayoutIssue:
    """One problem found in an artist directory or, when ``album`` is set, an album directory."""

    kind: IssueKind
    artist: Artist
    album: Album | None
    message: str


def find_empty_directories(library: Library) -> list[LayoutIssue]:
    """Report artists without albums and albums without tracks."""

    issues: list[LayoutIssue] = []
    for artist in library.artists:
        albums = library.albums_of(artist)
        if not albums:
            issues.append(LayoutIssue(IssueKind.EMPTY, artist, None, "no albums found"))
            continue
        for album in albums:
            if not album.track_ids:
                issues.append(LayoutIssue(IssueKind.EMPTY, artist, album, "no tracks found"))
    return issues


def missing_range(low: int, high: int) -> str:
    return str(low) if low == high else f"{low}-{high}"


def numbering_issues(names_by_number: Mapping[int, Sequence[str]], max_track: int) -> list[str]:
    """Describe duplicated track numbers and the numbers missing from ``1..max_track``."""

    issues: list[str] = []
    numbers = sorted(number for number, names in names_by_number.items() if names)
    for number in numbers:
        names = sorted(names_by_number[number])
        if len(names) > 1:
            listed = ", ".join(quote(name) for name in names[:-1])
            issues.append(
                f"multiple tracks identified as track {number}: {listed} and {quote(names[-1])}"
            )

    missing: list[str] = []
    if numbers:
        if numbers[0] > 1:
            missing.append(missing_range(1, numbers[0] - 1))
        for current, following in zip(numbers, numbers[1:]):
            if following - current != 1:
                missing.append(missing_range(current + 1, following - 1))
        if numbers[-1] < max_track:
            missing.append(missing_range(numbers[-1] + 1, max_track))
    if missing:
        issues.append(f"missing tracks identified: {', '.join(missing)}")
    return issues


def find_numbering_issues(library: Library) -> list[LayoutIssue]:
    """Check each album's track numbers run from 1 without gaps or repeats."""

    issues: list[LayoutIssue] = []
    for album in library.albums:
        tracks = library.tracks_of(album)
        if not tracks:
            continue
        names_by_number: defaultdict[int, list[str]] = defaultdict(list)
        for track in tracks:
            names_by_number[track.number].append(track.name)
        max_track = max(len(tracks), *names_by_number)
        artist = library.artist_of(album)
        issues.extend(
            LayoutIssue(IssueKind.NUMBERING, artist, album, message)
            for message in numbering_issues(names_by_number, max_track)
        )
    return issues


__all__ = [
    "IssueKind",
    "LayoutIssue",
    "find_empty_directories",
    "find_numbering_issues",
    "missing_range",
    "numbering_issues",
]
