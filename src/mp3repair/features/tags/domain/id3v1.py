"""
Summary: Codec for the fixed 128-byte ID3v1 trailer tag.
Why: Read and rewrite legacy tags field by field while keeping unedited bytes intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Self

from .edits import TagEdits
from .errors import NO_ID3V1_METADATA, TagMalformedError, TagMissingError
from .genres import OTHER_GENRE, genre_index, genre_name
from .text import quote, to_latin1

ID3V1_LENGTH: Final[int] = 128
ID3V1_MARKER: Final[bytes] = b"TAG"
NAME_LENGTH: Final[int] = 30

MIN_YEAR: Final[int] = 1000
MAX_YEAR: Final[int] = 9999
MIN_TRACK: Final[int] = 1
MAX_TRACK: Final[int] = 255


@dataclass(frozen=True, slots=True)
class _Field:
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


MARKER_FIELD: Final = _Field(0, 3)
TITLE_FIELD: Final = _Field(3, NAME_LENGTH)
ARTIST_FIELD: Final = _Field(33, NAME_LENGTH)
ALBUM_FIELD: Final = _Field(63, NAME_LENGTH)
YEAR_FIELD: Final = _Field(93, 4)
COMMENT_FIELD: Final = _Field(97, 28)
ZERO_FIELD: Final = _Field(125, 1)
TRACK_FIELD: Final = _Field(126, 1)
GENRE_FIELD: Final = _Field(127, 1)


class ID3v1Tag:
    """Mutable view over the raw bytes of an ID3v1 tag."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        if len(data) != ID3V1_LENGTH:
            raise TagMalformedError(
                f"ID3v1 tag must be {ID3V1_LENGTH} bytes, got {len(data)}"
            )
        self._data = bytearray(data)

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Decode ``data``; raise ``TagMissingError`` when the marker is absent."""

        if len(data) < ID3V1_LENGTH or data[: MARKER_FIELD.length] != ID3V1_MARKER:
            raise TagMissingError(NO_ID3V1_METADATA)
        return cls(data[:ID3V1_LENGTH])

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    # Reading -----------------------------------------------------------------

    def _read_string(self, field: _Field) -> str:
        raw = bytes(self._data[field.offset : field.end])
        terminator = raw.find(b"\x00")
        if terminator != -1:
            raw = raw[:terminator]
        return raw.decode("latin-1").rstrip(" ")

    @property
    def title(self) -> str:
        return self._read_string(TITLE_FIELD)

    @property
    def artist(self) -> str:
        return self._read_string(ARTIST_FIELD)

    @property
    def album(self) -> str:
        return self._read_string(ALBUM_FIELD)

    @property
    def year(self) -> str:
        return self._read_string(YEAR_FIELD)

    @property
    def comment(self) -> str:
        return self._read_string(COMMENT_FIELD)

    def read_year(self) -> tuple[int, bool]:
        """Return the year as an integer and whether it was numeric."""

        year = self.year
        if year.isdigit() and year.isascii():
            return int(year), True
        return 0, False

    def read_track(self) -> tuple[int, bool]:
        """Return the track number and whether it is present."""

        if self._data[ZERO_FIELD.offset] != 0:
            return 0, False
        track = self._data[TRACK_FIELD.offset]
        if track == 0:
            return 0, False
        return track, True

    def read_genre(self) -> tuple[str, bool]:
        """Return the genre name and whether the stored index is in the table."""

        name = genre_name(self._data[GENRE_FIELD.offset])
        if name is None:
            return "", False
        return name, True

    # Writing -----------------------------------------------------------------

    def _write_string(self, value: str, field: _Field) -> None:
        encoded = to_latin1(value).encode("latin-1")[: field.length]
        self._data[field.offset : field.end] = encoded.ljust(field.length, b"\x00")

    def set_title(self, value: str) -> None:
        self._write_string(value, TITLE_FIELD)

    def set_artist(self, value: str) -> None:
        self._write_string(value, ARTIST_FIELD)

    def set_album(self, value: str) -> None:
        self._write_string(value, ALBUM_FIELD)

    def set_comment(self, value: str) -> None:
        self._write_string(value, COMMENT_FIELD)

    def set_year(self, year: int) -> bool:
        if not MIN_YEAR <= year <= MAX_YEAR:
            return False
        self._write_string(str(year), YEAR_FIELD)
        return True

    def set_track(self, track: int) -> bool:
        if not MIN_TRACK <= track <= MAX_TRACK:
            return False
        self._data[ZERO_FIELD.offset] = 0
        self._data[TRACK_FIELD.offset] = track
        return True

    def set_genre(self, name: str) -> bool:
        index = genre_index(name)
        if index is None:
            return False
        self._data[GENRE_FIELD.offset] = index
        return True

    def apply_edits(self, edits: TagEdits) -> None:
        """Rewrite every field named in ``edits``; the comment is never touched."""

        if edits.artist is not None:
            self.set_artist(edits.artist)
        if edits.album is not None:
            self.set_album(edits.album)
        if edits.title is not None:
            self.set_title(edits.title)
        if edits.genre is not None and not self.set_genre(edits.genre):
            _ = self.set_genre(OTHER_GENRE)
        if edits.year is not None:
            year = leading_year(edits.year)
            if year is not None:
                _ = self.set_year(year)
        if edits.track_number is not None:
            _ = self.set_track(edits.track_number)

    # Diagnostics -------------------------------------------------------------

    def diagnostics(self) -> list[str]:
        """Describe the tag contents one field per line."""

        lines = [
            f"Artist: {quote(self.artist)}",
            f"Album: {quote(self.album)}",
            f"Title: {quote(self.title)}",
        ]
        track, track_present = self.read_track()
        if track_present:
            lines.append(f"Track: {track}")
        lines.append(f"Year: {quote(self.year)}")
        genre, genre_known = self.read_genre()
        if genre_known:
            lines.append(f"Genre: {quote(genre)}")
        if comment := self.comment:
            lines.append(f"Comment: {quote(comment)}")
        return lines

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ID3v1Tag):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"ID3v1Tag(title={self.title!r}, artist={self.artist!r}, album={self.album!r})"


def leading_year(value: str) -> int | None:
    """Extract a four digit year from the start of a free-form year string."""

    candidate = value.strip()[:4]
    if len(candidate) == 4 and candidate.isdigit() and candidate.isascii():
        return int(candidate)
    return None


__all__ = [
    "ID3V1_LENGTH",
    "ID3V1_MARKER",
    "ID3v1Tag",
    "NAME_LENGTH",
    "leading_year",
]
