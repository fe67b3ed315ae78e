"""
Summary: Codec for ID3v2.3 and ID3v2.4 header tags.
Why: Edit a handful of text frames while every other frame keeps its original bytes.
"""

from __future__ import annotations

import re
import zlib
from dataclasses import dataclass
from typing import Final, Self

from .edits import TagEdits
from .errors import (
    NO_ID3V2_METADATA,
    TRACK_NUMBER_EMPTY,
    TRACK_NUMBER_NOT_DIGIT,
    TagMalformedError,
    TagMissingError,
    TrackNumberMalformedError,
)
from .genres import genre_name, normalize_genre_key
from .text import remove_leading_boms

HEADER_LENGTH: Final[int] = 10
FRAME_HEADER_LENGTH: Final[int] = 10
ID3V2_MARKER: Final[bytes] = b"ID3"
FOOTER_MARKER: Final[bytes] = b"3DI"
SUPPORTED_VERSIONS: Final[frozenset[int]] = frozenset({3, 4})
MAX_SYNCSAFE: Final[int] = (1 << 28) - 1

FLAG_UNSYNCHRONISATION: Final[int] = 0x80
FLAG_EXTENDED_HEADER: Final[int] = 0x40
FLAG_FOOTER: Final[int] = 0x10

ENCODING_LATIN1: Final[int] = 0
ENCODING_UTF16: Final[int] = 1
ENCODING_UTF16BE: Final[int] = 2
ENCODING_UTF8: Final[int] = 3
DEFAULT_ENCODING: Final[int] = ENCODING_UTF8

_CODECS: Final[dict[int, str]] = {
    ENCODING_LATIN1: "latin-1",
    ENCODING_UTF16: "utf-16",
    ENCODING_UTF16BE: "utf-16-be",
    ENCODING_UTF8: "utf-8",
}

ALBUM_FRAME: Final[str] = "TALB"
ARTIST_FRAME: Final[str] = "TPE1"
TITLE_FRAME: Final[str] = "TIT2"
TRACK_FRAME: Final[str] = "TRCK"
GENRE_FRAME: Final[str] = "TCON"
YEAR_FRAME: Final[str] = "TYER"
RECORDING_TIME_FRAME: Final[str] = "TDRC"
MCDI_FRAME: Final[str] = "MCDI"

_FRAME_ID_PATTERN: Final[re.Pattern[bytes]] = re.compile(rb"[A-Z0-9]{4}")
_INDEXED_GENRE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\((\d+)\)(.+)", re.DOTALL)


def decode_syncsafe(data: bytes) -> int:
    """Decode a big-endian integer made of seven-bit groups."""

    value = 0
    for byte in data:
        if byte & 0x80:
            raise TagMalformedError(f"invalid syncsafe integer {data.hex()}")
        value = (value << 7) | byte
    return value


def encode_syncsafe(value: int, width: int = 4) -> bytes:
    if value < 0 or value >= 1 << (7 * width):
        raise TagMalformedError(f"{value} does not fit in a {width}-byte syncsafe integer")
    return bytes((value >> (7 * shift)) & 0x7F for shift in reversed(range(width)))


def remove_unsynchronisation(data: bytes) -> bytes:
    return data.replace(b"\xff\x00", b"\xff")


@dataclass(frozen=True, slots=True)
class ID3v2Header:
    """The ten bytes that open an ID3v2 tag."""

    version: int
    revision: int
    flags: int
    size: int

    @classmethod
    def parse(cls, data: bytes) -> Self:
        if len(data) < HEADER_LENGTH or data[:3] != ID3V2_MARKER:
            raise TagMissingError(NO_ID3V2_METADATA)
        version, revision, flags = data[3], data[4], data[5]
        if version not in SUPPORTED_VERSIONS:
            raise TagMalformedError(f"unsupported ID3v2 version 2.{version}")
        if revision == 0xFF:
            raise TagMalformedError("invalid ID3v2 revision")
        return cls(
            version=version,
            revision=revision,
            flags=flags,
            size=decode_syncsafe(data[6:HEADER_LENGTH]),
        )

    @property
    def has_footer(self) -> bool:
        return self.version == 4 and bool(self.flags & FLAG_FOOTER)

    @property
    def tag_length(self) -> int:
        """Total bytes occupied on disk, header and footer included."""

        footer = HEADER_LENGTH if self.has_footer else 0
        return HEADER_LENGTH + self.size + footer


@dataclass(slots=True)
class Frame:
    """A single frame; ``raw`` holds the bytes read from disk, if any."""

    frame_id: str
    flags: int
    body: bytes
    raw: bytes | None = None

    def encode(self, version: int) -> bytes:
        if self.raw is not None:
            return self.raw
        length = len(self.body)
        size = encode_syncsafe(length) if version == 4 else length.to_bytes(4, "big")
        return self.frame_id.encode("ascii") + size + self.flags.to_bytes(2, "big") + self.body

    def payload(self, version: int) -> bytes:
        """Return the frame body with frame-level compression and unsync undone."""

        format_flags = self.flags & 0xFF
        unsynchronised = False
        if version == 3:
            compressed = bool(format_flags & 0x80)
            encrypted = bool(format_flags & 0x40)
            grouped = bool(format_flags & 0x20)
            offset = (4 if compressed else 0) + (1 if encrypted else 0) + (1 if grouped else 0)
        else:
            grouped = bool(format_flags & 0x40)
            compressed = bool(format_flags & 0x08)
            encrypted = bool(format_flags & 0x04)
            unsynchronised = bool(format_flags & 0x02)
            has_length = bool(format_flags & 0x01)
            offset = (1 if grouped else 0) + (1 if encrypted else 0) + (4 if has_length else 0)
        if encrypted:
            raise TagMalformedError(f"frame {self.frame_id} is encrypted")
        body = self.body[offset:]
        if unsynchronised:
            body = remove_unsynchronisation(body)
        if compressed:
            try:
                body = zlib.decompress(body)
            except zlib.error as exc:
                raise TagMalformedError(f"frame {self.frame_id} cannot be decompressed") from exc
        return body


def decode_text(body: bytes) -> str:
    """Decode a text frame body: encoding selector byte followed by text."""

    if not body:
        return ""
    encoding, data = body[0], body[1:]
    codec = _CODECS.get(encoding)
    if codec is None:
        raise TagMalformedError(f"unknown text encoding {encoding}")
    if encoding in (ENCODING_UTF16, ENCODING_UTF16BE) and len(data) % 2 and data[-1] == 0:
        data = data[:-1]
    try:
        text = data.decode(codec)
    except UnicodeDecodeError as exc:
        raise TagMalformedError(f"text cannot be decoded as {codec}") from exc
    return remove_leading_boms(text.split("\x00", 1)[0])


def encode_text(value: str, encoding: int = DEFAULT_ENCODING) -> bytes:
    codec = _CODECS[encoding]
    return bytes([encoding]) + value.encode(codec)


def parse_track_number(value: str) -> int:
    """Read the leading digits of a ``TRCK`` body such as ``"12"`` or ``"12/14"``."""

    value = remove_leading_boms(value)
    if not value:
        raise TrackNumberMalformedError(TRACK_NUMBER_EMPTY)
    digits = 0
    for character in value:
        if not ("0" <= character <= "9"):
            break
        digits += 1
    if digits == 0:
        raise TrackNumberMalformedError(TRACK_NUMBER_NOT_DIGIT)
    return int(value[:digits])


def normalize_genre(value: str) -> str:
    """Collapse ``"(N)Name"`` to ``Name`` when ``N`` indexes that very genre."""

    match = _INDEXED_GENRE_PATTERN.fullmatch(value)
    if match is None:
        return value
    name = genre_name(int(match.group(1)))
    if name is not None and normalize_genre_key(match.group(2)) == normalize_genre_key(name):
        return name
    return value


class ID3v2Tag:
    """Parsed ID3v2 tag that re-emits untouched frames byte for byte."""

    def __init__(
        self,
        header: ID3v2Header,
        frames: list[Frame],
        *,
        extended_header: bytes = b"",
        padding: int = 0,
        tail: bytes = b"",
        raw: bytes | None = None,
    ) -> None:
        self._header = header
        self._frames = frames
        self._extended_header = extended_header
        self._tail = tail
        self._padding = padding
        self._raw = raw
        self._modified = raw is None

    @classmethod
    def parse(cls, data: bytes) -> Self:
        """Decode the tag at the start of ``data``."""

        header = ID3v2Header.parse(data[:HEADER_LENGTH])
        if len(data) < header.tag_length:
            raise TagMalformedError("ID3v2 tag is truncated")
        body = data[HEADER_LENGTH : HEADER_LENGTH + header.size]
        if header.version == 3 and header.flags & FLAG_UNSYNCHRONISATION:
            body = remove_unsynchronisation(body)

        position = 0
        extended_header = b""
        if header.flags & FLAG_EXTENDED_HEADER:
            if len(body) < 4:
                raise TagMalformedError("ID3v2 extended header is truncated")
            if header.version == 3:
                extended_length = 4 + int.from_bytes(body[:4], "big")
            else:
                extended_length = decode_syncsafe(body[:4])
            if extended_length < 4 or extended_length > len(body):
                raise TagMalformedError("ID3v2 extended header size is invalid")
            extended_header = body[:extended_length]
            position = extended_length

        frames: list[Frame] = []
        while position + FRAME_HEADER_LENGTH <= len(body):
            frame_header = body[position : position + FRAME_HEADER_LENGTH]
            if _FRAME_ID_PATTERN.fullmatch(frame_header[:4]) is None:
                break
            frame_id = frame_header[:4].decode("ascii")
            if header.version == 4:
                size = decode_syncsafe(frame_header[4:8])
            else:
                size = int.from_bytes(frame_header[4:8], "big")
            end = position + FRAME_HEADER_LENGTH + size
            if end > len(body):
                raise TagMalformedError(f"frame {frame_id} extends past the end of the tag")
            frames.append(
                Frame(
                    frame_id=frame_id,
                    flags=int.from_bytes(frame_header[8:10], "big"),
                    body=body[position + FRAME_HEADER_LENGTH : end],
                    raw=body[position:end],
                )
            )
            position = end

        # Bytes after the last parsed frame are padding only when they are all zero.
        tail = body[position:]
        if not tail.strip(b"\x00"):
            tail = b""
        return cls(
            header,
            frames,
            extended_header=extended_header,
            padding=len(body) - position - len(tail),
            tail=tail,
            raw=data[: header.tag_length],
        )

    @property
    def header(self) -> ID3v2Header:
        return self._header

    @property
    def version(self) -> int:
        return self._header.version

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    @property
    def modified(self) -> bool:
        return self._modified

    def frame(self, frame_id: str) -> Frame | None:
        for frame in self._frames:
            if frame.frame_id == frame_id:
                return frame
        return None

    def text(self, frame_id: str) -> str | None:
        """Return the decoded text of the first ``frame_id`` frame, if present."""

        frame = self.frame(frame_id)
        if frame is None:
            return None
        return decode_text(frame.payload(self.version))

    def binary(self, frame_id: str) -> bytes | None:
        frame = self.frame(frame_id)
        if frame is None:
            return None
        return frame.payload(self.version)

    # Editing -----------------------------------------------------------------

    def set_frame(self, frame_id: str, body: bytes) -> None:
        """Replace the first ``frame_id`` frame in place, or append a new one."""

        replacement = Frame(frame_id=frame_id, flags=0, body=body)
        updated: list[Frame] = []
        replaced = False
        for frame in self._frames:
            if frame.frame_id != frame_id:
                updated.append(frame)
            elif not replaced:
                updated.append(replacement)
                replaced = True
        if not replaced:
            updated.append(replacement)
        self._frames = updated
        self._modified = True

    def set_text(self, frame_id: str, value: str) -> None:
        self.set_frame(frame_id, encode_text(value))

    def remove_frames(self, frame_id: str) -> None:
        remaining = [frame for frame in self._frames if frame.frame_id != frame_id]
        if len(remaining) != len(self._frames):
            self._frames = remaining
            self._modified = True

    def _year_frame_id(self) -> str:
        if (
            self.version == 4
            and self.frame(YEAR_FRAME) is None
            and self.frame(RECORDING_TIME_FRAME) is not None
        ):
            return RECORDING_TIME_FRAME
        return YEAR_FRAME

    def apply_edits(self, edits: TagEdits) -> None:
        if edits.artist is not None:
            self.set_text(ARTIST_FRAME, edits.artist)
        if edits.album is not None:
            self.set_text(ALBUM_FRAME, edits.album)
        if edits.title is not None:
            self.set_text(TITLE_FRAME, edits.title)
        if edits.genre is not None:
            self.set_text(GENRE_FRAME, edits.genre)
        if edits.year is not None:
            self.set_text(self._year_frame_id(), edits.year)
        if edits.track_number is not None:
            self.set_text(TRACK_FRAME, str(edits.track_number))
        if edits.mcdi is not None:
            if edits.mcdi:
                self.set_frame(MCDI_FRAME, edits.mcdi)
            else:
                self.remove_frames(MCDI_FRAME)

    # Serialization -----------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Serialize the tag; an unedited tag yields exactly the bytes it was read from."""

        if not self._modified and self._raw is not None:
            return self._raw
        content = self._extended_header + b"".join(
            frame.encode(self.version) for frame in self._frames
        ) + self._tail
        if self._header.has_footer:
            size = len(content)
        elif self._raw is not None and len(content) <= self._header.size:
            size = self._header.size
        else:
            size = len(content) + self._padding
        if size > MAX_SYNCSAFE:
            raise TagMalformedError("ID3v2 tag is too large")
        flags = self._header.flags & ~FLAG_UNSYNCHRONISATION
        header = (
            ID3V2_MARKER
            + bytes([self._header.version, self._header.revision, flags])
            + encode_syncsafe(size)
        )
        footer = FOOTER_MARKER + header[3:] if self._header.has_footer else b""
        return header + content + b"\x00" * (size - len(content)) + footer


@dataclass(slots=True)
class ID3v2View:
    """The fields of an ID3v2 tag that take part in reconciliation."""

    album: str = ""
    artist: str = ""
    title: str = ""
    genre: str = ""
    year: str = ""
    track_number: int = 0
    mcdi: bytes = b""


def read_view(tag: ID3v2Tag) -> ID3v2View:
    """Extract the reconciled fields; raise when the tag is empty or ``TRCK`` is bad."""

    if not tag.frames:
        raise TagMissingError(NO_ID3V2_METADATA)
    track_number = parse_track_number(tag.text(TRACK_FRAME) or "")
    year = tag.text(YEAR_FRAME)
    if year is None and tag.version == 4:
        year = tag.text(RECORDING_TIME_FRAME)
    return ID3v2View(
        album=tag.text(ALBUM_FRAME) or "",
        artist=tag.text(ARTIST_FRAME) or "",
        title=tag.text(TITLE_FRAME) or "",
        genre=normalize_genre(tag.text(GENRE_FRAME) or ""),
        year=year or "",
        track_number=track_number,
        mcdi=tag.binary(MCDI_FRAME) or b"",
    )


__all__ = [
    "ALBUM_FRAME",
    "ARTIST_FRAME",
    "DEFAULT_ENCODING",
    "Frame",
    "GENRE_FRAME",
    "HEADER_LENGTH",
    "ID3V2_MARKER",
    "ID3v2Header",
    "ID3v2Tag",
    "ID3v2View",
    "MCDI_FRAME",
    "TITLE_FRAME",
    "TRACK_FRAME",
    "YEAR_FRAME",
    "decode_syncsafe",
    "decode_text",
    "encode_syncsafe",
    "encode_text",
    "normalize_genre",
    "parse_track_number",
    "read_view",
]
