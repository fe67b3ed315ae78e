"""
Summary: Dump every tag field of a file, decoding MCDI frames where the format is known.
Why: Users need to see raw tag contents when a check reports something surprising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from mutagen import MutagenError
from mutagen.mp3 import MP3

from mp3repair.features.tags.adapters.tag_file import read_tags
from mp3repair.features.tags.domain.errors import FileOperationError, TagError
from mp3repair.features.tags.domain.id3v2 import Frame, ID3v2Tag, decode_text
from mp3repair.features.tags.domain.text import quote
from mp3repair.platform.logging import logger

FRAME_DESCRIPTIONS: Final[dict[str, str]] = {
    "AENC": "Audio encryption",
    "APIC": "Attached picture",
    "COMM": "Comments",
    "COMR": "Commercial frame",
    "ENCR": "Encryption method registration",
    "EQUA": "Equalization",
    "ETCO": "Event timing codes",
    "GEOB": "General encapsulated object",
    "GRID": "Group identification registration",
    "IPLS": "Involved people list",
    "LINK": "Linked information",
    "MCDI": "Music CD identifier",
    "MLLT": "MPEG location lookup table",
    "OWNE": "Ownership frame",
    "PRIV": "Private frame",
    "PCNT": "Play counter",
    "POPM": "Popularimeter",
    "POSS": "Position synchronisation frame",
    "RBUF": "Recommended buffer size",
    "RVAD": "Relative volume adjustment",
    "RVRB": "Reverb",
    "SYLT": "Synchronized lyric/text",
    "SYTC": "Synchronized tempo codes",
    "TALB": "Album/Movie/Show title",
    "TBPM": "BPM (beats per minute)",
    "TCOM": "Composer",
    "TCON": "Content type (genre)",
    "TCOP": "Copyright message",
    "TDAT": "Date",
    "TDLY": "Playlist delay",
    "TDRC": "Recording time",
    "TENC": "Encoded by",
    "TEXT": "Lyricist/Text writer",
    "TFLT": "File type",
    "TIME": "Time",
    "TIT1": "Content group description",
    "TIT2": "Title/songname/content description",
    "TIT3": "Subtitle/Description refinement",
    "TKEY": "Initial key",
    "TLAN": "Language(s)",
    "TLEN": "Length",
    "TMED": "Media type",
    "TOAL": "Original album/movie/show title",
    "TOFN": "Original filename",
    "TOLY": "Original lyricist(s)/text writer(s)",
    "TOPE": "Original artist(s)/performer(s)",
    "TORY": "Original release year",
    "TOWN": "File owner/licensee",
    "TPE1": "Lead performer(s)/Soloist(s)",
    "TPE2": "Band/orchestra/accompaniment",
    "TPE3": "Conductor/performer refinement",
    "TPE4": "Interpreted, remixed, or otherwise modified by",
    "TPOS": "Part of a set",
    "TPUB": "Publisher",
    "TRCK": "Track number/Position in set",
    "TRDA": "Recording dates",
    "TRSN": "Internet radio station name",
    "TRSO": "Internet radio station owner",
    "TSIZ": "Size (bytes)",
    "TSRC": "ISRC (international standard recording code)",
    "TSSE": "Software/Hardware and settings used for encoding",
    "TYER": "Year",
    "TXXX": "User defined text information frame",
    "UFID": "Unique file identifier",
    "USER": "Terms of use",
    "USLT": "Unsychronized lyric/text transcription",
    "WCOM": "Commercial information",
    "WCOP": "Copyright/Legal information",
    "WOAF": "Official audio file webpage",
    "WOAR": "Official artist/performer webpage",
    "WOAS": "Official audio source webpage",
    "WORS": "Official internet radio station homepage",
    "WPAY": "Payment",
    "WPUB": "Publishers official webpage",
    "WXXX": "User defined URL link frame",
}

DETAIL_FRAMES: Final[dict[str, str]] = {
    "TCOM": "Composer",
    "TEXT": "Lyricist",
    "TIT3": "Subtitle",
    "TKEY": "Key",
    "TPE2": "Orchestra/Band",
    "TPE3": "Conductor",
}

# LAME writes LBA offsets starting at zero; disc ids count from the 150-block lead-in.
LBA_LEAD_IN: Final[int] = 150
HEX_DUMP_WIDTH: Final[int] = 16

_WINDOWS_LEGACY_MCDI: Final[re.Pattern[str]] = re.compile(r"([0-9A-F]+\+)+([0-9A-F]+)")


def frame_description(frame_id: str) -> str:
    return FRAME_DESCRIPTIONS.get(frame_id, "No description found")


def hex_dump(content: bytes) -> list[str]:
    """Format ``content`` as rows of 16 hex bytes followed by their printable form."""

    rows: list[str] = []
    for start in range(0, len(content), HEX_DUMP_WIDTH):
        chunk = content[start : start + HEX_DUMP_WIDTH]
        cells = [f"{byte:02X}" for byte in chunk]
        cells.extend("  " for _ in range(HEX_DUMP_WIDTH - len(chunk)))
        printable = "".join(chr(byte) if 0x20 <= byte <= 0x7E else "•" for byte in chunk)
        rows.append(" ".join([*cells, printable]))
    return rows


def utf16le_ascii(content: bytes) -> str | None:
    """Return the text of little-endian UTF-16 holding only ASCII, else ``None``."""

    if not content or len(content) % 2:
        return None
    if any(content[1::2]):
        return None
    return content[0::2].rstrip(b"\x00").decode("latin-1")


def decode_freerip_mcdi(content: bytes) -> list[str] | None:
    if len(content) >= 3 and content[:3] == b"\x01\xff\xfe":
        text = utf16le_ascii(content[3:])
        if text is not None:
            return [text, *hex_dump(content)]
    return None


def decode_windows_legacy_mcdi(text: str, content: bytes) -> list[str] | None:
    """Decode ``"count+lba1+...+leadout"`` hex strings written by Windows Media Player."""

    if _WINDOWS_LEGACY_MCDI.fullmatch(text) is None:
        return None
    numbers = [int(part, 16) for part in text.split("+")]
    track_count, addresses = numbers[0], numbers[1:]
    if len(addresses) != track_count + 1:
        return None
    lines = [f"tracks {track_count}"]
    for index, address in enumerate(addresses):
        if index == track_count:
            lines.append(f"leadout track logical block address {address}")
        else:
            lines.append(f"track {index + 1} logical block address {address}")
    return [*lines, *hex_dump(content)]


def decode_lame_mcdi(content: bytes) -> list[str] | None:
    """Decode a binary CD table of contents as written by LAME."""

    if len(content) < 4:
        return None
    toc_length = int.from_bytes(content[0:2], "big")
    if toc_length >= len(content):
        return None
    first, last = content[2], content[3]
    track_count = last + 1 - first
    if track_count < 1 or toc_length != 2 + 8 * (track_count + 1):
        return None
    lines = [f"first track: {first}", f"last track: {last}"]
    for index in range(track_count + 1):
        offset = index * 8
        address = int.from_bytes(content[offset + 8 : offset + 12], "big") + LBA_LEAD_IN
        if index == track_count:
            lines.append(f"leadout track logical block address {address}")
        else:
            lines.append(f"track {content[offset + 6]} logical block address {address}")
    return [*lines, *hex_dump(content)]


def interpret_binary_frame(content: bytes) -> list[str]:
    """Describe an opaque frame body, trying known MCDI layouts before a hex dump."""

    if (decoded := decode_freerip_mcdi(content)) is not None:
        return decoded
    text = utf16le_ascii(content)
    if text is not None:
        if (decoded := decode_windows_legacy_mcdi(text, content)) is not None:
            return decoded
        return [text, *hex_dump(content)]
    if (decoded := decode_lame_mcdi(content)) is not None:
        return decoded
    return hex_dump(content)


def format_length(milliseconds: str) -> str:
    """Render a ``TLEN`` value as ``m:ss.mmm``."""

    digits = "".join(character for character in milliseconds if character.isdigit())
    length = int(digits) if digits else 0
    seconds = length // 1000
    return f"{seconds // 60}:{seconds % 60:02d}.{length % 1000:03d}"


def _frame_value(frame: Frame, version: int) -> list[str]:
    try:
        payload = frame.payload(version)
        if frame.frame_id == "TLEN":
            return [format_length(decode_text(payload))]
        if frame.frame_id == "TXXX":
            encoding, rest = payload[:1], payload[1:]
            separator = b"\x00\x00" if encoding in (b"\x01", b"\x02") else b"\x00"
            description, _, value = rest.partition(separator)
            return [f"{decode_text(encoding + description)}: {decode_text(encoding + value)}"]
        if frame.frame_id.startswith("T"):
            return [quote(decode_text(payload))]
    except TagError as exc:
        return [f"<undecodable: {exc}>"]
    return interpret_binary_frame(payload)


@dataclass(slots=True)
class StreamInfo:
    length_seconds: float
    bitrate: int
    sample_rate: int
    channels: int


@dataclass(slots=True)
class FileDiagnostics:
    """Everything ``inspect`` reports for one file."""

    path: Path
    error: str | None = None
    id3v1_lines: list[str] = field(default_factory=list)
    id3v1_error: str | None = None
    id3v2_version: str | None = None
    id3v2_lines: list[str] = field(default_factory=list)
    id3v2_error: str | None = None
    stream: StreamInfo | None = None
    stream_error: str | None = None


def describe_id3v2(tag: ID3v2Tag) -> list[str]:
    lines: list[str] = []
    for frame in tag.frames:
        values = _frame_value(frame, tag.version)
        head = f"{frame.frame_id} ({frame_description(frame.frame_id)})"
        if len(values) == 1:
            lines.append(f"{head}: {values[0]}")
        else:
            lines.append(f"{head}:")
            lines.extend(f"    {value}" for value in values)
    return lines


def read_stream_info(path: Path) -> StreamInfo:
    info = MP3(path).info
    return StreamInfo(
        length_seconds=float(info.length),
        bitrate=int(info.bitrate),
        sample_rate=int(info.sample_rate),
        channels=int(info.channels),
    )


def read_track_details(path: Path) -> dict[str, str]:
    """Return the credit frames of ``path`` keyed by a readable name.

    Raises:
        FileOperationError: If the file cannot be opened or read.
    """
    tags = read_tags(path)
    if tags.id3v2 is None:
        return {}
    details: dict[str, str] = {}
    for frame_id, name in DETAIL_FRAMES.items():
        try:
            value = tags.id3v2.text(frame_id)
        except TagError as exc:
            logger.debug("Skipping undecodable %s frame in %s: %s", frame_id, path, exc)
            continue
        if value:
            details[name] = value
    return details


def inspect_file(path: Path) -> FileDiagnostics:
    """Collect tag and stream diagnostics for ``path``."""

    diagnostics = FileDiagnostics(path=path)
    try:
        tags = read_tags(path)
    except FileOperationError as exc:
        diagnostics.error = str(exc)
        return diagnostics

    if tags.id3v1 is not None:
        diagnostics.id3v1_lines = tags.id3v1.diagnostics()
    else:
        diagnostics.id3v1_error = str(tags.id3v1_error)

    if tags.id3v2 is not None:
        header = tags.id3v2.header
        diagnostics.id3v2_version = f"2.{header.version}.{header.revision}"
        diagnostics.id3v2_lines = describe_id3v2(tags.id3v2)
    else:
        diagnostics.id3v2_error = str(tags.id3v2_error)

    try:
        diagnostics.stream = read_stream_info(path)
    except MutagenError as exc:
        diagnostics.stream_error = str(exc)
    return diagnostics


__all__ = [
    "DETAIL_FRAMES",
    "FRAME_DESCRIPTIONS",
    "FileDiagnostics",
    "StreamInfo",
    "decode_lame_mcdi",
    "decode_windows_legacy_mcdi",
    "describe_id3v2",
    "format_length",
    "frame_description",
    "hex_dump",
    "inspect_file",
    "interpret_binary_frame",
    "read_track_details",
    "utf16le_ascii",
]
