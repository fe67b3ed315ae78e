"""
Summary: Read both tag regions of an MP3 file and rewrite them atomically.
Why: Keep the audio payload byte-identical while tags are replaced through temp-file and rename.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from mp3repair.features.tags.domain.edits import TagEdits
from mp3repair.features.tags.domain.errors import (
    NO_ID3V1_METADATA,
    FileOpenError,
    FileOperationError,
    FileReadError,
    FileRenameError,
    FileStatError,
    FileWriteError,
    TagError,
    TagMissingError,
)
from mp3repair.features.tags.domain.id3v1 import ID3V1_LENGTH, ID3v1Tag
from mp3repair.features.tags.domain.id3v2 import HEADER_LENGTH, ID3V2_MARKER, ID3v2Header, ID3v2Tag


@dataclass(slots=True)
class TagFile:
    """Outcome of reading a file: each tag or the error that prevented reading it."""

    path: Path
    file_size: int
    id3v1: ID3v1Tag | None = None
    id3v2: ID3v2Tag | None = None
    id3v1_error: TagError | None = None
    id3v2_error: TagError | None = None

    @property
    def id3v2_length(self) -> int:
        """Bytes at the start of the file owned by a readable ID3v2 tag."""

        if self.id3v2 is None:
            return 0
        return self.id3v2.header.tag_length

    @property
    def payload_range(self) -> tuple[int, int]:
        end = self.file_size - (ID3V1_LENGTH if self.id3v1 is not None else 0)
        return self.id3v2_length, end


def _read_exact(handle: BinaryIO, path: Path, length: int) -> bytes:
    try:
        data = handle.read(length)
    except OSError as exc:
        raise FileReadError(path, exc) from exc
    if len(data) != length:
        raise FileReadError(path, f"short read: wanted {length} bytes, got {len(data)}")
    return data


def _read_id3v2(handle: BinaryIO, path: Path, file_size: int) -> ID3v2Tag:
    if file_size < HEADER_LENGTH:
        return ID3v2Tag.parse(b"")
    header_bytes = _read_exact(handle, path, HEADER_LENGTH)
    if header_bytes[:3] != ID3V2_MARKER:
        return ID3v2Tag.parse(header_bytes)
    header = ID3v2Header.parse(header_bytes)
    remaining = min(header.tag_length, file_size) - HEADER_LENGTH
    return ID3v2Tag.parse(header_bytes + _read_exact(handle, path, remaining))


def read_tags(path: Path) -> TagFile:
    """Read the ID3v2 header tag and the ID3v1 trailer of ``path``.

    File-level failures raise ``FileOperationError`` subclasses; problems with a
    single tag are captured on the returned ``TagFile`` instead.
    """

    try:
        handle = path.open("rb")
    except OSError as exc:
        raise FileOpenError(path, exc) from exc

    with handle:
        try:
            file_size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            raise FileStatError(path, exc) from exc

        result = TagFile(path=path, file_size=file_size)
        try:
            result.id3v2 = _read_id3v2(handle, path, file_size)
        except FileOperationError:
            raise
        except TagError as exc:
            result.id3v2_error = exc

        trailer_start = file_size - ID3V1_LENGTH
        if trailer_start < result.id3v2_length:
            result.id3v1_error = TagMissingError(NO_ID3V1_METADATA)
            return result
        try:
            _ = handle.seek(trailer_start)
        except OSError as exc:
            raise FileReadError(path, exc) from exc
        try:
            result.id3v1 = ID3v1Tag.parse(_read_exact(handle, path, ID3V1_LENGTH))
        except TagMissingError as exc:
            result.id3v1_error = exc
    return result


def compose_file(data: bytes, id3v1_edits: TagEdits | None, id3v2_edits: TagEdits | None) -> bytes:
    """Return ``data`` with edits applied to whichever tags it carries.

    Tags that cannot be read are left inside the payload untouched, so the bytes
    between the two tag regions always survive unchanged.
    """

    id3v2: ID3v2Tag | None
    try:
        id3v2 = ID3v2Tag.parse(data)
    except TagError:
        id3v2 = None
    start = id3v2.header.tag_length if id3v2 is not None else 0

    id3v1: ID3v1Tag | None = None
    if len(data) - ID3V1_LENGTH >= start:
        try:
            id3v1 = ID3v1Tag.parse(data[-ID3V1_LENGTH:])
        except TagError:
            id3v1 = None
    end = len(data) - (ID3V1_LENGTH if id3v1 is not None else 0)

    if id3v2 is not None and id3v2_edits is not None:
        id3v2.apply_edits(id3v2_edits)
    if id3v1 is not None and id3v1_edits is not None:
        id3v1.apply_edits(id3v1_edits)

    head = id3v2.to_bytes() if id3v2 is not None else b""
    tail = id3v1.to_bytes() if id3v1 is not None else b""
    return head + data[start:end] + tail


def atomic_write(path: Path, content: bytes) -> None:
    """Replace ``path`` with ``content`` through a sibling temp file and rename."""

    try:
        descriptor, temp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
    except OSError as exc:
        raise FileOpenError(path, exc) from exc

    temp_path = Path(temp_name)
    try:
        try:
            with os.fdopen(descriptor, "wb") as temp_file:
                _ = temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
        except OSError as exc:
            raise FileWriteError(temp_path, exc) from exc
        try:
            shutil.copymode(path, temp_path)
        except OSError as exc:
            raise FileStatError(path, exc) from exc
        try:
            os.replace(temp_path, path)
        except OSError as exc:
            raise FileRenameError(path, exc) from exc
    except TagError:
        temp_path.unlink(missing_ok=True)
        raise


def write_tags(
    path: Path,
    *,
    id3v1_edits: TagEdits | None = None,
    id3v2_edits: TagEdits | None = None,
) -> bool:
    """Apply tag edits to ``path``; return whether the file content changed."""

    try:
        data = path.read_bytes()
    except (FileNotFoundError, PermissionError) as exc:
        raise FileOpenError(path, exc) from exc
    except OSError as exc:
        raise FileReadError(path, exc) from exc

    content = compose_file(data, id3v1_edits, id3v2_edits)
    if content == data:
        return False
    atomic_write(path, content)
    return True


__all__ = ["TagFile", "atomic_write", "compose_file", "read_tags", "write_tags"]
