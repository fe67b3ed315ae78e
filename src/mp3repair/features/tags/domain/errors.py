"""Summary: Exception hierarchy raised by the tag codecs and tag file I/O.
Why: Give each failure kind its own type so callers can record causes per source.
"""

from __future__ import annotations

from pathlib import Path

NO_ID3V1_METADATA: str = "no ID3V1 metadata found"
NO_ID3V2_METADATA: str = "no ID3V2 metadata found"
TRACK_NUMBER_NOT_DIGIT: str = "track number first character is not a digit"
TRACK_NUMBER_EMPTY: str = "track number is zero length"


class TagError(Exception):
    """Base class for every tag related failure."""


class TagMissingError(TagError):
    """Raised when a file carries no tag of the requested dialect."""


class TagMalformedError(TagError):
    """Raised when a tag header or frame layout is invalid."""


class TrackNumberMalformedError(TagError):
    """Raised when a ``TRCK`` body is empty or does not begin with a digit."""


class FileOperationError(TagError):
    """Base class for filesystem failures while reading or rewriting a tag file."""

    kind: str = "FileOperation"

    def __init__(self, path: Path, error: OSError | str) -> None:
        detail = (error.strerror or str(error)) if isinstance(error, OSError) else error
        super().__init__(f"{self.kind} error for {path}: {detail}")
        self.path: Path = path
        self.detail: str = str(detail)


class FileOpenError(FileOperationError):
    kind = "FileOpen"


class FileReadError(FileOperationError):
    kind = "FileRead"


class FileWriteError(FileOperationError):
    kind = "FileWrite"


class FileRenameError(FileOperationError):
    kind = "FileRename"


class FileStatError(FileOperationError):
    kind = "FileStat"


__all__ = [
    "FileOpenError",
    "FileOperationError",
    "FileReadError",
    "FileRenameError",
    "FileStatError",
    "FileWriteError",
    "NO_ID3V1_METADATA",
    "NO_ID3V2_METADATA",
    "TRACK_NUMBER_EMPTY",
    "TRACK_NUMBER_NOT_DIGIT",
    "TagError",
    "TagMalformedError",
    "TagMissingError",
    "TrackNumberMalformedError",
]
