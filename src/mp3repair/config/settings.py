"""Where: src/mp3repair/config/settings.py
What: Fixed names and validated limits shared by the feature layers.
Why: Keep on-disk layout names in one place and clamp user-supplied limits.
"""

from __future__ import annotations

from typing import Final

from mp3repair.config.config import (
    DEFAULT_FILE_EXTENSION as _DEFAULT_FILE_EXTENSION,
    MAX_OPEN_FILES_DEFAULT,
    MAX_OPEN_FILES_LIMIT,
)

# Per-album directory receiving copies of files before their tags are rewritten.
BACKUP_DIR_NAME: Final[str] = "pre-repair-backup"

# Sentinel file in the state directory; present after a repair changed files.
DIRTY_FILE_NAME: Final[str] = "metadata.dirty"

DEFAULT_FILE_EXTENSION: Final[str] = _DEFAULT_FILE_EXTENSION

MAX_OPEN_FILES: Final[int] = MAX_OPEN_FILES_DEFAULT


def clamp_max_open_files(value: int | None) -> int:
    """Bound a requested read fan-out to ``1..MAX_OPEN_FILES_LIMIT``."""

    if value is None:
        return MAX_OPEN_FILES
    return max(1, min(value, MAX_OPEN_FILES_LIMIT))


__all__ = [
    "BACKUP_DIR_NAME",
    "DEFAULT_FILE_EXTENSION",
    "DIRTY_FILE_NAME",
    "MAX_OPEN_FILES",
    "clamp_max_open_files",
]
