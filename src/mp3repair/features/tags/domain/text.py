"""
Summary: Text helpers shared by both tag dialects and the difference engine.
Why: Keep BOM handling and Latin-1 folding in one place.
"""

from __future__ import annotations

import json
from typing import Final

from unidecode import unidecode

BYTE_ORDER_MARK: Final[str] = "\ufeff"

_ILLEGAL_FILENAME_CHARACTERS: Final[frozenset[str]] = frozenset('<>:"/\\|?*')


def remove_leading_boms(value: str) -> str:
    """Strip every leading U+FEFF from ``value``."""

    return value.lstrip(BYTE_ORDER_MARK)


def is_illegal_in_filenames(character: str) -> bool:
    """Return whether ``character`` cannot appear in a file or directory name."""

    if ord(character) <= 31:
        return True
    return character in _ILLEGAL_FILENAME_CHARACTERS


def to_latin1(value: str) -> str:
    """Fold ``value`` into characters representable in ISO-8859-1.

    Characters already inside Latin-1 are kept; anything else is transliterated
    to ASCII so that ID3v1 fields never lose a character silently.
    """

    folded: list[str] = []
    for character in value:
        if ord(character) <= 0xFF:
            folded.append(character)
        else:
            folded.append(unidecode(character))
    return "".join(folded)


def quote(value: str) -> str:
    """Render ``value`` inside double quotes with escapes for diagnostics."""

    return json.dumps(value, ensure_ascii=False)


__all__ = [
    "BYTE_ORDER_MARK",
    "is_illegal_in_filenames",
    "quote",
    "remove_leading_boms",
    "to_latin1",
]
