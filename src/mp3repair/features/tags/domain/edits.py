"""Summary: Value object describing the field rewrites requested for one tag.
Why: Let the codecs apply corrections without depending on the metadata model.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TagEdits:
    """Fields to rewrite; ``None`` leaves the stored value untouched."""

    artist: str | None = None
    album: str | None = None
    title: str | None = None
    genre: str | None = None
    year: str | None = None
    track_number: int | None = None
    mcdi: bytes | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.artist,
                self.album,
                self.title,
                self.genre,
                self.year,
                self.track_number,
                self.mcdi,
            )
        )


__all__ = ["TagEdits"]
