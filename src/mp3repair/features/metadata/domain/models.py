"""
Summary: Unified per-track metadata record holding both tag dialects side by side.
Why: Originals and corrections are tracked per source next to their error causes.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Final

from mp3repair.features.tags.domain.edits import TagEdits


class Source(IntEnum):
    """Tag dialect a value was read from."""

    V1 = 0
    V2 = 1

    @property
    def label(self) -> str:
        return "ID3V1" if self is Source.V1 else "ID3V2"


SOURCES: Final[tuple[Source, ...]] = (Source.V1, Source.V2)


@dataclass(slots=True)
class ByTag[T]:
    """A pair of values indexed by ``Source``."""

    v1: T
    v2: T

    def __getitem__(self, source: Source) -> T:
        return self.v1 if source is Source.V1 else self.v2

    def __setitem__(self, source: Source, value: T) -> None:
        if source is Source.V1:
            self.v1 = value
        else:
            self.v2 = value


@dataclass(slots=True)
class TagFields:
    """Values as stored in one tag; ``mcdi`` is only ever set for ID3v2."""

    artist: str = ""
    album: str = ""
    title: str = ""
    genre: str = ""
    year: str = ""
    track_number: int = 0
    mcdi: bytes = b""


@dataclass(slots=True)
class Corrections:
    """Replacement values; ``None`` means the stored value is kept."""

    artist: str | None = None
    album: str | None = None
    title: str | None = None
    genre: str | None = None
    year: str | None = None
    track_number: int | None = None
    mcdi: bytes | None = None

    def to_edits(self) -> TagEdits:
        return TagEdits(**{item.name: getattr(self, item.name) for item in fields(self)})


FIELD_NAMES: Final[tuple[str, ...]] = tuple(item.name for item in fields(TagFields))


class TrackMetadata:
    """Both tag views of one track plus the corrections computed for them."""

    __slots__ = ("original", "corrected", "error_cause", "edit_required")

    def __init__(self) -> None:
        self.original: ByTag[TagFields] = ByTag(TagFields(), TagFields())
        self.corrected: ByTag[Corrections] = ByTag(Corrections(), Corrections())
        self.error_cause: ByTag[str] = ByTag("", "")
        self.edit_required: ByTag[bool] = ByTag(False, False)

    # Mutation ----------------------------------------------------------------

    def set_fields(self, source: Source, values: TagFields) -> None:
        self.original[source] = values

    def set_field(self, source: Source, name: str, value: str | int | bytes) -> None:
        setattr(self.original[source], name, value)

    def correct_field(self, source: Source, name: str, value: str | int | bytes) -> None:
        setattr(self.corrected[source], name, value)

    def set_error(self, source: Source, cause: str) -> None:
        """Record why ``source`` could not be read; its view is reset to empty."""

        self.error_cause[source] = cause
        self.original[source] = TagFields()

    def set_edit_required(self, source: Source) -> None:
        self.edit_required[source] = True

    # Queries -----------------------------------------------------------------

    def has_error(self, source: Source) -> bool:
        return bool(self.error_cause[source])

    @property
    def canonical_source(self) -> Source | None:
        """The trusted view: ID3v2 when readable, else ID3v1, else none."""

        if not self.has_error(Source.V2):
            return Source.V2
        if not self.has_error(Source.V1):
            return Source.V1
        return None

    def is_valid(self) -> bool:
        return self.canonical_source is not None

    def error_causes(self) -> list[str]:
        return [self.error_cause[source] for source in SOURCES if self.error_cause[source]]

    def requires_edit(self) -> bool:
        return self.edit_required.v1 or self.edit_required.v2

    def edits_for(self, source: Source) -> TagEdits | None:
        if not self.edit_required[source]:
            return None
        return self.corrected[source].to_edits()

    def _canonical(self) -> TagFields:
        source = self.canonical_source
        if source is None:
            return TagFields()
        return self.original[source]

    @property
    def canonical_artist(self) -> str:
        return self._canonical().artist

    @property
    def canonical_album(self) -> str:
        return self._canonical().album

    @property
    def canonical_title(self) -> str:
        return self._canonical().title

    @property
    def canonical_genre(self) -> str:
        return self._canonical().genre

    @property
    def canonical_year(self) -> str:
        return self._canonical().year

    @property
    def canonical_track_number(self) -> int:
        return self._canonical().track_number

    @property
    def canonical_mcdi(self) -> bytes:
        return self._canonical().mcdi

    def __repr__(self) -> str:
        return (
            f"TrackMetadata(canonical_source={self.canonical_source!r}, "
            f"errors={self.error_causes()!r}, edit_required={self.edit_required!r})"
        )


__all__ = [
    "ByTag",
    "Corrections",
    "FIELD_NAMES",
    "SOURCES",
    "Source",
    "TagFields",
    "TrackMetadata",
]
