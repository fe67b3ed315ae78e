"""
Summary: Populate a TrackMetadata record from the tags stored in one file.
Why: Convert raised codec and file errors into per-source error causes.
"""

from __future__ import annotations

from pathlib import Path

from mp3repair.features.metadata.domain.models import Source, TagFields, TrackMetadata
from mp3repair.features.tags.adapters.tag_file import TagFile, read_tags
from mp3repair.features.tags.domain.errors import (
    NO_ID3V1_METADATA,
    NO_ID3V2_METADATA,
    FileOperationError,
    TagError,
)
from mp3repair.features.tags.domain.id3v1 import ID3v1Tag
from mp3repair.features.tags.domain.id3v2 import read_view
from mp3repair.platform.logging import logger


def id3v1_fields(tag: ID3v1Tag) -> TagFields:
    track, _ = tag.read_track()
    genre, _ = tag.read_genre()
    return TagFields(
        artist=tag.artist,
        album=tag.album,
        title=tag.title,
        genre=genre,
        year=tag.year,
        track_number=track,
    )


def metadata_from_tags(tags: TagFile) -> TrackMetadata:
    """Build a record from an already-read ``TagFile``."""

    metadata = TrackMetadata()

    if tags.id3v1 is not None:
        metadata.set_fields(Source.V1, id3v1_fields(tags.id3v1))
    else:
        metadata.set_error(Source.V1, str(tags.id3v1_error or NO_ID3V1_METADATA))

    if tags.id3v2 is not None:
        try:
            view = read_view(tags.id3v2)
        except TagError as exc:
            metadata.set_error(Source.V2, str(exc))
        else:
            metadata.set_fields(
                Source.V2,
                TagFields(
                    artist=view.artist,
                    album=view.album,
                    title=view.title,
                    genre=view.genre,
                    year=view.year,
                    track_number=view.track_number,
                    mcdi=view.mcdi,
                ),
            )
    else:
        metadata.set_error(Source.V2, str(tags.id3v2_error or NO_ID3V2_METADATA))
    return metadata


def load_metadata(path: Path) -> TrackMetadata:
    """Read ``path`` and return its metadata record; never raises ``TagError``."""

    try:
        tags = read_tags(path)
    except FileOperationError as exc:
        logger.debug("Could not read tags from %s: %s", path, exc)
        metadata = TrackMetadata()
        for source in (Source.V1, Source.V2):
            metadata.set_error(source, str(exc))
        return metadata
    return metadata_from_tags(tags)


__all__ = ["id3v1_fields", "load_metadata", "metadata_from_tags"]
