"""mp3repair: reconcile MP3 ID3 tags with the artist/album/track directory layout."""

__version__ = "0.1.0"
