"""Shared pytest fixtures building synthetic MP3 files and library trees."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest

from mp3_builders import TrackWriter, build_id3v1, build_id3v2, text_frames, write_mp3
from mp3repair.config.config import Config


@pytest.fixture
def music_root(tmp_path: Path) -> Path:
    root = tmp_path / "Music"
    root.mkdir()
    return root


@pytest.fixture
def make_track(music_root: Path) -> TrackWriter:
    """Write ``<root>/<artist>/<album>/<NN title>.mp3`` whose tags agree by default.

    ``v2`` and ``v1`` override individual tag values; a ``None`` value in ``v2``
    omits that frame.
    """

    def _make(
        artist: str,
        album: str,
        number: int,
        title: str,
        *,
        v2: dict[str, str | None] | None = None,
        v1: dict[str, str | int] | None = None,
        version: int = 3,
        extra_frames: Sequence[tuple[str, bytes]] = (),
        file_name: str | None = None,
    ) -> Path:
        v2_values: dict[str, str | None] = {
            "artist": artist,
            "album": album,
            "title": title,
            "track": str(number),
        }
        if v2 is not None:
            v2_values.update(v2)
        present = {key: value for key, value in v2_values.items() if value is not None}
        frames = [*text_frames(**present), *extra_frames]

        v1_values: dict[str, str | int] = {
            "artist": artist,
            "album": album,
            "title": title,
            "track": number,
        }
        if v1 is not None:
            v1_values.update(v1)

        name = file_name or f"{number:02d} {title}.mp3"
        return write_mp3(
            music_root / artist / album / name,
            v2=build_id3v2(frames, version=version, padding=32),
            v1=build_id3v1(**v1_values),  # pyright: ignore[reportArgumentType]
        )

    return _make


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    repo = tmp_path / "repo"
    repo.mkdir()
    _ = (repo / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import mp3repair.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return repo

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    monkeypatch.delenv(paths.ENV_STATE_DIR, raising=False)
    return repo


@pytest.fixture
def fresh_config() -> Iterator[None]:
    """Reset the configuration singleton around a test run."""

    Config.reset()
    try:
        yield None
    finally:
        Config.reset()
