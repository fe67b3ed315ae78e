"""Tests for the ``EventRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from mp3repair.platform.logging import EventRichHandler, ReconcileEvent


def _make_handler() -> EventRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return EventRichHandler(console=console)


def _build_record(msg: str = "", **extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with event extras for testing."""

    record = logging.LogRecord(
        name="mp3repair",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_fixed_event_uses_relative_path() -> None:
    handler = _make_handler()
    record = _build_record(
        event=ReconcileEvent.TRACK_FIXED,
        path="/music/Band/Record/01 Song.mp3",
        base_path="/music",
    )

    rendered = handler.render_message(record, "Repaired /music/Band/Record/01 Song.mp3")

    assert isinstance(rendered, Text)
    assert rendered.plain == "🎉 Repaired Band/Record/01 Song.mp3"


def test_long_paths_are_truncated_with_ellipsis() -> None:
    handler = _make_handler()
    record = _build_record(
        event=ReconcileEvent.TRACK_FAILED,
        path="/home/user/music/Band/Record/Disc/01 Song.mp3",
        error_message="FileWrite error: disk full",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain == "❌ Failed to repair …/Band/Record/Disc/01 Song.mp3 (FileWrite error: disk full)"


def test_backup_event_shows_destination() -> None:
    handler = _make_handler()
    record = _build_record(
        event=ReconcileEvent.BACKUP_CREATED,
        path="/music/A/B/01 x.mp3",
        destination="/music/A/B/pre-repair-backup/01 x.mp3",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("(→ /music/A/B/pre-repair-backup/01 x.mp3)")


def test_event_without_prefix_keeps_message() -> None:
    handler = _make_handler()
    record = _build_record(event=ReconcileEvent.NO_CONSENSUS)

    rendered = handler.render_message(record, "There are multiple genre fields")

    assert isinstance(rendered, Text)
    assert rendered.plain == "⚖️ There are multiple genre fields"


def test_plain_records_fall_back_to_rich() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"


def test_windows_paths_are_supported() -> None:
    handler = _make_handler()
    record = _build_record(
        event=ReconcileEvent.BACKUP_DELETED,
        path="C:\\Music\\Band\\Record\\pre-repair-backup",
        base_path="C:\\Music",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain == "🧹 Deleted Band\\Record\\pre-repair-backup"
