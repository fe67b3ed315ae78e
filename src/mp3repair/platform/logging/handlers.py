"""Rich console handler that renders structured reconcile and repair events."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

from .events import ReconcileEvent


class EventRichHandler(RichHandler):
    """Rich handler that styles records carrying an ``event`` extra."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        ReconcileEvent.TRACK_READ_ERROR: ("⛔", "red"),
        ReconcileEvent.NO_CONSENSUS: ("⚖️", "yellow"),
        ReconcileEvent.TRACK_FIXED: ("🎉", "green"),
        ReconcileEvent.TRACK_FAILED: ("❌", "red"),
        ReconcileEvent.BACKUP_CREATED: ("📦", "magenta"),
        ReconcileEvent.BACKUP_FAILED: ("❌", "red"),
        ReconcileEvent.DIRTY_MARKED: ("🏷️", "cyan"),
        ReconcileEvent.BACKUP_DELETED: ("🧹", "green"),
        ReconcileEvent.BACKUP_DELETE_FAILED: ("❌", "red"),
        ReconcileEvent.DIRTY_CLEARED: ("✅", "green"),
        ReconcileEvent.STATE_UNAVAILABLE: ("ℹ️", "yellow"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        ReconcileEvent.TRACK_READ_ERROR: "Could not read ",
        ReconcileEvent.TRACK_FIXED: "Repaired ",
        ReconcileEvent.TRACK_FAILED: "Failed to repair ",
        ReconcileEvent.BACKUP_CREATED: "Backed up ",
        ReconcileEvent.BACKUP_FAILED: "Could not back up ",
        ReconcileEvent.DIRTY_MARKED: "Marked metadata dirty ",
        ReconcileEvent.BACKUP_DELETED: "Deleted ",
        ReconcileEvent.BACKUP_DELETE_FAILED: "Could not delete ",
        ReconcileEvent.DIRTY_CLEARED: "Cleared dirty marker ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Render ``path`` relative to ``base`` when possible, keeping the last segments.

        Args:
            path: Absolute or relative path string to format.
            base: Optional base path used to relativize ``path``.

        Returns:
            Text: Styled path with magenta separators and ellipsis truncation.
        """
        pure_path = self._to_pure_path(path)
        if base:
            base_path = self._to_pure_path(base)
            if pure_path.is_relative_to(base_path) and pure_path != base_path:
                pure_path = pure_path.relative_to(base_path)

        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        parts = [part for part in pure_path.parts if part and part != anchor]
        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT :]

        display = ""
        if anchor and not truncated:
            display = anchor.rstrip("\\/") + separator
        if truncated:
            display += "…" + separator
        display += separator.join(parts) or "."

        text = Text()
        for char in display:
            if char in {separator, "…"}:
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_event_message(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render structured events with an icon, colour, and compact path."""

        event = getattr(record, "event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        path = getattr(record, "path", None)
        prefix = self._EVENT_PREFIXES.get(event)
        if prefix is None or path is None:
            _ = body.append(message)
        else:
            _ = body.append(prefix)
            _ = body.append_text(
                self._format_path(str(path), base=getattr(record, "base_path", None))
            )
            details: list[str] = []
            error_message = getattr(record, "error_message", None)
            if error_message:
                details.append(str(error_message))
            destination = getattr(record, "destination", None)
            if destination:
                details.append(f"→ {destination}")
            if details:
                _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        event_text = self._render_event_message(record, message)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["EventRichHandler"]
