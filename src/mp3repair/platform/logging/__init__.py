"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export the configured logger, setup helper, event ids, and Rich handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, logger, setup_logger
from .events import ReconcileEvent
from .handlers import EventRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "EventRichHandler",
    "LOGGER_NAME",
    "ReconcileEvent",
    "logger",
    "setup_logger",
]
