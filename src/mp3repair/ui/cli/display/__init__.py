"""Display management for CLI interface."""

from mp3repair.ui.cli.display.cleanup import CleanupDisplay
from mp3repair.ui.cli.display.inspection import InspectionDisplay
from mp3repair.ui.cli.display.listing import ListingDisplay
from mp3repair.ui.cli.display.progress import ProgressDisplay
from mp3repair.ui.cli.display.report import ReportDisplay

__all__ = [
    "CleanupDisplay",
    "InspectionDisplay",
    "ListingDisplay",
    "ProgressDisplay",
    "ReportDisplay",
]
