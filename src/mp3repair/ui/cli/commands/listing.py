"""
Summary: List command printing the artists, albums and tracks of the library.
Why: Show what the scanner sees, optionally with the credit frames of each track.
"""

from __future__ import annotations

from pathlib import Path
from typing import final

from mp3repair.features.inspection.usecases.diagnostics import read_track_details
from mp3repair.features.library.usecases.listing import LibraryListing, ListingLine
from mp3repair.features.tags.domain.errors import FileOperationError
from mp3repair.platform.logging import logger
from mp3repair.ui.cli.args.options import ListArgs
from mp3repair.ui.cli.commands.executor import LibraryCommand
from mp3repair.ui.cli.display.listing import ListingDisplay


@final
class ListCommand(LibraryCommand[list[ListingLine]]):
    """Print the selected artists, albums and tracks."""

    def __init__(self, args: ListArgs) -> None:
        super().__init__(args)
        self.list_args = args
        self.display = ListingDisplay()
        self.detail_failures: list[Path] = []

    def _details(self, path: Path) -> dict[str, str]:
        try:
            return read_track_details(path)
        except FileOperationError as exc:
            logger.error("The details are not available for %s: %s", path, exc)
            self.detail_failures.append(path)
            return {}

    def execute(self) -> list[ListingLine]:
        library = self.scan()
        listing = LibraryListing(library, self.list_args.listing, details_reader=self._details)
        lines = listing.lines()
        self.display.show(lines, quiet=self.args.quiet)
        return lines
