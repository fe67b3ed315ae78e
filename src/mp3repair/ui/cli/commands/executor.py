"""src/mp3repair/ui/cli/commands/executor.py
What: Provide shared wiring for commands that walk the music library.
Why: Scanning and reconciler construction are identical across check and repair.
"""

from abc import ABC, abstractmethod

from mp3repair.features.library.domain.models import Library
from mp3repair.features.library.usecases.scanner import ScanRequest, scan_library
from mp3repair.features.reconciliation.usecases.reconciler import Reconciler
from mp3repair.ui.cli.args.options import CheckArgs, ListArgs, PostrepairArgs, RepairArgs
from mp3repair.ui.cli.display.progress import ProgressDisplay
from mp3repair.ui.cli.display.report import ReportDisplay

LibraryArgs = CheckArgs | RepairArgs | PostrepairArgs | ListArgs


class LibraryCommand[R](ABC):
    """Base class for commands operating on a scanned library."""

    args: LibraryArgs
    progress_display: ProgressDisplay
    report_display: ReportDisplay

    def __init__(self, args: LibraryArgs) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
        """
        self.args = args
        self.progress_display = ProgressDisplay(enabled=not args.quiet)
        self.report_display = ReportDisplay()

    def scan(self, *, include_empty: bool = False) -> Library:
        """Build the library described by the search options.

        Args:
            include_empty: Keep artist and album directories that hold no tracks.

        Raises:
            ScanError: If the top directory, extension or filters are unusable.
        """
        search = self.args.search
        return scan_library(
            ScanRequest(
                root=search.top_dir,
                file_extension=search.file_extension,
                artist_filter=search.artist_filter,
                album_filter=search.album_filter,
                include_empty=include_empty,
            )
        )

    def reconciler(self, library: Library) -> Reconciler:
        return Reconciler(library, max_open_files=self.args.search.max_open_files)

    @abstractmethod
    def execute(self) -> R:
        """Execute the command."""


__all__ = ["LibraryArgs", "LibraryCommand"]
