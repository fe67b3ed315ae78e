"""
Summary: Check command running the empty-directory, numbering and tag analyses selected on the command line.
Why: Report every problem without touching a file so the user can decide whether to repair.
"""

from __future__ import annotations

from typing import final

from mp3repair.features.library.usecases.layout_checks import (
    LayoutIssue,
    find_empty_directories,
    find_numbering_issues,
)
from mp3repair.features.reconciliation.domain.models import ReconcileSummary
from mp3repair.ui.cli.args.options import CheckArgs
from mp3repair.ui.cli.commands.executor import LibraryCommand


@final
class CheckCommand(LibraryCommand[ReconcileSummary]):
    """Report layout problems and tracks whose tags disagree with the library layout."""

    def __init__(self, args: CheckArgs) -> None:
        super().__init__(args)
        self.check_args = args

    def execute(self) -> ReconcileSummary:
        args = self.check_args
        library = self.scan(include_empty=args.empty)

        if args.empty or args.numbering:
            issues: list[LayoutIssue] = []
            if args.empty:
                issues.extend(find_empty_directories(library))
            if args.numbering:
                issues.extend(find_numbering_issues(library))
            self.report_display.show_layout(
                library,
                issues,
                empty=args.empty,
                numbering=args.numbering,
                quiet=args.quiet,
            )

        if not args.files:
            return ReconcileSummary()
        reconciler = self.reconciler(library)
        summary = self.progress_display.run(len(library.tracks), reconciler.check)
        self.report_display.show_check(library, summary, quiet=args.quiet)
        return summary
