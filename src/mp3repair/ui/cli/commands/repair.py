"""
Summary: Repair command rewriting disagreeing tags, or listing them on a dry run.
Why: Keep backup, write and dirty-marker handling behind one entry point.
"""

from __future__ import annotations

from typing import final

from mp3repair.features.reconciliation.domain.models import ReconcileSummary
from mp3repair.features.state.usecases.dirty import open_dirty_marker
from mp3repair.ui.cli.args.options import RepairArgs
from mp3repair.ui.cli.commands.executor import LibraryCommand
from mp3repair.ui.cli.display.progress import ProgressCallback


@final
class RepairCommand(LibraryCommand[ReconcileSummary]):
    """Back up and rewrite every track whose tags disagree with the library layout."""

    def __init__(self, args: RepairArgs) -> None:
        super().__init__(args)
        self.repair_args = args

    def execute(self) -> ReconcileSummary:
        library = self.scan()
        reconciler = self.reconciler(library)
        marker = open_dirty_marker(self.repair_args.state_dir)

        def _run(progress: ProgressCallback | None) -> ReconcileSummary:
            return reconciler.repair(marker, dry_run=self.repair_args.dry_run, progress=progress)

        summary = self.progress_display.run(len(library.tracks), _run)
        if summary.dry_run:
            self.report_display.show_dry_run(library, summary, quiet=self.args.quiet)
        else:
            self.report_display.show_repair(library, summary, quiet=self.args.quiet)
        return summary
