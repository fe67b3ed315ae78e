"""Inspect command implementation for the CLI."""

from __future__ import annotations

from typing import final

from mp3repair.features.inspection.usecases.diagnostics import FileDiagnostics, inspect_file
from mp3repair.ui.cli.args.options import InspectArgs
from mp3repair.ui.cli.display.inspection import InspectionDisplay


@final
class InspectCommand:
    """Dump the tags of each named file."""

    def __init__(self, args: InspectArgs) -> None:
        self.args = args
        self.display = InspectionDisplay()

    def execute(self) -> list[FileDiagnostics]:
        results = [inspect_file(path) for path in self.args.files]
        self.display.show_all(results, quiet=self.args.quiet)
        return results
