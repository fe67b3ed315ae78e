"""Display utilities for postrepair results."""

from __future__ import annotations

from pathlib import Path
from typing import final

from rich.console import Console
from rich.markup import escape

from mp3repair.features.backup.usecases.backup import CleanupResult
from mp3repair.ui.cli.display.summary import relative_display_path


@final
class CleanupDisplay:
    """Print a summary of backup directories removed by postrepair."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_results(self, root: Path, results: list[CleanupResult], *, quiet: bool = False) -> None:
        if quiet:
            return

        deleted = sum(1 for result in results if result.deleted)
        failed = [result for result in results if result.error is not None]

        self.console.print("\n[bold]Postrepair Summary:[/bold]")
        self.console.print(f"Albums examined: {len(results)}")
        self.console.print(f"[green]Backup directories deleted: {deleted}[/green]")
        if failed:
            self.console.print(f"[red]Failed: {len(failed)}[/red]")
            for result in failed:
                self.console.print(
                    f"[red]  • {escape(relative_display_path(root, result.album_path))}: "
                    f"{escape(result.error or 'unknown error')}[/red]",
                    highlight=False,
                )


__all__ = ["CleanupDisplay"]
