"""Display utilities for the inspect command."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mp3repair.features.inspection.usecases.diagnostics import FileDiagnostics


@final
class InspectionDisplay:
    """Print per-file tag dumps."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _stream_table(self, diagnostics: FileDiagnostics) -> Table | None:
        stream = diagnostics.stream
        if stream is None:
            return None
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        minutes, seconds = divmod(stream.length_seconds, 60)
        table.add_row("Length", f"{int(minutes)}:{seconds:06.3f}")
        table.add_row("Bitrate", f"{stream.bitrate // 1000} kbps")
        table.add_row("Sample rate", f"{stream.sample_rate} Hz")
        table.add_row("Channels", str(stream.channels))
        return table

    def show(self, diagnostics: FileDiagnostics) -> None:
        console = self.console
        console.print(f"\n[bold]{escape(str(diagnostics.path))}[/bold]")
        if diagnostics.error is not None:
            console.print(f"[red]  {escape(diagnostics.error)}[/red]")
            return

        console.print("[bold cyan]ID3V1[/bold cyan]")
        if diagnostics.id3v1_error is not None:
            console.print(f"[yellow]  {escape(diagnostics.id3v1_error)}[/yellow]")
        for line in diagnostics.id3v1_lines:
            console.print(f"  {escape(line)}", highlight=False)

        if diagnostics.id3v2_version is not None:
            console.print(f"[bold cyan]ID3V2 {diagnostics.id3v2_version}[/bold cyan]")
        else:
            console.print("[bold cyan]ID3V2[/bold cyan]")
        if diagnostics.id3v2_error is not None:
            console.print(f"[yellow]  {escape(diagnostics.id3v2_error)}[/yellow]")
        for line in diagnostics.id3v2_lines:
            console.print(f"  {escape(line)}", highlight=False)

        console.print("[bold cyan]Stream[/bold cyan]")
        table = self._stream_table(diagnostics)
        if table is not None:
            console.print(table)
        elif diagnostics.stream_error is not None:
            console.print(f"[yellow]  {escape(diagnostics.stream_error)}[/yellow]")

    def show_all(self, results: list[FileDiagnostics], *, quiet: bool = False) -> None:
        if quiet:
            return
        for diagnostics in results:
            self.show(diagnostics)


__all__ = ["InspectionDisplay"]
