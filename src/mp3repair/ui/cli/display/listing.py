"""Display utilities for library listings."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from mp3repair.features.library.usecases.listing import ListingLine


@final
class ListingDisplay:
    """Print listing lines with their indentation."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show(self, lines: list[ListingLine], *, quiet: bool = False) -> None:
        if quiet:
            return
        if not lines:
            self.console.print("[yellow]Nothing to list.[/yellow]")
            return
        for line in lines:
            self.console.print(f"{' ' * line.indent}{escape(line.text)}", highlight=False)


__all__ = ["ListingDisplay"]
