"""Postrepair command implementation for the CLI."""

from __future__ import annotations

from typing import final

from mp3repair.features.backup.usecases.backup import CleanupResult, cleanup_album
from mp3repair.ui.cli.args.options import PostrepairArgs
from mp3repair.ui.cli.commands.executor import LibraryCommand
from mp3repair.ui.cli.display.cleanup import CleanupDisplay


@final
class PostrepairCommand(LibraryCommand[list[CleanupResult]]):
    """Delete the backup directory of every selected album."""

    def __init__(self, args: PostrepairArgs) -> None:
        super().__init__(args)
        self.display = CleanupDisplay()

    def execute(self) -> list[CleanupResult]:
        library = self.scan()
        results = [cleanup_album(album.path) for album in library.albums]
        self.display.show_results(library.root, results, quiet=self.args.quiet)
        return results
