"""Display utilities for check and repair results."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from mp3repair.features.library.domain.models import Library
from mp3repair.features.library.usecases.layout_checks import IssueKind, LayoutIssue
from mp3repair.features.reconciliation.domain.models import (
    ReconcileSummary,
    TrackAssessment,
    TrackStatus,
)
from mp3repair.ui.cli.display.summary import relative_display_path, render_reconcile_summary


def _layout_order(issue: LayoutIssue) -> tuple[bool, str, str]:
    album_name = issue.album.name if issue.album is not None else ""
    return (issue.album is not None, album_name, issue.message)


@final
class ReportDisplay:
    """Render per-track differences grouped by artist and album."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _reported(self, summary: ReconcileSummary) -> list[TrackAssessment]:
        return [
            item
            for item in summary.assessments
            if item.report and item.status is not TrackStatus.CLEAN
        ]

    def build_tree(self, library: Library, assessments: list[TrackAssessment]) -> Tree:
        """Group assessments under artist and album branches, in library order."""

        tree = Tree(f"[bold]{escape(str(library.root))}[/bold]")
        album_branches: dict[int, Tree] = {}
        artist_branches: dict[int, Tree] = {}
        for item in assessments:
            album = library.album_of(item.track)
            artist = library.artist_of(album)
            artist_branch = artist_branches.get(artist.artist_id)
            if artist_branch is None:
                artist_branch = tree.add(f"[bold magenta]{escape(artist.name)}[/bold magenta]")
                artist_branches[artist.artist_id] = artist_branch
            album_branch = album_branches.get(album.album_id)
            if album_branch is None:
                album_branch = artist_branch.add(f"[magenta]{escape(album.name)}[/magenta]")
                album_branches[album.album_id] = album_branch
            colour = "yellow" if item.status is TrackStatus.NO_METADATA else "cyan"
            track_branch = album_branch.add(f"[{colour}]{escape(item.track.file_name)}[/{colour}]")
            for line in item.report:
                _ = track_branch.add(escape(line))
        return tree

    def show_check(self, library: Library, summary: ReconcileSummary, *, quiet: bool = False) -> None:
        """Print every track's differences followed by a summary."""

        if quiet:
            return
        reported = self._reported(summary)
        if reported:
            self.console.print(self.build_tree(library, reported))
        else:
            self.console.print("[green]No differences found.[/green]")
        render_reconcile_summary(self.console, summary, library.root)

    def build_layout_tree(self, library: Library, issues: list[LayoutIssue]) -> Tree:
        """Group layout issues under artist and album branches, sorted by name."""

        tree = Tree(f"[bold]{escape(str(library.root))}[/bold]")
        by_artist: dict[str, list[LayoutIssue]] = {}
        for issue in issues:
            by_artist.setdefault(issue.artist.name, []).append(issue)
        for artist_name in sorted(by_artist):
            artist_branch = tree.add(f"[bold magenta]{escape(artist_name)}[/bold magenta]")
            album_branches: dict[str, Tree] = {}
            for issue in sorted(by_artist[artist_name], key=_layout_order):
                line = f"[yellow]{escape(f'[{issue.kind}] {issue.message}')}[/yellow]"
                if issue.album is None:
                    _ = artist_branch.add(line)
                    continue
                branch = album_branches.get(issue.album.name)
                if branch is None:
                    branch = artist_branch.add(f"[magenta]{escape(issue.album.name)}[/magenta]")
                    album_branches[issue.album.name] = branch
                _ = branch.add(line)
        return tree

    def show_layout(
        self,
        library: Library,
        issues: list[LayoutIssue],
        *,
        empty: bool,
        numbering: bool,
        quiet: bool = False,
    ) -> None:
        """Print empty-directory and numbering findings, or say that none were found."""

        if quiet:
            return
        if issues:
            self.console.print(self.build_layout_tree(library, issues))
        kinds = {issue.kind for issue in issues}
        if empty and IssueKind.EMPTY not in kinds:
            self.console.print("[green]Empty Folder Analysis: no empty folders found[/green]")
        if numbering and IssueKind.NUMBERING not in kinds:
            self.console.print(
                "[green]Numbering Analysis: no missing or duplicate tracks found[/green]"
            )

    def show_dry_run(self, library: Library, summary: ReconcileSummary, *, quiet: bool = False) -> None:
        """Print the tracks a repair would rewrite, one line each."""

        if quiet:
            return
        pending = summary.needing_edit
        if pending:
            self.console.print("[bold]Tracks that would be repaired:[/bold]")
            for item in pending:
                self.console.print(
                    f"  • {escape(relative_display_path(library.root, item.track.path))}",
                    highlight=False,
                )
        else:
            self.console.print("[green]Nothing to repair.[/green]")
        render_reconcile_summary(self.console, summary, library.root)

    def show_repair(self, library: Library, summary: ReconcileSummary, *, quiet: bool = False) -> None:
        if quiet:
            return
        render_reconcile_summary(self.console, summary, library.root)


__all__ = ["ReportDisplay"]
