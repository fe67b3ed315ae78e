"""Utilities for rendering shared CLI display content."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from mp3repair.features.reconciliation.domain.models import ReconcileSummary, TrackStatus


def relative_display_path(root: Path, candidate: Path) -> str:
    """Render a candidate path relative to the root when possible."""

    try:
        return str(candidate.relative_to(root))
    except ValueError:
        return str(candidate)


def render_reconcile_summary(console: Console, summary: ReconcileSummary, root: Path) -> None:
    """Render per-status track counts followed by any failures.

    Args:
        console: Rich console instance used to render output.
        summary: Outcome of a check or repair run.
        root: Library root used to shorten failure paths.
    """
    total = len(summary.assessments)
    clean = sum(1 for item in summary.assessments if item.status is TrackStatus.CLEAN)
    needing_edit = len(summary.needing_edit)
    without_metadata = len(summary.without_metadata)
    unreadable = len(summary.unreadable)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"Tracks checked: {total}")
    console.print(f"[green]Clean: {clean}[/green]")
    if without_metadata:
        console.print(f"[yellow]Without usable metadata: {without_metadata}[/yellow]")
    if unreadable:
        console.print(f"[red]Unreadable: {unreadable}[/red]")

    if not summary.repairs:
        label = "Would repair" if summary.dry_run else "Needing repair"
        console.print(f"[cyan]{label}: {needing_edit}[/cyan]")
        return

    console.print(f"[green]Fixed: {len(summary.fixed)}[/green]")
    failed = summary.failed
    if not failed:
        return

    console.print(f"[red]Failed: {len(failed)}[/red]")
    for result in failed:
        console.print(
            f"[red]  • {escape(relative_display_path(root, result.track.path))}: "
            f"{escape(result.error or 'unknown error')}[/red]",
            highlight=False,
        )


__all__ = ["relative_display_path", "render_reconcile_summary"]
