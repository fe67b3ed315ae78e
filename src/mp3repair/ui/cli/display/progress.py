"""Progress display functionality for CLI."""

from collections.abc import Callable
from typing import Any, final

from rich.console import Console
from rich.progress import Progress

from mp3repair.features.library.domain.models import Track
from mp3repair.platform.logging import EventRichHandler, logger

ProgressCallback = Callable[[Track], None]


def shared_console() -> Console | None:
    """Return the console used by the logger so bars and log lines interleave cleanly."""

    for handler in logger.handlers:
        if isinstance(handler, EventRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display in CLI."""

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled

    def run[T](self, total: int, work: Callable[[ProgressCallback | None], T]) -> T:
        """Run ``work`` with a callback advancing a bar over ``total`` tracks.

        Args:
            total: Number of tracks whose metadata will be read.
            work: Callable receiving the per-track progress callback.

        Returns:
            Whatever ``work`` returns.
        """
        if not self.enabled or total == 0:
            return work(None)

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        progress_console = shared_console()
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        with Progress(**progress_kwargs) as progress:
            task_id = progress.add_task("[cyan]Reading metadata...", total=total)
            done = 0

            def _cb(track: Track) -> None:
                nonlocal done
                _ = track
                done += 1
                progress.update(
                    task_id,
                    advance=1,
                    description=f"[cyan]Reading metadata... {done}/{total}",
                )

            return work(_cb)


__all__ = ["ProgressCallback", "ProgressDisplay", "shared_console"]
