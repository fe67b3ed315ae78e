"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from mp3repair.features.library.usecases.listing import ListingOptions


@final
@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Which part of the library a command walks."""

    top_dir: Path
    file_extension: str
    artist_filter: str
    album_filter: str
    max_open_files: int


@final
@dataclass(slots=True)
class CheckArgs:
    """Command line arguments for the ``check`` subcommand."""

    command: Literal["check"]
    search: SearchOptions
    empty: bool
    files: bool
    numbering: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class RepairArgs:
    """Command line arguments for the ``repair`` subcommand."""

    command: Literal["repair"]
    search: SearchOptions
    state_dir: Path
    dry_run: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class PostrepairArgs:
    """Command line arguments for the ``postrepair`` subcommand."""

    command: Literal["postrepair"]
    search: SearchOptions
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ListArgs:
    """Command line arguments for the ``list`` subcommand."""

    command: Literal["list"]
    search: SearchOptions
    listing: ListingOptions
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class InspectArgs:
    """Command line arguments for the ``inspect`` subcommand."""

    command: Literal["inspect"]
    files: list[Path]
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ResetArgs:
    """Command line arguments for the ``reset`` subcommand."""

    command: Literal["reset"]
    state_dir: Path
    verbose: bool
    quiet: bool


CLIArgs = CheckArgs | RepairArgs | PostrepairArgs | ListArgs | InspectArgs | ResetArgs

__all__ = [
    "CLIArgs",
    "CheckArgs",
    "InspectArgs",
    "ListArgs",
    "PostrepairArgs",
    "RepairArgs",
    "ResetArgs",
    "SearchOptions",
]
