"""Command line argument handling package."""

from mp3repair.ui.cli.args.options import (
    CheckArgs,
    CLIArgs,
    InspectArgs,
    ListArgs,
    PostrepairArgs,
    RepairArgs,
    ResetArgs,
    SearchOptions,
)
from mp3repair.ui.cli.args.parser import ArgumentError, ArgumentParser

__all__ = [
    "ArgumentError",
    "ArgumentParser",
    "CLIArgs",
    "CheckArgs",
    "InspectArgs",
    "ListArgs",
    "PostrepairArgs",
    "RepairArgs",
    "ResetArgs",
    "SearchOptions",
]
