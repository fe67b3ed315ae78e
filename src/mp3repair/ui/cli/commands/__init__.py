"""Command execution package for CLI."""

from mp3repair.ui.cli.commands.check import CheckCommand
from mp3repair.ui.cli.commands.executor import LibraryCommand
from mp3repair.ui.cli.commands.inspect import InspectCommand
from mp3repair.ui.cli.commands.listing import ListCommand
from mp3repair.ui.cli.commands.postrepair import PostrepairCommand
from mp3repair.ui.cli.commands.repair import RepairCommand
from mp3repair.ui.cli.commands.reset import ResetCommand

__all__ = [
    "CheckCommand",
    "InspectCommand",
    "LibraryCommand",
    "ListCommand",
    "PostrepairCommand",
    "RepairCommand",
    "ResetCommand",
]
