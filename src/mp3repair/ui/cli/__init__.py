"""Command line interface package."""

from mp3repair.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
