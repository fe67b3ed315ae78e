"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import shutil
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def remove_tree(directory: Path) -> bool:
    """Delete ``directory`` and its contents; return ``False`` when it did not exist."""

    if not directory.exists():
        return False
    if not directory.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
    shutil.rmtree(directory)
    return True


__all__ = ["ensure_directory", "remove_tree"]
