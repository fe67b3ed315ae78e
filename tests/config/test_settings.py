"""Tests for fixed layout names and limits."""

import pytest

from mp3repair.config.settings import BACKUP_DIR_NAME, DIRTY_FILE_NAME, clamp_max_open_files


def test_layout_names() -> None:
    assert BACKUP_DIR_NAME == "pre-repair-backup"
    assert DIRTY_FILE_NAME == "metadata.dirty"


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(None, 20), (0, 1), (-5, 1), (1, 1), (12, 12), (20, 20), (21, 20), (1000, 20)],
)
def test_clamp_max_open_files(requested: int | None, expected: int) -> None:
    assert clamp_max_open_files(requested) == expected
