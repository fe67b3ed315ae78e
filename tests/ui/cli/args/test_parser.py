"""Tests for command line argument parser."""

import logging
from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from mp3repair.features.library.usecases.listing import ListingOptions, TrackSort
from mp3repair.platform.logging import DEFAULT_LOG_FILE
from mp3repair.ui.cli.args import (
    ArgumentError,
    ArgumentParser,
    CheckArgs,
    InspectArgs,
    ListArgs,
    PostrepairArgs,
    RepairArgs,
    ResetArgs,
)


@pytest.fixture
def mock_config(mocker: MockerFixture) -> MagicMock:
    """Patch configuration loading with default values."""

    config = mocker.patch("mp3repair.ui.cli.args.parser.Config")
    loaded = config.load.return_value
    loaded.log_file = None
    loaded.resolved_music_root = Path("/library")
    loaded.file_extension = ".mp3"
    loaded.artist_filter = ".*"
    loaded.album_filter = ".*"
    loaded.max_open_files = 20
    loaded.state_dir = None
    return config


@pytest.fixture
def mock_setup_logger(mocker: MockerFixture) -> MagicMock:
    return mocker.patch("mp3repair.ui.cli.args.parser.setup_logger")


def test_create_parser() -> None:
    """Argument parser should expose expected subcommands and options."""

    parser = ArgumentParser.create_parser()

    check_args: Namespace = parser.parse_args(["check"])
    assert check_args.command == "check"
    assert check_args.top_dir is None

    all_flags = parser.parse_args(
        [
            "repair",
            "--top-dir",
            "music",
            "--ext",
            ".mp3",
            "--artists",
            "^A",
            "--albums",
            "B$",
            "--max-open-files",
            "5",
            "--dry-run",
            "--verbose",
        ]
    )
    assert all_flags.dry_run and all_flags.verbose
    assert all_flags.max_open_files == 5

    inspect_args = parser.parse_args(["inspect", "a.mp3", "b.mp3"])
    assert inspect_args.files == ["a.mp3", "b.mp3"]


def test_verbose_and_quiet_are_exclusive(capsys: pytest.CaptureFixture[str]) -> None:
    parser = ArgumentParser.create_parser()

    with pytest.raises(SystemExit):
        _ = parser.parse_args(["check", "--verbose", "--quiet"])
    _ = capsys.readouterr()


def test_process_args_check_uses_config_defaults(
    mock_config: MagicMock, mock_setup_logger: MagicMock
) -> None:
    """Unset options fall back to configuration values."""

    args = ArgumentParser.process_args(["check"])

    assert isinstance(args, CheckArgs)
    assert args.search.top_dir == Path("/library")
    assert args.search.file_extension == ".mp3"
    assert args.search.artist_filter == ".*"
    assert args.search.max_open_files == 20
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.INFO
    assert mock_setup_logger.call_args.kwargs["log_file"] == DEFAULT_LOG_FILE
    mock_config.load.assert_called_once()


def test_process_args_repair_overrides(
    mock_config: MagicMock, mock_setup_logger: MagicMock, mocker: MockerFixture
) -> None:
    """Command line values win over configuration values."""

    mock_config.load.return_value.log_file = Path("/logs/custom.log")
    _ = mocker.patch(
        "mp3repair.ui.cli.args.parser.default_state_dir", return_value=Path("/state")
    )

    args = ArgumentParser.process_args(
        [
            "repair",
            "--top-dir",
            "/elsewhere",
            "--artists",
            "^A",
            "--max-open-files",
            "500",
            "--dry-run",
            "--quiet",
        ]
    )

    assert isinstance(args, RepairArgs)
    assert args.search.top_dir == Path("/elsewhere")
    assert args.search.artist_filter == "^A"
    assert args.search.album_filter == ".*"
    assert args.search.max_open_files == 20
    assert args.state_dir == Path("/state")
    assert args.dry_run and args.quiet
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.ERROR
    assert mock_setup_logger.call_args.kwargs["log_file"] == Path("/logs/custom.log")


def test_process_args_verbose_level(mock_config: MagicMock, mock_setup_logger: MagicMock) -> None:
    _ = mock_config

    args = ArgumentParser.process_args(["postrepair", "--verbose"])

    assert isinstance(args, PostrepairArgs)
    assert args.verbose
    assert mock_setup_logger.call_args.kwargs["console_level"] == logging.DEBUG


@pytest.mark.parametrize("value", ["0", "-3"])
def test_non_positive_max_open_files_is_rejected(
    mock_config: MagicMock, mock_setup_logger: MagicMock, value: str
) -> None:
    _ = mock_config, mock_setup_logger

    with pytest.raises(ArgumentError):
        _ = ArgumentParser.process_args(["check", "--max-open-files", value])


def test_process_args_inspect(mock_config: MagicMock, mock_setup_logger: MagicMock) -> None:
    _ = mock_config, mock_setup_logger

    args = ArgumentParser.process_args(["inspect", "one.mp3", "two.mp3"])

    assert isinstance(args, InspectArgs)
    assert args.files == [Path("one.mp3"), Path("two.mp3")]


def test_process_args_reset_uses_configured_state_dir(
    mock_config: MagicMock, mock_setup_logger: MagicMock, tmp_path: Path
) -> None:
    _ = mock_setup_logger
    mock_config.load.return_value.state_dir = tmp_path / "state"

    args = ArgumentParser.process_args(["reset"])

    assert isinstance(args, ResetArgs)
    assert args.state_dir == (tmp_path / "state").resolve()


def test_check_without_selectors_runs_files_only(
    mock_config: MagicMock, mock_setup_logger: MagicMock
) -> None:
    _ = mock_config, mock_setup_logger

    args = ArgumentParser.process_args(["check"])

    assert isinstance(args, CheckArgs)
    assert (args.empty, args.files, args.numbering) == (False, True, False)


def test_check_selectors_replace_the_default(
    mock_config: MagicMock, mock_setup_logger: MagicMock
) -> None:
    _ = mock_config, mock_setup_logger

    args = ArgumentParser.process_args(["check", "--empty", "-n"])

    assert isinstance(args, CheckArgs)
    assert (args.empty, args.files, args.numbering) == (True, False, True)


def test_process_args_list(mock_config: MagicMock, mock_setup_logger: MagicMock) -> None:
    _ = mock_config, mock_setup_logger

    args = ArgumentParser.process_args(
        ["list", "--hide-albums", "--annotate", "--sort", "title", "--details"]
    )

    assert isinstance(args, ListArgs)
    assert args.listing == ListingOptions(
        albums=False, annotate=True, sort=TrackSort.TITLE, details=True
    )
    assert args.search.top_dir == Path("/library")


@pytest.mark.parametrize(
    "argv",
    [
        ["list", "--hide-albums"],
        ["list", "--hide-artists", "--hide-albums", "--hide-tracks"],
    ],
)
def test_unusable_list_options_are_rejected(
    mock_config: MagicMock, mock_setup_logger: MagicMock, argv: list[str]
) -> None:
    _ = mock_config, mock_setup_logger

    with pytest.raises(ArgumentError):
        _ = ArgumentParser.process_args(argv)
