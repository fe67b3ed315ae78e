"""Command line argument parser."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import final

from mp3repair.config.config import Config
from mp3repair.config.paths import default_state_dir
from mp3repair.config.settings import clamp_max_open_files
from mp3repair.features.library.usecases.listing import ListingError, ListingOptions, TrackSort
from mp3repair.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
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


class ArgumentError(Exception):
    """Raised when parsed arguments fail validation."""


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="mp3repair",
            description="mp3repair - Reconcile MP3 tags with the <artist>/<album>/<NN title>.mp3 layout.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        check_parser = subparsers.add_parser(
            "check",
            help="Report tag disagreements, empty directories and track numbering problems",
            description="Without check selectors only --files runs.",
        )
        ArgumentParser._configure_search_options(check_parser)
        _ = check_parser.add_argument(
            "-e",
            "--empty",
            action="store_true",
            help="Report artist directories without albums and album directories without tracks",
        )
        _ = check_parser.add_argument(
            "-f",
            "--files",
            action="store_true",
            help="Report tracks whose tags disagree with the library layout",
        )
        _ = check_parser.add_argument(
            "-n",
            "--numbering",
            action="store_true",
            help="Report missing and duplicated track numbers",
        )

        repair_parser = subparsers.add_parser(
            "repair",
            help="Back up and rewrite tracks whose tags disagree with the library layout",
        )
        ArgumentParser._configure_search_options(repair_parser)
        _ = repair_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the tracks that would be repaired without changing any file",
        )

        postrepair_parser = subparsers.add_parser(
            "postrepair",
            help="Delete the backup directories created by repair",
        )
        ArgumentParser._configure_search_options(postrepair_parser)

        list_parser = subparsers.add_parser(
            "list",
            help="List artists, albums and tracks of the library",
        )
        ArgumentParser._configure_search_options(list_parser)
        _ = list_parser.add_argument(
            "--hide-artists",
            action="store_true",
            help="Leave artist names out of the listing",
        )
        _ = list_parser.add_argument(
            "--hide-albums",
            action="store_true",
            help="Leave album names out of the listing",
        )
        _ = list_parser.add_argument(
            "--hide-tracks",
            action="store_true",
            help="Leave track names out of the listing",
        )
        _ = list_parser.add_argument(
            "--annotate",
            action="store_true",
            help="Qualify album and track names with the album and artist they belong to",
        )
        _ = list_parser.add_argument(
            "--sort",
            choices=[sort.value for sort in TrackSort],
            default=TrackSort.NUMBER.value,
            help="Order tracks by number (needs albums) or by title (default: number)",
        )
        _ = list_parser.add_argument(
            "--details",
            action="store_true",
            help="Show composer, conductor, key, lyricist, orchestra and subtitle credits of each track",
        )

        inspect_parser = subparsers.add_parser(
            "inspect",
            help="Dump the ID3V1 and ID3V2 tags of individual files",
        )
        _ = inspect_parser.add_argument(
            "files",
            nargs="+",
            type=str,
            help="Files to inspect",
            metavar="FILE",
        )
        ArgumentParser._configure_verbosity(inspect_parser)

        reset_parser = subparsers.add_parser(
            "reset",
            help="Clear the marker recording that repair changed files",
        )
        ArgumentParser._configure_verbosity(reset_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            ConfigError: If the configuration file cannot be loaded.
            ArgumentError: If option values fail validation.
            SystemExit: If argparse rejects the command line.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "check":
            no_selector = not (parsed_args.empty or parsed_args.files or parsed_args.numbering)
            return CheckArgs(
                command="check",
                search=ArgumentParser._search_options(parsed_args, configuration),
                empty=bool(parsed_args.empty),
                files=bool(parsed_args.files) or no_selector,
                numbering=bool(parsed_args.numbering),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "repair":
            return RepairArgs(
                command="repair",
                search=ArgumentParser._search_options(parsed_args, configuration),
                state_dir=ArgumentParser._state_dir(configuration),
                dry_run=bool(parsed_args.dry_run),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "postrepair":
            return PostrepairArgs(
                command="postrepair",
                search=ArgumentParser._search_options(parsed_args, configuration),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "list":
            return ListArgs(
                command="list",
                search=ArgumentParser._search_options(parsed_args, configuration),
                listing=ArgumentParser._listing_options(parsed_args),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "inspect":
            return InspectArgs(
                command="inspect",
                files=[Path(name) for name in parsed_args.files],
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "reset":
            return ResetArgs(
                command="reset",
                state_dir=ArgumentParser._state_dir(configuration),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", command)
        raise ArgumentError(f"unsupported command {command!r}")

    @staticmethod
    def _configure_verbosity(parser: argparse.ArgumentParser) -> None:
        group = parser.add_mutually_exclusive_group()
        _ = group.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = group.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _configure_search_options(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--top-dir",
            type=str,
            help="Top directory of the music library (default: music_root from the config)",
            metavar="DIR",
        )
        _ = parser.add_argument(
            "--ext",
            type=str,
            help="Extension of track files, including the leading '.' (default: .mp3)",
            metavar="EXT",
        )
        _ = parser.add_argument(
            "--artists",
            type=str,
            help="Regular expression selecting artist directories",
            metavar="REGEX",
        )
        _ = parser.add_argument(
            "--albums",
            type=str,
            help="Regular expression selecting album directories",
            metavar="REGEX",
        )
        _ = parser.add_argument(
            "--max-open-files",
            type=int,
            help="Upper bound on files read concurrently (1-20)",
            metavar="N",
        )
        ArgumentParser._configure_verbosity(parser)

    @staticmethod
    def _search_options(parsed_args: argparse.Namespace, configuration: Config) -> SearchOptions:
        top_dir = (
            Path(parsed_args.top_dir).expanduser()
            if parsed_args.top_dir
            else configuration.resolved_music_root
        )
        max_open_files: int = (
            parsed_args.max_open_files
            if parsed_args.max_open_files is not None
            else configuration.max_open_files
        )
        if max_open_files <= 0:
            logger.error("--max-open-files must be a positive integer; received %s", max_open_files)
            raise ArgumentError(f"invalid --max-open-files value {max_open_files}")
        return SearchOptions(
            top_dir=top_dir,
            file_extension=parsed_args.ext or configuration.file_extension,
            artist_filter=parsed_args.artists or configuration.artist_filter,
            album_filter=parsed_args.albums or configuration.album_filter,
            max_open_files=clamp_max_open_files(max_open_files),
        )

    @staticmethod
    def _listing_options(parsed_args: argparse.Namespace) -> ListingOptions:
        options = ListingOptions(
            artists=not parsed_args.hide_artists,
            albums=not parsed_args.hide_albums,
            tracks=not parsed_args.hide_tracks,
            annotate=bool(parsed_args.annotate),
            sort=TrackSort(parsed_args.sort),
            details=bool(parsed_args.details),
        )
        try:
            options.validate()
        except ListingError as exc:
            logger.error("%s", exc)
            raise ArgumentError(str(exc)) from exc
        return options

    @staticmethod
    def _state_dir(configuration: Config) -> Path:
        if configuration.state_dir is not None:
            return configuration.state_dir.expanduser().resolve()
        return default_state_dir()


__all__ = ["ArgumentError", "ArgumentParser"]
