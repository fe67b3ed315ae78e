"""Command line interface for mp3repair."""

import sys
from typing import final

from mp3repair.config.config import ConfigError
from mp3repair.features.backup.usecases.backup import CleanupResult
from mp3repair.features.inspection.usecases.diagnostics import FileDiagnostics
from mp3repair.features.library.usecases.scanner import ScanError
from mp3repair.features.reconciliation.domain.models import ReconcileSummary
from mp3repair.platform.logging import logger
from mp3repair.ui.cli.args import ArgumentError, ArgumentParser
from mp3repair.ui.cli.args.options import (
    CheckArgs,
    CLIArgs,
    InspectArgs,
    ListArgs,
    PostrepairArgs,
    RepairArgs,
    ResetArgs,
)
from mp3repair.ui.cli.commands import (
    CheckCommand,
    InspectCommand,
    ListCommand,
    PostrepairCommand,
    RepairCommand,
    ResetCommand,
)


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> int:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            int: Process exit code; non-zero when any track or album failed.
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, CheckArgs):
                summary = CheckCommand(args).execute()
                return CommandProcessor._summary_exit_code(summary)

            if isinstance(args, RepairArgs):
                summary = RepairCommand(args).execute()
                return CommandProcessor._summary_exit_code(summary)

            if isinstance(args, PostrepairArgs):
                results = PostrepairCommand(args).execute()
                return CommandProcessor._cleanup_exit_code(results)

            if isinstance(args, ListArgs):
                list_command = ListCommand(args)
                _ = list_command.execute()
                return 1 if list_command.detail_failures else 0

            if isinstance(args, InspectArgs):
                diagnostics = InspectCommand(args).execute()
                return CommandProcessor._inspect_exit_code(diagnostics)

            assert isinstance(args, ResetArgs)
            return 0 if ResetCommand(args).execute() else 1

        except (ConfigError, ArgumentError, ScanError) as e:
            logger.error("%s", e)
            return 1
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            return 130
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            return 1

    @staticmethod
    def _summary_exit_code(summary: ReconcileSummary) -> int:
        return 1 if summary.has_failures else 0

    @staticmethod
    def _cleanup_exit_code(results: list[CleanupResult]) -> int:
        return 1 if any(result.error is not None for result in results) else 0

    @staticmethod
    def _inspect_exit_code(results: list[FileDiagnostics]) -> int:
        return 1 if any(result.error is not None for result in results) else 0


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success).
    """
    return CommandProcessor.process_command()


if __name__ == "__main__":
    sys.exit(main())
