"""Command line interface for AutoCondense."""

import sys
from typing import final

from autocondense.application.services.condense_service import CondenseReport
from autocondense.features.condense import PreconditionError
from autocondense.platform.document import DocumentFormatError
from autocondense.platform.logging import logger
from autocondense.ui.cli.args import ArgumentParser
from autocondense.ui.cli.args.options import CLIArgs, FitArgs, ResetArgs
from autocondense.ui.cli.commands import CommandExecutor, FitCommand, ResetCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> CondenseReport | None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            The run report, or ``None`` when processing exited early.
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            command: CommandExecutor
            if isinstance(args, FitArgs):
                command = FitCommand(args)
            else:
                assert isinstance(args, ResetArgs)
                command = ResetCommand(args)
            return command.execute()

        except (PreconditionError, DocumentFormatError) as e:
            logger.error("%s", str(e))
            sys.exit(1)
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Errors leave through
        ``sys.exit(...)`` inside command processing.
    """
    _ = CommandProcessor.process_command()
    return 0
