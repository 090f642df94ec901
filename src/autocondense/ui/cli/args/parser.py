"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from autocondense.config.config import Config
from autocondense.config.settings import load_run_defaults
from autocondense.platform.document import TextSelection
from autocondense.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from autocondense.ui.cli.args.options import CLIArgs, FitArgs, ResetArgs


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
            prog="autocondense",
            description="AutoCondense - condense table cell and text box text to fit its lines.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        fit_parser = subparsers.add_parser(
            "fit",
            help="Condense the selected text until it fits the target lines or stops overflowing",
        )
        ArgumentParser._configure_common(fit_parser)
        _ = fit_parser.add_argument(
            "--target-lines",
            type=str,
            metavar="N",
            help="Maximum lines per unit (clamped to 1..max_target_lines; defaults to the config value)",
        )
        _ = fit_parser.add_argument(
            "--no-overflow-priority",
            action="store_true",
            help="Do not resolve container overflow before the line target",
        )
        _ = fit_parser.add_argument(
            "--exclude-leading-char",
            action="store_true",
            help="Keep each paragraph's first character at its current scale",
        )
        _ = fit_parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Condense linked text frames without asking",
        )

        reset_parser = subparsers.add_parser(
            "reset-leading",
            help="Reset the first character of every paragraph in the selected stories to 100%%",
        )
        ArgumentParser._configure_common(reset_parser)

        return parser

    @staticmethod
    def _configure_common(parser: argparse.ArgumentParser) -> None:
        """Apply the document, selection and output options shared by every subcommand."""

        _ = parser.add_argument(
            "document",
            type=str,
            help="Path to the layout document (JSON)",
            metavar="DOCUMENT",
        )
        _ = parser.add_argument(
            "--cell",
            action="append",
            default=[],
            metavar="CELL_ID",
            help="Select a table cell (repeatable)",
        )
        _ = parser.add_argument(
            "--frame",
            action="append",
            default=[],
            metavar="FRAME_ID",
            help="Select a text box (repeatable)",
        )
        _ = parser.add_argument(
            "--text",
            type=str,
            metavar="CONTAINER[:P,...]",
            help="Select text inside one container, optionally limited to paragraph indexes",
        )
        _ = parser.add_argument(
            "--output",
            "-o",
            type=str,
            metavar="PATH",
            help="Write the result here instead of overwriting DOCUMENT",
        )
        _ = parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing the document",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the document does not exist or an option is malformed.
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

        document_path = Path(parsed_args.document)
        if not document_path.is_file():
            logger.error("Document does not exist: %s", document_path)
            sys.exit(1)

        text: TextSelection | None = None
        if parsed_args.text:
            try:
                text = TextSelection.parse(parsed_args.text)
            except ValueError as exc:
                parser.error(str(exc))

        output_path = Path(parsed_args.output) if parsed_args.output else None
        cells = tuple(parsed_args.cell)
        frames = tuple(parsed_args.frame)

        if parsed_args.command == "fit":
            run_defaults = load_run_defaults(configuration)
            target_lines = (
                parsed_args.target_lines
                if parsed_args.target_lines is not None
                else run_defaults.target_lines
            )
            return FitArgs(
                command="fit",
                document_path=document_path,
                output_path=output_path,
                cells=cells,
                frames=frames,
                text=text,
                target_lines=target_lines,
                overflow_priority=run_defaults.overflow_priority
                and not parsed_args.no_overflow_priority,
                exclude_leading_char=run_defaults.exclude_leading_char
                or parsed_args.exclude_leading_char,
                dry_run=parsed_args.dry_run,
                assume_yes=parsed_args.yes,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        return ResetArgs(
            command="reset-leading",
            document_path=document_path,
            output_path=output_path,
            cells=cells,
            frames=frames,
            text=text,
            dry_run=parsed_args.dry_run,
            verbose=is_verbose,
            quiet=is_quiet,
        )
