"""src/autocondense/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Load, select, run and save the same way for every subcommand.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from autocondense.application.services.condense_service import (
    CondenseReport,
    CondenseRequest,
    CondenseService,
)
from autocondense.config.config import Config
from autocondense.config.settings import load_condense_settings
from autocondense.features.condense import CondenseEvent, CondenseSettings, FitParameters
from autocondense.features.condense.usecases import log_condense
from autocondense.platform.document import LayoutDocumentAdapter, load_document, save_document
from autocondense.ui.cli.args.options import CLIArgs
from autocondense.ui.cli.display.progress import ProgressDisplay
from autocondense.ui.cli.display.result import ResultDisplay

DRY_RUN_HINT = "Rerun without --dry-run to write the change."
IN_PLACE_HINT = "The document was overwritten in place. Use --output or --dry-run to keep the original."


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: CLIArgs
    config: Config
    settings: CondenseSettings
    adapter: LayoutDocumentAdapter
    app: CondenseService
    progress_display: ProgressDisplay
    result_display: ResultDisplay

    def __init__(self, args: CLIArgs) -> None:
        """Load the document and resolve the selection.

        Args:
            args: Command line arguments.
        """
        self.args = args
        self.config = Config.load()
        self.settings = load_condense_settings(self.config)

        document = load_document(args.document_path)
        log_condense(
            logging.INFO,
            CondenseEvent.DOCUMENT_LOADED,
            "Loaded document %s [stories=%d, containers=%d]",
            args.document_path,
            len(document.stories),
            len(document.containers),
            document=str(args.document_path),
        )
        self.adapter = LayoutDocumentAdapter(document)
        _ = self.adapter.select(cells=args.cells, frames=args.frames, text=args.text)

        self.app = CondenseService(self.adapter, self.settings, revert_hint=self.revert_hint)
        self.progress_display = ProgressDisplay()
        self.result_display = ResultDisplay()

    @abstractmethod
    def build_parameters(self) -> FitParameters:
        """Translate the arguments into run parameters."""
        pass

    def execute(self) -> CondenseReport:
        """Run the command, persist the result and display the summary."""

        report = self.progress_display.run_with_service(
            self.app,
            CondenseRequest(params=self.build_parameters()),
            assume_yes=self.assume_yes,
            description=self.description,
        )
        if not report.aborted:
            self.save()
        self.result_display.show_report(
            report,
            quiet=self.args.quiet,
            verbose=self.args.verbose,
            dry_run=self.args.dry_run,
        )
        return report

    @property
    def assume_yes(self) -> bool:
        return False

    @property
    def description(self) -> str:
        return "Processing"

    @property
    def output_path(self) -> Path:
        return self.args.output_path or self.args.document_path

    @property
    def revert_hint(self) -> str:
        """Closing line of the summary telling the operator how to get the original back."""

        if self.args.dry_run:
            return DRY_RUN_HINT
        if self.output_path != self.args.document_path:
            return f"The source document was left unchanged; the result is in {self.output_path}."
        return IN_PLACE_HINT

    def save(self) -> None:
        """Write the document unless this is a dry run."""

        if self.args.dry_run or self.adapter.document is None:
            return
        target = self.output_path
        save_document(self.adapter.document, target)
        log_condense(
            logging.INFO,
            CondenseEvent.DOCUMENT_SAVED,
            "Saved document %s",
            target,
            document=str(target),
        )
