"""src/autocondense/ui/cli/display/result.py
What: Render the summary of a condense or reset run.
Why: Keep console output formatting consistent across the subcommands.
"""

from __future__ import annotations

from typing import final

from rich.console import Console

from autocondense.application.services.condense_service import CondenseReport
from autocondense.features.condense import FitOutcome

_OUTCOME_LABELS: dict[FitOutcome, tuple[str, str]] = {
    FitOutcome.CHANGED: ("Condensed", "green"),
    FitOutcome.SKIPPED_NO_ACTION: ("Already fitting or nothing to do", "dim"),
    FitOutcome.SKIPPED_ROLLED_BACK: ("Could not fit (restored)", "yellow"),
}


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(
        self,
        report: CondenseReport,
        *,
        quiet: bool = False,
        verbose: bool = False,
        dry_run: bool = False,
    ) -> None:
        """Display the run summary.

        Args:
            report: Report returned by the condense service.
            quiet: Suppress everything.
            verbose: Add the per-outcome breakdown.
            dry_run: Note that nothing was written.
        """
        if quiet:
            return

        if report.aborted:
            self.console.print(f"[yellow]{report.message}[/yellow]")
            return

        self.console.print()
        self.console.print(report.message, markup=False, highlight=False)

        summary = report.summary
        if verbose and summary is not None:
            self.console.print("\n[bold]Outcome breakdown:[/bold]")
            for outcome, (label, style) in _OUTCOME_LABELS.items():
                self.console.print(f"[{style}]  {label}: {summary.outcomes[outcome]}[/{style}]")
            if summary.errors:
                self.console.print(f"[red]  Errors: {summary.errors}[/red]")

        if dry_run:
            self.console.print("[yellow]Dry run: the document was not written.[/yellow]")
