"""Application service for condensing selected text.

This layer owns the invocation surface: precondition checks, the linked
frame confirmation, the single undo group and the dispatch between the
search batch and the leading-character reset. UIs only build a request and
render the returned report.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import final

from autocondense.features.condense import (
    BatchSummary,
    CondenseSettings,
    DocumentPort,
    EmptySelectionError,
    FitParameters,
    NoDocumentError,
    ProgressCallback,
    Selection,
    SelectionContext,
    UnitAdjuster,
    UnitKind,
    UnsupportedSelectionError,
    reset_leading_characters,
    run_batch,
)
from autocondense.features.condense.usecases import ConfirmCallback
from autocondense.platform.logging import logger

FIT_UNDO_LABEL = "Text condense"
RESET_UNDO_LABEL = "Reset leading characters"
SEPARATOR = "-" * 35
UNDO_HINT = "Use undo to revert this change."
LINKED_FRAME_WARNING = (
    "Warning: the selection contains linked text frames.\n"
    "The whole linked story, including frames that are not selected, will be condensed.\n\n"
    "Continue?"
)

# context -> (target label, count noun, batch label)
_TARGET_LABELS: dict[SelectionContext, tuple[str, str, str]] = {
    SelectionContext.CELL: ("Table cells", "item(s)", "cells"),
    SelectionContext.CONTAINER: ("Text boxes", "item(s)", "text boxes"),
    SelectionContext.FREE_TEXT: ("Text", "paragraph(s)", "paragraphs"),
}


@dataclass(frozen=True)
class CondenseRequest:
    """Input parameters for one invocation.

    Attributes:
        params: Operator choices from the dialog or the command line.
    """

    params: FitParameters


@dataclass(frozen=True)
class CondenseReport:
    """What an invocation did, ready to be displayed.

    Attributes:
        context: Selection context the run operated on.
        summary: Batch counts for a condense run, ``None`` for a reset or an abort.
        reset_paragraphs: Paragraphs reset by a reset run.
        aborted: True when the operator declined the linked frame warning.
        undo_label: Label of the undo group, empty when nothing ran.
        message: Summary text shown to the operator.
    """

    context: SelectionContext
    summary: BatchSummary | None = None
    reset_paragraphs: int = 0
    aborted: bool = False
    undo_label: str = ""
    message: str = ""


@final
class CondenseService:
    """Run a condense or reset over the host's current selection."""

    def __init__(
        self,
        port: DocumentPort,
        settings: CondenseSettings | None = None,
        *,
        adjuster_factory: Callable[[DocumentPort, CondenseSettings], UnitAdjuster] | None = None,
        revert_hint: str = UNDO_HINT,
    ) -> None:
        self._port: DocumentPort = port
        self._settings: CondenseSettings = settings or CondenseSettings()
        self._adjuster_factory: Callable[[DocumentPort, CondenseSettings], UnitAdjuster] = (
            adjuster_factory or UnitAdjuster
        )
        self._revert_hint: str = revert_hint

    @property
    def settings(self) -> CondenseSettings:
        return self._settings

    def check_preconditions(self, params: FitParameters) -> Selection:
        """Validate the host state before anything is mutated.

        Raises:
            NoDocumentError: No document is open.
            EmptySelectionError: Nothing is selected.
            UnsupportedSelectionError: The selection holds nothing processable,
                or a reset was requested for a direct text selection.
        """

        if not self._port.has_document():
            raise NoDocumentError()
        selection = self._port.current_selection()
        if selection.is_empty and selection.item_count == 0:
            raise EmptySelectionError()
        if selection.is_empty or selection.context is SelectionContext.NONE:
            raise UnsupportedSelectionError()
        if params.reset_leading_only and selection.context is SelectionContext.FREE_TEXT:
            raise UnsupportedSelectionError("the reset needs table cells or text boxes")
        return selection

    def run(
        self,
        request: CondenseRequest,
        *,
        progress_callback: ProgressCallback | None = None,
        confirm: ConfirmCallback | None = None,
    ) -> CondenseReport:
        """Execute one invocation inside a single undo group.

        Args:
            request: Operator parameters.
            progress_callback: Receives ``(current, total)`` at the throttled cadence.
            confirm: Asked before condensing linked frames. Without a callback
                the run is aborted.
        """

        params = request.params
        selection = self.check_preconditions(params)

        if params.reset_leading_only:
            with self._port.undo_group(RESET_UNDO_LABEL):
                count = reset_leading_characters(
                    self._port, selection.units, progress_callback=progress_callback
                )
            return CondenseReport(
                context=selection.context,
                reset_paragraphs=count,
                undo_label=RESET_UNDO_LABEL,
                message=self._reset_message(count),
            )

        if selection.context is SelectionContext.CONTAINER and self._has_linked_frame(selection):
            if confirm is None or not confirm(LINKED_FRAME_WARNING):
                logger.info("Condense cancelled: linked frames were not confirmed")
                return CondenseReport(
                    context=selection.context,
                    aborted=True,
                    message="Cancelled. No changes were made.",
                )

        target, noun, batch_label = self._labels(selection)
        adjuster = self._adjuster_factory(self._port, self._settings)
        with self._port.undo_group(FIT_UNDO_LABEL):
            summary = run_batch(
                selection.units,
                params,
                adjuster,
                settings=self._settings,
                progress_callback=progress_callback,
                label=batch_label,
            )
        return CondenseReport(
            context=selection.context,
            summary=summary,
            undo_label=FIT_UNDO_LABEL,
            message=self._fit_message(target, noun, summary, self._revert_hint),
        )

    def _has_linked_frame(self, selection: Selection) -> bool:
        return any(self._port.is_linked(unit) for unit in selection.units)

    @staticmethod
    def _labels(selection: Selection) -> tuple[str, str, str]:
        target, noun, batch_label = _TARGET_LABELS[selection.context]
        if selection.context is SelectionContext.FREE_TEXT:
            parent = selection.container
            where = "cell" if parent is not None and parent.kind is UnitKind.CELL else "text box"
            target = f"Text in {where}"
        return target, noun, batch_label

    @staticmethod
    def _fit_message(target: str, noun: str, summary: BatchSummary, revert_hint: str) -> str:
        return "\n".join(
            [
                "Processing complete.",
                SEPARATOR,
                f"Target: {target}",
                f"Adjusted: {summary.changed} {noun}",
                f"Skipped: {summary.skipped} {noun}",
                f"(Total: {summary.total} {noun})",
                SEPARATOR,
                revert_hint,
            ]
        )

    @staticmethod
    def _reset_message(count: int) -> str:
        return "\n".join(
            [
                "Processing complete.",
                SEPARATOR,
                "Action: reset leading characters to 100%",
                "Scope: entire linked stories",
                f"Paragraphs processed: {count} paragraph(s)",
                SEPARATOR,
                "No condensation was performed.",
            ]
        )


__all__ = [
    "FIT_UNDO_LABEL",
    "LINKED_FRAME_WARNING",
    "RESET_UNDO_LABEL",
    "CondenseReport",
    "CondenseRequest",
    "CondenseService",
]
