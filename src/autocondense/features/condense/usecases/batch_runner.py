"""Batch loop shared by cell, container and paragraph runs."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence

from autocondense.features.condense.domain import (
    BatchSummary,
    CondenseSettings,
    FitOutcome,
    FitParameters,
    TextUnit,
)

from .events import BatchLogContext, CondenseEvent, log_condense
from .ports import ProgressCallback

UnitProcessor = Callable[[TextUnit, FitParameters], FitOutcome | None]


def run_batch(
    units: Sequence[TextUnit],
    params: FitParameters,
    per_unit: UnitProcessor,
    *,
    settings: CondenseSettings | None = None,
    progress_callback: ProgressCallback | None = None,
    label: str = "units",
) -> BatchSummary:
    """Process ``units`` in order and aggregate their outcomes.

    A unit whose processor returns ``None`` or raises is counted as skipped and
    the loop moves on. Progress is reported before every ``progress_interval``-th
    unit and once more when the batch completes.
    """

    active_settings = settings or CondenseSettings()
    total = len(units)
    summary = BatchSummary(total=total)

    if total == 0:
        log_condense(
            logging.WARNING,
            CondenseEvent.BATCH_EMPTY,
            "No %s to process",
            label,
            batch_label=label,
            total_units=0,
        )
        return summary

    stats = BatchLogContext(batch_id=uuid.uuid4().hex[:12], label=label, total_units=total)
    log_condense(
        logging.INFO,
        CondenseEvent.BATCH_START,
        "Batch started [id=%s, %s=%d]",
        stats.batch_id,
        label,
        total,
        **stats.summary_extra(),
    )

    for index, unit in enumerate(units):
        if progress_callback is not None and index % active_settings.progress_interval == 0:
            progress_callback(index + 1, total)

        try:
            outcome = per_unit(unit, params)
        except Exception as exc:
            error_message = str(exc) if str(exc) else type(exc).__name__
            summary.record_error()
            stats.failed += 1
            stats.skipped += 1
            log_condense(
                logging.ERROR,
                CondenseEvent.UNIT_ERROR,
                "Error processing %s #%d/%d [unit=%s, error=%s]",
                label,
                index + 1,
                total,
                unit,
                error_message,
                unit=unit,
                sequence=index + 1,
                total_units=total,
                error_message=error_message,
            )
            continue

        if outcome is None:
            outcome = FitOutcome.SKIPPED_NO_ACTION
        summary.record(outcome)
        if outcome.is_changed:
            stats.changed += 1
        else:
            stats.skipped += 1

    if progress_callback is not None:
        progress_callback(total, total)

    summary_extra = stats.summary_extra()
    log_condense(
        logging.INFO,
        CondenseEvent.BATCH_COMPLETE,
        "Batch completed [id=%s, changed=%d, skipped=%d, total=%d, duration=%.2fs]",
        stats.batch_id,
        summary.changed,
        summary.skipped,
        summary.total,
        summary_extra.get("duration_seconds", 0.0),
        **summary_extra,
    )
    return summary


__all__ = ["UnitProcessor", "run_batch"]
