"""src/autocondense/features/condense/usecases/events.py
What: Structured event identifiers and bookkeeping for condensation logs.
Why: Let the console handler style condense events without parsing messages.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from autocondense.features.condense.domain import TextUnit
from autocondense.platform.logging import logger


class CondenseEvent(StrEnum):
    """Structured event identifiers for condensation logs."""

    BATCH_START = "condense.batch.start"
    BATCH_COMPLETE = "condense.batch.complete"
    BATCH_EMPTY = "condense.batch.empty"
    UNIT_CHANGED = "condense.unit.changed"
    UNIT_SKIP_NO_ACTION = "condense.unit.skip.no_action"
    UNIT_SKIP_ROLLED_BACK = "condense.unit.skip.rolled_back"
    UNIT_ERROR = "condense.unit.error"
    SEARCH_CHECKPOINT = "condense.search.checkpoint"
    SEARCH_ROLLBACK = "condense.search.rollback"
    RESET_FLOW = "condense.reset.flow"
    RESET_COMPLETE = "condense.reset.complete"
    DOCUMENT_LOADED = "condense.document.loaded"
    DOCUMENT_SAVED = "condense.document.saved"


@dataclass(slots=True)
class BatchLogContext:
    """Mutable bookkeeping for a batch run."""

    batch_id: str
    label: str
    total_units: int
    start_time: float = field(default_factory=time.perf_counter)
    changed: int = 0
    skipped: int = 0
    failed: int = 0

    def duration_seconds(self) -> float:
        """Return the elapsed batch time in seconds."""

        return time.perf_counter() - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "batch_id": self.batch_id,
            "batch_label": self.label,
            "total_units": self.total_units,
            "changed": self.changed,
            "skipped": self.skipped,
            "failed": self.failed,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


def log_condense(
    level: int,
    event: CondenseEvent,
    message: str,
    *message_args: object,
    **context: Any,
) -> None:
    """Log ``message`` tagged with a structured condense event."""

    extra: dict[str, Any] = {"condense_event": event.value}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, TextUnit) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["BatchLogContext", "CondenseEvent", "log_condense"]
