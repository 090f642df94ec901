"""src/autocondense/features/condense/domain/models.py
What: Value types shared by the condensation use cases.
Why: Keep evaluator, search and batch logic free of adapter-specific types.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

MIN_SCALE_DEFAULT: Final[float] = 40.0
STEP_DEFAULT: Final[int] = 1
RECOMPOSE_INTERVAL_DEFAULT: Final[int] = 5
MAX_TARGET_LINES_DEFAULT: Final[int] = 100
PROGRESS_INTERVAL_DEFAULT: Final[int] = 5
FULL_SCALE: Final[float] = 100.0

# Leading integer of a typed value: "3 lines" -> 3, "2.5" -> 2.
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


class UnitKind(StrEnum):
    """Kind of text unit handed to the core by the adapter."""

    CELL = "cell"
    CONTAINER = "container"
    PARAGRAPH = "paragraph"


class SelectionContext(StrEnum):
    """Classification of the host selection."""

    CELL = "cell"
    CONTAINER = "container"
    FREE_TEXT = "free_text"
    NONE = "none"


class FitMode(StrEnum):
    """Fit criterion the search converges on."""

    OVERFLOW = "overflow"
    LINES = "lines"
    NONE = "none"


class FitOutcome(StrEnum):
    """Result of processing a single text unit."""

    CHANGED = "changed"
    SKIPPED_NO_ACTION = "skipped_no_action"
    SKIPPED_ROLLED_BACK = "skipped_rolled_back"

    @property
    def is_changed(self) -> bool:
        return self is FitOutcome.CHANGED


@dataclass(frozen=True, slots=True)
class TextUnit:
    """Opaque handle to a cell, a container's full text, or a single paragraph.

    Attributes:
        kind: Variant tag; the adapter dispatches on it.
        handle: Adapter-owned identifier of the underlying object.
        label: Human readable name used in log output.
    """

    kind: UnitKind
    handle: Hashable
    label: str = ""

    def __str__(self) -> str:
        return self.label or f"{self.kind.value}:{self.handle}"


@dataclass(frozen=True, slots=True)
class CondenseSettings:
    """Immutable tuning constants for the search and batch runner."""

    min_scale: float = MIN_SCALE_DEFAULT
    step: int = STEP_DEFAULT
    recompose_interval: int = RECOMPOSE_INTERVAL_DEFAULT
    max_target_lines: int = MAX_TARGET_LINES_DEFAULT
    progress_interval: int = PROGRESS_INTERVAL_DEFAULT

    def __post_init__(self) -> None:
        if not 0 < self.min_scale <= FULL_SCALE:
            raise ValueError(f"min_scale must be within (0, 100]; got {self.min_scale}")
        if self.step < 1:
            raise ValueError(f"step must be >= 1; got {self.step}")
        if self.recompose_interval < 1:
            raise ValueError(f"recompose_interval must be >= 1; got {self.recompose_interval}")
        if self.max_target_lines < 1:
            raise ValueError(f"max_target_lines must be >= 1; got {self.max_target_lines}")
        if self.progress_interval < 1:
            raise ValueError(f"progress_interval must be >= 1; got {self.progress_interval}")


@dataclass(frozen=True, slots=True)
class FitParameters:
    """Per-run options chosen by the operator.

    Attributes:
        target_lines: Maximum number of lines a unit should occupy.
        overflow_priority: Resolve overflow first when the container overflows.
        exclude_leading_char: Keep every paragraph's first character at its
            original scale while the rest is condensed.
        reset_leading_only: Run the leading-character reset instead of the search.
    """

    target_lines: int = 1
    overflow_priority: bool = True
    exclude_leading_char: bool = False
    reset_leading_only: bool = False

    @classmethod
    def from_user_input(
        cls,
        target_lines: int | str | None,
        *,
        overflow_priority: bool = True,
        exclude_leading_char: bool = False,
        reset_leading_only: bool = False,
        max_target_lines: int = MAX_TARGET_LINES_DEFAULT,
    ) -> "FitParameters":
        """Build parameters, clamping ``target_lines`` into ``1..max_target_lines``."""

        match = _LEADING_INTEGER.match(str(target_lines)) if target_lines is not None else None
        lines = int(match.group(1)) if match else 1
        lines = min(max(lines, 1), max_target_lines)
        return cls(
            target_lines=lines,
            overflow_priority=overflow_priority,
            exclude_leading_char=exclude_leading_char,
            reset_leading_only=reset_leading_only,
        )


@dataclass(frozen=True, slots=True)
class FitDecision:
    """Evaluator verdict for one unit.

    ``outcome`` is only meaningful when ``mode`` is ``FitMode.NONE`` and tells the
    caller how the unit must be reported without entering the search.
    """

    mode: FitMode
    outcome: FitOutcome = FitOutcome.SKIPPED_NO_ACTION
    reason: str = ""

    @property
    def needs_search(self) -> bool:
        return self.mode is not FitMode.NONE


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Outcome of a convergence search."""

    changed: bool
    success: bool
    final_scale: float
    checkpoints: tuple[float, ...] = ()

    @property
    def rolled_back(self) -> bool:
        return self.changed and not self.success


@dataclass(slots=True)
class BatchSummary:
    """Aggregate counts over a processed collection."""

    changed: int = 0
    skipped: int = 0
    total: int = 0
    outcomes: Counter[FitOutcome] = field(default_factory=Counter)
    errors: int = 0

    def record(self, outcome: FitOutcome) -> None:
        self.outcomes[outcome] += 1
        if outcome.is_changed:
            self.changed += 1
        else:
            self.skipped += 1

    def record_error(self) -> None:
        self.errors += 1
        self.skipped += 1

    @property
    def is_consistent(self) -> bool:
        return self.changed + self.skipped == self.total


@dataclass(frozen=True, slots=True)
class Selection:
    """Pre-resolved selection handed to the service by the adapter.

    Attributes:
        context: Which kind of selection the host reported.
        units: Units to process, in selection order.
        container: Parent container for free-text selections.
        item_count: Number of raw items the host reported, resolvable or not.
    """

    context: SelectionContext
    units: tuple[TextUnit, ...] = ()
    container: TextUnit | None = None
    item_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.units


__all__ = [
    "BatchSummary",
    "CondenseSettings",
    "FitDecision",
    "FitMode",
    "FitOutcome",
    "FitParameters",
    "FULL_SCALE",
    "MAX_TARGET_LINES_DEFAULT",
    "MIN_SCALE_DEFAULT",
    "PROGRESS_INTERVAL_DEFAULT",
    "RECOMPOSE_INTERVAL_DEFAULT",
    "STEP_DEFAULT",
    "SearchResult",
    "Selection",
    "SelectionContext",
    "TextUnit",
    "UnitKind",
]
