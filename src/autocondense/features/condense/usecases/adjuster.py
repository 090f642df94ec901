"""src/autocondense/features/condense/usecases/adjuster.py
What: Per-unit pipeline chaining evaluation, leading capture and the search.
Why: Give the batch runner one callable that maps a unit to its outcome.
"""

from __future__ import annotations

import logging
from typing import final

from autocondense.features.condense.domain import (
    CondenseSettings,
    FitOutcome,
    FitParameters,
    TextUnit,
)

from .convergence import ConvergenceSearch
from .events import CondenseEvent, log_condense
from .fit_evaluator import evaluate
from .ports import TextScalePort
from .scale_mutator import capture_leading_scales


@final
class UnitAdjuster:
    """Condense a single text unit according to the run parameters."""

    def __init__(
        self,
        port: TextScalePort,
        settings: CondenseSettings | None = None,
        search: ConvergenceSearch | None = None,
    ) -> None:
        self._port: TextScalePort = port
        self._search: ConvergenceSearch = search or ConvergenceSearch(port, settings)

    def adjust(self, unit: TextUnit, params: FitParameters) -> FitOutcome:
        """Process ``unit`` and report how it ended up.

        Returns:
            FitOutcome: ``CHANGED`` when a smaller scale met the goal,
            ``SKIPPED_ROLLED_BACK`` when the unit was restored (or could never
            meet the line target), ``SKIPPED_NO_ACTION`` otherwise.
        """

        start_scale = self._port.leading_scale(unit)
        if start_scale is None:
            self._log_skip(unit, FitOutcome.SKIPPED_NO_ACTION, "no leading character")
            return FitOutcome.SKIPPED_NO_ACTION

        decision = evaluate(self._port, unit, params)
        if not decision.needs_search:
            self._log_skip(unit, decision.outcome, decision.reason)
            return decision.outcome

        pinned = capture_leading_scales(self._port, unit) if params.exclude_leading_char else None
        result = self._search.search(unit, start_scale, decision.mode, params, pinned)

        if result.success:
            log_condense(
                logging.INFO,
                CondenseEvent.UNIT_CHANGED,
                "Condensed %s [mode=%s, scale=%s -> %s]",
                unit,
                decision.mode.value,
                start_scale,
                result.final_scale,
                unit=unit,
                mode=decision.mode.value,
                start_scale=start_scale,
                final_scale=result.final_scale,
            )
            return FitOutcome.CHANGED

        if result.changed:
            self._log_skip(unit, FitOutcome.SKIPPED_ROLLED_BACK, "no scale met the goal")
            return FitOutcome.SKIPPED_ROLLED_BACK

        self._log_skip(unit, FitOutcome.SKIPPED_NO_ACTION, "already at the minimum scale")
        return FitOutcome.SKIPPED_NO_ACTION

    def __call__(self, unit: TextUnit, params: FitParameters) -> FitOutcome:
        return self.adjust(unit, params)

    @staticmethod
    def _log_skip(unit: TextUnit, outcome: FitOutcome, reason: str) -> None:
        event = (
            CondenseEvent.UNIT_SKIP_ROLLED_BACK
            if outcome is FitOutcome.SKIPPED_ROLLED_BACK
            else CondenseEvent.UNIT_SKIP_NO_ACTION
        )
        log_condense(
            logging.DEBUG,
            event,
            "Skipped %s (%s)",
            unit,
            reason,
            unit=unit,
            reason=reason,
        )


__all__ = ["UnitAdjuster"]
