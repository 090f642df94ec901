"""
Summary: Bounded downward scale search with periodic reflow checkpoints and rollback.
Why: Find the least-distorting scale that meets the fit goal without reflowing every step.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import final

from autocondense.features.condense.domain import (
    AdapterError,
    CondenseSettings,
    FitMode,
    FitParameters,
    SearchResult,
    TextUnit,
)

from .events import CondenseEvent, log_condense
from .ports import TextScalePort
from .scale_mutator import apply_uniform_scale

_SCALE_TOLERANCE = 1e-9


@final
class ConvergenceSearch:
    """Condense a unit one step at a time until its fit goal holds.

    The search starts one ``step`` below the start scale and walks down to
    ``min_scale`` inclusive. Layout is only recomposed every
    ``recompose_interval`` scale points and at the lowest candidate, and the
    first checkpoint that satisfies the goal ends the search. When no
    candidate succeeds the unit is restored to its exact pre-search scales and
    recomposed before the result is returned.
    """

    def __init__(self, port: TextScalePort, settings: CondenseSettings | None = None) -> None:
        self._port: TextScalePort = port
        self._settings: CondenseSettings = settings or CondenseSettings()

    @property
    def settings(self) -> CondenseSettings:
        return self._settings

    def candidate_scales(self, start_scale: float) -> list[float]:
        """Return every scale probed for ``start_scale``, largest first."""

        step = self._settings.step
        floor = self._settings.min_scale
        candidates: list[float] = []
        offset = step
        while True:
            candidate = start_scale - offset
            if math.isclose(candidate, floor, abs_tol=_SCALE_TOLERANCE):
                candidates.append(floor)
                break
            if candidate < floor:
                break
            candidates.append(candidate)
            offset += step
        return candidates

    def is_checkpoint(self, offset: int, is_last: bool) -> bool:
        """Return whether the probe ``offset`` points below the start needs a reflow."""

        return is_last or offset % self._settings.recompose_interval == 0

    def search(
        self,
        unit: TextUnit,
        start_scale: float,
        mode: FitMode,
        params: FitParameters,
        pinned_leading: Sequence[float | None] | None = None,
    ) -> SearchResult:
        """Search downwards from ``start_scale`` for a scale meeting ``mode``.

        Args:
            unit: Unit to condense.
            start_scale: Scale the unit currently has.
            mode: Fit criterion; ``FitMode.NONE`` is rejected.
            params: Run options supplying ``target_lines``.
            pinned_leading: Captured first-character scales to keep in place.

        Returns:
            SearchResult: ``success`` with the found scale, or a rolled-back
            result carrying ``start_scale``.

        Raises:
            ValueError: If ``mode`` is ``FitMode.NONE``.
            AdapterError: If the document fails mid-search; the unit has been
                restored before the error is raised.
        """

        if mode is FitMode.NONE:
            raise ValueError("search requires an overflow or lines fit mode")

        candidates = self.candidate_scales(start_scale)
        if not candidates:
            return SearchResult(changed=False, success=False, final_scale=start_scale)

        port = self._port
        container = port.container_of(unit)
        snapshot = port.capture_scales(unit)
        checkpoints: list[float] = []
        changed = False

        try:
            for index, candidate in enumerate(candidates):
                changed = True
                apply_uniform_scale(port, unit, candidate, pinned_leading)

                offset = (index + 1) * self._settings.step
                if not self.is_checkpoint(offset, is_last=index == len(candidates) - 1):
                    continue

                port.reflow(container)
                checkpoints.append(candidate)
                goal_met = self._goal_met(unit, container, mode, params)
                log_condense(
                    logging.DEBUG,
                    CondenseEvent.SEARCH_CHECKPOINT,
                    "Checkpoint [unit=%s, scale=%s, mode=%s, met=%s]",
                    unit,
                    candidate,
                    mode.value,
                    goal_met,
                    unit=unit,
                    scale=candidate,
                    mode=mode.value,
                    goal_met=goal_met,
                )
                if goal_met:
                    return SearchResult(
                        changed=True,
                        success=True,
                        final_scale=candidate,
                        checkpoints=tuple(checkpoints),
                    )
        except Exception as exc:
            # A failed first candidate may already have mutated part of the unit.
            self._rollback(unit, container, snapshot, start_scale)
            raise AdapterError(unit, exc) from exc

        self._rollback(unit, container, snapshot, start_scale)
        return SearchResult(
            changed=changed,
            success=False,
            final_scale=start_scale,
            checkpoints=tuple(checkpoints),
        )

    def _goal_met(
        self,
        unit: TextUnit,
        container: TextUnit,
        mode: FitMode,
        params: FitParameters,
    ) -> bool:
        if mode is FitMode.LINES:
            return self._port.line_count(unit) <= params.target_lines
        return not self._port.is_overflowing(container)

    def _rollback(
        self,
        unit: TextUnit,
        container: TextUnit,
        snapshot: object,
        start_scale: float,
    ) -> None:
        # Layout must be recomposed after the restore so later units see fresh state.
        self._port.restore_scales(unit, snapshot)
        self._port.reflow(container)
        log_condense(
            logging.DEBUG,
            CondenseEvent.SEARCH_ROLLBACK,
            "Rolled back [unit=%s, scale=%s]",
            unit,
            start_scale,
            unit=unit,
            scale=start_scale,
        )


__all__ = ["ConvergenceSearch"]
