"""Decide which fit criterion applies to a text unit.

Where: features/condense/usecases.
What: Pure decision rules plus the adapter-driven evaluation that feeds them.
Why: Keep the overflow/line-target precedence in one place for every unit kind.
"""

from __future__ import annotations

from autocondense.features.condense.domain import (
    FitDecision,
    FitMode,
    FitOutcome,
    FitParameters,
    TextUnit,
    UnitKind,
)

from .ports import TextScalePort


def decide_fit(
    *,
    overflowing: bool,
    line_count: int,
    paragraph_count: int,
    params: FitParameters,
) -> FitDecision:
    """Return the fit mode for the given layout facts.

    A unit holding more paragraphs than ``target_lines`` can never reach the
    target, so it is skipped before any mutation. That rule is not applied
    when overflow resolution has priority and the container overflows.
    """

    if overflowing:
        if params.overflow_priority:
            return FitDecision(mode=FitMode.OVERFLOW)
        if paragraph_count > params.target_lines:
            return FitDecision(
                mode=FitMode.NONE,
                outcome=FitOutcome.SKIPPED_ROLLED_BACK,
                reason="paragraph count exceeds target lines",
            )
        return FitDecision(mode=FitMode.LINES)

    if line_count <= params.target_lines:
        return FitDecision(
            mode=FitMode.NONE,
            outcome=FitOutcome.SKIPPED_NO_ACTION,
            reason="already within target lines",
        )
    if paragraph_count > params.target_lines:
        return FitDecision(
            mode=FitMode.NONE,
            outcome=FitOutcome.SKIPPED_ROLLED_BACK,
            reason="paragraph count exceeds target lines",
        )
    return FitDecision(mode=FitMode.LINES)


def is_valid_unit(port: TextScalePort, unit: TextUnit) -> bool:
    """Return whether ``unit`` holds text worth processing."""

    if port.character_count(unit) == 0:
        return False
    if unit.kind is UnitKind.PARAGRAPH:
        return port.text_content(unit).strip() != ""
    return port.text_content(unit) != ""


def evaluate(port: TextScalePort, unit: TextUnit, params: FitParameters) -> FitDecision:
    """Reflow the unit's container and decide how the unit should be fitted.

    Paragraph units are judged against their parent container's overflow
    state because paragraphs do not overflow on their own.
    """

    if not is_valid_unit(port, unit):
        return FitDecision(mode=FitMode.NONE, reason="empty unit")

    container = port.container_of(unit)
    port.reflow(container)
    return decide_fit(
        overflowing=port.is_overflowing(container),
        line_count=port.line_count(unit),
        paragraph_count=port.paragraph_count(unit),
        params=params,
    )


__all__ = ["decide_fit", "evaluate", "is_valid_unit"]
