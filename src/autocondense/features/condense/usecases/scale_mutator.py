"""
Summary: Apply a uniform horizontal scale to a text unit.
Why: Centralise leading-character pinning so search and rollback share it.
"""

from __future__ import annotations

from collections.abc import Sequence

from autocondense.features.condense.domain import TextUnit

from .ports import TextScalePort


def capture_leading_scales(port: TextScalePort, unit: TextUnit) -> tuple[float | None, ...]:
    """Return the first-character scale of every paragraph of ``unit``."""

    return tuple(port.leading_scales(unit))


def apply_uniform_scale(
    port: TextScalePort,
    unit: TextUnit,
    percent: float,
    pinned_leading: Sequence[float | None] | None = None,
) -> None:
    """Scale every character of ``unit`` to ``percent``.

    Args:
        port: Document collaborator.
        unit: Unit to mutate.
        percent: Horizontal scale applied to the whole unit.
        pinned_leading: Captured first-character scales; when given, each
            non-empty paragraph's first character is set back to its entry.
    """

    port.set_uniform_scale(unit, percent)
    if pinned_leading is None:
        return
    pin_leading_scales(port, unit, pinned_leading)


def pin_leading_scales(
    port: TextScalePort,
    unit: TextUnit,
    pinned_leading: Sequence[float | None],
) -> None:
    """Set each paragraph's first character back to its captured scale."""

    paragraph_total = min(port.paragraph_count(unit), len(pinned_leading))
    for index in range(paragraph_total):
        original = pinned_leading[index]
        if original is None:
            continue
        port.set_leading_scale(unit, index, original)


__all__ = ["apply_uniform_scale", "capture_leading_scales", "pin_leading_scales"]
