"""Ports for condense use cases.

Where: features/condense/usecases.
What: Protocols describing the document host the condensation core drives.
Why: Keep the search and batch logic independent from any concrete layout engine.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from autocondense.features.condense.domain import Selection, TextUnit

ProgressCallback = Callable[[int, int], None]
ConfirmCallback = Callable[[str], bool]


@runtime_checkable
class TextScalePort(Protocol):
    """Scale access and layout probes for a single text unit.

    Line and overflow answers are only trustworthy after ``reflow`` has been
    called following the most recent scale mutation.
    """

    def character_count(self, unit: TextUnit) -> int:
        """Return the number of characters held by the unit."""
        ...

    def text_content(self, unit: TextUnit) -> str:
        """Return the unit's plain text."""
        ...

    def leading_scale(self, unit: TextUnit) -> float | None:
        """Return the scale of the unit's first character, ``None`` when unavailable."""
        ...

    def set_uniform_scale(self, unit: TextUnit, percent: float) -> None:
        """Apply ``percent`` to every character of the unit."""
        ...

    def paragraph_count(self, unit: TextUnit) -> int:
        """Return the number of paragraphs in the unit."""
        ...

    def leading_scales(self, unit: TextUnit) -> list[float | None]:
        """Return each paragraph's first-character scale (``None`` for empty paragraphs)."""
        ...

    def set_leading_scale(self, unit: TextUnit, paragraph_index: int, percent: float) -> None:
        """Set the first-character scale of one paragraph of the unit."""
        ...

    def capture_scales(self, unit: TextUnit) -> object:
        """Return an opaque snapshot of every character scale in the unit."""
        ...

    def restore_scales(self, unit: TextUnit, snapshot: object) -> None:
        """Restore a snapshot produced by ``capture_scales``."""
        ...

    def container_of(self, unit: TextUnit) -> TextUnit:
        """Return the container owning the unit (the unit itself for containers)."""
        ...

    def reflow(self, unit: TextUnit) -> None:
        """Recompose the layout the unit belongs to."""
        ...

    def is_overflowing(self, container: TextUnit) -> bool:
        """Return whether the container currently has overset text."""
        ...

    def line_count(self, unit: TextUnit) -> int:
        """Return the number of composed lines of the unit."""
        ...


@runtime_checkable
class FlowPort(Protocol):
    """Linked-chain queries used for chain deduplication and warnings."""

    def linked_chain_identity(self, container: TextUnit) -> Hashable:
        """Return an identifier shared by every container of one text flow."""
        ...

    def is_linked(self, container: TextUnit) -> bool:
        """Return whether the container belongs to a chain of more than one container."""
        ...


@runtime_checkable
class FlowScalePort(TextScalePort, FlowPort, Protocol):
    """Scale access combined with flow identity, used by the leading reset."""


@runtime_checkable
class DocumentPort(FlowScalePort, Protocol):
    """Full host contract required by the application service."""

    def has_document(self) -> bool:
        """Return whether a document is open."""
        ...

    def current_selection(self) -> Selection:
        """Return the pre-resolved selection."""
        ...

    def undo_group(self, label: str) -> AbstractContextManager[None]:
        """Return a context that records all mutations as one undo step."""
        ...


__all__ = [
    "ConfirmCallback",
    "DocumentPort",
    "FlowPort",
    "FlowScalePort",
    "ProgressCallback",
    "TextScalePort",
]
