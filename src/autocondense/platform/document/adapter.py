"""Document adapter over ``LayoutDocument``.

Where: platform/document/adapter.py
What: Implements the condense ``DocumentPort`` plus selection resolution and undo history.
Why: Let the CLI and end-to-end tests drive the core against a concrete host.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import final

from autocondense.features.condense.domain import (
    Selection,
    SelectionContext,
    TextUnit,
    UnitKind,
)
from autocondense.platform.logging import logger

from .model import Container, ContainerKind, LayoutDocument, Paragraph, Story

ScaleSnapshot = tuple[tuple[float, ...], ...]


@dataclass(frozen=True, slots=True)
class UndoStep:
    """One recorded undo group."""

    label: str
    snapshot: dict[str, list[list[float]]]


@dataclass(frozen=True, slots=True)
class TextSelection:
    """Direct text selection: a container and optional paragraph indexes."""

    container_id: str
    paragraph_indexes: tuple[int, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> "TextSelection":
        """Parse ``CONTAINER`` or ``CONTAINER:1,2``."""

        container_id, _, indexes = raw.partition(":")
        container_id = container_id.strip()
        if not container_id:
            raise ValueError(f"text selection needs a container id: {raw!r}")
        parsed: list[int] = []
        for part in indexes.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                parsed.append(int(part))
            except ValueError as exc:
                raise ValueError(f"invalid paragraph index {part!r} in {raw!r}") from exc
        return cls(container_id=container_id, paragraph_indexes=tuple(parsed))


@final
class LayoutDocumentAdapter:
    """Host adapter answering the condense core from a ``LayoutDocument``."""

    def __init__(self, document: LayoutDocument | None) -> None:
        self.document: LayoutDocument | None = document
        self._selection: Selection = Selection(context=SelectionContext.NONE)
        self._history: list[UndoStep] = []

    # Selection -----------------------------------------------------------

    def select(
        self,
        *,
        cells: Sequence[str] = (),
        frames: Sequence[str] = (),
        text: TextSelection | None = None,
    ) -> Selection:
        """Resolve a selection with priority cell, frame, then direct text."""

        item_count = len(cells) + len(frames) + (1 if text is not None else 0)
        selection = Selection(context=SelectionContext.NONE, item_count=item_count)

        cell_units = self._container_units(cells, ContainerKind.CELL)
        frame_units = self._container_units(frames, ContainerKind.FRAME)
        if cell_units:
            selection = Selection(
                context=SelectionContext.CELL, units=cell_units, item_count=item_count
            )
        elif frame_units:
            selection = Selection(
                context=SelectionContext.CONTAINER, units=frame_units, item_count=item_count
            )
        elif text is not None:
            selection = self._text_selection(text, item_count)

        self._selection = selection
        return selection

    def _container_units(self, ids: Iterable[str], kind: ContainerKind) -> tuple[TextUnit, ...]:
        units: list[TextUnit] = []
        seen: set[str] = set()
        for container_id in ids:
            if container_id in seen:
                continue
            seen.add(container_id)
            container = self._containers().get(container_id)
            if container is None or container.kind is not kind:
                logger.warning("Ignoring unknown %s %r in selection", kind.value, container_id)
                continue
            units.append(self._unit_for(container))
        return tuple(units)

    def _text_selection(self, text: TextSelection, item_count: int) -> Selection:
        container = self._containers().get(text.container_id)
        if container is None:
            logger.warning("Ignoring unknown container %r in text selection", text.container_id)
            return Selection(context=SelectionContext.NONE, item_count=item_count)

        story = self._story(container.story_id)
        indexes = text.paragraph_indexes or tuple(range(len(story.paragraphs)))
        units: list[TextUnit] = []
        for index in dict.fromkeys(indexes):
            if not 0 <= index < len(story.paragraphs):
                logger.warning("Ignoring paragraph %d outside %s", index, container.id)
                continue
            units.append(
                TextUnit(
                    kind=UnitKind.PARAGRAPH,
                    handle=(container.id, index),
                    label=f"{container.id}¶{index}",
                )
            )
        if not units:
            return Selection(context=SelectionContext.NONE, item_count=item_count)
        return Selection(
            context=SelectionContext.FREE_TEXT,
            units=tuple(units),
            container=self._unit_for(container),
            item_count=item_count,
        )

    def has_document(self) -> bool:
        return self.document is not None

    def current_selection(self) -> Selection:
        return self._selection

    # Undo ------------------------------------------------------------------

    @contextmanager
    def undo_group(self, label: str) -> Iterator[None]:
        """Record every mutation made inside the block as one undo step.

        If the block raises, the document is restored before the error propagates.
        """

        document = self._require_document()
        snapshot = document.snapshot()
        try:
            yield
        except BaseException:
            document.restore(snapshot)
            document.compose_all()
            raise
        self._history.append(UndoStep(label=label, snapshot=snapshot))

    @property
    def undo_labels(self) -> list[str]:
        return [step.label for step in self._history]

    def undo(self) -> str | None:
        """Revert the most recent undo group and return its label."""

        if not self._history:
            return None
        step = self._history.pop()
        document = self._require_document()
        document.restore(step.snapshot)
        document.compose_all()
        return step.label

    # Text scale port -------------------------------------------------------

    def character_count(self, unit: TextUnit) -> int:
        return sum(len(paragraph.text) for paragraph in self._paragraphs(unit))

    def text_content(self, unit: TextUnit) -> str:
        return "\n".join(paragraph.text for paragraph in self._paragraphs(unit))

    def leading_scale(self, unit: TextUnit) -> float | None:
        for paragraph in self._paragraphs(unit):
            if paragraph.scales:
                return paragraph.scales[0]
        return None

    def set_uniform_scale(self, unit: TextUnit, percent: float) -> None:
        for paragraph in self._paragraphs(unit):
            paragraph.set_scale(percent)

    def paragraph_count(self, unit: TextUnit) -> int:
        return len(self._paragraphs(unit))

    def leading_scales(self, unit: TextUnit) -> list[float | None]:
        return [paragraph.scales[0] if paragraph.scales else None for paragraph in self._paragraphs(unit)]

    def set_leading_scale(self, unit: TextUnit, paragraph_index: int, percent: float) -> None:
        paragraph = self._paragraphs(unit)[paragraph_index]
        if not paragraph.scales:
            raise IndexError(f"paragraph {paragraph_index} of {unit} has no characters")
        paragraph.scales[0] = percent

    def capture_scales(self, unit: TextUnit) -> ScaleSnapshot:
        return tuple(tuple(paragraph.scales) for paragraph in self._paragraphs(unit))

    def restore_scales(self, unit: TextUnit, snapshot: object) -> None:
        if not isinstance(snapshot, tuple):
            raise TypeError(f"unexpected snapshot type {type(snapshot).__name__}")
        paragraphs = self._paragraphs(unit)
        if len(snapshot) != len(paragraphs):
            raise ValueError(f"snapshot does not match the paragraphs of {unit}")
        for paragraph, scales in zip(paragraphs, snapshot, strict=True):
            paragraph.scales = list(scales)

    def container_of(self, unit: TextUnit) -> TextUnit:
        return self._unit_for(self._container(unit))

    def reflow(self, unit: TextUnit) -> None:
        _ = self._require_document().compose(self._container(unit).story_id)

    def is_overflowing(self, container: TextUnit) -> bool:
        story_id = self._container(container).story_id
        return self._require_document().layout_of(story_id).overset

    def line_count(self, unit: TextUnit) -> int:
        container = self._container(unit)
        layout = self._require_document().layout_of(container.story_id)
        if unit.kind is UnitKind.PARAGRAPH:
            return layout.paragraph_lines[self._paragraph_index(unit)]
        return layout.total_lines

    # Flow port ---------------------------------------------------------------

    def linked_chain_identity(self, container: TextUnit) -> Hashable:
        return self._container(container).story_id

    def is_linked(self, container: TextUnit) -> bool:
        story_id = self._container(container).story_id
        return len(self._require_document().chain(story_id)) > 1

    # Helpers -------------------------------------------------------------------

    def _require_document(self) -> LayoutDocument:
        if self.document is None:
            raise RuntimeError("No document is open")
        return self.document

    def _containers(self) -> dict[str, Container]:
        return self._require_document().containers

    def _story(self, story_id: str) -> Story:
        return self._require_document().stories[story_id]

    @staticmethod
    def _unit_for(container: Container) -> TextUnit:
        kind = UnitKind.CELL if container.kind is ContainerKind.CELL else UnitKind.CONTAINER
        return TextUnit(kind=kind, handle=container.id, label=container.id)

    def _container(self, unit: TextUnit) -> Container:
        container_id = unit.handle[0] if unit.kind is UnitKind.PARAGRAPH else unit.handle  # type: ignore[index]
        try:
            return self._containers()[str(container_id)]
        except KeyError as exc:
            raise KeyError(f"unknown container for {unit}") from exc

    @staticmethod
    def _paragraph_index(unit: TextUnit) -> int:
        return int(unit.handle[1])  # type: ignore[index]

    def _paragraphs(self, unit: TextUnit) -> list[Paragraph]:
        story = self._story(self._container(unit).story_id)
        if unit.kind is UnitKind.PARAGRAPH:
            return [story.paragraphs[self._paragraph_index(unit)]]
        return story.paragraphs


__all__ = ["LayoutDocumentAdapter", "ScaleSnapshot", "TextSelection", "UndoStep"]
