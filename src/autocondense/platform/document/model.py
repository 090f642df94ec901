"""src/autocondense/platform/document/model.py
What: In-memory layout document with stories, containers and greedy line breaking.
Why: Give the condensation core a host whose reflow and overflow answers are measurable.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import StrEnum

from autocondense.features.condense.domain import FULL_SCALE

WIDE_ADVANCE: float = 1.0
NARROW_ADVANCE: float = 0.5
_WIDTH_TOLERANCE: float = 1e-9


class ContainerKind(StrEnum):
    """Kind of layout region."""

    CELL = "cell"
    FRAME = "frame"


def advance_width(char: str) -> float:
    """Return the unscaled advance of ``char`` in ems."""

    if unicodedata.east_asian_width(char) in {"W", "F"}:
        return WIDE_ADVANCE
    return NARROW_ADVANCE


def count_lines(advances: list[float], width: float) -> int:
    """Break a run of scaled advances greedily and return the line count.

    An empty paragraph still occupies one line. A character wider than the
    column is placed on a line of its own.
    """

    if not advances:
        return 1
    lines = 1
    current = 0.0
    for advance in advances:
        if current > 0 and current + advance > width + _WIDTH_TOLERANCE:
            lines += 1
            current = advance
        else:
            current += advance
    return lines


@dataclass
class Paragraph:
    """A paragraph with one horizontal scale per character."""

    text: str
    scales: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.scales:
            self.scales = [FULL_SCALE] * len(self.text)
        if len(self.scales) != len(self.text):
            raise ValueError(
                f"paragraph has {len(self.text)} characters but {len(self.scales)} scales"
            )

    def scaled_advances(self) -> list[float]:
        return [
            advance_width(char) * scale / FULL_SCALE
            for char, scale in zip(self.text, self.scales, strict=True)
        ]

    def set_scale(self, percent: float) -> None:
        self.scales = [percent] * len(self.text)


@dataclass
class Story:
    """A continuous text flow shared by one cell or a chain of frames."""

    id: str
    paragraphs: list[Paragraph] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(paragraph.text for paragraph in self.paragraphs)

    @property
    def character_count(self) -> int:
        return sum(len(paragraph.text) for paragraph in self.paragraphs)


@dataclass
class Container:
    """A cell or frame that displays (part of) a story.

    Attributes:
        width: Column width in ems.
        max_lines: Number of lines the container can show.
        chain_index: Position of a frame within its story's chain.
    """

    id: str
    kind: ContainerKind
    story_id: str
    width: float
    max_lines: int
    chain_index: int = 0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"container {self.id} width must be positive")
        if self.max_lines < 1:
            raise ValueError(f"container {self.id} must hold at least one line")


@dataclass(frozen=True)
class StoryLayout:
    """Composed state of a story at its last reflow."""

    paragraph_lines: tuple[int, ...]
    capacity: int

    @property
    def total_lines(self) -> int:
        return sum(self.paragraph_lines)

    @property
    def overset(self) -> bool:
        return self.total_lines > self.capacity


@dataclass
class LayoutDocument:
    """Stories and the containers that display them."""

    stories: dict[str, Story] = field(default_factory=dict)
    containers: dict[str, Container] = field(default_factory=dict)
    name: str = "untitled"
    layouts: dict[str, StoryLayout] = field(default_factory=dict, repr=False)
    reflow_count: int = field(default=0, repr=False)

    def chain(self, story_id: str) -> list[Container]:
        """Return the containers displaying ``story_id`` in chain order."""

        members = [c for c in self.containers.values() if c.story_id == story_id]
        return sorted(members, key=lambda c: c.chain_index)

    def compose(self, story_id: str) -> StoryLayout:
        """Recompose one story and store its layout.

        Every paragraph is broken at the width of the first container in the
        chain; the capacity is the sum of the chain's line capacities.
        """

        story = self.stories[story_id]
        chain = self.chain(story_id)
        if not chain:
            raise KeyError(f"story {story_id} is not displayed by any container")
        width = chain[0].width
        layout = StoryLayout(
            paragraph_lines=tuple(
                count_lines(paragraph.scaled_advances(), width) for paragraph in story.paragraphs
            ),
            capacity=sum(container.max_lines for container in chain),
        )
        self.layouts[story_id] = layout
        self.reflow_count += 1
        return layout

    def compose_all(self) -> None:
        for story_id in self.stories:
            if self.chain(story_id):
                _ = self.compose(story_id)

    def layout_of(self, story_id: str) -> StoryLayout:
        """Return the last composed layout, composing on first access."""

        layout = self.layouts.get(story_id)
        if layout is None:
            layout = self.compose(story_id)
        return layout

    def snapshot(self) -> dict[str, list[list[float]]]:
        return {
            story_id: [list(paragraph.scales) for paragraph in story.paragraphs]
            for story_id, story in self.stories.items()
        }

    def restore(self, snapshot: dict[str, list[list[float]]]) -> None:
        for story_id, scales in snapshot.items():
            story = self.stories[story_id]
            for paragraph, paragraph_scales in zip(story.paragraphs, scales, strict=True):
                paragraph.scales = list(paragraph_scales)


__all__ = [
    "Container",
    "ContainerKind",
    "LayoutDocument",
    "Paragraph",
    "Story",
    "StoryLayout",
    "advance_width",
    "count_lines",
]
