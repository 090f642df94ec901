"""Shared pytest fixtures: a scriptable in-memory document host."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from autocondense.features.condense import (
    FULL_SCALE,
    Selection,
    SelectionContext,
    TextUnit,
    UnitKind,
)


def _one_line(_scale: float) -> int:
    return 1


def _never_overflows(_scale: float) -> bool:
    return False


@dataclass
class FakeText:
    """Scripted text owned by a fake unit.

    ``lines_for`` and ``overflow_for`` map the body scale to layout facts; they
    are only consulted when the owning container is reflowed.
    """

    paragraphs: list[str]
    lines_for: Callable[[float], int] = _one_line
    overflow_for: Callable[[float], bool] = _never_overflows
    container: TextUnit | None = None
    flow: Hashable | None = None
    linked: bool = False
    start_scale: float = FULL_SCALE
    scales: list[list[float]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.scales:
            self.scales = [[self.start_scale] * len(text) for text in self.paragraphs]

    def body_scale(self) -> float:
        for paragraph in self.scales:
            if paragraph:
                return paragraph[-1]
        return self.start_scale


class FakeDocument:
    """In-memory ``DocumentPort`` whose layout only changes on reflow."""

    def __init__(self) -> None:
        self.texts: dict[TextUnit, FakeText] = {}
        self.layout: dict[TextUnit, tuple[int, bool]] = {}
        self.reflows: list[TextUnit] = []
        self.uniform_calls: list[tuple[TextUnit, float]] = []
        self.undo_labels: list[str] = []
        self.document_open: bool = True
        self.selection: Selection = Selection(context=SelectionContext.NONE)
        self.fail_at_scale: float | None = None
        self.fail_on_leading: bool = False
        self.fail_on_leading_index: int | None = None

    def add(self, unit: TextUnit, text: FakeText) -> TextUnit:
        self.texts[unit] = text
        self._compose(unit)
        return unit

    def select(self, context: SelectionContext, *units: TextUnit, container: TextUnit | None = None) -> None:
        self.selection = Selection(
            context=context, units=units, container=container, item_count=len(units)
        )

    def _compose(self, unit: TextUnit) -> None:
        text = self.texts[unit]
        scale = text.body_scale()
        self.layout[unit] = (text.lines_for(scale), text.overflow_for(scale))

    def _container_key(self, unit: TextUnit) -> TextUnit:
        return self.texts[unit].container or unit

    # DocumentPort ------------------------------------------------------------

    def has_document(self) -> bool:
        return self.document_open

    def current_selection(self) -> Selection:
        return self.selection

    @contextmanager
    def undo_group(self, label: str) -> Iterator[None]:
        self.undo_labels.append(label)
        yield

    def character_count(self, unit: TextUnit) -> int:
        return sum(len(text) for text in self.texts[unit].paragraphs)

    def text_content(self, unit: TextUnit) -> str:
        return "\n".join(self.texts[unit].paragraphs)

    def leading_scale(self, unit: TextUnit) -> float | None:
        for paragraph in self.texts[unit].scales:
            if paragraph:
                return paragraph[0]
        return None

    def set_uniform_scale(self, unit: TextUnit, percent: float) -> None:
        if self.fail_at_scale is not None and percent <= self.fail_at_scale:
            raise RuntimeError(f"host refused scale {percent}")
        self.uniform_calls.append((unit, percent))
        text = self.texts[unit]
        text.scales = [[percent] * len(paragraph) for paragraph in text.paragraphs]

    def paragraph_count(self, unit: TextUnit) -> int:
        return len(self.texts[unit].paragraphs)

    def leading_scales(self, unit: TextUnit) -> list[float | None]:
        return [paragraph[0] if paragraph else None for paragraph in self.texts[unit].scales]

    def set_leading_scale(self, unit: TextUnit, paragraph_index: int, percent: float) -> None:
        if self.fail_on_leading or paragraph_index == self.fail_on_leading_index:
            raise RuntimeError("leading character is locked")
        self.texts[unit].scales[paragraph_index][0] = percent

    def capture_scales(self, unit: TextUnit) -> object:
        return [list(paragraph) for paragraph in self.texts[unit].scales]

    def restore_scales(self, unit: TextUnit, snapshot: object) -> None:
        assert isinstance(snapshot, list)
        self.texts[unit].scales = [list(paragraph) for paragraph in snapshot]

    def container_of(self, unit: TextUnit) -> TextUnit:
        return self._container_key(unit)

    def reflow(self, unit: TextUnit) -> None:
        self.reflows.append(unit)
        for member in self.texts:
            if self._container_key(member) == unit:
                self._compose(member)

    def is_overflowing(self, container: TextUnit) -> bool:
        return self.layout[container][1]

    def line_count(self, unit: TextUnit) -> int:
        return self.layout[unit][0]

    def linked_chain_identity(self, container: TextUnit) -> Hashable:
        return self.texts[container].flow or container

    def is_linked(self, container: TextUnit) -> bool:
        return self.texts[container].linked


def frame(name: str) -> TextUnit:
    return TextUnit(kind=UnitKind.CONTAINER, handle=name, label=name)


def cell(name: str) -> TextUnit:
    return TextUnit(kind=UnitKind.CELL, handle=name, label=name)


def paragraph(container: str, index: int) -> TextUnit:
    return TextUnit(kind=UnitKind.PARAGRAPH, handle=(container, index), label=f"{container}¶{index}")


@pytest.fixture
def fake_document() -> FakeDocument:
    """Provide an empty scriptable document host."""

    return FakeDocument()


@pytest.fixture
def sample_document_data() -> dict[str, Any]:
    """Layout document with an overflowing cell, a linked story and a text frame.

    ``A1`` holds ten narrow characters (5em) in a 4em wide one-line cell and
    fits once the scale reaches 80%. ``F1`` and ``F2`` share story ``s2``.
    ``T1`` holds three paragraphs; the last one wraps onto two lines.
    """

    return {
        "name": "sample",
        "stories": [
            {"id": "s1", "paragraphs": ["ABCDEFGHIJ"]},
            {"id": "s2", "paragraphs": [{"text": "あいう", "scales": [70, 100, 100]}, "かき"]},
            {"id": "s3", "paragraphs": ["short", "   ", "another line of text"]},
        ],
        "containers": [
            {"id": "A1", "kind": "cell", "story": "s1", "width": 4, "max_lines": 1},
            {"id": "F1", "kind": "frame", "story": "s2", "width": 6, "max_lines": 1, "chain_index": 0},
            {"id": "F2", "kind": "frame", "story": "s2", "width": 6, "max_lines": 1, "chain_index": 1},
            {"id": "T1", "kind": "frame", "story": "s3", "width": 5, "max_lines": 6},
        ],
    }


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the configuration file at a temporary path and reset the singleton."""

    from autocondense.config.config import Config

    config_file = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("AUTOCONDENSE_CONFIG", str(config_file))
    monkeypatch.setattr(Config, "_instance", None)
    monkeypatch.setattr(Config, "_loaded_from", None)
    yield config_file


@pytest.fixture
def cli_environment(isolated_config: Path, tmp_path: Path) -> Iterator[Path]:
    """Isolated config whose log file lives under ``tmp_path``; restores console logging."""

    from autocondense.platform.logging import setup_logger

    isolated_config.parent.mkdir(parents=True, exist_ok=True)
    log_file = tmp_path / "logs" / "autocondense.log"
    _ = isolated_config.write_text(f'log_file = "{log_file.as_posix()}"\n', encoding="utf-8")
    try:
        yield tmp_path
    finally:
        _ = setup_logger(log_file=None)


@pytest.fixture
def sample_document_file(tmp_path: Path, sample_document_data: dict[str, Any]) -> Path:
    """Write the sample layout document to disk."""

    import json

    target = tmp_path / "sample.json"
    _ = target.write_text(json.dumps(sample_document_data, ensure_ascii=False), encoding="utf-8")
    return target
