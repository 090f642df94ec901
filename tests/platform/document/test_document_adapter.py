"""Tests for the layout document adapter."""

from __future__ import annotations

from typing import Any

import pytest

from autocondense.features.condense import DocumentPort, SelectionContext, TextUnit, UnitKind
from autocondense.platform.document import (
    LayoutDocument,
    LayoutDocumentAdapter,
    TextSelection,
    document_from_dict,
)


@pytest.fixture
def document(sample_document_data: dict[str, Any]) -> LayoutDocument:
    return document_from_dict(sample_document_data)


@pytest.fixture
def adapter(document: LayoutDocument) -> LayoutDocumentAdapter:
    return LayoutDocumentAdapter(document)


def test_adapter_satisfies_document_port(adapter: LayoutDocumentAdapter) -> None:
    assert isinstance(adapter, DocumentPort)


def test_without_document_reports_none() -> None:
    adapter = LayoutDocumentAdapter(None)

    assert not adapter.has_document()
    assert adapter.current_selection().context is SelectionContext.NONE


def test_cells_take_priority_over_frames(adapter: LayoutDocumentAdapter) -> None:
    selection = adapter.select(cells=["A1", "A1"], frames=["F1"], text=TextSelection("T1"))

    assert selection.context is SelectionContext.CELL
    assert [unit.handle for unit in selection.units] == ["A1"]
    assert selection.units[0].kind is UnitKind.CELL
    assert adapter.current_selection() is selection


def test_frames_are_deduplicated_and_validated(adapter: LayoutDocumentAdapter) -> None:
    selection = adapter.select(cells=["F1"], frames=["F2", "F1", "F2", "nope"])

    assert selection.context is SelectionContext.CONTAINER
    assert [unit.handle for unit in selection.units] == ["F2", "F1"]


def test_unresolvable_selection_keeps_item_count(adapter: LayoutDocumentAdapter) -> None:
    selection = adapter.select(frames=["missing"])

    assert selection.context is SelectionContext.NONE
    assert selection.is_empty
    assert selection.item_count == 1


def test_text_selection_yields_paragraph_units(adapter: LayoutDocumentAdapter) -> None:
    selection = adapter.select(text=TextSelection.parse("T1:2,0,2,9"))

    assert selection.context is SelectionContext.FREE_TEXT
    assert [unit.handle for unit in selection.units] == [("T1", 2), ("T1", 0)]
    assert str(selection.units[0]) == "T1¶2"
    assert selection.container == TextUnit(kind=UnitKind.CONTAINER, handle="T1", label="T1")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("T1", TextSelection("T1")), ("T1:1, 3", TextSelection("T1", (1, 3))), ("T1:", TextSelection("T1"))],
)
def test_text_selection_parse(raw: str, expected: TextSelection) -> None:
    assert TextSelection.parse(raw) == expected


@pytest.mark.parametrize("raw", [":1", "T1:x"])
def test_text_selection_parse_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        _ = TextSelection.parse(raw)


def test_paragraph_unit_reads_its_own_lines(adapter: LayoutDocumentAdapter) -> None:
    unit = TextUnit(kind=UnitKind.PARAGRAPH, handle=("T1", 2))
    container = adapter.container_of(unit)

    assert adapter.line_count(unit) == 2
    assert adapter.paragraph_count(unit) == 1
    assert adapter.line_count(container) == 4
    assert adapter.paragraph_count(container) == 3
    assert not adapter.is_overflowing(container)


def test_layout_answers_change_only_after_reflow(adapter: LayoutDocumentAdapter) -> None:
    unit = TextUnit(kind=UnitKind.CELL, handle="A1")
    assert adapter.is_overflowing(unit)

    adapter.set_uniform_scale(unit, 80.0)
    assert adapter.is_overflowing(unit)

    adapter.reflow(unit)
    assert not adapter.is_overflowing(unit)
    assert adapter.line_count(unit) == 1


def test_leading_scale_access(adapter: LayoutDocumentAdapter) -> None:
    unit = TextUnit(kind=UnitKind.CONTAINER, handle="T1")

    adapter.set_uniform_scale(unit, 90.0)
    adapter.set_leading_scale(unit, 2, 55.0)

    assert adapter.leading_scale(unit) == 90.0
    assert adapter.leading_scales(unit) == [90.0, 90.0, 55.0]


def test_capture_and_restore_are_exact(adapter: LayoutDocumentAdapter, document: LayoutDocument) -> None:
    unit = TextUnit(kind=UnitKind.CONTAINER, handle="F1")
    before = document.snapshot()

    snapshot = adapter.capture_scales(unit)
    adapter.set_uniform_scale(unit, 41.0)
    adapter.restore_scales(unit, snapshot)

    assert document.snapshot() == before


def test_linked_chain_identity_is_the_story(adapter: LayoutDocumentAdapter) -> None:
    first = TextUnit(kind=UnitKind.CONTAINER, handle="F1")
    second = TextUnit(kind=UnitKind.CONTAINER, handle="F2")
    other = TextUnit(kind=UnitKind.CONTAINER, handle="T1")

    assert adapter.linked_chain_identity(first) == adapter.linked_chain_identity(second)
    assert adapter.is_linked(first)
    assert not adapter.is_linked(other)


def test_undo_group_records_and_reverts(adapter: LayoutDocumentAdapter, document: LayoutDocument) -> None:
    unit = TextUnit(kind=UnitKind.CELL, handle="A1")
    before = document.snapshot()

    with adapter.undo_group("Text condense"):
        adapter.set_uniform_scale(unit, 80.0)

    assert adapter.undo_labels == ["Text condense"]
    assert adapter.undo() == "Text condense"
    assert document.snapshot() == before
    assert document.layouts["s1"].overset
    assert adapter.undo() is None


def test_undo_group_rolls_back_on_error(adapter: LayoutDocumentAdapter, document: LayoutDocument) -> None:
    unit = TextUnit(kind=UnitKind.CELL, handle="A1")
    before = document.snapshot()

    with pytest.raises(RuntimeError):
        with adapter.undo_group("Text condense"):
            adapter.set_uniform_scale(unit, 50.0)
            raise RuntimeError("boom")

    assert document.snapshot() == before
    assert adapter.undo_labels == []
