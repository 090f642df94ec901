"""Tests for the per-unit adjustment pipeline."""

from __future__ import annotations

from pytest_mock import MockerFixture

from autocondense.features.condense import (
    ConvergenceSearch,
    FitOutcome,
    FitParameters,
    UnitAdjuster,
)
from conftest import FakeDocument, FakeText, frame


def test_lines_goal_met_reports_changed(fake_document: FakeDocument) -> None:
    """Scenario B with a reachable target."""

    unit = fake_document.add(
        frame("F1"),
        FakeText(paragraphs=["long line"], lines_for=lambda scale: 1 if scale <= 60 else 3),
    )

    outcome = UnitAdjuster(fake_document).adjust(unit, FitParameters(target_lines=1))

    assert outcome is FitOutcome.CHANGED
    assert fake_document.texts[unit].scales == [[60.0] * len("long line")]


def test_unreachable_target_rolls_back(fake_document: FakeDocument) -> None:
    """Scenario B down to the floor without success."""

    unit = fake_document.add(
        frame("F1"),
        FakeText(paragraphs=["long line"], lines_for=lambda scale: 3),
    )

    outcome = UnitAdjuster(fake_document).adjust(unit, FitParameters(target_lines=1))

    assert outcome is FitOutcome.SKIPPED_ROLLED_BACK
    assert fake_document.texts[unit].scales == [[100.0] * len("long line")]


def test_too_many_paragraphs_skips_without_mutation(
    fake_document: FakeDocument, mocker: MockerFixture
) -> None:
    """Scenario C: five paragraphs cannot fit two lines."""

    unit = fake_document.add(
        frame("F1"),
        FakeText(paragraphs=["a", "b", "c", "d", "e"], lines_for=lambda scale: 5),
    )
    search = ConvergenceSearch(fake_document)
    search_spy = mocker.spy(search, "search")

    outcome = UnitAdjuster(fake_document, search=search).adjust(unit, FitParameters(target_lines=2))

    assert outcome is FitOutcome.SKIPPED_ROLLED_BACK
    assert search_spy.call_count == 0
    assert fake_document.uniform_calls == []


def test_exclude_leading_char_pins_first_characters(fake_document: FakeDocument) -> None:
    """Scenario D: first characters keep their captured scale."""

    unit = fake_document.add(
        frame("F1"),
        FakeText(
            paragraphs=["abcd", "", "efg"],
            scales=[[95.0, 100.0, 100.0, 100.0], [], [88.0, 100.0, 100.0]],
            lines_for=lambda scale: 2 if scale <= 75 else 4,
        ),
    )

    outcome = UnitAdjuster(fake_document).adjust(
        unit, FitParameters(target_lines=3, exclude_leading_char=True)
    )

    assert outcome is FitOutcome.CHANGED
    assert fake_document.texts[unit].scales == [
        [95.0, 75.0, 75.0, 75.0],
        [],
        [88.0, 75.0, 75.0],
    ]


def test_search_starts_from_leading_scale(fake_document: FakeDocument) -> None:
    unit = fake_document.add(
        frame("F1"),
        FakeText(paragraphs=["text"], start_scale=90.0, overflow_for=lambda scale: scale > 87),
    )

    outcome = UnitAdjuster(fake_document).adjust(unit, FitParameters())

    assert outcome is FitOutcome.CHANGED
    assert fake_document.uniform_calls[0][1] == 89.0
    assert fake_document.texts[unit].scales == [[85.0] * 4]


def test_empty_unit_is_no_action(fake_document: FakeDocument) -> None:
    unit = fake_document.add(frame("F1"), FakeText(paragraphs=[""]))

    outcome = UnitAdjuster(fake_document)(unit, FitParameters())

    assert outcome is FitOutcome.SKIPPED_NO_ACTION
    assert fake_document.reflows == []


def test_already_fitting_unit_is_untouched(fake_document: FakeDocument) -> None:
    unit = fake_document.add(frame("F1"), FakeText(paragraphs=["ok"]))

    outcome = UnitAdjuster(fake_document).adjust(unit, FitParameters(target_lines=1))

    assert outcome is FitOutcome.SKIPPED_NO_ACTION
    assert fake_document.uniform_calls == []


def test_unit_at_floor_is_no_action(fake_document: FakeDocument) -> None:
    unit = fake_document.add(
        frame("F1"),
        FakeText(paragraphs=["text"], start_scale=40.0, overflow_for=lambda scale: True),
    )

    outcome = UnitAdjuster(fake_document).adjust(unit, FitParameters())

    assert outcome is FitOutcome.SKIPPED_NO_ACTION
    assert fake_document.uniform_calls == []
