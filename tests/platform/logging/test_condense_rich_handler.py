"""Tests for the ``CondenseRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from rich.text import Text

from autocondense.features.condense import CondenseEvent, TextUnit, UnitKind
from autocondense.features.condense.usecases import log_condense
from autocondense.platform.logging import CondenseRichHandler, LOGGER_NAME, setup_logger


def _make_handler() -> CondenseRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return CondenseRichHandler(console=console)


def _build_record(message: str = "", **extras: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name=LOGGER_NAME,
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_document_paths_are_shortened() -> None:
    handler = _make_handler()
    record = _build_record(
        condense_event=CondenseEvent.DOCUMENT_LOADED.value,
        document="/home/user/projects/catalogue/2026/price-list.json",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("Loaded …/catalogue/2026/price-list.json")


def test_short_paths_are_kept() -> None:
    rendered = _make_handler().render_message(
        _build_record(condense_event=CondenseEvent.DOCUMENT_SAVED.value, document="out/doc.json"),
        "",
    )

    assert isinstance(rendered, Text)
    assert "Saved out/doc.json" in rendered.plain


def test_unit_changed_shows_scales_and_mode() -> None:
    rendered = _make_handler().render_message(
        _build_record(
            condense_event=CondenseEvent.UNIT_CHANGED.value,
            unit="A1",
            start_scale=100.0,
            final_scale=85.0,
            mode="overflow",
        ),
        "",
    )

    assert isinstance(rendered, Text)
    assert "Condensed A1 100% → 85% (overflow)" in rendered.plain


def test_batch_complete_lists_metrics() -> None:
    rendered = _make_handler().render_message(
        _build_record(
            condense_event=CondenseEvent.BATCH_COMPLETE.value,
            changed=2,
            skipped=1,
            failed=0,
            duration_seconds=0.5,
        ),
        "",
    )

    assert isinstance(rendered, Text)
    assert "changed=2, skipped=1, failed=0, duration=0.50s" in rendered.plain


def test_plain_records_use_default_rendering() -> None:
    rendered = _make_handler().render_message(_build_record("plain message"), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"


def test_log_condense_attaches_event_and_unit(caplog: pytest.LogCaptureFixture) -> None:
    unit = TextUnit(kind=UnitKind.CELL, handle="A1", label="Price")

    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        log_condense(logging.INFO, CondenseEvent.UNIT_CHANGED, "Condensed %s", unit, unit=unit)

    record = caplog.records[-1]
    assert getattr(record, "condense_event") == "condense.unit.changed"
    assert getattr(record, "unit") == "Price"
    assert record.getMessage() == "Condensed Price"


def test_setup_logger_adds_rotating_file_handler(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "autocondense.log"

    configured = setup_logger(log_file=log_file, console_level=logging.ERROR)
    try:
        kinds = [type(handler).__name__ for handler in configured.handlers]
        assert kinds == ["CondenseRichHandler", "RotatingFileHandler"]
        assert configured.handlers[0].level == logging.ERROR
        assert log_file.parent.is_dir()
    finally:
        _ = setup_logger(log_file=None)
