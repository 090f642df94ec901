"""Rich console handler for AutoCondense log records.

Where: platform/logging/handlers.py
What: Render structured condense events with icons and compact document paths.
Why: Keep per-unit progress readable in the terminal without parsing messages.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class CondenseRichHandler(RichHandler):
    """Rich handler that styles condense events and shortens document paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "condense.batch.start": ("🚀", "cyan"),
        "condense.batch.complete": ("✅", "green"),
        "condense.batch.empty": ("ℹ️", "yellow"),
        "condense.unit.changed": ("🗜️", "green"),
        "condense.unit.skip.no_action": ("↪️", "yellow"),
        "condense.unit.skip.rolled_back": ("↩️", "yellow"),
        "condense.unit.error": ("⛔", "red"),
        "condense.search.checkpoint": ("🔎", "blue"),
        "condense.search.rollback": ("⏪", "magenta"),
        "condense.reset.flow": ("🔤", "blue"),
        "condense.reset.complete": ("✅", "green"),
        "condense.document.loaded": ("📄", "cyan"),
        "condense.document.saved": ("💾", "green"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators, keeping only the last segments."""

        pure_path: PurePath = PureWindowsPath(path) if "\\" in path else PurePosixPath(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]

        truncated = len(parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._PATH_SEGMENT_LIMIT :]

        display = separator.join(parts) or "."
        if truncated:
            display = f"…{separator}{display}"

        text = Text()
        for char in display:
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_condense_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured condense events with dedicated styling."""

        event = getattr(record, "condense_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("condense.document"):
            _ = body.append("Loaded " if event.endswith("loaded") else "Saved ")
            document = getattr(record, "document", None)
            if document:
                _ = body.append_text(self._format_path(str(document)))
        elif event == "condense.batch.start":
            _ = body.append("Batch start")
            total = getattr(record, "total_units", None)
            label = getattr(record, "batch_label", "units")
            if isinstance(total, int):
                _ = body.append(f" [{label}={total}]")
        elif event == "condense.batch.complete":
            _ = body.append("Batch complete")
            metrics: list[str] = []
            for key in ("changed", "skipped", "failed"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
        elif event == "condense.unit.changed":
            _ = body.append(f"Condensed {getattr(record, 'unit', '?')}")
            start = getattr(record, "start_scale", None)
            final = getattr(record, "final_scale", None)
            mode = getattr(record, "mode", None)
            if start is not None and final is not None:
                _ = body.append(f" {start:g}% → {final:g}%")
            if mode:
                _ = body.append(f" ({mode})")
        elif event.startswith("condense.unit.skip"):
            _ = body.append(f"Skipped {getattr(record, 'unit', '?')}")
            reason = getattr(record, "reason", None)
            if reason:
                _ = body.append(f" ({reason})")
        elif event == "condense.unit.error":
            _ = body.append(f"Failed {getattr(record, 'unit', '?')}")
            error_message = getattr(record, "error_message", None)
            if error_message:
                _ = body.append(f" ({error_message})")
        elif event == "condense.reset.complete":
            flows = getattr(record, "flows", 0)
            paragraphs = getattr(record, "paragraphs", 0)
            _ = body.append(f"Leading characters reset [flows={flows}, paragraphs={paragraphs}]")
        else:
            _ = body.append(record.getMessage())

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for condense events."""

        condense_text = self._render_condense_message(record)
        if condense_text is not None:
            return condense_text

        return super().render_message(record, message)


__all__ = ["CondenseRichHandler"]
