"""Exception hierarchy for condensation runs."""

from __future__ import annotations

from .models import TextUnit


class CondenseError(Exception):
    """Base class for all condensation errors."""


class PreconditionError(CondenseError):
    """Raised before any mutation when a run cannot start."""


class NoDocumentError(PreconditionError):
    """Raised when no document is open."""

    def __init__(self) -> None:
        super().__init__("No document is open.")


class EmptySelectionError(PreconditionError):
    """Raised when nothing is selected."""

    def __init__(self) -> None:
        super().__init__("Select a table cell, a text box, or some text.")


class UnsupportedSelectionError(PreconditionError):
    """Raised when the selection holds no valid cell, text box or text."""

    def __init__(self, detail: str | None = None) -> None:
        message = "No valid table cell, text box, or text is selected."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class AdapterError(CondenseError):
    """Raised when the document collaborator fails while a unit is processed."""

    def __init__(self, unit: TextUnit, cause: BaseException) -> None:
        detail = str(cause) if str(cause) else type(cause).__name__
        super().__init__(f"Document operation failed for {unit}: {detail}")
        self.unit: TextUnit = unit
        self.cause: BaseException = cause


__all__ = [
    "AdapterError",
    "CondenseError",
    "EmptySelectionError",
    "NoDocumentError",
    "PreconditionError",
    "UnsupportedSelectionError",
]
