"""Domain types for the condense feature."""

from .errors import (
    AdapterError,
    CondenseError,
    EmptySelectionError,
    NoDocumentError,
    PreconditionError,
    UnsupportedSelectionError,
)
from .models import (
    FULL_SCALE,
    BatchSummary,
    CondenseSettings,
    FitDecision,
    FitMode,
    FitOutcome,
    FitParameters,
    SearchResult,
    Selection,
    SelectionContext,
    TextUnit,
    UnitKind,
)

__all__ = [
    "AdapterError",
    "BatchSummary",
    "CondenseError",
    "CondenseSettings",
    "EmptySelectionError",
    "FULL_SCALE",
    "FitDecision",
    "FitMode",
    "FitOutcome",
    "FitParameters",
    "NoDocumentError",
    "PreconditionError",
    "SearchResult",
    "Selection",
    "SelectionContext",
    "TextUnit",
    "UnitKind",
    "UnsupportedSelectionError",
]
