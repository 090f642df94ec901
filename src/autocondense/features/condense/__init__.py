# Path: `src/autocondense/features/condense/__init__.py`
# Summary: Export condense feature domain and use case symbols.
# Why: Provide a stable import surface for the application service, adapters and tests.

from .domain import (
    FULL_SCALE,
    AdapterError,
    BatchSummary,
    CondenseError,
    CondenseSettings,
    EmptySelectionError,
    FitDecision,
    FitMode,
    FitOutcome,
    FitParameters,
    NoDocumentError,
    PreconditionError,
    SearchResult,
    Selection,
    SelectionContext,
    TextUnit,
    UnitKind,
    UnsupportedSelectionError,
)
from .usecases import (
    CondenseEvent,
    ConvergenceSearch,
    DocumentPort,
    FlowScalePort,
    ProgressCallback,
    TextScalePort,
    UnitAdjuster,
    reset_leading_characters,
    run_batch,
)

__all__ = [
    "AdapterError",
    "BatchSummary",
    "CondenseError",
    "CondenseEvent",
    "CondenseSettings",
    "ConvergenceSearch",
    "DocumentPort",
    "EmptySelectionError",
    "FULL_SCALE",
    "FitDecision",
    "FitMode",
    "FitOutcome",
    "FitParameters",
    "FlowScalePort",
    "NoDocumentError",
    "PreconditionError",
    "ProgressCallback",
    "SearchResult",
    "Selection",
    "SelectionContext",
    "TextScalePort",
    "TextUnit",
    "UnitAdjuster",
    "UnitKind",
    "UnsupportedSelectionError",
    "reset_leading_characters",
    "run_batch",
]
