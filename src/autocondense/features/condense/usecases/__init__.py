"""Condense use cases: evaluation, search, batch and reset."""

from .adjuster import UnitAdjuster
from .batch_runner import UnitProcessor, run_batch
from .convergence import ConvergenceSearch
from .events import BatchLogContext, CondenseEvent, log_condense
from .fit_evaluator import decide_fit, evaluate, is_valid_unit
from .leading_reset import reset_leading_characters
from .ports import (
    ConfirmCallback,
    DocumentPort,
    FlowPort,
    FlowScalePort,
    ProgressCallback,
    TextScalePort,
)
from .scale_mutator import apply_uniform_scale, capture_leading_scales, pin_leading_scales

__all__ = [
    "BatchLogContext",
    "CondenseEvent",
    "ConfirmCallback",
    "ConvergenceSearch",
    "DocumentPort",
    "FlowPort",
    "FlowScalePort",
    "ProgressCallback",
    "TextScalePort",
    "UnitAdjuster",
    "UnitProcessor",
    "apply_uniform_scale",
    "capture_leading_scales",
    "decide_fit",
    "evaluate",
    "is_valid_unit",
    "log_condense",
    "pin_leading_scales",
    "reset_leading_characters",
    "run_batch",
]
