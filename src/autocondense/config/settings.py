"""Where: src/autocondense/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Hand validated, immutable tuning values to the condensation core.
Trade-offs: - Out-of-range values fall back to defaults instead of failing the run.
"""

from __future__ import annotations

from dataclasses import dataclass

from autocondense.config.config import (
    MAX_TARGET_LINES_DEFAULT,
    MIN_SCALE_DEFAULT,
    PROGRESS_INTERVAL_DEFAULT,
    RECOMPOSE_INTERVAL_DEFAULT,
    STEP_DEFAULT,
    Config,
)
from autocondense.features.condense.domain import CondenseSettings


def _positive_int(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if value > 0 else default


def _flag(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _scale(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value) if 0 < value <= 100 else default


def load_condense_settings(config: Config | None = None) -> CondenseSettings:
    """Build ``CondenseSettings`` from the configuration file values."""

    app_config = config or Config.load()
    return CondenseSettings(
        min_scale=_scale(getattr(app_config, "min_scale", None), MIN_SCALE_DEFAULT),
        step=_positive_int(getattr(app_config, "step", None), STEP_DEFAULT),
        recompose_interval=_positive_int(
            getattr(app_config, "recompose_interval", None), RECOMPOSE_INTERVAL_DEFAULT
        ),
        max_target_lines=_positive_int(
            getattr(app_config, "max_target_lines", None), MAX_TARGET_LINES_DEFAULT
        ),
        progress_interval=_positive_int(
            getattr(app_config, "progress_interval", None), PROGRESS_INTERVAL_DEFAULT
        ),
    )


@dataclass(frozen=True, slots=True)
class RunDefaults:
    """Fit options applied when the command line leaves them out."""

    target_lines: int = 1
    overflow_priority: bool = True
    exclude_leading_char: bool = False


def load_run_defaults(config: Config | None = None) -> RunDefaults:
    """Build validated fit defaults; values of the wrong type fall back to the defaults."""

    app_config = config or Config.load()
    fallback = RunDefaults()
    return RunDefaults(
        target_lines=_positive_int(
            getattr(app_config, "default_target_lines", None), fallback.target_lines
        ),
        overflow_priority=_flag(
            getattr(app_config, "overflow_priority", None), fallback.overflow_priority
        ),
        exclude_leading_char=_flag(
            getattr(app_config, "exclude_leading_char", None), fallback.exclude_leading_char
        ),
    )


__all__ = ["RunDefaults", "load_condense_settings", "load_run_defaults"]
