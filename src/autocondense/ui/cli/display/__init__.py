"""Display management for CLI interface."""

from autocondense.ui.cli.display.progress import ProgressDisplay
from autocondense.ui.cli.display.result import ResultDisplay

__all__ = ["ProgressDisplay", "ResultDisplay"]
