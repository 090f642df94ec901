"""Command execution package for CLI."""

from autocondense.ui.cli.commands.executor import CommandExecutor
from autocondense.ui.cli.commands.fit import FitCommand
from autocondense.ui.cli.commands.reset import ResetCommand

__all__ = ["CommandExecutor", "FitCommand", "ResetCommand"]
