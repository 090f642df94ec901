"""Command line argument handling package."""

from autocondense.ui.cli.args.parser import ArgumentParser
from autocondense.ui.cli.args.options import CLIArgs, FitArgs, ResetArgs

__all__ = ["ArgumentParser", "CLIArgs", "FitArgs", "ResetArgs"]
