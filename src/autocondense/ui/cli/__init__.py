"""Command line interface package."""

from autocondense.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
