"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from autocondense.platform.document import TextSelection


@final
@dataclass(slots=True)
class FitArgs:
    """Command line arguments for the ``fit`` subcommand."""

    command: Literal["fit"]
    document_path: Path
    output_path: Path | None
    cells: tuple[str, ...]
    frames: tuple[str, ...]
    text: TextSelection | None
    target_lines: int | str | None
    overflow_priority: bool
    exclude_leading_char: bool
    dry_run: bool
    assume_yes: bool
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ResetArgs:
    """Command line arguments for the ``reset-leading`` subcommand."""

    command: Literal["reset-leading"]
    document_path: Path
    output_path: Path | None
    cells: tuple[str, ...]
    frames: tuple[str, ...]
    text: TextSelection | None
    dry_run: bool
    verbose: bool
    quiet: bool


CLIArgs = FitArgs | ResetArgs

__all__ = ["CLIArgs", "FitArgs", "ResetArgs"]
