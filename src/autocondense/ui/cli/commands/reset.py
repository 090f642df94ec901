"""src/autocondense/ui/cli/commands/reset.py
What: Execute leading-character resets via the CLI.
"""

from typing_extensions import override

from autocondense.features.condense import FitParameters
from autocondense.ui.cli.args.options import ResetArgs
from autocondense.ui.cli.commands.executor import CommandExecutor


class ResetCommand(CommandExecutor):
    """Command for resetting leading characters to full scale."""

    args: ResetArgs

    def __init__(self, args: ResetArgs) -> None:
        super().__init__(args)

    @override
    def build_parameters(self) -> FitParameters:
        return FitParameters(reset_leading_only=True)

    @property
    @override
    def description(self) -> str:
        return "Resetting leading characters"
