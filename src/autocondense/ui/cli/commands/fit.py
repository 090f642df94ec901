"""src/autocondense/ui/cli/commands/fit.py
What: Execute condense runs via the CLI.
Why: Map the ``fit`` options onto run parameters.
"""

from typing_extensions import override

from autocondense.features.condense import FitParameters
from autocondense.ui.cli.args.options import FitArgs
from autocondense.ui.cli.commands.executor import CommandExecutor


class FitCommand(CommandExecutor):
    """Command for condensing the selection."""

    args: FitArgs

    def __init__(self, args: FitArgs) -> None:
        super().__init__(args)

    @override
    def build_parameters(self) -> FitParameters:
        return FitParameters.from_user_input(
            self.args.target_lines,
            overflow_priority=self.args.overflow_priority,
            exclude_leading_char=self.args.exclude_leading_char,
            max_target_lines=self.settings.max_target_lines,
        )

    @property
    @override
    def assume_yes(self) -> bool:
        return self.args.assume_yes

    @property
    @override
    def description(self) -> str:
        return "Condensing"
