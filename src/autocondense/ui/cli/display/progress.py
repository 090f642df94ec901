"""Progress display functionality for CLI."""

from typing import Any, Protocol, final, runtime_checkable

from rich.console import Console
from rich.progress import Progress, TaskID
from rich.prompt import Confirm

from autocondense.application.services.condense_service import CondenseReport, CondenseRequest
from autocondense.features.condense.usecases import ConfirmCallback, ProgressCallback
from autocondense.platform.logging import CondenseRichHandler, logger


@runtime_checkable
class CondenseServiceLike(Protocol):
    """Protocol for application services that run a condense with progress."""

    def run(
        self,
        request: CondenseRequest,
        *,
        progress_callback: ProgressCallback | None = None,
        confirm: ConfirmCallback | None = None,
    ) -> CondenseReport:
        ...


def _handler_console() -> Console | None:
    for handler in logger.handlers:
        if isinstance(handler, CondenseRichHandler):
            return handler.console
    return None


@final
class ProgressDisplay:
    """Handles progress display and confirmation prompts in CLI."""

    def run_with_service(
        self,
        app: CondenseServiceLike,
        request: CondenseRequest,
        *,
        assume_yes: bool = False,
        description: str = "Condensing",
    ) -> CondenseReport:
        """Run the service with a transient progress bar.

        The bar starts on the first progress report so a confirmation prompt
        asked before the batch is not drawn over.

        Args:
            app: Application service instance used to run the condense.
            request: Condense parameters.
            assume_yes: Answer the linked frame warning with yes.
            description: Label shown next to the bar.
        """
        progress_console = _handler_console()

        progress_kwargs: dict[str, Any] = {
            "transient": True,
            "redirect_stdout": False,
            "redirect_stderr": False,
        }
        if progress_console is not None:
            progress_kwargs["console"] = progress_console

        progress = Progress(**progress_kwargs)
        task_id: TaskID | None = None

        def _cb(current: int, total: int) -> None:
            nonlocal task_id
            if task_id is None:
                progress.start()
                task_id = progress.add_task(f"[cyan]{description}...", total=total)
            _ = progress.update(
                task_id,
                completed=current,
                description=f"[cyan]{description}... {current}/{total}",
            )

        try:
            return app.run(
                request,
                progress_callback=_cb,
                confirm=self.confirm_callback(assume_yes=assume_yes, console=progress_console),
            )
        finally:
            if task_id is not None:
                progress.stop()

    @staticmethod
    def confirm_callback(*, assume_yes: bool, console: Console | None = None) -> ConfirmCallback:
        """Build the callback answering the linked frame warning."""

        def _confirm(message: str) -> bool:
            if assume_yes:
                logger.info("Linked text frames confirmed by --yes")
                return True
            try:
                return Confirm.ask(message, console=console, default=False)
            except (EOFError, KeyboardInterrupt):
                return False

        return _confirm
