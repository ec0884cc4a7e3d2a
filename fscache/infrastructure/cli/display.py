import logging
from typing import Any

from rich.box import HEAVY, SIMPLE
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fscache.domain.interfaces.user_interface import UserInterface
from fscache.domain.models.cache import ClearReport

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self):
        """Initializes the rich Console."""
        self._console = Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, console) -> None:
        self._console = console

    def display_output(self, output: str, **kwargs: Any) -> None:
        """Prints a value verbatim, without markup interpretation.

        Args:
            output: The text to display.
        """
        self.console.print(Text(str(output)))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style.

        Args:
            error_message: The error message to display.
        """
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message.

        Args:
            info_message: The informational message to display.
        """
        self.console.print(Text(info_message, style="blue"))

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message.

        Args:
            warning_message: The warning message to display.
        """
        logger.warning(f"Display warning: {warning_message}")
        panel = Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_clear_report(self, report: ClearReport) -> None:
        """Summarizes a clear, listing every node that could not be removed."""
        if report.succeeded:
            self.display_info(f"Cache cleared: {len(report.removed)} node(s) removed.")
            return

        table = Table(title="Nodes not removed", box=SIMPLE)
        table.add_column("Path", style="yellow")
        table.add_column("Error", style="red")
        for failure in report.failures:
            table.add_row(str(failure.path), failure.error)
        self.display_warning(
            f"Cache clear incomplete: {report.failure_count} node(s) could not be removed, "
            f"{len(report.removed)} removed."
        )
        self.console.print(table)
