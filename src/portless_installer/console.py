"""Console output for the installer."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel


class ConsoleUI:
    """User-facing status output."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the UI.

        Args:
            console: Rich console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_header(self, title: str) -> None:
        """Display a section header.

        Args:
            title: Header text.
        """
        self.console.print(Panel(f"[bold blue]{title}[/bold blue]", border_style="blue"))

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")

    def show_next_steps(self, steps: list[str], more_info_url: str) -> None:
        """Display the numbered getting-started list.

        Args:
            steps: Instructions in order.
            more_info_url: Project URL for further reading.
        """
        self.console.print()
        self.show_info("To get started:")
        for i, step in enumerate(steps, 1):
            self.console.print(f"  {i}. {step}")
        self.console.print()
        self.show_info(f"For more information, visit: {more_info_url}")
