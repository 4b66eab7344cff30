"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from portless_installer import __version__
from portless_installer.console import ConsoleUI
from portless_installer.context import create_context
from portless_installer.errors import ConfigError
from portless_installer.logging_setup import configure_logging
from portless_installer.orchestrator import Orchestrator

app = typer.Typer(
    name="portless-install",
    help="Install Portless (USB Share) from a prebuilt release or from source",
    add_completion=False,
)

ui = ConsoleUI()

# Conventional exit status for SIGINT
EXIT_INTERRUPTED = 130


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        ui.console.print(f"portless-installer v{__version__}")
        raise typer.Exit()


@app.command()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log commands and decisions")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Installer config file (JSON)", dir_okay=False),
    ] = None,
    _context=None,
) -> None:
    """Interactively install Portless on this machine."""
    configure_logging(verbose)

    try:
        ctx = _context or create_context(config)
    except ConfigError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e

    orchestrator = Orchestrator(ctx, ui=ui)
    try:
        result = orchestrator.run()
    except KeyboardInterrupt:
        ui.show_error("Installation interrupted")
        raise typer.Exit(EXIT_INTERRUPTED) from None

    if not result.success:
        raise typer.Exit(result.exit_code)


if __name__ == "__main__":
    app()
