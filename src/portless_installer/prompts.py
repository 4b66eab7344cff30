"""Interactive prompts."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt

from portless_installer.types import InstallMethod

logger = logging.getLogger(__name__)


class ConsolePrompt:
    """Terminal prompts backed by rich.

    When stdin is not a terminal every question returns its default so a
    piped or scripted run never blocks. Satisfies the Prompt protocol.
    """

    def __init__(self, console: Console | None = None, stdin: TextIO | None = None) -> None:
        """Initialize prompts.

        Args:
            console: Rich console used for the questions.
            stdin: Input stream. Defaults to sys.stdin.
        """
        self.console = console or Console()
        self.stdin = stdin or sys.stdin

    def is_interactive(self) -> bool:
        """Check whether input comes from a terminal."""
        isatty = getattr(self.stdin, "isatty", None)
        return bool(isatty and isatty())

    def choose_method(self) -> InstallMethod:
        """Ask for the installation method.

        Returns:
            BINARY for "1"; SOURCE for "2", any other input, or no terminal.
        """
        if not self.is_interactive():
            logger.debug("Non-interactive input, defaulting to source build")
            return InstallMethod.SOURCE

        self.console.print("Choose installation method:")
        self.console.print("  [1] Download pre-built binary (recommended)")
        self.console.print("  [2] Build from source")
        try:
            choice = Prompt.ask("Enter choice (1 or 2)", console=self.console, stream=self.stdin)
        except EOFError:
            return InstallMethod.SOURCE

        if choice.strip() == "1":
            return InstallMethod.BINARY
        return InstallMethod.SOURCE

    def confirm(self, message: str, default: bool = False) -> bool:
        """Show confirmation prompt.

        Args:
            message: Confirmation message.
            default: Answer used without a terminal.

        Returns:
            User's response.
        """
        if not self.is_interactive():
            return default
        try:
            return Confirm.ask(message, default=default, console=self.console, stream=self.stdin)
        except EOFError:
            return default
