"""Base host platform implementation with shared behavior.

Every host family needs the same three things from the pipeline: native
build prerequisites, placement of a downloaded release asset, and
getting-started instructions. They vary only in how each is done.

Pattern: Template Method - the base class owns command execution and error
wrapping, subclasses provide the family-specific steps.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.errors import InstallerError
from portless_installer.runner import format_argv
from portless_installer.types import CommandResult, Family, InstallTarget

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.context import InstallContext
    from portless_installer.protocols import CommandRunner, FileSystem

logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Check if the process runs with root privileges."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


class BasePlatform(ABC):
    """Base class for host platform handlers."""

    family: Family

    def __init__(
        self,
        runner: CommandRunner,
        filesystem: FileSystem,
        ui: ConsoleUI,
    ) -> None:
        """Initialize the handler.

        Args:
            runner: Command runner for external tools.
            filesystem: Filesystem abstraction.
            ui: Console for user-facing messages.
        """
        self.runner = runner
        self.fs = filesystem
        self.ui = ui

    @abstractmethod
    def ensure_native_prerequisites(self, ctx: InstallContext) -> None:
        """Verify or install the family's native build requirements.

        Raises:
            PrerequisiteError: If a requirement is missing and cannot be installed.
        """
        ...

    @abstractmethod
    def install_asset(self, asset_path: Path, ctx: InstallContext) -> InstallTarget:
        """Place a downloaded release asset into the OS install location.

        Raises:
            InstallFailedError: If any installation step fails.
        """
        ...

    @abstractmethod
    def next_steps(self, ctx: InstallContext, target: InstallTarget | None) -> list[str]:
        """Getting-started instructions shown after a successful run."""
        ...

    def privileged(self, argv: Sequence[str]) -> list[str]:
        """Prefix a command with sudo unless already running as root."""
        if is_root():
            return list(argv)
        return ["sudo", *argv]

    def run_checked(
        self,
        argv: Sequence[str],
        error: type[InstallerError],
        *,
        cwd: Path | None = None,
        ctx: InstallContext | None = None,
    ) -> CommandResult:
        """Run a command and raise ``error`` if it cannot start or exits non-zero.

        Args:
            argv: Command and arguments.
            error: InstallerError subclass to raise on failure.
            cwd: Working directory.
            ctx: Run context supplying the child environment.

        Returns:
            CommandResult of the successful command.
        """
        env = ctx.command_env() if ctx is not None else None
        try:
            result = self.runner.run(argv, cwd=cwd, env=env)
        except OSError as e:
            raise error(f"Cannot run {format_argv(argv)}: {e}") from e
        if not result.ok:
            raise error(f"Command failed ({result.returncode}): {format_argv(argv)}")
        return result
