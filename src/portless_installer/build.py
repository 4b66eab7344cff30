"""Source build of the application."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from portless_installer.errors import BuildError
from portless_installer.runner import format_argv
from portless_installer.types import InstallTarget

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.context import InstallContext
    from portless_installer.protocols import CommandRunner

logger = logging.getLogger(__name__)

# Lockfile-exact install, never resolves new versions
INSTALL_DEPENDENCIES = ["npm", "ci"]
PACKAGE_APPLICATION = ["npm", "run", "tauri", "build"]

BUNDLE_DIR = ("src-tauri", "target", "release", "bundle")


class SourceBuildPipeline:
    """Installs pinned dependencies and runs the packaging toolchain."""

    def __init__(self, runner: CommandRunner, ui: ConsoleUI) -> None:
        """Initialize the pipeline.

        Args:
            runner: Command runner for npm.
            ui: Console for user-facing messages.
        """
        self.runner = runner
        self.ui = ui

    def build(self, ctx: InstallContext) -> InstallTarget:
        """Build an installable bundle from the working copy.

        Args:
            ctx: Run context.

        Returns:
            InstallTarget pointing at the bundle output directory.

        Raises:
            BuildError: If dependency installation or packaging fails.
        """
        self.ui.show_info("Installing Node.js dependencies...")
        self._run(INSTALL_DEPENDENCIES, ctx)
        self.ui.show_success("Node.js dependencies installed")

        self.ui.show_info("Building Portless application...")
        self._run(PACKAGE_APPLICATION, ctx)
        self.ui.show_success("Build completed")

        bundle_dir = ctx.working_copy.joinpath(*BUNDLE_DIR)
        logger.debug("Bundles expected in %s", bundle_dir)
        return InstallTarget(bundle_dir, f"bundles in {bundle_dir}", from_source=True)

    def _run(self, argv: list[str], ctx: InstallContext) -> None:
        # npm is a .cmd shim on Windows, resolve it through PATHEXT
        resolved = self.runner.which(argv[0], path=ctx.search_path())
        if resolved:
            argv = [resolved, *argv[1:]]
        try:
            result = self.runner.run(argv, cwd=ctx.working_copy, env=ctx.command_env())
        except OSError as e:
            raise BuildError(f"Cannot run {format_argv(argv)}: {e}") from e
        if not result.ok:
            raise BuildError(f"{format_argv(argv)} failed with exit code {result.returncode}")
