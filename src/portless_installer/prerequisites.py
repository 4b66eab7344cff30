"""Build prerequisite checks and installation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from portless_installer.errors import PrerequisiteError
from portless_installer.runner import format_argv

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.context import InstallContext
    from portless_installer.platforms import BasePlatform
    from portless_installer.protocols import CommandRunner

logger = logging.getLogger(__name__)

NODESOURCE_SETUP_URL = "https://deb.nodesource.com/setup_lts.x"
RUSTUP_URL = "https://sh.rustup.rs"

# Chooses the install commands for a toolchain given an executable lookup
InstallPlan = Callable[[Callable[[str], "str | None"]], list[list[str]]]


def _node_install_plan(which: Callable[[str], str | None]) -> list[list[str]]:
    if which("brew"):
        return [["brew", "install", "node"]]
    return [
        ["sh", "-c", f"curl -fsSL {NODESOURCE_SETUP_URL} | sudo -E bash -"],
        ["sudo", "apt-get", "install", "-y", "nodejs"],
    ]


def _rust_install_plan(which: Callable[[str], str | None]) -> list[list[str]]:
    return [["sh", "-c", f"curl --proto '=https' --tlsv1.2 -sSf {RUSTUP_URL} | sh -s -- -y"]]


@dataclass(frozen=True)
class Toolchain:
    """A cross-platform toolchain found by probing for its executable.

    Attributes:
        name: Display name.
        executable: Executable probed on the search path.
        version_args: Arguments that print the installed version.
        install_plan: Produces the install commands for this host.
    """

    name: str
    executable: str
    version_args: tuple[str, ...]
    install_plan: InstallPlan


TOOLCHAINS: tuple[Toolchain, ...] = (
    Toolchain("Node.js", "node", ("-v",), _node_install_plan),
    Toolchain("Rust", "rustc", ("--version",), _rust_install_plan),
)


class PrerequisiteResolver:
    """Ensures the toolchains and system libraries a source build needs."""

    def __init__(
        self,
        runner: CommandRunner,
        platform: BasePlatform,
        ui: ConsoleUI,
        toolchains: tuple[Toolchain, ...] = TOOLCHAINS,
    ) -> None:
        """Initialize the resolver.

        Args:
            runner: Command runner for probes and installs.
            platform: Handler for the detected platform family.
            ui: Console for user-facing messages.
            toolchains: Toolchains to check, in order.
        """
        self.runner = runner
        self.platform = platform
        self.ui = ui
        self.toolchains = toolchains

    def ensure(self, ctx: InstallContext) -> None:
        """Check every prerequisite, installing missing toolchains.

        Args:
            ctx: Run context.

        Raises:
            PrerequisiteError: If a requirement is missing and cannot be installed.
        """
        self.ui.show_info("Checking prerequisites...")
        self._require_git(ctx)
        for toolchain in self.toolchains:
            self._ensure_toolchain(toolchain, ctx)
        self.platform.ensure_native_prerequisites(ctx)

    def _which(self, ctx: InstallContext) -> Callable[[str], str | None]:
        search_path = ctx.search_path()
        return lambda name: self.runner.which(name, path=search_path)

    def _require_git(self, ctx: InstallContext) -> None:
        if self._which(ctx)("git") is None:
            raise PrerequisiteError("Git is not installed. Please install Git first.")
        self.ui.show_success("Git is installed")

    def _ensure_toolchain(self, toolchain: Toolchain, ctx: InstallContext) -> None:
        which = self._which(ctx)
        if which(toolchain.executable) is None:
            self.ui.show_warning(f"{toolchain.name} is not installed. Installing {toolchain.name}...")
            self._install(toolchain, ctx)
            if self._which(ctx)(toolchain.executable) is None:
                raise PrerequisiteError(
                    f"{toolchain.name} is still not available after installation"
                )
            self.ui.show_success(f"{toolchain.name} installed")
            return

        version = self._version(toolchain, ctx)
        suffix = f": {version}" if version else ""
        self.ui.show_success(f"{toolchain.name} is installed{suffix}")

    def _install(self, toolchain: Toolchain, ctx: InstallContext) -> None:
        env = ctx.command_env()
        for argv in toolchain.install_plan(self._which(ctx)):
            try:
                result = self.runner.run(argv, env=env)
            except OSError as e:
                raise PrerequisiteError(
                    f"Cannot install {toolchain.name}: {format_argv(argv)}: {e}"
                ) from e
            if not result.ok:
                raise PrerequisiteError(
                    f"Installing {toolchain.name} failed ({result.returncode}): {format_argv(argv)}"
                )

    def _version(self, toolchain: Toolchain, ctx: InstallContext) -> str:
        argv = [toolchain.executable, *toolchain.version_args]
        try:
            result = self.runner.run(argv, env=ctx.command_env(), capture=True)
        except OSError as e:
            logger.debug("Version probe %s failed: %s", format_argv(argv), e)
            return ""
        return result.stdout.strip() if result.ok else ""
