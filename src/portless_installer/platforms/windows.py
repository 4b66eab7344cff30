"""Windows platform implementation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.errors import InstallFailedError
from portless_installer.platforms.base import BasePlatform
from portless_installer.types import Family, InstallTarget

if TYPE_CHECKING:
    from portless_installer.context import InstallContext


class WindowsPlatform(BasePlatform):
    """Windows handler: build tools notice, installer executable."""

    family = Family.WINDOWS

    def ensure_native_prerequisites(self, ctx: InstallContext) -> None:
        """Remind the user about the C++ build tools. Nothing is verified."""
        self.ui.show_info("Checking Windows prerequisites...")
        self.ui.show_info(
            "Windows detected. Ensure you have Visual Studio Build Tools "
            "with C++ workload installed."
        )

    def install_asset(self, asset_path: Path, ctx: InstallContext) -> InstallTarget:
        """Run the downloaded installer; its exit code decides success.

        Raises:
            InstallFailedError: If the installer cannot start or exits non-zero.
        """
        self.ui.show_info(f"Running installer: {asset_path}")
        self.run_checked([str(asset_path)], InstallFailedError)
        self.ui.show_success("Application installed")
        return InstallTarget(None, "Windows installer target")

    def next_steps(self, ctx: InstallContext, target: InstallTarget | None) -> list[str]:
        """Getting-started instructions for Windows."""
        app_name = ctx.config.app_name
        if target is not None and target.from_source:
            return [f"Run the installer built in {target.location}", "Run the application"]
        return [f"Search for '{app_name}' in your Start menu", "Run the application"]
