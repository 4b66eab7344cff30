"""Linux platform implementation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.errors import InstallFailedError, PrerequisiteError
from portless_installer.platforms.base import BasePlatform
from portless_installer.types import Family, InstallTarget

if TYPE_CHECKING:
    from portless_installer.context import InstallContext

logger = logging.getLogger(__name__)

DPKG_INSTALLED = "install ok installed"


class LinuxPlatform(BasePlatform):
    """Linux handler: apt development packages, AppImage installs."""

    family = Family.LINUX

    def ensure_native_prerequisites(self, ctx: InstallContext) -> None:
        """Install missing development packages in one apt batch.

        Raises:
            PrerequisiteError: If package state cannot be queried or apt fails.
        """
        self.ui.show_info("Checking Linux prerequisites...")
        missing = self.missing_packages(ctx.config.linux_packages)
        if not missing:
            self.ui.show_success("All Linux dependencies are installed")
            return

        self.ui.show_info(f"Installing missing Linux dependencies: {' '.join(missing)}")
        self.run_checked(self.privileged(["apt-get", "update"]), PrerequisiteError)
        self.run_checked(
            self.privileged(["apt-get", "install", "-y", *missing]), PrerequisiteError
        )
        self.ui.show_success("Linux dependencies installed")

    def missing_packages(self, packages: list[str]) -> list[str]:
        """Return the packages dpkg does not report as installed, in order."""
        return [name for name in packages if not self.is_package_installed(name)]

    def is_package_installed(self, name: str) -> bool:
        """Check a single package with dpkg-query.

        Raises:
            PrerequisiteError: If dpkg-query is not available.
        """
        try:
            result = self.runner.run(
                ["dpkg-query", "-W", "-f=${Status}", name], capture=True
            )
        except OSError as e:
            raise PrerequisiteError(
                f"Cannot query installed packages (dpkg-query: {e}). "
                "This installer supports Debian-based distributions."
            ) from e
        return result.ok and DPKG_INSTALLED in result.stdout

    def binary_path(self, ctx: InstallContext) -> Path:
        """Installed executable path."""
        return ctx.local_bin / ctx.config.binary_name

    def install_asset(self, asset_path: Path, ctx: InstallContext) -> InstallTarget:
        """Copy the AppImage into the user-local binary directory.

        Args:
            asset_path: Downloaded .AppImage file.
            ctx: Run context.

        Returns:
            InstallTarget for the installed executable.

        Raises:
            InstallFailedError: If the file cannot be copied.
        """
        dest = self.binary_path(ctx)
        try:
            self.fs.make_executable(asset_path)
            self.fs.mkdir(dest.parent, parents=True, exist_ok=True)
            self.fs.copy_file(asset_path, dest)
        except OSError as e:
            raise InstallFailedError(f"Cannot install {asset_path.name} to {dest}: {e}") from e

        self.ui.show_success(f"Application installed to {dest}")
        if not self._on_path(dest.parent):
            self.ui.show_info(f"Add {dest.parent} to your PATH if not already done")
        return InstallTarget(dest, f"executable {dest}")

    def _on_path(self, directory: Path) -> bool:
        entries = os.environ.get("PATH", "").split(os.pathsep)
        return str(directory) in entries

    def next_steps(self, ctx: InstallContext, target: InstallTarget | None) -> list[str]:
        """Getting-started instructions for Linux."""
        app_name = ctx.config.app_name
        if target is not None and target.from_source:
            first = f"Install the package built in {target.location}"
        else:
            first = f"Run: {self.binary_path(ctx)}"
        return [first, f"Or search for '{app_name}' in your application menu"]
