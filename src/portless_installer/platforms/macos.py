"""macOS platform implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.errors import InstallFailedError, PrerequisiteError
from portless_installer.platforms.base import BasePlatform
from portless_installer.types import Family, InstallTarget

if TYPE_CHECKING:
    from portless_installer.context import InstallContext

logger = logging.getLogger(__name__)


class MacOSPlatform(BasePlatform):
    """macOS handler: Xcode command line tools, disk image installs."""

    family = Family.MACOS

    def ensure_native_prerequisites(self, ctx: InstallContext) -> None:
        """Require the Xcode command line tools.

        Installing them needs interactive OS consent, so a missing toolset is
        reported with instructions instead of installed.

        Raises:
            PrerequisiteError: If the command line tools are absent.
        """
        self.ui.show_info("Checking macOS prerequisites...")
        if not self._has_command_line_tools(ctx):
            self.ui.show_info("Please run: xcode-select --install")
            raise PrerequisiteError("Xcode Command Line Tools are not installed.")
        self.ui.show_success("Xcode Command Line Tools are installed")

    def _has_command_line_tools(self, ctx: InstallContext) -> bool:
        if self.runner.which("xcode-select", path=ctx.search_path()) is None:
            return False
        try:
            result = self.runner.run(["xcode-select", "-p"], capture=True)
        except OSError as e:
            logger.debug("xcode-select failed to start: %s", e)
            return False
        return result.ok

    def bundle_path(self, ctx: InstallContext) -> Path:
        """Installed application bundle path."""
        return ctx.config.applications_dir / f"{ctx.config.app_name}.app"

    def install_asset(self, asset_path: Path, ctx: InstallContext) -> InstallTarget:
        """Mount the disk image and copy the app bundle into Applications.

        The image is always detached and the temporary mount point removed,
        even when the copy fails. An existing bundle is replaced.

        Args:
            asset_path: Downloaded .dmg file.
            ctx: Run context.

        Returns:
            InstallTarget for the installed bundle.

        Raises:
            InstallFailedError: If mounting or copying fails.
        """
        try:
            mount_point = self.fs.make_temp_dir("portless-dmg-")
        except OSError as e:
            raise InstallFailedError(f"Cannot create mount point: {e}") from e

        attached = False
        detached = False
        try:
            self.ui.show_info(f"Mounting DMG: {asset_path}")
            self.run_checked(
                ["hdiutil", "attach", str(asset_path), "-mountpoint", str(mount_point), "-nobrowse"],
                InstallFailedError,
            )
            attached = True
            target = self._copy_bundle(mount_point, ctx)
        finally:
            if attached:
                detached = self._detach(mount_point)
            if detached or not attached:
                self._remove_mount_point(mount_point)
            else:
                self.ui.show_warning(f"Mount point left in place: {mount_point}")

        self.ui.show_success(f"Application installed to {ctx.config.applications_dir}")
        return target

    def _copy_bundle(self, mount_point: Path, ctx: InstallContext) -> InstallTarget:
        source = mount_point / f"{ctx.config.app_name}.app"
        dest = self.bundle_path(ctx)
        if not self.fs.exists(source):
            raise InstallFailedError(f"Disk image does not contain {source.name}")
        try:
            if self.fs.exists(dest):
                logger.debug("Replacing existing bundle %s", dest)
                self.fs.rmtree(dest)
            self.fs.copytree(source, dest)
        except OSError as e:
            raise InstallFailedError(f"Cannot copy {source.name} to {dest.parent}: {e}") from e
        return InstallTarget(dest, f"application bundle {dest}")

    def _detach(self, mount_point: Path) -> bool:
        try:
            result = self.runner.run(["hdiutil", "detach", str(mount_point)])
        except OSError as e:
            logger.warning("hdiutil detach failed to start: %s", e)
            return False
        if not result.ok:
            logger.warning("hdiutil detach exited with %d", result.returncode)
        return result.ok

    def _remove_mount_point(self, mount_point: Path) -> None:
        try:
            if self.fs.exists(mount_point):
                self.fs.rmtree(mount_point)
        except OSError as e:
            logger.warning("Cannot remove mount point %s: %s", mount_point, e)

    def next_steps(self, ctx: InstallContext, target: InstallTarget | None) -> list[str]:
        """Getting-started instructions for macOS."""
        if target is not None and target.from_source:
            first = f"Open the app bundle built in {target.location}"
        else:
            first = f"Open {self.bundle_path(ctx)}"
        return [first, "Allow USB access permissions if prompted"]
