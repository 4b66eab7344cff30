"""Prebuilt binary installation."""

from __future__ import annotations

import http.client
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.assets import asset_pattern, select_asset
from portless_installer.errors import AssetNotFoundError, InstallFailedError

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.context import InstallContext
    from portless_installer.platforms import BasePlatform
    from portless_installer.protocols import FileSystem, HttpClient
    from portless_installer.release import ReleaseManifest
    from portless_installer.types import InstallTarget

logger = logging.getLogger(__name__)


class BinaryInstaller:
    """Downloads the platform's release asset and installs it.

    Follows Separate Use from Creation: the constructor requires all
    dependencies; the platform handler does the OS-specific placement.
    """

    def __init__(
        self,
        http: HttpClient,
        filesystem: FileSystem,
        platform: BasePlatform,
        ui: ConsoleUI,
    ) -> None:
        """Initialize the installer.

        Args:
            http: HTTP client used for the download.
            filesystem: Filesystem abstraction.
            platform: Handler for the detected platform family.
            ui: Console for user-facing messages.
        """
        self.http = http
        self.fs = filesystem
        self.platform = platform
        self.ui = ui

    def install(self, manifest: ReleaseManifest, ctx: InstallContext) -> InstallTarget:
        """Install the release asset matching the host platform.

        Args:
            manifest: Latest release manifest.
            ctx: Run context.

        Returns:
            Where the application was installed.

        Raises:
            AssetNotFoundError: If no asset matches the platform.
            InstallFailedError: If the download or installation fails.
        """
        pattern = asset_pattern(ctx.platform)
        prefix = ctx.config.asset_prefix
        self.ui.show_info(f"Downloading pre-built binary for {ctx.platform.family.value}-{ctx.platform.arch}...")

        asset = select_asset(manifest, ctx.platform, prefix)
        if asset is None:
            raise AssetNotFoundError(
                f"Could not find pre-built binary for {ctx.platform.family.value}-"
                f"{ctx.platform.arch} (expected {pattern.render(prefix)})"
            )

        logger.debug("Selected asset %s (%s)", asset.name, pattern.description)
        asset_path = self._download(asset.url, asset.name, ctx)
        return self.platform.install_asset(asset_path, ctx)

    def _download(self, url: str, name: str, ctx: InstallContext) -> Path:
        """Download an asset into the run's download directory.

        Raises:
            InstallFailedError: If the directory cannot be created or the download fails.
        """
        dest = ctx.download_dir / Path(name).name
        self.ui.show_info(f"Downloading from: {url}")
        try:
            self.fs.mkdir(ctx.download_dir, parents=True, exist_ok=True)
            self.http.download(url, dest, timeout=ctx.config.download_timeout)
        except (OSError, http.client.HTTPException) as e:
            raise InstallFailedError(f"Download of {name} failed: {e}") from e
        self.ui.show_success("Binary downloaded")
        return dest
