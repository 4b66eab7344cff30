"""Error taxonomy for the installation pipeline.

Each error names the stage that failed. Whether an error is fatal is decided
by the orchestrator: ``ReleaseError`` and ``AssetNotFoundError`` trigger the
source-build fallback, every other error ends the run.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for installer errors."""

    stage = "installer"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(InstallerError):
    """Invalid installer configuration."""

    stage = "configuration"


class UnsupportedPlatformError(InstallerError):
    """Host operating system is not supported."""

    stage = "platform detection"

    def __init__(self, system: str) -> None:
        super().__init__(f"Unsupported operating system: {system}")
        self.system = system


class PrerequisiteError(InstallerError):
    """A required toolchain or system library is missing and could not be installed."""

    stage = "prerequisites"


class SyncError(InstallerError):
    """Cloning or updating the working copy failed."""

    stage = "repository sync"


class ReleaseError(InstallerError):
    """Latest release information could not be fetched or parsed."""

    stage = "release lookup"


class BinaryInstallError(InstallerError):
    """Prebuilt binary installation failed."""

    stage = "binary install"


class AssetNotFoundError(BinaryInstallError):
    """No release asset matches the host platform."""


class InstallFailedError(BinaryInstallError):
    """A matching asset was found but downloading or installing it failed."""


class BuildError(InstallerError):
    """Building the application from source failed."""

    stage = "source build"
