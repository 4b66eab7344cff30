"""Host platform handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import BasePlatform
from .linux import LinuxPlatform
from .macos import MacOSPlatform
from .windows import WindowsPlatform

from portless_installer.types import Family

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.protocols import CommandRunner, FileSystem

__all__ = [
    "BasePlatform",
    "LinuxPlatform",
    "MacOSPlatform",
    "WindowsPlatform",
    "get_platform",
]


PLATFORMS: dict[Family, type[BasePlatform]] = {
    Family.MACOS: MacOSPlatform,
    Family.LINUX: LinuxPlatform,
    Family.WINDOWS: WindowsPlatform,
}


def get_platform(
    family: Family,
    runner: CommandRunner,
    filesystem: FileSystem,
    ui: ConsoleUI,
) -> BasePlatform:
    """Get the handler for a platform family.

    Args:
        family: Detected platform family.
        runner: Command runner for external tools.
        filesystem: Filesystem abstraction.
        ui: Console for user-facing messages.

    Returns:
        Platform handler instance.

    Raises:
        ValueError: If the family has no handler.
    """
    if family not in PLATFORMS:
        raise ValueError(f"Unknown platform: {family}. Supported: {[f.value for f in PLATFORMS]}")
    return PLATFORMS[family](runner, filesystem, ui)
