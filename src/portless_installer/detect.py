"""Host platform detection."""

from __future__ import annotations

import logging
import platform

from portless_installer.errors import UnsupportedPlatformError
from portless_installer.types import Family, PlatformInfo

logger = logging.getLogger(__name__)

# Kernel name prefixes reported by Windows POSIX layers (Git Bash, MSYS2, Cygwin)
WINDOWS_PREFIXES = ("MINGW", "MSYS", "CYGWIN")

# The only Windows build target that ships
WINDOWS_ARCH = "x86_64"


def detect_platform(system: str | None = None, machine: str | None = None) -> PlatformInfo:
    """Identify the operating system family and CPU architecture.

    Args:
        system: Kernel name. Defaults to platform.system().
        machine: Machine architecture. Defaults to platform.machine().

    Returns:
        Detected PlatformInfo.

    Raises:
        UnsupportedPlatformError: If the kernel name is not recognized.
    """
    system = platform.system() if system is None else system
    machine = platform.machine() if machine is None else machine

    if system.startswith("Darwin"):
        arch = "aarch64" if machine == "arm64" else machine
        info = PlatformInfo(Family.MACOS, arch)
    elif system.startswith("Linux"):
        info = PlatformInfo(Family.LINUX, machine)
    elif system == "Windows" or system.startswith(WINDOWS_PREFIXES):
        info = PlatformInfo(Family.WINDOWS, WINDOWS_ARCH)
    else:
        raise UnsupportedPlatformError(system or "<unknown>")

    logger.debug("Kernel %r machine %r -> %s", system, machine, info)
    return info
