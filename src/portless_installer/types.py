"""Shared data types for portless installer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = [
    "CommandResult",
    "Family",
    "InstallMethod",
    "InstallTarget",
    "PlatformInfo",
    "RunResult",
    "Stage",
]


class Family(str, Enum):
    """Supported operating system families."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"


class InstallMethod(str, Enum):
    """How the application gets installed."""

    BINARY = "binary"
    SOURCE = "source"


class Stage(str, Enum):
    """Orchestrator states."""

    CHOOSE_METHOD = "choose-method"
    DETECT_PLATFORM = "detect-platform"
    BINARY_ATTEMPT = "binary-attempt"
    SOURCE_ATTEMPT = "source-attempt"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class PlatformInfo:
    """Host operating system family and CPU architecture."""

    family: Family
    arch: str

    def __str__(self) -> str:
        return f"{self.family.value} ({self.arch})"


@dataclass(frozen=True)
class InstallTarget:
    """Where the application ended up.

    Attributes:
        location: Installed path, or None when an OS installer owns the destination.
        description: Human-readable description of the target.
        from_source: True if the target is a locally built bundle directory.
    """

    location: Path | None
    description: str
    from_source: bool = False


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command."""

    argv: list[str]
    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class RunResult:
    """Result of a complete installation run.

    Attributes:
        success: True if the application was installed or built.
        method: Installation method the user chose.
        stage: Final orchestrator stage (DONE on success).
        platform: Detected platform (None if detection failed).
        target: Install target (None on failure).
        version: Release version used by the binary path, if any.
        fell_back: True if the binary path fell back to a source build.
        error: Error message (None on success).
    """

    success: bool
    method: InstallMethod
    stage: Stage
    platform: PlatformInfo | None = None
    target: InstallTarget | None = None
    version: str | None = None
    fell_back: bool = False
    error: str | None = None
    steps: list[Stage] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.success and self.error is not None:
            raise ValueError("success=True but error is set")
        if not self.success and self.error is None:
            raise ValueError("success=False requires error message")
        if self.success and self.stage is not Stage.DONE:
            raise ValueError("success=True requires stage DONE")

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
