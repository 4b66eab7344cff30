"""Application and run contexts for dependency injection.

This module separates object creation from object use. ``AppContext`` holds
the long-lived services (typed by Protocol), ``InstallContext`` holds the
per-run facts every pipeline stage needs: the detected platform, the working
copy and the download directory. Stages receive the context explicitly
instead of reading environment variables or changing directories.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from portless_installer.config import InstallerConfig, load_config
from portless_installer.protocols import (
    CommandRunner,
    FileSystem,
    HttpClient,
    Prompt,
)
from portless_installer.types import PlatformInfo


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from portless_installer.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass(frozen=True)
class InstallContext:
    """Per-run state threaded through every pipeline stage.

    Attributes:
        config: Installer configuration.
        platform: Detected host platform.
        working_copy: Local clone of the application repository.
        download_dir: Ephemeral directory for release downloads.
        home: User home directory.
    """

    config: InstallerConfig
    platform: PlatformInfo
    working_copy: Path
    download_dir: Path
    home: Path

    @classmethod
    def create(
        cls,
        config: InstallerConfig,
        platform: PlatformInfo,
        home: Path | None = None,
    ) -> InstallContext:
        """Build the run context for a detected platform.

        Args:
            config: Installer configuration.
            platform: Detected host platform.
            home: Override home directory (for testing).

        Returns:
            InstallContext with paths derived from the config.
        """
        working_copy = config.project_dir
        return cls(
            config=config,
            platform=platform,
            working_copy=working_copy,
            download_dir=working_copy / "downloads",
            home=home or Path.home(),
        )

    @property
    def cargo_bin(self) -> Path:
        """Directory where rustup installs the Rust toolchain."""
        return self.home / ".cargo" / "bin"

    @property
    def local_bin(self) -> Path:
        """User-local binary directory."""
        return self.home / ".local" / "bin"

    def search_path(self, base: Mapping[str, str] | None = None) -> str:
        """Executable search path including the user-local Rust toolchain."""
        env = os.environ if base is None else base
        current = env.get("PATH", "")
        parts = [str(self.cargo_bin)]
        if current:
            parts.append(current)
        return os.pathsep.join(parts)

    def command_env(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Environment for child processes.

        Returns a copy of ``base`` (the process environment by default) with
        the search path extended. The process environment is never modified.
        """
        env = dict(os.environ if base is None else base)
        env["PATH"] = self.search_path(env)
        return env


@dataclass
class AppContext:
    """Container for installer services.

    All dependencies are typed using Protocol interfaces, so test doubles can
    be injected without inheritance.
    """

    config: InstallerConfig
    runner: CommandRunner
    prompt: Prompt
    http: HttpClient
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for installer services.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        config_path: Override config file location.

    Returns:
        Configured AppContext.
    """
    from portless_installer.filesystem import RealFileSystem
    from portless_installer.net import UrllibHttpClient
    from portless_installer.prompts import ConsolePrompt
    from portless_installer.runner import SubprocessRunner

    config = load_config(config_path)
    return AppContext(
        config=config,
        runner=SubprocessRunner(),
        prompt=ConsolePrompt(),
        http=UrllibHttpClient(),
        filesystem=RealFileSystem(),
    )
