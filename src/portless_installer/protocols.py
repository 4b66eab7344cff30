"""Protocol definitions for the installer's external capabilities.

Every side effect the pipeline performs (running commands, asking the user,
talking HTTP, touching the filesystem) goes through one of these interfaces.
Production implementations satisfy them structurally; tests substitute
doubles that simulate success or failure without real toolchains.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from portless_installer.types import CommandResult, InstallMethod

if TYPE_CHECKING:
    from portless_installer.gitops import SyncOutcome
    from portless_installer.release import ReleaseManifest


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def run(
        self,
        argv: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            argv: Command and arguments.
            cwd: Working directory for the command.
            env: Complete environment for the command.
            capture: Capture stdout instead of streaming it to the terminal.

        Returns:
            CommandResult with the exit status.

        Raises:
            OSError: If the command cannot be launched.
        """
        ...

    def which(self, name: str, path: str | None = None) -> str | None:
        """Locate an executable.

        Args:
            name: Executable name.
            path: Search path. Defaults to the process PATH.

        Returns:
            Absolute path of the executable, or None.
        """
        ...


@runtime_checkable
class Prompt(Protocol):
    """Protocol for interactive decisions."""

    def choose_method(self) -> InstallMethod:
        """Ask whether to install a prebuilt binary or build from source.

        Returns:
            Chosen method. Invalid or missing input yields SOURCE.
        """
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question.

        Args:
            message: Question to show.
            default: Answer used when no interactive input is available.

        Returns:
            User's answer.
        """
        ...


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the release host's HTTP API."""

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None, timeout: float = 30.0
    ) -> Any:
        """GET a URL and decode the JSON body.

        Raises:
            OSError: On network failure (urllib.error.URLError is an OSError).
            ValueError: If the body is not JSON.
        """
        ...

    def download(self, url: str, dest: Path, timeout: float = 300.0) -> Path:
        """Download a URL to a file.

        Returns:
            Path of the written file.

        Raises:
            OSError: On network or write failure.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access to enable testing without real I/O.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        ...

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree."""
        ...

    def copytree(self, src: Path, dst: Path) -> None:
        """Copy a directory tree, preserving symlinks."""
        ...

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a single file with its permission bits."""
        ...

    def make_executable(self, path: Path) -> None:
        """Add execute permission for user, group and others."""
        ...

    def make_temp_dir(self, prefix: str) -> Path:
        """Create a fresh temporary directory."""
        ...


@runtime_checkable
class SourceRepository(Protocol):
    """Protocol for working-copy synchronization."""

    def sync(self, dest: Path) -> SyncOutcome:
        """Clone the repository into ``dest`` or optionally update it.

        Raises:
            SyncError: If clone or pull fails.
        """
        ...


@runtime_checkable
class ReleaseSource(Protocol):
    """Protocol for release lookups."""

    def latest(self, repo_url: str) -> ReleaseManifest:
        """Fetch the latest published release.

        Raises:
            ReleaseError: If the release cannot be fetched or parsed.
        """
        ...
