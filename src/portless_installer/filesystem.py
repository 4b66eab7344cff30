"""Filesystem abstraction for testability.

The RealFileSystem implementation wraps standard library operations.
"""

from __future__ import annotations

import shutil
import stat
import tempfile
from pathlib import Path


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library Path and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return path.exists()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree."""
        shutil.rmtree(path)

    def copytree(self, src: Path, dst: Path) -> None:
        """Copy a directory tree, preserving symlinks.

        App bundles contain relative framework symlinks that must survive the copy.
        """
        shutil.copytree(src, dst, symlinks=True)

    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a single file with its permission bits."""
        shutil.copy2(src, dst)

    def make_executable(self, path: Path) -> None:
        """Add execute permission for user, group and others."""
        mode = path.stat().st_mode
        path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def make_temp_dir(self, prefix: str) -> Path:
        """Create a fresh temporary directory."""
        return Path(tempfile.mkdtemp(prefix=prefix))
