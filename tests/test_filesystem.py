"""Tests for filesystem abstraction."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from portless_installer.filesystem import RealFileSystem
from portless_installer.protocols import FileSystem


class TestRealFileSystem:
    """Tests for RealFileSystem implementation."""

    def test_satisfies_protocol(self) -> None:
        """Test RealFileSystem implements the FileSystem protocol."""
        assert isinstance(RealFileSystem(), FileSystem)

    def test_exists(self, tmp_path: Path) -> None:
        """Test checking path existence."""
        fs = RealFileSystem()
        assert fs.exists(tmp_path)
        assert not fs.exists(tmp_path / "missing")

    def test_mkdir_parents(self, tmp_path: Path) -> None:
        """Test creating nested directories."""
        fs = RealFileSystem()
        target = tmp_path / "a" / "b"

        fs.mkdir(target, parents=True, exist_ok=True)
        fs.mkdir(target, parents=True, exist_ok=True)

        assert target.is_dir()

    def test_rmtree(self, tmp_path: Path) -> None:
        """Test removing a directory tree."""
        fs = RealFileSystem()
        tree = tmp_path / "tree"
        (tree / "nested").mkdir(parents=True)
        (tree / "nested" / "file.txt").write_text("x")

        fs.rmtree(tree)

        assert not tree.exists()

    def test_copytree(self, tmp_path: Path) -> None:
        """Test copying a directory tree."""
        fs = RealFileSystem()
        src = tmp_path / "USB Share.app"
        (src / "Contents" / "MacOS").mkdir(parents=True)
        (src / "Contents" / "MacOS" / "usb-share").write_text("bin")

        fs.copytree(src, tmp_path / "Applications" / "USB Share.app")

        copied = tmp_path / "Applications" / "USB Share.app" / "Contents" / "MacOS" / "usb-share"
        assert copied.read_text() == "bin"

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_copytree_preserves_symlinks(self, tmp_path: Path) -> None:
        """Test relative symlinks inside a bundle survive the copy."""
        fs = RealFileSystem()
        src = tmp_path / "src"
        (src / "Versions" / "A").mkdir(parents=True)
        (src / "Current").symlink_to(Path("Versions") / "A")

        fs.copytree(src, tmp_path / "dst")

        link = tmp_path / "dst" / "Current"
        assert link.is_symlink()
        assert os.readlink(link) == str(Path("Versions") / "A")

    def test_copy_file(self, tmp_path: Path) -> None:
        """Test copying a single file."""
        fs = RealFileSystem()
        src = tmp_path / "a.AppImage"
        src.write_bytes(b"\x7fELF")

        fs.copy_file(src, tmp_path / "b")

        assert (tmp_path / "b").read_bytes() == b"\x7fELF"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_make_executable(self, tmp_path: Path) -> None:
        """Test adding execute permission keeps existing bits."""
        fs = RealFileSystem()
        target = tmp_path / "portless"
        target.write_text("#!/bin/sh\n")
        target.chmod(0o640)

        fs.make_executable(target)

        assert target.stat().st_mode & 0o777 == 0o751

    def test_make_temp_dir(self) -> None:
        """Test temporary directories are fresh and distinct."""
        fs = RealFileSystem()
        first = fs.make_temp_dir("portless-test-")
        second = fs.make_temp_dir("portless-test-")
        try:
            assert first.is_dir()
            assert first != second
            assert first.name.startswith("portless-test-")
        finally:
            fs.rmtree(first)
            fs.rmtree(second)
