"""Tests for the source build pipeline."""

from __future__ import annotations

import pytest

from portless_installer.build import (
    INSTALL_DEPENDENCIES,
    PACKAGE_APPLICATION,
    SourceBuildPipeline,
)
from portless_installer.console import ConsoleUI
from portless_installer.context import InstallContext
from portless_installer.errors import BuildError

from fakes import FakeRunner


class TestSourceBuildPipeline:
    """Tests for SourceBuildPipeline.build."""

    def test_build(self, ui: ConsoleUI, linux_ctx: InstallContext) -> None:
        """Test dependencies are installed from the lockfile before packaging."""
        runner = FakeRunner(available=["npm"])

        target = SourceBuildPipeline(runner, ui).build(linux_ctx)

        assert runner.calls == [INSTALL_DEPENDENCIES, PACKAGE_APPLICATION]
        assert runner.cwds == [linux_ctx.working_copy, linux_ctx.working_copy]
        assert target.from_source
        assert target.location == (
            linux_ctx.working_copy / "src-tauri" / "target" / "release" / "bundle"
        )

    def test_commands_get_cargo_on_path(self, ui: ConsoleUI, linux_ctx: InstallContext) -> None:
        """Test the build sees a freshly installed Rust toolchain."""
        runner = FakeRunner(available=["npm"])
        SourceBuildPipeline(runner, ui).build(linux_ctx)

        for env in runner.envs:
            assert env is not None
            assert env["PATH"].startswith(str(linux_ctx.cargo_bin))

    def test_dependency_install_failure(self, ui: ConsoleUI, linux_ctx: InstallContext) -> None:
        """Test a failing npm ci stops before packaging."""
        runner = FakeRunner(available=["npm"], results={("npm", "ci"): 1})

        with pytest.raises(BuildError, match="npm ci failed with exit code 1"):
            SourceBuildPipeline(runner, ui).build(linux_ctx)

        assert runner.calls == [INSTALL_DEPENDENCIES]

    def test_packaging_failure(self, ui: ConsoleUI, linux_ctx: InstallContext) -> None:
        """Test a failing packaging step is a BuildError."""
        runner = FakeRunner(available=["npm"], results={("npm", "run", "tauri", "build"): 101})

        with pytest.raises(BuildError, match="exit code 101"):
            SourceBuildPipeline(runner, ui).build(linux_ctx)

    def test_npm_missing(self, ui: ConsoleUI, linux_ctx: InstallContext) -> None:
        """Test an unlaunchable npm is a BuildError."""
        runner = FakeRunner(unlaunchable=["npm"])

        with pytest.raises(BuildError, match="Cannot run npm ci"):
            SourceBuildPipeline(runner, ui).build(linux_ctx)
