"""Shared test fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from portless_installer.config import InstallerConfig
from portless_installer.console import ConsoleUI
from portless_installer.context import AppContext, InstallContext
from portless_installer.filesystem import RealFileSystem
from portless_installer.types import Family, PlatformInfo

from fakes import FakeHttp, FakePrompt, FakeRunner


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir(exist_ok=True)
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def not_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend the tests run as an unprivileged user."""
    monkeypatch.setattr("portless_installer.platforms.base.is_root", lambda: False)


@pytest.fixture
def config(tmp_path: Path) -> InstallerConfig:
    """Configuration pointing every location into the temp directory."""
    return InstallerConfig(
        project_dir=tmp_path / "home" / ".portless",
        applications_dir=tmp_path / "Applications",
    )


@pytest.fixture
def ui_output() -> io.StringIO:
    """Buffer capturing console output."""
    return io.StringIO()


@pytest.fixture
def ui(ui_output: io.StringIO) -> ConsoleUI:
    """Console UI writing to a buffer."""
    return ConsoleUI(Console(file=ui_output, width=200, color_system=None))


@pytest.fixture
def make_context(config: InstallerConfig, tmp_path: Path) -> Callable[..., InstallContext]:
    """Factory for run contexts on a given platform."""

    def _make(family: Family = Family.LINUX, arch: str = "x86_64") -> InstallContext:
        home = tmp_path / "home"
        home.mkdir(exist_ok=True)
        return InstallContext.create(config, PlatformInfo(family, arch), home=home)

    return _make


@pytest.fixture
def linux_ctx(make_context: Callable[..., InstallContext]) -> InstallContext:
    """Run context for Linux x86_64."""
    return make_context(Family.LINUX, "x86_64")


@pytest.fixture
def make_app(config: InstallerConfig) -> Callable[..., AppContext]:
    """Factory for AppContext instances built from test doubles."""

    def _make(
        runner: FakeRunner | None = None,
        prompt: FakePrompt | None = None,
        http: FakeHttp | None = None,
    ) -> AppContext:
        return AppContext(
            config=config,
            runner=runner or FakeRunner(),
            prompt=prompt or FakePrompt(),
            http=http or FakeHttp(),
            filesystem=RealFileSystem(),
        )

    return _make


@pytest.fixture
def release_payload() -> dict[str, Any]:
    """GitHub "latest release" response with one asset per platform."""
    base = "https://github.com/centopw/Portless/releases/download/v1.2.0"
    names = [
        "USB-Share_1.2.0_aarch64.dmg",
        "USB-Share_1.2.0_x64.dmg",
        "USB-Share_1.2.0_amd64.AppImage",
        "USB-Share_1.2.0_x64-setup.exe",
    ]
    return {
        "tag_name": "v1.2.0",
        "name": "Portless 1.2.0",
        "assets": [
            {"name": name, "browser_download_url": f"{base}/{name}", "size": 1024}
            for name in names
        ],
    }
