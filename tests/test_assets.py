"""Tests for release asset selection."""

from __future__ import annotations

from typing import Any

import pytest

from portless_installer.assets import ASSET_PATTERNS, asset_pattern, select_asset
from portless_installer.release import ReleaseManifest
from portless_installer.types import Family, PlatformInfo

PREFIX = "USB-Share"


class TestAssetPattern:
    """Tests for the (family, arch) -> pattern table."""

    @pytest.mark.parametrize(
        ("platform", "glob"),
        [
            (PlatformInfo(Family.MACOS, "aarch64"), "USB-Share*aarch64*.dmg"),
            (PlatformInfo(Family.MACOS, "x86_64"), "USB-Share*x64*.dmg"),
            (PlatformInfo(Family.MACOS, "i386"), "USB-Share*x64*.dmg"),
            (PlatformInfo(Family.LINUX, "x86_64"), "USB-Share*.AppImage"),
            (PlatformInfo(Family.LINUX, "aarch64"), "USB-Share*.AppImage"),
            (PlatformInfo(Family.WINDOWS, "x86_64"), "USB-Share*.exe"),
        ],
    )
    def test_pattern_for_platform(self, platform: PlatformInfo, glob: str) -> None:
        """Test every supported platform tuple resolves to its pattern."""
        assert asset_pattern(platform).render(PREFIX) == glob

    def test_every_family_has_a_fallback_entry(self) -> None:
        """Test each family has an any-architecture entry."""
        for family in Family:
            assert (family, None) in ASSET_PATTERNS

    def test_pattern_matching_is_case_sensitive(self) -> None:
        """Test names must match the pattern's case exactly."""
        pattern = asset_pattern(PlatformInfo(Family.LINUX, "x86_64"))
        assert pattern.matches("USB-Share_1.0.0_amd64.AppImage", PREFIX)
        assert not pattern.matches("usb-share_1.0.0_amd64.appimage", PREFIX)


class TestSelectAsset:
    """Tests for select_asset."""

    @pytest.mark.parametrize(
        ("platform", "expected"),
        [
            (PlatformInfo(Family.MACOS, "aarch64"), "USB-Share_1.2.0_aarch64.dmg"),
            (PlatformInfo(Family.MACOS, "x86_64"), "USB-Share_1.2.0_x64.dmg"),
            (PlatformInfo(Family.LINUX, "x86_64"), "USB-Share_1.2.0_amd64.AppImage"),
            (PlatformInfo(Family.WINDOWS, "x86_64"), "USB-Share_1.2.0_x64-setup.exe"),
        ],
    )
    def test_selects_matching_asset(
        self, release_payload: dict[str, Any], platform: PlatformInfo, expected: str
    ) -> None:
        """Test the platform's asset is picked from a full manifest."""
        manifest = ReleaseManifest.model_validate(release_payload)
        asset = select_asset(manifest, platform, PREFIX)
        assert asset is not None
        assert asset.name == expected

    def test_first_match_wins(self) -> None:
        """Test the first matching asset in manifest order is chosen."""
        manifest = ReleaseManifest(
            version="v1",
            assets=[
                {"name": "USB-Share_1_amd64.AppImage", "browser_download_url": "https://x/1"},
                {"name": "USB-Share_1_arm64.AppImage", "browser_download_url": "https://x/2"},
            ],
        )
        asset = select_asset(manifest, PlatformInfo(Family.LINUX, "x86_64"), PREFIX)
        assert asset is not None
        assert asset.url == "https://x/1"

    def test_no_match_returns_none(self) -> None:
        """Test a manifest without a matching asset yields None."""
        manifest = ReleaseManifest(
            version="v1",
            assets=[{"name": "USB-Share_1_x64.dmg", "browser_download_url": "https://x/1"}],
        )
        assert select_asset(manifest, PlatformInfo(Family.LINUX, "x86_64"), PREFIX) is None

    def test_empty_manifest_returns_none(self) -> None:
        """Test a release without assets yields None."""
        manifest = ReleaseManifest(version="v1", assets=[])
        assert select_asset(manifest, PlatformInfo(Family.WINDOWS, "x86_64"), PREFIX) is None
