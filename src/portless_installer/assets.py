"""Release asset selection.

The asset naming scheme of the release pipeline, as an explicit lookup table
keyed by ``(family, arch)``. An ``arch`` of None matches any architecture of
that family; exact entries win over wildcard entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase

from portless_installer.release import ReleaseAsset, ReleaseManifest
from portless_installer.types import Family, PlatformInfo


@dataclass(frozen=True)
class AssetPattern:
    """Glob matched against release asset names.

    Attributes:
        glob: Pattern with ``{prefix}`` standing for the asset prefix.
        description: Human-readable asset kind.
    """

    glob: str
    description: str

    def render(self, prefix: str) -> str:
        return self.glob.format(prefix=prefix)

    def matches(self, name: str, prefix: str) -> bool:
        return fnmatchcase(name, self.render(prefix))


ASSET_PATTERNS: dict[tuple[Family, str | None], AssetPattern] = {
    (Family.MACOS, "aarch64"): AssetPattern("{prefix}*aarch64*.dmg", "Apple Silicon disk image"),
    (Family.MACOS, None): AssetPattern("{prefix}*x64*.dmg", "Intel disk image"),
    (Family.LINUX, None): AssetPattern("{prefix}*.AppImage", "AppImage"),
    (Family.WINDOWS, None): AssetPattern("{prefix}*.exe", "Windows installer"),
}


def asset_pattern(platform: PlatformInfo) -> AssetPattern:
    """Look up the asset pattern for a platform.

    Args:
        platform: Detected platform.

    Returns:
        The matching AssetPattern.

    Raises:
        KeyError: If the family has no entry.
    """
    exact = ASSET_PATTERNS.get((platform.family, platform.arch))
    if exact is not None:
        return exact
    return ASSET_PATTERNS[(platform.family, None)]


def select_asset(
    manifest: ReleaseManifest, platform: PlatformInfo, prefix: str
) -> ReleaseAsset | None:
    """Pick the first release asset matching the platform's pattern.

    Args:
        manifest: Release manifest.
        platform: Detected platform.
        prefix: Asset name prefix.

    Returns:
        First matching asset in manifest order, or None.
    """
    pattern = asset_pattern(platform)
    for asset in manifest.assets:
        if pattern.matches(asset.name, prefix):
            return asset
    return None
