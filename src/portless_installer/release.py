"""Latest-release lookup against the GitHub releases API."""

from __future__ import annotations

import http.client
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from portless_installer.errors import ReleaseError
from portless_installer.gitops import extract_github_owner_repo

if TYPE_CHECKING:
    from portless_installer.protocols import HttpClient

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
GITHUB_ACCEPT = "application/vnd.github.v3+json"


class ReleaseAsset(BaseModel):
    """A downloadable file attached to a release."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    url: str = Field(alias="browser_download_url", min_length=1)


class ReleaseManifest(BaseModel):
    """The latest published release and its assets."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str = Field(alias="tag_name", min_length=1)
    assets: list[ReleaseAsset]


def latest_release_url(repo_url: str) -> str:
    """Build the "latest release" API endpoint for a repository.

    Args:
        repo_url: GitHub repository URL.

    Returns:
        API URL of the latest release.

    Raises:
        ReleaseError: If the URL is not a GitHub repository URL.
    """
    owner_repo = extract_github_owner_repo(repo_url)
    if not owner_repo:
        raise ReleaseError(f"Not a GitHub repository URL: {repo_url}")
    owner, repo = owner_repo
    return f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest"


class ReleaseResolver:
    """Fetches the latest release manifest. Never caches."""

    def __init__(self, http: HttpClient, timeout: float = 30.0) -> None:
        """Initialize the resolver.

        Args:
            http: HTTP client.
            timeout: Request timeout in seconds.
        """
        self.http = http
        self.timeout = timeout

    def latest(self, repo_url: str) -> ReleaseManifest:
        """Fetch the latest release of a repository.

        Args:
            repo_url: GitHub repository URL.

        Returns:
            Parsed ReleaseManifest.

        Raises:
            ReleaseError: On network failure or a missing/malformed tag or assets.
        """
        api_url = latest_release_url(repo_url)
        try:
            data = self.http.get_json(
                api_url, headers={"Accept": GITHUB_ACCEPT}, timeout=self.timeout
            )
        except (OSError, ValueError, http.client.HTTPException) as e:
            raise ReleaseError(f"Could not fetch latest release: {e}") from e

        if not isinstance(data, dict):
            raise ReleaseError("Could not fetch latest release version: unexpected response")

        try:
            manifest = ReleaseManifest.model_validate(data)
        except ValidationError as e:
            raise ReleaseError(f"Could not fetch latest release version: {e}") from e

        logger.debug(
            "Release %s with assets %s", manifest.version, [a.name for a in manifest.assets]
        )
        return manifest
