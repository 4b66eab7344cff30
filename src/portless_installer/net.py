"""HTTP access to the release host."""

from __future__ import annotations

import http.client
import json
import logging
import shutil
import ssl
import urllib.request
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from portless_installer import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"portless-installer/{__version__}"


class UrllibHttpClient:
    """Production HTTP client built on urllib.

    Satisfies the HttpClient protocol structurally.
    """

    def __init__(self) -> None:
        """Initialize the client with the default TLS context."""
        self._ssl_context = ssl.create_default_context()

    def get_json(
        self, url: str, headers: Mapping[str, str] | None = None, timeout: float = 30.0
    ) -> Any:
        """GET a URL and decode the JSON body.

        Args:
            url: URL to fetch.
            headers: Extra request headers.
            timeout: Socket timeout in seconds.

        Returns:
            Decoded JSON value.

        Raises:
            OSError: On network failure, including truncated or malformed responses.
            ValueError: If the body is not JSON.
        """
        request = urllib.request.Request(
            url, headers={"User-Agent": USER_AGENT, **(headers or {})}
        )
        logger.debug("GET %s", url)
        try:
            with urllib.request.urlopen(
                request, timeout=timeout, context=self._ssl_context
            ) as response:
                body = response.read()
        except http.client.HTTPException as e:
            raise OSError(f"Bad response from {url}: {e!r}") from e
        return json.loads(body.decode("utf-8"))

    def download(self, url: str, dest: Path, timeout: float = 300.0) -> Path:
        """Download a URL to a file, following redirects.

        Args:
            url: URL to download.
            dest: Destination file.
            timeout: Socket timeout in seconds.

        Returns:
            Path of the written file.

        Raises:
            OSError: On network or write failure, including a truncated body.
        """
        request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
        logger.debug("Downloading %s -> %s", url, dest)
        try:
            with urllib.request.urlopen(
                request, timeout=timeout, context=self._ssl_context
            ) as response, dest.open("wb") as out:
                shutil.copyfileobj(response, out)
        except http.client.HTTPException as e:
            raise OSError(f"Bad response from {url}: {e!r}") from e
        return dest
