"""Installer configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from portless_installer.errors import ConfigError

logger = logging.getLogger(__name__)

# Default configuration file location
CONFIG_FILE = Path.home() / ".config" / "portless-installer" / "config.json"

DEFAULT_REPO_URL = "https://github.com/centopw/Portless"

LINUX_PACKAGES = [
    "libwebkit2gtk-4.1-dev",
    "libappindicator3-dev",
    "librsvg2-dev",
    "patchelf",
    "libusb-1.0-0-dev",
    "libudev-dev",
]


class InstallerConfig(BaseModel):
    """Settings for a bootstrap run.

    Every field has a default, so an absent config file is a valid config.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    repo_url: str = Field(default=DEFAULT_REPO_URL, alias="repoUrl")
    branch: str = "main"
    app_name: str = Field(default="USB Share", alias="appName")
    asset_prefix: str = Field(default="USB-Share", alias="assetPrefix")
    binary_name: str = Field(default="portless", alias="binaryName")
    project_dir: Path = Field(
        default_factory=lambda: Path.home() / ".portless", alias="projectDir"
    )
    applications_dir: Path = Field(default=Path("/Applications"), alias="applicationsDir")
    linux_packages: list[str] = Field(
        default_factory=lambda: list(LINUX_PACKAGES), alias="linuxPackages"
    )
    api_timeout: float = Field(default=30.0, gt=0, alias="apiTimeout")
    download_timeout: float = Field(default=300.0, gt=0, alias="downloadTimeout")


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load configuration from a JSON file.

    Args:
        path: Config file. Defaults to ~/.config/portless-installer/config.json.

    Returns:
        Parsed configuration, or defaults if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values.
    """
    config_path = path or CONFIG_FILE
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return InstallerConfig()

    try:
        data = json.loads(config_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
