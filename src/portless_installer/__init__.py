"""Bootstrap installer for Portless (USB Share)."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from portless_installer.protocols import (
    CommandRunner,
    FileSystem,
    HttpClient,
    Prompt,
    ReleaseSource,
    SourceRepository,
)

__all__ = [
    "__version__",
    "CommandRunner",
    "FileSystem",
    "HttpClient",
    "Prompt",
    "ReleaseSource",
    "SourceRepository",
]
