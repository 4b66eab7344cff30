"""Git operations for the application working copy."""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from portless_installer.errors import SyncError

if TYPE_CHECKING:
    from portless_installer.console import ConsoleUI
    from portless_installer.protocols import Prompt

logger = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    """What a sync did to the working copy."""

    CLONED = "cloned"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


def extract_github_owner_repo(url: str) -> tuple[str, str] | None:
    """Extract owner and repo from a GitHub URL.

    Args:
        url: Git repository URL.

    Returns:
        Tuple of (owner, repo) if GitHub URL, None otherwise.
    """
    patterns = [
        r"github\.com[/:]([^/]+)/([^/.]+?)(?:\.git)?$",
        r"github\.com[/:]([^/]+)/([^/.]+?)/?$",
    ]
    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return match.group(1), match.group(2)
    return None


class RepositorySynchronizer:
    """Obtains or refreshes the local working copy of the application source."""

    def __init__(
        self,
        repo_url: str,
        prompt: Prompt,
        ui: ConsoleUI,
        branch: str = "main",
    ) -> None:
        """Initialize the synchronizer.

        Args:
            repo_url: Upstream repository URL.
            prompt: Asks whether an existing working copy should be updated.
            ui: Console for user-facing messages.
            branch: Branch pulled when updating.

        Note:
            Prefer the factory method `create()` for construction from config.
        """
        self.repo_url = repo_url
        self.prompt = prompt
        self.ui = ui
        self.branch = branch

    @classmethod
    def create(cls, repo_url: str, prompt: Prompt, ui: ConsoleUI, branch: str) -> RepositorySynchronizer:
        """Create a synchronizer for an upstream repository.

        Returns:
            Configured RepositorySynchronizer instance.
        """
        return cls(repo_url=repo_url, prompt=prompt, ui=ui, branch=branch)

    def sync(self, dest: Path) -> SyncOutcome:
        """Clone into ``dest`` or, after asking, pull the latest revision.

        Declining the update (or running without a terminal) leaves an
        existing working copy untouched.

        Args:
            dest: Working copy directory.

        Returns:
            What happened to the working copy.

        Raises:
            SyncError: If GitPython cannot load, or clone or pull fails.
        """
        # GitPython looks for the git executable at import time.
        try:
            from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
        except ImportError as e:
            raise SyncError(f"Git is not available: {e}") from e

        try:
            if not dest.exists():
                self._clone(dest)
                return SyncOutcome.CLONED

            self.ui.show_info(f"Repository already exists at {dest}")
            if not self.prompt.confirm("Do you want to update it?", default=False):
                logger.debug("Leaving %s untouched", dest)
                return SyncOutcome.UNCHANGED

            self._pull(dest)
            return SyncOutcome.UPDATED
        except (GitCommandError, InvalidGitRepositoryError, NoSuchPathError) as e:
            raise SyncError(f"Git operation failed: {e}") from e
        except OSError as e:
            raise SyncError(f"Cannot prepare {dest}: {e}") from e

    def _clone(self, dest: Path) -> None:
        """Clone the default branch of the upstream repository.

        Args:
            dest: Directory to clone into. Its parent is created if needed.
        """
        from git import Repo

        self.ui.show_info("Cloning Portless repository...")
        dest.parent.mkdir(parents=True, exist_ok=True)
        Repo.clone_from(self.repo_url, dest)
        logger.debug("Cloned %s into %s", self.repo_url, dest)
        self.ui.show_success(f"Repository cloned to {dest}")

    def _pull(self, dest: Path) -> None:
        """Pull the configured branch from origin.

        Args:
            dest: Existing working copy.
        """
        from git import Repo

        self.ui.show_info("Updating repository...")
        repo = Repo(dest)
        repo.git.pull("origin", self.branch)
        logger.debug("Pulled origin/%s into %s", self.branch, dest)
        self.ui.show_success("Repository updated")
