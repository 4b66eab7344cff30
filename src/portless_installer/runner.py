"""Subprocess execution with consistent logging."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from portless_installer.types import CommandResult

logger = logging.getLogger(__name__)


def format_argv(argv: Sequence[str]) -> str:
    """Render an argv list as a copy-pasteable shell command."""
    return " ".join(shlex.quote(a) for a in argv)


class SubprocessRunner:
    """Production command runner.

    Commands inherit the terminal so package managers and build tools can
    show progress and ask for a sudo password. No timeout is applied.
    Satisfies the CommandRunner protocol structurally.
    """

    def run(
        self,
        argv: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            argv: Command and arguments.
            cwd: Working directory for the command.
            env: Complete environment for the command.
            capture: Capture stdout instead of streaming it.

        Returns:
            CommandResult with the exit status.

        Raises:
            OSError: If the command cannot be launched.
        """
        argv_list = [str(a) for a in argv]
        logger.debug("CMD %s (cwd=%s)", format_argv(argv_list), cwd or ".")

        p = subprocess.run(
            argv_list,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            text=True,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.DEVNULL if capture else None,
        )

        stdout = p.stdout or ""
        if stdout:
            logger.debug("STDOUT %s", stdout.strip())
        if p.returncode != 0:
            logger.debug("Exit %d: %s", p.returncode, format_argv(argv_list))

        return CommandResult(argv=argv_list, returncode=p.returncode, stdout=stdout)

    def which(self, name: str, path: str | None = None) -> str | None:
        """Locate an executable on the search path."""
        return shutil.which(name, path=path)
