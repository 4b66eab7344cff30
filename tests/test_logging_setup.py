"""Tests for logging configuration."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from portless_installer.logging_setup import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def restore_logger():
    """Restore the package logger after each test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_quiet_by_default(self) -> None:
        """Test only warnings and up are logged without --verbose."""
        logger = configure_logging(console=Console(file=io.StringIO()))
        assert logger.level == logging.WARNING

    def test_verbose_logs_commands(self) -> None:
        """Test debug records reach the console in verbose mode."""
        buffer = io.StringIO()
        configure_logging(verbose=True, console=Console(file=buffer, width=200))

        logging.getLogger("portless_installer.runner").debug("CMD npm ci")

        assert "portless_installer.runner: CMD npm ci" in buffer.getvalue()

    def test_repeated_calls_do_not_stack(self) -> None:
        """Test configuring twice leaves a single rich handler."""
        configure_logging(console=Console(file=io.StringIO()))
        logger = configure_logging(verbose=True, console=Console(file=io.StringIO()))

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
