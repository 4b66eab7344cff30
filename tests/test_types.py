"""Tests for shared data types and the error taxonomy."""

from __future__ import annotations

import pytest

from portless_installer.errors import (
    AssetNotFoundError,
    BinaryInstallError,
    BuildError,
    InstallFailedError,
    InstallerError,
    ReleaseError,
    SyncError,
)
from portless_installer.types import CommandResult, InstallMethod, RunResult, Stage


class TestRunResult:
    """Tests for RunResult invariants."""

    def test_success(self) -> None:
        """Test a successful result exits zero."""
        result = RunResult(success=True, method=InstallMethod.BINARY, stage=Stage.DONE)
        assert result.exit_code == 0

    def test_failure(self) -> None:
        """Test a failed result exits one."""
        result = RunResult(
            success=False, method=InstallMethod.SOURCE, stage=Stage.FAILED, error="boom"
        )
        assert result.exit_code == 1

    def test_success_with_error_rejected(self) -> None:
        """Test success cannot carry an error."""
        with pytest.raises(ValueError, match="error is set"):
            RunResult(success=True, method=InstallMethod.SOURCE, stage=Stage.DONE, error="x")

    def test_failure_without_error_rejected(self) -> None:
        """Test failure requires a message."""
        with pytest.raises(ValueError, match="requires error message"):
            RunResult(success=False, method=InstallMethod.SOURCE, stage=Stage.FAILED)

    def test_success_requires_done(self) -> None:
        """Test success is only reported from the final stage."""
        with pytest.raises(ValueError, match="stage DONE"):
            RunResult(success=True, method=InstallMethod.SOURCE, stage=Stage.CLEANUP)


class TestCommandResult:
    """Tests for CommandResult."""

    @pytest.mark.parametrize(("code", "ok"), [(0, True), (1, False), (-9, False)])
    def test_ok(self, code: int, ok: bool) -> None:
        """Test only exit status zero is success."""
        assert CommandResult(["true"], code).ok is ok


class TestErrors:
    """Tests for the error hierarchy."""

    def test_fallback_errors_are_distinct(self) -> None:
        """Test only asset lookup failures share the binary install stage."""
        assert issubclass(AssetNotFoundError, BinaryInstallError)
        assert issubclass(InstallFailedError, BinaryInstallError)
        assert not issubclass(InstallFailedError, AssetNotFoundError)
        assert not issubclass(ReleaseError, BinaryInstallError)

    @pytest.mark.parametrize(
        ("error", "stage"),
        [
            (SyncError, "repository sync"),
            (ReleaseError, "release lookup"),
            (InstallFailedError, "binary install"),
            (BuildError, "source build"),
        ],
    )
    def test_stage_labels(self, error: type[InstallerError], stage: str) -> None:
        """Test each error names its stage."""
        err = error("details")
        assert err.stage == stage
        assert str(err) == "details"
