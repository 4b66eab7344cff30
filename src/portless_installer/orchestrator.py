"""Installation orchestration.

Drives the pipeline through a fixed sequence of stages:

    CHOOSE_METHOD -> DETECT_PLATFORM -> BINARY_ATTEMPT | SOURCE_ATTEMPT
                  -> CLEANUP -> DONE | FAILED

The binary attempt falls back to a source build exactly once, and only when
the release cannot be fetched or has no asset for the host. Every other
error ends the run. Nothing is rolled back on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from portless_installer.binary import BinaryInstaller
from portless_installer.build import SourceBuildPipeline
from portless_installer.console import ConsoleUI
from portless_installer.context import AppContext, InstallContext
from portless_installer.detect import detect_platform
from portless_installer.errors import (
    AssetNotFoundError,
    InstallerError,
    ReleaseError,
)
from portless_installer.gitops import RepositorySynchronizer
from portless_installer.platforms import BasePlatform, get_platform
from portless_installer.prerequisites import PrerequisiteResolver
from portless_installer.protocols import ReleaseSource, SourceRepository
from portless_installer.release import ReleaseResolver
from portless_installer.types import (
    InstallMethod,
    InstallTarget,
    PlatformInfo,
    RunResult,
    Stage,
)

logger = logging.getLogger(__name__)


@dataclass
class Pipeline:
    """Stage components wired for one detected platform."""

    platform: BasePlatform
    prerequisites: PrerequisiteResolver
    repository: SourceRepository
    releases: ReleaseSource
    binary: BinaryInstaller
    builder: SourceBuildPipeline


@dataclass
class _RunState:
    method: InstallMethod = InstallMethod.SOURCE
    stage: Stage = Stage.CHOOSE_METHOD
    platform: PlatformInfo | None = None
    version: str | None = None
    fell_back: bool = False
    synced: bool = False
    steps: list[Stage] = field(default_factory=list)

    def enter(self, stage: Stage) -> None:
        logger.debug("Stage %s", stage.value)
        self.stage = stage
        self.steps.append(stage)


class Orchestrator:
    """Runs one installation from method choice to summary."""

    def __init__(
        self,
        app: AppContext,
        ui: ConsoleUI | None = None,
        detector: Callable[[], PlatformInfo] = detect_platform,
        home: Path | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            app: Installer services.
            ui: Console for user-facing messages.
            detector: Platform detector.
            home: Override home directory (for testing).
        """
        self.app = app
        self.ui = ui or ConsoleUI()
        self.detector = detector
        self.home = home

    def build_pipeline(self, ctx: InstallContext) -> Pipeline:
        """Wire the stage components for the detected platform.

        Override in tests to substitute individual stages.
        """
        app = self.app
        platform = get_platform(ctx.platform.family, app.runner, app.filesystem, self.ui)
        return Pipeline(
            platform=platform,
            prerequisites=PrerequisiteResolver(app.runner, platform, self.ui),
            repository=RepositorySynchronizer.create(
                app.config.repo_url, app.prompt, self.ui, app.config.branch
            ),
            releases=ReleaseResolver(app.http, timeout=app.config.api_timeout),
            binary=BinaryInstaller(app.http, app.filesystem, platform, self.ui),
            builder=SourceBuildPipeline(app.runner, self.ui),
        )

    def run(self) -> RunResult:
        """Run the installation.

        Returns:
            RunResult describing the outcome. Never raises InstallerError.
        """
        state = _RunState()
        self.ui.show_header("Portless Installation Script")
        self.ui.show_info("This script will install Portless on your system")

        state.enter(Stage.CHOOSE_METHOD)
        state.method = self.app.prompt.choose_method()

        try:
            state.enter(Stage.DETECT_PLATFORM)
            state.platform = self.detector()
            self.ui.show_success(f"Detected OS: {state.platform}")

            ctx = InstallContext.create(self.app.config, state.platform, home=self.home)
            pipeline = self.build_pipeline(ctx)

            if state.method is InstallMethod.BINARY:
                target = self._binary_path(pipeline, ctx, state)
            else:
                self.ui.show_header("Source Installation")
                target = self._source_attempt(pipeline, ctx, state)
        except InstallerError as e:
            return self._fail(state, e)

        state.enter(Stage.DONE)
        self._summarize(pipeline, ctx, target)
        return RunResult(
            success=True,
            method=state.method,
            stage=Stage.DONE,
            platform=state.platform,
            target=target,
            version=state.version,
            fell_back=state.fell_back,
            steps=state.steps,
        )

    def _binary_path(
        self, pipeline: Pipeline, ctx: InstallContext, state: _RunState
    ) -> InstallTarget:
        """Binary attempt with its single fallback, then cleanup."""
        self.ui.show_header("Binary Installation")
        try:
            try:
                return self._binary_attempt(pipeline, ctx, state)
            except (ReleaseError, AssetNotFoundError) as e:
                self.ui.show_error(str(e))
                self.ui.show_info("Falling back to source build...")
                self.ui.show_header("Building from Source")
                state.fell_back = True
                return self._source_attempt(pipeline, ctx, state)
        finally:
            self._cleanup(ctx, state)

    def _binary_attempt(
        self, pipeline: Pipeline, ctx: InstallContext, state: _RunState
    ) -> InstallTarget:
        state.enter(Stage.BINARY_ATTEMPT)
        self._sync(pipeline, ctx, state)

        self.ui.show_info("Fetching latest release information...")
        manifest = pipeline.releases.latest(ctx.config.repo_url)
        state.version = manifest.version
        self.ui.show_success(f"Latest version: {manifest.version}")

        return pipeline.binary.install(manifest, ctx)

    def _source_attempt(
        self, pipeline: Pipeline, ctx: InstallContext, state: _RunState
    ) -> InstallTarget:
        state.enter(Stage.SOURCE_ATTEMPT)
        pipeline.prerequisites.ensure(ctx)
        self._sync(pipeline, ctx, state)
        return pipeline.builder.build(ctx)

    def _sync(self, pipeline: Pipeline, ctx: InstallContext, state: _RunState) -> None:
        if state.synced:
            logger.debug("Working copy already synced in this run")
            return
        pipeline.repository.sync(ctx.working_copy)
        state.synced = True

    def _cleanup(self, ctx: InstallContext, state: _RunState) -> None:
        """Remove the download directory regardless of how the binary path ended."""
        previous = state.stage
        state.enter(Stage.CLEANUP)
        self.ui.show_info("Cleaning up...")
        fs = self.app.filesystem
        try:
            if fs.exists(ctx.download_dir):
                fs.rmtree(ctx.download_dir)
        except OSError as e:
            logger.warning("Cannot remove %s: %s", ctx.download_dir, e)
            self.ui.show_warning(f"Could not remove {ctx.download_dir}")
        else:
            self.ui.show_success("Cleanup completed")
        state.stage = previous

    def _summarize(
        self, pipeline: Pipeline, ctx: InstallContext, target: InstallTarget
    ) -> None:
        self.ui.show_header("Installation Complete!")
        self.ui.show_success("Portless has been installed successfully")
        self.ui.show_next_steps(pipeline.platform.next_steps(ctx, target), ctx.config.repo_url)

    def _fail(self, state: _RunState, error: InstallerError) -> RunResult:
        failed_stage = state.stage
        state.enter(Stage.FAILED)
        message = f"{error.stage.capitalize()} failed: {error}"
        logger.debug("Run failed in %s", failed_stage.value, exc_info=error)
        self.ui.show_error(message)
        return RunResult(
            success=False,
            method=state.method,
            stage=Stage.FAILED,
            platform=state.platform,
            version=state.version,
            fell_back=state.fell_back,
            error=message,
            steps=state.steps,
        )
