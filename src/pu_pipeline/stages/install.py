# src/pu_pipeline/stages/install.py
from __future__ import annotations

import logging

from pu_pipeline.errors import ProcessFailure
from pu_pipeline.pipeline import Stage
from pu_pipeline.process import ProcessStep
from pu_pipeline.types import RunState

log = logging.getLogger(__name__)


class DependencyInstall(Stage):
    """Run ``<package_manager> install`` in the manifest directory (logged, not captured)."""

    def __init__(self, runner: ProcessStep, app_dir: str = ".pulumi", package_manager: str = "npm"):
        self.runner = runner
        self.app_dir = app_dir
        self.package_manager = package_manager

    async def run(self, state: RunState) -> RunState:
        progress = state.context.log
        progress.write(f"Running '{self.package_manager} install'")
        outcome = await self.runner.run(
            self.package_manager,
            ["install"],
            state.tree.path(self.app_dir),
            None,
            progress,
        )
        if not outcome.ok:
            raise ProcessFailure(outcome)
        return state
