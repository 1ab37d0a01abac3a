# src/pu_pipeline/executor.py
"""
PulumiUp executor
=================

Composes the stages into the fixed, fail-fast sequence

    CodeTransform → ManifestCheck → DependencyInstall → StackUp

and returns a ``PipelineResult``. Everything the stages need is passed in
as data when the executor is built; nothing is captured from globals.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from pu_pipeline.config import Settings
from pu_pipeline.errors import PipelineError
from pu_pipeline.pipeline import Pipeline
from pu_pipeline.process import ProcessStep
from pu_pipeline.stack import GoalDetails, StackNamer, resolve_stack_name
from pu_pipeline.stages import CodeTransform, DependencyInstall, ManifestCheck, StackUp
from pu_pipeline.types import ExecutionContext, PipelineResult, RunState, TransformSpec

log = logging.getLogger(__name__)


class PulumiUp:
    """
    Executor for one ``pulumi up`` goal.

    Parameters
    ----------
    settings : Settings, optional
        Manifest location, command names, token fallback.
    runner : ProcessStep, optional
        Spawns the external commands; tests substitute a fake.
    stack_namer : callable, optional
        ``(repo_name, environment) -> stack`` override.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        runner: Optional[ProcessStep] = None,
        stack_namer: Optional[StackNamer] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.runner = runner or ProcessStep(tail_lines=self.settings.tail_lines)
        self.stack_namer = stack_namer or resolve_stack_name

    def build(
        self,
        context: ExecutionContext,
        transforms: Sequence[TransformSpec] = (),
        token: Optional[str] = None,
    ) -> Pipeline:
        s = self.settings
        goal = GoalDetails.for_environment(context.environment)
        resolved_token = token or context.token or s.access_token

        def describe(err: PipelineError) -> str:
            return f"{goal.failed_description} ({err.description})"

        return Pipeline(
            [
                CodeTransform(transforms),
                ManifestCheck(s.manifest_path),
                DependencyInstall(self.runner, app_dir=s.manifest_dir, package_manager=s.package_manager),
                StackUp(
                    self.runner,
                    token=resolved_token,
                    stack_namer=self.stack_namer,
                    app_dir=s.manifest_dir,
                    tool=s.provisioning_tool,
                    token_env_var=s.token_env_var,
                ),
            ],
            describe_failure=describe,
        )

    async def run(
        self,
        context: ExecutionContext,
        transforms: Sequence[TransformSpec] = (),
        token: Optional[str] = None,
    ) -> PipelineResult:
        goal = GoalDetails.for_environment(context.environment)
        log.info("[%s] %s for %s/%s", goal.name, goal.working_description,
                 context.repo.owner, context.repo.name)

        pipeline = self.build(context, transforms, token)
        result = await pipeline.run(RunState(context=context, tree=context.tree))

        if result.success:
            log.info("%s", goal.completed_description)
            return PipelineResult.succeeded(result.external_urls, description=goal.completed_description)
        log.warning("%s", result.description)
        return result
