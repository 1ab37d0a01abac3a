# src/pu_pipeline/stages/provision.py
"""
StackUp stage
=============

Resolves the stack name, runs ``<tool> up --non-interactive --stack <name>``
with the access token injected into the child environment, captures the
tool's output, and pulls the permalink out of it.

Order matters: the stack name is computed here, after any transform and the
install step, so it sees the tree/repository as they are at this point.
"""

from __future__ import annotations

import logging
from typing import Optional

from pu_pipeline.errors import MissingToken, ProcessFailure
from pu_pipeline.extract import extract_permalink
from pu_pipeline.pipeline import Stage
from pu_pipeline.process import ProcessStep
from pu_pipeline.progress_log import OutputCapture
from pu_pipeline.stack import StackNamer, resolve_stack_name
from pu_pipeline.types import RunState

log = logging.getLogger(__name__)


class StackUp(Stage):
    def __init__(
        self,
        runner: ProcessStep,
        token: Optional[str] = None,
        stack_namer: StackNamer = resolve_stack_name,
        app_dir: str = ".pulumi",
        tool: str = "pulumi",
        token_env_var: str = "PULUMI_ACCESS_TOKEN",
    ):
        self.runner = runner
        self.token = token
        self.stack_namer = stack_namer
        self.app_dir = app_dir
        self.tool = tool
        self.token_env_var = token_env_var

    async def run(self, state: RunState) -> RunState:
        ctx = state.context
        progress = ctx.log

        state.stack = self.stack_namer(ctx.repo.name, ctx.environment)

        if not self.token:
            msg = f"No {self.tool} access token configured"
            progress.write(msg)
            raise MissingToken(msg)

        progress.write(f"Running '{self.tool} up' for stack '{state.stack}'")
        capture = OutputCapture(forward_to=progress)
        outcome = await self.runner.run(
            self.tool,
            ["up", "--non-interactive", "--stack", state.stack],
            state.tree.path(self.app_dir),
            {self.token_env_var: self.token},
            capture,
        )
        state.captured_output = capture.drain()
        if not outcome.ok:
            raise ProcessFailure(outcome)

        state.permalink = extract_permalink(state.captured_output)
        log.info("Stack %s is up: %s", state.stack, state.permalink)
        return state
