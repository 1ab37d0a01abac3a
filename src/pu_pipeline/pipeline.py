# src/pu_pipeline/pipeline.py
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from pu_pipeline.errors import PipelineError
from pu_pipeline.extract import PERMALINK_LABEL
from pu_pipeline.types import ExternalUrl, PipelineResult, RunState

log = logging.getLogger(__name__)


class Stage(ABC):
    """Abstract base class for every pipeline stage."""

    @abstractmethod
    async def run(self, state: RunState) -> RunState: ...

    @property
    def name(self) -> str:
        return self.__class__.__name__


class Pipeline:
    """
    Minimal orchestrator: await an ordered list of ``Stage`` instances,
    passing the per-run ``RunState`` to each one.

    The first stage raising ``PipelineError`` ends the run; later stages
    never execute and the error becomes a failing ``PipelineResult``.
    ``describe_failure`` may rewrite the description (e.g. to prefix the
    goal's failure text).
    """

    def __init__(
        self,
        stages: List[Stage],
        describe_failure: Optional[Callable[[PipelineError], str]] = None,
    ) -> None:
        if not stages:
            raise ValueError("Pipeline requires at least one stage.")
        self.stages = stages
        self.describe_failure = describe_failure

    async def run(self, state: RunState) -> PipelineResult:
        for stage in self.stages:
            name = stage.name
            log.info("▶️  Running stage: %s", name)

            start = time.perf_counter()
            try:
                state = await stage.run(state)
            except PipelineError as err:
                log.warning("Stage %s failed (code %d): %s", name, err.code, err.description)
                description = self.describe_failure(err) if self.describe_failure else err.description
                return PipelineResult.failed(err.code, description)
            except Exception:  # noqa: BLE001  (we re-raise after logging)
                log.exception("Stage %s raised an exception", name)
                raise
            elapsed = time.perf_counter() - start

            log.info("Finished %s in %.2f s", name, elapsed)

        urls = [ExternalUrl(PERMALINK_LABEL, state.permalink)] if state.permalink else []
        return PipelineResult.succeeded(urls)
