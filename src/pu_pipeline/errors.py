# src/pu_pipeline/errors.py
from __future__ import annotations

from typing import Optional

from pu_pipeline.types import ProcessOutcome


class PipelineError(Exception):
    """
    Recoverable failure of a single stage.

    ``Pipeline`` turns every ``PipelineError`` into a failing
    ``PipelineResult`` carrying ``code`` and ``description``.
    """

    code: int = 1

    def __init__(self, description: str, code: Optional[int] = None) -> None:
        super().__init__(description)
        self.description = description
        if code is not None:
            self.code = code


class MissingManifest(PipelineError):
    pass


class MissingToken(PipelineError):
    pass


class TransformFailed(PipelineError):
    pass


class PermalinkNotFound(PipelineError):
    pass


class ProcessFailure(PipelineError):
    """Non-zero exit from a spawned command; ``code`` is the exit code."""

    def __init__(self, outcome: ProcessOutcome) -> None:
        description = outcome.description
        if outcome.captured_tail:
            description = f"{description}\n{outcome.captured_tail}"
        super().__init__(description, code=outcome.exit_code)
        self.outcome = outcome
