"""
Top-level package API.

* Core objects: Pipeline, Stage, PulumiUp, Settings
* Data types: ExecutionContext, TransformSpec, ProcessOutcome, PipelineResult
* Convenient re-exports for stage classes and the pure helpers
"""

from .pipeline import Pipeline, Stage
from .config import Settings
from .executor import PulumiUp
from .process import ProcessStep
from .progress_log import OutputCapture
from .stack import GoalDetails, resolve_stack_name
from .extract import extract_permalink, find_permalink
from .progress import classify
from .tree import WorkingTree
from .errors import (
    PipelineError,
    MissingManifest,
    MissingToken,
    ProcessFailure,
    PermalinkNotFound,
    TransformFailed,
)
from .types import (
    ExecutionContext,
    ExternalUrl,
    PipelineResult,
    ProcessOutcome,
    Repository,
    TransformSpec,
)

# re-export stage classes for one-line imports
from .stages import (
    CodeTransform,
    ManifestCheck,
    DependencyInstall,
    StackUp,
)

__all__ = [
    # core
    "Pipeline",
    "Stage",
    "PulumiUp",
    "Settings",
    "ProcessStep",
    "OutputCapture",
    "WorkingTree",
    # helpers
    "GoalDetails",
    "resolve_stack_name",
    "extract_permalink",
    "find_permalink",
    "classify",
    # types
    "ExecutionContext",
    "ExternalUrl",
    "PipelineResult",
    "ProcessOutcome",
    "Repository",
    "TransformSpec",
    # errors
    "PipelineError",
    "MissingManifest",
    "MissingToken",
    "ProcessFailure",
    "PermalinkNotFound",
    "TransformFailed",
    # stages
    "CodeTransform",
    "ManifestCheck",
    "DependencyInstall",
    "StackUp",
]
