# src/pu_pipeline/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pu_pipeline.progress_log import ProgressLog
from pu_pipeline.tree import WorkingTree

# Environment tags understood by the stack resolver
INDEPENDENT = "independent"
STAGING = "staging"
PRODUCTION = "production"


@dataclass(frozen=True)
class Repository:
    """Identity of the source tree being deployed."""
    owner: str
    name: str


@dataclass(frozen=True)
class ExecutionContext:
    """
    Read-only bundle handed to the pipeline by the caller.

      • repo        – owner/name of the pushed repository
      • environment – environment tag (independent, staging, production, "<n>-<suffix>")
      • tree        – working tree (see ``pu_pipeline.tree.WorkingTree``)
      • log         – progress-log sink
      • token       – access token for the provisioning tool (optional)
      • image       – container image built for the push (optional)
    """

    repo: Repository
    environment: str
    tree: WorkingTree
    log: ProgressLog
    token: Optional[str] = None
    image: Optional[str] = None


# (tree, context) -> replacement tree, or None to keep the current one
Mutation = Callable[[WorkingTree, ExecutionContext], Optional[WorkingTree]]
Predicate = Callable[[ExecutionContext], bool]


@dataclass(frozen=True)
class TransformSpec:
    """One tree mutation, optionally gated by a predicate over the context."""
    mutation: Mutation
    predicate: Optional[Predicate] = None


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of one external command. ``exit_code == 0`` is the only success."""
    exit_code: int
    captured_tail: str = ""
    description: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ExternalUrl:
    label: str
    url: str


@dataclass(frozen=True)
class PipelineResult:
    success: bool
    code: int = 0
    description: Optional[str] = None
    external_urls: List[ExternalUrl] = field(default_factory=list)

    @classmethod
    def succeeded(cls, urls: List[ExternalUrl], description: Optional[str] = None) -> "PipelineResult":
        return cls(success=True, code=0, description=description, external_urls=list(urls))

    @classmethod
    def failed(cls, code: int, description: str) -> "PipelineResult":
        return cls(success=False, code=code, description=description)

    def to_payload(self) -> Dict[str, Any]:
        """Shape reported back to the host: ``{code, description?, externalUrls?}``."""
        payload: Dict[str, Any] = {"code": self.code}
        if self.description:
            payload["description"] = self.description
        if self.external_urls:
            payload["externalUrls"] = [{"label": u.label, "url": u.url} for u in self.external_urls]
        return payload


@dataclass
class RunState:
    """Mutable per-invocation record passed from stage to stage."""

    context: ExecutionContext
    tree: WorkingTree

    # filled in as the stages progress
    stack: Optional[str] = None
    captured_output: str = ""
    permalink: Optional[str] = None
