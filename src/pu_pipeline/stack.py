# src/pu_pipeline/stack.py
"""Stack names and goal labels derived from the environment tag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from pu_pipeline.types import INDEPENDENT, PRODUCTION, STAGING

# (repository name, environment tag) -> stack name
StackNamer = Callable[[str, str], str]


def environment_suffix(environment: str) -> str:
    """
    Short name for an environment tag, or ``""`` when the goal is
    independent of any environment.

    Numbered tags look like ``"<n>-<suffix>"`` and map to ``<suffix>``.
    A tag without a hyphen is used as-is.
    """
    if environment == INDEPENDENT:
        return ""
    if environment == STAGING:
        return "testing"
    if environment == PRODUCTION:
        return "production"
    _, sep, rest = environment.partition("-")
    return rest if sep and rest else environment


def resolve_stack_name(repo_name: str, environment: str) -> str:
    """
    >>> resolve_stack_name("repo", "staging")
    'repo-testing'
    >>> resolve_stack_name("repo", "1234567-feature")
    'repo-feature'
    """
    suffix = environment_suffix(environment)
    return f"{repo_name}-{suffix}" if suffix else repo_name


@dataclass(frozen=True)
class GoalDetails:
    """Display metadata for one provisioning goal."""

    name: str
    display_name: str
    working_description: str
    completed_description: str
    failed_description: str

    @classmethod
    def for_environment(cls, environment: str, name: str = "pulumi-up") -> "GoalDetails":
        suffix = environment_suffix(environment)
        label = "pulumi up" + (f" `{suffix}`" if suffix else "")
        return cls(
            name=name,
            display_name=label,
            working_description=f"{label} running",
            completed_description=f"{label} completed",
            failed_description=f"{label} failed",
        )
