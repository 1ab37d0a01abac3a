# tests/conftest.py
from __future__ import annotations

from typing import List, Optional

import pytest

from pu_pipeline.tree import WorkingTree
from pu_pipeline.types import ExecutionContext, ProcessOutcome, Repository


class ListProgressLog:
    """Sink keeping every line in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line.rstrip("\n"))


class FakeRunner:
    """Stands in for ProcessStep: records calls, replays scripted output."""

    def __init__(self, *script):
        # each entry: (exit_code, [output lines])
        self.script = list(script)
        self.calls: List[dict] = []

    async def run(self, command, args, cwd, env_overlay, log_sink):
        self.calls.append({"command": command, "args": list(args), "cwd": cwd, "env": env_overlay})
        code, lines = self.script.pop(0) if self.script else (0, [])
        for line in lines:
            log_sink.write(line)
        desc = f"'{command}' completed" if code == 0 else f"'{command}' failed with exit code {code}"
        return ProcessOutcome(code, "\n".join(lines), desc)


@pytest.fixture
def tree(tmp_path) -> WorkingTree:
    return WorkingTree(tmp_path / "repo", name="repo")


@pytest.fixture
def manifest_tree(tree) -> WorkingTree:
    tree.add_file(".pulumi/Pulumi.yaml", "name: repo\nruntime: nodejs\n")
    return tree


def _make_context(tree, environment: str = "staging", token: Optional[str] = "tok", image: Optional[str] = None):
    return ExecutionContext(
        repo=Repository(owner="acme", name=tree.name),
        environment=environment,
        tree=tree,
        log=ListProgressLog(),
        token=token,
        image=image,
    )


@pytest.fixture
def make_context():
    return _make_context


@pytest.fixture
def list_log():
    return ListProgressLog()


@pytest.fixture
def make_runner():
    return FakeRunner
