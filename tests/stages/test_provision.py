# tests/stages/test_provision.py

import asyncio

import pytest
from pu_pipeline.errors import MissingToken, PermalinkNotFound, ProcessFailure
from pu_pipeline.stages import StackUp
from pu_pipeline.types import RunState


def test_runs_up_with_token_overlay(manifest_tree, make_context, make_runner):
    runner = make_runner((0, ["Updating (repo-testing)", "Permalink: https://stack.example/up/7"]))
    ctx = make_context(manifest_tree)
    state = asyncio.run(StackUp(runner, token="tok").run(RunState(context=ctx, tree=manifest_tree)))

    call = runner.calls[0]
    assert call["command"] == "pulumi"
    assert call["args"] == ["up", "--non-interactive", "--stack", "repo-testing"]
    assert call["cwd"] == manifest_tree.path(".pulumi")
    assert call["env"] == {"PULUMI_ACCESS_TOKEN": "tok"}

    assert state.stack == "repo-testing"
    assert state.permalink == "https://stack.example/up/7"
    # output went to the progress log as well as the capture
    assert "Permalink: https://stack.example/up/7" in ctx.log.lines
    assert "Permalink:" in state.captured_output


def test_missing_token_spawns_nothing(manifest_tree, make_context, make_runner):
    runner = make_runner()
    with pytest.raises(MissingToken):
        asyncio.run(StackUp(runner, token=None).run(RunState(context=make_context(manifest_tree), tree=manifest_tree)))
    assert runner.calls == []


def test_custom_stack_namer(manifest_tree, make_context, make_runner):
    runner = make_runner((0, ["Permalink: u"]))
    stage = StackUp(runner, token="t", stack_namer=lambda repo, env: f"{repo}.{env}")
    state = asyncio.run(stage.run(RunState(context=make_context(manifest_tree), tree=manifest_tree)))
    assert state.stack == "repo.staging"


def test_nonzero_exit_is_process_failure(manifest_tree, make_context, make_runner):
    runner = make_runner((255, ["error: stack not found"]))
    with pytest.raises(ProcessFailure) as exc:
        asyncio.run(StackUp(runner, token="t").run(RunState(context=make_context(manifest_tree), tree=manifest_tree)))
    assert exc.value.code == 255
    assert "stack not found" in exc.value.description


def test_zero_exit_without_permalink(manifest_tree, make_context, make_runner):
    runner = make_runner((0, ["Resources:", "    3 unchanged"]))
    with pytest.raises(PermalinkNotFound):
        asyncio.run(StackUp(runner, token="t").run(RunState(context=make_context(manifest_tree), tree=manifest_tree)))
