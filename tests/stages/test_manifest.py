# tests/stages/test_manifest.py

import asyncio

import pytest
from pu_pipeline.errors import MissingManifest
from pu_pipeline.stages import ManifestCheck
from pu_pipeline.types import RunState


def test_missing_manifest(tree, make_context):
    ctx = make_context(tree)
    with pytest.raises(MissingManifest) as exc:
        asyncio.run(ManifestCheck().run(RunState(context=ctx, tree=tree)))
    assert exc.value.code == 1
    assert exc.value.description == "no application found"
    assert ctx.log.lines == ["No pulumi application found in project"]


def test_manifest_present(manifest_tree, make_context):
    ctx = make_context(manifest_tree)
    asyncio.run(ManifestCheck().run(RunState(context=ctx, tree=manifest_tree)))
    assert ctx.log.lines == ["Project has pulumi application in '.pulumi' directory"]
