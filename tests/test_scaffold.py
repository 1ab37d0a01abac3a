# tests/test_scaffold.py

import json

import pytest
from pu_pipeline.scaffold import simple_deployment


def test_writes_all_files(tree, make_context):
    ctx = make_context(tree, image="img:1")
    simple_deployment("ns")(tree, ctx)

    assert tree.read_file(".pulumi/Pulumi.yaml") == "name: repo\nruntime: nodejs\n"
    pkg = json.loads(tree.read_file(".pulumi/package.json"))
    assert pkg["name"] == "repo"
    assert "@pulumi/kubernetes" in pkg["dependencies"]
    assert json.loads(tree.read_file(".pulumi/tsconfig.json"))["files"] == ["index.ts"]

    index = tree.read_file(".pulumi/index.ts")
    assert 'namespace: "ns"' in index
    assert 'image: "img:1"' in index
    assert "containerPort: 8080" in index


def test_requires_image(tree, make_context):
    with pytest.raises(ValueError):
        simple_deployment("ns")(tree, make_context(tree, image=None))


def test_custom_app_dir(tree, make_context):
    simple_deployment("ns", app_dir="infra")(tree, make_context(tree, image="img:1"))
    assert tree.has_file("infra/Pulumi.yaml")
    assert tree.has_file("infra/index.ts")
    assert not tree.has_file(".pulumi/Pulumi.yaml")
