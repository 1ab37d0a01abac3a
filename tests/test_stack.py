# tests/test_stack.py

import pytest
from pu_pipeline.stack import GoalDetails, environment_suffix, resolve_stack_name


@pytest.mark.parametrize("env,expected", [
    ("independent", "repo"),
    ("staging", "repo-testing"),
    ("production", "repo-production"),
    ("1234567-feature", "repo-feature"),
])
def test_resolve_stack_name(env, expected):
    assert resolve_stack_name("repo", env) == expected


def test_hyphenless_tag_is_used_whole():
    assert resolve_stack_name("repo", "qa") == "repo-qa"


def test_everything_after_first_hyphen_is_the_suffix():
    assert environment_suffix("12-blue-green") == "blue-green"


def test_goal_details_labels():
    g = GoalDetails.for_environment("staging")
    assert g.display_name == "pulumi up `testing`"
    assert g.failed_description == "pulumi up `testing` failed"
    assert GoalDetails.for_environment("independent").display_name == "pulumi up"
    assert GoalDetails.for_environment("3-feature").working_description == "pulumi up `feature` running"
