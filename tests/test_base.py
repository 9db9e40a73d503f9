"""
Test suite for TreeParams configuration.
"""

import pytest

from infotree import ConfigurationError, TreeParams


def test_defaults_are_valid():
    params = TreeParams()
    params.validate()
    assert params.depth == 5
    assert params.width == 2
    assert params.impurity == "entropy"
    assert params.hint is None


def test_round_trip_through_dict():
    params = TreeParams(depth=3, width=4, impurity="error", hint=0.0, verbose=2)
    assert TreeParams.from_dict(params.to_dict()) == params


def test_from_dict_ignores_unknown_keys():
    params = TreeParams.from_dict({"depth": 2, "learning_rate": 0.1})
    assert params.depth == 2


@pytest.mark.parametrize("kwargs,match", [
    ({"depth": -1}, "depth"),
    ({"width": 1}, "less than 2"),
    ({"hint": float("inf")}, "hint"),
    ({"verbose": -2}, "verbose"),
    ({"impurity": "variance"}, "Unknown impurity"),
])
def test_validate_rejects_invalid_values(kwargs, match):
    with pytest.raises(ConfigurationError, match=match):
        TreeParams(**kwargs).validate()


def test_zero_depth_and_zero_hint_are_valid():
    TreeParams(depth=0, hint=0.0).validate()
