"""
Test suite for TreeModel prediction and introspection.
"""

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from infotree import (
    ConfigurationError,
    Descriptor,
    Node,
    NotFittedError,
    StateError,
    TreeBuilder,
    TreeModel,
    TreeParams,
    UnmatchedSplitError,
)


@pytest.fixture
def district_model(district_descriptor, district_data):
    X, y = district_data
    root = TreeBuilder(TreeParams(), district_descriptor).build(X, y)
    return TreeModel(root, district_descriptor)


@pytest.fixture
def house_model(house_descriptor, house_data):
    X, y = house_data
    root = TreeBuilder(TreeParams(), house_descriptor).build(X, y)
    return TreeModel(root, house_descriptor)


# =============================================================================
# Prediction
# =============================================================================

def test_predict_follows_matching_edge(district_model):
    assert district_model.predict([0.0]) == 1.0
    assert district_model.predict([1.0]) == 0.0


def test_predict_reproduces_house_training_labels(house_model, house_data):
    X, y = house_data
    np.testing.assert_array_equal(house_model.predict_many(X), y)


def test_predict_rural_detached_high_income_new_customer(house_model):
    assert house_model.predict([1.0, 0.0, 0.0, 0.0]) == 1.0


def test_unmatched_value_raises_without_hint(district_model):
    with pytest.raises(UnmatchedSplitError, match=r"District\[0\]") as exc_info:
        district_model.predict([5.0])
    assert exc_info.value.column == 0
    assert exc_info.value.value == 5.0


def test_unmatched_value_returns_hint(district_model):
    district_model.hint = 0.5
    assert district_model.predict([5.0]) == 0.5


def test_hint_of_zero_is_honoured(district_model):
    """0.0 is a valid hint, distinct from no hint."""
    district_model.hint = 0.0
    assert district_model.predict([-3.0]) == 0.0


def test_continuous_edges_are_half_open():
    """Boundary values follow the upper bucket; the maximum stays inside."""
    X = np.array([[1.0], [2.0], [3.0], [4.0]])
    y = np.array([0.0, 0.0, 1.0, 1.0])
    descriptor = Descriptor.create(["x"], discrete=[False])
    model = TreeModel(TreeBuilder(TreeParams(), descriptor).build(X, y), descriptor)

    assert model.predict([2.4]) == 0.0
    assert model.predict([2.5]) == 1.0
    assert model.predict([4.0]) == 1.0
    with pytest.raises(UnmatchedSplitError):
        model.predict([4.5])


def test_predict_without_tree_raises():
    with pytest.raises(NotFittedError):
        TreeModel(None).predict([1.0])
    with pytest.raises(NotFittedError):
        TreeModel(None).predict_many([[1.0]])


def test_single_leaf_model_needs_no_descriptor():
    model = TreeModel(Node(is_leaf=True, value=3.0))
    assert model.predict([9.0, 9.0]) == 3.0


def test_missing_descriptor_raises_state_error(district_model):
    district_model.descriptor = None
    with pytest.raises(StateError):
        district_model.predict([0.0])


def test_short_vector_raises_state_error(house_model):
    with pytest.raises(StateError):
        house_model.predict([])


def test_concurrent_predictions_match_sequential(house_model, house_data):
    """A model is read-only and can serve several threads at once."""
    X, _ = house_data
    rows = np.tile(X, (20, 1))
    expected = house_model.predict_many(rows)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(house_model.predict, rows))
    np.testing.assert_array_equal(results, expected)


# =============================================================================
# Introspection
# =============================================================================

def test_house_tree_shape(house_model):
    assert house_model.depth == 2
    assert house_model.n_leaves == 5
    assert sum(1 for _ in house_model.iter_nodes()) == 8


def test_feature_importances(house_model):
    importances = house_model.feature_importances_
    assert importances.shape == (4,)
    assert importances.sum() == pytest.approx(1.0)
    assert importances[1] == 0.0
    assert np.all(importances >= 0)


def test_feature_importances_of_single_leaf(district_descriptor):
    model = TreeModel(Node(is_leaf=True, value=1.0), district_descriptor)
    np.testing.assert_array_equal(model.feature_importances_, [0.0])


def test_to_text(district_model):
    expected = (
        "[District, 1.0000]\n"
        " |- Rural\n"
        " |   +(Yes, 1)\n"
        " |- Urban\n"
        " |   +(No, 0)\n"
    )
    assert district_model.to_text() == expected
    assert str(district_model) == expected


def test_to_text_of_empty_model():
    assert TreeModel(None).to_text() == "<empty tree>\n"


def test_repr(district_model):
    assert repr(district_model) == "TreeModel(n_leaves=2, depth=1, hint=None)"
    assert repr(TreeModel(None)) == "TreeModel(tree=None)"


@pytest.mark.parametrize("hint", [float("nan"), float("inf"), -np.inf])
def test_non_finite_hint_is_rejected(hint, district_model):
    """A hint must be a finite number whether set at construction or later."""
    with pytest.raises(ConfigurationError, match="hint"):
        TreeModel(district_model.tree, district_model.descriptor, hint=hint)
    with pytest.raises(ConfigurationError):
        district_model.hint = hint
    assert district_model.hint is None
