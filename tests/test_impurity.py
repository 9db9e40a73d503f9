"""
Test suite for impurity measures.

Checks the entropy and misclassification-error formulas, the gain
computations shared by both measures and the name-based factory.
"""

import numpy as np
import pytest

from infotree import ConfigurationError, Entropy, Error, get_impurity
from infotree.impurity import GAIN_DECIMALS


# =============================================================================
# Impurity Values
# =============================================================================

@pytest.mark.parametrize("n_classes", range(1, 9))
def test_entropy_of_uniform_distribution_is_log2_n(n_classes):
    """Entropy of n equally likely classes is log2(n) bits."""
    y = np.repeat(np.arange(n_classes, dtype=float), 3)
    assert Entropy().calculate(y) == pytest.approx(np.log2(n_classes))


@pytest.mark.parametrize("n_classes", range(1, 9))
def test_error_of_uniform_distribution(n_classes):
    """Misclassification error of n equally likely classes is 1 - 1/n."""
    y = np.repeat(np.arange(n_classes, dtype=float), 2)
    assert Error().calculate(y) == pytest.approx(1.0 - 1.0 / n_classes)


def test_pure_distribution_has_zero_impurity():
    """A single-class label vector is perfectly pure."""
    y = np.full(10, 3.0)
    assert Entropy().calculate(y) == 0.0
    assert Error().calculate(y) == 0.0


def test_entropy_of_skewed_distribution():
    """Entropy of a 1:3 split matches the closed form."""
    y = np.array([0.0, 1.0, 1.0, 1.0])
    expected = -(0.25 * np.log2(0.25) + 0.75 * np.log2(0.75))
    assert Entropy().calculate(y) == pytest.approx(expected)


def test_impurity_depends_only_on_proportions():
    """Label values and order do not affect impurity."""
    a = np.array([0.0, 0.0, 1.0])
    b = np.array([7.0, 2.0, 7.0])
    assert Entropy().calculate(a) == pytest.approx(Entropy().calculate(b))
    assert Error().calculate(a) == pytest.approx(Error().calculate(b))


def test_calculate_rejects_empty_labels():
    """Impurity of an empty vector is undefined."""
    with pytest.raises(ValueError):
        Entropy().calculate(np.array([]))


# =============================================================================
# Gain
# =============================================================================

def test_gain_of_perfect_split_equals_parent_entropy():
    """A column that separates the labels recovers the whole parent entropy."""
    y = np.array([0.0, 0.0, 1.0, 1.0])
    x = np.array([5.0, 5.0, 9.0, 9.0])
    assert Entropy().gain(y, x) == pytest.approx(1.0)


def test_gain_of_constant_column_is_zero():
    """A column with a single value carries no information."""
    y = np.array([0.0, 1.0, 0.0, 1.0])
    x = np.ones(4)
    assert Entropy().gain(y, x) == 0.0
    assert Error().gain(y, x) == 0.0


def test_gain_is_rounded_to_four_decimals():
    """Gains are rounded so near-equal candidates compare equal."""
    y = np.array([0.0, 1.0, 1.0])
    x = np.array([0.0, 0.0, 1.0])
    gain = Entropy().gain(y, x)
    assert gain == round(gain, GAIN_DECIMALS)
    assert gain == pytest.approx(0.2516)


def test_error_gain_can_be_zero_where_entropy_gain_is_not():
    """Misclassification error is insensitive to some useful splits."""
    y = np.array([0.0, 0.0, 0.0, 1.0])
    x = np.array([0.0, 0.0, 1.0, 1.0])
    assert Error().gain(y, x) == 0.0
    assert Entropy().gain(y, x) > 0.0


def test_gain_is_never_negative():
    """Gain is non-negative on random data for both measures."""
    rng = np.random.default_rng(0)
    for _ in range(50):
        y = rng.integers(0, 3, size=20).astype(float)
        x = rng.integers(0, 4, size=20).astype(float)
        assert Entropy().gain(y, x) >= 0.0
        assert Error().gain(y, x) >= 0.0


def test_gain_rejects_mismatched_shapes():
    """Labels and column must have the same length."""
    with pytest.raises(ValueError, match="Shape mismatch"):
        Entropy().gain(np.zeros(3), np.zeros(4))


# =============================================================================
# Segmented Gain
# =============================================================================

def test_segmented_gain_on_separable_continuous_column():
    """Two equal-width buckets separate the labels completely."""
    y = np.array([0.0, 0.0, 1.0, 1.0])
    x = np.array([1.0, 2.0, 3.0, 4.0])
    gain, segments = Entropy().segmented_gain(y, x, 2)
    assert gain == pytest.approx(1.0)
    assert len(segments) == 2
    assert segments[0].min == 1.0
    assert segments[1].max == 4.0


def test_segmented_gain_of_constant_column():
    """A single-valued column yields one segment and zero gain."""
    y = np.array([0.0, 1.0, 1.0])
    gain, segments = Entropy().segmented_gain(y, np.full(3, 2.0), 3)
    assert gain == 0.0
    assert len(segments) == 1


def test_segmented_gain_rejects_bad_width():
    """Fewer than two buckets is a configuration error."""
    with pytest.raises(ConfigurationError):
        Entropy().segmented_gain(np.zeros(3), np.arange(3.0), 1)


# =============================================================================
# Factory
# =============================================================================

@pytest.mark.parametrize("name,cls", [
    ("entropy", Entropy),
    ("Entropy", Entropy),
    ("error", Error),
    ("misclassification", Error),
    ("misclassification-error", Error),
])
def test_get_impurity_resolves_names(name, cls):
    """Names are case-insensitive and accept dashes."""
    assert isinstance(get_impurity(name), cls)


def test_get_impurity_unknown_name():
    """Unknown names raise a ConfigurationError that is also a ValueError."""
    with pytest.raises(ConfigurationError, match="Unknown impurity"):
        get_impurity("gini")
    with pytest.raises(ValueError):
        get_impurity("gini")


def test_impurity_repr():
    assert repr(Entropy()) == "Entropy()"
    assert Error().name == "error"
