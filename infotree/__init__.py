"""
InfoTree - information-gain decision trees on NumPy.

This package grows classification trees by recursively splitting on the
feature with the highest information gain, then walks them to predict
labels for new inputs.

Features:
- Entropy and misclassification-error impurity measures
- Discrete columns split into one child per observed value
- Continuous columns split into equal-width buckets
- Path-local column usage (each column at most once per path)
- Configurable fallback prediction (hint) for unmatched inputs
- Indented text dump of fitted trees
- Hold-out evaluation helpers

Example usage:
    >>> import numpy as np
    >>> from infotree import Column, Descriptor, DecisionTreeClassifier
    >>>
    >>> descriptor = Descriptor(
    ...     features=[Column.categorical("District", ["Rural", "Urban"]),
    ...               Column.continuous("Income")],
    ...     label=Column.categorical("Response", ["No", "Yes"]),
    ... )
    >>> X = np.array([[0, 10.0], [0, 40.0], [1, 15.0], [1, 35.0]])
    >>> y = np.array([1, 1, 0, 0])
    >>> clf = DecisionTreeClassifier(descriptor=descriptor, depth=3)
    >>> clf.fit(X, y)
    >>> labels = clf.predict(X)
    >>> print(clf)
"""

__version__ = "0.1.0"
__author__ = "InfoTree Contributors"

# Core estimator
from .classifier import DecisionTreeClassifier

# Tree structure and construction
from .tree import Node, Edge, SplitInfo, TreeBuilder
from .model import TreeModel

# Impurity measures
from .impurity import Impurity, Entropy, Error, get_impurity

# Segmentation
from .segmenter import Segment, Segmenter, discrete_segments

# Column metadata
from .descriptor import Column, Descriptor

# Base classes
from .base import BaseEstimator, TreeParams

# Evaluation helpers
from .learner import LearningModel, learn, repeat, best

# Utility functions and exceptions
from .utils import (
    check_array,
    check_X_y,
    check_is_fitted,
    train_test_split,
    accuracy_score,
    mode,
    log_message,
    InfoTreeError,
    ConfigurationError,
    StateError,
    NotFittedError,
    UnmatchedSplitError,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Core estimator
    "DecisionTreeClassifier",
    # Tree
    "Node",
    "Edge",
    "SplitInfo",
    "TreeBuilder",
    "TreeModel",
    # Impurity
    "Impurity",
    "Entropy",
    "Error",
    "get_impurity",
    # Segmentation
    "Segment",
    "Segmenter",
    "discrete_segments",
    # Metadata
    "Column",
    "Descriptor",
    # Base classes
    "BaseEstimator",
    "TreeParams",
    # Evaluation
    "LearningModel",
    "learn",
    "repeat",
    "best",
    # Utilities
    "check_array",
    "check_X_y",
    "check_is_fitted",
    "train_test_split",
    "accuracy_score",
    "mode",
    "log_message",
    # Exceptions
    "InfoTreeError",
    "ConfigurationError",
    "StateError",
    "NotFittedError",
    "UnmatchedSplitError",
]
