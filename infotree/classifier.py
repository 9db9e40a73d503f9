"""
Decision tree classifier.

This module provides the estimator facade over TreeBuilder and
TreeModel: it holds the configuration and the column metadata, fits a
tree on a feature matrix and a label vector, and predicts with the
resulting model.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .base import BaseEstimator
from .descriptor import Descriptor
from .model import TreeModel
from .tree import Node, TreeBuilder
from .utils import (
    ArrayLike,
    StateError,
    accuracy_score,
    check_array,
    check_is_fitted,
    check_X_y,
    log_message,
)


class DecisionTreeClassifier(BaseEstimator):
    """
    Information-gain decision tree classifier.

    Discrete columns split into one child per observed value; continuous
    columns split into ``width`` equal-width buckets. Each path uses a
    column at most once.

    Parameters
    ----------
    descriptor : Descriptor or None, default=None
        Column metadata (names, discrete flags, display labels). Required
        before calling ``fit``.
    depth : int, default=5
        Maximum number of split levels. 0 produces a single leaf.
    width : int, default=2
        Number of buckets for continuous columns. Must be >= 2.
    impurity : str, default='entropy'
        Impurity measure: 'entropy' or 'error'.
    hint : float or None, default=None
        Fallback prediction for inputs that match no edge.
    verbose : int, default=0
        Verbosity level (0=silent, 1=summary, 2=splits and leaves,
        3=candidate gains).

    Attributes
    ----------
    model_ : TreeModel
        The fitted model.
    tree_ : Node
        Root of the fitted tree.
    classes_ : np.ndarray
        Distinct labels seen during fit.
    n_features_ : int
        Number of features seen during fit.

    Examples
    --------
    >>> import numpy as np
    >>> from infotree import Column, Descriptor, DecisionTreeClassifier
    >>> descriptor = Descriptor(
    ...     features=[Column.categorical("District", ["Rural", "Urban"])],
    ...     label=Column.categorical("Response", ["No", "Yes"]),
    ... )
    >>> X = np.array([[0.0], [0.0], [1.0], [1.0]])
    >>> y = np.array([1.0, 1.0, 0.0, 0.0])
    >>> clf = DecisionTreeClassifier(descriptor=descriptor).fit(X, y)
    >>> clf.predict_one([0.0])
    1.0
    """

    def __init__(
        self,
        descriptor: Optional[Descriptor] = None,
        depth: int = 5,
        width: int = 2,
        impurity: str = "entropy",
        hint: Optional[float] = None,
        verbose: int = 0,
    ):
        super().__init__(
            depth=depth,
            width=width,
            impurity=impurity,
            hint=hint,
            verbose=verbose,
        )
        self.descriptor = descriptor

        # Fitted state
        self.model_: Optional[TreeModel] = None
        self.classes_: Optional[np.ndarray] = None
        self.n_features_: Optional[int] = None

    @property
    def tree_(self) -> Optional[Node]:
        """Root of the fitted tree, or None before fitting."""
        return self.model_.tree if self.model_ is not None else None

    def fit(self, X: ArrayLike, y: ArrayLike) -> "DecisionTreeClassifier":
        """
        Fit the decision tree.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training features.
        y : array-like of shape (n_samples,)
            Training labels (numeric codes).

        Returns
        -------
        self : DecisionTreeClassifier
            Fitted classifier.

        Raises
        ------
        ConfigurationError
            If a parameter is invalid or the descriptor does not match X.
        StateError
            If no descriptor was supplied.
        """
        self._validate_params()

        if self.descriptor is None:
            raise StateError("Cannot build decision tree without column metadata!")

        X, y = check_X_y(X, y)

        builder = TreeBuilder(self.params, self.descriptor)
        root = builder.build(X, y)

        self.model_ = TreeModel(root, self.descriptor, hint=self.params.hint)
        self.classes_ = np.unique(y)
        self.n_features_ = X.shape[1]

        log_message(
            f"Fitted tree with {self.model_.n_leaves} leaves, depth {self.model_.depth}",
            verbose=self.params.verbose,
        )
        return self

    def predict(self, X: ArrayLike) -> np.ndarray:
        """
        Predict labels for samples in X.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Features to predict.

        Returns
        -------
        labels : np.ndarray of shape (n_samples,)
            Predicted labels.
        """
        check_is_fitted(self)
        X = check_array(X, ensure_2d=True)
        if X.shape[1] != self.n_features_:
            raise ValueError(
                f"X has {X.shape[1]} features, but the tree was fitted with "
                f"{self.n_features_} features."
            )
        return self.model_.predict_many(X)

    def predict_one(self, vector: ArrayLike) -> float:
        """Predict the label of a single feature vector."""
        check_is_fitted(self)
        return self.model_.predict(vector)

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        """
        Return the accuracy on the given data.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Test samples.
        y : array-like of shape (n_samples,)
            True labels.

        Returns
        -------
        score : float
            Fraction of correctly predicted labels.
        """
        X, y = check_X_y(X, y)
        return accuracy_score(y, self.predict(X))

    @property
    def feature_importances_(self) -> np.ndarray:
        """Gain-based feature importances of the fitted tree."""
        check_is_fitted(self)
        return self.model_.feature_importances_

    def __str__(self) -> str:
        if self.model_ is None:
            return repr(self)
        return self.model_.to_text()
