"""
Hold-out evaluation of tree estimators.

Fits estimators on a random training fraction of the data, scores them
on the held-out rows and keeps the most accurate one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .classifier import DecisionTreeClassifier
from .utils import (
    ArrayLike,
    UnmatchedSplitError,
    check_X_y,
    log_message,
    train_test_split,
)


@dataclass
class LearningModel:
    """
    A fitted estimator and its hold-out accuracy.

    Attributes
    ----------
    estimator : DecisionTreeClassifier
        The fitted estimator.
    accuracy : float
        Accuracy on the held-out rows.
    """
    estimator: DecisionTreeClassifier
    accuracy: float


def _clone(estimator: DecisionTreeClassifier) -> DecisionTreeClassifier:
    """Return an unfitted copy of ``estimator`` with the same parameters."""
    return type(estimator)(descriptor=estimator.descriptor, **estimator.get_params())


def _fit_and_score(
    estimator: DecisionTreeClassifier,
    X: np.ndarray,
    y: np.ndarray,
    training_fraction: float,
    random_state: Optional[int],
) -> LearningModel:
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, train_size=training_fraction, random_state=random_state
    )
    if X_train.shape[0] == 0 or X_test.shape[0] == 0:
        raise ValueError(
            f"training_fraction={training_fraction} splits {X.shape[0]} rows into "
            f"{X_train.shape[0]} for training and {X_test.shape[0]} for testing."
        )
    model = _clone(estimator).fit(X_train, y_train)
    # unseen categories in the test rows fall back to the hint, or count as misses
    predictions = np.array([_safe_predict(model, row) for row in X_test])
    accuracy = float(np.mean(predictions == y_test))
    return LearningModel(estimator=model, accuracy=accuracy)


def _safe_predict(model: DecisionTreeClassifier, row: np.ndarray) -> float:
    try:
        return model.predict_one(row)
    except UnmatchedSplitError:
        return np.nan


def learn(
    X: ArrayLike,
    y: ArrayLike,
    estimators: Sequence[DecisionTreeClassifier],
    *,
    training_fraction: float = 0.8,
    random_state: Optional[int] = None,
) -> List[LearningModel]:
    """
    Fit several estimators on the same random split and score each one.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Feature matrix.
    y : array-like of shape (n_samples,)
        Labels.
    estimators : sequence of DecisionTreeClassifier
        Configured estimators; they are cloned, not modified.
    training_fraction : float, default=0.8
        Fraction of rows used for training.
    random_state : int or None, default=None
        Seed for the split.

    Returns
    -------
    models : list of LearningModel
        One fitted model per estimator, in input order.

    Raises
    ------
    ValueError
        If no estimator is given or ``training_fraction`` is not in (0, 1).
    """
    if len(estimators) == 0:
        raise ValueError("Need to have at least one estimator!")
    if not 0 < training_fraction < 1:
        raise ValueError(f"training_fraction must be in (0, 1), got {training_fraction}")

    X, y = check_X_y(X, y)
    models = []
    for i, estimator in enumerate(estimators):
        result = _fit_and_score(estimator, X, y, training_fraction, random_state)
        log_message(
            f"Estimator {i}: {estimator!r} accuracy={result.accuracy:.4f}",
            verbose=estimator.verbose,
        )
        models.append(result)
    return models


def repeat(
    X: ArrayLike,
    y: ArrayLike,
    estimator: DecisionTreeClassifier,
    *,
    training_fraction: float = 0.8,
    n_repeats: int = 5,
    random_state: Optional[int] = None,
) -> LearningModel:
    """
    Fit ``n_repeats`` models on independent random splits and keep the best.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Feature matrix.
    y : array-like of shape (n_samples,)
        Labels.
    estimator : DecisionTreeClassifier
        Configured estimator; it is cloned, not modified.
    training_fraction : float, default=0.8
        Fraction of rows used for training.
    n_repeats : int, default=5
        Number of splits to try.
    random_state : int or None, default=None
        Seed from which the per-split seeds are drawn.

    Returns
    -------
    model : LearningModel
        The most accurate of the fitted models.
    """
    if n_repeats < 1:
        raise ValueError(f"n_repeats must be positive, got {n_repeats}")
    if not 0 < training_fraction < 1:
        raise ValueError(f"training_fraction must be in (0, 1), got {training_fraction}")

    X, y = check_X_y(X, y)
    rng = np.random.default_rng(random_state)
    seeds = rng.integers(0, 2**31 - 1, size=n_repeats)

    models = []
    for i, seed in enumerate(seeds):
        result = _fit_and_score(estimator, X, y, training_fraction, int(seed))
        log_message(
            f"Repeat {i + 1}/{n_repeats}: accuracy={result.accuracy:.4f}",
            verbose=estimator.verbose,
        )
        models.append(result)
    return best(models)


def best(models: Sequence[LearningModel]) -> LearningModel:
    """
    Return the first model with the highest accuracy.

    Raises
    ------
    ValueError
        If ``models`` is empty.
    """
    if len(models) == 0:
        raise ValueError("Cannot pick the best of an empty list of models.")
    top = max(m.accuracy for m in models)
    return next(m for m in models if m.accuracy == top)


__all__ = ['LearningModel', 'learn', 'repeat', 'best']
