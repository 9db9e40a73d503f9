"""
Utility functions for input validation and data handling.

This module provides the validation helpers, the exception hierarchy,
simple metrics, data splitting and the logging helpers shared by the
rest of the package. Everything is built on NumPy only.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

import numpy as np


# =============================================================================
# Type Aliases
# =============================================================================

ArrayLike = Union[np.ndarray, List[Any], Tuple[Any, ...]]


# =============================================================================
# Custom Exceptions
# =============================================================================

class InfoTreeError(Exception):
    """Base class for all errors raised by infotree."""


class ConfigurationError(InfoTreeError, ValueError):
    """
    Exception raised when a tree is configured with invalid options.

    Examples are a bucket ``width`` below 2, a negative ``depth`` or an
    unknown impurity name.
    """


class StateError(InfoTreeError, RuntimeError):
    """
    Exception raised when an operation is attempted in an invalid state.

    Raised when building without column metadata, or when the metadata
    does not describe the column a prediction needs.
    """


class NotFittedError(StateError):
    """
    Exception raised when an estimator is used before fitting.

    This exception is raised when calling predict or similar methods
    before calling fit, or when a model wraps an empty tree.
    """


class UnmatchedSplitError(InfoTreeError, LookupError):
    """
    Exception raised when a feature value matches none of a node's edges.

    Parameters
    ----------
    column : int
        Index of the feature tested at the node.
    value : float
        The offending feature value.
    name : str or None
        Display name of the column, when known.
    """

    def __init__(self, column: int, value: float, name: Optional[str] = None):
        self.column = column
        self.value = value
        self.name = name
        label = f"{name}[{column}]" if name is not None else f"[{column}]"
        super().__init__(
            f"Unable to match split value {value} for feature {label}"
        )


# =============================================================================
# Input Validation Functions
# =============================================================================

def check_array(
    X: ArrayLike,
    *,
    ensure_2d: bool = True,
    allow_nan: bool = False,
    dtype: type = float,
    copy: bool = False,
) -> np.ndarray:
    """
    Validate and convert input array to numpy array.

    Parameters
    ----------
    X : array-like
        Input data to validate. NumPy arrays, nested lists/tuples and
        objects exposing ``.values`` (pandas DataFrame/Series) are accepted.
    ensure_2d : bool, default=True
        Whether to reshape 1D input into a single column.
    allow_nan : bool, default=False
        Whether to allow NaN values.
    dtype : type, default=float
        Desired dtype of the output array.
    copy : bool, default=False
        Whether to force a copy of the input.

    Returns
    -------
    X_converted : np.ndarray
        Validated and converted array.

    Raises
    ------
    ValueError
        If validation fails.
    TypeError
        If input type is not supported.
    """
    if isinstance(X, np.ndarray):
        X_out = X.copy() if copy else X
    elif isinstance(X, (list, tuple)):
        X_out = np.array(X, dtype=dtype)
    else:
        try:
            if hasattr(X, 'values'):
                X_out = np.asarray(X.values, dtype=dtype)
            else:
                X_out = np.asarray(X, dtype=dtype)
        except (TypeError, ValueError) as e:
            raise TypeError(
                f"Cannot convert input of type {type(X).__name__} to numpy array: {e}"
            ) from e

    if X_out.dtype != dtype:
        X_out = X_out.astype(dtype)

    if X_out.ndim == 1:
        if ensure_2d:
            X_out = X_out.reshape(-1, 1)
    elif X_out.ndim != 2:
        raise ValueError(
            f"Expected 1D or 2D array, got {X_out.ndim}D array instead."
        )

    if X_out.size == 0:
        raise ValueError("Input array cannot be empty.")

    if np.any(np.isinf(X_out)):
        raise ValueError("Input array contains infinite values.")

    if not allow_nan and np.any(np.isnan(X_out)):
        raise ValueError("Input array contains NaN values but allow_nan=False.")

    return X_out


def check_X_y(X: ArrayLike, y: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate X and y arrays for supervised learning.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Feature matrix.
    y : array-like of shape (n_samples,)
        Label values.

    Returns
    -------
    X : np.ndarray
        Validated feature matrix.
    y : np.ndarray
        Validated label vector.

    Raises
    ------
    ValueError
        If X and y have incompatible shapes or y has several outputs.
    """
    X = check_array(X, ensure_2d=True)
    y = check_array(y, ensure_2d=False)

    if y.ndim == 2 and y.shape[1] == 1:
        y = y.ravel()
    elif y.ndim == 2:
        raise ValueError(
            f"y has shape {y.shape}, expected 1D array. "
            "Multi-output targets are not supported."
        )

    if X.shape[0] != y.shape[0]:
        raise ValueError(
            f"Found input variables with inconsistent numbers of samples: "
            f"X has {X.shape[0]} samples, y has {y.shape[0]} samples."
        )

    return X, y


def check_is_fitted(estimator: Any, attributes: Optional[List[str]] = None) -> None:
    """
    Check if an estimator is fitted by verifying required attributes.

    Parameters
    ----------
    estimator : object
        Estimator instance to check.
    attributes : list of str, optional
        Attribute names to check. Defaults to ``['model_']``.

    Raises
    ------
    NotFittedError
        If none of the attributes is set.
    """
    if attributes is None:
        attributes = ['model_']

    fitted = any(getattr(estimator, attr, None) is not None for attr in attributes)

    if not fitted:
        raise NotFittedError(
            f"This {type(estimator).__name__} instance is not fitted yet. "
            "Call 'fit' with appropriate arguments before using this estimator."
        )


def mode(values: ArrayLike) -> float:
    """
    Return the most frequent value.

    Ties are resolved in favour of the smallest value so the result is
    deterministic.

    Parameters
    ----------
    values : array-like of shape (n_samples,)
        Values to summarise.

    Returns
    -------
    mode : float
        The most frequent value.
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        raise ValueError("Cannot take the mode of an empty array.")
    uniques, counts = np.unique(values, return_counts=True)
    return float(uniques[np.argmax(counts)])


# =============================================================================
# Data Splitting Functions
# =============================================================================

def train_test_split(
    X: ArrayLike,
    y: ArrayLike,
    *,
    test_size: float = 0.2,
    train_size: Optional[float] = None,
    random_state: Optional[int] = None,
    shuffle: bool = True,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Split arrays into random train and test subsets.

    Parameters
    ----------
    X : array-like of shape (n_samples, n_features)
        Features to split.
    y : array-like of shape (n_samples,)
        Labels to split.
    test_size : float, default=0.2
        Proportion of the dataset to include in the test split.
    train_size : float or None, default=None
        Proportion of the dataset to include in the train split. When set,
        it takes precedence over ``test_size``: ``floor(n_samples *
        train_size)`` rows are used for training and the rest for testing.
    random_state : int or None, default=None
        Random seed for reproducibility.
    shuffle : bool, default=True
        Whether to shuffle before splitting.

    Returns
    -------
    X_train, X_test, y_train, y_test : np.ndarray
    """
    X, y = check_X_y(X, y)

    n_samples = X.shape[0]
    if train_size is not None:
        if not 0 < train_size < 1:
            raise ValueError(f"train_size must be in (0, 1), got {train_size}")
        n_train = int(np.floor(n_samples * train_size))
    else:
        if not 0 < test_size < 1:
            raise ValueError(f"test_size must be in (0, 1), got {test_size}")
        n_train = n_samples - int(n_samples * test_size)

    rng = np.random.default_rng(random_state)
    indices = np.arange(n_samples)
    if shuffle:
        rng.shuffle(indices)

    train_indices = indices[:n_train]
    test_indices = indices[n_train:]

    return X[train_indices], X[test_indices], y[train_indices], y[test_indices]


# =============================================================================
# Metrics Functions
# =============================================================================

def accuracy_score(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """
    Compute classification accuracy.

    Parameters
    ----------
    y_true : array-like of shape (n_samples,)
        Ground truth labels.
    y_pred : array-like of shape (n_samples,)
        Predicted labels.

    Returns
    -------
    accuracy : float
        Accuracy score between 0 and 1.
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"Shape mismatch: y_true has shape {y_true.shape}, "
            f"y_pred has shape {y_pred.shape}"
        )

    return float(np.mean(y_true == y_pred))


# =============================================================================
# Logging Utilities
# =============================================================================

def log_message(message: str, *, verbose: int = 0, level: int = 1) -> None:
    """
    Print a log message if verbose level is sufficient.

    Parameters
    ----------
    message : str
        Message to print.
    verbose : int, default=0
        Configured verbosity.
    level : int, default=1
        Verbosity required for the message to be printed.
    """
    if verbose >= level:
        print(f"[InfoTree] {message}")


def log_split(
    depth: int,
    column_name: str,
    gain: float,
    n_samples: int,
    *,
    verbose: int = 0,
) -> None:
    """
    Log the split chosen for a node.

    Parameters
    ----------
    depth : int
        Depth of the node (root is 0).
    column_name : str
        Name of the winning column.
    gain : float
        Gain of the winning column.
    n_samples : int
        Number of rows reaching the node.
    verbose : int, default=0
        Verbosity level; printed at 2 and above.
    """
    indent = "  " * depth
    log_message(
        f"{indent}Depth {depth}: best split [{column_name}] "
        f"gain={gain:.4f} samples={n_samples}",
        verbose=verbose,
        level=2,
    )


def log_leaf(depth: int, label: str, n_samples: int, *, verbose: int = 0) -> None:
    """Log a leaf as it is created (verbose >= 2)."""
    indent = "  " * depth
    log_message(
        f"{indent}Depth {depth}: leaf {label} samples={n_samples}",
        verbose=verbose,
        level=2,
    )
