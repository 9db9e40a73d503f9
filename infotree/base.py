"""
Base classes for infotree estimators.

This module provides the configuration dataclass and the abstract base
class that define the common interface and parameters of the tree
estimators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

import numpy as np

from .impurity import get_impurity
from .utils import ConfigurationError


# =============================================================================
# Tree Parameters Dataclass
# =============================================================================

@dataclass
class TreeParams:
    """
    Dataclass containing all decision tree hyperparameters.

    Parameters
    ----------
    depth : int
        Maximum number of split levels. 0 produces a single leaf.
    width : int
        Number of equal-width buckets used to split continuous columns.
    impurity : str
        Impurity measure, 'entropy' or 'error'.
    hint : float or None
        Prediction returned when an input matches no edge of a node.
        None means unset, in which case prediction fails instead.
    verbose : int
        Verbosity level (0=silent, 1=summary, 2=every split and leaf,
        3=every candidate gain).
    """
    depth: int = 5
    width: int = 2
    impurity: str = "entropy"
    hint: Optional[float] = None
    verbose: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "TreeParams":
        """Create TreeParams from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in params.items() if k in valid_keys}
        return cls(**filtered)

    def validate(self) -> None:
        """
        Validate all parameters.

        Raises
        ------
        ConfigurationError
            If any parameter is invalid.
        """
        if self.depth < 0:
            raise ConfigurationError(f"depth must be non-negative, got {self.depth}")
        if self.width < 2:
            raise ConfigurationError(
                f"Cannot set tree width to less than 2, got {self.width}"
            )
        if self.hint is not None and not np.isfinite(self.hint):
            raise ConfigurationError(f"hint must be a finite number, got {self.hint}")
        if self.verbose < 0:
            raise ConfigurationError(f"verbose must be non-negative, got {self.verbose}")
        get_impurity(self.impurity)


# =============================================================================
# Base Estimator Abstract Class
# =============================================================================

class BaseEstimator(ABC):
    """
    Abstract base class for infotree estimators.

    Parameters live in a :class:`TreeParams` instance; subclasses add the
    fitted state and implement ``fit`` and ``predict``.
    """

    def __init__(
        self,
        depth: int = 5,
        width: int = 2,
        impurity: str = "entropy",
        hint: Optional[float] = None,
        verbose: int = 0,
    ):
        """Initialize the estimator with hyperparameters."""
        self.params = TreeParams(
            depth=depth,
            width=width,
            impurity=impurity,
            hint=hint,
            verbose=verbose,
        )

    # -------------------------------------------------------------------------
    # Property accessors for common hyperparameters
    # -------------------------------------------------------------------------

    @property
    def depth(self) -> int:
        return self.params.depth

    @property
    def width(self) -> int:
        return self.params.width

    @property
    def impurity(self) -> str:
        return self.params.impurity

    @property
    def hint(self) -> Optional[float]:
        return self.params.hint

    @property
    def verbose(self) -> int:
        return self.params.verbose

    # -------------------------------------------------------------------------
    # Abstract methods to be implemented by subclasses
    # -------------------------------------------------------------------------

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> "BaseEstimator":
        """
        Fit the model to training data.

        Parameters
        ----------
        X : np.ndarray of shape (n_samples, n_features)
            Training features.
        y : np.ndarray of shape (n_samples,)
            Training labels.

        Returns
        -------
        self : BaseEstimator
            Fitted estimator.
        """
        pass

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Make predictions on new data.

        Parameters
        ----------
        X : np.ndarray of shape (n_samples, n_features)
            Features to predict.

        Returns
        -------
        predictions : np.ndarray of shape (n_samples,)
            Predicted values.
        """
        pass

    # -------------------------------------------------------------------------
    # Common methods
    # -------------------------------------------------------------------------

    def get_params(self) -> Dict[str, Any]:
        """
        Get estimator parameters.

        Returns
        -------
        params : dict
            Dictionary of parameter names to values.
        """
        return self.params.to_dict()

    def set_params(self, **params: Any) -> "BaseEstimator":
        """
        Set estimator parameters.

        Parameters
        ----------
        **params : dict
            Parameter names and values.

        Returns
        -------
        self : BaseEstimator
            The estimator instance.
        """
        for key, value in params.items():
            if hasattr(self.params, key):
                setattr(self.params, key, value)
            else:
                raise ValueError(f"Invalid parameter: {key}")
        return self

    def _validate_params(self) -> None:
        """Validate all hyperparameters."""
        self.params.validate()

    def __repr__(self) -> str:
        """Return string representation of the estimator."""
        class_name = self.__class__.__name__
        defaults = TreeParams()
        params_str = ", ".join(
            f"{k}={v!r}"
            for k, v in self.get_params().items()
            if v != getattr(defaults, k)
        )
        return f"{class_name}({params_str})"
