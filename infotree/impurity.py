"""
Impurity measures for decision tree induction.

This module provides the measures used to score candidate splits. Each
measure quantifies the class heterogeneity of a label distribution and
derives the information gain of partitioning that distribution by a
feature column.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

import numpy as np

from .segmenter import Segment, Segmenter
from .utils import ConfigurationError


GAIN_DECIMALS = 4


# =============================================================================
# Base Impurity Class
# =============================================================================

class Impurity(ABC):
    """
    Abstract base class for impurity measures.

    Subclasses implement :meth:`calculate` on class proportions; the gain
    computations are shared. Instances hold no state and may be reused
    across columns, nodes and threads.
    """

    name: str = "impurity"

    @abstractmethod
    def _from_proportions(self, p: np.ndarray) -> float:
        """
        Compute impurity from class proportions.

        Parameters
        ----------
        p : np.ndarray of shape (n_classes,)
            Observed class proportions, all strictly positive, summing to 1.
        """
        pass

    def calculate(self, y: np.ndarray) -> float:
        """
        Compute the impurity of a label distribution.

        Parameters
        ----------
        y : np.ndarray of shape (n_samples,)
            Label values.

        Returns
        -------
        impurity : float
            0 for a pure distribution, larger for mixed ones.
        """
        y = np.asarray(y, dtype=float)
        if y.size == 0:
            raise ValueError("Cannot compute impurity of an empty label vector.")
        _, counts = np.unique(y, return_counts=True)
        p = counts / y.size
        return float(self._from_proportions(p))

    def _weighted_children(self, y: np.ndarray, groups: np.ndarray) -> float:
        """Size-weighted impurity of the partition of ``y`` given by ``groups``."""
        total = 0.0
        n = y.size
        for g in np.unique(groups):
            child = y[groups == g]
            total += (child.size / n) * self.calculate(child)
        return total

    def _finish(self, parent: float, children: float) -> float:
        gain = round(float(parent - children), GAIN_DECIMALS)
        # float noise can leave -0.0 or a tiny negative value
        return max(gain, 0.0)

    def gain(self, y: np.ndarray, x: np.ndarray) -> float:
        """
        Information gain of splitting ``y`` by the distinct values of ``x``.

        Parameters
        ----------
        y : np.ndarray of shape (n_samples,)
            Label values.
        x : np.ndarray of shape (n_samples,)
            Discrete feature column.

        Returns
        -------
        gain : float
            Parent impurity minus the size-weighted child impurities,
            rounded to 4 decimal places. Never negative.
        """
        y = np.asarray(y, dtype=float)
        x = np.asarray(x, dtype=float)
        if y.shape != x.shape:
            raise ValueError(
                f"Shape mismatch: y has shape {y.shape}, x has shape {x.shape}"
            )
        parent = self.calculate(y)
        return self._finish(parent, self._weighted_children(y, x))

    def segmented_gain(
        self, y: np.ndarray, x: np.ndarray, width: int
    ) -> Tuple[float, List[Segment]]:
        """
        Information gain of splitting ``y`` by ``width`` buckets of ``x``.

        Parameters
        ----------
        y : np.ndarray of shape (n_samples,)
            Label values.
        x : np.ndarray of shape (n_samples,)
            Continuous feature column.
        width : int
            Number of equal-width buckets.

        Returns
        -------
        gain : float
            Rounded, non-negative gain; 0 when ``x`` holds a single value.
        segments : list of Segment
            The bucket boundaries the gain was computed on.
        """
        y = np.asarray(y, dtype=float)
        x = np.asarray(x, dtype=float)
        if y.shape != x.shape:
            raise ValueError(
                f"Shape mismatch: y has shape {y.shape}, x has shape {x.shape}"
            )
        segments = Segmenter(width).segments(x)
        if len(segments) < 2:
            return 0.0, segments

        parent = self.calculate(y)
        buckets = Segmenter.assign(x, segments)
        return self._finish(parent, self._weighted_children(y, buckets)), segments

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# =============================================================================
# Impurity Measures
# =============================================================================

class Entropy(Impurity):
    """
    Shannon entropy in bits.

    H(y) = -sum_i p_i * log2(p_i)

    Ranges from 0 (pure) to log2(n_classes) (uniform).
    """

    name = "entropy"

    def _from_proportions(self, p: np.ndarray) -> float:
        return float(-np.sum(p * np.log2(p))) + 0.0


class Error(Impurity):
    """
    Misclassification error.

    E(y) = 1 - max_i p_i

    Ranges from 0 (pure) to 1 - 1/n_classes (uniform).
    """

    name = "error"

    def _from_proportions(self, p: np.ndarray) -> float:
        return float(1.0 - np.max(p))


# =============================================================================
# Impurity Factory
# =============================================================================

_IMPURITY_MAP = {
    'entropy': Entropy,
    'error': Error,
    'misclassification': Error,
    'misclassification_error': Error,
}


def get_impurity(name: str) -> Impurity:
    """
    Factory function to create impurity measures by name.

    Parameters
    ----------
    name : str
        Name of the measure. Supported: 'entropy', 'error'
        (aliases 'misclassification', 'misclassification_error').

    Returns
    -------
    impurity : Impurity
        Impurity measure instance.

    Raises
    ------
    ConfigurationError
        If the name is not recognized.
    """
    key = str(name).lower().replace('-', '_')
    if key not in _IMPURITY_MAP:
        raise ConfigurationError(
            f"Unknown impurity: '{name}'. "
            f"Supported impurities: {sorted(set(_IMPURITY_MAP))}"
        )
    return _IMPURITY_MAP[key]()


__all__ = [
    'Impurity',
    'Entropy',
    'Error',
    'get_impurity',
    'GAIN_DECIMALS',
]
