"""
Value-range segmentation for split finding.

Continuous columns are divided into a fixed number of contiguous,
equal-width buckets so that a split only has to consider ``width``
children. Discrete columns get one point segment per distinct value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from .utils import ConfigurationError


def in_segment(value: float, lower: float, upper: float, *, discrete: bool, closed: bool) -> bool:
    """
    Test whether a single value falls inside a segment.

    Discrete segments match on equality with ``lower``. Continuous
    segments are half-open ``[lower, upper)``, or ``[lower, upper]`` when
    ``closed``.
    """
    if discrete:
        return value == lower
    if closed:
        return lower <= value <= upper
    return lower <= value < upper


@dataclass(frozen=True)
class Segment:
    """
    A value range defining one child partition of a split.

    Attributes
    ----------
    min : float
        Lower bound (the categorical value for discrete segments).
    max : float
        Upper bound (equal to ``min`` for discrete segments).
    discrete : bool
        Whether this is a point segment of a discrete column.
    closed : bool
        Whether the upper bound is inclusive (last continuous bucket).
    """
    min: float
    max: float
    discrete: bool = False
    closed: bool = False

    def contains(self, value: float) -> bool:
        """Return True if ``value`` falls inside the segment."""
        return in_segment(value, self.min, self.max, discrete=self.discrete, closed=self.closed)

    def mask(self, x: np.ndarray) -> np.ndarray:
        """Vectorised membership test over an array of values."""
        if self.discrete:
            return x == self.min
        if self.closed:
            return (x >= self.min) & (x <= self.max)
        return (x >= self.min) & (x < self.max)


def discrete_segments(x: np.ndarray) -> List[Segment]:
    """
    Return one point segment per distinct value of ``x``, ascending.

    Parameters
    ----------
    x : np.ndarray of shape (n_samples,)
        Column values.
    """
    return [
        Segment(min=float(v), max=float(v), discrete=True)
        for v in np.unique(x)
    ]


class Segmenter:
    """
    Splits the observed range of a continuous column into equal-width buckets.

    Parameters
    ----------
    width : int, default=2
        Number of buckets. Must be at least 2.

    Raises
    ------
    ConfigurationError
        If ``width`` is lower than 2.

    Examples
    --------
    >>> Segmenter(width=2).segments(np.array([1.0, 2.0, 3.0, 4.0]))
    [Segment(min=1.0, max=2.5, discrete=False, closed=False), Segment(min=2.5, max=4.0, discrete=False, closed=True)]
    """

    def __init__(self, width: int = 2):
        if width < 2:
            raise ConfigurationError(
                f"Cannot set tree width to less than 2, got {width}"
            )
        self.width = width

    def segments(self, x: np.ndarray) -> List[Segment]:
        """
        Compute the bucket boundaries for a column.

        Parameters
        ----------
        x : np.ndarray of shape (n_samples,)
            Column values.

        Returns
        -------
        segments : list of Segment
            ``width`` contiguous buckets covering ``[min(x), max(x)]``, the
            last one closed. A single closed segment when every value is
            identical.
        """
        x = np.asarray(x, dtype=float)
        if x.size == 0:
            raise ValueError("Cannot segment an empty column.")

        lo = float(np.min(x))
        hi = float(np.max(x))

        if lo == hi:
            return [Segment(min=lo, max=hi, closed=True)]

        edges = np.linspace(lo, hi, self.width + 1)
        # linspace can drift on the last edge
        edges[-1] = hi

        return [
            Segment(
                min=float(edges[k]),
                max=float(edges[k + 1]),
                closed=(k == self.width - 1),
            )
            for k in range(self.width)
        ]

    @staticmethod
    def assign(x: np.ndarray, segments: List[Segment]) -> np.ndarray:
        """
        Map each value to the index of the first segment containing it.

        Parameters
        ----------
        x : np.ndarray of shape (n_samples,)
            Column values.
        segments : list of Segment
            Segments to test, in order.

        Returns
        -------
        bucket : np.ndarray of shape (n_samples,)
            Segment index per value, ``-1`` when no segment matches.
        """
        x = np.asarray(x, dtype=float)
        bucket = np.full(x.shape[0], -1, dtype=int)
        for k, segment in enumerate(segments):
            bucket[segment.mask(x) & (bucket == -1)] = k
        return bucket
