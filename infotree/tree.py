"""
Decision tree structure and induction.

This module provides the Node/Edge tree structure and the TreeBuilder
that grows it: at each node the unused column with the highest
information gain is chosen, rows are partitioned by that column's
segments and the builder recurses into every partition until a
stopping condition is met.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

import numpy as np

from .base import TreeParams
from .descriptor import Descriptor, format_number
from .impurity import Impurity, get_impurity
from .segmenter import Segment, Segmenter, discrete_segments, in_segment
from .utils import (
    ConfigurationError,
    StateError,
    check_X_y,
    log_leaf,
    log_message,
    log_split,
    mode,
)


# =============================================================================
# Tree Data Structures
# =============================================================================

@dataclass(frozen=True)
class Node:
    """
    Represents a node in the decision tree.

    Nodes are frozen once built; a fitted tree can be shared freely.

    Attributes
    ----------
    is_leaf : bool
        Whether this node is a leaf.
    column : int
        Feature index tested at this node (-1 for leaves).
    gain : float
        Information gain of the split (internal nodes only).
    name : str
        Name of the tested column (internal nodes only).
    value : float
        Predicted label value (leaves only).
    label : str
        Display text of ``value`` (leaves only).
    edges : tuple of Edge
        Outgoing edges, in segment order. Empty for leaves.
    n_samples : int
        Number of training rows that reached this node.
    """
    is_leaf: bool = True
    column: int = -1
    gain: float = 0.0
    name: str = ""
    value: float = 0.0
    label: str = ""
    edges: Tuple["Edge", ...] = ()
    n_samples: int = 0


@dataclass(frozen=True)
class Edge:
    """
    A branch from a node to one of its children.

    The edge owns its child. ``parent`` is a weak back-reference kept for
    display only.

    Attributes
    ----------
    discrete : bool
        Whether the edge matches a single categorical value.
    min : float
        Categorical value, or lower bound of the range.
    max : float
        Upper bound of the range (equal to ``min`` when discrete).
    label : str
        Display text, e.g. ``'Rural'`` or ``'1 ≤ x < 2.5'``.
    child : Node
        Subtree reached through this edge.
    closed : bool
        Whether ``max`` itself belongs to the range.
    """
    discrete: bool
    min: float
    max: float
    label: str
    child: Node
    closed: bool = False
    _parent: Optional["weakref.ReferenceType[Node]"] = field(
        default=None, repr=False, compare=False
    )

    @property
    def parent(self) -> Optional[Node]:
        """The node owning this edge, if it is still alive."""
        return self._parent() if self._parent is not None else None

    def contains(self, value: float) -> bool:
        """Return True if ``value`` follows this edge."""
        return in_segment(value, self.min, self.max, discrete=self.discrete, closed=self.closed)


@dataclass
class SplitInfo:
    """
    Information about the best split found for a node.

    Attributes
    ----------
    column : int
        Feature index to split on.
    gain : float
        Information gain of the split.
    segments : list of Segment
        One segment per child.
    """
    column: int
    gain: float
    segments: List[Segment]


# =============================================================================
# Tree Builder
# =============================================================================

class TreeBuilder:
    """
    Grows a decision tree by recursive information-gain partitioning.

    Parameters
    ----------
    params : TreeParams or None
        Tree configuration. Defaults to ``TreeParams()``.
    descriptor : Descriptor or None
        Column metadata; required by :meth:`build`.

    Raises
    ------
    ConfigurationError
        If ``params`` is invalid.

    Examples
    --------
    >>> X = np.array([[1.0], [2.0], [3.0], [4.0]])
    >>> y = np.array([0.0, 0.0, 1.0, 1.0])
    >>> builder = TreeBuilder(TreeParams(width=2), Descriptor.create(["x"], discrete=[False]))
    >>> root = builder.build(X, y)
    >>> [edge.label for edge in root.edges]
    ['1 ≤ x < 2.5', '2.5 ≤ x ≤ 4']
    """

    def __init__(
        self,
        params: Optional[TreeParams] = None,
        descriptor: Optional[Descriptor] = None,
    ):
        self.params = params if params is not None else TreeParams()
        self.params.validate()
        self.descriptor = descriptor
        self.impurity: Impurity = get_impurity(self.params.impurity)
        self.segmenter = Segmenter(self.params.width)

    def build(self, X: np.ndarray, y: np.ndarray) -> Node:
        """
        Build a tree from a feature matrix and a label vector.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Feature matrix, columns ordered as in the descriptor.
        y : array-like of shape (n_samples,)
            Label values.

        Returns
        -------
        root : Node
            Root of the fitted tree.

        Raises
        ------
        StateError
            If no descriptor was supplied.
        ConfigurationError
            If the descriptor does not describe every column of ``X``.
        """
        if self.descriptor is None:
            raise StateError("Cannot build decision tree without column metadata!")

        X, y = check_X_y(X, y)
        if X.shape[1] != self.descriptor.n_features:
            raise ConfigurationError(
                f"Descriptor describes {self.descriptor.n_features} features "
                f"but X has {X.shape[1]} columns."
            )

        verbose = self.params.verbose
        log_message(
            f"Building tree on {X.shape[0]} samples, {X.shape[1]} features "
            f"(depth={self.params.depth}, width={self.params.width}, "
            f"impurity={self.impurity.name})",
            verbose=verbose,
        )

        root = self.build_tree(X, y, self.params.depth - 1, frozenset())

        log_message(
            f"Finished tree: root={'leaf' if root.is_leaf else root.name}",
            verbose=verbose,
        )
        return root

    def build_tree(
        self,
        X: np.ndarray,
        y: np.ndarray,
        remaining_depth: int,
        used_columns: FrozenSet[int] = frozenset(),
    ) -> Node:
        """
        Recursively build the subtree for a set of rows.

        Parameters
        ----------
        X : np.ndarray of shape (n_samples, n_features)
            Rows reaching this node.
        y : np.ndarray of shape (n_samples,)
            Labels of those rows.
        remaining_depth : int
            Split levels still allowed; a leaf is produced when negative.
        used_columns : frozenset of int
            Columns already split on along the path from the root. Each
            child receives its own extended copy.

        Returns
        -------
        node : Node
            Root of the subtree.
        """
        if y.size == 0:
            raise ValueError("Cannot build a tree from an empty label vector.")

        level = max(self.params.depth - 1 - remaining_depth, 0)

        if remaining_depth < 0 or np.unique(y).size == 1:
            return self._build_leaf(y, level)

        split = self.find_best_split(X, y, used_columns)
        if split is None:
            return self._build_leaf(y, level)

        column = split.column
        name = self._column_name(column)
        log_split(level, name, split.gain, y.size, verbose=self.params.verbose)

        child_used = used_columns | {column}
        feature = X[:, column]
        edges = []

        for segment in split.segments:
            rows = segment.mask(feature)
            if np.any(rows):
                child = self.build_tree(X[rows], y[rows], remaining_depth - 1, child_used)
            else:
                # empty bucket: keep its range covered with the parent's mode
                child = self._build_leaf(y, level + 1, n_samples=0)

            edges.append(Edge(
                discrete=segment.discrete,
                min=segment.min,
                max=segment.max,
                label=self._edge_label(column, segment),
                child=child,
                closed=segment.closed,
            ))

        node = Node(
            is_leaf=False,
            column=column,
            gain=split.gain,
            name=name,
            edges=tuple(edges),
            n_samples=int(y.size),
        )
        for edge in node.edges:
            object.__setattr__(edge, "_parent", weakref.ref(node))
        return node

    def find_best_split(
        self,
        X: np.ndarray,
        y: np.ndarray,
        used_columns: FrozenSet[int] = frozenset(),
    ) -> Optional[SplitInfo]:
        """
        Find the unused column with the greatest positive gain.

        Ties are broken by the lowest column index.

        Returns
        -------
        split_info : SplitInfo or None
            The winning split, or None when no column has positive gain.
        """
        best: Optional[SplitInfo] = None
        best_gain = 0.0

        for i in range(X.shape[1]):
            if i in used_columns:
                continue

            feature = X[:, i]
            if self._is_discrete(i):
                gain = self.impurity.gain(y, feature)
                segments = None
            else:
                gain, segments = self.impurity.segmented_gain(y, feature, self.params.width)

            log_message(
                f"    gain for {self._column_name(i)} = {gain:.4f}",
                verbose=self.params.verbose,
                level=3,
            )

            if gain > best_gain:
                if segments is None:
                    segments = discrete_segments(feature)
                best = SplitInfo(column=i, gain=gain, segments=segments)
                best_gain = gain

        return best

    def _build_leaf(self, y: np.ndarray, level: int, n_samples: Optional[int] = None) -> Node:
        value = mode(y)
        label = self._label_text(value)
        if n_samples is None:
            n_samples = int(y.size)
        log_leaf(level, label, n_samples, verbose=self.params.verbose)
        return Node(is_leaf=True, value=value, label=label, n_samples=n_samples)

    def _is_discrete(self, column: int) -> bool:
        if self.descriptor is None:
            raise StateError("Cannot build decision tree without column metadata!")
        return self.descriptor.at(column).discrete

    def _column_name(self, column: int) -> str:
        return self.descriptor.column_at(column)

    def _label_text(self, value: float) -> str:
        if self.descriptor is None:
            return format_number(value)
        return self.descriptor.label_text(value)

    def _edge_label(self, column: int, segment: Segment) -> str:
        if segment.discrete:
            return self.descriptor.at(column).convert(segment.min)
        upper = "≤" if segment.closed else "<"
        return f"{format_number(segment.min)} ≤ x {upper} {format_number(segment.max)}"


__all__ = ['Node', 'Edge', 'SplitInfo', 'TreeBuilder']
