"""
Prediction over a fitted decision tree.

TreeModel walks a finished Node graph to predict labels, renders the
tree as indented text and reports simple statistics. It never modifies
the tree, so one model can serve concurrent predictions.
"""

from __future__ import annotations

from typing import Iterator, Optional

import numpy as np

from .descriptor import Descriptor, format_number
from .tree import Node
from .utils import (
    ArrayLike,
    ConfigurationError,
    NotFittedError,
    StateError,
    UnmatchedSplitError,
    check_array,
)


class TreeModel:
    """
    Read-only view of a fitted decision tree.

    Parameters
    ----------
    tree : Node or None
        Root of the fitted tree.
    descriptor : Descriptor or None
        Column metadata the tree was built with.
    hint : float or None, default=None
        Prediction returned when a value matches none of a node's edges.
        None leaves it unset, and such inputs raise UnmatchedSplitError.

    Raises
    ------
    ConfigurationError
        If ``hint`` is not a finite number.
    """

    def __init__(
        self,
        tree: Optional[Node],
        descriptor: Optional[Descriptor] = None,
        hint: Optional[float] = None,
    ):
        self.tree = tree
        self.descriptor = descriptor
        self.hint = hint

    @property
    def hint(self) -> Optional[float]:
        """Fallback prediction for values matching no edge, or None."""
        return self._hint

    @hint.setter
    def hint(self, value: Optional[float]) -> None:
        if value is not None and not np.isfinite(value):
            raise ConfigurationError(f"hint must be a finite number, got {value}")
        self._hint = value

    # -------------------------------------------------------------------------
    # Prediction
    # -------------------------------------------------------------------------

    def predict(self, vector: ArrayLike) -> float:
        """
        Predict the label of a single feature vector.

        Parameters
        ----------
        vector : array-like of shape (n_features,)
            Feature values, ordered as in the descriptor.

        Returns
        -------
        prediction : float
            Value of the leaf reached, or ``hint`` when the walk falls off
            the tree.

        Raises
        ------
        NotFittedError
            If the model has no tree.
        StateError
            If the descriptor does not describe a column the walk tests.
        UnmatchedSplitError
            If a value matches no edge and no hint is set.
        """
        if self.tree is None:
            raise NotFittedError("Cannot predict with an empty tree.")
        v = np.asarray(vector, dtype=float).ravel()
        return self._walk_node(v, self.tree)

    def predict_many(self, X: ArrayLike) -> np.ndarray:
        """
        Predict labels for every row of a feature matrix.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Feature matrix.

        Returns
        -------
        predictions : np.ndarray of shape (n_samples,)
        """
        if self.tree is None:
            raise NotFittedError("Cannot predict with an empty tree.")
        X = check_array(X, ensure_2d=True)
        predictions = np.zeros(X.shape[0])
        for i in range(X.shape[0]):
            predictions[i] = self._walk_node(X[i], self.tree)
        return predictions

    def _walk_node(self, v: np.ndarray, node: Node) -> float:
        """Follow matching edges from ``node`` down to a leaf."""
        while not node.is_leaf:
            col = node.column
            name = self._column_name(col)
            if col >= v.shape[0]:
                raise StateError(
                    f"Vector has {v.shape[0]} features but node [{name}] tests column {col}."
                )

            value = v[col]
            for edge in node.edges:
                if edge.contains(value):
                    node = edge.child
                    break
            else:
                if self.hint is not None:
                    return float(self.hint)
                raise UnmatchedSplitError(col, float(value), name=name)

        return node.value

    def _column_name(self, col: int) -> str:
        if col < 0:
            raise StateError("Invalid feature encountered during node walk!")
        if self.descriptor is None or col >= self.descriptor.n_features:
            raise StateError(f"No column metadata describes feature {col}.")
        return self.descriptor.column_at(col)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def iter_nodes(self) -> Iterator[Node]:
        """Yield every node, depth-first in edge order."""
        if self.tree is None:
            return
        stack = [self.tree]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(edge.child for edge in reversed(node.edges))

    @property
    def n_leaves(self) -> int:
        """Number of leaves in the tree."""
        return sum(1 for node in self.iter_nodes() if node.is_leaf)

    @property
    def depth(self) -> int:
        """Number of split levels on the longest root-to-leaf path."""
        if self.tree is None:
            raise NotFittedError("Tree has not been fitted yet.")
        return self._node_depth(self.tree)

    def _node_depth(self, node: Node) -> int:
        if node.is_leaf:
            return 0
        return 1 + max(self._node_depth(edge.child) for edge in node.edges)

    @property
    def feature_importances_(self) -> np.ndarray:
        """
        Compute feature importances based on total gain.

        Returns
        -------
        importances : np.ndarray of shape (n_features,)
            Gain summed per column, normalized to sum to 1 (all zeros for
            a single-leaf tree).
        """
        if self.tree is None:
            raise NotFittedError("Tree has not been fitted yet.")

        if self.descriptor is not None:
            n_features = self.descriptor.n_features
        else:
            n_features = 1 + max((n.column for n in self.iter_nodes()), default=-1)

        importances = np.zeros(n_features)
        for node in self.iter_nodes():
            if not node.is_leaf:
                importances[node.column] += node.gain

        total = np.sum(importances)
        if total > 0:
            importances /= total
        return importances

    # -------------------------------------------------------------------------
    # Pretty printing
    # -------------------------------------------------------------------------

    def to_text(self) -> str:
        """
        Render the tree as indented text.

        Internal nodes print as ``[name, gain]``, edges as ``|- label`` and
        leaves as ``+(label, value)``.
        """
        if self.tree is None:
            return "<empty tree>\n"
        return self._print_node(self.tree, "")

    def _print_node(self, node: Node, pre: str) -> str:
        if node.is_leaf:
            return f"{pre} +({node.label}, {format_number(node.value)})\n"

        parts = [f"{pre}[{node.name}, {node.gain:.4f}]\n"]
        for edge in node.edges:
            parts.append(f"{pre} |- {edge.label}\n")
            parts.append(self._print_node(edge.child, f"{pre} |  "))
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        if self.tree is None:
            return "TreeModel(tree=None)"
        return f"TreeModel(n_leaves={self.n_leaves}, depth={self.depth}, hint={self.hint!r})"
