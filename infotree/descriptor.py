"""
Column metadata for decision tree construction.

A Descriptor tells the tree builder how to treat each column of the
feature matrix (discrete or continuous) and how to display values when
labelling edges and leaves. Converting raw objects into numeric rows is
left to the caller; the descriptor only describes the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence


def format_number(value: float) -> str:
    """Format a numeric value without a trailing '.0' for integral values."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


@dataclass
class Column:
    """
    Description of one column of the feature matrix, or of the label.

    Parameters
    ----------
    name : str
        Display name of the column.
    discrete : bool, default=True
        Whether values are categorical identities (one child per value)
        rather than points on a continuous range (bucketed).
    labels : dict of float to str, optional
        Display text for encoded values, e.g. ``{0.0: 'Rural'}``.
    """
    name: str
    discrete: bool = True
    labels: Dict[float, str] = field(default_factory=dict)

    @classmethod
    def categorical(cls, name: str, categories: Sequence[str]) -> "Column":
        """
        Create a discrete column whose values are ``0 .. len(categories) - 1``.

        Parameters
        ----------
        name : str
            Display name of the column.
        categories : sequence of str
            Category names, in code order.
        """
        return cls(
            name=name,
            discrete=True,
            labels={float(i): str(c) for i, c in enumerate(categories)},
        )

    @classmethod
    def continuous(cls, name: str) -> "Column":
        """Create a continuous column."""
        return cls(name=name, discrete=False)

    def code(self, category: str) -> float:
        """Return the numeric code of a category label."""
        for value, text in self.labels.items():
            if text == category:
                return value
        raise KeyError(f"Unknown category {category!r} for column '{self.name}'")

    def convert(self, value: float) -> str:
        """Return the display text for a numeric value."""
        return self.labels.get(float(value), format_number(value))

    def __str__(self) -> str:
        kind = "discrete" if self.discrete else "continuous"
        return f"{self.name} ({kind})"


@dataclass
class Descriptor:
    """
    Describes the features and label of a learning problem.

    Parameters
    ----------
    features : list of Column
        One entry per column of the feature matrix, in column order.
    label : Column or None, default=None
        Description of the label; used to render leaf labels.

    Examples
    --------
    >>> descriptor = Descriptor(
    ...     features=[Column.categorical("District", ["Rural", "Urban"]),
    ...               Column.continuous("Income")],
    ...     label=Column.categorical("Response", ["No", "Yes"]),
    ... )
    >>> descriptor.column_at(1)
    'Income'
    """
    features: List[Column] = field(default_factory=list)
    label: Optional[Column] = None

    @classmethod
    def create(
        cls,
        names: Sequence[str],
        *,
        discrete: Optional[Sequence[bool]] = None,
        label: Optional[str] = None,
    ) -> "Descriptor":
        """
        Build a descriptor from column names and discreteness flags.

        Parameters
        ----------
        names : sequence of str
            Feature names in column order.
        discrete : sequence of bool, optional
            Discreteness per column. Defaults to all discrete.
        label : str, optional
            Name of the label column.
        """
        if discrete is None:
            discrete = [True] * len(names)
        if len(discrete) != len(names):
            raise ValueError(
                f"Got {len(names)} names but {len(discrete)} discrete flags."
            )
        features = [Column(name=n, discrete=bool(d)) for n, d in zip(names, discrete)]
        return cls(
            features=features,
            label=Column(name=label) if label is not None else None,
        )

    @property
    def n_features(self) -> int:
        """Number of feature columns described."""
        return len(self.features)

    def at(self, i: int) -> Column:
        """
        Return the column description at index ``i``.

        Raises
        ------
        IndexError
            If ``i`` falls outside the described columns.
        """
        if i < 0 or i >= len(self.features):
            raise IndexError(f"{i} falls outside of the appropriate range")
        return self.features[i]

    def column_at(self, i: int) -> str:
        """Return the name of the column at index ``i``."""
        return self.at(i).name

    def label_text(self, value: float) -> str:
        """Return the display text of a label value."""
        if self.label is None:
            return format_number(value)
        return self.label.convert(value)

    def __str__(self) -> str:
        lines = ["Descriptor {"]
        lines.extend(f"   {feature}" for feature in self.features)
        if self.label is not None:
            lines.append(f"  *{self.label}")
        lines.append("}")
        return "\n".join(lines)
