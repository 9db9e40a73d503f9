"""
Shared fixtures for the infotree test suite.

The House dataset is the classic direct-marketing example: 14 customers
described by District, HouseType, Income and PreviousCustomer, labelled
with whether they responded to a mailing.
"""

import numpy as np
import pytest

from infotree import Column, Descriptor


# =============================================================================
# House Dataset
# =============================================================================

DISTRICTS = ["Suburban", "Rural", "Urban"]
HOUSE_TYPES = ["Detached", "SemiDetached", "Terrace"]
INCOMES = ["High", "Low"]
PREVIOUS = ["No", "Yes"]
RESPONSES = ["Nothing", "Responded"]

HOUSE_ROWS = [
    ("Suburban", "Detached", "High", "No", "Nothing"),
    ("Suburban", "Detached", "High", "Yes", "Nothing"),
    ("Rural", "Detached", "High", "No", "Responded"),
    ("Urban", "SemiDetached", "High", "No", "Responded"),
    ("Urban", "SemiDetached", "Low", "No", "Responded"),
    ("Urban", "SemiDetached", "Low", "Yes", "Nothing"),
    ("Rural", "SemiDetached", "Low", "Yes", "Responded"),
    ("Suburban", "Terrace", "High", "No", "Nothing"),
    ("Suburban", "SemiDetached", "Low", "No", "Responded"),
    ("Urban", "Terrace", "Low", "No", "Responded"),
    ("Suburban", "Terrace", "Low", "Yes", "Responded"),
    ("Rural", "Terrace", "High", "Yes", "Responded"),
    ("Rural", "Detached", "Low", "No", "Responded"),
    ("Urban", "Terrace", "High", "Yes", "Nothing"),
]


@pytest.fixture
def house_descriptor():
    """Column metadata for the House dataset."""
    return Descriptor(
        features=[
            Column.categorical("District", DISTRICTS),
            Column.categorical("HouseType", HOUSE_TYPES),
            Column.categorical("Income", INCOMES),
            Column.categorical("PreviousCustomer", PREVIOUS),
        ],
        label=Column.categorical("Response", RESPONSES),
    )


@pytest.fixture
def house_data(house_descriptor):
    """Encoded House feature matrix and label vector."""
    features = house_descriptor.features
    X = np.array([
        [features[j].code(value) for j, value in enumerate(row[:4])]
        for row in HOUSE_ROWS
    ])
    y = np.array([house_descriptor.label.code(row[4]) for row in HOUSE_ROWS])
    return X, y


# =============================================================================
# Small Synthetic Datasets
# =============================================================================

@pytest.fixture
def district_descriptor():
    """A single categorical column with a categorical label."""
    return Descriptor(
        features=[Column.categorical("District", ["Rural", "Urban"])],
        label=Column.categorical("Response", ["No", "Yes"]),
    )


@pytest.fixture
def district_data():
    """Rural rows respond, Urban rows do not."""
    X = np.array([[0.0], [0.0], [1.0], [1.0]])
    y = np.array([1.0, 1.0, 0.0, 0.0])
    return X, y
