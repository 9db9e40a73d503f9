from __future__ import annotations

import time

import numpy as np
import pandas as pd

from infotree import Column, DecisionTreeClassifier, Descriptor, learn, repeat


HOUSE = pd.DataFrame(
    [
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
    ],
    columns=["District", "HouseType", "Income", "PreviousCustomer", "Response"],
)


def describe(df: pd.DataFrame, label: str) -> Descriptor:
    """Treat every column as categorical, coded in order of first appearance."""
    features = [
        Column.categorical(name, list(pd.unique(df[name])))
        for name in df.columns if name != label
    ]
    return Descriptor(features=features, label=Column.categorical(label, list(pd.unique(df[label]))))


def encode(df: pd.DataFrame, descriptor: Descriptor) -> tuple[np.ndarray, np.ndarray]:
    X = np.column_stack([
        df[column.name].map(column.code).to_numpy(dtype=float)
        for column in descriptor.features
    ])
    y = df[descriptor.label.name].map(descriptor.label.code).to_numpy(dtype=float)
    return X, y


descriptor = describe(HOUSE, "Response")
X, y = encode(HOUSE, descriptor)
print(descriptor)

start = time.time()
clf = DecisionTreeClassifier(descriptor=descriptor, depth=5, verbose=1).fit(X, y)
print(f"Training time: {time.time() - start:.4f}s")
print(clf)
print(f"Training accuracy: {clf.score(X, y):.3f}")

importances = pd.Series(clf.feature_importances_, index=[c.name for c in descriptor.features])
print(importances.sort_values(ascending=False).to_string())

query = pd.DataFrame(
    [("Rural", "Detached", "High", "No", "Nothing")], columns=HOUSE.columns
)
Xq, _ = encode(query, descriptor)
print("Rural/Detached/High/New ->", descriptor.label_text(clf.predict_one(Xq[0])))

candidates = [
    DecisionTreeClassifier(descriptor=descriptor, depth=d, impurity=impurity, hint=1.0)
    for d in (1, 2, 3)
    for impurity in ("entropy", "error")
]
for model in learn(X, y, candidates, training_fraction=0.7, random_state=42):
    print(f"{model.estimator!r:70s} accuracy={model.accuracy:.3f}")

winner = repeat(X, y, DecisionTreeClassifier(descriptor=descriptor, hint=1.0),
                training_fraction=0.7, n_repeats=20, random_state=42)
print(f"Best of 20 splits: accuracy={winner.accuracy:.3f}")
print(winner.estimator)
