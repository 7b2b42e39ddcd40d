"""Label encoding and evaluation helpers."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..core.network import predict
from ..core.types import Array, NetworkModel, Sample


def argmax(vector: Array | Sequence[float]) -> int:
    """Index of the largest entry; ties resolve to the lowest index.

    Matrices are scanned in row-major order, so a column vector behaves like
    the flat list of its entries.
    """

    values = np.asarray(vector, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("argmax of an empty vector is undefined")
    best = 0
    for idx in range(1, values.size):
        if values[idx] > values[best]:
            best = idx
    return best


def to_categorical(label: int, class_count: int) -> Array:
    """One-hot vector of length ``class_count`` with a 1 at ``label``."""

    if not 0 <= label < class_count:
        raise ValueError(f"label {label} out of range for {class_count} classes")
    out = np.zeros(class_count, dtype=np.float64)
    out[label] = 1.0
    return out


def evaluate(model: NetworkModel, samples: Sequence[Sample]) -> float:
    """Fraction of samples whose predicted class matches the target's class."""

    if len(samples) == 0:
        return 0.0
    correct = sum(
        1 for inputs, target in samples if argmax(predict(model, inputs)) == argmax(target)
    )
    return correct / len(samples)


__all__ = ["argmax", "to_categorical", "evaluate"]
