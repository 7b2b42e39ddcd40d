"""Dense matrix helpers on top of NumPy ``float64`` arrays."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .errors import ShapeMismatchError
from .types import Array


def random_uniform_matrix(
    rows: int,
    columns: int,
    rng: np.random.Generator,
    value_range: Tuple[float, float] = (-1.0, 1.0),
) -> Array:
    """Matrix with entries drawn independently from ``value_range``."""

    low, high = value_range
    return rng.uniform(low, high, size=(rows, columns)).astype(np.float64)


def zero_matrix(rows: int, columns: int) -> Array:
    return np.zeros((rows, columns), dtype=np.float64)


def multiply_elementwise(left: Array, right: Array) -> Array:
    """Hadamard product of two equally shaped matrices."""

    if left.shape != right.shape:
        raise ShapeMismatchError(
            f"Elementwise product needs equal shapes, got {left.shape} and {right.shape}"
        )
    return left * right


def column_vector(values: Sequence[float] | Array) -> Array:
    """Return ``values`` flattened into an ``(n, 1)`` float column."""

    return np.asarray(values, dtype=np.float64).reshape(-1, 1)


def expect_column(vector: Array, height: int, *, name: str) -> Array:
    """Return ``vector`` as float64, rejecting anything but an ``(height, 1)`` column."""

    array = np.asarray(vector, dtype=np.float64)
    if array.shape != (height, 1):
        raise ShapeMismatchError(
            f"{name} must be a column vector of shape {(height, 1)}, got {array.shape}"
        )
    return array


__all__ = [
    "random_uniform_matrix",
    "zero_matrix",
    "multiply_elementwise",
    "column_vector",
    "expect_column",
]
