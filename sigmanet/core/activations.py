"""Activation utilities for SigmaNet."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: Array) -> Array:
    """Return the logistic sigmoid ``1 / (1 + exp(-x))`` entrywise."""

    # exp overflows to inf for very negative x, which still yields 0.0
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(x: Array) -> Array:
    """Derivative of :func:`sigmoid` evaluated at the pre-activation ``x``."""

    s = sigmoid(x)
    return s * (1.0 - s)
