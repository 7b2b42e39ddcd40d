"""Network construction and the forward pass."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .activations import sigmoid
from .matrix import expect_column, random_uniform_matrix, zero_matrix
from .types import ActivationTrace, Array, NetworkModel, check_layer_sizes

WEIGHT_RANGE = (-1.0, 1.0)


def create_network(
    layer_sizes: Sequence[int],
    rng: np.random.Generator | None = None,
    *,
    seed: int | None = None,
) -> NetworkModel:
    """Return a randomly initialised network with the given layer widths.

    Weights are drawn uniformly from ``WEIGHT_RANGE`` and biases start at zero.
    Pass ``rng`` (or ``seed``) to make the initialisation reproducible; the
    NumPy global generator is never consulted.

    >>> create_network([784, 30, 10], seed=0).layer_sizes
    (784, 30, 10)
    """

    sizes = check_layer_sizes(layer_sizes)
    rng = rng if rng is not None else np.random.default_rng(seed)
    weights = []
    biases = []
    for in_dim, out_dim in zip(sizes[:-1], sizes[1:]):
        weights.append(random_uniform_matrix(out_dim, in_dim, rng, WEIGHT_RANGE))
        biases.append(zero_matrix(out_dim, 1))
    return NetworkModel(layer_sizes=sizes, weights=tuple(weights), biases=tuple(biases))


def forward(model: NetworkModel, inputs: Array) -> ActivationTrace:
    """Run the network and return every layer's activation, input included."""

    x = expect_column(inputs, model.input_size, name="input")
    activations: ActivationTrace = [x]
    for W, b in zip(model.weights, model.biases):
        activations.append(sigmoid(W @ activations[-1] + b))
    return activations


def predict(model: NetworkModel, inputs: Array) -> Array:
    """Return the output column for ``inputs``."""

    return forward(model, inputs)[-1]


__all__ = ["WEIGHT_RANGE", "create_network", "forward", "predict"]
