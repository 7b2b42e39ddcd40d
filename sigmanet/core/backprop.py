"""Backpropagation and the plain SGD parameter update."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .activations import sigmoid_deriv
from .errors import ShapeMismatchError
from .matrix import expect_column, multiply_elementwise
from .network import forward
from .types import Array, BackpropResult, GradientPair, NetworkModel


def half_squared_error(prediction: Array, target: Array) -> Tuple[float, Array]:
    """Return ``0.5 * sum((prediction - target) ** 2)`` and ``dL/dprediction``."""

    diff = prediction - target
    return float(0.5 * np.sum(np.square(diff))), diff


def gradients(
    weights: Sequence[Array],
    biases: Sequence[Array],
    activations: Sequence[Array],
    error: Array,
) -> List[GradientPair]:
    """Walk the layers from output to input and collect per-layer gradients.

    ``activations[i]`` is the input of layer ``i`` (the forward trace without
    its final output) and ``error`` is ``dL/d(output)``. The three sequences
    are aligned at the output end; the walk stops at the shortest one, so
    ragged inputs yield fewer pairs instead of failing. Pairs are returned in
    input-to-output order.
    """

    pairs: List[GradientPair] = []
    for W, b, a in zip(reversed(weights), reversed(biases), reversed(activations)):
        delta = multiply_elementwise(error, sigmoid_deriv(W @ a + b))
        pairs.append(GradientPair(weight_gradient=delta @ a.T, bias_gradient=delta))
        error = W.T @ delta
    pairs.reverse()
    return pairs


def compute_gradients(
    model: NetworkModel, inputs: Array, target: Array
) -> Tuple[List[GradientPair], float]:
    """Return the gradients for one labelled sample and its loss before the update."""

    target = expect_column(target, model.output_size, name="target")
    activations = forward(model, inputs)
    loss, error = half_squared_error(activations[-1], target)
    grads = gradients(model.weights, model.biases, activations[:-1], error)
    return grads, loss


def _step(param: Array, grad: Array, learning_rate: float, *, name: str) -> Array:
    if grad.shape != param.shape:
        raise ShapeMismatchError(
            f"{name} gradient has shape {grad.shape}, expected {param.shape}"
        )
    return param - learning_rate * grad


def apply_update(
    model: NetworkModel, grads: Sequence[GradientPair], learning_rate: float
) -> NetworkModel:
    """Return a new model with ``param - learning_rate * gradient`` per layer.

    ``grads`` is matched to the layers from the input side. When it is shorter
    than the layer list, the layers without a gradient keep their parameters;
    extra gradients are ignored.
    """

    weights = list(model.weights)
    biases = list(model.biases)
    for idx, pair in enumerate(grads[: len(weights)]):
        weights[idx] = _step(
            weights[idx], pair.weight_gradient, learning_rate, name=f"weights[{idx}]"
        )
        biases[idx] = _step(
            biases[idx], pair.bias_gradient, learning_rate, name=f"biases[{idx}]"
        )
    return NetworkModel(
        layer_sizes=model.layer_sizes, weights=tuple(weights), biases=tuple(biases)
    )


def backprop(
    model: NetworkModel,
    inputs: Array,
    target: Array,
    learning_rate: float,
    total_error: float = 0.0,
    total_iterations: int = 0,
) -> BackpropResult:
    """One SGD step on a single sample, advancing the running error totals."""

    grads, loss = compute_gradients(model, inputs, target)
    updated = apply_update(model, grads, learning_rate)
    return BackpropResult(
        model=updated,
        total_error=total_error + loss,
        total_iterations=total_iterations + 1,
        sample_error=loss,
    )


__all__ = [
    "half_squared_error",
    "gradients",
    "compute_gradients",
    "apply_update",
    "backprop",
]
