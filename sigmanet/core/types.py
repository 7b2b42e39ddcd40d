"""Core typing contracts for SigmaNet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .errors import ConstructionError, ShapeMismatchError

Array = np.ndarray

ActivationTrace = List[Array]
Sample = Tuple[Array, Array]


def _frozen(values) -> Array:
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


def check_layer_sizes(layer_sizes: Sequence[int]) -> Tuple[int, ...]:
    """Validate ``layer_sizes`` and return it as a tuple of ints."""

    sizes = tuple(layer_sizes)
    if len(sizes) < 2:
        raise ConstructionError(
            f"A network needs at least 2 layers, got {len(sizes)}: {list(sizes)}"
        )
    for idx, size in enumerate(sizes):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise ConstructionError(f"Layer {idx} size must be an integer, got {size!r}")
        if size <= 0:
            raise ConstructionError(f"Layer {idx} size must be positive, got {size}")
    return tuple(int(size) for size in sizes)


@dataclass(frozen=True, eq=False)
class NetworkModel:
    """Immutable parameters of a fully connected sigmoid network.

    Attributes
    ----------
    layer_sizes:
        Width of every layer, input first and output last.
    weights:
        ``weights[i]`` maps layer ``i`` to layer ``i + 1`` and has shape
        ``(layer_sizes[i + 1], layer_sizes[i])``.
    biases:
        ``biases[i]`` is a column of shape ``(layer_sizes[i + 1], 1)``.

    Arrays are copied to ``float64`` and made read-only, so training always
    produces a new model rather than touching an existing one.
    """

    layer_sizes: Tuple[int, ...]
    weights: Tuple[Array, ...]
    biases: Tuple[Array, ...]

    def __post_init__(self) -> None:
        sizes = check_layer_sizes(self.layer_sizes)
        weights = tuple(_frozen(w) for w in self.weights)
        biases = tuple(_frozen(b) for b in self.biases)
        expected = len(sizes) - 1
        if len(weights) != expected or len(biases) != expected:
            raise ShapeMismatchError(
                f"Expected {expected} weight and bias matrices for layers {list(sizes)}, "
                f"got {len(weights)} and {len(biases)}"
            )
        for idx, (W, b) in enumerate(zip(weights, biases)):
            if W.shape != (sizes[idx + 1], sizes[idx]):
                raise ShapeMismatchError(
                    f"weights[{idx}] has shape {W.shape}, "
                    f"expected {(sizes[idx + 1], sizes[idx])}"
                )
            if b.shape != (sizes[idx + 1], 1):
                raise ShapeMismatchError(
                    f"biases[{idx}] has shape {b.shape}, expected {(sizes[idx + 1], 1)}"
                )
        object.__setattr__(self, "layer_sizes", sizes)
        object.__setattr__(self, "weights", weights)
        object.__setattr__(self, "biases", biases)

    @property
    def depth(self) -> int:
        return len(self.layer_sizes)

    @property
    def input_size(self) -> int:
        return self.layer_sizes[0]

    @property
    def output_size(self) -> int:
        return self.layer_sizes[-1]

    def parameter_count(self) -> int:
        return int(sum(W.size + b.size for W, b in zip(self.weights, self.biases)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkModel):
            return NotImplemented
        return (
            self.layer_sizes == other.layer_sizes
            and all(np.array_equal(a, b) for a, b in zip(self.weights, other.weights))
            and all(np.array_equal(a, b) for a, b in zip(self.biases, other.biases))
        )


@dataclass(frozen=True, eq=False)
class GradientPair:
    """Gradients of the loss with respect to one layer's parameters."""

    weight_gradient: Array
    bias_gradient: Array


@dataclass(frozen=True)
class BackpropResult:
    """Updated model plus the running error used for progress reporting.

    ``sample_error`` is the loss of the sample just applied.
    """

    model: NetworkModel
    total_error: float
    total_iterations: int
    sample_error: float = 0.0

    @property
    def mean_error(self) -> float:
        if self.total_iterations == 0:
            return 0.0
        return self.total_error / self.total_iterations


__all__ = [
    "Array",
    "ActivationTrace",
    "Sample",
    "NetworkModel",
    "GradientPair",
    "BackpropResult",
    "check_layer_sizes",
]
