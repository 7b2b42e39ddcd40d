"""SigmaNet public API."""

from .core import activations, types  # noqa: F401
from .core.backprop import apply_update, backprop, compute_gradients, gradients
from .core.errors import (
    ConstructionError,
    DecodeError,
    NetworkError,
    ParseError,
    ShapeMismatchError,
)
from .core.matrix import column_vector
from .core.network import create_network, forward, predict
from .core.types import BackpropResult, GradientPair, NetworkModel
from .data.samples import load_samples, samples_from_arrays, shuffle_samples
from .serialization import deserialize, deserialize_plain, load, save, serialize, serialize_plain
from .training.metrics import argmax, evaluate, to_categorical
from .training.trainer import train, train_epochs

__version__ = "0.1.0"

__all__ = [
    "BackpropResult",
    "ConstructionError",
    "DecodeError",
    "GradientPair",
    "NetworkError",
    "NetworkModel",
    "ParseError",
    "ShapeMismatchError",
    "activations",
    "apply_update",
    "argmax",
    "backprop",
    "column_vector",
    "compute_gradients",
    "create_network",
    "deserialize",
    "deserialize_plain",
    "evaluate",
    "forward",
    "gradients",
    "load",
    "load_samples",
    "predict",
    "samples_from_arrays",
    "save",
    "serialize",
    "serialize_plain",
    "shuffle_samples",
    "to_categorical",
    "train",
    "train_epochs",
    "types",
]
