"""Core numerical primitives for SigmaNet."""

from . import activations, backprop, errors, matrix, network, types

__all__ = ["activations", "backprop", "errors", "matrix", "network", "types"]
