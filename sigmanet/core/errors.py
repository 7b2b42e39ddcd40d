"""Exception hierarchy for SigmaNet."""

from __future__ import annotations


class NetworkError(Exception):
    """Base class for all SigmaNet errors."""


class ConstructionError(NetworkError, ValueError):
    """Raised when a network cannot be built from the requested layer sizes."""


class ShapeMismatchError(NetworkError, ValueError):
    """Raised when a vector or matrix does not have the shape a layer expects."""


class DecodeError(NetworkError):
    """Raised when a persisted network cannot be reconstructed.

    ``section`` names the part of the stream that failed: ``"header"`` for the
    layer sizes, ``"weights[i]"`` / ``"biases[i]"`` for a matrix block, or
    ``"trailer"`` for unexpected data after the last block.
    """

    def __init__(self, message: str, *, section: str) -> None:
        super().__init__(f"{section}: {message}")
        self.section = section


class ParseError(DecodeError):
    """Raised when the plain-text format contains invalid tokens or counts."""


__all__ = [
    "NetworkError",
    "ConstructionError",
    "ShapeMismatchError",
    "DecodeError",
    "ParseError",
]
