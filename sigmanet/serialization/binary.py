"""Exact binary encoding of a :class:`~sigmanet.core.types.NetworkModel`.

Layout (all fields big-endian)::

    int64 n, int64 layer_sizes[n]
    int64 m, m x (int64 k, float64 values[k])    # weights, row-major
    int64 m, m x (int64 k, float64 values[k])    # biases

The stream carries its own layer sizes, so a file alone rebuilds the model,
and floats are stored as raw IEEE-754 doubles so a round trip is bit-exact.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from ..core.errors import ConstructionError, DecodeError
from ..core.types import Array, NetworkModel, check_layer_sizes

_INT = np.dtype(">i8")
_FLOAT = np.dtype(">f8")


def _int_list(values: Sequence[int]) -> bytes:
    return np.asarray([len(values), *values], dtype=_INT).tobytes()


def _matrix_list(matrices: Sequence[Array]) -> bytes:
    chunks = [np.asarray([len(matrices)], dtype=_INT).tobytes()]
    for matrix in matrices:
        chunks.append(np.asarray([matrix.size], dtype=_INT).tobytes())
        chunks.append(np.ascontiguousarray(matrix, dtype=_FLOAT).tobytes())
    return b"".join(chunks)


def encode(model: NetworkModel) -> bytes:
    """Return the binary representation of ``model``."""

    return b"".join(
        [
            _int_list(model.layer_sizes),
            _matrix_list(model.weights),
            _matrix_list(model.biases),
        ]
    )


class _Reader:
    """Cursor over a byte buffer that reports failures per section."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, dtype: np.dtype, count: int, section: str) -> np.ndarray:
        needed = dtype.itemsize * count
        if needed > self.remaining:
            raise DecodeError(
                f"truncated: needed {needed} bytes at offset {self._offset}, "
                f"{self.remaining} left",
                section=section,
            )
        values = np.frombuffer(self._data, dtype=dtype, count=count, offset=self._offset)
        self._offset += needed
        return values

    def int64(self, section: str) -> int:
        return int(self._take(_INT, 1, section)[0])

    def float64s(self, count: int, section: str) -> Array:
        return self._take(_FLOAT, count, section).astype(np.float64)


def _read_matrices(
    reader: _Reader, name: str, shapes: Sequence[Tuple[int, int]]
) -> List[Array]:
    count = reader.int64(name)
    if count != len(shapes):
        raise DecodeError(f"expected {len(shapes)} matrices, found {count}", section=name)
    matrices: List[Array] = []
    for idx, (rows, cols) in enumerate(shapes):
        section = f"{name}[{idx}]"
        size = reader.int64(section)
        if size != rows * cols:
            raise DecodeError(
                f"expected {rows * cols} values for shape {(rows, cols)}, found {size}",
                section=section,
            )
        matrices.append(reader.float64s(size, section).reshape(rows, cols))
    return matrices


def decode(data: bytes) -> NetworkModel:
    """Rebuild a model from :func:`encode` output."""

    reader = _Reader(data)
    depth = reader.int64("header")
    if depth < 0 or depth * _INT.itemsize > reader.remaining:
        raise DecodeError(f"implausible layer count {depth}", section="header")
    raw_sizes = [reader.int64("header") for _ in range(depth)]
    try:
        sizes = check_layer_sizes(raw_sizes)
    except ConstructionError as exc:
        raise DecodeError(str(exc), section="header") from exc

    weights = _read_matrices(
        reader, "weights", [(sizes[i + 1], sizes[i]) for i in range(len(sizes) - 1)]
    )
    biases = _read_matrices(reader, "biases", [(size, 1) for size in sizes[1:]])
    if reader.remaining:
        raise DecodeError(f"{reader.remaining} unexpected trailing bytes", section="trailer")
    return NetworkModel(layer_sizes=sizes, weights=tuple(weights), biases=tuple(biases))


__all__ = ["encode", "decode"]
