"""Human-readable encoding of a network as one bracketed list of numbers.

The list holds the layer count, the layer sizes, every weight entry (layer by
layer, row-major) and finally every bias entry::

    [3.0,2.0,2.0,1.0,0.25,-0.5,...]

Numbers pass through a decimal text form, so this format is not promised to
be bit-exact: layer sizes survive unchanged but parameters are only expected
to agree within a small tolerance (about 1e-5 when ``precision`` is used).
Use :mod:`sigmanet.serialization.binary` when exact floats matter.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import accumulate
from typing import List, Sequence, Tuple

import numpy as np

from ..core.errors import ConstructionError, ParseError
from ..core.types import NetworkModel, check_layer_sizes


def _format(value: float, precision: int | None) -> str:
    if precision is None:
        return repr(float(value))
    return f"{float(value):.{precision}g}"


def encode(model: NetworkModel, precision: int | None = None) -> str:
    """Return ``model`` as a single ``[n0,n1,...]`` line.

    ``precision`` limits every number to that many significant digits; the
    default writes the shortest text that reads back to the same double.
    """

    numbers: List[float] = [float(model.depth)]
    numbers.extend(float(size) for size in model.layer_sizes)
    for W in model.weights:
        numbers.extend(W.ravel().tolist())
    for b in model.biases:
        numbers.extend(b.ravel().tolist())
    return "[" + ",".join(_format(value, precision) for value in numbers) + "]"


@dataclass(frozen=True)
class _Block:
    section: str
    start: int
    shape: Tuple[int, int]

    @property
    def count(self) -> int:
        return self.shape[0] * self.shape[1]


def _offset_table(sizes: Sequence[int], base: int) -> List[_Block]:
    """Locate every matrix in the flat number list once, from the layer sizes."""

    shapes = [("weights", (sizes[i + 1], sizes[i])) for i in range(len(sizes) - 1)]
    shapes += [("biases", (size, 1)) for size in sizes[1:]]
    counts = [rows * cols for _, (rows, cols) in shapes]
    starts = accumulate(counts[:-1], initial=base)
    blocks: List[_Block] = []
    for position, ((name, shape), start) in enumerate(zip(shapes, starts)):
        layer = position if name == "weights" else position - (len(sizes) - 1)
        blocks.append(_Block(section=f"{name}[{layer}]", start=int(start), shape=shape))
    return blocks


def _number(tokens: Sequence[str], index: int, section: str) -> float:
    try:
        return float(tokens[index])
    except ValueError:
        raise ParseError(
            f"token {index} ({tokens[index]!r}) is not a number", section=section
        ) from None


def _size(tokens: Sequence[str], index: int) -> int:
    value = _number(tokens, index, "header")
    if not value.is_integer():
        raise ParseError(f"token {index} ({tokens[index]!r}) is not an integer", section="header")
    return int(value)


def _tokenize(text: str) -> List[str]:
    body = text.strip()
    if body.startswith("[") or body.endswith("]"):
        if not (body.startswith("[") and body.endswith("]")):
            raise ParseError("unbalanced brackets", section="header")
        body = body[1:-1]
    if not body.strip():
        raise ParseError("no numbers found", section="header")
    return [token.strip() for token in body.split(",")]


def decode(text: str) -> NetworkModel:
    """Parse :func:`encode` output back into a model."""

    tokens = _tokenize(text)
    depth = _size(tokens, 0)
    if depth < 0 or len(tokens) < 1 + depth:
        raise ParseError(
            f"layer count {depth} does not fit in {len(tokens) - 1} remaining numbers",
            section="header",
        )
    try:
        sizes = check_layer_sizes([_size(tokens, 1 + i) for i in range(depth)])
    except ConstructionError as exc:
        raise ParseError(str(exc), section="header") from exc
    widest = max(sizes)
    if widest > len(tokens):
        # every unit owns at least one weight or bias value
        raise ParseError(
            f"layer size {widest} cannot fit in {len(tokens)} numbers", section="header"
        )

    blocks = _offset_table(sizes, base=1 + depth)
    expected = blocks[-1].start + blocks[-1].count
    if len(tokens) > expected:
        raise ParseError(
            f"expected {expected} numbers, found {len(tokens)}", section="trailer"
        )

    matrices = []
    for block in blocks:
        end = block.start + block.count
        if len(tokens) < end:
            raise ParseError(
                f"expected {expected} numbers, found {len(tokens)}", section=block.section
            )
        values = [_number(tokens, idx, block.section) for idx in range(block.start, end)]
        matrices.append(np.asarray(values, dtype=np.float64).reshape(block.shape))

    layers = len(sizes) - 1
    return NetworkModel(
        layer_sizes=sizes,
        weights=tuple(matrices[:layers]),
        biases=tuple(matrices[layers:]),
    )


__all__ = ["encode", "decode"]
