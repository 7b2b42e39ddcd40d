"""Helpers that turn arrays into ``(input, target)`` training samples."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, TypeVar

import numpy as np

from ..core.types import Sample

T = TypeVar("T")


def shuffle_samples(samples: Sequence[T], seed: int) -> List[T]:
    """Return ``samples`` in a permutation that depends only on ``seed``."""

    rng = np.random.default_rng(seed)
    order = rng.permutation(len(samples))
    return [samples[int(idx)] for idx in order]


def _prepare_inputs(inputs: np.ndarray) -> np.ndarray:
    inputs = np.asarray(inputs, dtype=np.float64)
    if inputs.size and inputs.max() > 1:
        inputs = inputs / 255.0
    return inputs.reshape(inputs.shape[0], -1)


def _prepare_targets(
    labels: np.ndarray | None, targets: np.ndarray | None, num_classes: int | None
) -> np.ndarray:
    if targets is not None:
        targets = np.asarray(targets, dtype=np.float64)
        return targets.reshape(targets.shape[0], -1)
    if labels is None:
        raise ValueError("Either labels or targets must be provided")
    labels = np.asarray(labels).reshape(-1).astype(np.int64)
    if num_classes is None:
        num_classes = int(labels.max()) + 1 if labels.size else 0
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise ValueError(
            f"labels must lie in [0, {num_classes}), got {labels.min()}..{labels.max()}"
        )
    eye = np.eye(num_classes, dtype=np.float64)
    return eye[labels]


def samples_from_arrays(
    inputs: np.ndarray,
    labels: np.ndarray | None = None,
    targets: np.ndarray | None = None,
    num_classes: int | None = None,
) -> List[Sample]:
    """Pair each row of ``inputs`` with a target column.

    Integer ``labels`` are one-hot encoded over ``num_classes`` (inferred from
    the largest label when omitted); explicit ``targets`` are used as-is. Raw
    pixel intensities above 1 are scaled into ``[0, 1]``.
    """

    features = _prepare_inputs(inputs)
    target_rows = _prepare_targets(labels, targets, num_classes)
    if features.shape[0] != target_rows.shape[0]:
        raise ValueError(
            f"Got {features.shape[0]} inputs but {target_rows.shape[0]} targets"
        )
    return [
        (row.reshape(-1, 1), target.reshape(-1, 1))
        for row, target in zip(features, target_rows)
    ]


def load_samples(path: str | Path, num_classes: int | None = None) -> List[Sample]:
    """Read samples from an ``.npz`` archive with ``inputs`` and ``targets`` or ``labels``."""

    with np.load(Path(path)) as data:
        if "inputs" not in data:
            raise KeyError(f"{path} has no 'inputs' array (found {sorted(data.files)})")
        inputs = data["inputs"]
        targets = data["targets"] if "targets" in data else None
        labels = data["labels"] if "labels" in data else None
    return samples_from_arrays(inputs, labels=labels, targets=targets, num_classes=num_classes)


__all__ = ["shuffle_samples", "samples_from_arrays", "load_samples"]
