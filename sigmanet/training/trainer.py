"""Sample-by-sample SGD training loops."""

from __future__ import annotations

import sys
from typing import Mapping, Sequence, TextIO

from ..core.backprop import backprop
from ..core.types import NetworkModel, Sample
from ..data.samples import shuffle_samples


def train(
    model: NetworkModel,
    samples: Sequence[Sample],
    learning_rate: float,
    *,
    stream: TextIO | None = None,
    callbacks: Sequence[object] = (),
) -> NetworkModel:
    """Fold one backpropagation step over each ``(input, target)`` pair.

    After every sample a ``"<index>: <running mean loss>"`` line is written to
    ``stream`` (stdout by default) and every callback receives the per-sample
    and running mean loss. An empty ``samples`` returns ``model`` untouched.
    """

    out = stream if stream is not None else sys.stdout
    current = model
    total_error = 0.0
    total_iterations = 0
    for inputs, target in samples:
        result = backprop(current, inputs, target, learning_rate, total_error, total_iterations)
        current = result.model
        total_error = result.total_error
        total_iterations = result.total_iterations
        print(f"{total_iterations}: {result.mean_error}", file=out)
        metrics = {"loss": result.sample_error, "mean_loss": result.mean_error}
        _emit_step(callbacks, total_iterations, metrics)
    return current


def train_epochs(
    model: NetworkModel,
    samples: Sequence[Sample],
    learning_rate: float,
    epochs: int,
    *,
    seed: int = 0,
    stream: TextIO | None = None,
    callbacks: Sequence[object] = (),
) -> NetworkModel:
    """Run :func:`train` ``epochs`` times, reshuffling with ``seed + epoch`` each pass."""

    if epochs < 0:
        raise ValueError(f"epochs must be non-negative, got {epochs}")
    current = model
    for epoch in range(epochs):
        order = shuffle_samples(samples, seed + epoch)
        current = train(current, order, learning_rate, stream=stream, callbacks=callbacks)
    return current


def _emit_step(callbacks: Sequence[object], step: int, metrics: Mapping[str, float]) -> None:
    for callback in callbacks:
        if hasattr(callback, "on_step"):
            callback.on_step(step, metrics)  # type: ignore[attr-defined]
        elif callable(callback):
            callback(step, metrics)


__all__ = ["train", "train_epochs"]
