"""Sample preparation helpers for SigmaNet."""

from .samples import load_samples, samples_from_arrays, shuffle_samples

__all__ = ["load_samples", "samples_from_arrays", "shuffle_samples"]
