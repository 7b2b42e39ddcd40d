"""Training loops and evaluation helpers."""

from .metrics import argmax, evaluate, to_categorical
from .trainer import train, train_epochs

__all__ = ["argmax", "evaluate", "to_categorical", "train", "train_epochs"]
