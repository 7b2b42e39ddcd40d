"""Reporting utilities for SigmaNet."""

from .metrics import CsvSink, JsonlSink
from .plots import PlotAdapter, save_loss_curve

__all__ = ["JsonlSink", "CsvSink", "PlotAdapter", "save_loss_curve"]
