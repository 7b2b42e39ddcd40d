"""Per-step metric sinks used as training callbacks."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Mapping


class JsonlSink:
    """Append-only JSONL writer for training metrics."""

    def __init__(self, path: str | Path, *, seed: int | None = None) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.seed = seed

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        record = {"step": int(step), "seed": self.seed}
        record.update({k: float(v) for k, v in metrics.items() if isinstance(v, (int, float))})
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_step


class CsvSink:
    """Write metrics to CSV with a stable, sorted column order."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        row = {"step": int(step)}
        row.update({k: float(v) for k, v in metrics.items() if isinstance(v, (int, float))})
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=sorted(row.keys()))
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(row)

    __call__ = on_step


__all__ = ["JsonlSink", "CsvSink"]
