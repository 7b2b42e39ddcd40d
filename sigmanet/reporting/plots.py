"""Loss-curve plotting for training runs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Sequence


def save_loss_curve(losses: Sequence[float], path: Path) -> Path:
    """Render ``losses`` against their sample index into ``path`` with the Agg backend."""

    import matplotlib

    matplotlib.use("Agg", force=True)
    from matplotlib import pyplot

    figure, axes = pyplot.subplots()
    try:
        axes.plot(range(1, len(losses) + 1), list(losses))
        axes.set(xlabel="Sample", ylabel="Running mean loss", title="SigmaNet loss")
        figure.savefig(path)
    finally:
        pyplot.close(figure)
    return path


class PlotAdapter:
    """Training callback that records the running mean loss for :func:`save_loss_curve`.

    Nothing is recorded or written unless ``enable_plots`` is set, and
    matplotlib is only imported by :meth:`close`.
    """

    filename = "loss.png"

    def __init__(self, run_dir: str | Path, enable_plots: bool = False) -> None:
        self.run_dir = Path(run_dir)
        self.enable_plots = enable_plots
        self.losses: List[float] = []

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        # step restarts every epoch; the curve is indexed by call order
        if self.enable_plots:
            self.losses.append(float(metrics.get("mean_loss", metrics.get("loss", 0.0))))

    __call__ = on_step

    def close(self) -> Path | None:
        if not (self.enable_plots and self.losses):
            return None
        self.run_dir.mkdir(parents=True, exist_ok=True)
        return save_loss_curve(self.losses, self.run_dir / self.filename)


__all__ = ["PlotAdapter", "save_loss_curve"]
