"""Command line entry point for SigmaNet networks."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import numpy as np

from sigmanet import config as sn_config
from sigmanet.core.errors import NetworkError
from sigmanet.core.matrix import column_vector
from sigmanet.core.network import create_network, predict
from sigmanet.core.types import NetworkModel
from sigmanet.data.samples import load_samples
from sigmanet.reporting.metrics import CsvSink, JsonlSink
from sigmanet.reporting.plots import PlotAdapter
from sigmanet.serialization import FORMATS, load, resolve_format, save, serialize_plain
from sigmanet.training.metrics import argmax, evaluate
from sigmanet.training.trainer import train_epochs


def _emit(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, sort_keys=True))


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preset",
        choices=sorted(sn_config.presets().keys()),
        help="Preset configuration (defaults to $SIGMANET_PRESET or mnist-784-30-10)",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument("--seed", type=int, help="Seed for initialisation and shuffling")


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    sub = parser.add_subparsers(dest="command")

    init = sub.add_parser("init", help="Create a randomly initialised network")
    _add_config_args(init)
    init.add_argument("--layers", type=int, nargs="+", help="Layer sizes, input first")
    init.add_argument("--out", type=Path, required=True, help="Where to write the model")
    init.add_argument("--format", choices=FORMATS, help="Model format (default: by suffix)")

    train = sub.add_parser("train", help="Train a saved network on an .npz sample file")
    _add_config_args(train)
    train.add_argument("--model", type=Path, required=True, help="Model to start from")
    train.add_argument("--data", type=Path, required=True, help="Samples (.npz)")
    train.add_argument("--num-classes", type=int, help="Classes for one-hot labels")
    train.add_argument("--lr", type=float, help="Learning rate")
    train.add_argument("--epochs", type=int, help="Passes over the samples")
    train.add_argument("--out", type=Path, help="Where to write the model (default: --model)")
    train.add_argument(
        "--format", choices=FORMATS, help="Format of --model and --out (default: by suffix)"
    )
    train.add_argument("--metrics-dir", type=Path, help="Write per-step metrics here")
    train.add_argument(
        "--enable-plots", action="store_true", help="Write loss.png into --metrics-dir"
    )
    train.add_argument(
        "--quiet", action="store_true", help="Suppress the per-sample progress lines"
    )

    pred = sub.add_parser("predict", help="Run a saved network on one input")
    pred.add_argument("--model", type=Path, required=True)
    source = pred.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=Path, help="Input vector (.npy)")
    source.add_argument("--values", type=float, nargs="+", help="Input vector inline")

    evaluate_cmd = sub.add_parser("evaluate", help="Report accuracy on an .npz sample file")
    evaluate_cmd.add_argument("--model", type=Path, required=True)
    evaluate_cmd.add_argument("--data", type=Path, required=True)
    evaluate_cmd.add_argument("--num-classes", type=int)

    convert = sub.add_parser("convert", help="Rewrite a model in another format")
    convert.add_argument("--model", type=Path, required=True)
    convert.add_argument("--out", type=Path, required=True)
    convert.add_argument("--format", choices=FORMATS, help="Target format (default: by suffix)")
    convert.add_argument(
        "--precision", type=int, help="Significant digits for the plain format"
    )
    return parser.parse_args(argv)


def _train_overrides(args: argparse.Namespace) -> dict:
    train_cfg = {
        key: value
        for key, value in (("lr", args.lr), ("epochs", args.epochs), ("seed", args.seed))
        if value is not None
    }
    return {"train": train_cfg} if train_cfg else {}


def _print_startup_summary(
    *, model: NetworkModel, samples: int, lr: float, epochs: int, seed: int
) -> None:
    print("=== SigmaNet run ===")
    print(f"Layers        : {list(model.layer_sizes)}")
    print(f"Samples       : {samples}")
    print(f"Learning rate : {lr}")
    print(f"Epochs        : {epochs}")
    print(f"Seed          : {seed}")
    print(f"Parameters    : {model.parameter_count()}")
    print("====================")


def _cmd_init(args: argparse.Namespace) -> None:
    cfg = sn_config.resolve_config(args.preset, args.config)
    model_cfg = dict(cfg.get("model", {}))
    layers: Sequence[int] = args.layers or model_cfg.get("layer_sizes", [])
    seed = args.seed if args.seed is not None else model_cfg.get("seed")
    model = create_network([int(size) for size in layers], seed=seed)
    path = save(model, args.out, args.format)
    _emit({"model": path, "layer_sizes": list(model.layer_sizes), "seed": seed})


def _cmd_train(args: argparse.Namespace) -> None:
    cfg = sn_config.resolve_config(args.preset, args.config, _train_overrides(args))
    train_cfg = dict(cfg.get("train", {}))
    lr = float(train_cfg.get("lr", 0.1))
    epochs = int(train_cfg.get("epochs", 1))
    seed = int(train_cfg.get("seed", 0))

    model = load(args.model, args.format)
    samples = load_samples(args.data, num_classes=args.num_classes)
    _print_startup_summary(model=model, samples=len(samples), lr=lr, epochs=epochs, seed=seed)

    callbacks: list = []
    plots = None
    if args.metrics_dir is not None:
        callbacks.append(JsonlSink(args.metrics_dir / "metrics.jsonl", seed=seed))
        callbacks.append(CsvSink(args.metrics_dir / "metrics.csv"))
        plots = PlotAdapter(args.metrics_dir, enable_plots=args.enable_plots)
        callbacks.append(plots)

    if args.quiet:
        with open(os.devnull, "w") as devnull:
            trained = train_epochs(
                model, samples, lr, epochs, seed=seed, stream=devnull, callbacks=callbacks
            )
    else:
        trained = train_epochs(model, samples, lr, epochs, seed=seed, callbacks=callbacks)
    if plots is not None:
        plots.close()

    path = save(trained, args.out or args.model, args.format)
    _emit(
        {
            "model": path,
            "samples": len(samples),
            "epochs": epochs,
            "accuracy": evaluate(trained, samples),
        }
    )


def _cmd_predict(args: argparse.Namespace) -> None:
    model = load(args.model)
    raw = np.load(args.input) if args.input is not None else args.values
    output = predict(model, column_vector(raw))
    _emit({"label": argmax(output), "output": output.ravel().tolist()})


def _cmd_evaluate(args: argparse.Namespace) -> None:
    model = load(args.model)
    samples = load_samples(args.data, num_classes=args.num_classes)
    _emit({"accuracy": evaluate(model, samples), "samples": len(samples)})


def _cmd_convert(args: argparse.Namespace) -> None:
    model = load(args.model)
    if args.precision is not None and resolve_format(args.out, args.format) == "plain":
        serialize_plain(model, args.out, precision=args.precision)
        path = str(args.out)
    else:
        path = save(model, args.out, args.format)
    _emit({"model": path, "layer_sizes": list(model.layer_sizes)})


_COMMANDS = {
    "init": _cmd_init,
    "train": _cmd_train,
    "predict": _cmd_predict,
    "evaluate": _cmd_evaluate,
    "convert": _cmd_convert,
}


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(sn_config.presets().keys()):
            print(name)
        raise SystemExit(0)

    if args.command is None:
        raise SystemExit("No command given; see --help")

    try:
        _COMMANDS[args.command](args)
    except NetworkError as exc:
        raise SystemExit(f"error: {exc}") from None


if __name__ == "__main__":
    main()
