"""Training presets and config-file handling."""

from __future__ import annotations

import json
import os
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping

DEFAULT_PRESET_ENV = "SIGMANET_PRESET"

_PRESETS: Dict[str, Mapping[str, object]] = {
    "mnist-784-30-10": {
        "model": {"layer_sizes": [784, 30, 10], "seed": 0},
        "train": {"lr": 0.1, "epochs": 1, "seed": 0},
    },
    "xor-2-3-1": {
        "model": {"layer_sizes": [2, 3, 1], "seed": 0},
        "train": {"lr": 0.5, "epochs": 500, "seed": 0},
    },
    "tiny-1-1": {
        "model": {"layer_sizes": [1, 1], "seed": 0},
        "train": {"lr": 0.1, "epochs": 1, "seed": 0},
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def default_preset() -> str:
    """Preset used when none is requested, overridable via ``SIGMANET_PRESET``."""

    return os.environ.get(DEFAULT_PRESET_ENV, "mnist-784-30-10")


def read_config_file(path: str | Path) -> Dict[str, object]:
    """Load a JSON or YAML config file that must decode to a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return dict(data)


def merge(base: Dict[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Recursively merge ``override`` into ``base`` and return ``base``."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge(dict(base[key]), value)  # type: ignore[arg-type]
        else:
            base[key] = deepcopy(value)
    return base


def resolve_config(
    preset: str | None = None,
    path: str | Path | None = None,
    overrides: Mapping[str, object] | None = None,
) -> Dict[str, object]:
    """Layer a preset, an optional config file and explicit overrides, in that order."""

    config = load_preset(preset or default_preset())
    if path is not None:
        config = merge(config, read_config_file(path))
    if overrides:
        config = merge(config, overrides)
    return config


__all__ = [
    "DEFAULT_PRESET_ENV",
    "default_preset",
    "load_preset",
    "merge",
    "presets",
    "read_config_file",
    "resolve_config",
]
