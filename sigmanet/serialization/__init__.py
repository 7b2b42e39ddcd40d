"""Persist networks to disk in the binary or plain-text format."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import ParseError
from ..core.types import NetworkModel
from . import binary, plain

FORMATS = ("binary", "plain")
PLAIN_SUFFIXES = {".txt"}


def serialize(model: NetworkModel, path: str | Path) -> None:
    """Write ``model`` to ``path`` in the exact binary format."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(binary.encode(model))


def deserialize(path: str | Path) -> NetworkModel:
    return binary.decode(Path(path).read_bytes())


def serialize_plain(model: NetworkModel, path: str | Path, precision: int | None = None) -> None:
    """Write ``model`` to ``path`` as one line of comma-separated numbers."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(plain.encode(model, precision=precision), encoding="utf-8")


def deserialize_plain(path: str | Path) -> NetworkModel:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"{path} is not UTF-8 text", section="header") from exc
    return plain.decode(text)


def resolve_format(path: str | Path, fmt: str | None = None) -> str:
    """Return ``fmt`` if given, otherwise infer it from the file suffix."""

    if fmt is None:
        return "plain" if Path(path).suffix.lower() in PLAIN_SUFFIXES else "binary"
    if fmt not in FORMATS:
        raise ValueError(f"Unknown model format {fmt!r}; expected one of {FORMATS}")
    return fmt


def save(model: NetworkModel, path: str | Path, fmt: str | None = None) -> str:
    """Write ``model`` using :func:`resolve_format` and return the path written."""

    if resolve_format(path, fmt) == "plain":
        serialize_plain(model, path)
    else:
        serialize(model, path)
    return str(path)


def load(path: str | Path, fmt: str | None = None) -> NetworkModel:
    if resolve_format(path, fmt) == "plain":
        return deserialize_plain(path)
    return deserialize(path)


__all__ = [
    "FORMATS",
    "binary",
    "plain",
    "serialize",
    "deserialize",
    "serialize_plain",
    "deserialize_plain",
    "resolve_format",
    "save",
    "load",
]
