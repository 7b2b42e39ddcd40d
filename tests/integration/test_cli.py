import json

import numpy as np
import pytest

from cli.main import main
from sigmanet.serialization import load


def _last_json(capsys):
    lines = capsys.readouterr().out.strip().splitlines()
    return json.loads(lines[-1])


@pytest.fixture
def dataset(tmp_path):
    rng = np.random.default_rng(0)
    inputs = rng.uniform(0.0, 1.0, size=(8, 2))
    labels = (inputs[:, 0] > inputs[:, 1]).astype(int)
    path = tmp_path / "data.npz"
    np.savez(path, inputs=inputs, labels=labels)
    return path


def test_list_presets(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-presets"])
    assert excinfo.value.code == 0
    assert "xor-2-3-1" in capsys.readouterr().out.splitlines()


def test_missing_command_exits():
    with pytest.raises(SystemExit):
        main([])


def test_init_from_preset(tmp_path, capsys):
    out = tmp_path / "tiny.bin"
    main(["init", "--preset", "tiny-1-1", "--out", str(out)])
    payload = _last_json(capsys)
    assert payload == {"model": str(out), "layer_sizes": [1, 1], "seed": 0}
    assert load(out).layer_sizes == (1, 1)


def test_init_train_predict_evaluate_convert(tmp_path, dataset, capsys):
    model_path = tmp_path / "model.bin"
    main(["init", "--layers", "2", "3", "2", "--seed", "1", "--out", str(model_path)])
    assert _last_json(capsys)["layer_sizes"] == [2, 3, 2]
    initial = load(model_path)

    metrics_dir = tmp_path / "metrics"
    main(
        [
            "train",
            "--model",
            str(model_path),
            "--data",
            str(dataset),
            "--lr",
            "0.5",
            "--epochs",
            "2",
            "--metrics-dir",
            str(metrics_dir),
        ]
    )
    out = capsys.readouterr().out
    assert "=== SigmaNet run ===" in out
    assert "1: " in out
    payload = json.loads(out.strip().splitlines()[-1])
    assert payload["samples"] == 8
    assert payload["epochs"] == 2
    assert 0.0 <= payload["accuracy"] <= 1.0
    assert load(model_path) != initial
    assert len((metrics_dir / "metrics.jsonl").read_text().splitlines()) == 16

    main(["predict", "--model", str(model_path), "--values", "0.9", "0.1"])
    prediction = _last_json(capsys)
    assert prediction["label"] in (0, 1)
    assert len(prediction["output"]) == 2

    main(["evaluate", "--model", str(model_path), "--data", str(dataset)])
    assert _last_json(capsys)["samples"] == 8

    text_path = tmp_path / "model.txt"
    main(["convert", "--model", str(model_path), "--out", str(text_path), "--precision", "8"])
    assert _last_json(capsys)["layer_sizes"] == [2, 3, 2]
    converted = load(text_path)
    for a, b in zip(converted.weights, load(model_path).weights):
        np.testing.assert_allclose(a, b, atol=1e-5)


def test_train_quiet_writes_to_separate_output(tmp_path, dataset, capsys):
    model_path = tmp_path / "model.bin"
    trained_path = tmp_path / "trained.txt"
    main(["init", "--layers", "2", "2", "--out", str(model_path)])
    capsys.readouterr()
    main(
        [
            "train",
            "--model",
            str(model_path),
            "--data",
            str(dataset),
            "--epochs",
            "1",
            "--out",
            str(trained_path),
            "--quiet",
        ]
    )
    out = capsys.readouterr().out
    assert "1: " not in out
    assert trained_path.read_text().startswith("[2.0,2.0,2.0,")


def test_shape_errors_exit_with_message(tmp_path, dataset):
    model_path = tmp_path / "model.bin"
    main(["init", "--layers", "3", "2", "--out", str(model_path)])
    with pytest.raises(SystemExit) as excinfo:
        main(["evaluate", "--model", str(model_path), "--data", str(dataset)])
    assert str(excinfo.value.code).startswith("error: ")


def test_corrupt_model_exits_with_section(tmp_path):
    model_path = tmp_path / "model.bin"
    model_path.write_bytes(b"\x00\x00")
    with pytest.raises(SystemExit) as excinfo:
        main(["predict", "--model", str(model_path), "--values", "0.1"])
    assert "header" in str(excinfo.value.code)


def test_train_reads_and_writes_with_explicit_format(tmp_path, dataset, capsys):
    model_path = tmp_path / "model.txt"
    main(["init", "--layers", "2", "2", "--out", str(model_path), "--format", "binary"])
    main(
        [
            "train",
            "--model",
            str(model_path),
            "--data",
            str(dataset),
            "--epochs",
            "1",
            "--format",
            "binary",
            "--quiet",
        ]
    )
    assert _last_json(capsys)["samples"] == 8
    assert load(model_path, "binary").layer_sizes == (2, 2)
