import numpy as np
import pytest

from sigmanet.data.samples import load_samples, samples_from_arrays, shuffle_samples


def test_shuffle_samples_is_a_seeded_permutation():
    items = list(range(10))
    first = shuffle_samples(items, seed=3)
    assert first == shuffle_samples(items, seed=3)
    assert sorted(first) == items
    assert items == list(range(10))
    assert shuffle_samples([], seed=0) == []


def test_samples_from_labels_one_hot_and_scale_pixels():
    inputs = np.array([[[0, 255], [51, 0]], [[255, 255], [0, 0]]], dtype=np.uint8)
    samples = samples_from_arrays(inputs, labels=np.array([2, 0]), num_classes=3)
    assert len(samples) == 2
    x, t = samples[0]
    assert x.shape == (4, 1)
    np.testing.assert_allclose(x.ravel(), [0.0, 1.0, 0.2, 0.0])
    np.testing.assert_array_equal(t.ravel(), [0.0, 0.0, 1.0])


def test_samples_from_arrays_infers_class_count():
    samples = samples_from_arrays(np.zeros((3, 2)), labels=[0, 1, 3])
    assert samples[0][1].shape == (4, 1)


def test_samples_from_targets_are_used_as_is():
    targets = np.array([[0.25, 0.75], [1.0, 0.0]])
    samples = samples_from_arrays(np.array([[0.1, 0.2], [0.3, 0.4]]), targets=targets)
    np.testing.assert_array_equal(samples[0][1], [[0.25], [0.75]])
    np.testing.assert_array_equal(samples[1][0], [[0.3], [0.4]])


def test_samples_from_arrays_validation():
    with pytest.raises(ValueError):
        samples_from_arrays(np.zeros((2, 2)))
    with pytest.raises(ValueError):
        samples_from_arrays(np.zeros((2, 2)), labels=[0, 1, 1])
    with pytest.raises(ValueError):
        samples_from_arrays(np.zeros((2, 2)), labels=[0, 4], num_classes=3)


def test_load_samples_from_npz(tmp_path):
    path = tmp_path / "data.npz"
    np.savez(path, inputs=np.array([[0.0, 1.0], [1.0, 0.0]]), labels=np.array([1, 0]))
    samples = load_samples(path)
    assert len(samples) == 2
    np.testing.assert_array_equal(samples[0][1], [[0.0], [1.0]])

    missing = tmp_path / "missing.npz"
    np.savez(missing, labels=np.array([0]))
    with pytest.raises(KeyError):
        load_samples(missing)
