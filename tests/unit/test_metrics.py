import numpy as np
import pytest

from sigmanet.core.matrix import column_vector
from sigmanet.core.types import NetworkModel
from sigmanet.training.metrics import argmax, evaluate, to_categorical


def test_argmax_picks_largest():
    assert argmax([0.1, 0.9, 0.3]) == 1
    assert argmax(column_vector([0.2, 0.1, 0.7])) == 2


def test_argmax_ties_resolve_to_first():
    assert argmax([0.5, 0.5]) == 0
    assert argmax([0.1, 0.8, 0.8, 0.2]) == 1


def test_argmax_empty():
    with pytest.raises(ValueError):
        argmax([])


def test_to_categorical():
    np.testing.assert_array_equal(to_categorical(2, 5), [0.0, 0.0, 1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        to_categorical(5, 5)
    with pytest.raises(ValueError):
        to_categorical(-1, 3)


def test_evaluate_counts_matching_classes():
    # zero weights with these biases always predict class 0
    model = NetworkModel(
        layer_sizes=(2, 2),
        weights=(np.zeros((2, 2)),),
        biases=(column_vector([1.0, -1.0]),),
    )
    samples = [
        (column_vector([0.3, 0.1]), column_vector([1.0, 0.0])),
        (column_vector([0.9, 0.4]), column_vector([0.0, 1.0])),
        (column_vector([0.5, 0.5]), column_vector([1.0, 0.0])),
        (column_vector([0.0, 1.0]), column_vector([0.0, 1.0])),
    ]
    assert evaluate(model, samples) == pytest.approx(0.5)
    assert evaluate(model, []) == 0.0
