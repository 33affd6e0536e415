import numpy as np
import pytest

from zyranet.layers import DimensionMismatch
from zyranet.pooling import MaxPoolingLayer


def test_sizes_from_source_architecture():
    first = MaxPoolingLayer("pool_initial", 16, 28, 28, 2)
    assert first.input_size == 16 * 28 * 28
    assert first.output_size == 16 * 14 * 14
    final = MaxPoolingLayer("pool_final", 64, 7, 7, 2)
    assert final.output_dimensions == (3, 3)
    assert final.output_size == 576


@pytest.mark.parametrize(
    "args",
    [
        (0, 4, 4, 2, 2),
        (1, 0, 4, 2, 2),
        (1, 4, 4, 0, 2),
        (1, 4, 4, 2, 0),
        (1, 2, 2, 3, 1),
    ],
)
def test_invalid_construction(args):
    with pytest.raises(ValueError):
        MaxPoolingLayer("pool", *args)


def test_forward_worked_example():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    x = np.arange(16, dtype=np.float32).reshape(16, 1)
    out = layer.forward(x)
    np.testing.assert_array_equal(out[:, 0], [5.0, 7.0, 13.0, 15.0])


def test_forward_is_window_maximum():
    rng = np.random.default_rng(0)
    layer = MaxPoolingLayer("pool", 2, 5, 5, 3, 1)
    x = rng.standard_normal((2 * 5 * 5, 3)).astype(np.float32)
    out = layer.forward(x)
    assert out.shape == (2 * 3 * 3, 3)
    images = x.reshape(2, 5, 5, 3)
    pooled = out.reshape(2, 3, 3, 3)
    for c in range(2):
        for oh in range(3):
            for ow in range(3):
                window = images[c, oh:oh + 3, ow:ow + 3, :]
                np.testing.assert_array_equal(
                    pooled[c, oh, ow], window.max(axis=(0, 1))
                )


def test_backward_routes_to_max_positions():
    rng = np.random.default_rng(1)
    layer = MaxPoolingLayer("pool", 3, 6, 6)
    x = rng.standard_normal((3 * 36, 2)).astype(np.float32)
    out = layer.forward(x)
    grad = rng.standard_normal(out.shape).astype(np.float32)
    back = layer.backward(grad, 0.1)
    assert back.shape == x.shape
    np.testing.assert_allclose(back.sum(axis=0), grad.sum(axis=0), rtol=1e-5)
    nonzero = back != 0
    assert nonzero.sum() == out.size
    for b in range(2):
        assert set(x[nonzero[:, b], b]) == set(out[:, b])


def test_ties_go_to_first_window_element():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    layer.forward(np.ones((16, 1), dtype=np.float32))
    back = layer.backward(np.ones((4, 1), dtype=np.float32), 0.1)
    image = back.reshape(4, 4)
    assert image[0, 0] == 1 and image[0, 2] == 1
    assert image[2, 0] == 1 and image[2, 2] == 1
    assert back.sum() == 4


def test_forward_dimension_mismatch():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    with pytest.raises(DimensionMismatch):
        layer.forward(np.zeros((15, 1)))


def test_backward_dimension_mismatch():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    layer.forward(np.zeros((16, 1)))
    with pytest.raises(DimensionMismatch):
        layer.backward(np.zeros((5, 1)), 0.1)


def test_backward_before_forward():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    with pytest.raises(RuntimeError):
        layer.backward(np.zeros((4, 1)), 0.1)


def test_no_parameters_and_noop_update():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    x = np.arange(16, dtype=np.float32).reshape(16, 1)
    before = layer.forward(x)
    layer.update_parameter(0, np.ones((1, 1)))
    assert layer.parameters() == []
    assert layer.gradients() == []
    np.testing.assert_array_equal(layer.forward(x), before)


def test_set_training():
    layer = MaxPoolingLayer("pool", 1, 4, 4)
    layer.set_training(False)
    assert layer.training is False
    assert layer.layer_type == "MaxPoolingLayer"