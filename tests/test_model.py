import math

import numpy as np
import pytest

from zyranet.conv import ConvolutionalLayer
from zyranet.layers import DimensionMismatch, Layer, ReLULayer
from zyranet.model import L2_LAMBDA, Model


class _Recorder(Layer):
    def __init__(self, name, log):
        super().__init__(name, 2, 2)
        self.log = log

    def forward(self, input):
        self.log.append(("forward", self.name))
        return np.asarray(input, dtype=np.float32) + 1

    def backward(self, grad_output, learning_rate):
        self.log.append(("backward", self.name))
        return np.asarray(grad_output, dtype=np.float32) * 2

    def parameters(self):
        return []

    def gradients(self):
        return []

    def update_parameter(self, index, update):
        pass


def test_empty_model_sizes_are_zero():
    model = Model()
    assert model.input_size == 0
    assert model.output_size == 0


def test_sizes_come_from_first_and_last_layer():
    model = Model()
    model.add_layer(ConvolutionalLayer("c", 1, 4, 4, 2, 3))
    model.add_layer(ReLULayer("r", 8, 8))
    assert model.input_size == 16
    assert model.output_size == 8
    assert len(model) == 2


def test_forward_records_activations():
    model = Model([ReLULayer("a", 2, 2), ReLULayer("b", 2, 2)])
    x = np.array([[-1.0, 2.0], [3.0, -4.0]], dtype=np.float32)
    out = model.forward(x)
    np.testing.assert_array_equal(out, np.maximum(x, 0))
    assert len(model.activations) == 3
    np.testing.assert_array_equal(model.activations[0], x)


def test_layer_order_forward_and_backward():
    log = []
    model = Model([_Recorder("first", log), _Recorder("second", log)])
    out = model.forward(np.zeros((2, 1)))
    grad = model.backward(np.ones((2, 1)), 0.1)
    np.testing.assert_array_equal(out, np.full((2, 1), 2.0))
    np.testing.assert_array_equal(grad, np.full((2, 1), 4.0))
    assert log == [
        ("forward", "first"),
        ("forward", "second"),
        ("backward", "second"),
        ("backward", "first"),
    ]


def test_cross_entropy_without_parameters():
    model = Model([ReLULayer("r", 2, 2)])
    output = np.array([[0.25, 0.9], [0.75, 0.1]], dtype=np.float32)
    target = np.array([[0.0, 1.0], [1.0, 0.0]], dtype=np.float32)
    expected = -(math.log(0.75) + math.log(0.9)) / 2
    assert model.compute_loss(output, target) == pytest.approx(expected, rel=1e-6)


def test_zero_probability_is_floored():
    model = Model()
    output = np.array([[0.0], [1.0]], dtype=np.float32)
    target = np.array([[1.0], [0.0]], dtype=np.float32)
    assert model.compute_loss(output, target) == pytest.approx(-math.log(1e-7), rel=1e-6)


def test_columns_without_class_add_no_data_loss_but_count_in_batch():
    model = Model()
    output = np.array([[0.5, 0.5], [0.5, 0.5]], dtype=np.float32)
    target = np.array([[1.0, 0.0], [0.0, 0.0]], dtype=np.float32)
    assert model.compute_loss(output, target) == pytest.approx(-math.log(0.5) / 2, rel=1e-6)


def test_l2_term_uses_all_parameters():
    model = Model([ConvolutionalLayer("c", 1, 3, 3, 2, 2, rng=np.random.default_rng(0))])
    params = model.parameters()
    assert len(params) == 3
    squares = sum(float(np.sum(p.astype(np.float64) ** 2)) for p in params)
    output = np.full((8, 1), 0.5, dtype=np.float32)
    target = np.zeros((8, 1), dtype=np.float32)
    assert model.compute_loss(output, target) == pytest.approx(L2_LAMBDA * squares, rel=1e-5)


def test_compute_loss_shape_mismatch():
    with pytest.raises(ValueError):
        Model().compute_loss(np.zeros((2, 2)), np.zeros((3, 2)))


def test_train_reduces_loss_on_conv_model():
    rng = np.random.default_rng(5)
    model = Model([ConvolutionalLayer("c", 1, 3, 3, 1, 3, rng=rng)])
    x = rng.normal(size=(9, 4)).astype(np.float32)
    target = np.ones((1, 4), dtype=np.float32)
    first = model.train(x, target, 0.05)
    for _ in range(30):
        last = model.train(x, target, 0.05)
    assert last < first


def test_gradients_collected_after_training():
    model = Model([ConvolutionalLayer("c", 1, 3, 3, 2, 2, rng=np.random.default_rng(2))])
    model.train(np.ones((9, 1)), np.zeros((8, 1)), 0.1)
    grads = model.gradients()
    assert [g.shape for g in grads] == [p.shape for p in model.parameters()]


def test_set_training_propagates():
    layers = [ReLULayer("a", 2, 2), ConvolutionalLayer("c", 1, 2, 1, 1, 1)]
    model = Model(layers)
    model.set_training(False)
    assert [layer.training for layer in layers] == [False, False]
    model.set_training(True)
    assert all(layer.training for layer in layers)


def test_forward_dimension_error_propagates():
    model = Model([ReLULayer("r", 3, 3)])
    with pytest.raises(DimensionMismatch):
        model.forward(np.zeros((2, 1)))