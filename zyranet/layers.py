"""Base layer interface and the ReLU activation layer.

Tensors are two-dimensional ``float32`` arrays of shape ``(features, batch)``:
each column is one sample.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

__all__ = ["DimensionMismatch", "Layer", "ReLULayer", "as_batch"]


class DimensionMismatch(ValueError):
    """Raised when a tensor's feature dimension differs from the expected one."""

    def __init__(self, expected: int, actual: int, context: str) -> None:
        super().__init__(
            f"{context}: dimension mismatch. Expected: {expected}, got: {actual}"
        )
        self.expected = expected
        self.actual = actual
        self.context = context


def as_batch(values, expected_rows: int, context: str) -> np.ndarray:
    """Return ``values`` as a float32 matrix, checking its number of rows."""
    matrix = np.asarray(values, dtype=np.float32)
    if matrix.ndim != 2:
        raise ValueError(
            f"{context}: expected a 2-D array of shape (features, batch), "
            f"got {matrix.ndim} dimension(s)"
        )
    if matrix.shape[0] != expected_rows:
        raise DimensionMismatch(expected_rows, matrix.shape[0], context)
    return matrix


class Layer(ABC):
    """Abstract base class of every network layer."""

    layer_type = "Layer"

    def __init__(self, name: str, input_size: int, output_size: int) -> None:
        if input_size <= 0:
            raise ValueError(f"Layer: inputSize must be positive, got {input_size}")
        if output_size <= 0:
            raise ValueError(f"Layer: outputSize must be positive, got {output_size}")
        if not name:
            raise ValueError("Layer: name cannot be empty")
        self.name = name
        self.input_size = input_size
        self.output_size = output_size
        self.training = True

    @abstractmethod
    def forward(self, input) -> np.ndarray:
        """Compute the layer's output for a batch."""

    @abstractmethod
    def backward(self, grad_output, learning_rate) -> np.ndarray:
        """Propagate ``grad_output`` back and return the gradient of the input."""

    @abstractmethod
    def parameters(self) -> list[np.ndarray]:
        """Return the learnable parameters."""

    @abstractmethod
    def gradients(self) -> list[np.ndarray]:
        """Return the gradients of the learnable parameters."""

    def set_training(self, training: bool) -> None:
        """Switch between training and evaluation mode."""
        self.training = bool(training)

    @abstractmethod
    def update_parameter(self, index: int, update) -> None:
        """Subtract ``update`` from the parameter at ``index``."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"input_size={self.input_size}, output_size={self.output_size})"
        )


class ReLULayer(Layer):
    """Rectified linear unit: ``f(x) = max(0, x)``."""

    layer_type = "ReLULayer"

    def __init__(self, name: str, input_size: int, output_size: int) -> None:
        super().__init__(name, input_size, output_size)
        if input_size != output_size:
            raise ValueError(
                "ReLULayer: Input and output sizes must be equal, got input: "
                f"{input_size}, output: {output_size}"
            )
        self._last_input: np.ndarray | None = None

    def forward(self, input) -> np.ndarray:
        x = as_batch(input, self.input_size, "ReLULayer::forward")
        self._last_input = x
        return np.maximum(x, np.float32(0.0))

    def backward(self, grad_output, learning_rate) -> np.ndarray:
        grad = as_batch(grad_output, self.output_size, "ReLULayer::backward")
        if self._last_input is None:
            raise RuntimeError("ReLULayer::backward: forward must be called first")
        if grad.shape != self._last_input.shape:
            raise ValueError(
                "ReLULayer::backward: gradient shape "
                f"{grad.shape} does not match input shape {self._last_input.shape}"
            )
        return grad * (self._last_input > 0.0).astype(np.float32)

    def parameters(self) -> list[np.ndarray]:
        return []

    def gradients(self) -> list[np.ndarray]:
        return []

    def set_training(self, training: bool) -> None:
        self.training = bool(training)

    def update_parameter(self, index: int, update) -> None:
        if index > 0:
            raise IndexError(
                "ReLULayer::updateParameter: Parameter index out of range, "
                "ReLU has no parameters"
            )