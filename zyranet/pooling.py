"""Max pooling over channel-major image batches."""

from __future__ import annotations

import numpy as np

from zyranet.layers import DimensionMismatch, Layer, as_batch

__all__ = ["MaxPoolingLayer"]


class MaxPoolingLayer(Layer):
    """Down-samples each channel by taking the maximum of every pooling window.

    Inputs are laid out as ``channel * H * W + row * W + col`` per column.
    """

    layer_type = "MaxPoolingLayer"

    def __init__(
        self,
        name: str,
        channels: int,
        input_height: int,
        input_width: int,
        pool_size: int = 2,
        stride: int = 2,
    ) -> None:
        if channels <= 0:
            raise ValueError("MaxPoolingLayer: channels must be positive")
        if input_height <= 0 or input_width <= 0:
            raise ValueError("MaxPoolingLayer: input dimensions must be positive")
        if pool_size <= 0:
            raise ValueError("MaxPoolingLayer: poolSize must be positive")
        if stride <= 0:
            raise ValueError("MaxPoolingLayer: stride must be positive")
        if input_height < pool_size or input_width < pool_size:
            raise ValueError("MaxPoolingLayer: input dimensions must be >= poolSize")

        output_height = (input_height - pool_size) // stride + 1
        output_width = (input_width - pool_size) // stride + 1
        if output_height <= 0 or output_width <= 0:
            raise ValueError(
                "MaxPoolingLayer: output dimensions are invalid with current parameters"
            )

        super().__init__(
            name,
            channels * input_height * input_width,
            channels * output_height * output_width,
        )
        self.channels = channels
        self.input_height = input_height
        self.input_width = input_width
        self.pool_size = pool_size
        self.stride = stride
        self.output_height = output_height
        self.output_width = output_width

        self._window_indices = self._build_window_indices()
        self._max_indices: np.ndarray | None = None

    @property
    def output_dimensions(self) -> tuple[int, int]:
        """The ``(height, width)`` of each pooled channel."""
        return self.output_height, self.output_width

    def _build_window_indices(self) -> np.ndarray:
        """Flat input index of every window element, shape (out_size, pool*pool)."""
        c = np.arange(self.channels)[:, None, None, None, None]
        oh = np.arange(self.output_height)[None, :, None, None, None]
        ow = np.arange(self.output_width)[None, None, :, None, None]
        ph = np.arange(self.pool_size)[None, None, None, :, None]
        pw = np.arange(self.pool_size)[None, None, None, None, :]
        rows = oh * self.stride + ph
        cols = ow * self.stride + pw
        flat = c * (self.input_height * self.input_width) + rows * self.input_width + cols
        return flat.reshape(self.output_size, self.pool_size * self.pool_size)

    def forward(self, input) -> np.ndarray:
        x = as_batch(input, self.input_size, "MaxPoolingLayer::forward")
        windows = x[self._window_indices]  # (out_size, pool*pool, batch)
        # argmax keeps the first maximum in row-major window order.
        best = np.argmax(windows, axis=1)  # (out_size, batch)
        self._max_indices = np.take_along_axis(
            self._window_indices, best, axis=1
        ) if x.shape[1] == best.shape[1] and best.size else self._window_indices[
            :, :0
        ].copy()
        if best.size:
            self._max_indices = self._window_indices[
                np.arange(self.output_size)[:, None], best
            ]
        return np.take_along_axis(windows, best[:, None, :], axis=1)[:, 0, :]

    def backward(self, grad_output, learning_rate) -> np.ndarray:
        grad = as_batch(grad_output, self.output_size, "MaxPoolingLayer::backward")
        if self._max_indices is None:
            raise RuntimeError("MaxPoolingLayer::backward: forward must be called first")
        batch = grad.shape[1]
        if batch != self._max_indices.shape[1]:
            raise DimensionMismatch(
                self._max_indices.shape[1], batch, "MaxPoolingLayer::backward batch"
            )
        grad_input = np.zeros((self.input_size, batch), dtype=np.float32)
        columns = np.broadcast_to(np.arange(batch), self._max_indices.shape)
        np.add.at(grad_input, (self._max_indices, columns), grad)
        return grad_input

    def parameters(self) -> list[np.ndarray]:
        return []

    def gradients(self) -> list[np.ndarray]:
        return []

    def set_training(self, training: bool) -> None:
        self.training = bool(training)

    def update_parameter(self, index: int, update) -> None:
        """Pooling has no parameters, so there is nothing to update."""