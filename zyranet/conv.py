"""Two-dimensional convolution over channel-major image batches."""

from __future__ import annotations

import math

import numpy as np

from zyranet.layers import DimensionMismatch, Layer, as_batch

__all__ = ["ConvolutionalLayer"]


class ConvolutionalLayer(Layer):
    """Applies ``num_filters`` square learnable filters with stride and zero padding.

    Inputs are laid out as ``channel * H * W + row * W + col`` per column and
    outputs as ``filter * OH * OW + row * OW + col``.
    """

    layer_type = "ConvolutionalLayer"

    def __init__(
        self,
        name: str,
        input_channels: int,
        input_height: int,
        input_width: int,
        num_filters: int,
        filter_size: int,
        stride: int = 1,
        padding: int = 0,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        if input_channels <= 0:
            raise ValueError("ConvolutionalLayer: inputChannels must be positive")
        if input_height <= 0 or input_width <= 0:
            raise ValueError("ConvolutionalLayer: input dimensions must be positive")
        if num_filters <= 0:
            raise ValueError("ConvolutionalLayer: numFilters must be positive")
        if filter_size <= 0:
            raise ValueError("ConvolutionalLayer: filterSize must be positive")
        if stride <= 0:
            raise ValueError("ConvolutionalLayer: stride must be positive")
        if padding < 0:
            raise ValueError("ConvolutionalLayer: padding cannot be negative")

        output_height = (input_height - filter_size + 2 * padding) // stride + 1
        output_width = (input_width - filter_size + 2 * padding) // stride + 1
        if output_height <= 0 or output_width <= 0:
            raise ValueError(
                "ConvolutionalLayer: output dimensions are invalid with current "
                "parameters. Try increasing padding or decreasing stride."
            )

        super().__init__(
            name,
            input_channels * input_height * input_width,
            num_filters * output_height * output_width,
        )
        self.input_channels = input_channels
        self.input_height = input_height
        self.input_width = input_width
        self.num_filters = num_filters
        self.filter_size = filter_size
        self.stride = stride
        self.padding = padding
        self.output_height = output_height
        self.output_width = output_width

        filter_len = filter_size * filter_size * input_channels
        scale = math.sqrt(
            6.0
            / (
                filter_size * filter_size * input_channels
                + filter_size * filter_size * num_filters
            )
        )
        generator = rng if rng is not None else np.random.default_rng()
        self._weights = generator.uniform(
            -scale, scale, size=(num_filters, filter_len)
        ).astype(np.float32)
        self._biases = np.zeros(num_filters, dtype=np.float32)
        self._grad_weights = np.zeros_like(self._weights)
        self._grad_biases = np.zeros_like(self._biases)

        self._indices = self._build_indices()
        self._patches: np.ndarray | None = None

    @property
    def weight_scale(self) -> float:
        """Bound of the uniform Xavier initialisation."""
        k2 = self.filter_size * self.filter_size
        return math.sqrt(6.0 / (k2 * self.input_channels + k2 * self.num_filters))

    def _build_indices(self) -> np.ndarray:
        """Flat input index for every (output position, filter element).

        Positions falling in the zero padding point at one extra zero row
        placed after the last input row.
        """
        oh = np.arange(self.output_height)[:, None, None, None, None]
        ow = np.arange(self.output_width)[None, :, None, None, None]
        c = np.arange(self.input_channels)[None, None, :, None, None]
        fh = np.arange(self.filter_size)[None, None, None, :, None]
        fw = np.arange(self.filter_size)[None, None, None, None, :]
        ih = oh * self.stride + fh - self.padding
        iw = ow * self.stride + fw - self.padding
        valid = (ih >= 0) & (ih < self.input_height) & (iw >= 0) & (iw < self.input_width)
        flat = (c * self.input_height + ih) * self.input_width + iw
        flat = np.where(valid, flat, self.input_size)
        positions = self.output_height * self.output_width
        return flat.reshape(positions, self._weights.shape[1])

    def forward(self, input) -> np.ndarray:
        x = as_batch(input, self.input_size, "ConvolutionalLayer::forward")
        batch = x.shape[1]
        extended = np.vstack([x, np.zeros((1, batch), dtype=np.float32)])
        patches = extended[self._indices]  # (positions, filter_len, batch)
        self._patches = patches
        out = np.einsum("fk,pkb->fpb", self._weights, patches)
        out += self._biases[:, None, None]
        return out.reshape(self.output_size, batch).astype(np.float32)

    def backward(self, grad_output, learning_rate) -> np.ndarray:
        grad = as_batch(grad_output, self.output_size, "ConvolutionalLayer::backward")
        if learning_rate <= 0.0:
            raise ValueError("ConvolutionalLayer::backward: learningRate must be positive")
        if self._patches is None:
            raise RuntimeError("ConvolutionalLayer::backward: forward must be called first")
        batch = grad.shape[1]
        if batch != self._patches.shape[2]:
            raise DimensionMismatch(
                self._patches.shape[2], batch, "ConvolutionalLayer::backward batch"
            )

        positions = self.output_height * self.output_width
        g = grad.reshape(self.num_filters, positions, batch)

        self._grad_biases = g.sum(axis=(1, 2)).astype(np.float32)
        self._grad_weights = np.einsum("fpb,pkb->fk", g, self._patches).astype(
            np.float32
        )

        contributions = np.einsum("fk,fpb->pkb", self._weights, g)
        grad_extended = np.zeros((self.input_size + 1, batch), dtype=np.float32)
        np.add.at(
            grad_extended,
            (self._indices[:, :, None], np.arange(batch)[None, None, :]),
            contributions,
        )

        lr = np.float32(learning_rate)
        self._weights -= lr * self._grad_weights / np.float32(batch)
        self._biases -= lr * self._grad_biases / np.float32(batch)

        return grad_extended[:-1]

    def parameters(self) -> list[np.ndarray]:
        params = [row.reshape(-1, 1).copy() for row in self._weights]
        params.append(self._biases.reshape(-1, 1).copy())
        return params

    def gradients(self) -> list[np.ndarray]:
        grads = [row.reshape(-1, 1).copy() for row in self._grad_weights]
        grads.append(self._grad_biases.reshape(-1, 1).copy())
        return grads

    def set_training(self, training: bool) -> None:
        self.training = bool(training)

    def update_parameter(self, index: int, update) -> None:
        delta = np.asarray(update, dtype=np.float32)
        if 0 <= index < self.num_filters:
            self._weights[index] -= delta.reshape(self._weights.shape[1])
        elif index == self.num_filters:
            self._biases -= delta.reshape(self.num_filters)
        else:
            raise IndexError("ConvolutionalLayer: parameter index out of range")