"""A sequential neural network built from layers."""

from __future__ import annotations

import numpy as np

from zyranet.layers import Layer

__all__ = ["Model", "L2_LAMBDA"]

L2_LAMBDA = 0.01
_LOG_FLOOR = 1e-7


class Model:
    """Runs layers in sequence and trains them with cross-entropy loss."""

    def __init__(self, layers: list[Layer] | None = None) -> None:
        self.layers: list[Layer] = list(layers or [])
        self.activations: list[np.ndarray] = []

    def add_layer(self, layer: Layer) -> None:
        """Append ``layer`` to the network."""
        self.layers.append(layer)

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self):
        return iter(self.layers)

    @property
    def input_size(self) -> int:
        """Input size of the first layer, or 0 for an empty model."""
        return self.layers[0].input_size if self.layers else 0

    @property
    def output_size(self) -> int:
        """Output size of the last layer, or 0 for an empty model."""
        return self.layers[-1].output_size if self.layers else 0

    def forward(self, input) -> np.ndarray:
        """Run ``input`` through every layer, recording each activation."""
        current = np.asarray(input, dtype=np.float32)
        self.activations = [current]
        for layer in self.layers:
            current = layer.forward(current)
            self.activations.append(current)
        return current

    def backward(self, grad_output, learning_rate) -> np.ndarray:
        """Propagate ``grad_output`` through the layers in reverse order.

        Returns the gradient with respect to the model's input.
        """
        grad = np.asarray(grad_output, dtype=np.float32)
        for layer in reversed(self.layers):
            grad = layer.backward(grad, learning_rate)
        return grad

    def train(self, input, target, learning_rate) -> float:
        """One forward/backward step; returns the loss before the update."""
        target = np.asarray(target, dtype=np.float32)
        output = self.forward(input)
        loss = self.compute_loss(output, target)
        grad = (output - target) / np.float32(target.shape[1])
        self.backward(grad, learning_rate)
        return loss

    def compute_loss(self, output, target) -> float:
        """Mean cross-entropy over the batch plus L2 regularisation."""
        output = np.asarray(output, dtype=np.float32)
        target = np.asarray(target, dtype=np.float32)
        if output.ndim != 2 or output.shape != target.shape:
            raise ValueError(
                f"compute_loss: output shape {output.shape} does not match "
                f"target shape {target.shape}"
            )
        batch = output.shape[1]
        hot = target > 0.5
        has_class = hot.any(axis=0)
        true_class = np.argmax(hot, axis=0)
        picked = output[true_class, np.arange(batch)][has_class]
        loss = -float(np.sum(np.log(np.maximum(picked.astype(np.float64), _LOG_FLOOR))))

        l2 = sum(
            float(np.sum(np.square(p, dtype=np.float64))) for p in self.parameters()
        )
        return loss / batch + L2_LAMBDA * l2

    def parameters(self) -> list[np.ndarray]:
        """All layers' parameters, in layer order."""
        return [p for layer in self.layers for p in layer.parameters()]

    def gradients(self) -> list[np.ndarray]:
        """All layers' parameter gradients, in layer order."""
        return [g for layer in self.layers for g in layer.gradients()]

    def set_training(self, training: bool) -> None:
        """Switch every layer between training and evaluation mode."""
        for layer in self.layers:
            layer.set_training(training)