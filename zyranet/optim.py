"""Adam optimiser for models built from :mod:`zyranet.layers`."""

from __future__ import annotations

import math

import numpy as np

from zyranet.model import Model

__all__ = ["AdamOptimizer"]


class AdamOptimizer:
    """Adaptive moment estimation over every parameter of a model.

    The first and second moment estimates are kept per parameter, in the order
    the model's layers report them.
    """

    def __init__(
        self,
        model: Model,
        learning_rate: float = 0.001,
        beta1: float = 0.9,
        beta2: float = 0.999,
        epsilon: float = 1e-8,
    ) -> None:
        if learning_rate <= 0.0:
            raise ValueError("AdamOptimizer: learning rate must be positive")
        if not 0.0 <= beta1 < 1.0:
            raise ValueError("AdamOptimizer: beta1 must be in range [0, 1)")
        if not 0.0 <= beta2 < 1.0:
            raise ValueError("AdamOptimizer: beta2 must be in range [0, 1)")
        if epsilon <= 0.0:
            raise ValueError("AdamOptimizer: epsilon must be positive")

        self.model = model
        self._learning_rate = float(learning_rate)
        self.beta1 = float(beta1)
        self.beta2 = float(beta2)
        self.epsilon = float(epsilon)
        self.t = 0
        self._m = [np.zeros(np.shape(p), dtype=np.float32) for p in model.parameters()]
        self._v = [np.zeros(np.shape(p), dtype=np.float32) for p in model.parameters()]

    @property
    def learning_rate(self) -> float:
        """The base step size."""
        return self._learning_rate

    @learning_rate.setter
    def learning_rate(self, value: float) -> None:
        if value <= 0.0:
            raise ValueError("AdamOptimizer: learning rate must be positive")
        self._learning_rate = float(value)

    def step(self) -> None:
        """Apply one bias-corrected Adam update to every parameter."""
        self.t += 1
        alpha = (
            self._learning_rate
            * math.sqrt(1.0 - self.beta2**self.t)
            / (1.0 - self.beta1**self.t)
        )
        b1 = np.float32(self.beta1)
        b2 = np.float32(self.beta2)

        index = 0
        for layer in self.model.layers:
            for i, grad in enumerate(layer.gradients()):
                if index >= len(self._m):
                    raise RuntimeError("AdamOptimizer: parameter index out of bounds")
                g = np.asarray(grad, dtype=np.float32)
                self._m[index] = b1 * self._m[index] + (np.float32(1.0) - b1) * g
                self._v[index] = b2 * self._v[index] + (np.float32(1.0) - b2) * np.square(g)
                update = alpha * self._m[index] / (np.sqrt(self._v[index]) + self.epsilon)
                layer.update_parameter(i, update.astype(np.float32))
                index += 1