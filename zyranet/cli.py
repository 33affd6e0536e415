"""Command that trains a small network on the XOR truth table."""

from __future__ import annotations

import argparse
import sys

import numpy as np

from zyranet.layers import ReLULayer
from zyranet.model import Model

__all__ = ["EPOCHS", "LEARNING_RATE", "xor_data", "build_model", "main"]

EPOCHS = 10000
LEARNING_RATE = 0.01
REPORT_EVERY = 1000


def xor_data() -> tuple[np.ndarray, np.ndarray]:
    """The XOR truth table: inputs of shape (2, 4) and targets of shape (1, 4)."""
    inputs = np.array([[0, 0, 1, 1], [0, 1, 0, 1]], dtype=np.float32)
    target = np.array([[0, 1, 1, 0]], dtype=np.float32)
    return inputs, target


def build_model() -> Model:
    """Two ReLU layers, 2 -> 4 -> 1.

    ReLU layers must keep their size, so this raises :class:`ValueError`.
    """
    model = Model()
    model.add_layer(ReLULayer("hidden1", 2, 4))
    model.add_layer(ReLULayer("output", 4, 1))
    return model


def _round_half_away(values: np.ndarray) -> np.ndarray:
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


def _accuracy(output: np.ndarray, target: np.ndarray) -> float:
    return float(np.mean(_round_half_away(output) == target))


def _format_matrix(matrix: np.ndarray) -> str:
    return "\n".join(" ".join(f"{float(v):g}" for v in row) for row in np.atleast_2d(matrix))


def main(argv=None) -> int:
    """Train on XOR and print the predictions and accuracy."""
    parser = argparse.ArgumentParser(prog="zyranet", description=__doc__)
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE)
    args = parser.parse_args(argv)

    print("Starting...")
    try:
        model = build_model()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    inputs, target = xor_data()
    print("Training data:")
    print(f"Input:\n{_format_matrix(inputs)}")
    print(f"Target:\n{_format_matrix(target)}")

    print(f"\nTraining for {args.epochs} epochs...")
    for epoch in range(args.epochs):
        model.train(inputs, target, args.learning_rate)
        if epoch % REPORT_EVERY == 0:
            print(f"Epoch {epoch}")

    print("\nTesting the model:")
    output = model.forward(inputs)
    print(f"Predicted output:\n{_format_matrix(output)}")
    print(f"Expected output:\n{_format_matrix(target)}")
    print(f"\nAccuracy: {_accuracy(output, target) * 100:g}%")
    return 0


if __name__ == "__main__":
    sys.exit(main())