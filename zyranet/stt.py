"""A nearest-neighbour speech-to-text model over MFCC sequences."""

from __future__ import annotations

import math
from collections import Counter

import numpy as np

__all__ = ["STTModel", "NEIGHBOURS"]

NEIGHBOURS = 3


def _as_sequence(sample) -> np.ndarray:
    arr = np.asarray(sample, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError("feature sequences must be two-dimensional (frames, coefficients)")
    return arr


class STTModel:
    """Labels a feature sequence by majority vote of its nearest training samples."""

    def __init__(self) -> None:
        self.training_data: list[np.ndarray] = []
        self.labels: list[str] = []

    def train(self, training_data, labels) -> None:
        """Store labelled feature sequences."""
        data = list(training_data)
        labels = list(labels)
        if not data or not labels or len(data) != len(labels):
            raise ValueError("Invalid training data or labels")
        self.training_data = [_as_sequence(sample) for sample in data]
        self.labels = labels

    def _distance(self, features: np.ndarray, sample: np.ndarray) -> float:
        frames = min(len(features), len(sample))
        if frames == 0:
            return 0.0
        width = features.shape[1]
        if sample.shape[1] < width:
            raise ValueError("training frames are shorter than the feature frames")
        diff = features[:frames] - sample[:frames, :width]
        return math.sqrt(float(np.sum(diff * diff)))

    def predict(self, features) -> str:
        """Return the most common label among the nearest training samples.

        Ties go to the label that sorts first.
        """
        if len(features) == 0:
            raise ValueError("Empty features for prediction")
        if not self.training_data:
            raise RuntimeError("STTModel has not been trained")
        query = _as_sequence(features)

        distances = sorted(
            (self._distance(query, sample), label)
            for sample, label in zip(self.training_data, self.labels)
        )
        counts = Counter(label for _, label in distances[:NEIGHBOURS])
        return max(sorted(counts), key=counts.__getitem__)