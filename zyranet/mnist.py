"""MNIST loading, augmentation and evaluation helpers."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np

__all__ = [
    "IMAGE_SIDE",
    "IMAGE_SIZE",
    "NUM_CLASSES",
    "read_mnist",
    "augment_image",
    "create_directory",
    "format_time",
    "accuracy",
]

log = logging.getLogger(__name__)

IMAGE_SIDE = 28
IMAGE_SIZE = IMAGE_SIDE * IMAGE_SIDE
NUM_CLASSES = 10
IMAGE_HEADER = 16
LABEL_HEADER = 8
_EPSILON = 1e-7
_CENTER = 13.5
_PI = 3.14159


def _read_block(path, offset: int, size: int, kind: str) -> bytes:
    try:
        with open(path, "rb") as handle:
            handle.seek(offset)
            raw = handle.read(size)
    except OSError as exc:
        raise type(exc)(f"Cannot open {kind} file: {path}") from exc
    if len(raw) < size:
        raise ValueError(
            f"{kind.capitalize()} file {path} is truncated: expected {size} bytes "
            f"after the header, got {len(raw)}"
        )
    return raw


def read_mnist(images_path, labels_path, num_samples: int) -> tuple[np.ndarray, np.ndarray]:
    """Read ``num_samples`` images and labels from IDX files.

    Images come back as a ``(784, num_samples)`` float32 matrix normalised to
    zero mean and unit standard deviation over all pixels; labels as a
    ``(10, num_samples)`` one-hot matrix.
    """
    if num_samples <= 0:
        raise ValueError(f"num_samples must be positive, got {num_samples}")

    raw = _read_block(images_path, IMAGE_HEADER, num_samples * IMAGE_SIZE, "images")
    pixels = np.frombuffer(raw, dtype=np.uint8).astype(np.float64) / 255.0
    mean = float(pixels.mean())
    std = math.sqrt(max(float(np.mean(pixels * pixels)) - mean * mean, 0.0))
    normalised = (pixels - mean) / (std + _EPSILON)
    images = np.ascontiguousarray(
        normalised.reshape(num_samples, IMAGE_SIZE).T, dtype=np.float32
    )

    label_raw = _read_block(labels_path, LABEL_HEADER, num_samples, "labels")
    values = np.frombuffer(label_raw, dtype=np.uint8).astype(np.intp)
    if values.max() >= NUM_CLASSES:
        raise ValueError(f"Label out of range in {labels_path}: {int(values.max())}")
    labels = np.zeros((NUM_CLASSES, num_samples), dtype=np.float32)
    labels[values, np.arange(num_samples)] = 1.0
    return images, labels


def _shift(img: np.ndarray, shift_x: int, shift_y: int) -> np.ndarray:
    shifted = np.zeros_like(img)
    n = IMAGE_SIDE
    src_y = slice(max(0, -shift_y), min(n, n - shift_y))
    dst_y = slice(max(0, shift_y), min(n, n + shift_y))
    src_x = slice(max(0, -shift_x), min(n, n - shift_x))
    dst_x = slice(max(0, shift_x), min(n, n + shift_x))
    shifted[dst_y, dst_x] = img[src_y, src_x]
    return shifted


def _rotate(img: np.ndarray, angle: float) -> np.ndarray:
    sin_a = math.sin(angle)
    cos_a = math.cos(angle)
    ys, xs = np.mgrid[0:IMAGE_SIDE, 0:IMAGE_SIDE].astype(np.float64)
    xr = cos_a * (xs - _CENTER) - sin_a * (ys - _CENTER) + _CENTER
    yr = sin_a * (xs - _CENTER) + cos_a * (ys - _CENTER) + _CENTER
    x0 = np.trunc(xr).astype(np.intp)
    y0 = np.trunc(yr).astype(np.intp)
    valid = (x0 >= 0) & (x0 + 1 < IMAGE_SIDE) & (y0 >= 0) & (y0 + 1 < IMAGE_SIDE)
    dx = xr - x0
    dy = yr - y0
    x0c = np.clip(x0, 0, IMAGE_SIDE - 2)
    y0c = np.clip(y0, 0, IMAGE_SIDE - 2)
    src = img.astype(np.float64)
    interp = (
        (1 - dx) * (1 - dy) * src[y0c, x0c]
        + dx * (1 - dy) * src[y0c, x0c + 1]
        + (1 - dx) * dy * src[y0c + 1, x0c]
        + dx * dy * src[y0c + 1, x0c + 1]
    )
    return np.where(valid, interp, 0.0).astype(np.float32)


def augment_image(image, rng=None) -> np.ndarray:
    """Randomly shift, add noise to and rotate one flattened 28x28 image.

    The image is stored column by column. A shift of up to two pixels is
    applied with probability 0.7, clamped Gaussian noise with probability 0.3
    and a rotation of up to ten degrees with probability 0.2. The result has
    the same shape as ``image``.
    """
    generator = rng if rng is not None else np.random.default_rng()
    arr = np.asarray(image, dtype=np.float32)
    if arr.size != IMAGE_SIZE:
        raise ValueError(f"augment_image: expected {IMAGE_SIZE} pixels, got {arr.size}")
    img = arr.reshape(IMAGE_SIDE, IMAGE_SIDE, order="F")
    result = img.copy()

    if generator.integers(10) < 7:
        shift_x = int(generator.integers(5)) - 2
        shift_y = int(generator.integers(5)) - 2
        result = _shift(img, shift_x, shift_y)

    if generator.integers(10) < 3:
        noise = generator.normal(0.0, 0.05, size=(IMAGE_SIDE, IMAGE_SIDE))
        result = np.clip(result + noise, 0.0, 1.0).astype(np.float32)

    if generator.integers(10) < 2:
        angle = (int(generator.integers(20)) - 10) * _PI / 180.0
        result = _rotate(result, angle)

    return result.reshape(-1, order="F").reshape(arr.shape).astype(np.float32)


def create_directory(path) -> bool:
    """Create ``path`` and its parents if missing; return whether it was created."""
    directory = Path(path)
    if directory.exists():
        return False
    directory.mkdir(parents=True, exist_ok=True)
    log.info("Created directory: %s", directory)
    return True


def format_time(milliseconds) -> str:
    """Render a duration in milliseconds as ``"<minutes>m <seconds>s"``."""
    ms = int(milliseconds)
    total = abs(ms) // 1000
    if ms < 0:
        total = -total
    minutes = int(total / 60)
    seconds = total - minutes * 60
    return f"{minutes}m {seconds}s"


def accuracy(predictions, labels) -> float:
    """Fraction of columns whose largest prediction matches the largest label."""
    pred = np.asarray(predictions)
    truth = np.asarray(labels)
    if pred.ndim != 2 or pred.shape != truth.shape:
        raise ValueError(
            f"accuracy: predictions shape {pred.shape} does not match labels shape {truth.shape}"
        )
    if pred.shape[1] == 0:
        raise ValueError("accuracy: no samples")
    return float(np.mean(np.argmax(pred, axis=0) == np.argmax(truth, axis=0)))