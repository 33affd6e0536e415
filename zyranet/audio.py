"""WAV reading and MFCC feature extraction."""

from __future__ import annotations

import os
import wave
from dataclasses import dataclass

import numpy as np

__all__ = [
    "AudioData",
    "AudioFileError",
    "read_wav",
    "extract_mfcc",
    "hamming_window",
    "mel_filter_bank",
    "dct",
]

NUM_FILTERS = 26
NUM_COEFFS = 13
FRAME_SIZE = 512
FFT_SIZE = 512
HOP_SIZE = 256
PRE_EMPHASIS = 0.97
_LOG_FLOOR = 1e-10


class AudioFileError(OSError):
    """Raised when an audio file cannot be opened or decoded."""


@dataclass(frozen=True)
class AudioData:
    """Decoded audio: interleaved samples scaled to [-1, 1]."""

    samples: np.ndarray
    sample_rate: int
    channels: int

    @property
    def frames(self) -> int:
        return self.samples.size // self.channels if self.channels else 0


def _decode(raw: bytes, width: int) -> np.ndarray:
    if width == 1:
        return (np.frombuffer(raw, dtype=np.uint8).astype(np.float32) - 128.0) / 128.0
    if width == 2:
        return np.frombuffer(raw, dtype="<i2").astype(np.float32) / 32768.0
    if width == 3:
        b = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        value = b[:, 0] | (b[:, 1] << 8) | (b[:, 2] << 16)
        value = (value ^ 0x800000) - 0x800000
        return value.astype(np.float32) / float(1 << 23)
    if width == 4:
        return np.frombuffer(raw, dtype="<i4").astype(np.float32) / float(1 << 31)
    raise AudioFileError(f"Unsupported sample width: {width} bytes")


def read_wav(path) -> AudioData:
    """Read a PCM WAV file into float samples."""
    try:
        with wave.open(os.fspath(path), "rb") as wav:
            channels = wav.getnchannels()
            width = wav.getsampwidth()
            rate = wav.getframerate()
            raw = wav.readframes(wav.getnframes())
    except (OSError, EOFError, wave.Error) as exc:
        raise AudioFileError(f"Failed to open audio file: {path}") from exc
    return AudioData(_decode(raw, width), rate, channels)


def hamming_window(n: int) -> np.ndarray:
    """Hamming window of length ``n``."""
    idx = np.arange(n, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        window = 0.54 - 0.46 * np.cos(2.0 * np.pi * idx / (n - 1))
    return window.astype(np.float32)


def _hz_to_mel(hz):
    return 2595.0 * np.log10(1.0 + np.asarray(hz, dtype=np.float64) / 700.0)


def _mel_to_hz(mel):
    return 700.0 * (np.power(10.0, np.asarray(mel, dtype=np.float64) / 2595.0) - 1.0)


def mel_filter_bank(num_filters: int, fft_size: int, sample_rate: float) -> np.ndarray:
    """Triangular mel filters, shape ``(num_filters, fft_size // 2 + 1)``."""
    bins = fft_size // 2 + 1
    mel_min = _hz_to_mel(0.0)
    mel_max = _hz_to_mel(sample_rate / 2.0)
    step = (mel_max - mel_min) / (num_filters + 1)
    centers = _mel_to_hz(mel_min + np.arange(num_filters + 2) * step)

    freqs = np.arange(bins, dtype=np.float64) * sample_rate / fft_size
    lower = centers[:-2, None]
    center = centers[1:-1, None]
    upper = centers[2:, None]

    bank = np.zeros((num_filters, bins), dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        rising = (freqs >= lower) & (freqs <= center)
        bank = np.where(rising, (freqs - lower) / (center - lower), bank)
        falling = (freqs >= center) & (freqs <= upper)
        bank = np.where(falling, (upper - freqs) / (upper - center), bank)
    return bank.astype(np.float32)


def _dct_basis(n: int) -> np.ndarray:
    k = np.arange(n, dtype=np.float64)[:, None]
    idx = np.arange(n, dtype=np.float64)[None, :]
    return np.cos(np.pi / n * (idx + 0.5) * k)


def dct(values) -> np.ndarray:
    """Unnormalised DCT-II of a one-dimensional sequence."""
    x = np.asarray(values, dtype=np.float64).reshape(-1)
    if x.size == 0:
        return np.zeros(0, dtype=np.float32)
    return (_dct_basis(x.size) @ x).astype(np.float32)


def extract_mfcc(path) -> np.ndarray:
    """MFCCs of a mono WAV file, shape ``(frames, 13)``."""
    audio = read_wav(path)
    if audio.channels > 1:
        raise ValueError(f"Multi-channel audio not supported: {path}")

    signal = audio.samples.astype(np.float64)
    if signal.size > 1:
        signal[1:] = signal[1:] - PRE_EMPHASIS * signal[:-1]

    starts = range(0, signal.size - FRAME_SIZE, HOP_SIZE)
    if not starts:
        return np.zeros((0, NUM_COEFFS), dtype=np.float32)

    window = hamming_window(FRAME_SIZE).astype(np.float64)
    frames = np.stack([signal[s : s + FRAME_SIZE] for s in starts]) * window
    spectrum = np.abs(np.fft.rfft(frames, n=FFT_SIZE, axis=1))

    bank = mel_filter_bank(NUM_FILTERS, FFT_SIZE, float(audio.sample_rate)).astype(np.float64)
    log_mel = np.log(spectrum @ bank.T + _LOG_FLOOR)
    coeffs = log_mel @ _dct_basis(NUM_FILTERS).T

    result = np.zeros((coeffs.shape[0], NUM_COEFFS), dtype=np.float32)
    keep = min(NUM_COEFFS, coeffs.shape[1])
    result[:, :keep] = coeffs[:, :keep]
    return result