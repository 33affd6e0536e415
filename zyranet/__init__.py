"""NumPy neural-network layers, a sequential model, an Adam optimiser, MFCC audio features and simple speech, text and MNIST helpers."""

__version__ = "1.0.0"

__all__ = [
    "audio",
    "cli",
    "conv",
    "data",
    "layers",
    "mnist",
    "model",
    "optim",
    "personality",
    "pooling",
    "preprocess",
    "speech",
    "stt",
    "text",
    "tts",
]