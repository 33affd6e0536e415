"""Batch feature extraction for a directory of WAV clips."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np

from zyranet.audio import read_wav

__all__ = [
    "DEFAULT_SAMPLE_RATE",
    "FEATURE_SUFFIX",
    "NUM_COEFFS",
    "extract_features",
    "preprocess_audio",
    "main",
]

log = logging.getLogger(__name__)

NUM_COEFFS = 13
DEFAULT_SAMPLE_RATE = 16000
FEATURE_SUFFIX = ".features"
CLIPS_DIR = "clips"


def extract_features(audio_file, sample_rate: int) -> np.ndarray:
    """Return one zeroed 13-coefficient frame per ``sample_rate`` samples.

    Every interleaved sample of the file is counted, so a stereo file yields
    frames for both channels together.
    """
    if sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")
    audio = read_wav(audio_file)
    count = len(range(0, audio.samples.size, sample_rate))
    return np.zeros((count, NUM_COEFFS), dtype=np.float32)


def _format_features(features) -> str:
    return "".join(
        "".join(f"{float(coef):g} " for coef in frame) + "\n" for frame in features
    )


def preprocess_audio(input_dir, output_dir, sample_rate: int = DEFAULT_SAMPLE_RATE) -> int:
    """Extract features from every ``.wav`` in ``input_dir/clips``.

    Each clip's features go to ``output_dir/<clip name>.features``, one frame
    per line. Clips that fail are logged and skipped. Returns the number of
    clips written.
    """
    clips_dir = Path(input_dir) / CLIPS_DIR
    if not clips_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {clips_dir}")

    out_dir = Path(output_dir)
    if not out_dir.exists():
        log.info("Creating output directory: %s", out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

    clips = sorted(path for path in clips_dir.iterdir() if path.suffix == ".wav")
    if not clips:
        log.error("No .wav files found in the input directory: %s", clips_dir)
        return 0

    total = len(clips)
    log.info("Total audio files to process: %d", total)

    processed = 0
    for clip in clips:
        target = out_dir / (clip.name + FEATURE_SUFFIX)
        log.info("[%d/%d] Processing audio file: %s", processed + 1, total, clip)
        try:
            features = extract_features(clip, sample_rate)
            target.write_text(_format_features(features), encoding="ascii")
        except (OSError, ValueError) as exc:
            log.error("Error processing file: %s - %s", clip, exc)
            continue
        log.info("Successfully processed and saved file: %s", target)
        processed += 1

    log.info(
        "Preprocessing completed. %d out of %d files successfully processed.",
        processed,
        total,
    )
    return processed


def main(argv=None) -> int:
    """Command entry point: ``<input_directory> <output_directory>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print(
            "Usage: preprocess_data <input_directory> <output_directory>",
            file=sys.stderr,
        )
        return 1

    print("Starting preprocessing...")
    try:
        processed = preprocess_audio(args[0], args[1], DEFAULT_SAMPLE_RATE)
    except (OSError, ValueError) as exc:
        print(f"Error during preprocessing: {exc}", file=sys.stderr)
        return 1
    print(f"Processed {processed} file(s).")
    print("Preprocessing completed successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())