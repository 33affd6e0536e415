"""Speech-to-text front end: MFCC extraction followed by classification."""

from __future__ import annotations

import logging

from zyranet.audio import extract_mfcc
from zyranet.stt import STTModel

__all__ = ["SpeechToText"]

log = logging.getLogger(__name__)


class SpeechToText:
    """Converts WAV recordings to text with an :class:`STTModel`."""

    def __init__(self, model: STTModel | None = None) -> None:
        self.model = model if model is not None else STTModel()

    def convert_speech_to_text(self, audio_path) -> str:
        """Extract features from ``audio_path`` and return the predicted text."""
        log.info("Converting speech to text from %s", audio_path)
        return self.model.predict(extract_mfcc(audio_path))

    def save_text_to_file(self, text: str, output_path) -> None:
        """Write ``text`` to ``output_path``."""
        try:
            with open(output_path, "w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            raise OSError(f"Failed to open output file: {output_path}") from exc
        log.info("Saved text to %s", output_path)