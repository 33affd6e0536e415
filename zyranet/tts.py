"""Text-to-speech front end producing a simulated audio file."""

from __future__ import annotations

import logging

__all__ = ["TextToSpeech", "PHONEMES", "AUDIO_CONTENT"]

log = logging.getLogger(__name__)

PHONEMES = tuple("this is a placeholder")
AUDIO_CONTENT = "Audio content based on phonemes."


class TextToSpeech:
    """Converts text to phonemes and writes a simulated waveform file."""

    def text_to_phonemes(self, text: str) -> list[str]:
        """Return the fixed phoneme sequence the simulated synthesiser uses."""
        return list(PHONEMES)

    def synthesize_waveform(self, phonemes, output_path) -> None:
        """Write the simulated audio for ``phonemes`` to ``output_path``."""
        try:
            with open(output_path, "w", encoding="utf-8") as handle:
                handle.write(AUDIO_CONTENT)
        except OSError as exc:
            raise OSError(f"Failed to open output audio file: {output_path}") from exc

    def convert_text_to_speech(self, text: str, output_path) -> None:
        """Convert ``text`` and write the result to ``output_path``."""
        phonemes = self.text_to_phonemes(text)
        self.synthesize_waveform(phonemes, output_path)
        log.info("Wrote speech for %d phonemes to %s", len(phonemes), output_path)