"""Line-oriented text data loading, normalisation and saving."""

from __future__ import annotations

import logging
import string

__all__ = ["DataHandler"]

log = logging.getLogger(__name__)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _split_lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class DataHandler:
    """Holds lines of text read from files."""

    def __init__(self) -> None:
        self.data: list[str] = []

    def load_data(self, path) -> None:
        """Append every line of ``path`` to :attr:`data`."""
        try:
            with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
                content = handle.read()
        except OSError as exc:
            raise type(exc)(f"Could not open file {path}") from exc
        self.data.extend(_split_lines(content))
        log.info("Data loaded from %s", path)

    def process_data(self) -> None:
        """Lower-case the ASCII letters of every line in place."""
        self.data = [line.translate(_ASCII_LOWER) for line in self.data]
        log.info("Data processed")

    def save_data(self, path) -> None:
        """Write every line to ``path``, each followed by a newline."""
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as handle:
            handle.writelines(line + "\n" for line in self.data)
        log.info("Data saved to %s", path)