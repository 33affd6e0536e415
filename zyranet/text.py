"""Normalisation of plain-text corpora into one cleaned file."""

from __future__ import annotations

import logging
import re
import string
import sys
from pathlib import Path

__all__ = ["clean_line", "preprocess_text", "main"]

log = logging.getLogger(__name__)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_SPECIAL = re.compile(r"[^a-zA-Z0-9\s]", re.ASCII)


def clean_line(line: str) -> str:
    """Lower-case ASCII letters and drop everything but letters, digits and spaces."""
    return _SPECIAL.sub("", line.translate(_ASCII_LOWER))


def _split_lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def preprocess_text(input_dir, output_file) -> int:
    """Clean every line of each ``.txt`` file in ``input_dir`` into ``output_file``.

    Files are taken in name order. Unreadable files are logged and skipped.
    Returns the number of files read.
    """
    sources = sorted(p for p in Path(input_dir).iterdir() if p.suffix == ".txt")
    try:
        out = open(output_file, "w", encoding="ascii", newline="")
    except OSError as exc:
        raise type(exc)(f"Failed to open output file: {output_file}") from exc

    read = 0
    with out:
        for source in sources:
            try:
                content = source.read_text(encoding="latin-1", newline="")
            except OSError as exc:
                log.error("Failed to open input file: %s (%s)", source, exc)
                continue
            out.writelines(clean_line(line) + "\n" for line in _split_lines(content))
            read += 1
    log.info("Preprocessing completed successfully. Output saved to %s", output_file)
    return read


def main(argv=None) -> int:
    """Command entry point: ``<input_directory> <output_file>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Usage: text_preprocess <input_directory> <output_file>", file=sys.stderr)
        return 1
    try:
        preprocess_text(args[0], args[1])
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Preprocessing completed successfully. Output saved to {args[1]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())