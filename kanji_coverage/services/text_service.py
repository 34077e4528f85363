import os
from typing import Iterator, List, Sequence

import pysubs2
from pysubs2.exceptions import Pysubs2Error

from kanji_coverage.core.errors import InputUnavailableError
from kanji_coverage.schemas.coverage import ExtractionResult
from kanji_coverage.services.kanji_service import extract_kanji

SUBTITLE_EXTENSIONS = (".ass", ".ssa", ".srt", ".vtt")


def split_lines(text: str) -> List[str]:
    """Splits text on "\\n" only, dropping a trailing "\\r" from each line.

    Other separators str.splitlines() knows about (form feed, U+2028, ...)
    stay inside the line and count as characters.
    """
    if text.endswith("\n"):
        text = text[:-1]
    if not text:
        return []
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnavailableError(path, str(e)) from e


def read_lines(path: str) -> List[str]:
    """Reads a UTF-8 text file and returns its lines without terminators.

    Args:
        path (str): Path to the file.

    Returns:
        List[str]: The lines of the file.

    Raises:
        InputUnavailableError: If the file is missing, unreadable or not UTF-8.
    """
    return split_lines(_read_text(path))


def read_subtitle_lines(path: str) -> List[str]:
    """Returns the dialogue text of a subtitle file, one entry per line.

    Formatting tags and comment events are dropped, so only what is shown
    on screen is analyzed. A blank file has no lines.

    Raises:
        InputUnavailableError: If the file cannot be read or parsed.
    """
    content = _read_text(path)
    if not content.strip():
        return []

    try:
        subs = pysubs2.SSAFile.from_string(content)
    except (ValueError, Pysubs2Error) as e:
        raise InputUnavailableError(path, str(e)) from e

    lines = []
    for event in subs:
        if event.is_comment:
            continue
        lines.extend(split_lines(event.plaintext))
    return lines


def load_file_lines(path: str) -> List[str]:
    """Reads a plain text or subtitle file depending on its extension."""
    if path.lower().endswith(SUBTITLE_EXTENSIONS):
        return read_subtitle_lines(path)
    return read_lines(path)


def iter_input_lines(paths: Sequence[str]) -> Iterator[str]:
    """Yields the lines of every file in order.

    Stops at the first file that cannot be read.
    """
    for path in paths:
        yield from load_file_lines(path)


def read_input_files(paths: Sequence[str]) -> ExtractionResult:
    """Extracts the kanji of several files as if they were one text.

    Args:
        paths (Sequence[str]): Files to read, in order.

    Returns:
        ExtractionResult: Combined kanji sequence and character count.

    Raises:
        InputUnavailableError: If any of the files cannot be read.
    """
    return extract_kanji(iter_input_lines(paths))


def write_lines(lines: Sequence[str], path: str) -> None:
    """Writes one entry per line to `path` (UTF-8), creating parent folders."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(f"{line}\n")
