from collections import Counter
from typing import Iterable
import re

from kanji_coverage.schemas.coverage import ClassificationResult, ExtractionResult

# CJK Unified Ideographs, both ends included
KANJI_FIRST = "\u4e00"
KANJI_LAST = "\u9faf"
KANJI_REGEX = re.compile(f"[{KANJI_FIRST}-{KANJI_LAST}]")


def extract_kanji(lines: Iterable[str]) -> ExtractionResult:
    """Collects every kanji from the given lines.

    Non-kanji characters are not returned but still count towards
    `text_length`, which is the denominator of the density percentage.
    Line terminators are stripped before counting.

    Args:
        lines (Iterable[str]): Lines of one or more texts, in order.

    Returns:
        ExtractionResult: The kanji sequence (duplicates kept) and the
            total number of characters scanned.
    """
    found = []
    text_length = 0

    for line in lines:
        line = line.rstrip("\r\n")
        text_length += len(line)
        found.extend(KANJI_REGEX.findall(line))

    return ExtractionResult(kanji="".join(found), text_length=text_length)


def unique_kanji(kanji: str) -> str:
    """Returns each character of `kanji` once, in first-seen order."""
    seen = set()
    result = []

    for char in kanji:
        if char not in seen:
            seen.add(char)
            result.append(char)

    return "".join(result)


def kanji_difference(first: str, second: str) -> str:
    """Returns the characters of `first` that do not appear in `second`.

    Order of `first` is preserved.
    """
    excluded = set(second)
    return "".join(char for char in first if char not in excluded)


def classify_kanji(
    curriculum_all: str, learner_known: str, text_unique: str
) -> ClassificationResult:
    """Splits the unique kanji of a text into known and unknown buckets.

    The learner's kanji do not have to be part of the curriculum; a known
    kanji outside of it simply ends up in `known`.

    Args:
        curriculum_all (str): Every kanji the curriculum teaches.
        learner_known (str): Kanji the learner already knows.
        text_unique (str): Distinct kanji found in the text.

    Returns:
        ClassificationResult: The four kanji sets.
    """
    unknown = kanji_difference(text_unique, learner_known)
    not_in_curriculum = kanji_difference(unknown, curriculum_all)
    unknown_in_curriculum = kanji_difference(unknown, not_in_curriculum)
    known = kanji_difference(text_unique, unknown)

    return ClassificationResult(
        known=known,
        unknown=unknown,
        unknown_in_curriculum=unknown_in_curriculum,
        not_in_curriculum=not_in_curriculum,
    )


def kanji_percent(subset: str, text_kanji: str) -> float:
    """Calculates how much of a text a set of kanji accounts for.

    Every occurrence counts: a kanji seen 50 times in the text adds 50 to
    the numerator.

    Args:
        subset (str): The kanji to measure.
        text_kanji (str): All kanji occurrences of the text (not deduplicated).

    Returns:
        float: Percentage between 0 and 100, or 0.0 for an empty text.
    """
    if not text_kanji:
        return 0.0

    counts = Counter(text_kanji)
    covered = sum(counts[char] for char in set(subset))

    return covered / len(text_kanji) * 100


def kanji_density(text_kanji: str, text_length: int) -> float:
    """Percentage of scanned characters that are kanji (0.0 for empty text)."""
    if text_length <= 0:
        return 0.0
    return len(text_kanji) / text_length * 100
