"""
Pydantic schemas for the kanji coverage analysis.

Kanji sets are stored as plain strings: a CharacterSequence keeps every
occurrence in source order, a CharacterSet keeps each kanji once in
first-seen order.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from .wanikani import LearnerProgress


class ExtractionResult(BaseModel):
    """Kanji found while scanning one or more texts.

    Attributes:
        kanji (str): Every kanji occurrence, in order (duplicates kept).
        text_length (int): Total characters scanned, kanji or not.
    """

    model_config = ConfigDict(frozen=True)

    kanji: str = ""
    text_length: int = 0


class ClassificationResult(BaseModel):
    """Partition of the unique kanji of a text.

    known + unknown covers every unique kanji of the text, and
    unknown_in_curriculum + not_in_curriculum covers every unknown one.
    """

    model_config = ConfigDict(frozen=True)

    known: str = ""
    unknown: str = ""
    unknown_in_curriculum: str = ""
    not_in_curriculum: str = ""


class KanjiBucket(BaseModel):
    """A single line of the report.

    Attributes:
        label (str): Display label.
        count (int): Number of distinct kanji in the bucket.
        percentage (float): Share of all kanji occurrences in the text.
        characters (Optional[str]): The kanji themselves, when requested.
    """

    label: str
    count: int
    percentage: float
    characters: Optional[str] = None


class CoverageReport(BaseModel):
    """Complete result of an analysis run."""

    model_config = ConfigDict(frozen=True)

    all: KanjiBucket
    known: KanjiBucket
    unknown: KanjiBucket
    unknown_in_curriculum: KanjiBucket
    not_in_curriculum: KanjiBucket

    # Density of kanji among all scanned characters
    kanji_density: float = 0.0
    total_kanji: int = 0
    text_length: int = 0

    # Context
    curriculum_size: int = 0
    learner_known_count: int = 0
    learner: Optional[LearnerProgress] = Field(default=None, exclude=True)
