from typing import Any, Dict, List, Optional, Tuple

from kanji_coverage.schemas.coverage import (
    ClassificationResult,
    CoverageReport,
    ExtractionResult,
    KanjiBucket,
)
from kanji_coverage.schemas.wanikani import LearnerProgress
from kanji_coverage.services.kanji_service import kanji_density, kanji_percent

LABEL_ALL = "All"
LABEL_KNOWN = "Known"
LABEL_UNKNOWN = "Unknown"
LABEL_IN_CURRICULUM = "   WK"
LABEL_NOT_IN_CURRICULUM = "   not WK"

BUCKET_FIELDS = (
    "all",
    "known",
    "unknown",
    "unknown_in_curriculum",
    "not_in_curriculum",
)


def _bucket(
    label: str, kanji: str, text_kanji: str, include_characters: bool
) -> KanjiBucket:
    return KanjiBucket(
        label=label,
        count=len(kanji),
        percentage=kanji_percent(kanji, text_kanji),
        characters=kanji if include_characters else None,
    )


def build_report(
    classification: ClassificationResult,
    extraction: ExtractionResult,
    text_unique: str,
    curriculum_size: int = 0,
    learner: Optional[LearnerProgress] = None,
    include_characters: bool = False,
) -> CoverageReport:
    """Scores every bucket against the original text and assembles the report.

    Percentages are weighted by occurrences in `extraction.kanji`, so the
    "All" row is 100% for any text containing kanji and 0% otherwise.

    Args:
        classification (ClassificationResult): The four kanji sets.
        extraction (ExtractionResult): Kanji occurrences and text length.
        text_unique (str): Distinct kanji of the text.
        curriculum_size (int): Number of kanji in the curriculum.
        learner (Optional[LearnerProgress]): Learner details, if known.
        include_characters (bool): Whether to list the kanji in each bucket.

    Returns:
        CoverageReport: The assembled report.
    """
    text_kanji = extraction.kanji

    return CoverageReport(
        all=_bucket(LABEL_ALL, text_unique, text_kanji, include_characters),
        known=_bucket(
            LABEL_KNOWN, classification.known, text_kanji, include_characters
        ),
        unknown=_bucket(
            LABEL_UNKNOWN, classification.unknown, text_kanji, include_characters
        ),
        unknown_in_curriculum=_bucket(
            LABEL_IN_CURRICULUM,
            classification.unknown_in_curriculum,
            text_kanji,
            include_characters,
        ),
        not_in_curriculum=_bucket(
            LABEL_NOT_IN_CURRICULUM,
            classification.not_in_curriculum,
            text_kanji,
            include_characters,
        ),
        kanji_density=kanji_density(text_kanji, extraction.text_length),
        total_kanji=len(text_kanji),
        text_length=extraction.text_length,
        curriculum_size=curriculum_size,
        learner_known_count=len(set(learner.known_kanji)) if learner else 0,
        learner=learner,
    )


def _ordered_buckets(report: CoverageReport) -> List[KanjiBucket]:
    return [getattr(report, name) for name in BUCKET_FIELDS]


def report_rows(report: CoverageReport) -> List[Tuple[str, int, float]]:
    """Returns the (label, count, percentage) rows in display order."""
    return [(b.label, b.count, b.percentage) for b in _ordered_buckets(report)]


def report_to_dict(
    report: CoverageReport, show_characters: bool = True
) -> Dict[str, Any]:
    """JSON-ready dump of the report, optionally without the kanji lists."""
    exclude = None
    if not show_characters:
        exclude = {name: {"characters"} for name in BUCKET_FIELDS}
    return report.model_dump(mode="json", exclude=exclude)


def format_report(report: CoverageReport, show_characters: bool = True) -> str:
    """Renders the report as the fixed-shape terminal summary.

    The kanji of each bucket are listed under its row only when the report
    carries them and `show_characters` is set.
    """
    lines = []
    for bucket in _ordered_buckets(report):
        lines.append(f"{bucket.label}: {bucket.count}\t{bucket.percentage:3.1f}%")
        if show_characters and bucket.characters:
            lines.append(f"\t{bucket.characters}")

    lines.append(f"Kanji percent in texts: {report.kanji_density:3.1f}%")
    return "\n".join(lines)
