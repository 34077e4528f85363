from typing import Callable, Iterable, Optional

from kanji_coverage.core.config import AnalysisConfig
from kanji_coverage.schemas.coverage import CoverageReport, ExtractionResult
from kanji_coverage.schemas.wanikani import LearnerProgress
from kanji_coverage.services.kanji_service import (
    classify_kanji,
    extract_kanji,
    unique_kanji,
)
from kanji_coverage.services.report_service import build_report
from kanji_coverage.services.text_service import read_input_files
from kanji_coverage.services.wanikani_service import fetch_learner_progress

# (api_key, levels) -> LearnerProgress
ProgressProvider = Callable[[str, Optional[str]], LearnerProgress]


def load_curriculum(path: str) -> str:
    """Reads the curriculum file and returns its distinct kanji.

    Raises:
        InputUnavailableError: If the file cannot be read.
    """
    return unique_kanji(read_input_files([path]).kanji)


def analyze_extraction(
    extraction: ExtractionResult,
    curriculum_kanji: str,
    learner: LearnerProgress,
    include_characters: bool = False,
) -> CoverageReport:
    """Classifies and scores the kanji of an already extracted text.

    Args:
        extraction (ExtractionResult): Kanji occurrences of the text.
        curriculum_kanji (str): Every kanji of the curriculum.
        learner (LearnerProgress): The learner and their known kanji.
        include_characters (bool): Whether the report lists the kanji.

    Returns:
        CoverageReport: The report for this text.
    """
    text_unique = unique_kanji(extraction.kanji)
    learner_known = unique_kanji(learner.known_kanji)
    curriculum_all = unique_kanji(curriculum_kanji)

    classification = classify_kanji(curriculum_all, learner_known, text_unique)

    return build_report(
        classification,
        extraction,
        text_unique,
        curriculum_size=len(curriculum_all),
        learner=learner,
        include_characters=include_characters,
    )


def analyze_text(
    lines: Iterable[str],
    curriculum_kanji: str,
    learner: LearnerProgress,
    include_characters: bool = False,
) -> CoverageReport:
    """Same as `analyze_extraction`, starting from raw lines of text."""
    return analyze_extraction(
        extract_kanji(lines), curriculum_kanji, learner, include_characters
    )


def run_analysis(
    config: AnalysisConfig,
    provider: ProgressProvider = fetch_learner_progress,
    verbose: bool = False,
) -> CoverageReport:
    """Runs a complete analysis for the files named in `config`.

    The curriculum is read first, then the learner's kanji are fetched, then
    the input files are read. Any failure stops the run before a report is
    built.

    Args:
        config (AnalysisConfig): Run configuration.
        provider (ProgressProvider): Source of the learner's known kanji.
        verbose (bool): Print progress messages.

    Returns:
        CoverageReport: The report for all input files combined.

    Raises:
        InputUnavailableError: If the curriculum or an input file is unreadable.
        CollaboratorError: If the learner's data cannot be fetched.
    """
    curriculum_kanji = load_curriculum(config.curriculum_path)

    if verbose:
        print("Loading your WaniKani data.")
    learner = provider(config.api_key, config.levels)

    if verbose:
        if learner.username:
            print(f"Hello, {learner.username} of sect {learner.title}! ^_^")
        print(
            f"Your kanji list loaded. You already know "
            f"{len(set(learner.known_kanji))}/{len(curriculum_kanji)} of WK kanji."
        )

    extraction = read_input_files(config.input_files)

    return analyze_extraction(
        extraction, curriculum_kanji, learner, config.include_characters
    )
