"""
Command line front end.

Usage:
    kanji-coverage --apik=<32 char key> [--levels=1,2,3] book.txt episode01.ass
"""

import os
import sys
import json
import argparse
from typing import List, Optional

from kanji_coverage.core.config import (
    AnalysisConfig,
    get_curriculum_path,
    get_default_api_key,
)
from kanji_coverage.core.errors import KanjiCoverageError
from kanji_coverage.services.coverage_service import ProgressProvider, run_analysis
from kanji_coverage.services.report_service import format_report, report_to_dict
from kanji_coverage.services.text_service import write_lines
from kanji_coverage.services.wanikani_service import (
    fetch_learner_progress,
    validate_api_key,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kanji-coverage",
        description="Estimate how many kanji of a text you already know on WaniKani",
    )
    parser.add_argument("files", nargs="+", help="Text or subtitle files to analyze")
    parser.add_argument(
        "--apik",
        default=get_default_api_key(),
        help="WaniKani API key (defaults to $WANIKANI_API_KEY)",
    )
    parser.add_argument(
        "--levels", default=None, help="Only request kanji for these levels, e.g. 1,2,3"
    )
    parser.add_argument(
        "--curriculum",
        default=None,
        help="File listing every WaniKani kanji (defaults to data/wkkanji.txt "
        "or $KANJI_COVERAGE_CURRICULUM)",
    )
    parser.add_argument(
        "--show-kanji", action="store_true", help="List the kanji of each group"
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument(
        "--unknown-out",
        default=None,
        help="Write the unknown kanji to this file, one per line",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    provider: ProgressProvider = fetch_learner_progress,
) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    verbose = not args.json
    curriculum_path = args.curriculum or get_curriculum_path()

    try:
        api_key = validate_api_key(args.apik)
    except KanjiCoverageError as e:
        print(e)
        return 1

    if verbose:
        print("API key is valid.")
        if args.levels:
            print(f"Request kanji only for levels: {args.levels}")
        for path in args.files:
            print(f"Input file: {path}")

    if not os.path.exists(curriculum_path):
        print(f"No curriculum file found at: {curriculum_path}")
        print("Please run scripts/setup/fetch_curriculum.py first.")
        return 1

    config = AnalysisConfig(
        api_key=api_key,
        levels=args.levels,
        input_files=tuple(args.files),
        curriculum_path=curriculum_path,
        include_characters=True,
    )

    try:
        report = run_analysis(config, provider=provider, verbose=verbose)
    except KanjiCoverageError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(
            json.dumps(
                report_to_dict(report, show_characters=args.show_kanji),
                ensure_ascii=False,
                indent=2,
            )
        )
    else:
        print(format_report(report, show_characters=args.show_kanji))

    if args.unknown_out:
        try:
            write_lines(list(report.unknown.characters or ""), args.unknown_out)
        except OSError as e:
            print(f"Error writing {args.unknown_out}: {e}")
            return 1
        if verbose:
            print(f"Unknown kanji written to {args.unknown_out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
