"""
Downloads the complete WaniKani kanji list into data/wkkanji.txt.

Requires a WaniKani v2 personal access token in $WANIKANI_API_TOKEN
(or passed with --token).
"""

import sys
import os
import argparse
import requests
from typing import List, Optional

# Add project root to path (go up from scripts/setup/ to root)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
sys.path.insert(0, PROJECT_ROOT)

from kanji_coverage.core.config import (
    get_curriculum_path,
    WANIKANI_TIMEOUT,
    WANIKANI_V2_URL,
)
from kanji_coverage.services.text_service import write_lines

SUBJECTS_URL = WANIKANI_V2_URL.rstrip("/") + "/subjects?types=kanji"


def fetch_curriculum_kanji(token: str, url: str = SUBJECTS_URL) -> List[str]:
    """Walks every page of the kanji subjects and returns the characters.

    Kanji are ordered by level, then by the order WaniKani lists them in.

    Args:
        token (str): WaniKani v2 API token.
        url (str): First page to request.

    Returns:
        List[str]: One entry per kanji.
    """
    headers = {"Authorization": f"Bearer {token}"}
    subjects = []
    next_url: Optional[str] = url

    while next_url:
        resp = requests.get(next_url, headers=headers, timeout=WANIKANI_TIMEOUT)
        resp.raise_for_status()
        body = resp.json()

        for item in body.get("data", []):
            data = item.get("data", {})
            character = data.get("characters")
            if character:
                subjects.append((data.get("level", 0), character))

        next_url = body.get("pages", {}).get("next_url")
        print(f"Fetched {len(subjects)} kanji...")

    subjects.sort(key=lambda s: s[0])
    return [character for _, character in subjects]


def main():
    """Main entry point for downloading the curriculum."""
    parser = argparse.ArgumentParser(description="Download the WaniKani kanji list")
    parser.add_argument("--token", default=os.environ.get("WANIKANI_API_TOKEN"))
    parser.add_argument("--output", default=None)
    args = parser.parse_args()
    output = args.output or get_curriculum_path()

    if not args.token:
        print("No API token given. Set WANIKANI_API_TOKEN or pass --token.")
        sys.exit(1)

    try:
        kanji = fetch_curriculum_kanji(args.token)
    except requests.RequestException as e:
        print(f"Error fetching kanji: {e}")
        sys.exit(1)

    print(f"Saving {len(kanji)} kanji to {output}...")
    write_lines(kanji, output)
    print("Done")


if __name__ == "__main__":
    main()
