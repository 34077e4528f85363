import os
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from dotenv import load_dotenv

load_dotenv()

# WaniKani v1 user API: {base}{api_key}/kanji/{levels}
WANIKANI_API_URL = os.environ.get(
    "WANIKANI_API_URL", "https://www.wanikani.com/api/user/"
)
# WaniKani v2 API, only used to download the curriculum
WANIKANI_V2_URL = os.environ.get("WANIKANI_V2_URL", "https://api.wanikani.com/v2/")
WANIKANI_TIMEOUT = float(os.environ.get("WANIKANI_TIMEOUT", "10"))

# Relative to the working directory. Set KANJI_COVERAGE_CURRICULUM to use a fixed location.
DEFAULT_CURRICULUM_FILE = os.path.join("data", "wkkanji.txt")

API_KEY_LENGTH = 32


def get_curriculum_path() -> str:
    """Returns the curriculum file to use, resolved when called."""
    path = os.environ.get("KANJI_COVERAGE_CURRICULUM") or DEFAULT_CURRICULUM_FILE
    return os.path.abspath(path)


def get_default_api_key() -> Optional[str]:
    """Returns the API key from the environment, if one is set."""
    return os.environ.get("WANIKANI_API_KEY") or None


class AnalysisConfig(BaseModel):
    """Everything a single analysis run needs.

    Built once by a front end and passed into the orchestrator, never
    modified afterwards.

    Attributes:
        api_key (str): WaniKani v1 API key of the learner.
        levels (Optional[str]): Comma-separated level filter (e.g. "1,2,3").
        input_files (Tuple[str, ...]): Text or subtitle files to analyze.
        curriculum_path (str): Newline-delimited file with every WaniKani kanji.
        include_characters (bool): Whether the report lists the kanji themselves.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    levels: Optional[str] = None
    input_files: Tuple[str, ...] = ()
    curriculum_path: str = Field(default_factory=get_curriculum_path)
    include_characters: bool = Field(default=False)
