from typing import Dict, Optional
from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dotenv import load_dotenv

from kanji_coverage.core.config import get_curriculum_path, get_default_api_key
from kanji_coverage.core.errors import (
    CollaboratorError,
    InputUnavailableError,
    InvalidApiKeyError,
)
from kanji_coverage.schemas.coverage import CoverageReport
from kanji_coverage.services.coverage_service import (
    ProgressProvider,
    analyze_text,
    load_curriculum,
)
from kanji_coverage.services.text_service import split_lines
from kanji_coverage.services.wanikani_service import fetch_learner_progress

load_dotenv()


app = FastAPI(
    title="Kanji Coverage API",
    description="API for checking how many kanji of a Japanese text a WaniKani learner knows.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CoverageRequest(BaseModel):
    """Request model for text analysis."""

    text: str
    api_key: Optional[str] = None
    levels: Optional[str] = None
    include_characters: bool = False


def get_progress_provider() -> ProgressProvider:
    """Dependency returning the source of the learner's known kanji."""
    return fetch_learner_progress


def get_curriculum() -> str:
    """Dependency returning every kanji of the curriculum.

    Raises:
        HTTPException: If the curriculum file is missing on the server.
    """
    try:
        return load_curriculum(get_curriculum_path())
    except InputUnavailableError as e:
        print(f"Curriculum Error: {e}")
        raise HTTPException(status_code=500, detail="Server curriculum missing")


@app.get("/")
def read_root() -> Dict[str, str]:
    """Root endpoint to check API status."""
    return {"status": "API is ready", "docs": "/docs"}


@app.post("/analyze")
def analyze_endpoint(
    request: CoverageRequest,
    curriculum: str = Depends(get_curriculum),
    provider: ProgressProvider = Depends(get_progress_provider),
) -> CoverageReport:
    """Analyzes a block of Japanese text against the learner's WaniKani kanji.

    Args:
        request (CoverageRequest): Text, API key and options.
        curriculum (str): Every kanji of the curriculum.
        provider (ProgressProvider): Source of the learner's known kanji.

    Returns:
        CoverageReport: Known/unknown kanji counts and percentages.

    Raises:
        HTTPException: 400 for a malformed key, 502 if WaniKani fails.
    """
    api_key = request.api_key or get_default_api_key()

    try:
        learner = provider(api_key, request.levels)
    except InvalidApiKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CollaboratorError as e:
        print(f"WaniKani Error: {e}")
        raise HTTPException(status_code=502, detail="Failed to load WaniKani data")

    return analyze_text(
        split_lines(request.text),
        curriculum,
        learner,
        include_characters=request.include_characters,
    )
