import pytest
from typing import Callable, Generator, Optional
from fastapi.testclient import TestClient
import sys
import os

# Append sys.path to ensure the below imports work from tests folder
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kanji_coverage.main import app, get_curriculum, get_progress_provider
from kanji_coverage.schemas.wanikani import LearnerProgress


@pytest.fixture(name="learner")
def learner_fixture() -> LearnerProgress:
    """A learner who only knows 木."""
    return LearnerProgress(
        username="koichi", title="Turtles", level=1, known_kanji="木"
    )


@pytest.fixture(name="fake_provider")
def fake_provider_fixture(learner: LearnerProgress) -> Callable:
    """Provider that records its calls instead of talking to WaniKani."""

    def provider(api_key: str, levels: Optional[str] = None) -> LearnerProgress:
        provider.calls.append((api_key, levels))
        return learner

    provider.calls = []
    return provider


@pytest.fixture(name="write_file")
def write_file_fixture(tmp_path) -> Callable[[str, str], str]:
    """Writes a UTF-8 file under tmp_path and returns its path."""

    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(name="curriculum_file")
def curriculum_file_fixture(write_file) -> str:
    """A three kanji curriculum, one per line."""
    return write_file("wkkanji.txt", "木\n水\n火\n")


@pytest.fixture(name="client")
def client_fixture(fake_provider) -> Generator[TestClient, None, None]:
    """Creates a TestClient with the curriculum and WaniKani overridden.

    Yields:
        TestClient: The FastAPI test client.
    """
    app.dependency_overrides[get_curriculum] = lambda: "木水火"
    app.dependency_overrides[get_progress_provider] = lambda: fake_provider

    client = TestClient(app)
    yield client

    # Clean up overrides
    app.dependency_overrides.clear()
