import pytest
import requests
from unittest.mock import patch
from kanji_coverage.core.errors import CollaboratorError, InvalidApiKeyError
from kanji_coverage.services.wanikani_service import (
    build_kanji_url,
    fetch_learner_progress,
    parse_kanji_response,
    validate_api_key,
)

VALID_KEY = "0123456789abcdef0123456789abcdef"

PAYLOAD = {
    "user_information": {
        "username": "koichi",
        "gravatar": "abc",
        "level": 3,
        "title": "Turtles",
    },
    "requested_information": [
        {"character": "一", "meaning": "one", "level": 1, "stats": {"srs": "burned"}},
        {"character": "木", "meaning": "tree", "level": 1, "stats": None},
        {"character": "水", "meaning": "water", "level": 2},
    ],
}


def test_validate_api_key():
    assert validate_api_key(VALID_KEY) == VALID_KEY
    assert validate_api_key(f"  {VALID_KEY}\n") == VALID_KEY

    for bad in [None, "", "short", VALID_KEY + "x"]:
        with pytest.raises(InvalidApiKeyError):
            validate_api_key(bad)


def test_build_kanji_url():
    with patch(
        "kanji_coverage.services.wanikani_service.WANIKANI_API_URL",
        "https://www.wanikani.com/api/user/",
    ):
        assert (
            build_kanji_url(VALID_KEY)
            == f"https://www.wanikani.com/api/user/{VALID_KEY}/kanji/"
        )
        assert (
            build_kanji_url(VALID_KEY, "1,2")
            == f"https://www.wanikani.com/api/user/{VALID_KEY}/kanji/1,2"
        )


def test_parse_kanji_response():
    progress = parse_kanji_response(PAYLOAD)
    assert progress.username == "koichi"
    assert progress.title == "Turtles"
    assert progress.level == 3
    assert progress.known_kanji == "一木水"


def test_parse_kanji_response_errors():
    with pytest.raises(CollaboratorError):
        parse_kanji_response({"error": {"code": "user_not_found", "message": "nope"}})

    # Item without a character
    with pytest.raises(CollaboratorError):
        parse_kanji_response({"requested_information": [{"meaning": "one"}]})

    with pytest.raises(CollaboratorError):
        parse_kanji_response(["not", "a", "dict"])


def test_fetch_learner_progress():
    """Test fetching known kanji with mocked external API."""
    with patch("requests.get") as mock_get:
        mock_get.return_value.status_code = 200
        mock_get.return_value.json.return_value = PAYLOAD

        progress = fetch_learner_progress(VALID_KEY, "1,2")

        assert progress.known_kanji == "一木水"
        url = mock_get.call_args[0][0]
        assert url.endswith(f"/{VALID_KEY}/kanji/1,2")


def test_fetch_learner_progress_invalid_key_skips_network():
    with patch("requests.get") as mock_get:
        with pytest.raises(InvalidApiKeyError):
            fetch_learner_progress("bad-key")
        mock_get.assert_not_called()


def test_fetch_learner_progress_failures():
    """Transport errors, bad status and bad JSON all raise CollaboratorError."""
    with patch("requests.get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("offline")
        with pytest.raises(CollaboratorError):
            fetch_learner_progress(VALID_KEY)

    with patch("requests.get") as mock_get:
        mock_get.return_value.status_code = 500
        with pytest.raises(CollaboratorError):
            fetch_learner_progress(VALID_KEY)

    with patch("requests.get") as mock_get:
        mock_get.return_value.status_code = 200
        mock_get.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(CollaboratorError):
            fetch_learner_progress(VALID_KEY)
