import requests
from typing import Optional
from pydantic import ValidationError

from kanji_coverage.core.config import API_KEY_LENGTH, WANIKANI_API_URL, WANIKANI_TIMEOUT
from kanji_coverage.core.errors import CollaboratorError, InvalidApiKeyError
from kanji_coverage.schemas.wanikani import KanjiResponse, LearnerProgress

KANJI_ENDPOINT = "/kanji/"


def validate_api_key(api_key: Optional[str]) -> str:
    """Checks the format of a WaniKani v1 API key.

    Args:
        api_key (Optional[str]): The key as typed by the user.

    Returns:
        str: The stripped key.

    Raises:
        InvalidApiKeyError: If the key is missing or not 32 characters long.
    """
    key = (api_key or "").strip()
    if len(key) != API_KEY_LENGTH:
        raise InvalidApiKeyError(
            "Incorrect API key. Please check your input and try again."
        )
    return key


def build_kanji_url(api_key: str, levels: Optional[str] = None) -> str:
    """Builds the kanji list URL; `levels` (e.g. "1,2,3") narrows the result."""
    base = WANIKANI_API_URL.rstrip("/")
    return f"{base}/{api_key}{KANJI_ENDPOINT}{levels or ''}"


def parse_kanji_response(payload: dict) -> LearnerProgress:
    """Turns a decoded v1 kanji payload into a LearnerProgress.

    Args:
        payload (dict): The decoded JSON body.

    Returns:
        LearnerProgress: User details and the concatenated kanji list.

    Raises:
        CollaboratorError: If the payload reports an error or is malformed.
    """
    if not isinstance(payload, dict):
        raise CollaboratorError("Unexpected response from WaniKani.")

    error = payload.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise CollaboratorError(f"WaniKani returned an error: {message}")

    try:
        response = KanjiResponse.model_validate(payload)
    except ValidationError as e:
        raise CollaboratorError(f"Could not parse WaniKani data: {e}") from e

    user = response.user_information
    known = "".join(item.character for item in response.requested_information)

    return LearnerProgress(
        username=user.username,
        title=user.title,
        level=user.level,
        known_kanji=known,
    )


def fetch_learner_progress(
    api_key: str, levels: Optional[str] = None
) -> LearnerProgress:
    """Downloads the kanji the learner has unlocked on WaniKani.

    Args:
        api_key (str): WaniKani v1 API key.
        levels (Optional[str]): Comma-separated levels to restrict the query to.

    Returns:
        LearnerProgress: The learner's details and known kanji.

    Raises:
        InvalidApiKeyError: If the key has the wrong format.
        CollaboratorError: On network failure, bad status or bad payload.
    """
    key = validate_api_key(api_key)
    url = build_kanji_url(key, levels)

    try:
        resp = requests.get(url, timeout=WANIKANI_TIMEOUT)
    except requests.RequestException as e:
        raise CollaboratorError(f"Could not reach WaniKani: {e}") from e

    if resp.status_code != 200:
        raise CollaboratorError(
            f"WaniKani request failed with status {resp.status_code}"
        )

    try:
        payload = resp.json()
    except ValueError as e:
        raise CollaboratorError(f"Could not decode WaniKani response: {e}") from e

    return parse_kanji_response(payload)
