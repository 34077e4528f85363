"""
Exceptions raised by the analysis pipeline.

Front ends (CLI, HTTP API) catch these and turn them into a message or an
HTTP error. Nothing in the pipeline retries.
"""

from typing import Optional


class KanjiCoverageError(Exception):
    """Base class for every fatal error of an analysis run."""


class InputUnavailableError(KanjiCoverageError):
    """A curriculum or text file could not be read.

    Attributes:
        path (str): The path that failed.
    """

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        self.reason = reason
        message = f"Could not read input file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CollaboratorError(KanjiCoverageError):
    """The learner's known-kanji data could not be obtained."""


class InvalidApiKeyError(CollaboratorError):
    """The API key does not have the expected format."""
