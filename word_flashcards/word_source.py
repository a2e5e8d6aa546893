"""Word Source API client.

This module fetches word pairs from the Word Source HTTP endpoint and maps its
responses onto three outcomes: a WordPair, an empty result (None), or a
WordSourceError. Diagnostic details are logged but never carried in the
exception messages, which stay generic.
"""

from typing import Any, Protocol

import requests
from loguru import logger
from pydantic import ValidationError

from word_flashcards.models import WordPair

EMPTY_RESULT_MESSAGE = "No data found"
LOAD_FAILURE_MESSAGE = "Failed to load words"


class WordSourceError(Exception):
    """Base class for failures fetching from the Word Source."""

    def __init__(self, message: str = LOAD_FAILURE_MESSAGE):
        super().__init__(message)
        self.message = message


class TransportFailure(WordSourceError):
    """Connection error, timeout, or non-2xx status."""


class MalformedResponse(WordSourceError):
    """The Word Source answered with a payload of unexpected shape."""


class WordSource(Protocol):
    """Anything that can hand out one word pair at a time."""

    def fetch_word(self) -> WordPair | None: ...


def parse_word_payload(payload: Any) -> WordPair | None:
    """Map a decoded JSON payload to a WordPair or an empty result.

    Args:
        payload: Decoded JSON body of a 2xx response

    Returns:
        The word pair, or None for the ``{"message": "No data found"}`` marker

    Raises:
        MalformedResponse: If the payload is not an object with both words,
            or carries any other message
    """
    if not isinstance(payload, dict):
        logger.warning(f"Word Source payload is not an object: {type(payload).__name__}")
        raise MalformedResponse

    if "message" in payload:
        if payload["message"] == EMPTY_RESULT_MESSAGE:
            logger.info("Word Source reported no data")
            return None
        logger.warning(f"Word Source returned unexpected message: {payload['message']!r}")
        raise MalformedResponse

    try:
        return WordPair.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Word Source payload failed validation: {e.error_count()} error(s)")
        logger.debug(f"Validation details: {e}")
        raise MalformedResponse from e


class WordSourceClient:
    """Client for the Word Source endpoint.

    One call to fetch_word() issues exactly one GET request; failures are not
    retried here. Retrying is left to whoever drives the session.

    Attributes:
        base_url: Base address of the Word Source, without trailing slash
        path: Path of the word endpoint
        session: HTTP session used for requests
        timeout: Request timeout in seconds
    """

    DEFAULT_PATH = "/get-word.php"
    DEFAULT_TIMEOUT = 10

    def __init__(
        self,
        base_url: str,
        session: requests.Session,
        path: str = DEFAULT_PATH,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the Word Source client.

        Args:
            base_url: Base address of the Word Source
            session: requests Session for making HTTP requests
            path: Path of the word endpoint below base_url
            timeout: Request timeout in seconds

        Raises:
            ValueError: If base_url is empty or whitespace-only
        """
        if not base_url or not base_url.strip():
            msg = "Base URL cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        self.base_url = base_url.strip().rstrip("/")
        self.path = path if path.startswith("/") else f"/{path}"
        self.session = session
        self.timeout = timeout
        logger.debug(f"Initialized WordSourceClient for {self.url}")

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    def fetch_word(self) -> WordPair | None:
        """Fetch one word pair from the Word Source.

        Returns:
            The fetched word pair, or None if the source has no data

        Raises:
            TransportFailure: On connection errors, timeouts and non-2xx statuses
            MalformedResponse: If the body is not the expected JSON shape
        """
        logger.debug(f"Fetching word from {self.url}")
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            logger.debug(f"Response status code: {response.status_code}")
            response.raise_for_status()
        except requests.Timeout as e:
            logger.warning(f"Timed out after {self.timeout}s fetching word from {self.url}")
            raise TransportFailure from e
        except requests.HTTPError as e:
            logger.warning(f"Word Source returned HTTP error: {e}")
            raise TransportFailure from e
        except requests.RequestException as e:
            logger.warning(f"Could not reach Word Source at {self.url}: {e}")
            raise TransportFailure from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("Word Source response is not valid JSON")
            raise MalformedResponse from e

        pair = parse_word_payload(payload)
        if pair is not None:
            logger.info(f"Fetched word pair: {pair.english} / {pair.german}")
        return pair
