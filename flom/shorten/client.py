"""
URL shortening through is.gd.

API:
    GET https://is.gd/create.php?format=json&url=<long url>

    Success: {"shorturl": "https://is.gd/abc123"}
    Failure: {"errorcode": 1, "errormessage": "Please specify a valid URL to shorten."}

is.gd reports most failures with a JSON error message rather than an
HTTP status, so both are checked.
"""

from dataclasses import dataclass

import requests

from flom.core.exceptions import NetworkError, UpstreamError
from flom.core.logger import get_logger
from flom.music.detector import validate_url
from flom.utils import body_excerpt, build_session

logger = get_logger(__name__)


SHORTEN_ENDPOINT = "https://is.gd/create.php"


@dataclass(frozen=True)
class ShortenedLink:
    """A short URL and the long URL it replaces."""
    original_url: str
    short_url: str


class ShortenClient:
    """
    Client for the is.gd shortening endpoint.

    Attributes:
        session: HTTP session used for requests.
        timeout: Request timeout in seconds, or None for the transport default.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = None
    ) -> None:
        self.session = session or build_session()
        self.timeout = timeout

    def shorten(self, url: str) -> ShortenedLink:
        """
        Shorten a URL.

        Args:
            url: Any well-formed http(s) URL.

        Returns:
            ShortenedLink pairing the input with the short URL.

        Raises:
            MalformedInputError: If url is not a URL (no request is made).
            NetworkError: If the request fails at transport level.
            UpstreamError: If the status is not 2xx, the body is not JSON,
                           is.gd reports an error, or `shorturl` is missing.
        """
        long_url = validate_url(url)
        logger.debug(f"Shortening {long_url}")

        try:
            response = self.session.get(
                SHORTEN_ENDPOINT,
                params={"format": "json", "url": long_url},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.debug(f"Shorten request failed: {e}")
            raise NetworkError(
                f"shorten request failed: {e}",
                details={"url": long_url, "original_error": str(e)}
            ) from e

        if not response.ok:
            body = body_excerpt(response)
            logger.debug(f"is.gd returned status {response.status_code}")
            raise UpstreamError(
                f"shorten error: status={response.status_code} body={body}",
                details={"url": long_url, "status_code": response.status_code, "body": body},
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"shorten response parse failed: {e}",
                details={"url": long_url, "original_error": str(e)}
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamError("shorten response parse failed: body is not an object")

        error_message = payload.get("errormessage")
        if error_message:
            raise UpstreamError(
                str(error_message),
                details={"url": long_url, "errorcode": payload.get("errorcode")}
            )

        short_url = payload.get("shorturl")
        if not isinstance(short_url, str) or not short_url:
            raise UpstreamError("shorten response missing shorturl", details={"url": long_url})

        return ShortenedLink(original_url=long_url, short_url=short_url)
