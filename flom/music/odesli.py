"""
Odesli (song.link) API client.

Resolves a music link into the equivalent links on other platforms with a
single GET request. Nothing is cached and nothing is retried: every call
re-queries and every failure is reported to the caller.

API:
    GET https://api.song.link/v1-alpha.1/links?url=<url>&userCountry=<cc>&key=<key>

Usage:
    client = OdesliClient(api_key="...", user_country="US")
    response = client.fetch_links("https://open.spotify.com/track/...")
    response.links_by_platform["appleMusic"].url
"""

import requests

from flom.core.exceptions import MissingCredentialError, NetworkError, UpstreamError
from flom.core.logger import get_logger
from flom.music.models import OdesliResponse
from flom.utils import body_excerpt, build_session

logger = get_logger(__name__)


API_BASE = "https://api.song.link/v1-alpha.1/links"


class OdesliClient:
    """
    Client for the Odesli links endpoint.

    Attributes:
        api_key: Odesli API key. Required; checked before any request.
        user_country: Country code sent as `userCountry`.
        timeout: Request timeout in seconds, or None for the transport default.
    """

    def __init__(
        self,
        api_key: str | None,
        user_country: str = "US",
        session: requests.Session | None = None,
        timeout: float | None = None
    ) -> None:
        self.api_key = api_key
        self.user_country = user_country
        self.session = session or build_session()
        self.timeout = timeout

    def fetch_links(self, url: str) -> OdesliResponse:
        """
        Look up the equivalent links for a music URL.

        Args:
            url: Source URL (already validated by the caller).

        Returns:
            OdesliResponse: Parsed response body.

        Raises:
            MissingCredentialError: If no API key is configured (no request is made).
            NetworkError: If the request fails at transport level.
            UpstreamError: If the status is not 2xx or the body is not the
                           expected JSON document.
        """
        if not self.api_key or not self.api_key.strip():
            raise MissingCredentialError(
                "no Odesli API key configured (set FLOM_ODESLI_KEY or "
                "[api] odesli_key in the config file)"
            )

        params = {
            "url": url,
            "userCountry": self.user_country,
            "key": self.api_key.strip(),
        }

        logger.debug(f"Requesting links for {url} (userCountry={self.user_country})")

        try:
            response = self.session.get(API_BASE, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            # requests includes the full URL, key included, in its messages
            reason = self._redact(str(e))
            logger.debug(f"Odesli request failed: {reason}")
            raise NetworkError(
                f"odesli request failed: {reason}",
                details={"url": url, "original_error": reason}
            ) from e

        if not response.ok:
            body = self._redact(body_excerpt(response))
            logger.debug(f"Odesli returned status {response.status_code}")
            raise UpstreamError(
                f"odesli error: status={response.status_code} body={body}",
                details={"url": url, "status_code": response.status_code, "body": body},
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"odesli response parse failed: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        parsed = OdesliResponse.from_api_data(payload)
        logger.debug(f"Odesli returned {len(parsed.links_by_platform)} platform links")
        return parsed

    def _redact(self, text: str) -> str:
        """Replace the API key in text that may echo the request URL."""
        key = (self.api_key or "").strip()
        return text.replace(key, "***") if key else text
