"""Test the is.gd shortening client"""

import logging

import pytest
from unittest.mock import Mock

import requests

from flom.core.exceptions import MalformedInputError, NetworkError, UpstreamError
from flom.shorten.client import SHORTEN_ENDPOINT, ShortenClient, ShortenedLink


LONG_URL = "https://example.com/very/long/url"


@pytest.fixture
def session(make_response):
    session = Mock(spec=requests.Session)
    session.get.return_value = make_response(payload={"shorturl": "https://is.gd/abc123"})
    return session


class TestShortenClient:
    """Test shortening and error mapping"""

    def test_shorten(self, session):
        link = ShortenClient(session=session).shorten(LONG_URL)
        assert link == ShortenedLink(original_url=LONG_URL, short_url="https://is.gd/abc123")
        session.get.assert_called_once_with(
            SHORTEN_ENDPOINT,
            params={"format": "json", "url": LONG_URL},
            timeout=None
        )

    def test_input_stripped(self, session):
        link = ShortenClient(session=session).shorten(f"  {LONG_URL}\n")
        assert link.original_url == LONG_URL

    def test_malformed_makes_no_request(self, session):
        with pytest.raises(MalformedInputError):
            ShortenClient(session=session).shorten("not a url")
        session.get.assert_not_called()

    def test_service_error_message(self, session, make_response):
        session.get.return_value = make_response(payload={
            "errorcode": 1,
            "errormessage": "Please specify a valid URL to shorten.",
        })
        with pytest.raises(UpstreamError) as exc_info:
            ShortenClient(session=session).shorten(LONG_URL)
        assert exc_info.value.message == "Please specify a valid URL to shorten."

    def test_missing_shorturl(self, session, make_response):
        session.get.return_value = make_response(payload={})
        with pytest.raises(UpstreamError) as exc_info:
            ShortenClient(session=session).shorten(LONG_URL)
        assert exc_info.value.message == "shorten response missing shorturl"

    def test_error_status(self, session, make_response):
        session.get.return_value = make_response(status_code=502, text="Bad Gateway")
        with pytest.raises(UpstreamError) as exc_info:
            ShortenClient(session=session).shorten(LONG_URL)
        assert exc_info.value.status_code == 502

    def test_invalid_json(self, session, make_response):
        session.get.return_value = make_response(json_error=True)
        with pytest.raises(UpstreamError):
            ShortenClient(session=session).shorten(LONG_URL)

    def test_non_object_body(self, session, make_response):
        session.get.return_value = make_response(payload=["https://is.gd/abc123"])
        with pytest.raises(UpstreamError):
            ShortenClient(session=session).shorten(LONG_URL)

    def test_network_error(self, session):
        session.get.side_effect = requests.exceptions.Timeout("timed out")
        with pytest.raises(NetworkError):
            ShortenClient(session=session).shorten(LONG_URL)

    def test_failures_not_logged_as_warnings(self, session, make_response, caplog):
        caplog.set_level(logging.DEBUG)
        session.get.return_value = make_response(status_code=502, text="Bad Gateway")
        with pytest.raises(UpstreamError):
            ShortenClient(session=session).shorten(LONG_URL)
        assert all(record.levelno < logging.WARNING for record in caplog.records)
