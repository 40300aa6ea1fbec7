"""
Utility functions for flom.

This module provides small helpers shared by the network clients and the CLI:
    - HTTP session construction with flom's default headers
    - Splitting text input (files, stdin) into URLs

Usage:
    from flom.utils import build_session, parse_url_lines
"""

from typing import Iterable

import requests

from flom import __version__


USER_AGENT = f"flom/{__version__}"

# Characters of an error body kept in messages and details
BODY_EXCERPT_LENGTH = 200


def build_session(accept: str = "application/json") -> requests.Session:
    """
    Create a requests session with flom's default headers.

    Args:
        accept: Value of the Accept header.

    Returns:
        A new requests.Session. The caller owns it.
    """
    session = requests.Session()
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": accept,
    })
    return session


def body_excerpt(response: requests.Response) -> str:
    """First BODY_EXCERPT_LENGTH characters of a response body."""
    return response.text[:BODY_EXCERPT_LENGTH]


def parse_url_lines(lines: Iterable[str]) -> list[str]:
    """
    Turn lines of text into a list of URLs.

    Surrounding whitespace is stripped; blank lines and lines starting
    with '#' are skipped.

    Example:
        parse_url_lines(["https://a\\n", "\\n", "# note\\n", " https://b "])
        # ["https://a", "https://b"]
    """
    urls = []
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            urls.append(stripped)
    return urls
