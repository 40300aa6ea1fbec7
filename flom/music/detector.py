"""
Platform detection for music links.

Classifies a URL into a PlatformId by matching host and path shape.
Rules are checked in order and the first match wins; more specific hosts
are listed before the general ones they overlap with:

    music.youtube.com      -> YouTube Music   (before youtube.com)
    *.apple.com ?app=itunes -> iTunes         (before music.apple.com)
    itunes.apple.com       -> iTunes
    (geo.)music.apple.com  -> Apple Music

Detection is a pure function of the input string.

Usage:
    from flom.music.detector import detect_platform

    detect_platform("https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR")
    # PlatformId.SPOTIFY
"""

import re
from dataclasses import dataclass
from typing import Callable
from urllib.parse import SplitResult, parse_qs, urlsplit

from flom.core.exceptions import MalformedInputError, UnrecognizedPlatformError
from flom.core.platforms import PlatformId


SPOTIFY_TRACK_PATTERN = re.compile(
    r"open\.spotify\.com/(?:intl-[a-z]{2}(?:-[a-z]{2})?/)?track/([A-Za-z0-9]+)"
)
APPLE_MUSIC_TRACK_PATTERN = re.compile(r"music\.apple\.com/.*/(?:song|album)/.+/(\d+)")


@dataclass(frozen=True)
class PlatformRule:
    """
    One URL shape belonging to a platform.

    Attributes:
        platform: Platform reported when the rule matches.
        host: Regex matched against the full lower-cased host.
        path: Regex matched against the start of the path.
        query: Optional predicate on the parsed query string.
    """
    platform: PlatformId
    host: re.Pattern
    path: re.Pattern
    query: Callable[[dict[str, list[str]]], bool] | None = None

    def matches(self, parts: SplitResult, query: dict[str, list[str]]) -> bool:
        host = (parts.hostname or "").lower()
        if not self.host.fullmatch(host):
            return False
        if not self.path.match(parts.path or "/"):
            return False
        return self.query is None or self.query(query)


def _is_itunes_app(query: dict[str, list[str]]) -> bool:
    return "itunes" in query.get("app", [])


_LOCALE = r"(?:[a-z]{2}(?:-[a-z]{2})?/)?"

PLATFORM_RULES: tuple[PlatformRule, ...] = (
    PlatformRule(
        PlatformId.SPOTIFY,
        re.compile(r"open\.spotify\.com"),
        re.compile(r"/(?:intl-[a-z]{2}(?:-[a-z]{2})?/)?(?:track|album|playlist|artist|episode|show)/[A-Za-z0-9]+"),
    ),
    PlatformRule(
        PlatformId.ITUNES,
        re.compile(r"(?:geo\.)?(?:music|itunes)\.apple\.com"),
        re.compile(r"/"),
        _is_itunes_app,
    ),
    PlatformRule(
        PlatformId.ITUNES,
        re.compile(r"itunes\.apple\.com"),
        re.compile(r"/(?:[a-z]{2}/)?(?:album|song|artist)/"),
    ),
    PlatformRule(
        PlatformId.APPLE_MUSIC,
        re.compile(r"(?:geo\.)?music\.apple\.com"),
        re.compile(r"/[a-z]{2}/(?:album|song|playlist|artist|music-video)/"),
    ),
    PlatformRule(
        PlatformId.YOUTUBE_MUSIC,
        re.compile(r"music\.youtube\.com"),
        re.compile(r"/(?:watch|playlist|browse|channel)"),
    ),
    PlatformRule(
        PlatformId.YOUTUBE,
        re.compile(r"(?:www\.|m\.)?youtube\.com"),
        re.compile(r"/(?:watch|playlist|shorts/|embed/)"),
    ),
    PlatformRule(
        PlatformId.YOUTUBE,
        re.compile(r"youtu\.be"),
        re.compile(r"/[\w-]+"),
    ),
    PlatformRule(
        PlatformId.TIDAL,
        re.compile(r"(?:listen\.|www\.)?tidal\.com"),
        re.compile(r"/(?:browse/)?(?:track|album|playlist|artist|video)/"),
    ),
    PlatformRule(
        PlatformId.DEEZER,
        re.compile(r"(?:www\.)?deezer\.com"),
        re.compile(rf"/{_LOCALE}(?:track|album|playlist|artist)/\d+"),
    ),
    PlatformRule(
        PlatformId.AMAZON_MUSIC,
        re.compile(r"music\.amazon\.(?:com|co\.uk|co\.jp|ca|de|fr|it|es|in|com\.br|com\.mx|com\.au)"),
        re.compile(r"/(?:albums|tracks|playlists|artists|user-playlists)/"),
    ),
)


def validate_url(url: str) -> str:
    """
    Check that the input is syntactically an http(s) URL.

    Args:
        url: Raw user input.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        MalformedInputError: If there is no http/https scheme or no host.
    """
    candidate = url.strip()
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
    except ValueError as e:
        raise MalformedInputError(
            f"invalid url: {url}",
            details={"url": url, "original_error": str(e)}
        ) from e

    if parts.scheme.lower() not in ("http", "https") or not host:
        raise MalformedInputError(f"invalid url: {url}", details={"url": url})

    return candidate


def detect_platform(url: str) -> PlatformId:
    """
    Classify a URL into a streaming platform.

    Args:
        url: The URL string to analyze.

    Returns:
        The PlatformId of the first matching rule in PLATFORM_RULES.

    Raises:
        MalformedInputError: If the input is not a URL at all.
        UnrecognizedPlatformError: If the URL matches no known platform.

    Examples:
        detect_platform("https://music.youtube.com/watch?v=abc")  # YOUTUBE_MUSIC
        detect_platform("https://www.youtube.com/watch?v=abc")    # YOUTUBE
        detect_platform("https://example.com/track/1")            # raises UnrecognizedPlatformError
    """
    candidate = validate_url(url)
    parts = urlsplit(candidate)
    query = parse_qs(parts.query)

    for rule in PLATFORM_RULES:
        if rule.matches(parts, query):
            return rule.platform

    raise UnrecognizedPlatformError(
        f"platform not recognized: {candidate}",
        details={"url": candidate, "host": parts.hostname}
    )


def matching_platforms(url: str) -> list[PlatformId]:
    """
    Every platform with at least one rule matching the URL, in rule order.

    Used to check that rules never overlap; detect_platform() returns the
    first entry.
    """
    parts = urlsplit(validate_url(url))
    query = parse_qs(parts.query)
    platforms: list[PlatformId] = []
    for rule in PLATFORM_RULES:
        if rule.matches(parts, query) and rule.platform not in platforms:
            platforms.append(rule.platform)
    return platforms


def extract_spotify_track_id(url: str) -> str | None:
    """
    Extract the track ID from a Spotify track URL.

    Examples:
        extract_spotify_track_id("https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR")
        # "4Km5HrUvYTaSUfiSGPJeQR"

        extract_spotify_track_id("https://open.spotify.com/intl-ja/track/4Km5HrUvYTaSUfiSGPJeQR")
        # "4Km5HrUvYTaSUfiSGPJeQR"
    """
    match = SPOTIFY_TRACK_PATTERN.search(url)
    return match.group(1) if match else None


def extract_apple_music_track_id(url: str) -> str | None:
    """
    Extract the track ID from an Apple Music URL.

    Album links point at a track through the `i` query parameter;
    otherwise the trailing numeric path segment is used.

    Example:
        extract_apple_music_track_id(
            "https://music.apple.com/us/album/blinding-lights/1496794033?i=1496794038"
        )
        # "1496794038"
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None

    if (parts.hostname or "").lower() not in ("music.apple.com", "geo.music.apple.com"):
        return None

    track_ids = parse_qs(parts.query).get("i")
    if track_ids:
        return track_ids[0]

    match = APPLE_MUSIC_TRACK_PATTERN.search(url)
    return match.group(1) if match else None
