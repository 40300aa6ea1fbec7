"""Test output formatting"""

from flom.core.platforms import PlatformId
from flom.music.models import ConversionResult, MediaInfo
from flom.presenter import format_conversion, format_media, format_shortened, format_summary
from flom.shorten.client import ShortenedLink
from flom.utils import parse_url_lines

from tests.conftest import APPLE_MUSIC_URL, SONGLINK_URL, SPOTIFY_URL


class TestPresenter:
    """Test result formatting"""

    def test_simple_conversion(self):
        result = ConversionResult(source_url=SPOTIFY_URL, target_url=APPLE_MUSIC_URL,
                                  target_platform=PlatformId.APPLE_MUSIC)
        assert format_conversion(result, simple=True) == APPLE_MUSIC_URL

    def test_normal_conversion(self):
        result = ConversionResult(
            source_url=SPOTIFY_URL,
            target_url=APPLE_MUSIC_URL,
            source_platform="Spotify",
            target_platform=PlatformId.APPLE_MUSIC,
            source_info=MediaInfo(title="Bad and Boujee", artist="Migos"),
        )
        assert format_conversion(result, simple=False) == (
            "From: Spotify - Bad and Boujee / Migos\n"
            f"To: Apple Music {APPLE_MUSIC_URL}"
        )

    def test_normal_conversion_without_metadata(self):
        result = ConversionResult(source_url=SPOTIFY_URL, target_url=SONGLINK_URL)
        assert format_conversion(result, simple=False) == f"To: Songlink {SONGLINK_URL}"

    def test_format_media(self):
        assert format_media("Spotify", None) == "Spotify"
        assert format_media(None, MediaInfo()) == "Unknown - Unknown title / Unknown artist"

    def test_shortened(self):
        link = ShortenedLink(original_url="https://example.com/long", short_url="https://is.gd/abc123")
        assert format_shortened(link, simple=True) == "https://is.gd/abc123"
        assert format_shortened(link, simple=False) == "https://example.com/long -> https://is.gd/abc123"

    def test_summary(self):
        assert format_summary(3, 2, 1) == "Summary: Total: 3 | Success: 2 | Failed: 1"


class TestParseUrlLines:
    def test_skips_blank_and_comments(self):
        lines = ["https://a\n", "\n", "# note\n", "  https://b  \n"]
        assert parse_url_lines(lines) == ["https://a", "https://b"]
