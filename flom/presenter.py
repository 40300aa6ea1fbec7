"""
Output formatting.

Turns results into the text written to stdout. Simple mode emits only the
bare URL so the output can be piped; normal mode adds labels.

Normal conversion output:
    From: Spotify - Blinding Lights / The Weeknd
    To: Apple Music https://music.apple.com/us/album/...

Normal shorten output:
    https://example.com/very/long/url -> https://is.gd/abc123
"""

from flom.music.models import ConversionResult, MediaInfo
from flom.shorten.client import ShortenedLink


def format_media(platform: str | None, info: MediaInfo | None) -> str:
    """Render "<platform> - <title> / <artist>", or just the platform."""
    platform = platform or "Unknown"
    if info is None:
        return platform
    title = info.title or "Unknown title"
    artist = info.artist or "Unknown artist"
    return f"{platform} - {title} / {artist}"


def format_conversion(result: ConversionResult, simple: bool) -> str:
    """
    Format one conversion result.

    Args:
        result: The conversion to show.
        simple: Emit only the target URL.
    """
    if simple:
        return result.target_url

    lines = []
    if result.source_info is not None:
        lines.append(f"From: {format_media(result.source_platform, result.source_info)}")
    lines.append(f"To: {result.target_label} {result.target_url}")
    return "\n".join(lines)


def format_shortened(link: ShortenedLink, simple: bool) -> str:
    """Format a shortened link: bare short URL, or "<long> -> <short>"."""
    if simple:
        return link.short_url
    return f"{link.original_url} -> {link.short_url}"


def format_summary(total: int, success: int, failed: int) -> str:
    """One-line batch summary."""
    return f"Summary: Total: {total} | Success: {success} | Failed: {failed}"
