"""
URL shortening for flom.

Independent of music conversion: any http(s) URL can be shortened.

Usage:
    from flom.shorten import ShortenClient

    link = ShortenClient().shorten("https://example.com/very/long/url")
    link.short_url  # "https://is.gd/abc123"
"""

from flom.shorten.client import ShortenClient, ShortenedLink

__all__ = [
    "ShortenClient",
    "ShortenedLink",
]
