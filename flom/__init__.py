"""
flom: Convert music streaming links between platforms and shorten URLs.

Given a Spotify, Apple Music, YouTube Music (etc.) link, flom asks the
Odesli (song.link) API for the equivalent links and prints the one for the
requested platform. It can also shorten any URL through is.gd.

Architecture:
    CONVERSION:
        - music/detector: Classify the input URL into a PlatformId
        - music/odesli: One lookup request to Odesli
        - music/models: LinkSet of equivalent links keyed by platform
        - music/selector: Pick the target (explicit, default, or interactive)
        - presenter: Format the result

    SHORTENING:
        - shorten/client: One request to is.gd
        - presenter: Format the result

Modules:
    core/       - Configuration, platforms, logging, exceptions
    music/      - Platform detection and link conversion
    shorten/    - URL shortening
    utils/      - HTTP session and input helpers
    presenter.py - Output formatting
    cli.py      - Command-line interface

Usage:
    Command Line:
        flom "https://open.spotify.com/track/..." --to apple-music
        flom "https://open.spotify.com/track/..."        # choose interactively
        flom --shorten "https://example.com/very/long/url"
        flom config edit

    Python API:
        from flom.core import load_config
        from flom.music import MusicConverter

        config = load_config()
        converter = MusicConverter(config)
        results = converter.convert("https://open.spotify.com/track/...")

Configuration:
    ~/.flom/config.toml, overridden by FLOM_ODESLI_KEY, FLOM_DEFAULT_TARGET,
    FLOM_OUTPUT_SIMPLE and FLOM_USER_COUNTRY:

        [api]
        odesli_key = "your_odesli_key"

        [default]
        target = "spotify"
        user_country = "US"

        [output]
        simple = false

Dependencies:
    - requests: HTTP client for Odesli and is.gd
    - click: CLI framework
    - rich-click: CLI colors
    - colorama: Colored log output
    - python-dotenv: .env support for FLOM_* variables
"""

__version__ = "0.1.0"
__author__ = "flom"
__license__ = "MIT"

# Convenience imports for common usage
from flom.core import (
    ConfigError,
    EffectiveConfig,
    FlomError,
    PlatformId,
    get_logger,
    load_config,
    setup_logging,
)
from flom.music import MusicConverter, detect_platform
from flom.shorten import ShortenClient

__all__ = [
    # Version
    "__version__",
    # Core
    "EffectiveConfig",
    "load_config",
    "setup_logging",
    "get_logger",
    "PlatformId",
    # Exceptions
    "FlomError",
    "ConfigError",
    # Services
    "MusicConverter",
    "detect_platform",
    "ShortenClient",
]
