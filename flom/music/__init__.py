"""
Music link conversion for flom.

Modules:
    detector: URL -> PlatformId
    odesli: Odesli (song.link) lookup client
    models: OdesliResponse, LinkSet, ResolvedTarget, ConversionResult
    selector: Target selection (deterministic or interactive)
    converter: MusicConverter orchestration

Usage:
    from flom.music import MusicConverter, detect_platform
"""

from flom.music.converter import MusicConverter
from flom.music.detector import detect_platform, validate_url
from flom.music.models import (
    ConversionResult,
    LinkSet,
    MediaInfo,
    OdesliResponse,
    ResolvedTarget,
    SourceLink,
)
from flom.music.odesli import OdesliClient
from flom.music.selector import ClickPrompter, Prompter, select_target

__all__ = [
    "MusicConverter",
    "detect_platform",
    "validate_url",
    "ConversionResult",
    "LinkSet",
    "MediaInfo",
    "OdesliResponse",
    "ResolvedTarget",
    "SourceLink",
    "OdesliClient",
    "ClickPrompter",
    "Prompter",
    "select_target",
]
