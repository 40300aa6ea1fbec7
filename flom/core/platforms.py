"""
Supported streaming platforms.

PlatformId is the closed set of services flom can detect and convert to.
Member order is the fixed display order used everywhere a list of
platforms is shown (interactive prompt, `--to all`).

Each member carries:
    - key: The identifier Odesli uses in `linksByPlatform`
    - display_name: Canonical human-readable name
    - aliases: Accepted spellings for `--to` and the config default target

Usage:
    from flom.core.platforms import PlatformId, parse_target

    PlatformId.APPLE_MUSIC.display_name    # "Apple Music"
    PlatformId.from_key("youtubeMusic")    # PlatformId.YOUTUBE_MUSIC
    parse_target("apple-music")            # PlatformId.APPLE_MUSIC
    parse_target("all")                    # SpecialTarget.ALL
"""

from enum import Enum

from flom.core.exceptions import UnknownTargetError


class PlatformId(Enum):
    """Streaming platform identifier, declared in fixed display order."""

    SPOTIFY = ("spotify", "Spotify", ())
    APPLE_MUSIC = ("appleMusic", "Apple Music", ("apple-music", "apple_music", "apple"))
    ITUNES = ("itunes", "iTunes", ())
    YOUTUBE = ("youtube", "YouTube", ())
    YOUTUBE_MUSIC = ("youtubeMusic", "YouTube Music", ("youtube-music", "youtube_music"))
    TIDAL = ("tidal", "Tidal", ())
    DEEZER = ("deezer", "Deezer", ())
    AMAZON_MUSIC = ("amazonMusic", "Amazon Music", ("amazon-music", "amazon_music"))

    def __init__(self, key: str, display_name: str, aliases: tuple[str, ...]) -> None:
        self.key = key
        self.display_name = display_name
        self.aliases = (key.lower(),) + aliases

    def __str__(self) -> str:
        return self.display_name

    @property
    def cli_name(self) -> str:
        """Canonical name accepted by --to, e.g. "apple-music"."""
        return self.aliases[1] if len(self.aliases) > 1 else self.aliases[0]

    @classmethod
    def from_key(cls, key: str) -> "PlatformId | None":
        """Return the platform for an Odesli `linksByPlatform` key, or None."""
        for platform in cls:
            if platform.key == key:
                return platform
        return None

    @classmethod
    def ordered(cls) -> list["PlatformId"]:
        """All platforms in fixed display order."""
        return list(cls)


class SpecialTarget(Enum):
    """Targets that are not a single platform."""

    ALL = "all"            # every available link
    SONGLINK = "songlink"  # the Odesli landing page

    def __str__(self) -> str:
        return self.value


Target = PlatformId | SpecialTarget


def parse_platform(name: str) -> PlatformId | None:
    """
    Parse a user-supplied platform name.

    Matching ignores case and surrounding whitespace and accepts the
    Odesli key as well as the listed aliases.

    Args:
        name: Platform name, e.g. "spotify", "Apple-Music", "youtubeMusic".

    Returns:
        The matching PlatformId, or None if nothing matches.
    """
    normalized = name.strip().lower()
    if not normalized:
        return None
    for platform in PlatformId:
        if normalized in platform.aliases:
            return platform
    return None


def parse_target(name: str) -> Target:
    """
    Parse a target name, including the `all` and `songlink` pseudo-targets.

    Raises:
        UnknownTargetError: If the name matches no platform or pseudo-target.
    """
    normalized = name.strip().lower()
    for special in SpecialTarget:
        if normalized == special.value:
            return special

    platform = parse_platform(normalized)
    if platform is None:
        raise UnknownTargetError(
            f"unknown target: {name}",
            details={"target": name, "accepted": target_names()}
        )
    return platform


def target_names() -> list[str]:
    """Canonical target names for help text and error messages."""
    names = [platform.cli_name for platform in PlatformId]
    return names + [special.value for special in SpecialTarget]
