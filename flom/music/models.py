"""
Data models for music link conversion.

This module defines the dataclasses that flow between the lookup client,
the target selector and the presenter:

    OdesliResponse -> LinkSet -> ResolvedTarget -> ConversionResult

OdesliLink, OdesliEntity and OdesliResponse mirror the raw Odesli JSON.
LinkSet is the platform-keyed view of a response restricted to the
platforms flom supports.

Usage:
    response = OdesliResponse.from_api_data(payload)
    link_set = LinkSet.from_response(response)
    link_set.get(PlatformId.APPLE_MUSIC)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from flom.core.exceptions import TargetUnavailableError, UpstreamError
from flom.core.logger import get_logger
from flom.core.platforms import PlatformId

logger = get_logger(__name__)


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    """Fetch a required field from an API payload."""
    if not isinstance(data, Mapping) or key not in data:
        raise UpstreamError(
            f"unexpected {context}: missing '{key}'",
            details={"missing_field": key, "context": context}
        )
    return data[key]


def _require_str(data: Mapping[str, Any], key: str, context: str) -> str:
    value = _require(data, key, context)
    if not isinstance(value, str):
        raise UpstreamError(
            f"unexpected {context}: '{key}' is not a string",
            details={"field": key, "context": context}
        )
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class MediaInfo:
    """Title/artist/album as reported for one entity. Any field may be unknown."""
    title: str | None = None
    artist: str | None = None
    album: str | None = None


@dataclass(frozen=True)
class OdesliLink:
    """
    One entry of `linksByPlatform`.

    Attributes:
        entity_unique_id: Key into `entitiesByUniqueId`.
        url: Link to the item on that platform.
    """
    entity_unique_id: str
    url: str

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "OdesliLink":
        return cls(
            entity_unique_id=_require_str(data, "entityUniqueId", "odesli link"),
            url=_require_str(data, "url", "odesli link")
        )


@dataclass(frozen=True)
class OdesliEntity:
    """One entry of `entitiesByUniqueId`. Only the fields flom uses."""
    id: str | None = None
    title: str | None = None
    artist_name: str | None = None
    album_name: str | None = None
    api_provider: str | None = None

    @classmethod
    def from_api_data(cls, data: Mapping[str, Any]) -> "OdesliEntity":
        if not isinstance(data, Mapping):
            raise UpstreamError("unexpected odesli entity: not an object")
        raw_id = data.get("id")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            title=_optional_str(data, "title"),
            artist_name=_optional_str(data, "artistName"),
            album_name=_optional_str(data, "albumName"),
            api_provider=_optional_str(data, "apiProvider")
        )

    def to_media_info(self) -> MediaInfo:
        return MediaInfo(title=self.title, artist=self.artist_name, album=self.album_name)


@dataclass(frozen=True)
class OdesliResponse:
    """
    Parsed body of a successful `/v1-alpha.1/links` request.

    Attributes:
        entity_unique_id: Entity the source URL resolved to.
        page_url: The song.link landing page for this item.
        links_by_platform: Odesli platform key -> link (all platforms,
                           including ones flom does not support).
        entities_by_unique_id: Entity id -> metadata.
    """
    entity_unique_id: str
    page_url: str
    links_by_platform: dict[str, OdesliLink]
    entities_by_unique_id: dict[str, OdesliEntity] = field(default_factory=dict)

    @classmethod
    def from_api_data(cls, data: Any) -> "OdesliResponse":
        """
        Build a response from decoded JSON.

        Raises:
            UpstreamError: If a required field is missing or has the wrong shape.
        """
        if not isinstance(data, Mapping):
            raise UpstreamError("unexpected odesli response: body is not an object")

        raw_links = _require(data, "linksByPlatform", "odesli response")
        if not isinstance(raw_links, Mapping):
            raise UpstreamError("unexpected odesli response: 'linksByPlatform' is not an object")

        raw_entities = data.get("entitiesByUniqueId") or {}
        if not isinstance(raw_entities, Mapping):
            raise UpstreamError("unexpected odesli response: 'entitiesByUniqueId' is not an object")

        return cls(
            entity_unique_id=_require_str(data, "entityUniqueId", "odesli response"),
            page_url=_require_str(data, "pageUrl", "odesli response"),
            links_by_platform={
                key: OdesliLink.from_api_data(value) for key, value in raw_links.items()
            },
            entities_by_unique_id={
                key: OdesliEntity.from_api_data(value) for key, value in raw_entities.items()
            }
        )

    @property
    def source_entity(self) -> OdesliEntity | None:
        return self.entities_by_unique_id.get(self.entity_unique_id)

    def entity_for(self, link: OdesliLink) -> OdesliEntity | None:
        return self.entities_by_unique_id.get(link.entity_unique_id)


@dataclass(frozen=True)
class SourceLink:
    """
    The user's input URL and the platform it was detected as.

    Attributes:
        url: Input URL (whitespace stripped).
        platform: Detected platform.
    """
    url: str
    platform: PlatformId


@dataclass(frozen=True)
class ResolvedTarget:
    """A single (platform, url) pair chosen from a LinkSet."""
    platform: PlatformId
    url: str


class LinkSet:
    """
    Equivalent links for one track/album, keyed by PlatformId.

    At most one URL per platform. Not every platform is present. Iteration
    and platforms() follow the fixed PlatformId order, independent of the
    order Odesli returned the keys in.

    Example:
        link_set = LinkSet({PlatformId.SPOTIFY: "https://open.spotify.com/track/abc"})
        PlatformId.SPOTIFY in link_set   # True
        link_set.resolve(PlatformId.TIDAL)  # raises TargetUnavailableError
    """

    def __init__(self, links: Mapping[PlatformId, str]) -> None:
        ordered = {platform: links[platform] for platform in PlatformId if platform in links}
        self._links = MappingProxyType(ordered)

    @classmethod
    def from_response(cls, response: OdesliResponse) -> "LinkSet":
        """
        Keep the links of supported platforms; other Odesli keys are dropped.
        """
        links: dict[PlatformId, str] = {}
        for key, link in response.links_by_platform.items():
            platform = PlatformId.from_key(key)
            if platform is None:
                logger.debug(f"Ignoring unsupported platform '{key}'")
                continue
            links[platform] = link.url
        return cls(links)

    def __contains__(self, platform: object) -> bool:
        return platform in self._links

    def __iter__(self) -> Iterator[PlatformId]:
        return iter(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkSet):
            return NotImplemented
        return dict(self._links) == dict(other._links)

    def __repr__(self) -> str:
        entries = ", ".join(f"{p.name}={url!r}" for p, url in self._links.items())
        return f"LinkSet({entries})"

    def platforms(self) -> list[PlatformId]:
        return list(self._links)

    def get(self, platform: PlatformId) -> str | None:
        return self._links.get(platform)

    def items(self) -> list[tuple[PlatformId, str]]:
        return list(self._links.items())

    def resolve(self, platform: PlatformId) -> ResolvedTarget:
        """
        Pick the link for a platform.

        Raises:
            TargetUnavailableError: If the platform has no link in this set.
        """
        url = self._links.get(platform)
        if url is None:
            raise TargetUnavailableError(
                f"target platform not available for this link: {platform.display_name}",
                details={
                    "target": platform.key,
                    "available": [p.key for p in self._links],
                }
            )
        return ResolvedTarget(platform=platform, url=url)


@dataclass(frozen=True)
class ConversionResult:
    """
    Outcome of converting one source URL, ready for the presenter.

    Attributes:
        source_url: URL the user gave.
        target_url: Converted link.
        source_platform: Display name of the source platform, if known.
        target_platform: Platform of the target link, or None for the
                         song.link landing page.
        source_info: Metadata of the source entity, if Odesli returned it.
        target_info: Metadata of the target entity, if Odesli returned it.
    """
    source_url: str
    target_url: str
    source_platform: str | None = None
    target_platform: PlatformId | None = None
    source_info: MediaInfo | None = None
    target_info: MediaInfo | None = None

    @property
    def target_label(self) -> str:
        """Display name for the target (song.link page when no platform)."""
        if self.target_platform is None:
            return "Songlink"
        return self.target_platform.display_name
