"""
Music link conversion.

MusicConverter ties the pieces together for one source URL:

    detect_platform -> OdesliClient.fetch_links -> LinkSet -> select_target

and packages the outcome as ConversionResult objects for the presenter.

Target resolution order:
    1. The target passed to convert() (from --to)
    2. EffectiveConfig.default_target
    3. Interactive choice through the Prompter

Usage:
    converter = MusicConverter(config)
    for result in converter.convert(url, PlatformId.APPLE_MUSIC):
        print(result.target_url)
"""

from flom.core.config import EffectiveConfig
from flom.core.exceptions import TargetUnavailableError
from flom.core.logger import get_logger
from flom.core.platforms import PlatformId, SpecialTarget, Target
from flom.music.detector import detect_platform
from flom.music.models import (
    ConversionResult,
    LinkSet,
    OdesliResponse,
    ResolvedTarget,
    SourceLink,
)
from flom.music.odesli import OdesliClient
from flom.music.selector import Prompter, select_target

logger = get_logger(__name__)


class MusicConverter:
    """
    Converts music links between streaming platforms.

    Attributes:
        config: Effective configuration for this invocation.
        client: Lookup client (built from config when not given).
        prompter: Input source for interactive selection (None = terminal).
    """

    def __init__(
        self,
        config: EffectiveConfig,
        client: OdesliClient | None = None,
        prompter: Prompter | None = None
    ) -> None:
        self.config = config
        self.client = client or OdesliClient(
            api_key=config.odesli_key,
            user_country=config.user_country
        )
        self.prompter = prompter

    def detect(self, url: str) -> SourceLink:
        """
        Validate and classify the input URL.

        Raises:
            MalformedInputError: If the input is not a URL.
            UnrecognizedPlatformError: If no platform matches.
        """
        platform = detect_platform(url)
        logger.debug(f"Detected {platform.display_name} link")
        return SourceLink(url=url.strip(), platform=platform)

    def fetch(self, source: SourceLink) -> tuple[OdesliResponse, LinkSet]:
        """Run the single lookup for a source link."""
        response = self.client.fetch_links(source.url)
        return response, LinkSet.from_response(response)

    def convert(self, url: str, target: Target | None = None) -> list[ConversionResult]:
        """
        Convert one URL.

        Args:
            url: Source music URL.
            target: Explicit target; falls back to the configured default,
                    then to the interactive prompt.

        Returns:
            One result, or one per available platform for SpecialTarget.ALL.

        Raises:
            MalformedInputError, UnrecognizedPlatformError: Bad input.
            MissingCredentialError: No API key (before any network call).
            NetworkError, UpstreamError: Lookup failed.
            TargetUnavailableError: Requested platform not in the results, or
                                    no supported platform at all for `all`.
            NoSelectionError: Interactive prompt cancelled.
        """
        source = self.detect(url)
        response, link_set = self.fetch(source)

        if target is None:
            target = self.config.default_target

        if target is SpecialTarget.ALL:
            if not link_set:
                raise TargetUnavailableError(
                    "no target platforms available for this link",
                    details={"url": source.url}
                )
            return [
                self._build_result(source, response, link_set.resolve(platform))
                for platform in link_set.platforms()
            ]

        if target is SpecialTarget.SONGLINK:
            return [self._build_songlink_result(source, response)]

        resolved = select_target(link_set, target, self.prompter)
        return [self._build_result(source, response, resolved)]

    def _source_platform_name(self, source: SourceLink, response: OdesliResponse) -> str:
        entity = response.source_entity
        if entity is not None and entity.api_provider:
            provider = PlatformId.from_key(entity.api_provider)
            return provider.display_name if provider else entity.api_provider
        return source.platform.display_name

    def _build_result(
        self,
        source: SourceLink,
        response: OdesliResponse,
        resolved: ResolvedTarget
    ) -> ConversionResult:
        source_entity = response.source_entity
        target_link = response.links_by_platform.get(resolved.platform.key)
        target_entity = response.entity_for(target_link) if target_link else None

        return ConversionResult(
            source_url=source.url,
            target_url=resolved.url,
            source_platform=self._source_platform_name(source, response),
            target_platform=resolved.platform,
            source_info=source_entity.to_media_info() if source_entity else None,
            target_info=target_entity.to_media_info() if target_entity else None
        )

    def _build_songlink_result(
        self,
        source: SourceLink,
        response: OdesliResponse
    ) -> ConversionResult:
        source_entity = response.source_entity
        return ConversionResult(
            source_url=source.url,
            target_url=response.page_url,
            source_platform=self._source_platform_name(source, response),
            target_platform=None,
            source_info=source_entity.to_media_info() if source_entity else None
        )
