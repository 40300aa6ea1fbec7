"""
Target selection.

Turns a LinkSet plus an optional requested platform into a single
ResolvedTarget. When no platform is requested, the available platforms are
offered to the user through a Prompter; this is the only place the
process waits for input.
"""

from typing import Protocol, Sequence

import click

from flom.core.exceptions import NoSelectionError
from flom.core.logger import get_logger
from flom.core.platforms import PlatformId
from flom.music.models import LinkSet, ResolvedTarget

logger = get_logger(__name__)


class Prompter(Protocol):
    """A single blocking choice among labelled options."""

    def choose(self, title: str, options: Sequence[str]) -> int | None:
        """
        Ask the user to pick one option.

        Returns:
            The zero-based index of the chosen option, or None if the user
            cancelled (empty input, EOF, Ctrl-C).
        """
        ...


class ClickPrompter:
    """
    Numbered-list prompt on the terminal using click.

    Example output:
        Select target platform
          1) Spotify
          2) Apple Music
        Choice:
    """

    def __init__(self, err: bool = True) -> None:
        # Prompt on stderr so stdout only carries results
        self.err = err

    def choose(self, title: str, options: Sequence[str]) -> int | None:
        click.echo(title, err=self.err)
        for number, label in enumerate(options, 1):
            click.echo(f"  {number}) {label}", err=self.err)

        while True:
            try:
                raw = click.prompt(
                    "Choice",
                    default="",
                    show_default=False,
                    err=self.err
                )
            except click.Abort:
                return None

            raw = raw.strip()
            if not raw:
                return None
            if raw.isdigit() and 1 <= int(raw) <= len(options):
                return int(raw) - 1
            click.echo(f"Enter a number between 1 and {len(options)}", err=self.err)


def select_target(
    link_set: LinkSet,
    target: PlatformId | None,
    prompter: Prompter | None = None
) -> ResolvedTarget:
    """
    Resolve the link to output.

    Args:
        link_set: Links returned by one lookup.
        target: Requested platform, or None to ask the user.
        prompter: Input source for the interactive choice. Defaults to
                  ClickPrompter.

    Returns:
        ResolvedTarget whose platform is a key of link_set.

    Raises:
        TargetUnavailableError: If target is given but absent from link_set.
        NoSelectionError: If the prompt is cancelled or there is nothing to choose.
    """
    if target is not None:
        return link_set.resolve(target)

    options = link_set.platforms()
    if not options:
        raise NoSelectionError("no target platforms available for this link")

    prompter = prompter or ClickPrompter()
    index = prompter.choose(
        "Select target platform",
        [platform.display_name for platform in options]
    )
    if index is None:
        raise NoSelectionError("no selection made")
    if not 0 <= index < len(options):
        raise NoSelectionError(f"invalid selection: {index + 1}")

    chosen = options[index]
    logger.debug(f"User selected {chosen.display_name}")
    return link_set.resolve(chosen)
