"""
Command-line interface for flom.

This module implements the CLI using Click; rich-click is used for the
help output colors.

Commands:
    flom <url>... [--to <platform>]     Convert music links
    flom --shorten <url>...             Shorten URLs
    flom config edit                    Open the config file in $EDITOR
    flom config path                    Print the config file path
    flom config show                    Print the effective configuration

Usage:
    # Convert to a specific platform
    flom "https://open.spotify.com/track/..." --to apple-music

    # Choose the target interactively
    flom "https://open.spotify.com/track/..."

    # Every available platform, bare URLs only
    flom "https://open.spotify.com/track/..." --to all --simple

    # Read URLs from a file or stdin
    flom --input links.txt --to tidal
    cat links.txt | flom --to deezer

    # Shorten
    flom --shorten "https://example.com/very/long/url"

Exit Codes:
    0   Success
    1   Conversion/shortening failed (bad URL, network, upstream, selection)
    2   Configuration or usage error
    3   No Odesli API key configured
    130 Interrupted by user
"""

import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, TextIO

import rich_click as click

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "flom convert": [
        {
            "name": "Conversion",
            "options": ["--to", "--shorten", "--simple"],
        },
        {
            "name": "Input",
            "options": ["--input"],
        },
        {
            "name": "Diagnostics",
            "options": ["--verbose", "--log-file", "--help"],
        },
    ],
}

from flom import __version__
from flom.core import (
    CliOverrides,
    ConfigError,
    EffectiveConfig,
    FlomError,
    MissingCredentialError,
    PlatformId,
    SpecialTarget,
    Target,
    UnknownTargetError,
    config_path,
    get_logger,
    load_config,
    parse_target,
    setup_logging,
    shutdown_logging,
    write_config_template,
)
from flom.core.platforms import target_names
from flom.music import MusicConverter
from flom.presenter import format_conversion, format_shortened, format_summary
from flom.shorten import ShortenClient
from flom.utils import parse_url_lines

logger = get_logger(__name__)


DEFAULT_COMMAND = "convert"

EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_MISSING_CREDENTIAL = 3
EXIT_INTERRUPTED = 130


class FlomGroup(click.RichGroup):
    """
    Group that routes anything that isn't a subcommand to `convert`.

    This keeps `flom <url>` working next to `flom config edit`.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if args:
            first = args[0]
            passthrough = first in self.commands or first in ctx.help_option_names or first == "--version"
            if not passthrough:
                args = [DEFAULT_COMMAND, *args]
        elif not sys.stdin.isatty():
            # URLs piped on stdin
            args = [DEFAULT_COMMAND]
        return super().parse_args(ctx, args)


class TargetParamType(click.ParamType):
    """Click parameter type for --to: a platform name, `all` or `songlink`."""

    name = "platform"

    def convert(self, value, param, ctx) -> Target:
        if isinstance(value, (PlatformId, SpecialTarget)):
            return value
        try:
            return parse_target(value)
        except UnknownTargetError as e:
            self.fail(f"{e.message} (choose from: {', '.join(target_names())})", param, ctx)


def _target_label(target: Target | None) -> str:
    if target is None:
        return "(not set)"
    if isinstance(target, PlatformId):
        return target.cli_name
    return target.value


def _echo_error(message: str) -> None:
    click.echo(f"{click.style('Error:', fg='red')} {message}", err=True)


def _exit_code_for(error: FlomError) -> int:
    if isinstance(error, ConfigError):
        return EXIT_CONFIG_ERROR
    if isinstance(error, MissingCredentialError):
        return EXIT_MISSING_CREDENTIAL
    return EXIT_FAILURE


@click.group(cls=FlomGroup)
@click.version_option(__version__, prog_name="flom")
def cli() -> None:
    """
    flom: Convert music links between streaming platforms.

    Any arguments that are not a subcommand are handled by `convert`, so
    `flom <url>` and `flom convert <url>` are the same.

    \b
    BASIC USAGE:
        flom "https://open.spotify.com/track/..." --to apple-music
        flom "https://open.spotify.com/track/..."      # choose interactively
        flom --shorten "https://example.com/very/long/url"

    \b
    CONFIGURATION:
        flom config edit     # ~/.flom/config.toml
    """


@cli.command(DEFAULT_COMMAND)
@click.argument("urls", nargs=-1, metavar="URL...")
@click.option(
    "--to",
    "target",
    type=TargetParamType(),
    default=None,
    metavar="<platform>",
    help="Target platform: " + ", ".join(target_names())
)
@click.option(
    "--shorten",
    is_flag=True,
    help="Shorten the URLs with is.gd instead of converting"
)
@click.option(
    "--simple",
    is_flag=True,
    help="Print only the bare URL"
)
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    metavar="<file>",
    help="Read URLs from a file, one per line"
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show debug messages on stderr"
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    metavar="<path>",
    help="Also write debug logs to this file"
)
@click.pass_context
def convert(
    ctx: click.Context,
    urls: tuple[str, ...],
    target: Optional[Target],
    shorten: bool,
    simple: bool,
    input_file: Optional[TextIO],
    verbose: bool,
    log_file: Optional[Path]
) -> None:
    """
    Convert music links to another platform, or shorten URLs.

    Without --to (and without a configured default target) the available
    platforms are listed and you pick one.
    """
    if shorten and target is not None:
        raise click.UsageError("--to cannot be used with --shorten")

    setup_logging(verbose=verbose, log_file=log_file)
    try:
        exit_code = _run(urls, input_file, target, shorten, simple)
    finally:
        shutdown_logging()
    ctx.exit(exit_code)


def _run(
    urls: tuple[str, ...],
    input_file: Optional[TextIO],
    target: Optional[Target],
    shorten: bool,
    simple: bool
) -> int:
    """
    Execute one invocation and return the exit code.

    Behavior:
        1. Build EffectiveConfig (file < env < flags)
        2. Collect inputs from arguments, --input and stdin
        3. Shorten or convert each input, sequentially
    """
    try:
        config = load_config(CliOverrides(target=target, simple=simple or None))
    except ConfigError as e:
        _echo_error(f"Configuration error: {e.message}")
        logger.debug(f"Config error details: {e.details}")
        return EXIT_CONFIG_ERROR

    inputs = _gather_inputs(urls, input_file)
    if not inputs:
        _echo_error("no input URLs provided")
        return EXIT_CONFIG_ERROR

    logger.info(f"flom {__version__} processing {len(inputs)} input(s)")

    try:
        if shorten:
            client = ShortenClient()
            return _process_each(
                inputs,
                lambda url: [format_shortened(client.shorten(url), config.simple)]
            )

        converter = MusicConverter(config)
        return _process_each(inputs, lambda url: _convert_one(converter, url, config))

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        return EXIT_FAILURE


def _gather_inputs(urls: Iterable[str], input_file: Optional[TextIO]) -> list[str]:
    inputs = parse_url_lines(urls)
    if input_file is not None:
        inputs.extend(parse_url_lines(input_file))
    if not inputs and not sys.stdin.isatty():
        inputs.extend(parse_url_lines(sys.stdin))
    return inputs


def _convert_one(converter: MusicConverter, url: str, config: EffectiveConfig) -> list[str]:
    results = converter.convert(url)
    separator = "\n" if config.simple else "\n\n"
    return [separator.join(format_conversion(result, config.simple) for result in results)]


def _process_each(inputs: list[str], handler: Callable[[str], list[str]]) -> int:
    """
    Run handler on every input and print its output lines.

    A failure is reported and processing continues with the next input.
    The summary line is printed only for batches.

    Returns:
        0 if everything succeeded; for a single input the error-specific
        exit code; EXIT_FAILURE for a batch with failures.
    """
    success = 0
    failed = 0
    last_error: FlomError | None = None
    batch = len(inputs) > 1

    for url in inputs:
        try:
            outputs = handler(url)
        except FlomError as e:
            failed += 1
            last_error = e
            if batch:
                click.echo(f"{click.style('Failed', fg='red')} {url}: {e.message}", err=True)
            else:
                _echo_error(e.message)
            logger.debug(f"Failure details for {url}: {e.details}")
            continue

        for text in outputs:
            click.echo(text)
        success += 1

    if batch:
        click.echo(format_summary(len(inputs), success, failed), err=True)

    if last_error is None:
        return 0
    if batch:
        return EXIT_FAILURE
    return _exit_code_for(last_error)


@cli.group("config")
def config_group() -> None:
    """Manage the flom configuration file."""


@config_group.command("edit")
def config_edit() -> None:
    """Open the config file in $EDITOR, creating it from a template if missing."""
    try:
        path = write_config_template()
    except ConfigError as e:
        _echo_error(e.message)
        sys.exit(EXIT_CONFIG_ERROR)
    click.edit(filename=str(path))


@config_group.command("path")
def config_show_path() -> None:
    """Print the config file path."""
    click.echo(str(config_path()))


@config_group.command("show")
def config_show() -> None:
    """Print the effective configuration (API key masked)."""
    try:
        config = load_config()
    except ConfigError as e:
        _echo_error(f"Configuration error: {e.message}")
        sys.exit(EXIT_CONFIG_ERROR)

    path = config_path()
    click.echo(f"config file:    {path}{'' if path.exists() else ' (missing)'}")
    click.echo(f"odesli_key:     {config.masked_key or '(not set)'}")
    click.echo(f"default_target: {_target_label(config.default_target)}")
    click.echo(f"simple:         {'true' if config.simple else 'false'}")
    click.echo(f"user_country:   {config.user_country}")


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `flom` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
