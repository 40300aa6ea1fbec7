"""
Configuration management for flom.

This module handles loading the per-user config file, reading environment
variables and merging both with CLI flags into one immutable
EffectiveConfig, built once at startup.

Precedence (lowest to highest):
    1. ~/.flom/config.toml
    2. Environment variables (FLOM_*), including a .env file in the CWD
    3. CLI flags (--to, --simple)

Example config.toml:
    [api]
    odesli_key = "your_odesli_key_here"

    [default]
    target = "apple-music"
    user_country = "US"

    [output]
    simple = false

Note:
    The API key is stored in plain text. No encryption is performed.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv

from flom.core.exceptions import ConfigError, UnknownTargetError
from flom.core.logger import get_logger
from flom.core.platforms import Target, parse_target

logger = get_logger(__name__)


CONFIG_DIRNAME = ".flom"
CONFIG_FILENAME = "config.toml"

DEFAULT_USER_COUNTRY = "US"

ENV_ODESLI_KEY = "FLOM_ODESLI_KEY"
ENV_DEFAULT_TARGET = "FLOM_DEFAULT_TARGET"
ENV_OUTPUT_SIMPLE = "FLOM_OUTPUT_SIMPLE"
ENV_USER_COUNTRY = "FLOM_USER_COUNTRY"

_TRUE_LITERALS = ("true", "1")
_FALSE_LITERALS = ("false", "0")

CONFIG_TEMPLATE = """\
# flom configuration
# Environment variables (FLOM_ODESLI_KEY, FLOM_DEFAULT_TARGET,
# FLOM_OUTPUT_SIMPLE, FLOM_USER_COUNTRY) override the values below.

[api]
# Odesli (song.link) API key. Stored in plain text.
# odesli_key = ""

[default]
# Target used when --to is not given: spotify, apple-music, itunes, youtube,
# youtube-music, tidal, deezer, amazon-music, all, songlink
# target = "spotify"
user_country = "US"

[output]
# Print only the bare URL
simple = false
"""


@dataclass(frozen=True)
class ApiConfig:
    """
    The [api] section.

    Attributes:
        odesli_key: Odesli API key, or None when not configured.
    """
    odesli_key: str | None = None


@dataclass(frozen=True)
class DefaultConfig:
    """
    The [default] section.

    Attributes:
        target: Raw default target name as written in the file.
        user_country: Two-letter country code passed to Odesli.
    """
    target: str | None = None
    user_country: str | None = None


@dataclass(frozen=True)
class OutputConfig:
    """The [output] section."""
    simple: bool | None = None


@dataclass(frozen=True)
class FileConfig:
    """
    Contents of config.toml. Every field may be absent.

    A missing file yields FileConfig() with all sections empty.
    """
    api: ApiConfig = field(default_factory=ApiConfig)
    default: DefaultConfig = field(default_factory=DefaultConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


@dataclass(frozen=True)
class CliOverrides:
    """
    Values given on the command line. None means "not given".

    Attributes:
        target: Parsed --to value.
        simple: True when --simple was passed.
    """
    target: Target | None = None
    simple: bool | None = None


@dataclass(frozen=True)
class EffectiveConfig:
    """
    Final merged configuration used for one invocation.

    Attributes:
        odesli_key: API key for the lookup service, or None.
        default_target: Target used when none is given explicitly.
        simple: Emit only bare URLs.
        user_country: Country code for the lookup service.
    """
    odesli_key: str | None = None
    default_target: Target | None = None
    simple: bool = False
    user_country: str = DEFAULT_USER_COUNTRY

    @property
    def masked_key(self) -> str | None:
        """The API key with all but the last four characters hidden."""
        if self.odesli_key is None:
            return None
        visible = self.odesli_key[-4:] if len(self.odesli_key) > 8 else ""
        return "*" * (len(self.odesli_key) - len(visible)) + visible


def config_path() -> Path:
    """Return the per-user config file path (~/.flom/config.toml)."""
    return Path.home() / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config_file(path: Path | None = None) -> FileConfig:
    """
    Load config.toml.

    Args:
        path: Explicit path to the config file. Defaults to config_path().

    Returns:
        FileConfig: Parsed sections. All-empty if the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, has invalid TOML syntax,
                     or a field has the wrong type.
    """
    if path is None:
        path = config_path()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return FileConfig()

    try:
        with open(path, "rb") as f:
            raw_config = tomllib.load(f)
    except OSError as e:
        raise ConfigError(
            f"failed to read config: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(
            f"failed to parse config: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    logger.debug(f"Loaded config file {path}")

    api_section = _section(raw_config, "api", path)
    default_section = _section(raw_config, "default", path)
    output_section = _section(raw_config, "output", path)

    return FileConfig(
        api=ApiConfig(
            odesli_key=_optional_str(api_section, "api.odesli_key", path)
        ),
        default=DefaultConfig(
            target=_optional_str(default_section, "default.target", path),
            user_country=_optional_str(default_section, "default.user_country", path)
        ),
        output=OutputConfig(
            simple=_optional_bool(output_section, "output.simple", path)
        )
    )


def _section(raw_config: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    section = raw_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a table",
            details={"file_path": str(path), "section": name}
        )
    return section


def _optional_str(section: dict[str, Any], field_name: str, path: Path) -> str | None:
    value = section.get(field_name.split(".", 1)[1])
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"'{field_name}' must be a string",
            details={"file_path": str(path), "field": field_name}
        )
    return value.strip() or None


def _optional_bool(section: dict[str, Any], field_name: str, path: Path) -> bool | None:
    value = section.get(field_name.split(".", 1)[1])
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ConfigError(
            f"'{field_name}' must be a boolean",
            details={"file_path": str(path), "field": field_name}
        )
    return value


def _env_value(environ: Mapping[str, str], name: str) -> str | None:
    """Environment value, treating empty/whitespace-only as absent."""
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_bool_literal(value: str, source: str) -> bool:
    """
    Parse one of the accepted boolean literals: true/false/1/0.

    Raises:
        ConfigError: For any other value.
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_LITERALS:
        return True
    if normalized in _FALSE_LITERALS:
        return False
    raise ConfigError(
        f"{source} must be one of true, false, 1, 0 (got '{value}')",
        details={"source": source, "value": value}
    )


def _parse_default_target(value: str, source: str) -> Target:
    try:
        return parse_target(value)
    except UnknownTargetError as e:
        raise ConfigError(
            f"{source}: {e.message}",
            details={"source": source, **e.details}
        ) from e


def resolve_config(
    file_config: FileConfig,
    environ: Mapping[str, str],
    overrides: CliOverrides | None = None
) -> EffectiveConfig:
    """
    Merge file, environment and CLI layers into one EffectiveConfig.

    Each key is taken from the highest layer that provides it:
    CLI flag > environment variable > config file > default.

    Args:
        file_config: Parsed config.toml (FileConfig() when missing).
        environ: Environment mapping, usually os.environ.
        overrides: Values from the command line.

    Returns:
        EffectiveConfig: Frozen snapshot for this invocation.

    Raises:
        ConfigError: If FLOM_OUTPUT_SIMPLE is not an accepted literal, or
                     the default target (from env or file) names no platform.

    Example:
        file_config = FileConfig(default=DefaultConfig(target="spotify"))
        config = resolve_config(file_config, {"FLOM_DEFAULT_TARGET": "apple-music"})
        config.default_target  # PlatformId.APPLE_MUSIC
    """
    overrides = overrides or CliOverrides()

    odesli_key = _env_value(environ, ENV_ODESLI_KEY) or file_config.api.odesli_key

    if overrides.target is not None:
        default_target = overrides.target
    elif (env_target := _env_value(environ, ENV_DEFAULT_TARGET)) is not None:
        default_target = _parse_default_target(env_target, ENV_DEFAULT_TARGET)
    elif file_config.default.target is not None:
        default_target = _parse_default_target(file_config.default.target, "default.target")
    else:
        default_target = None

    if overrides.simple:
        simple = True
    elif (env_simple := _env_value(environ, ENV_OUTPUT_SIMPLE)) is not None:
        simple = parse_bool_literal(env_simple, ENV_OUTPUT_SIMPLE)
    elif file_config.output.simple is not None:
        simple = file_config.output.simple
    else:
        simple = False

    user_country = (
        _env_value(environ, ENV_USER_COUNTRY)
        or file_config.default.user_country
        or DEFAULT_USER_COUNTRY
    )

    return EffectiveConfig(
        odesli_key=odesli_key,
        default_target=default_target,
        simple=simple,
        user_country=user_country.upper()
    )


def load_config(
    overrides: CliOverrides | None = None,
    path: Path | None = None,
    load_env_file: bool = True
) -> EffectiveConfig:
    """
    Build the EffectiveConfig for this invocation.

    Should be called once at application startup.

    Args:
        overrides: Values from the command line.
        path: Explicit config file path. Defaults to config_path().
        load_env_file: Load a .env file from the CWD into the environment
                       first. Variables already set are not overridden.

    Raises:
        ConfigError: See load_config_file() and resolve_config().
    """
    if load_env_file:
        load_dotenv(Path.cwd() / ".env", override=False)
    return resolve_config(load_config_file(path), os.environ, overrides)


def write_config_template(path: Path | None = None) -> Path:
    """
    Create the config file with a commented template if it doesn't exist.

    Returns:
        The config file path.

    Raises:
        ConfigError: If the directory or file cannot be created.
    """
    if path is None:
        path = config_path()

    if path.exists():
        return path

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            f"failed to write config: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    logger.info(f"Created config template at {path}")
    return path
