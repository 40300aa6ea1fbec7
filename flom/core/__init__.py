"""
Core module for flom.

This module provides the foundational components used throughout the application:
    - exceptions: Error taxonomy surfaced to the user
    - platforms: The closed set of supported streaming platforms
    - config: Config file + environment + CLI merge into EffectiveConfig
    - logger: Console/file logging setup

Usage:
    from flom.core import (
        EffectiveConfig, load_config,
        PlatformId, parse_target,
        setup_logging, get_logger,
        FlomError, ConfigError
    )
"""

from flom.core.config import (
    CliOverrides,
    EffectiveConfig,
    FileConfig,
    config_path,
    load_config,
    load_config_file,
    resolve_config,
    write_config_template,
)
from flom.core.exceptions import (
    ConfigError,
    FlomError,
    MalformedInputError,
    MissingCredentialError,
    NetworkError,
    NoSelectionError,
    TargetUnavailableError,
    UnknownTargetError,
    UnrecognizedPlatformError,
    UpstreamError,
)
from flom.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)
from flom.core.platforms import (
    PlatformId,
    SpecialTarget,
    Target,
    parse_platform,
    parse_target,
)

__all__ = [
    # Config
    "CliOverrides",
    "EffectiveConfig",
    "FileConfig",
    "config_path",
    "load_config",
    "load_config_file",
    "resolve_config",
    "write_config_template",
    # Exceptions
    "FlomError",
    "MalformedInputError",
    "UnknownTargetError",
    "UnrecognizedPlatformError",
    "MissingCredentialError",
    "NetworkError",
    "UpstreamError",
    "TargetUnavailableError",
    "NoSelectionError",
    "ConfigError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
    # Platforms
    "PlatformId",
    "SpecialTarget",
    "Target",
    "parse_platform",
    "parse_target",
]
