"""
Exception classes for flom.

This module defines all custom exceptions used throughout the application.
Each exception maps to one failure mode the user can see, so the CLI can
print a single descriptive message and exit non-zero.

Exception Hierarchy:
    FlomError (base)
        MalformedInputError - Input is not a usable URL
            UnknownTargetError - Target name matches no platform
        UnrecognizedPlatformError - URL belongs to no known platform
        MissingCredentialError - No Odesli API key configured
        NetworkError - Transport-level failure
        UpstreamError - Non-success status or unexpected response body
        TargetUnavailableError - Requested platform absent from the LinkSet
        NoSelectionError - Interactive prompt aborted
        ConfigError - Configuration file or environment issues

None of these are retried or recovered locally.
"""


class FlomError(Exception):
    """
    Base exception for all flom errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., url, status).

    Example:
        try:
            converter.convert(url)
        except FlomError as e:
            logger.debug(f"Details: {e.details}")
            click.echo(f"Error: {e.message}", err=True)
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'status_code': HTTP status returned by a remote service
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class MalformedInputError(FlomError):
    """
    Raised when the input is not syntactically a URL.

    Example:
        raise MalformedInputError(
            "invalid url: not-a-url",
            details={'url': 'not-a-url'}
        )
    """
    pass


class UnknownTargetError(MalformedInputError):
    """Raised when a target name (from --to or config) names no platform."""
    pass


class UnrecognizedPlatformError(FlomError):
    """
    Raised when a well-formed URL matches no known streaming platform.

    This is never raised for malformed input; see MalformedInputError.
    """
    pass


class MissingCredentialError(FlomError):
    """
    Raised when a conversion is requested but no Odesli API key is configured.

    Checked before any network call is attempted.
    """
    pass


class NetworkError(FlomError):
    """
    Raised when a request to a remote service fails at transport level.

    Common causes:
        - DNS resolution failure
        - Connection refused or reset
        - Timeout (only when the caller configured one)
    """
    pass


class UpstreamError(FlomError):
    """
    Raised when a remote service answers with an error.

    Covers both non-success HTTP statuses and response bodies that cannot
    be decoded or lack required fields.

    Attributes:
        status_code: The HTTP status code, or None when the status was
                     successful but the body was unusable.

    Example:
        raise UpstreamError(
            "odesli error: status=429",
            details={'status_code': 429, 'body': '...'},
            status_code=429
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class TargetUnavailableError(FlomError):
    """
    Raised when the requested target platform is absent from the LinkSet.

    Never substituted with another platform.
    """
    pass


class NoSelectionError(FlomError):
    """Raised when the interactive target prompt is cancelled (empty input or EOF)."""
    pass


class ConfigError(FlomError):
    """
    Raised when there's an issue with the configuration.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.toml has invalid TOML syntax
        - A field has the wrong type (e.g., simple = "yes")
        - FLOM_OUTPUT_SIMPLE holds an unaccepted literal
        - The default target names no platform

    Example:
        raise ConfigError(
            "'output.simple' must be a boolean",
            details={'file_path': '/home/me/.flom/config.toml', 'field': 'output.simple'}
        )
    """
    pass
