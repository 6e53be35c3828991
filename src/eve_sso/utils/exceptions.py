"""Custom exception hierarchy for EVE SSO.

Provides structured exception classes for different error scenarios.
"""

from __future__ import annotations


class EveSSOError(Exception):
    """Base exception for all EVE SSO errors."""

    pass


class ConfigurationError(EveSSOError):
    """Exception raised for configuration-related errors."""

    pass


class ESIError(EveSSOError):
    """Base exception for SSO and ESI API errors."""

    pass


class SSOTransportError(ESIError):
    """Exception raised when a request never produced a response."""

    pass


class SSOProtocolError(ESIError):
    """Exception raised for a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Raw response body (may be empty).
    """

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SSOParseError(ESIError):
    """Exception raised when a response body cannot be parsed."""

    pass
