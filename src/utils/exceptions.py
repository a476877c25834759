"""Custom exception hierarchy for ISS Flyover.

Provides structured exception classes for the lookup pipeline. Every lookup
stage converts its own failures into one of the ``ResolutionError``
subclasses so callers can handle all of them uniformly.
"""

from __future__ import annotations

BODY_PREVIEW_LIMIT = 200


def _preview(body: str | None) -> str:
    if not body:
        return "<empty>"
    if len(body) > BODY_PREVIEW_LIMIT:
        return body[:BODY_PREVIEW_LIMIT] + "..."
    return body


class FlyoverError(Exception):
    """Base exception for all ISS Flyover errors."""

    pass


class ConfigurationError(FlyoverError):
    """Exception raised for configuration-related errors."""

    pass


class ResolutionError(FlyoverError):
    """Base exception for a failed lookup stage.

    Attributes:
        service: Name of the remote service that failed (e.g. "IP").
    """

    def __init__(self, message: str, service: str = "lookup") -> None:
        super().__init__(message)
        self.service = service


class TransportError(ResolutionError):
    """Exception raised when a request never produced a response.

    Covers DNS failures, refused connections and transport timeouts. The
    underlying ``httpx`` exception is chained as ``__cause__``.
    """

    pass


class ServiceStatusError(ResolutionError):
    """Exception raised when a service answers with a non-success status."""

    def __init__(self, service: str, status_code: int, body: str) -> None:
        super().__init__(
            f"Status Code {status_code} when fetching {service}. "
            f"Response: {_preview(body)}",
            service=service,
        )
        self.status_code = status_code
        self.body = body


class ServiceLogicError(ResolutionError):
    """Exception raised when a 200 response embeds a failure indicator."""

    def __init__(self, service: str, body: str, reason: str | None = None) -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"{service} service reported failure{detail}. Response: {_preview(body)}",
            service=service,
        )
        self.body = body
        self.reason = reason


class ParseError(ResolutionError):
    """Exception raised when a response body does not match the expected shape."""

    def __init__(self, service: str, body: str, reason: str | None = None) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Could not parse {service} response{detail}. Response: {_preview(body)}",
            service=service,
        )
        self.body = body
        self.reason = reason
