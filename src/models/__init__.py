"""ISS flyover data models (domain layer)."""

from .iss import (
    Coordinates,
    GeoLocationResponse,
    IPEchoResponse,
    PassEvent,
    PassTimesResponse,
)

__all__ = [
    "Coordinates",
    "GeoLocationResponse",
    "IPEchoResponse",
    "PassEvent",
    "PassTimesResponse",
]
