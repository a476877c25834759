"""ISS flyover data models."""

from .coordinates import Coordinates
from .pass_event import PassEvent
from .responses import GeoLocationResponse, IPEchoResponse, PassTimesResponse

__all__ = [
    "Coordinates",
    "GeoLocationResponse",
    "IPEchoResponse",
    "PassEvent",
    "PassTimesResponse",
]
