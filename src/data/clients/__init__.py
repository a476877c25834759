"""HTTP clients for the remote lookup services."""

from .geo_client import GeoClient
from .ip_client import IPClient
from .lookup_client import LookupClient
from .pass_client import PassTimesClient

__all__ = [
    "GeoClient",
    "IPClient",
    "LookupClient",
    "PassTimesClient",
]
