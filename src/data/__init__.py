"""Data access layer: clients for the remote lookup services."""

from .clients import GeoClient, IPClient, LookupClient, PassTimesClient

__all__ = [
    "GeoClient",
    "IPClient",
    "LookupClient",
    "PassTimesClient",
]
