"""IP geolocation client."""

from __future__ import annotations

import logging
from typing import Any

from models.iss import Coordinates, GeoLocationResponse
from utils.config import get_config

from .lookup_client import LookupClient

logger = logging.getLogger(__name__)

STATUS_FAIL = "fail"


def _geo_failure(payload: Any) -> str | None:
    # Fail bodies carry no coordinates, so this runs before shape validation.
    if isinstance(payload, dict) and payload.get("status") == STATUS_FAIL:
        return str(payload.get("message") or "status fail")
    return None


class GeoClient(LookupClient):
    """Resolves an IP address to latitude/longitude."""

    service_name = "coordinates"

    def __init__(self, *args, base_url: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.base_url = (base_url or get_config().lookup.geo_base_url).rstrip("/")

    async def fetch_coords_by_ip(self, ip: str) -> Coordinates:
        """Look up the coordinates of ``ip``.

        Args:
            ip: Public IP address as returned by ``IPClient.fetch_my_ip``.

        Returns:
            Coordinates of the IP's location.

        Raises:
            TransportError, ServiceStatusError, ServiceLogicError, ParseError
        """
        url = f"{self.base_url}/{ip}"
        payload = await self._get_json(url, is_logic_failure=_geo_failure)
        geo = self._parse(GeoLocationResponse, payload)
        coords = self._parse(Coordinates, {"lat": geo.lat, "lon": geo.lon})
        logger.debug(
            "Resolved %s to lat=%.4f lon=%.4f", ip, coords.latitude, coords.longitude
        )
        return coords
