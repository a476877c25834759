"""IP echo client: discovers the caller's public IP address."""

from __future__ import annotations

import logging

from models.iss import IPEchoResponse
from utils.config import get_config

from .lookup_client import LookupClient

logger = logging.getLogger(__name__)


class IPClient(LookupClient):
    """Fetches the public IP address of the machine running this code."""

    service_name = "IP"

    def __init__(self, *args, url: str | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.url = url or get_config().lookup.ip_echo_url

    async def fetch_my_ip(self) -> str:
        """Return the caller's public IP address, e.g. ``"162.245.144.188"``.

        Raises:
            TransportError, ServiceStatusError, ParseError
        """
        payload = await self._get_json(self.url, params={"format": "json"})
        ip = self._parse(IPEchoResponse, payload).ip
        logger.debug("Resolved public IP %s", ip)
        return ip
