"""ISS pass prediction client."""

from __future__ import annotations

import logging
from typing import Any

from models.iss import Coordinates, PassEvent, PassTimesResponse
from utils.config import get_config

from .lookup_client import LookupClient

logger = logging.getLogger(__name__)

MESSAGE_FAILURE = "failure"


def _pass_failure(payload: Any) -> str | None:
    if isinstance(payload, dict) and payload.get("message") == MESSAGE_FAILURE:
        reason = payload.get("reason")
        return str(reason) if reason else "message failure"
    return None


class PassTimesClient(LookupClient):
    """Fetches upcoming ISS fly-over times for a location."""

    service_name = "ISS pass times"

    def __init__(
        self,
        *args,
        url: str | None = None,
        default_count: int | None = None,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        lookup = get_config().lookup
        self.url = url or lookup.pass_times_url
        self.default_count = (
            default_count if default_count is not None else lookup.pass_count
        )

    async def fetch_flyover_times(
        self, coords: Coordinates, count: int | None = None
    ) -> list[PassEvent]:
        """Return up to ``count`` upcoming passes over ``coords``.

        Args:
            coords: Observer location.
            count: Number of passes to request (defaults to the configured count).

        Returns:
            Pass events in the order the service returned them, e.g.
            ``[PassEvent(risetime=134564234, duration=600), ...]``.

        Raises:
            ValueError: If ``count`` is less than 1.
            TransportError, ServiceStatusError, ServiceLogicError, ParseError
        """
        if count is None:
            count = self.default_count
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        params = {"lat": coords.latitude, "lon": coords.longitude, "n": count}
        payload = await self._get_json(
            self.url, params=params, is_logic_failure=_pass_failure
        )
        passes = self._parse(PassTimesResponse, payload).response[:count]
        logger.debug("Fetched %d pass(es) for %s", len(passes), coords)
        return passes
