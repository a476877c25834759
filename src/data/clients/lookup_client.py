"""Shared base for the single-request JSON lookup clients.

Every lookup follows the same steps: issue one GET, require a 200 status,
decode JSON, check the service's own failure indicator, then validate the
payload shape. ``LookupClient._get_json`` and ``LookupClient._parse`` turn
each failing step into the matching ``ResolutionError`` subclass so the
concrete clients only describe their endpoint and success shape.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from utils.config import get_config
from utils.exceptions import (
    ParseError,
    ServiceLogicError,
    ServiceStatusError,
    TransportError,
)

logger = logging.getLogger(__name__)

HTTP_STATUS_OK = 200

ModelT = TypeVar("ModelT", bound=BaseModel)

# Returns a failure reason when the payload signals a service-level failure,
# None otherwise.
LogicFailureCheck = Callable[[Any], str | None]


class LookupClient:
    """Async HTTP client base for one remote lookup service.

    An ``httpx.AsyncClient`` may be injected so several lookups share one
    connection pool; an injected client is borrowed and is never closed here.
    Without one, the client is created lazily and owned by this instance.
    """

    service_name = "lookup"

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self.request_timeout = (
            request_timeout
            if request_timeout is not None
            else get_config().lookup.request_timeout
        )
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _initialize_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            headers = {"User-Agent": get_config().app.computed_user_agent}
            self._http_client = httpx.AsyncClient(
                timeout=self.request_timeout, headers=headers
            )
        return self._http_client

    async def _get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        is_logic_failure: LogicFailureCheck | None = None,
    ) -> Any:
        """GET ``url`` and return the decoded JSON payload.

        Raises:
            TransportError: The request did not produce a response.
            ServiceStatusError: The response status was not 200.
            ParseError: The body is not valid JSON.
            ServiceLogicError: ``is_logic_failure`` flagged the payload.
        """
        client = self._initialize_http_client()
        service = self.service_name

        logger.debug("Requesting %s: GET %s params=%s", service, url, params)
        try:
            response = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.debug("Transport failure fetching %s: %r", service, e)
            raise TransportError(
                f"Could not reach {service} service at {url}: {e}", service=service
            ) from e

        body = response.text
        if response.status_code != HTTP_STATUS_OK:
            logger.debug(
                "%s service answered status %d", service, response.status_code
            )
            raise ServiceStatusError(service, response.status_code, body)

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ParseError(service, body, reason=f"invalid JSON ({e})") from e

        if is_logic_failure is not None:
            reason = is_logic_failure(payload)
            if reason is not None:
                logger.debug("%s service reported failure: %s", service, reason)
                raise ServiceLogicError(service, body, reason=reason)

        return payload

    def _parse(self, model: type[ModelT], payload: Any) -> ModelT:
        """Validate ``payload`` into ``model``, raising ParseError on mismatch."""
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            body = json.dumps(payload, default=str)
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise ParseError(self.service_name, body, reason=errors) from e
