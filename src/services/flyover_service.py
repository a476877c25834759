"""Application service that finds upcoming ISS passes for the caller's location.

The pipeline runs three lookups strictly in sequence, each fed by the
previous result:

    public IP -> coordinates -> pass times

The first failing lookup aborts the run and its error reaches the caller
unchanged. Nothing is retried and no partial result is returned.
"""

from __future__ import annotations

import logging

import httpx

from data.clients import GeoClient, IPClient, PassTimesClient
from models.iss import PassEvent
from utils.config import get_config
from utils.progress_callback import PipelineStage, ProgressCallback, ProgressUpdate

logger = logging.getLogger(__name__)


class FlyoverService:
    """Orchestrates the IP, geolocation and pass-time lookups.

    Resolvers can be injected (tests pass fakes); otherwise all three are
    built around one shared ``httpx.AsyncClient`` owned by the service.
    """

    def __init__(
        self,
        ip_client: IPClient | None = None,
        geo_client: GeoClient | None = None,
        pass_client: PassTimesClient | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owned_http_client: httpx.AsyncClient | None = None
        resolvers = (ip_client, geo_client, pass_client)
        if http_client is None and any(r is None for r in resolvers):
            config = get_config()
            http_client = httpx.AsyncClient(
                timeout=config.lookup.request_timeout,
                headers={"User-Agent": config.app.computed_user_agent},
            )
            self._owned_http_client = http_client

        self._ip_client = ip_client or IPClient(http_client)
        self._geo_client = geo_client or GeoClient(http_client)
        self._pass_client = pass_client or PassTimesClient(http_client)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owned_http_client is not None:
            await self._owned_http_client.aclose()
            self._owned_http_client = None

    async def next_pass_times_for_my_location(
        self,
        count: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> list[PassEvent]:
        """Return the next ``count`` ISS passes over the caller's location.

        Args:
            count: Number of passes to request (defaults to the configured count).
            progress_callback: Optional handler notified on every stage transition.

        Returns:
            Pass events from the pass-time lookup, unchanged.

        Raises:
            ResolutionError: The first lookup that failed, propagated as-is.
        """
        stage = PipelineStage.PENDING_IP

        def enter(
            next_stage: PipelineStage,
            message: str,
            detail: str | None = None,
            error: Exception | None = None,
        ) -> None:
            nonlocal stage
            stage = next_stage
            logger.debug("Pipeline stage -> %s: %s", stage.value, message)
            if progress_callback is None:
                return
            try:
                progress_callback(ProgressUpdate(stage, message, detail, error))
            except Exception:
                # Observer errors are logged only; the outcome is unchanged
                logger.exception("Progress callback failed on %s", stage.value)

        enter(PipelineStage.PENDING_IP, "Fetching public IP address...")
        try:
            ip = await self._ip_client.fetch_my_ip()

            enter(PipelineStage.PENDING_COORDS, "Resolving coordinates...", detail=ip)
            coords = await self._geo_client.fetch_coords_by_ip(ip)

            enter(
                PipelineStage.PENDING_PASSES,
                "Fetching ISS pass times...",
                detail=f"lat={coords.latitude}, lon={coords.longitude}",
            )
            passes = await self._pass_client.fetch_flyover_times(coords, count)
        except Exception as e:
            failed_at = stage
            logger.warning("ISS pass lookup failed at %s: %s", failed_at.value, e)
            enter(PipelineStage.FAILURE, str(e), detail=failed_at.value, error=e)
            raise

        enter(PipelineStage.SUCCESS, f"Found {len(passes)} upcoming pass(es)")
        logger.info("Found %d upcoming ISS pass(es)", len(passes))
        return passes


async def next_iss_times_for_my_location(
    count: int | None = None,
    progress_callback: ProgressCallback | None = None,
) -> list[PassEvent]:
    """Run one pipeline with a fresh service and release its connections.

    Raises:
        ResolutionError: The first lookup that failed.
    """
    async with FlyoverService() as service:
        return await service.next_pass_times_for_my_location(
            count=count, progress_callback=progress_callback
        )
