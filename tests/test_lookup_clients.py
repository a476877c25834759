"""Tests for the IP, geolocation and pass-time lookup clients.

All HTTP calls go through ``httpx.MockTransport``; no network access required.
"""

import httpx
import pytest

from data.clients import GeoClient, IPClient, PassTimesClient
from models.iss import Coordinates, PassEvent
from utils.exceptions import (
    ParseError,
    ResolutionError,
    ServiceLogicError,
    ServiceStatusError,
    TransportError,
)

IP_HOST = "api64.ipify.org"
GEO_HOST = "ip-api.com"
PASS_HOST = "api.open-notify.org"


# ---------- IP client ----------


class TestIPClient:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("ip", ["1.2.3.4", "162.245.144.188", "2001:db8::1"])
    async def test_returns_ip_field_verbatim(self, make_http_client, ip):
        http_client, transport = make_http_client(
            {IP_HOST: httpx.Response(200, json={"ip": ip})}
        )
        async with http_client:
            assert await IPClient(http_client).fetch_my_ip() == ip

        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.scheme == "https"
        assert request.url.params["format"] == "json"

    @pytest.mark.asyncio
    async def test_non_200_raises_status_error(self, make_http_client):
        http_client, _ = make_http_client(
            {IP_HOST: httpx.Response(503, text="Service Unavailable")}
        )
        async with http_client:
            with pytest.raises(ServiceStatusError) as exc_info:
                await IPClient(http_client).fetch_my_ip()

        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "Service Unavailable"
        assert exc_info.value.service == "IP"
        assert "Status Code 503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_ip_field_raises_parse_error(self, make_http_client):
        http_client, _ = make_http_client(
            {IP_HOST: httpx.Response(200, json={"address": "1.2.3.4"})}
        )
        async with http_client:
            with pytest.raises(ParseError) as exc_info:
                await IPClient(http_client).fetch_my_ip()

        assert "ip" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_empty_ip_raises_parse_error(self, make_http_client):
        http_client, _ = make_http_client(
            {IP_HOST: httpx.Response(200, json={"ip": ""})}
        )
        async with http_client:
            with pytest.raises(ParseError):
                await IPClient(http_client).fetch_my_ip()

    @pytest.mark.asyncio
    async def test_non_json_body_raises_parse_error(self, make_http_client):
        http_client, _ = make_http_client(
            {IP_HOST: httpx.Response(200, text="<html>1.2.3.4</html>")}
        )
        async with http_client:
            with pytest.raises(ParseError) as exc_info:
                await IPClient(http_client).fetch_my_ip()

        assert exc_info.value.body == "<html>1.2.3.4</html>"
        assert "invalid JSON" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self, make_http_client):
        def refuse(request):
            raise httpx.ConnectError("Name or service not known", request=request)

        http_client, _ = make_http_client({IP_HOST: refuse})
        async with http_client:
            with pytest.raises(TransportError) as exc_info:
                await IPClient(http_client).fetch_my_ip()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert isinstance(exc_info.value, ResolutionError)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, make_http_client):
        def time_out(request):
            raise httpx.ReadTimeout("timed out", request=request)

        http_client, _ = make_http_client({IP_HOST: time_out})
        async with http_client:
            with pytest.raises(TransportError):
                await IPClient(http_client).fetch_my_ip()

    @pytest.mark.asyncio
    async def test_custom_url(self, make_http_client):
        http_client, transport = make_http_client(
            {"echo.example": httpx.Response(200, json={"ip": "10.0.0.1"})}
        )
        async with http_client:
            client = IPClient(http_client, url="https://echo.example/")
            assert await client.fetch_my_ip() == "10.0.0.1"
        assert transport.hosts() == ["echo.example"]


# ---------- Geolocation client ----------


class TestGeoClient:
    @pytest.mark.asyncio
    async def test_success_returns_coordinates(self, make_http_client):
        body = {
            "status": "success",
            "country": "United States",
            "lat": 37.0,
            "lon": -122.0,
            "query": "1.2.3.4",
        }
        http_client, transport = make_http_client(
            {GEO_HOST: httpx.Response(200, json=body)}
        )
        async with http_client:
            coords = await GeoClient(http_client).fetch_coords_by_ip("1.2.3.4")

        assert coords == Coordinates(latitude=37.0, longitude=-122.0)
        assert transport.requests[0].url.path == "/json/1.2.3.4"

    @pytest.mark.asyncio
    async def test_status_fail_raises_logic_error(self, make_http_client):
        body = {"status": "fail", "message": "reserved range", "query": "10.0.0.1"}
        http_client, _ = make_http_client({GEO_HOST: httpx.Response(200, json=body)})
        async with http_client:
            with pytest.raises(ServiceLogicError) as exc_info:
                await GeoClient(http_client).fetch_coords_by_ip("10.0.0.1")

        assert exc_info.value.reason == "reserved range"
        assert "reserved range" in exc_info.value.body
        assert not isinstance(exc_info.value, ParseError)

    @pytest.mark.asyncio
    async def test_bare_status_fail_raises_logic_error(self, make_http_client):
        http_client, _ = make_http_client(
            {GEO_HOST: httpx.Response(200, json={"status": "fail"})}
        )
        async with http_client:
            with pytest.raises(ServiceLogicError):
                await GeoClient(http_client).fetch_coords_by_ip("1.2.3.4")

    @pytest.mark.asyncio
    async def test_non_200_raises_status_error(self, make_http_client):
        http_client, _ = make_http_client(
            {GEO_HOST: httpx.Response(429, text="rate limited")}
        )
        async with http_client:
            with pytest.raises(ServiceStatusError) as exc_info:
                await GeoClient(http_client).fetch_coords_by_ip("1.2.3.4")

        assert exc_info.value.status_code == 429
        assert exc_info.value.service == "coordinates"

    @pytest.mark.asyncio
    async def test_missing_coordinates_raise_parse_error(self, make_http_client):
        http_client, _ = make_http_client(
            {GEO_HOST: httpx.Response(200, json={"status": "success", "lat": 1.0})}
        )
        async with http_client:
            with pytest.raises(ParseError) as exc_info:
                await GeoClient(http_client).fetch_coords_by_ip("1.2.3.4")

        assert "lon" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_out_of_range_latitude_raises_parse_error(self, make_http_client):
        body = {"status": "success", "lat": 137.0, "lon": 0.0}
        http_client, _ = make_http_client({GEO_HOST: httpx.Response(200, json=body)})
        async with http_client:
            with pytest.raises(ParseError):
                await GeoClient(http_client).fetch_coords_by_ip("1.2.3.4")


# ---------- Pass times client ----------


def _passes_body(*passes, message="success"):
    return {
        "message": message,
        "request": {"altitude": 100, "datetime": 1, "latitude": 37.0, "longitude": -122.0},
        "response": [{"risetime": r, "duration": d} for r, d in passes],
    }


class TestPassTimesClient:
    @pytest.mark.asyncio
    async def test_success_returns_pass_events(self, make_http_client):
        http_client, transport = make_http_client(
            {
                PASS_HOST: httpx.Response(
                    200, json=_passes_body((1000, 600), (2000, 500))
                )
            }
        )
        async with http_client:
            passes = await PassTimesClient(http_client).fetch_flyover_times(
                Coordinates(latitude=37.0, longitude=-122.0)
            )

        assert passes == [
            PassEvent(risetime=1000, duration=600),
            PassEvent(risetime=2000, duration=500),
        ]
        params = transport.requests[0].url.params
        assert transport.requests[0].url.path == "/iss-pass.json"
        assert float(params["lat"]) == 37.0
        assert float(params["lon"]) == -122.0
        assert params["n"] == "5"

    @pytest.mark.asyncio
    async def test_explicit_count_is_requested_and_enforced(self, make_http_client):
        http_client, transport = make_http_client(
            {
                PASS_HOST: httpx.Response(
                    200, json=_passes_body((1, 10), (2, 20), (3, 30))
                )
            }
        )
        async with http_client:
            passes = await PassTimesClient(http_client).fetch_flyover_times(
                Coordinates(latitude=0.0, longitude=0.0), count=2
            )

        assert transport.requests[0].url.params["n"] == "2"
        assert [p.risetime for p in passes] == [1, 2]

    @pytest.mark.asyncio
    async def test_empty_response_list(self, make_http_client):
        http_client, _ = make_http_client(
            {PASS_HOST: httpx.Response(200, json=_passes_body())}
        )
        async with http_client:
            passes = await PassTimesClient(http_client).fetch_flyover_times(
                Coordinates(latitude=0.0, longitude=0.0)
            )
        assert passes == []

    @pytest.mark.asyncio
    async def test_message_failure_raises_logic_error(self, make_http_client):
        body = {"message": "failure", "reason": "Latitude must be number between -90.0 and 90.0"}
        http_client, _ = make_http_client({PASS_HOST: httpx.Response(200, json=body)})
        async with http_client:
            with pytest.raises(ServiceLogicError) as exc_info:
                await PassTimesClient(http_client).fetch_flyover_times(
                    Coordinates(latitude=0.0, longitude=0.0)
                )

        assert "Latitude must be" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_non_200_raises_status_error(self, make_http_client):
        http_client, _ = make_http_client({PASS_HOST: httpx.Response(404, text="")})
        async with http_client:
            with pytest.raises(ServiceStatusError) as exc_info:
                await PassTimesClient(http_client).fetch_flyover_times(
                    Coordinates(latitude=0.0, longitude=0.0)
                )

        assert exc_info.value.status_code == 404
        assert "<empty>" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_fractional_values_are_accepted(self, make_http_client):
        http_client, _ = make_http_client(
            {PASS_HOST: httpx.Response(200, json=_passes_body((1000.5, 600.25)))}
        )
        async with http_client:
            passes = await PassTimesClient(http_client).fetch_flyover_times(
                Coordinates(latitude=0.0, longitude=0.0)
            )

        assert passes == [PassEvent(risetime=1000.5, duration=600.25)]
        assert passes[0].duration == 600.25

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "event",
        [
            {"risetime": "1000", "duration": 600},
            {"risetime": 1000, "duration": True},
            {"risetime": 1000, "duration": -1},
        ],
    )
    async def test_non_numeric_or_negative_values_raise_parse_error(
        self, make_http_client, event
    ):
        body = {"message": "success", "response": [event]}
        http_client, _ = make_http_client({PASS_HOST: httpx.Response(200, json=body)})
        async with http_client:
            with pytest.raises(ParseError):
                await PassTimesClient(http_client).fetch_flyover_times(
                    Coordinates(latitude=0.0, longitude=0.0)
                )

    @pytest.mark.asyncio
    async def test_malformed_event_raises_parse_error(self, make_http_client):
        body = {"message": "success", "response": [{"risetime": "soon"}]}
        http_client, _ = make_http_client({PASS_HOST: httpx.Response(200, json=body)})
        async with http_client:
            with pytest.raises(ParseError):
                await PassTimesClient(http_client).fetch_flyover_times(
                    Coordinates(latitude=0.0, longitude=0.0)
                )

    @pytest.mark.asyncio
    async def test_count_below_one_is_rejected_before_request(self, make_http_client):
        http_client, transport = make_http_client({})
        async with http_client:
            with pytest.raises(ValueError):
                await PassTimesClient(http_client).fetch_flyover_times(
                    Coordinates(latitude=0.0, longitude=0.0), count=0
                )
        assert transport.requests == []

    def test_default_count_follows_config(self, monkeypatch):
        from utils.config import reset_config

        monkeypatch.setenv("LOOKUP_PASS_COUNT", "3")
        reset_config()
        assert PassTimesClient().default_count == 3


# ---------- Client ownership ----------


class TestClientOwnership:
    @pytest.mark.asyncio
    async def test_injected_http_client_is_not_closed(self, make_http_client):
        http_client, _ = make_http_client(
            {IP_HOST: httpx.Response(200, json={"ip": "1.2.3.4"})}
        )
        async with IPClient(http_client) as client:
            await client.fetch_my_ip()

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_http_client_is_closed(self):
        client = IPClient()
        http_client = client._initialize_http_client()
        await client.close()
        assert http_client.is_closed
