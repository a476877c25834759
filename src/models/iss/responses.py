"""Wire models for the success bodies of the three lookup services.

Only the fields the pipeline consumes are required; anything else the
services send is ignored.
"""

from pydantic import BaseModel, Field

from .pass_event import PassEvent


class IPEchoResponse(BaseModel):
    """IP echo body: ``{"ip": "<address>"}``."""

    ip: str = Field(..., min_length=1, description="Caller's public IP address")


class GeoLocationResponse(BaseModel):
    """Geolocation body for a successful lookup."""

    status: str = Field(..., description='"success" or "fail"')
    lat: float = Field(..., description="Latitude of the IP's location")
    lon: float = Field(..., description="Longitude of the IP's location")
    message: str | None = Field(None, description="Failure reason (only on fail)")
    query: str | None = Field(None, description="IP address that was looked up")


class PassTimesResponse(BaseModel):
    """Pass prediction body."""

    message: str = Field(..., description='"success" or "failure"')
    response: list[PassEvent] = Field(..., description="Upcoming passes, soonest first")
    request: dict | None = Field(None, description="Echo of the request parameters")
