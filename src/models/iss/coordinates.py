"""Geographic coordinates model."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Latitude/longitude pair.

    Accepts either the field names or the short ``lat``/``lon`` keys used by
    the geolocation and pass prediction services.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    latitude: float = Field(
        ..., alias="lat", ge=-90, le=90, description="Latitude in degrees"
    )
    longitude: float = Field(
        ..., alias="lon", ge=-180, le=180, description="Longitude in degrees"
    )
