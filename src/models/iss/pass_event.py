"""ISS pass event model."""

from datetime import UTC, datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    field_validator,
)

# JSON numbers only; numeric strings and booleans are rejected.
Number = StrictInt | StrictFloat


class PassEvent(BaseModel):
    """A predicted window during which the ISS is overhead."""

    model_config = ConfigDict(frozen=True)

    risetime: Number = Field(..., description="Rise time as a Unix epoch timestamp")
    duration: Number = Field(..., description="Visible duration in seconds")

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: int | float) -> int | float:
        """Durations cannot be negative."""
        if v < 0:
            raise ValueError(f"duration must be >= 0, got: {v}")
        return v

    @property
    def rise_datetime(self) -> datetime:
        """Rise time as a timezone-aware UTC datetime."""
        return datetime.fromtimestamp(self.risetime, tz=UTC)
