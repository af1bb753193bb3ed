from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DateRange(BaseModel):
    """Inclusive calendar range; a missing end means a single day."""

    start: date
    end: date | None = None

    model_config = ConfigDict(extra="forbid")

    @property
    def resolved_end(self) -> date:
        return self.end or self.start


class UserLocation(BaseModel):
    """Origin for radius filtering, as chosen from geocoding results."""

    name: str
    coordinates: tuple[float, float] = Field(description="(longitude, latitude)")

    model_config = ConfigDict(extra="forbid")


class JobFilters(BaseModel):
    """Multi-criteria job filter; ``None`` leaves a criterion inactive."""

    date_range: DateRange | None = None
    min_pay: float | None = None
    max_pay: float | None = None
    duration: str | None = None
    location: str | None = None
    user_location: UserLocation | None = None
    max_distance_km: float | None = Field(default=None, ge=0)
    tags: list[str] | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_pay_bounds(self) -> "JobFilters":
        if self.min_pay is not None and self.max_pay is not None and self.max_pay < self.min_pay:
            raise ValueError("Maximum payment cannot be smaller than minimum payment")
        return self
