"""Pydantic configuration schema for YAML and dict settings."""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class BackendConfig(BaseModel):
    kind: Literal["memory", "rest"] = "memory"
    url: str | None = None
    api_key: str | None = Field(default_factory=lambda: os.environ.get("TEENJOBS_BACKEND_KEY"))
    access_token: str | None = None
    timeout: float = 10.0

    model_config = ConfigDict(extra="forbid")


class GeocodingConfig(BaseModel):
    access_token: str | None = Field(default_factory=lambda: os.environ.get("TEENJOBS_MAPBOX_TOKEN"))
    country: str | None = "il"
    language: str = "he,en"
    limit: int = 8
    timeout: float = 10.0

    model_config = ConfigDict(extra="forbid")


class LifecycleConfig(BaseModel):
    reject_competing_on_accept: bool = True

    model_config = ConfigDict(extra="forbid")


class FiltersConfig(BaseModel):
    earth_radius_km: float = Field(default=6371.0, gt=0)

    model_config = ConfigDict(extra="forbid")


class LoggingConfig(BaseModel):
    level: str = "INFO"
    renderer: Literal["json", "console"] = "json"

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    backend: BackendConfig = Field(default_factory=BackendConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        return self.model_dump(mode="python")


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
