"""Distance-from-origin criterion."""

from __future__ import annotations

from dataclasses import dataclass

from ...schemas import Job, JobFilters
from ..geo import EARTH_RADIUS_KM, haversine_km


@dataclass
class GeoRadiusConfig:
    """Configuration for radius filtering."""

    earth_radius_km: float = EARTH_RADIUS_KM


class GeoRadiusCriterion:
    """Keep jobs within ``max_distance_km`` of the user's chosen location."""

    name = "geo_radius"

    def __init__(self, *, config: GeoRadiusConfig | None = None) -> None:
        self._config = config or GeoRadiusConfig()

    def is_active(self, filters: JobFilters) -> bool:
        return filters.user_location is not None and filters.max_distance_km is not None

    def matches(self, job: Job, filters: JobFilters) -> bool:
        origin = filters.user_location
        radius = filters.max_distance_km
        if origin is None or radius is None:
            return True
        job_coordinates = job.coordinates
        if job_coordinates is None:
            return False
        distance = haversine_km(
            origin.coordinates,
            job_coordinates,
            radius_km=self._config.earth_radius_km,
        )
        return distance <= radius
