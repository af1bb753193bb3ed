"""Great-circle distance helpers."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

Coordinates = tuple[float, float]


def haversine_km(origin: Coordinates, destination: Coordinates, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Distance in kilometres between two ``(longitude, latitude)`` pairs."""
    lon1, lat1 = origin
    lon2, lat2 = destination
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c
