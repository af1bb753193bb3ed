"""Place search and reverse geocoding against the Mapbox places API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib import error, parse, request

import structlog

MAPBOX_PLACES_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places"
PLACE_TYPES = "place,locality,neighborhood,address,poi"
MIN_QUERY_LENGTH = 2


@dataclass(frozen=True, slots=True)
class PlaceSuggestion:
    id: str
    name: str
    coordinates: tuple[float, float]
    secondary_name: str | None = None


class MapboxGeocoder:
    """Thin HTTP client; failures degrade to empty results instead of raising."""

    def __init__(
        self,
        access_token: str | None,
        *,
        country: str = "il",
        language: str = "he,en",
        limit: int = 8,
        timeout: float = 10.0,
    ) -> None:
        self._access_token = access_token
        self._country = country
        self._language = language
        self._limit = limit
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def search(self, query: str) -> list[PlaceSuggestion]:
        query = query.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        payload = self._fetch(
            query,
            {
                "country": self._country,
                "language": self._language,
                "types": PLACE_TYPES,
                "limit": str(self._limit),
                "autocomplete": "true",
            },
        )
        if payload is None:
            return []

        suggestions: list[PlaceSuggestion] = []
        for feature in payload.get("features") or []:
            center = feature.get("center") or []
            if len(center) != 2:
                continue
            hebrew = feature.get("place_name_he")
            suggestions.append(
                PlaceSuggestion(
                    id=str(feature.get("id", "")),
                    name=hebrew or feature.get("place_name", ""),
                    coordinates=(float(center[0]), float(center[1])),
                    secondary_name=feature.get("place_name_en") if hebrew else None,
                )
            )
        return suggestions

    def reverse(self, coordinates: tuple[float, float]) -> str:
        """Name for ``(longitude, latitude)``, or the raw coordinates when lookup fails."""
        longitude, latitude = coordinates
        fallback = f"{latitude:.6f}, {longitude:.6f}"
        payload = self._fetch(
            f"{longitude},{latitude}",
            {"language": self._language, "types": PLACE_TYPES},
        )
        features = (payload or {}).get("features") or []
        if not features:
            return fallback
        first = features[0]
        return first.get("place_name_he") or first.get("place_name") or fallback

    def _fetch(self, query: str, params: dict[str, str]) -> dict[str, Any] | None:
        if not self._access_token:
            self._logger.warning("geocoding.missing_token")
            return None
        params = {"access_token": self._access_token, **params}
        url = f"{MAPBOX_PLACES_URL}/{parse.quote(query, safe=',')}.json?{parse.urlencode(params)}"
        req = request.Request(url, method="GET")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                return json.loads(resp.read().decode("utf-8"))
        except (error.URLError, ValueError) as exc:
            self._logger.warning("geocoding.request_failed", query=query, error=str(exc))
            return None
