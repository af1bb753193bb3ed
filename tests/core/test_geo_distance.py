from __future__ import annotations

import pytest

from teenjobs.core.geo import haversine_km

TEL_AVIV = (34.7818, 32.0853)
JERUSALEM = (35.2137, 31.7683)


def test_haversine_between_cities() -> None:
    assert haversine_km(TEL_AVIV, JERUSALEM) == pytest.approx(54.0, abs=1.5)


def test_haversine_is_symmetric_and_zero_for_same_point() -> None:
    assert haversine_km(TEL_AVIV, TEL_AVIV) == 0.0
    assert haversine_km(TEL_AVIV, JERUSALEM) == pytest.approx(haversine_km(JERUSALEM, TEL_AVIV))


def test_haversine_scales_with_radius() -> None:
    base = haversine_km(TEL_AVIV, JERUSALEM)
    assert haversine_km(TEL_AVIV, JERUSALEM, radius_km=6371.0 * 2) == pytest.approx(base * 2)
