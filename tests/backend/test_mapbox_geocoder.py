from __future__ import annotations

import json
from typing import Any
from urllib import error, parse

import pytest

from teenjobs.geocoding import MapboxGeocoder, PlaceSuggestion


class FakeResponse:
    def __init__(self, payload: Any) -> None:
        self._body = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


def install(monkeypatch: pytest.MonkeyPatch, payload: Any = None, exc: Exception | None = None) -> list[str]:
    urls: list[str] = []

    def fake_urlopen(req, timeout=None):
        urls.append(req.full_url)
        if exc is not None:
            raise exc
        return FakeResponse(payload)

    monkeypatch.setattr("teenjobs.geocoding.request.urlopen", fake_urlopen)
    return urls


FEATURES = {
    "features": [
        {
            "id": "place.1",
            "place_name": "Tel Aviv-Yafo, Israel",
            "place_name_he": "תל אביב-יפו, ישראל",
            "place_name_en": "Tel Aviv-Yafo, Israel",
            "center": [34.7818, 32.0853],
        },
        {"id": "place.2", "place_name": "Haifa, Israel", "center": [34.9896, 32.794]},
        {"id": "broken", "place_name": "No centre"},
    ]
}


def test_search_prefers_hebrew_names(monkeypatch: pytest.MonkeyPatch) -> None:
    urls = install(monkeypatch, payload=FEATURES)

    results = MapboxGeocoder("pk.test", limit=5).search("tel aviv")

    assert results == [
        PlaceSuggestion("place.1", "תל אביב-יפו, ישראל", (34.7818, 32.0853), "Tel Aviv-Yafo, Israel"),
        PlaceSuggestion("place.2", "Haifa, Israel", (34.9896, 32.794)),
    ]
    url = parse.urlsplit(urls[0])
    assert url.path == "/geocoding/v5/mapbox.places/tel%20aviv.json"
    query = dict(parse.parse_qsl(url.query))
    assert query["country"] == "il"
    assert query["limit"] == "5"
    assert query["access_token"] == "pk.test"


def test_short_queries_skip_the_network(monkeypatch: pytest.MonkeyPatch) -> None:
    urls = install(monkeypatch, payload=FEATURES)
    assert MapboxGeocoder("pk.test").search(" t ") == []
    assert urls == []


def test_search_failure_returns_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, exc=error.URLError("offline"))
    assert MapboxGeocoder("pk.test").search("haifa") == []


def test_missing_token_returns_nothing(monkeypatch: pytest.MonkeyPatch) -> None:
    urls = install(monkeypatch, payload=FEATURES)
    assert MapboxGeocoder(None).search("haifa") == []
    assert urls == []


def test_reverse_uses_first_feature(monkeypatch: pytest.MonkeyPatch) -> None:
    urls = install(monkeypatch, payload=FEATURES)

    name = MapboxGeocoder("pk.test").reverse((34.7818, 32.0853))

    assert name == "תל אביב-יפו, ישראל"
    assert parse.urlsplit(urls[0]).path == "/geocoding/v5/mapbox.places/34.7818,32.0853.json"


def test_reverse_falls_back_to_coordinates(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, exc=error.URLError("offline"))
    assert MapboxGeocoder("pk.test").reverse((34.7818, 32.0853)) == "32.085300, 34.781800"
