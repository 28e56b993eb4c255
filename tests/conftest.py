"""Shared GeoJSON samples for the quake-map tests."""

from __future__ import annotations

import copy

import pytest

from quake_map.config import PLATE_BOUNDARIES_URL

ALL_WEEK_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_week.geojson"
MAJOR_WEEK_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/4.5_week.geojson"
PLATES_URL = PLATE_BOUNDARIES_URL

SAMPLE_ALL_QUAKES = {
    "type": "FeatureCollection",
    "metadata": {"count": 3},
    "features": [
        {
            "type": "Feature",
            "id": "us7000test1",
            "properties": {
                "mag": 5.2,
                "place": "10km NE of Somewhere",
                "time": 1700000000000,
                "url": "https://earthquake.usgs.gov/earthquakes/eventpage/us7000test1",
            },
            "geometry": {"type": "Point", "coordinates": [-118.5, 34.0, 10.0]},
        },
        {
            "type": "Feature",
            "id": "ak0test2",
            "properties": {
                "mag": 0,
                "place": "5km SW of Elsewhere",
                "time": 1699999000000,
                "url": "",
            },
            "geometry": {"type": "Point", "coordinates": [-150.1, 61.2, 3.5]},
        },
        {
            "type": "Feature",
            "id": "nc0test3",
            "properties": {
                "mag": 2.4,
                "place": None,
                "time": None,
                "url": None,
            },
            "geometry": {"type": "Point", "coordinates": [-122.8, 38.8]},
        },
    ],
}

SAMPLE_MAJOR_QUAKES = {
    "type": "FeatureCollection",
    "metadata": {"count": 2},
    "features": [
        {
            "type": "Feature",
            "id": "us7000major1",
            "properties": {"mag": 6.5, "place": "Off the coast of Chile", "time": 1700000500000},
            "geometry": {"type": "Point", "coordinates": [-72.1, -33.4, 25.0]},
        },
        {
            "type": "Feature",
            "id": "us7000major2",
            "properties": {"mag": 4.8, "place": "Kuril Islands", "time": 1700000400000},
            "geometry": {"type": "Point", "coordinates": [151.2, 46.1, 40.0]},
        },
    ],
}

SAMPLE_PLATES = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"Name": "AF-AN", "PlateA": "AF", "PlateB": "AN"},
            "geometry": {
                "type": "LineString",
                "coordinates": [[-0.4, -54.8], [0.0, -54.6], [1.2, -54.3]],
            },
        },
        {
            "type": "Feature",
            "properties": {"Name": "PA-NA", "PlateA": "PA", "PlateB": "NA"},
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [
                    [[-125.0, 40.3], [-124.5, 40.4]],
                    [[-124.5, 40.4], [-124.1, 41.0], [-123.9, 41.5]],
                ],
            },
        },
    ],
}


@pytest.fixture
def all_quakes() -> dict:
    return copy.deepcopy(SAMPLE_ALL_QUAKES)


@pytest.fixture
def major_quakes() -> dict:
    return copy.deepcopy(SAMPLE_MAJOR_QUAKES)


@pytest.fixture
def plates() -> dict:
    return copy.deepcopy(SAMPLE_PLATES)


@pytest.fixture
def mock_feeds(httpx_mock, all_quakes, major_quakes, plates):
    """Register successful responses for all three default feeds."""
    httpx_mock.add_response(url=ALL_WEEK_URL, json=all_quakes)
    httpx_mock.add_response(url=MAJOR_WEEK_URL, json=major_quakes)
    httpx_mock.add_response(url=PLATES_URL, json=plates)
    return httpx_mock


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("MAPBOX_API_KEY", "API_KEY", "QUAKE_MAP_PERIOD", "QUAKE_MAP_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
