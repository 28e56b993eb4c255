"""Tests for the render pipeline and configuration."""

from __future__ import annotations

import asyncio
import logging

import pytest

from quake_map.config import MapConfig
from quake_map.pipeline import run_render_pipeline

from conftest import ALL_WEEK_URL, MAJOR_WEEK_URL, PLATES_URL


class TestRenderPipeline:
    def test_writes_leaflet_map(self, mock_feeds, tmp_path):
        out = tmp_path / "map.html"
        result = asyncio.run(run_render_pipeline(MapConfig(api_key="pk.abc"), out))

        assert out.exists()
        html = out.read_text()
        assert "leaflet" in html.lower()
        assert "access_token=pk.abc" in html

        assert result["view"] == "map"
        assert result["output"] == str(out)
        assert result["layers"] == {"Earthquakes": 3, "Major Earthquakes": 2, "Tectonic Plates": 2}
        assert result["failed"] == []
        assert len(result["run_id"]) == 8

    def test_writes_globe(self, mock_feeds, tmp_path):
        out = tmp_path / "globe.html"
        result = asyncio.run(run_render_pipeline(MapConfig(), out, view="globe"))
        assert result["view"] == "globe"
        assert "plotly" in out.read_text().lower()

    def test_failed_feed_reported(self, httpx_mock, all_quakes, major_quakes, tmp_path):
        httpx_mock.add_response(url=ALL_WEEK_URL, json=all_quakes)
        httpx_mock.add_response(url=MAJOR_WEEK_URL, json=major_quakes)
        httpx_mock.add_response(url=PLATES_URL, status_code=404)

        out = tmp_path / "map.html"
        result = asyncio.run(run_render_pipeline(MapConfig(), out))

        assert result["failed"] == ["Tectonic Plates"]
        assert result["layers"]["Tectonic Plates"] == 0
        assert "Some layers could not be loaded" in out.read_text()

    def test_log_records_carry_render_context(self, mock_feeds, tmp_path, caplog):
        caplog.set_level(logging.INFO, logger="quake_map")
        result = asyncio.run(run_render_pipeline(MapConfig(period="week"), tmp_path / "m.html", view="globe"))

        records = [r for r in caplog.records if r.name == "quake_map.pipeline"]
        assert records
        for record in records:
            assert record.run_id == result["run_id"]
            assert record.view == "globe"
            assert record.period == "week"

    def test_unknown_view(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown view"):
            asyncio.run(run_render_pipeline(MapConfig(), tmp_path / "x.html", view="3d"))


class TestMapConfig:
    def test_defaults(self):
        config = MapConfig()
        assert config.center == (40.7, -94.5)
        assert config.zoom == 3
        assert config.period == "week"
        assert config.default_base == "Streets"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MAPBOX_API_KEY", "pk.env")
        monkeypatch.setenv("QUAKE_MAP_PERIOD", "day")
        monkeypatch.setenv("QUAKE_MAP_TIMEOUT", "5")
        config = MapConfig.from_env()
        assert config.api_key == "pk.env"
        assert config.period == "day"
        assert config.timeout_seconds == 5.0

    def test_api_key_fallback_variable(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "pk.legacy")
        assert MapConfig.from_env().api_key == "pk.legacy"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("MAPBOX_API_KEY", "pk.env")
        config = MapConfig.from_env(api_key="pk.cli", period=None)
        assert config.api_key == "pk.cli"
        assert config.period == "week"

    def test_tile_url(self):
        url = MapConfig(api_key="pk.t").tile_url("Satellite")
        assert url == (
            "https://api.mapbox.com/styles/v1/mapbox/satellite-streets-v11/tiles/{z}/{x}/{y}"
            "?access_token=pk.t"
        )

    @pytest.mark.parametrize("kwargs,match", [
        ({"period": "year"}, "Unknown period"),
        ({"timeout_seconds": 0}, "timeout_seconds"),
        ({"default_base": "Terrain"}, "Unknown base layer"),
    ])
    def test_invalid(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            MapConfig(**kwargs)
