"""Map configuration.

Everything the renderer needs is carried on one ``MapConfig`` instance that
is passed explicitly into the pipeline; nothing is read from module globals
at render time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

USGS_BASE_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary"
PLATE_BOUNDARIES_URL = (
    "https://raw.githubusercontent.com/fraxen/tectonicplates/"
    "master/GeoJSON/PB2002_boundaries.json"
)

PERIODS = ("hour", "day", "week", "month")
VIEWS = ("map", "globe")

MAPBOX_TILE_URL = (
    "https://api.mapbox.com/styles/v1/mapbox/{style}/tiles/{{z}}/{{x}}/{{y}}"
    "?access_token={{accessToken}}"
)
MAPBOX_ATTRIBUTION = (
    'Map data &copy; <a href="https://www.openstreetmap.org/">OpenStreetMap</a> contributors, '
    '<a href="https://creativecommons.org/licenses/by-sa/2.0/">CC-BY-SA</a>, '
    'Imagery (c) <a href="https://www.mapbox.com/">Mapbox</a>'
)

# Base layer name -> Mapbox style id
MAPBOX_STYLES = {
    "Streets": "streets-v11",
    "Satellite": "satellite-streets-v11",
    "Dark": "dark-v10",
}

# Token-free tiles used when no Mapbox access token is configured
FALLBACK_TILES = {
    "Streets": (
        "https://tile.openstreetmap.org/{z}/{x}/{y}.png",
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
    ),
    "Satellite": (
        "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        "Tiles &copy; Esri",
    ),
    "Dark": (
        "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors '
        '&copy; <a href="https://carto.com/attributions">CARTO</a>',
    ),
}


def feed_url(kind: str, period: str = "week") -> str:
    """USGS summary feed URL for ``kind`` ('all' or 'major') over ``period``."""
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}'. Choose from: {list(PERIODS)}")
    prefix = {"all": "all", "major": "4.5"}.get(kind)
    if prefix is None:
        raise ValueError(f"Unknown feed '{kind}'. Choose from: ['all', 'major']")
    return f"{USGS_BASE_URL}/{prefix}_{period}.geojson"


@dataclass(frozen=True)
class MapConfig:
    """Settings for one map render."""

    api_key: str = ""
    period: str = "week"
    center: tuple[float, float] = (40.7, -94.5)
    zoom: int = 3
    max_zoom: int = 18
    timeout_seconds: float = 30.0
    default_base: str = "Streets"
    base_styles: dict[str, str] = field(default_factory=lambda: dict(MAPBOX_STYLES))

    def __post_init__(self) -> None:
        if self.period not in PERIODS:
            raise ValueError(f"Unknown period '{self.period}'. Choose from: {list(PERIODS)}")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.default_base not in self.base_styles:
            raise ValueError(
                f"Unknown base layer '{self.default_base}'. Choose from: {list(self.base_styles)}"
            )

    @classmethod
    def from_env(cls, **overrides) -> MapConfig:
        """Build a config from the environment; explicit overrides win.

        Reads MAPBOX_API_KEY (or API_KEY), QUAKE_MAP_PERIOD and
        QUAKE_MAP_TIMEOUT.
        """
        values = {
            "api_key": os.environ.get("MAPBOX_API_KEY") or os.environ.get("API_KEY", ""),
            "period": os.environ.get("QUAKE_MAP_PERIOD", "week"),
            "timeout_seconds": float(os.environ.get("QUAKE_MAP_TIMEOUT", 30)),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def all_quakes_url(self) -> str:
        return feed_url("all", self.period)

    @property
    def major_quakes_url(self) -> str:
        return feed_url("major", self.period)

    @property
    def plates_url(self) -> str:
        return PLATE_BOUNDARIES_URL

    def tile_url(self, base: str) -> str:
        """Mapbox tile URL template for a base layer, token substituted."""
        url = MAPBOX_TILE_URL.format(style=self.base_styles[base])
        return url.replace("{accessToken}", self.api_key)
