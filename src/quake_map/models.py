"""Earthquake map data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Earthquake:
    """A single earthquake feature read from a USGS GeoJSON feed."""

    id: str
    magnitude: float
    place: str
    longitude: float
    latitude: float
    depth: float = 0.0
    time: datetime | None = None
    url: str = ""

    @classmethod
    def from_geojson_feature(cls, feature: dict) -> Earthquake:
        """Build an Earthquake from one GeoJSON feature.

        Raises ValueError when the feature is not a point feature with a
        properties object.
        """
        if not isinstance(feature, dict):
            raise ValueError(f"feature is {type(feature).__name__}, not an object")
        props = feature.get("properties") or {}
        if not isinstance(props, dict):
            raise ValueError("feature properties is not an object")
        geom = feature.get("geometry")
        if not isinstance(geom, dict) or geom.get("type") != "Point":
            raise ValueError("feature has no point geometry")

        coords = geom["coordinates"]
        millis = props.get("time")
        return cls(
            id=str(feature.get("id") or ""),
            magnitude=float(props.get("mag") or 0.0),
            place=props.get("place") or "Unknown",
            longitude=float(coords[0]),
            latitude=float(coords[1]),
            depth=float(coords[2]) if len(coords) > 2 and coords[2] is not None else 0.0,
            time=datetime.fromtimestamp(millis / 1000, tz=timezone.utc) if millis is not None else None,
            url=props.get("url") or "",
        )

    @property
    def location(self) -> tuple[float, float]:
        """(lat, lon) pair in the order Leaflet expects."""
        return (self.latitude, self.longitude)

    def popup_html(self) -> str:
        return f"Magnitude: {self.magnitude:g}<br>Location: {self.place}"


@dataclass(frozen=True)
class StyleRecord:
    """Visual attributes of one earthquake marker."""

    fill_color: str
    radius: float
    stroke_color: str = "#000000"
    stroke_weight: float = 0.5
    opacity: float = 1
    fill_opacity: float = 1

    def to_marker_kwargs(self) -> dict:
        """Keyword arguments for ``folium.CircleMarker``."""
        return {
            "radius": self.radius,
            "stroke": True,
            "color": self.stroke_color,
            "weight": self.stroke_weight,
            "opacity": self.opacity,
            "fill": True,
            "fill_color": self.fill_color,
            "fill_opacity": self.fill_opacity,
        }


@dataclass(frozen=True)
class LegendEntry:
    lower_bound: float
    color: str
