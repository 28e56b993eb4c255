"""Tectonic plate boundaries from Peter Bird's PB2002 dataset.

Source: Hugo Ahlenius' GeoJSON digitization of PB2002
https://github.com/fraxen/tectonicplates
"""

from __future__ import annotations

PLATE_BOUNDARY_STYLE = {"color": "#ff5349", "weight": 1}


def plate_style(feature: dict) -> dict:
    """Style callback for ``folium.GeoJson``; every boundary looks the same."""
    return dict(PLATE_BOUNDARY_STYLE)


def boundaries_to_traces(geojson: dict | None) -> list[dict]:
    """Convert GeoJSON boundaries to lists of (lons, lats) for Plotly traces.

    Returns list of dicts with keys 'lon' and 'lat', one per LineString segment.
    Handles both LineString and MultiLineString geometries.
    """
    traces = []
    for feature in (geojson or {}).get("features", []):
        geom = feature.get("geometry") or {}
        coords = geom.get("coordinates", [])

        if geom.get("type") == "LineString":
            lines = [coords]
        elif geom.get("type") == "MultiLineString":
            lines = coords
        else:
            continue

        for line in lines:
            traces.append({
                "lon": [c[0] for c in line],
                "lat": [c[1] for c in line],
            })

    return traces
