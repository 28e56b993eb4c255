"""Map composition for the earthquake web map.

Provides two views over the same styled features:
- Leaflet map (folium): tile base layers, toggleable overlays, popups, legend
- Globe view: Plotly Scattergeo with orthographic projection
"""

from __future__ import annotations

import logging
from html import escape

import folium
import pandas as pd
import plotly.graph_objects as go
from branca.element import MacroElement
from jinja2 import Template

from quake_map.classifier import ALL_QUAKES, MAJOR_QUAKES, MagnitudeClassifier, style_feature
from quake_map.config import FALLBACK_TILES, MAPBOX_ATTRIBUTION, MapConfig
from quake_map.feeds import FEED_ALL, FEED_MAJOR, FEED_PLATES, FeedResult, parse_earthquakes
from quake_map.legend import LEGEND_POSITION, build_legend_html
from quake_map.models import Earthquake
from quake_map.tectonic import PLATE_BOUNDARY_STYLE, boundaries_to_traces, plate_style

logger = logging.getLogger(__name__)

# Overlay display names, in layer-control order
OVERLAY_NAMES = {
    FEED_ALL: "Earthquakes",
    FEED_MAJOR: "Major Earthquakes",
    FEED_PLATES: "Tectonic Plates",
}

LAYER_CLASSIFIERS = {
    FEED_ALL: ALL_QUAKES,
    FEED_MAJOR: MAJOR_QUAKES,
}

NOTICE_POSITION = "topleft"

CONTROL_CSS = """
<style>
.info {
    padding: 6px 8px;
    font: 14px/16px Arial, Helvetica, sans-serif;
    background: white;
    background: rgba(255, 255, 255, 0.8);
    box-shadow: 0 0 15px rgba(0, 0, 0, 0.2);
    border-radius: 5px;
}
.legend {
    line-height: 18px;
    color: #555;
}
.legend i {
    width: 18px;
    height: 18px;
    float: left;
    margin-right: 8px;
    opacity: 0.7;
}
.notice {
    color: #a94442;
    background: rgba(242, 222, 222, 0.9);
}
</style>
"""

# Light globe layout defaults
GEO_LAYOUT = dict(
    showland=True,
    landcolor="#f2efe9",
    showocean=True,
    oceancolor="#aad3df",
    showcountries=True,
    countrycolor="rgba(0,0,0,0.25)",
    countrywidth=0.5,
    showcoastlines=True,
    coastlinecolor="rgba(0,0,0,0.4)",
    coastlinewidth=0.6,
    showlakes=True,
    lakecolor="#aad3df",
    bgcolor="rgba(0,0,0,0)",
)


class HtmlControl(MacroElement):
    """A Leaflet ``L.control`` holding a fixed HTML fragment."""

    _template = Template(
        """
        {% macro script(this, kwargs) %}
        (function() {
          var control = L.control({position: '{{ this.position }}'});
          control.onAdd = function(map) {
            var div = L.DomUtil.create('div', '{{ this.css_class }}');
            div.innerHTML = {{ this.html | tojson }};
            L.DomEvent.disableClickPropagation(div);
            L.DomEvent.disableScrollPropagation(div);
            return div;
          };
          control.addTo({{ this._parent.get_name() }});
        })();
        {% endmacro %}
        """
    )

    def __init__(self, html: str, position: str = "topright", css_class: str = "info"):
        super().__init__()
        self._name = "HtmlControl"
        self.html = html
        self.position = position
        self.css_class = css_class


def legend_control() -> HtmlControl:
    return HtmlControl(build_legend_html(), position=LEGEND_POSITION, css_class="info legend")


def notice_control(failed: list[FeedResult]) -> HtmlControl:
    """Control listing the overlays whose feed could not be loaded."""
    items = "".join(
        f"<li>{OVERLAY_NAMES.get(r.name, r.name)}: {escape(r.error.reason)}</li>" for r in failed
    )
    html = f"<b>Some layers could not be loaded</b><ul>{items}</ul>"
    return HtmlControl(html, position=NOTICE_POSITION, css_class="info notice")


def add_base_layers(m: folium.Map, config: MapConfig) -> None:
    """Add the radio-selectable tile layers; the default one is shown."""
    names = [config.default_base] + [n for n in config.base_styles if n != config.default_base]

    if not config.api_key:
        logger.warning("No Mapbox access token configured, using token-free base tiles")

    for name in names:
        if config.api_key:
            tiles, attr = config.tile_url(name), MAPBOX_ATTRIBUTION
        else:
            tiles, attr = FALLBACK_TILES.get(name, FALLBACK_TILES["Streets"])
        folium.TileLayer(
            tiles=tiles,
            attr=attr,
            name=name,
            max_zoom=config.max_zoom,
            overlay=False,
            control=True,
            show=name == config.default_base,
        ).add_to(m)


def add_earthquake_layer(
    group: folium.FeatureGroup,
    quakes: list[Earthquake],
    classifier: MagnitudeClassifier,
) -> None:
    for quake in quakes:
        style = style_feature(quake, classifier)
        folium.CircleMarker(
            location=quake.location,
            popup=folium.Popup(quake.popup_html()),
            **style.to_marker_kwargs(),
        ).add_to(group)


def render_map(config: MapConfig, feeds: dict[str, FeedResult]) -> folium.Map:
    """Compose the Leaflet map from a config and the loaded feeds.

    Every overlay group is created even when its feed failed, so the layer
    control always lists all three.
    """
    m = folium.Map(location=list(config.center), zoom_start=config.zoom, tiles=None)
    m.get_root().header.add_child(folium.Element(CONTROL_CSS))

    add_base_layers(m, config)

    groups = {
        key: folium.FeatureGroup(name=name, overlay=True, control=True, show=True)
        for key, name in OVERLAY_NAMES.items()
    }

    for key, classifier in LAYER_CLASSIFIERS.items():
        result = feeds.get(key)
        if result is not None and result.ok:
            add_earthquake_layer(groups[key], parse_earthquakes(result.data), classifier)

    plates = feeds.get(FEED_PLATES)
    if plates is not None and plates.features:
        folium.GeoJson(
            plates.data,
            name=OVERLAY_NAMES[FEED_PLATES],
            style_function=plate_style,
            control=False,
        ).add_to(groups[FEED_PLATES])

    for group in groups.values():
        group.add_to(m)

    folium.LayerControl(collapsed=True).add_to(m)
    legend_control().add_to(m)

    failed = [r for r in feeds.values() if not r.ok]
    if failed:
        notice_control(failed).add_to(m)

    return m


def earthquakes_to_frame(quakes: list[Earthquake], classifier: MagnitudeClassifier) -> pd.DataFrame:
    """Tabulate earthquakes together with their marker style."""
    rows = []
    for quake in quakes:
        style = style_feature(quake, classifier)
        rows.append({
            "id": quake.id,
            "magnitude": quake.magnitude,
            "place": quake.place,
            "latitude": quake.latitude,
            "longitude": quake.longitude,
            "depth": quake.depth,
            "fill_color": style.fill_color,
            "radius": style.radius,
            "popup": quake.popup_html(),
        })
    columns = ["id", "magnitude", "place", "latitude", "longitude", "depth", "fill_color", "radius", "popup"]
    return pd.DataFrame(rows, columns=columns)


def build_globe_map(
    feeds: dict[str, FeedResult],
    projection: str = "orthographic",
    rotation_lon: float = -94.5,
    rotation_lat: float = 40.7,
) -> go.Figure:
    """Build a Plotly Scattergeo globe with the same layers as the map.

    Legend entries toggle layers the way the Leaflet layer control does.
    """
    fig = go.Figure()

    # Plates first so earthquakes render on top
    plates = feeds.get(FEED_PLATES)
    if plates is not None and plates.ok:
        for i, segment in enumerate(boundaries_to_traces(plates.data)):
            fig.add_trace(go.Scattergeo(
                lon=segment["lon"],
                lat=segment["lat"],
                mode="lines",
                line=dict(width=PLATE_BOUNDARY_STYLE["weight"], color=PLATE_BOUNDARY_STYLE["color"]),
                hoverinfo="skip",
                showlegend=i == 0,
                name=OVERLAY_NAMES[FEED_PLATES],
                legendgroup=FEED_PLATES,
            ))

    for key, classifier in LAYER_CLASSIFIERS.items():
        result = feeds.get(key)
        if result is None or not result.ok:
            continue
        df = earthquakes_to_frame(parse_earthquakes(result.data), classifier)
        if df.empty:
            continue
        fig.add_trace(go.Scattergeo(
            lon=df["longitude"],
            lat=df["latitude"],
            mode="markers",
            marker=dict(
                # Leaflet radius is in pixels; Plotly wants a diameter
                size=(df["radius"] * 2).clip(lower=2),
                color=df["fill_color"],
                opacity=1,
                line=dict(width=0.5, color="#000000"),
                sizemode="diameter",
            ),
            text=df["popup"],
            hoverinfo="text",
            name=OVERLAY_NAMES[key],
            legendgroup=key,
        ))

    fig.update_geos(
        projection_type=projection,
        projection_rotation=dict(lon=rotation_lon, lat=rotation_lat),
        **GEO_LAYOUT,
    )
    fig.update_layout(
        height=800,
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(x=0.01, y=0.99, bgcolor="rgba(255,255,255,0.8)"),
    )
    return fig
