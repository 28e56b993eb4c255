"""Static magnitude legend shown in the bottom-right corner of the map."""

from __future__ import annotations

from quake_map.models import LegendEntry

LEGEND_MAGNITUDES = (0, 1, 2, 3, 4, 5, 6)
LEGEND_COLORS = (
    "#98ee00",
    "#d4ee00",
    "#eecc00",
    "#ee9c00",
    "#FFB6C1",
    "#FF00FF",
    "#000000",
)
LEGEND_POSITION = "bottomright"


def legend_entries() -> list[LegendEntry]:
    return [LegendEntry(lower_bound=m, color=c) for m, c in zip(LEGEND_MAGNITUDES, LEGEND_COLORS)]


def build_legend_html(entries: list[LegendEntry] | None = None) -> str:
    """Render legend entries as one colored square and a range label each.

    Every entry but the last is labelled ``low–high``; the last one is
    open-ended and labelled ``low+``.
    """
    if entries is None:
        entries = legend_entries()

    parts = []
    for i, entry in enumerate(entries):
        if i + 1 < len(entries):
            label = f"{entry.lower_bound}&ndash;{entries[i + 1].lower_bound}<br>"
        else:
            label = f"{entry.lower_bound}+"
        parts.append(f"<i style='background: {entry.color}'></i> {label}")
    return "".join(parts)
