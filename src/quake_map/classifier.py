"""Magnitude classification and marker styling.

A classifier is a descending table of ``(threshold, color)`` buckets: the
first bucket whose threshold the magnitude strictly exceeds wins, anything
below the last threshold gets the default color. Radius grows linearly with
magnitude, except that a zero magnitude is drawn with radius 1 so the marker
stays visible.
"""

from __future__ import annotations

from dataclasses import dataclass

from quake_map.models import Earthquake, StyleRecord

RADIUS_SCALE = 4
ZERO_MAGNITUDE_RADIUS = 1


@dataclass(frozen=True)
class MagnitudeClassifier:
    name: str
    buckets: tuple[tuple[float, str], ...]
    default_color: str

    def __post_init__(self) -> None:
        thresholds = [t for t, _ in self.buckets]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError(f"Classifier '{self.name}' buckets must be in descending threshold order")

    def color(self, magnitude: float) -> str:
        for threshold, color in self.buckets:
            if magnitude > threshold:
                return color
        return self.default_color

    def radius(self, magnitude: float) -> float:
        if magnitude == 0:
            return ZERO_MAGNITUDE_RADIUS
        return magnitude * RADIUS_SCALE

    @property
    def colors(self) -> list[str]:
        """Every color this classifier can return, highest bucket first."""
        return [c for _, c in self.buckets] + [self.default_color]


# All-earthquakes feed: six buckets, green (weak) to red (strong)
ALL_QUAKES = MagnitudeClassifier(
    name="all",
    buckets=(
        (5, "#ea2c2c"),
        (4, "#ea822c"),
        (3, "#ee9c00"),
        (2, "#eecc00"),
        (1, "#d4ee00"),
    ),
    default_color="#98ee00",
)

# M4.5+ feed: three buckets
MAJOR_QUAKES = MagnitudeClassifier(
    name="major",
    buckets=(
        (6, "#000000"),
        (5, "#FF00FF"),
    ),
    default_color="#FFB6C1",
)

CLASSIFIERS = {c.name: c for c in (ALL_QUAKES, MAJOR_QUAKES)}


def style_for_magnitude(magnitude: float, classifier: MagnitudeClassifier) -> StyleRecord:
    return StyleRecord(
        fill_color=classifier.color(magnitude),
        radius=classifier.radius(magnitude),
    )


def style_feature(quake: Earthquake, classifier: MagnitudeClassifier) -> StyleRecord:
    """Build the marker style for one earthquake."""
    return style_for_magnitude(quake.magnitude, classifier)
