"""Async HTTP loader for the earthquake and plate boundary GeoJSON feeds."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

from quake_map.config import MapConfig
from quake_map.models import Earthquake

logger = logging.getLogger(__name__)

FEED_ALL = "all_quakes"
FEED_MAJOR = "major_quakes"
FEED_PLATES = "plates"


class FeedError(RuntimeError):
    """A feed could not be fetched or decoded."""

    def __init__(self, name: str, url: str, reason: str):
        super().__init__(f"[{name}] {reason} ({url})")
        self.name = name
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class FeedResult:
    name: str
    url: str
    data: dict | None = None
    error: FeedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def features(self) -> list[dict]:
        if self.data is None:
            return []
        return self.data.get("features") or []


def feed_urls(config: MapConfig) -> dict[str, str]:
    return {
        FEED_ALL: config.all_quakes_url,
        FEED_MAJOR: config.major_quakes_url,
        FEED_PLATES: config.plates_url,
    }


async def fetch_geojson(
    client: httpx.AsyncClient,
    name: str,
    url: str,
    timeout: float = 30.0,
) -> dict:
    """GET one GeoJSON document. Raises FeedError on any failure."""
    try:
        resp = await client.get(url, timeout=timeout, follow_redirects=True)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPStatusError as exc:
        raise FeedError(name, url, f"HTTP {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise FeedError(name, url, f"request failed: {exc}") from exc
    except ValueError as exc:
        raise FeedError(name, url, "response is not valid JSON") from exc

    if not isinstance(data, dict) or not isinstance(data.get("features", []), list):
        raise FeedError(name, url, "response is not a GeoJSON object")
    return data


async def _load_one(client: httpx.AsyncClient, name: str, url: str, timeout: float) -> FeedResult:
    t0 = time.monotonic()
    try:
        data = await fetch_geojson(client, name, url, timeout=timeout)
    except FeedError as exc:
        logger.error("Feed %s failed: %s", name, exc, extra={"feed": name})
        return FeedResult(name=name, url=url, error=exc)

    count = len(data.get("features") or [])
    logger.info(
        "Feed %s loaded %d features", name, count,
        extra={
            "feed": name,
            "event_count": count,
            "duration_ms": round((time.monotonic() - t0) * 1000),
        },
    )
    return FeedResult(name=name, url=url, data=data)


async def load_feeds(
    config: MapConfig,
    client: httpx.AsyncClient | None = None,
) -> dict[str, FeedResult]:
    """Fetch all three feeds concurrently.

    A failed feed never cancels the others; its result carries the error and
    no data.
    """
    urls = feed_urls(config)

    async def _gather(c: httpx.AsyncClient) -> list[FeedResult]:
        return await asyncio.gather(*(
            _load_one(c, name, url, config.timeout_seconds) for name, url in urls.items()
        ))

    if client is None:
        async with httpx.AsyncClient() as owned:
            results = await _gather(owned)
    else:
        results = await _gather(client)

    return {r.name: r for r in results}


async def load_feed(config: MapConfig, name: str) -> FeedResult:
    """Fetch a single named feed."""
    urls = feed_urls(config)
    if name not in urls:
        raise ValueError(f"Unknown feed '{name}'. Choose from: {list(urls)}")
    async with httpx.AsyncClient() as client:
        return await _load_one(client, name, urls[name], config.timeout_seconds)


def parse_earthquakes(data: dict | None) -> list[Earthquake]:
    """Convert a GeoJSON FeatureCollection into Earthquakes.

    Malformed features (not an object, no point geometry, non-numeric
    values) are skipped with a warning.
    """
    if not data:
        return []

    quakes = []
    for feature in data.get("features") or []:
        try:
            quakes.append(Earthquake.from_geojson_feature(feature))
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
            feature_id = feature.get("id") if isinstance(feature, dict) else None
            logger.warning("Skipping malformed feature %s: %s", feature_id, exc)
    return quakes
