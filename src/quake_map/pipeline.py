"""Render pipeline: fetch feeds -> style -> compose map -> write HTML."""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

import httpx

from quake_map.config import VIEWS, MapConfig
from quake_map.feeds import load_feeds
from quake_map.map_layers import OVERLAY_NAMES, build_globe_map, render_map

logger = logging.getLogger(__name__)


async def run_render_pipeline(
    config: MapConfig,
    output_path: str | Path,
    view: str = "map",
    client: httpx.AsyncClient | None = None,
) -> dict:
    """Load the feeds, render one view and write it to ``output_path``.

    Failed feeds do not abort the render; they are reported under "failed".
    """
    if view not in VIEWS:
        raise ValueError(f"Unknown view '{view}'. Choose from: {list(VIEWS)}")

    run_id = str(uuid.uuid4())[:8]
    t0 = time.monotonic()
    output = Path(output_path)
    context = {"run_id": run_id, "view": view, "period": config.period}

    logger.info("[%s] Render starting: view=%s period=%s", run_id, view, config.period, extra=context)

    feeds = await load_feeds(config, client=client)

    if view == "map":
        render_map(config, feeds).save(str(output))
    else:
        build_globe_map(feeds, rotation_lon=config.center[1], rotation_lat=config.center[0]).write_html(
            str(output), include_plotlyjs="cdn",
        )

    failed = [name for name, r in feeds.items() if not r.ok]
    duration = time.monotonic() - t0
    result = {
        "run_id": run_id,
        "output": str(output),
        "view": view,
        "layers": {OVERLAY_NAMES[name]: len(r.features) for name, r in feeds.items()},
        "failed": [OVERLAY_NAMES[name] for name in failed],
        "duration_s": round(duration, 2),
    }

    if failed:
        logger.warning("[%s] Render complete with %d failed feed(s): %s",
                       run_id, len(failed), ", ".join(failed), extra=context)
    else:
        logger.info("[%s] Render complete in %.1fs", run_id, duration,
                    extra={**context, "duration_ms": round(duration * 1000)})
    return result
