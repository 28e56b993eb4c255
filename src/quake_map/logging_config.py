"""Structured JSON logging.

Every line is one JSON object. Render context passed through ``extra``
(feed, run_id, view, period, event_count, duration_ms) is lifted to top-level
keys so a run can be followed across the feed loader and the pipeline.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

STRUCTURED_FIELDS = ("run_id", "feed", "view", "period", "event_count", "duration_ms")


class StructuredFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update({
            field: getattr(record, field)
            for field in STRUCTURED_FIELDS
            if getattr(record, field, None) is not None
        })

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(level: int | str = logging.INFO, stream=None) -> None:
    """Install a single structured handler on the root logger.

    Logs go to stderr by default so they never mix with the CLI tables.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
