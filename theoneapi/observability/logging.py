from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_EXTRA_FIELDS = ("resource", "path", "params", "status_code", "reason", "latency_ms", "detail")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        for key in _EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Send ``theoneapi`` logs to stdout as one JSON object per line."""
    package_logger = logging.getLogger("theoneapi")
    package_logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    package_logger.handlers = [handler]
