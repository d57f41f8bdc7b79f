# instashare/utils/logger.py
# JSON lines in production, plain text locally (LOG_FORMAT=text)

import json
import logging
from datetime import datetime, timezone

from fastapi import Request

_EXTRA_KEYS = ("method", "path", "user_id", "post_id", "comment_id")

request_logger = logging.getLogger("instashare.requests")


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    # Idempotent: re-imports (reloaders, tests) must not stack handlers
    for existing in list(root.handlers):
        if getattr(existing, "_instashare", False):
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._instashare = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def log_request(request: Request) -> None:
    """Route dependency: one info line per request on the routes that opt in."""
    request_logger.info(
        "%s %s",
        request.method,
        request.url.path,
        extra={"method": request.method, "path": request.url.path},
    )
