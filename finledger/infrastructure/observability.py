"""Structured Logging: JSON log lines plus a per-request access log.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Ledger context (user_id, transaction_id, error_code) and request context
      (method, path, status_code, duration_ms) appear only when the caller set them
    - setup_logging is idempotent: it owns exactly one root handler, named "finledger"

Design Decisions:
    - log_request is a plain ASGI http middleware function; main.py registers it so the
      access log shares the formatter with application logs
    - uvicorn's own access log is silenced in favor of log_request (one line per request)
"""

import json
import logging
import time
from datetime import datetime, timezone

from fastapi import Request

_HANDLER_NAME = "finledger"
_CONTEXT_FIELDS = (
    "user_id", "transaction_id", "error_code",
    "method", "path", "status_code", "duration_ms",
)
_TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

access_logger = logging.getLogger("finledger.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            name: getattr(record, name)
            for name in _CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # Decimal amounts and datetimes fall back to str
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the finledger handler on the root logger, replacing a previous one."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT),
    )
    root.addHandler(handler)
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))

    logging.getLogger("uvicorn.access").disabled = True


async def log_request(request: Request, call_next):
    """Access log: method, path, status and latency for every request."""
    started = time.perf_counter()
    response = await call_next(request)
    access_logger.info(
        "%s %s -> %s", request.method, request.url.path, response.status_code,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        },
    )
    return response
