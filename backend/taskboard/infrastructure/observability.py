"""Structured Logging — JSON formatter, request logging, and setup for production observability.

Invariants:
    - Every JSON line carries timestamp, level, logger, service, and message
    - Task context (task_id, operation, latency_ms) and request context
      (method, path, status_code, duration_ms) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - setup_logging called once on startup via lifespan
    - log_request is plain middleware logic so main.py stays a wiring module
"""

import logging
import json
import time
from datetime import datetime, timezone
from typing import Awaitable, Callable

from fastapi import Request, Response

SERVICE_NAME = "taskboard-api"

_TASK_KEYS = ("task_id", "operation", "latency_ms", "function_name")
_REQUEST_KEYS = ("method", "path", "status_code", "duration_ms")
_ERROR_KEYS = ("error_code",)

request_logger = logging.getLogger("taskboard.requests")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with this service's context fields."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key in _TASK_KEYS + _REQUEST_KEYS + _ERROR_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


async def log_request(
    request: Request, call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """HTTP middleware: one line per request with status and wall time."""
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    request_logger.info(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
