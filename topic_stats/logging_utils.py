"""Structured JSON logging utilities."""
import json
import time
import uuid
from datetime import datetime, timezone
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging

# Configure root logger to output JSON
logger = logging.getLogger()
handler = logging.StreamHandler()

EXTRA_FIELDS = (
    "request_id",
    "method",
    "path",
    "status",
    "latency_ms",
    "topic_id",
    "operation",
    "result",
    "cause",
)


# Set log level from environment (will be updated in main.py)
def configure_logging(level: str = "INFO"):
    """Configure logging level."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)
    handler.setLevel(log_level)

configure_logging()


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        return json.dumps(log_data)


handler.setFormatter(JSONFormatter())
logger.addHandler(handler)
logger.propagate = False


def log_event(name: str, level: int, msg: str, **fields) -> None:
    """Emit a log record carrying structured fields."""
    log_record = logging.LogRecord(
        name=name,
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in fields.items():
        setattr(log_record, key, value)
    logger.handle(log_record)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log requests in JSON format."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        start_time = time.time()

        # Store request_id in request state
        request.state.request_id = request_id

        # Process request
        response = await call_next(request)

        # Calculate latency
        latency_ms = int((time.time() - start_time) * 1000)

        # Track metrics
        from topic_stats.routes.metrics import http_requests_total, request_latency_ms
        http_requests_total.labels(
            path=request.url.path,
            status=response.status_code
        ).inc()
        request_latency_ms.observe(latency_ms)

        log_event(
            "http",
            logging.INFO,
            "",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=latency_ms,
        )

        return response
