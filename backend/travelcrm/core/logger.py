"""Structured logging configuration with request correlation.

Every record is written to stdout as one JSON object. Inside a request the
record also carries the correlation id and, once :func:`travelcrm.api.deps.require_auth`
has run, the id of the authenticated staff member.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# ``extra=`` keys copied verbatim into the JSON payload
EXTRA_KEYS = (
    "endpoint",
    "method",
    "path",
    "status",
    "elapsed_ms",
    "customer_id",
    "destination_id",
    "staff_id",
)

access_log = logging.getLogger("travelcrm.access")


class JSONFormatter(logging.Formatter):
    """Render log records as JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for key in EXTRA_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp records with the request id and the authenticated staff id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = getattr(record, "request_id", None)
            return True
        record.request_id = ensure_request_id()
        principal = g.get("principal")
        if principal is not None and getattr(record, "staff_id", None) is None:
            record.staff_id = principal.id
        return True


def _incoming_request_id() -> str | None:
    return next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None
    )


def ensure_request_id() -> str:
    """Return the current request identifier, generating one when necessary."""

    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        g.request_id = _incoming_request_id() or str(uuid4())
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout as JSON at ``level``."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    root.setLevel(level)


def init_app(app: Flask) -> None:
    """Seed request ids, echo them back, and log one line per finished request."""

    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _start_request() -> None:
        # ``g`` lives on the app context, which can outlast a single request.
        g.pop("principal", None)
        g.request_id = _incoming_request_id() or str(uuid4())
        g.started_at = time.perf_counter()

    @app.after_request
    def _finish_request(response: Response) -> Response:  # pragma: no cover
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.get("started_at")
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        access_log.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )
        return response


__all__ = ["configure_logging", "init_app", "ensure_request_id"]
