"""Centralized logging configuration for ReplyDesk.

Emits single-line JSON by default so log shippers can parse it, or a
human-readable line when ``LOG_FORMAT=simple``.

Usage:
    # In main.py (once, at startup):
    from replydesk.logging_config import configure_logging
    configure_logging()

    # In any module:
    import logging
    logger = logging.getLogger(__name__)
    logger.info("Draft saved", extra={"record_id": str(record.id)})

The request id and the authenticated officer id are injected into every log
record from contextvars.
"""

import json
import logging
import os
import sys
import traceback
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional


request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)


class ContextFilter(logging.Filter):
    """Inject request-scoped context into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        if getattr(record, "user_id", None) is None:
            record.user_id = user_id_var.get()  # type: ignore[attr-defined]
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    _SKIP_FIELDS = {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "taskName",
        "request_id",
        "user_id",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
            "user_id": getattr(record, "user_id", None),
        }

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        # Anything passed through ``extra=`` becomes a top-level key
        for key, value in record.__dict__.items():
            if key in self._SKIP_FIELDS or key in log_entry:
                continue
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        return json.dumps(log_entry, default=str)


class SimpleFormatter(logging.Formatter):
    """Human-readable format for local development."""

    def format(self, record: logging.LogRecord) -> str:
        ctx_parts = []
        for field in ("request_id", "user_id"):
            val = getattr(record, field, None)
            if val:
                ctx_parts.append(f"{field}={str(val)[:12]}")
        ctx_suffix = f" [{', '.join(ctx_parts)}]" if ctx_parts else ""

        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        base = f"{timestamp} {record.levelname:<8} {record.name} - {record.getMessage()}{ctx_suffix}"

        if record.exc_info and record.exc_info[1] is not None:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))

        return base


def configure_logging() -> None:
    """Configure root logging for the application."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_format = os.getenv("LOG_FORMAT", "").lower() or "json"

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "simple":
        handler.setFormatter(SimpleFormatter())
    else:
        handler.setFormatter(JsonFormatter())
    handler.addFilter(ContextFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def create_request_context_middleware(app) -> None:
    """Register request correlation middleware on a FastAPI app."""
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.requests import Request
    from starlette.responses import Response

    class RequestContextMiddleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next) -> Response:
            req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:8])
            request_id_var.set(req_id)

            response = await call_next(request)
            response.headers["X-Request-ID"] = req_id
            return response

    app.add_middleware(RequestContextMiddleware)
