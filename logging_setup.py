from __future__ import annotations

import json
import logging
import re
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from config import LOG_LEVEL
from errors import server_error_response

_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_USER_ID_CTX: ContextVar[str | None] = ContextVar("user_id", default=None)

_SENSITIVE_PATTERNS = [
    re.compile(r"(authorization\s*[:=]\s*bearer\s+)([^\s\"]+)", re.IGNORECASE),
    re.compile(r"(token\s*[:=]\s*)([^\s\",}]+)", re.IGNORECASE),
    re.compile(r"(password\s*[:=]\s*)([^\s\",}]+)", re.IGNORECASE),
]


def set_request_context(*, request_id: str | None = None, user_id: str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if user_id is not None:
        _USER_ID_CTX.set(user_id)


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _USER_ID_CTX.set(None)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "request_id": getattr(record, "request_id", None) or _REQUEST_ID_CTX.get(),
            "user_id": getattr(record, "user_id", None) or _USER_ID_CTX.get(),
            "module": record.name,
            "message": self._mask(record.getMessage()),
        }
        for key in ("endpoint", "method", "status_code", "duration_ms"):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

    def _mask(self, value: str) -> str:
        masked = value
        for pattern in _SENSITIVE_PATTERNS:
            masked = pattern.sub(r"\1***", masked)
        return masked


def configure_logging() -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(LOG_LEVEL)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(message)s"))
    root_logger.addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(LOG_LEVEL)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an X-Request-ID and log it once it completes."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        set_request_context(request_id=request_id)

        try:
            response = await call_next(request)
        except Exception as exc:
            # answered here, not by the outer server-error layer, so it still carries X-Request-ID
            logging.getLogger(__name__).exception("Unhandled error on %s %s", request.method, request.url.path)
            response = server_error_response(exc)

        user = getattr(request.state, "user", None)
        user_id = str(user["id"]) if user else None
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logging.getLogger(__name__).info(
            "request completed",
            extra={
                "request_id": request_id,
                "user_id": user_id,
                "endpoint": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        response.headers["X-Request-ID"] = request_id
        clear_request_context()
        return response
