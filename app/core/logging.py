"""JSON log lines tagged with the id of the request being served."""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Mapping
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="")

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "request_id"}


def bind_request_id(headers: Mapping[str, str]) -> str:
    """Adopt the caller's request id header, or mint one, for the current context."""
    request_id = headers.get("x-request-id") or headers.get("x-correlation-id") or uuid.uuid4().hex
    _REQUEST_ID.set(request_id)
    return request_id


class RequestIdFilter(logging.Filter):
    """Stamp records with the request id bound in the current context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _REQUEST_ID.get()
        return True


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields are copied in when non-empty."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", "")
        if request_id:
            payload["request_id"] = request_id

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or value is None or value == "":
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO") -> None:
    """Route the root logger to stdout as JSON lines."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonLogFormatter())
    handler.addFilter(RequestIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)
    # requests' connection pool logs every backend call at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
