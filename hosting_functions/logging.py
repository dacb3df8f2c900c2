from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from decimal import Decimal
from typing import Any, Dict

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

SENSITIVE_MARKERS = ("token", "secret", "key", "authorization", "password")
REDACTED = "[REDACTED]"


def _is_sensitive(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in SENSITIVE_MARKERS)


class RequestIdFilter(logging.Filter):
    """Attach the current request id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as JSON."""

    def _coerce(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            return format(value, "f")
        if isinstance(value, dict):
            return {
                str(k): REDACTED if _is_sensitive(str(k)) else self._coerce(v)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set)):
            return [self._coerce(item) for item in value]
        return value

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        data: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        # Whitelisted extra fields to enrich logs
        extra_fields = (
            "request_id",
            "endpoint",
            "method",
            "payment_id",
            "order_id",
            "state",
            "payment_status",
            "order_status",
            "response_code",
            "latency_ms",
            "email_id",
            "rows",
            "error",
            "request_headers",
            "response_body",
        )
        for field in extra_fields:
            value = getattr(record, field, None)
            if value is not None:
                data[field] = self._coerce(value)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


def mask_headers(headers: Dict[str, str] | None) -> Dict[str, str]:
    """Return a copy of outbound headers safe to log."""
    masked: Dict[str, str] = {}
    for key, value in (headers or {}).items():
        masked[key] = "***" if key.lower() == "authorization" else value
    return masked


def resolve_level(level: str) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger to use JSON formatter."""
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(level=resolve_level(level), handlers=[handler])
