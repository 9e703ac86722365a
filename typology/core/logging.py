from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import IO, Any, Dict, Iterator, Mapping, MutableMapping
from uuid import uuid4


_CORRELATION_ID: ContextVar[str | None] = ContextVar("typology_correlation_id", default=None)
_CONFIGURED_ATTR = "_typology_json_configured"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = _CORRELATION_ID.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        structured = getattr(record, "structured_data", None)
        if isinstance(structured, Mapping):
            for key, value in structured.items():
                payload.setdefault(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class StructuredAdapter(logging.LoggerAdapter):
    """Merge adapter defaults with per-call ``structured_data`` fields.

    Per-call fields win over the defaults the adapter was created with.
    """

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        merged: Dict[str, Any] = dict(self.extra or {})
        extra = kwargs.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        call_fields = extra.get("structured_data")
        if isinstance(call_fields, Mapping):
            merged.update(call_fields)
        extra["structured_data"] = merged
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(
    *,
    level: int = logging.INFO,
    environment: str = "dev",
    stream: IO[str] | None = None,
) -> None:
    """Install the JSON handler on the root logger once.

    ``dev`` and ``test`` lower the default INFO level to DEBUG so the engine's
    per-calculation events are visible; ``prod`` never goes below INFO.
    Repeated calls are no-ops.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_ATTR, False):
        return

    if environment in ("dev", "test"):
        effective_level = logging.DEBUG if level == logging.INFO else level
    elif environment == "prod":
        effective_level = max(level, logging.INFO)
    else:
        effective_level = level

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(effective_level)
    setattr(root, _CONFIGURED_ATTR, True)


def get_logger(name: str, **defaults: Any) -> StructuredAdapter:
    """Return a structured adapter that stamps ``defaults`` on every record."""

    return StructuredAdapter(logging.getLogger(name), defaults)


def get_correlation_id() -> str | None:
    return _CORRELATION_ID.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block."""

    cid = correlation_id or uuid4().hex
    token = _CORRELATION_ID.set(cid)
    try:
        yield cid
    finally:
        _CORRELATION_ID.reset(token)


__all__ = [
    "JsonFormatter",
    "StructuredAdapter",
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "correlation_context",
]
