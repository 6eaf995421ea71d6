"""
Process-wide logging for the API and the chat front-end.

Structured events go to the ``agriinfo.events`` logger as one JSON object per
line. Every record, structured or not, carries the trace id of the request
that produced it.
"""

from __future__ import annotations

import json
import logging
import re
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional, Union


EVENT_LOGGER_NAME = "agriinfo.events"
UNKNOWN_TRACE = "unknown"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(trace_id)s] %(message)s"

_current_trace: ContextVar[Optional[str]] = ContextVar("agriinfo_trace_id", default=None)
_events = logging.getLogger(EVENT_LOGGER_NAME)
_configured = False
_WHITESPACE = re.compile(r"\s+")


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def _make_handler(log_path: Optional[str]) -> logging.Handler:
    if not log_path:
        return logging.StreamHandler()
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )


def init_logging(
    *, log_path: Optional[str] = None, level: Union[int, str] = logging.INFO
) -> None:
    """Attach one handler to the root logger. Later calls are no-ops."""
    global _configured
    if _configured:
        return
    handler = _make_handler(log_path)
    handler.addFilter(TraceIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    _events.setLevel(level)
    _configured = True


def get_trace_id() -> str:
    return _current_trace.get() or UNKNOWN_TRACE


@contextmanager
def trace_scope(trace_id: str) -> Iterator[str]:
    token = _current_trace.set(trace_id)
    try:
        yield trace_id
    finally:
        _current_trace.reset(token)


def summarize_text(text: Any, limit: int = 400) -> str:
    """Single-line preview of ``text`` for log payloads."""
    if not text:
        return ""
    flat = _WHITESPACE.sub(" ", str(text)).strip()
    return flat if len(flat) <= limit else flat[:limit] + "..."


def log_event(event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    if not _events.isEnabledFor(level):
        return
    payload = {"event": event, "trace_id": get_trace_id()}
    payload.update(fields)
    # Hindi answers stay readable in the log file.
    _events.log(level, json.dumps(payload, ensure_ascii=False, default=str))


def log_error_event(event: str, **fields: Any) -> None:
    log_event(event, level=logging.ERROR, **fields)
