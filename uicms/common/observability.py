# uicms/common/observability.py
"""
Request-id context for log records.

Loaded by the LOGGING config while settings are still being read, so this
module must not import DRF or any models.
"""
from __future__ import annotations

import contextvars
import logging

_current_request_id: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


def current_request_id() -> str:
    return _current_request_id.get()


def bind_request_id(request_id: str) -> contextvars.Token:
    return _current_request_id.set(request_id)


def unbind_request_id(token: contextvars.Token) -> None:
    _current_request_id.reset(token)


class RequestIdLogFilter(logging.Filter):
    """Adds ``record.request_id`` so formatters can reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = current_request_id()
        return True
