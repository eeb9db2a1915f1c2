"""
Log filters: correlation id of the current request and static extra fields.
"""

import contextvars
import logging
from typing import Any, Mapping, Optional


# contextvar so the id follows both threads and asyncio tasks
_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "dapr_http_correlation_id", default=None
)


def set_correlation_id(correlation_id: str) -> None:
    """
    Set correlation ID for the current context.

    Example:
        >>> set_correlation_id("3f1c...")
        >>> logger.info("Request started")  # record carries correlation_id
    """
    _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current context, or None."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear correlation ID for the current context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to records emitted while a request is in flight."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields to all log records.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"app_id": "orders", "environment": "dev"}))
    """

    def __init__(self, extra_fields: Mapping[str, Any]):
        super().__init__()
        self.extra_fields = extra_fields

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
