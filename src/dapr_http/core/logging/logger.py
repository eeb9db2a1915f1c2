"""
DaprLogger - structured logger used by DaprHttp / AsyncDaprHttp.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class DaprLogger:
    """
    Thin wrapper over logging.Logger with keyword-style extra fields.

    Every keyword argument is masked (api tokens, authorization headers)
    before it reaches the handlers.

    Example:
        >>> logger = DaprLogger(LoggingConfig(level="DEBUG"), name="dapr_http.local")
        >>> logger.info("Request completed", method="GET", status_code=200)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "dapr_http"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = int(self.config.level)
        # Unregistered logger: its handlers belong to this instance only
        self._logger = logging.Logger(name, level)
        self._logger.propagate = False

        filters = []
        if self.config.correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.console:
            self._logger.addHandler(
                create_console_handler(level=level, formatter=formatter, filters=filters)
            )

        if self.config.file_path:
            self._logger.addHandler(
                create_file_handler(
                    file_path=self.config.file_path,
                    level=level,
                    formatter=formatter,
                    max_bytes=self.config.max_bytes,
                    backup_count=self.config.backup_count,
                    filters=filters
                )
            )

    def _log(self, level: int, message: str, kwargs: dict, exc_info: bool = False) -> None:
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log with traceback; call from an except block."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close all handlers. Idempotent.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
