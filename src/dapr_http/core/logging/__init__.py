"""
Structured logging for the Dapr HTTP client.

Example:
    >>> from dapr_http.core.logging import DaprLogger, LoggingConfig
    >>>
    >>> config = LoggingConfig(level="DEBUG", format="json")
    >>> logger = DaprLogger(config)
    >>> logger.info("Request started", method="GET", url="http://127.0.0.1:3500/v1.0/state/store/key")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import DaprLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "DaprLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
