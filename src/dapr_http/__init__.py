"""Dapr HTTP client - thin wrapper over the Dapr sidecar REST API."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.dapr_http import DaprHttp, Response
from .core.deferred import DeferredResponse, AsyncDeferredResponse
from .client import DaprClient
from .serializer import DefaultObjectSerializer
from .core.env_config import load_from_env

# Опциональный импорт AsyncDaprHttp (требует httpx)
try:
    from .async_client import AsyncDaprHttp
    _HAS_ASYNC = True
except ImportError:
    _HAS_ASYNC = False
    AsyncDaprHttp = None  # type: ignore
from .core.config import (
    DaprHttpConfig,
    TimeoutConfig,
    ConnectionPoolConfig,
)
from .core.logging import LoggingConfig
from .core.exceptions import (
    DaprClientException,
    DaprException,
    NetworkError,
    TimeoutError,
    ConnectionError,
    SerializationError,
    ConfigurationError,
)

# NullHandler prevents "No handler found" warnings;
# configure logging.getLogger('dapr_http') or pass LoggingConfig
logging.getLogger('dapr_http').addHandler(logging.NullHandler())

try:
    __version__ = version("dapr-http-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    # Core
    "DaprHttp",
    "AsyncDaprHttp",
    "DaprClient",
    "Response",
    "DeferredResponse",
    "AsyncDeferredResponse",
    "DefaultObjectSerializer",

    # Config
    "DaprHttpConfig",
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "LoggingConfig",
    "load_from_env",

    # Exceptions
    "DaprClientException",
    "DaprException",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "SerializationError",
    "ConfigurationError",

    # Version
    "__version__",
]
