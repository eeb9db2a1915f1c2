"""Core модули Dapr HTTP клиента."""

from .config import (
    TimeoutConfig,
    ConnectionPoolConfig,
    DaprHttpConfig,
)
from .exceptions import (
    UNKNOWN_ERROR_CODE,
    DaprClientException,
    DaprException,
    NetworkError,
    TimeoutError,
    ConnectionError,
    SerializationError,
    ConfigurationError,
)
from .deferred import DeferredResponse, AsyncDeferredResponse
from .dapr_http import DaprHttp, Response
from .error_handler import ErrorHandler, DaprError

__all__ = [
    # Config
    "TimeoutConfig",
    "ConnectionPoolConfig",
    "DaprHttpConfig",
    # Core
    "DaprHttp",
    "Response",
    "DeferredResponse",
    "AsyncDeferredResponse",
    "ErrorHandler",
    "DaprError",
    # Exceptions
    "UNKNOWN_ERROR_CODE",
    "DaprClientException",
    "DaprException",
    "NetworkError",
    "TimeoutError",
    "ConnectionError",
    "SerializationError",
    "ConfigurationError",
]
