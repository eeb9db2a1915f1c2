"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional

from pydantic import ValidationError

from ..config import DaprHttpConfig, TimeoutConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from ...utils.sanitizer import mask_headers
from .validator import DaprSettings


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> DaprHttpConfig:
    """
    Load DaprHttpConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters (same names as DaprSettings fields)
    2. Environment variables (DAPR_*)
    3. .env file
    4. Defaults

    Raises:
        ConfigurationError: invalid value in the environment or overrides

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.local", http_port=3501)
    """
    kwargs = dict(overrides)
    if env_file is not None:
        kwargs['_env_file'] = env_file

    try:
        settings = DaprSettings(**kwargs)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Dapr settings: {e}") from e

    try:
        logging_config = LoggingConfig.from_settings(settings)
    except ValueError as e:
        raise ConfigurationError(f"Invalid logging settings: {e}") from e

    return DaprHttpConfig(
        sidecar_ip=settings.sidecar_ip,
        http_port=settings.http_port,
        api_token=settings.api_token,
        timeout=TimeoutConfig(connect=settings.timeout_connect, read=settings.timeout_read),
        logging=logging_config,
    )


def config_summary(config: DaprHttpConfig) -> str:
    """
    Human-readable configuration summary with secrets masked.

    Example:
        >>> print(config_summary(load_from_env()))
        DaprHttpConfig:
          base_url: http://127.0.0.1:3500
          api_token: ***
          ...
    """
    lines = [
        "DaprHttpConfig:",
        f"  base_url: {config.base_url}",
        f"  api_token: {'***' if config.api_token else None}",
        f"  timeout: connect={config.timeout.connect}s, read={config.timeout.read}s",
        f"  pool: connections={config.pool.pool_connections}, maxsize={config.pool.pool_maxsize}",
        f"  headers: {mask_headers(config.headers)}",
    ]
    if config.logging:
        lines.append(f"  logging: level={config.logging.level.name}, format={config.logging.format.value}")
        if config.logging.file_path:
            lines.append(f"    file: {config.logging.file_path}")
    return "\n".join(lines)
