"""
Pydantic settings for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DaprSettings(BaseSettings):
    """
    Dapr HTTP client configuration from environment variables.

    Reads from:
    1. Environment variables (DAPR_*)
    2. .env file
    3. Defaults

    Example .env file:
        DAPR_SIDECAR_IP=127.0.0.1
        DAPR_HTTP_PORT=3500
        DAPR_API_TOKEN=secret-token
        DAPR_TIMEOUT_READ=30
        DAPR_LOG_LEVEL=DEBUG
        DAPR_LOG_FORMAT=json
        DAPR_LOG_CONSOLE=false
        DAPR_LOG_FILE_PATH=/var/log/dapr-client.log
    """

    model_config = SettingsConfigDict(
        env_prefix='DAPR_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    sidecar_ip: str = Field(default="127.0.0.1", min_length=1)
    http_port: int = Field(default=3500, gt=0, lt=65536)
    api_token: Optional[str] = Field(default=None, description="Sent as dapr-api-token")

    timeout_connect: float = Field(default=5.0, gt=0)
    timeout_read: float = Field(default=60.0, gt=0)

    # Logging (disabled unless DAPR_LOG_ENABLE=true)
    log_enable: bool = Field(default=False)
    log_console: bool = Field(default=True)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_file_path: Optional[str] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator('api_token')
    @classmethod
    def empty_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        """DAPR_API_TOKEN= (empty) means no token."""
        return v or None
