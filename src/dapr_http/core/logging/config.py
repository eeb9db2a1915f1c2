"""
Logging configuration for the Dapr HTTP client.

LoggingConfig is either built directly or derived from the DAPR_LOG_*
settings (see ``LoggingConfig.from_settings``).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

if TYPE_CHECKING:
    from ..env_config.validator import DaprSettings

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB


class LogLevel(IntEnum):
    """Уровни логирования (значения совпадают с модулем logging)."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Уровень из имени в любом регистре или числа logging."""
        if isinstance(value, str):
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value}") from None
        return cls(value)


class LogFormat(str, Enum):
    """Форматы вывода."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Настройки DaprLogger.

    Файловое логирование включено, если задан file_path.

    Args:
        level: Уровень (строка в любом регистре или LogLevel)
        format: json, text или colored
        console: Писать в stdout
        file_path: Путь к файлу с ротацией (None = без файла)
        max_bytes: Размер файла до ротации
        backup_count: Сколько ротированных файлов хранить
        correlation_id: Добавлять request id текущего запроса в записи
        extra_fields: Статические поля каждой записи (app_id, environment...)

    Example:
        >>> LoggingConfig(level="debug", format="json", console=False, file_path="/tmp/dapr.log")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    console: bool = True
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    correlation_id: bool = True
    extra_fields: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, 'level', LogLevel.parse(self.level))
        if not isinstance(self.format, LogFormat):
            object.__setattr__(self, 'format', LogFormat(str(self.format).lower()))
        object.__setattr__(self, 'extra_fields', MappingProxyType(dict(self.extra_fields)))

        if not self.console and not self.file_path:
            raise ValueError("no log destination: enable console or set file_path")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must not be negative")

    @property
    def enable_file(self) -> bool:
        return self.file_path is not None

    @classmethod
    def from_settings(cls, settings: "DaprSettings") -> Optional["LoggingConfig"]:
        """
        LoggingConfig из DAPR_LOG_* настроек, или None если DAPR_LOG_ENABLE не включён.
        """
        if not settings.log_enable:
            return None
        return cls(
            level=settings.log_level,
            format=settings.log_format,
            console=settings.log_console,
            file_path=settings.log_file_path,
        )
