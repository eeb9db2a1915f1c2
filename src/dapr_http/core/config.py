"""
Система конфигурации для Dapr HTTP клиента.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Union, TYPE_CHECKING, Mapping
from types import MappingProxyType

from ..constants import DEFAULT_HTTP_PORT, DEFAULT_SIDECAR_IP

if TYPE_CHECKING:
    from .logging import LoggingConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect: Таймаут подключения к sidecar (сек)
        read: Таймаут чтения ответа (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=60)
    """
    connect: float = 5
    read: float = 60

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ConnectionPoolConfig:
    """
    Конфигурация connection pool.

    Args:
        pool_connections: Количество connection pools для кеширования
        pool_maxsize: Максимум соединений в пуле
        pool_block: Блокировать при достижении лимита
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise ValueError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise ValueError("pool_maxsize must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """
    Convert dict to immutable MappingProxyType.

    Example:
        >>> frozen = _freeze_dict({"X-Custom": "value"})
        >>> frozen["X-New"] = "value"  # Raises TypeError
    """
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class DaprHttpConfig:
    """
    Главная конфигурация DaprHttp.

    Args:
        sidecar_ip: Адрес sidecar
        http_port: HTTP порт sidecar
        api_token: Токен для заголовка dapr-api-token (опционально)
        headers: Дефолтные заголовки для каждого запроса
        timeout: Конфигурация таймаутов
        pool: Конфигурация connection pool
        logging: Конфигурация логирования (None = без логирования)

    Examples:
        >>> config = DaprHttpConfig(http_port=3500)
        >>> config = DaprHttpConfig.create(port=3501, timeout=10)
    """
    sidecar_ip: str = DEFAULT_SIDECAR_IP
    http_port: int = DEFAULT_HTTP_PORT
    api_token: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    pool: ConnectionPoolConfig = field(default_factory=ConnectionPoolConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Validate port and freeze mutable dicts."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

        if not self.sidecar_ip:
            raise ValueError("sidecar_ip must not be empty")
        if not 0 < self.http_port < 65536:
            raise ValueError(f"http_port must be in 1..65535, got {self.http_port}")

    @property
    def base_url(self) -> str:
        """http://<sidecar_ip>:<http_port>"""
        return f"http://{self.sidecar_ip}:{self.http_port}"

    @classmethod
    def create(
        cls,
        port: Optional[int] = None,
        sidecar_ip: Optional[str] = None,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 60,
        api_token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        pool_connections: Optional[int] = None,
        pool_maxsize: Optional[int] = None,
        logging: Optional['LoggingConfig'] = None,
    ) -> 'DaprHttpConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            port: HTTP порт sidecar
            sidecar_ip: Адрес sidecar
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            api_token: Токен API
            headers: Заголовки
            pool_connections: Количество connection pool connections
            pool_maxsize: Максимальный размер connection pool
            logging: Конфигурация логирования

        Examples:
            >>> config = DaprHttpConfig.create(port=3500, timeout=(3, 30))
        """
        pool_kwargs = {}
        if pool_connections is not None:
            pool_kwargs['pool_connections'] = pool_connections
        if pool_maxsize is not None:
            pool_kwargs['pool_maxsize'] = pool_maxsize

        return cls(
            sidecar_ip=sidecar_ip or DEFAULT_SIDECAR_IP,
            http_port=port if port is not None else DEFAULT_HTTP_PORT,
            api_token=api_token,
            headers=_freeze_dict(headers),
            timeout=_to_timeout_config(timeout),
            pool=ConnectionPoolConfig(**pool_kwargs),
            logging=logging,
        )

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'DaprHttpConfig':
        """Создать новый конфиг с изменённым timeout."""
        return replace(self, timeout=_to_timeout_config(timeout))

    def with_port(self, port: int) -> 'DaprHttpConfig':
        """Создать новый конфиг с другим портом sidecar."""
        return replace(self, http_port=port)

    def with_headers(self, headers: Dict[str, str]) -> 'DaprHttpConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Example:
            >>> new_config = config.with_headers({"X-Tenant": "acme"})
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=_freeze_dict(merged))


def _to_timeout_config(timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> TimeoutConfig:
    if isinstance(timeout, TimeoutConfig):
        return timeout
    if isinstance(timeout, tuple):
        return TimeoutConfig(connect=timeout[0], read=timeout[1])
    return TimeoutConfig(connect=5, read=timeout)
