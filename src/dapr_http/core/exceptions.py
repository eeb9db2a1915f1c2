"""
Иерархия исключений Dapr HTTP клиента.

Классификация:
- DaprException - sidecar ответил не-2xx статусом (структурированная ошибка)
- NetworkError - ответа нет вообще (таймаут, отказ соединения)
"""

from typing import Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

UNKNOWN_ERROR_CODE = "UNKNOWN"


class DaprClientException(Exception):
    """Базовое исключение клиента."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ SIDECAR (не-2xx ответ)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class DaprException(DaprClientException):
    """
    Sidecar вернул не-2xx ответ.

    Args:
        error_code: Код ошибки из тела ответа (или "UNKNOWN")
        message: Сообщение об ошибке
        status_code: HTTP статус ответа
    """

    def __init__(
        self,
        error_code: Optional[str],
        message: Optional[str],
        status_code: Optional[int] = None
    ):
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(f"{error_code}: {message}")
        # message без префикса кода
        self.message = message

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СЕТЕВЫЕ ОШИБКИ (ответа нет)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class NetworkError(DaprClientException):
    """Сетевая ошибка."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(NetworkError):
    """
    Таймаут запроса к sidecar.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута
    """

    def __init__(self, message: str, url: str, timeout: Optional[float] = None):
        self.timeout = timeout
        msg = message
        if timeout:
            msg += f" (timeout: {timeout}s)"
        super().__init__(msg, url)


class ConnectionError(NetworkError):
    """
    Sidecar недоступен.

    Примеры:
    - Connection refused (sidecar не запущен)
    - Connection reset
    """
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ПРОЧЕЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SerializationError(DaprClientException):
    """Не удалось (де)сериализовать данные."""
    pass


class ConfigurationError(DaprClientException):
    """Ошибка конфигурации."""
    pass
