# src/dapr_http/core/error_handler.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from requests.exceptions import (
    ConnectionError as RequestsConnectionError,
)
from requests.exceptions import (
    RequestException,
    Timeout,
)

from .exceptions import (
    UNKNOWN_ERROR_CODE,
    ConnectionError,
    DaprClientException,
    DaprException,
    TimeoutError,
)


class DaprError(BaseModel):
    """Тело ошибки sidecar: {"errorCode": ..., "message": ...}"""

    # numeric errorCode (e.g. 404) is kept as its string form
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    error_code: Optional[str] = Field(default=None, alias="errorCode")
    message: Optional[str] = None


class ErrorHandler:
    """Класс для обработки ошибок запросов к sidecar"""

    @staticmethod
    def is_success(status_code: int) -> bool:
        """Any 2xx is a success."""
        return 200 <= status_code < 300

    @staticmethod
    def parse_dapr_error(body: Optional[bytes]) -> Optional[DaprError]:
        """
        Разбирает тело ошибки.

        Returns:
            DaprError, или None если тело пустое

        Raises:
            ValueError: тело не является JSON объектом
        """
        if not body:
            return None
        try:
            return DaprError.model_validate_json(body)
        except ValidationError as e:
            raise ValueError(f"Malformed error body: {e.error_count()} error(s)") from e

    @staticmethod
    def build_dapr_exception(status_code: int, body: Optional[bytes]) -> DaprException:
        """
        Преобразует не-2xx ответ в DaprException.

        Тело ответа может быть валидным JSON, невалидным JSON или пустым -
        результат всегда DaprException.
        """
        try:
            error = ErrorHandler.parse_dapr_error(body)
        except ValueError:
            text = body.decode("utf-8", errors="replace") if body else ""
            return DaprException(UNKNOWN_ERROR_CODE, text, status_code)

        if error is not None and error.error_code is not None and error.message is not None:
            return DaprException(error.error_code, error.message, status_code)

        return DaprException(UNKNOWN_ERROR_CODE, f"HTTP status code: {status_code}", status_code)

    @staticmethod
    def convert_request_exception(
        error: Exception,
        url: str,
        timeout: Optional[float] = None
    ) -> DaprClientException:
        """Преобразует исключение requests в исключение клиента"""

        if isinstance(error, Timeout):
            return TimeoutError(str(error), url, timeout)

        elif isinstance(error, RequestsConnectionError):
            return ConnectionError(str(error), url)

        elif isinstance(error, RequestException):
            return DaprClientException(f"Request failed: {error}")

        else:
            return DaprClientException(f"Unexpected error: {error}")

