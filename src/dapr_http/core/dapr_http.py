# src/dapr_http/core/dapr_http.py
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union
import json
import time
import uuid

import requests
from requests.adapters import HTTPAdapter

from ..constants import (
    BODYLESS_METHODS,
    HEADER_DAPR_API_TOKEN,
    HEADER_DAPR_REQUEST_ID,
    HEALTHZ_PATH,
    MEDIA_TYPE_APPLICATION_JSON,
)
from ..utils.sanitizer import mask_url
from .config import DaprHttpConfig
from .deferred import DeferredResponse
from .error_handler import ErrorHandler
from .logging import DaprLogger, clear_correlation_id, set_correlation_id
from .session_manager import ThreadSafeSessionManager

Content = Union[bytes, str, None]

# Body sent for a body-carrying method without content when the payload is JSON
EMPTY_JSON_BODY = b'""'


@dataclass(frozen=True)
class Response:
    """
    Ответ sidecar.

    Attributes:
        body: Тело ответа как есть (b"" если тела нет)
        headers: Заголовки ответа
        status_code: HTTP статус
    """
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int = 200

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Тело как JSON (None для пустого тела)."""
        if not self.body:
            return None
        return json.loads(self.body)


# ==================== Построение запроса ====================
# Общие для DaprHttp и AsyncDaprHttp

def build_url(config: DaprHttpConfig, path: str) -> str:
    """
    http://<host>:<port>/<path>

    Example:
        >>> build_url(DaprHttpConfig(), "/v1.0/state")
        'http://127.0.0.1:3500/v1.0/state'
    """
    return f"{config.base_url}/{path.lstrip('/')}"


def _find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def build_headers(
    config: DaprHttpConfig,
    method: str,
    request_id: str,
    headers: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Заголовки запроса: request id, токен API, content-type, затем заголовки вызывающего.

    Заголовки вызывающего имеют приоритет.
    """
    result = {HEADER_DAPR_REQUEST_ID: request_id}
    if config.api_token:
        result[HEADER_DAPR_API_TOKEN] = config.api_token

    caller_headers = dict(headers) if headers else {}
    if method not in BODYLESS_METHODS and _find_header(caller_headers, "content-type") is None:
        result["Content-Type"] = MEDIA_TYPE_APPLICATION_JSON

    result.update(caller_headers)
    return result


def build_body(method: str, content: Content, headers: Mapping[str, str]) -> Optional[bytes]:
    """
    Тело запроса.

    GET/DELETE никогда не отправляют тело. Для остальных методов без content
    отправляется пустая JSON строка ("") если content-type JSON, иначе пустое тело.
    """
    if method in BODYLESS_METHODS:
        return None
    if content is None:
        content_type = _find_header(headers, "content-type") or ""
        return EMPTY_JSON_BODY if content_type.lower().startswith("application/json") else b""
    if isinstance(content, str):
        return content.encode("utf-8")
    return bytes(content)


def create_logger(config: DaprHttpConfig) -> Optional[DaprLogger]:
    """DaprLogger named after the sidecar address, or None if logging is off."""
    if config.logging is None:
        return None
    return DaprLogger(
        config=config.logging,
        name=f"dapr_http.{config.sidecar_ip}:{config.http_port}"
    )


class DaprHttp:
    """
    Синхронный клиент REST API Dapr sidecar.

    Каждый вызов invoke_api возвращает DeferredResponse: запрос отправляется
    только при первом вызове result().

    Features:
        - Connection pooling (requests.Session на поток)
        - Не-2xx ответы -> DaprException с кодом и сообщением из тела
        - Структурированное логирование с request id в роли correlation id

    Example:
        >>> with DaprHttp(3500) as dapr:
        ...     handle = dapr.invoke_api("GET", "v1.0/state/store/order", params={"orderId": "41"})
        ...     response = handle.result()
        ...     print(response.status_code, response.body)
    """

    def __init__(
        self,
        port: Optional[int] = None,
        *,
        config: Optional[DaprHttpConfig] = None,
        **kwargs: Any
    ):
        """
        Initialize the client.

        Args:
            port: Sidecar HTTP port (overrides config.http_port)
            config: DaprHttpConfig instance
            **kwargs: Passed to DaprHttpConfig.create when config is None
        """
        if config is None:
            config = DaprHttpConfig.create(port=port, **kwargs)
        elif port is not None:
            config = config.with_port(port)

        self._config = config
        self._logger = create_logger(config)
        self._session_manager = ThreadSafeSessionManager(session_factory=self._create_session)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self._config.pool.pool_connections,
            pool_maxsize=self._config.pool.pool_maxsize,
            pool_block=self._config.pool.pool_block,
            max_retries=0
        )
        session.mount('http://', adapter)

        if self._config.headers:
            session.headers.update(self._config.headers)

        return session

    def close(self):
        """
        Закрывает все сессии (из всех потоков) и логгер.

        Handles consumed after close() open a fresh session.
        """
        if self._logger is not None:
            self._logger.close()
        self._session_manager.close_all()

    # ==================== API ====================

    def invoke_api(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        content: Content = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DeferredResponse[Response]:
        """
        Подготовить вызов API sidecar.

        Аргументы копируются сразу; сам запрос выполняется при первом
        result() на возвращённом объекте.

        Args:
            method: HTTP метод (GET, POST, PUT, DELETE, ...)
            path: Путь без хоста, например "v1.0/state/store"
            params: Query параметры
            content: Тело запроса (bytes или str в UTF-8)
            headers: Дополнительные заголовки

        Returns:
            DeferredResponse[Response]

        Raises (при result()):
            DaprException: не-2xx ответ
            TimeoutError, ConnectionError: ошибка транспорта
        """
        method = method.upper()
        query = dict(params) if params else {}
        caller_headers = dict(headers) if headers else {}

        return DeferredResponse(
            lambda: self._do_invoke_api(method, path, query, content, caller_headers)
        )

    def _do_invoke_api(
        self,
        method: str,
        path: str,
        params: Dict[str, str],
        content: Content,
        headers: Dict[str, str],
    ) -> Response:
        """Send the request now and map the outcome."""
        request_id = str(uuid.uuid4())
        url = build_url(self._config, path)
        request_headers = build_headers(self._config, method, request_id, headers)
        body = build_body(method, content, request_headers)
        timeout = self._config.timeout.as_tuple()

        if self._logger:
            set_correlation_id(request_id)
            self._logger.debug(
                "Request initialized",
                method=method,
                url=url,
                params=params,
                headers=request_headers,
                body_size=len(body) if body is not None else 0
            )

        start_time = time.time()
        try:
            try:
                response = self.session.request(
                    method=method,
                    url=url,
                    params=params or None,
                    data=body,
                    headers=request_headers,
                    timeout=timeout,
                )
            except requests.exceptions.RequestException as e:
                if self._logger:
                    self._logger.error(
                        "Request failed",
                        method=method,
                        url=url,
                        error=str(e),
                        error_type=type(e).__name__,
                        duration_ms=round((time.time() - start_time) * 1000, 2)
                    )
                raise ErrorHandler.convert_request_exception(
                    e, url, self._config.timeout.read
                ) from e

            return self._to_response(method, response, start_time)
        finally:
            if self._logger:
                clear_correlation_id()

    def _to_response(self, method: str, response: requests.Response, start_time: float) -> Response:
        status_code = response.status_code
        body = response.content or b""
        duration_ms = round((time.time() - start_time) * 1000, 2)

        if not ErrorHandler.is_success(status_code):
            error = ErrorHandler.build_dapr_exception(status_code, body)
            if self._logger:
                self._logger.error(
                    "Request failed",
                    method=method,
                    url=mask_url(response.url),
                    status_code=status_code,
                    error_code=error.error_code,
                    error_message=error.message,
                    duration_ms=duration_ms
                )
            raise error

        if self._logger:
            self._logger.info(
                "Request completed",
                method=method,
                url=mask_url(response.url),
                status_code=status_code,
                duration_ms=duration_ms,
                response_size=len(body)
            )

        return Response(body=body, headers=dict(response.headers), status_code=status_code)

    def health_check(self, timeout: float = 5.0) -> Dict[str, Any]:
        """
        Проверяет доступность sidecar (GET v1.0/healthz), выполняется сразу.

        Returns:
            {
                "healthy": bool,
                "base_url": str,
                "active_sessions": int,
                "connectivity": {
                    "url": str,
                    "reachable": bool,
                    "response_time_ms": float | None,
                    "status_code": int | None,
                    "error": str | None,
                },
            }
        """
        url = build_url(self._config, HEALTHZ_PATH)
        connectivity: Dict[str, Any] = {
            "url": url,
            "reachable": False,
            "response_time_ms": None,
            "status_code": None,
            "error": None,
        }

        try:
            start_time = time.time()
            response = self.session.get(url, timeout=timeout)
            connectivity["reachable"] = True
            connectivity["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
            connectivity["status_code"] = response.status_code
        except requests.exceptions.Timeout:
            connectivity["error"] = "Connection timeout"
        except requests.exceptions.RequestException as e:
            connectivity["error"] = f"Connection error: {str(e)[:100]}"

        healthy = connectivity["reachable"] and ErrorHandler.is_success(connectivity["status_code"])

        return {
            "healthy": healthy,
            "base_url": self.base_url,
            "active_sessions": self._session_manager.get_active_sessions_count(),
            "connectivity": connectivity,
        }

    # ==================== Свойства ====================

    @property
    def session(self) -> requests.Session:
        """Thread-local session, created lazily."""
        return self._session_manager.get_session()

    @property
    def config(self) -> DaprHttpConfig:
        return self._config

    @property
    def base_url(self) -> str:
        """Base URL (read-only)."""
        return self._config.base_url
