# src/dapr_http/async_client.py
"""
Асинхронный клиент Dapr sidecar на базе httpx.

Тот же контракт, что и у DaprHttp: invoke_api возвращает отложенный объект,
запрос уходит при первом await.
"""

import time
import uuid
from typing import Any, Dict, Mapping, Optional

try:
    import httpx
except ImportError:
    raise ImportError(
        "httpx is required for AsyncDaprHttp. "
        "Install with: pip install dapr-http-client[async]"
    )

from .core.config import DaprHttpConfig
from .core.dapr_http import Content, Response, build_body, build_headers, build_url, create_logger
from .core.deferred import AsyncDeferredResponse
from .core.error_handler import ErrorHandler
from .core.exceptions import ConnectionError, DaprClientException, TimeoutError
from .core.logging import clear_correlation_id, set_correlation_id
from .utils.sanitizer import mask_url


def convert_httpx_exception(
    error: Exception,
    url: str,
    timeout: Optional[float] = None
) -> DaprClientException:
    """Преобразует исключение httpx в исключение клиента."""
    if isinstance(error, httpx.TimeoutException):
        return TimeoutError(str(error), url, timeout)
    elif isinstance(error, (httpx.ConnectError, httpx.NetworkError)):
        return ConnectionError(str(error), url)
    return DaprClientException(f"Request failed: {error}")


class AsyncDaprHttp:
    """
    Асинхронный клиент REST API Dapr sidecar.

    Example:
        >>> async with AsyncDaprHttp(3500) as dapr:
        ...     handle = dapr.invoke_api("GET", "v1.0/state/store/key")
        ...     response = await handle  # запрос отправляется здесь
    """

    def __init__(
        self,
        port: Optional[int] = None,
        *,
        config: Optional[DaprHttpConfig] = None,
        **kwargs: Any,
    ):
        if config is None:
            config = DaprHttpConfig.create(port=port, **kwargs)
        elif port is not None:
            config = config.with_port(port)

        self._config = config
        self._logger = create_logger(config)
        self._timeout = httpx.Timeout(
            connect=config.timeout.connect,
            read=config.timeout.read,
            write=config.timeout.read,
            pool=config.timeout.connect,
        )
        # Клиент создаётся лениво или при входе в context manager
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=dict(self._config.headers),
                limits=httpx.Limits(
                    max_connections=self._config.pool.pool_maxsize,
                    max_keepalive_connections=self._config.pool.pool_connections,
                ),
            )
        return self._client

    async def __aenter__(self) -> "AsyncDaprHttp":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._logger is not None:
            self._logger.close()

    async def aclose(self) -> None:
        """Alias для close() в стиле httpx."""
        await self.close()

    def invoke_api(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        content: Content = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> AsyncDeferredResponse[Response]:
        """
        Подготовить вызов API sidecar; запрос выполняется при первом await.

        Raises (при await):
            DaprException: не-2xx ответ
            TimeoutError, ConnectionError: ошибка транспорта
        """
        method = method.upper()
        query = dict(params) if params else {}
        caller_headers = dict(headers) if headers else {}

        return AsyncDeferredResponse(
            lambda: self._do_invoke_api(method, path, query, content, caller_headers)
        )

    async def _do_invoke_api(
        self,
        method: str,
        path: str,
        params: Dict[str, str],
        content: Content,
        headers: Dict[str, str],
    ) -> Response:
        request_id = str(uuid.uuid4())
        url = build_url(self._config, path)
        request_headers = build_headers(self._config, method, request_id, headers)
        body = build_body(method, content, request_headers)

        if self._logger:
            set_correlation_id(request_id)
            self._logger.debug("Request initialized", method=method, url=url, params=params)

        client = await self._get_client()
        start_time = time.time()
        try:
            try:
                response = await client.request(
                    method,
                    url,
                    params=params or None,
                    content=body,
                    headers=request_headers,
                )
            except httpx.HTTPError as e:
                if self._logger:
                    self._logger.error(
                        "Request failed",
                        method=method,
                        url=url,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                raise convert_httpx_exception(e, url, self._config.timeout.read) from e

            status_code = response.status_code
            response_body = response.content or b""
            duration_ms = round((time.time() - start_time) * 1000, 2)
            response_url = mask_url(str(response.url))

            if not ErrorHandler.is_success(status_code):
                error = ErrorHandler.build_dapr_exception(status_code, response_body)
                if self._logger:
                    self._logger.error(
                        "Request failed",
                        method=method,
                        url=response_url,
                        status_code=status_code,
                        error_code=error.error_code,
                        error_message=error.message,
                        duration_ms=duration_ms,
                    )
                raise error

            if self._logger:
                self._logger.info(
                    "Request completed",
                    method=method,
                    url=response_url,
                    status_code=status_code,
                    duration_ms=duration_ms,
                    response_size=len(response_body),
                )

            return Response(body=response_body, headers=dict(response.headers), status_code=status_code)
        finally:
            if self._logger:
                clear_correlation_id()

    @property
    def config(self) -> DaprHttpConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url
