"""
Tests for AsyncDaprHttp using respx mocks.
"""

import json

import pytest

# Skip all tests if httpx not installed
httpx = pytest.importorskip("httpx")
respx = pytest.importorskip("respx")

from dapr_http.async_client import AsyncDaprHttp, convert_httpx_exception  # noqa: E402
from dapr_http.core.config import DaprHttpConfig  # noqa: E402
from dapr_http.core.exceptions import (  # noqa: E402
    ConnectionError,
    DaprClientException,
    DaprException,
    TimeoutError,
)

SIDECAR = "http://127.0.0.1:3500"


class TestAsyncDaprHttpInit:
    """Test AsyncDaprHttp initialization."""

    def test_defaults(self):
        dapr = AsyncDaprHttp()
        assert dapr.base_url == SIDECAR
        assert dapr._client is None

    def test_port(self):
        dapr = AsyncDaprHttp(3501)
        assert dapr.base_url == "http://127.0.0.1:3501"

    def test_timeout_from_config(self):
        dapr = AsyncDaprHttp(config=DaprHttpConfig.create(timeout=(2, 20)))
        assert dapr._timeout.connect == 2
        assert dapr._timeout.read == 20

    @pytest.mark.asyncio
    async def test_context_manager_creates_and_closes_client(self):
        async with AsyncDaprHttp(3500) as dapr:
            assert isinstance(dapr._client, httpx.AsyncClient)
        assert dapr._client is None


class TestAsyncInvokeApi:
    """invoke_api against a mocked sidecar."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_get(self, expected_result):
        route = respx.get(f"{SIDECAR}/v1.0/get").mock(
            return_value=httpx.Response(200, content=json.dumps(expected_result).encode())
        )

        async with AsyncDaprHttp(3500) as dapr:
            response = await dapr.invoke_api("GET", "v1.0/get")

        assert json.loads(response.body) == expected_result
        assert route.calls.last.request.content == b""

    @respx.mock
    @pytest.mark.asyncio
    async def test_post_without_content_sends_empty_json_string(self):
        route = respx.post(f"{SIDECAR}/v1.0/state").mock(return_value=httpx.Response(204))

        async with AsyncDaprHttp(3500) as dapr:
            response = await dapr.invoke_api("POST", "v1.0/state")

        request = route.calls.last.request
        assert response.status_code == 204
        assert request.content == b'""'
        assert request.headers["Content-Type"] == "application/json; charset=utf-8"

    @respx.mock
    @pytest.mark.asyncio
    async def test_query_and_headers(self):
        route = respx.get(f"{SIDECAR}/v1.0/state/order", params={"orderId": "41"}).mock(
            return_value=httpx.Response(200, text="ok", headers={"Header": "Value"})
        )

        async with AsyncDaprHttp(3500, api_token="tok") as dapr:
            response = await dapr.invoke_api(
                "GET",
                "v1.0/state/order",
                params={"orderId": "41"},
                headers={"header1": "value1"},
            )

        request = route.calls.last.request
        assert str(request.url) == f"{SIDECAR}/v1.0/state/order?orderId=41"
        assert request.headers["header1"] == "value1"
        assert request.headers["dapr-api-token"] == "tok"
        assert request.headers["X-DaprRequestId"]
        assert {k.lower(): v for k, v in response.headers.items()}["header"] == "Value"

    @respx.mock
    @pytest.mark.asyncio
    async def test_deferred_until_await(self):
        route = respx.get(f"{SIDECAR}/v1.0/get").mock(return_value=httpx.Response(200, text="ok"))

        async with AsyncDaprHttp(3500) as dapr:
            handle = dapr.invoke_api("GET", "v1.0/get")
            assert route.call_count == 0

            first = await handle
            second = await handle

        assert first is second
        assert route.call_count == 1

    @respx.mock
    @pytest.mark.asyncio
    async def test_map(self):
        respx.get(f"{SIDECAR}/v1.0/get").mock(return_value=httpx.Response(200, text="ok"))

        async with AsyncDaprHttp(3500) as dapr:
            text = await dapr.invoke_api("GET", "v1.0/get").map(lambda response: response.text)

        assert text == "ok"

    @respx.mock
    @pytest.mark.asyncio
    async def test_client_created_lazily(self):
        respx.get(f"{SIDECAR}/v1.0/get").mock(return_value=httpx.Response(200))

        dapr = AsyncDaprHttp(3500)
        await dapr.invoke_api("GET", "v1.0/get")

        assert dapr._client is not None
        await dapr.close()

    @pytest.mark.asyncio
    async def test_aclose(self):
        dapr = AsyncDaprHttp(3500)
        async with dapr:
            pass
        await dapr.aclose()

        assert dapr._client is None


class TestAsyncErrors:
    """Error mapping in the async client."""

    @respx.mock
    @pytest.mark.asyncio
    async def test_empty_error_body(self):
        respx.post(f"{SIDECAR}/v1.0/state").mock(return_value=httpx.Response(500))

        async with AsyncDaprHttp(3500) as dapr:
            with pytest.raises(DaprException) as exc_info:
                await dapr.invoke_api("POST", "v1.0/state")

        assert exc_info.value.error_code == "UNKNOWN"
        assert exc_info.value.message == "HTTP status code: 500"

    @respx.mock
    @pytest.mark.asyncio
    async def test_structured_error_body(self):
        respx.get(f"{SIDECAR}/v1.0/state/store/deletedKey").mock(
            return_value=httpx.Response(404, json={"errorCode": "404", "message": "State Not Fuund"})
        )

        async with AsyncDaprHttp(3500) as dapr:
            with pytest.raises(DaprException) as exc_info:
                await dapr.invoke_api("GET", "v1.0/state/store/deletedKey")

        assert exc_info.value.error_code == "404"
        assert exc_info.value.status_code == 404

    @respx.mock
    @pytest.mark.asyncio
    async def test_connection_error(self):
        respx.get(f"{SIDECAR}/v1.0/get").mock(side_effect=httpx.ConnectError("refused"))

        async with AsyncDaprHttp(3500) as dapr:
            with pytest.raises(ConnectionError):
                await dapr.invoke_api("GET", "v1.0/get")

    @respx.mock
    @pytest.mark.asyncio
    async def test_timeout(self):
        respx.get(f"{SIDECAR}/v1.0/get").mock(side_effect=httpx.ReadTimeout("slow"))

        async with AsyncDaprHttp(3500) as dapr:
            with pytest.raises(TimeoutError):
                await dapr.invoke_api("GET", "v1.0/get")


class TestConvertHttpxException:

    def test_timeout(self):
        error = convert_httpx_exception(httpx.ConnectTimeout("t"), "http://x", 5)
        assert isinstance(error, TimeoutError)
        assert error.timeout == 5

    def test_connect(self):
        assert isinstance(convert_httpx_exception(httpx.ConnectError("c"), "http://x"), ConnectionError)

    def test_other(self):
        error = convert_httpx_exception(httpx.TooManyRedirects("r"), "http://x")
        assert type(error) is DaprClientException
