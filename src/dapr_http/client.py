# src/dapr_http/client.py
"""
DaprClient - state management and service invocation over DaprHttp.

Every operation returns a DeferredResponse; nothing is sent to the sidecar
until ``result()`` is called on it.
"""

from typing import Any, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

from .constants import INVOKE_PATH, STATE_PATH
from .core.dapr_http import DaprHttp, Response
from .core.deferred import DeferredResponse
from .serializer import DefaultObjectSerializer, Serializable

T = TypeVar("T")


def _segment(value: str) -> str:
    """Escape a single path segment (store name, key, app id)."""
    if not value:
        raise ValueError("path segment must not be empty")
    return quote(value, safe="")


class DaprClient:
    """
    High-level client for a local Dapr sidecar.

    Example:
        >>> with DaprClient(port=3500) as client:
        ...     client.save_state("statestore", "order-41", {"qty": 2}).result()
        ...     order = client.get_state("statestore", "order-41", dict).result()
        ...     client.delete_state("statestore", "order-41").result()
    """

    def __init__(
        self,
        http: Optional[DaprHttp] = None,
        serializer: Optional[DefaultObjectSerializer] = None,
        **config_kwargs: Any
    ):
        """
        Args:
            http: DaprHttp to use (created from config_kwargs if None)
            serializer: State/payload serializer
            **config_kwargs: DaprHttp arguments (port, config, api_token, ...)
        """
        self._owns_http = http is None
        self._http = http if http is not None else DaprHttp(**config_kwargs)
        self._serializer = serializer or DefaultObjectSerializer()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying DaprHttp if this client created it."""
        if self._owns_http:
            self._http.close()

    # ==================== State ====================

    def get_state(
        self,
        store_name: str,
        key: str,
        type_: Optional[Type[T]] = None,
    ) -> DeferredResponse[Optional[T]]:
        """
        GET v1.0/state/<store>/<key>.

        A missing key (empty body) resolves to None.
        """
        path = f"{STATE_PATH}/{_segment(store_name)}/{_segment(key)}"
        return self._http.invoke_api("GET", path).map(
            lambda response: self._serializer.deserialize(response.body, type_)
        )

    def save_state(self, store_name: str, key: str, value: Serializable) -> DeferredResponse[None]:
        """POST v1.0/state/<store> with a single key/value pair."""
        return self.save_bulk_state(store_name, {key: value})

    def save_bulk_state(
        self,
        store_name: str,
        states: Mapping[str, Serializable],
    ) -> DeferredResponse[None]:
        """POST v1.0/state/<store> with [{"key": ..., "value": ...}, ...]."""
        if not states:
            raise ValueError("states must not be empty")
        payload = [{"key": key, "value": value} for key, value in states.items()]
        content = self._serializer.serialize(payload)
        path = f"{STATE_PATH}/{_segment(store_name)}"
        return self._http.invoke_api("POST", path, content=content).map(_discard)

    def delete_state(self, store_name: str, key: str) -> DeferredResponse[None]:
        """DELETE v1.0/state/<store>/<key>."""
        path = f"{STATE_PATH}/{_segment(store_name)}/{_segment(key)}"
        return self._http.invoke_api("DELETE", path).map(_discard)

    # ==================== Service invocation ====================

    def invoke_method(
        self,
        app_id: str,
        method_name: str,
        data: Serializable = None,
        http_method: str = "POST",
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        type_: Optional[Type[T]] = None,
    ) -> DeferredResponse[Any]:
        """
        <http_method> v1.0/invoke/<app_id>/method/<method_name>.

        Args:
            app_id: Target application id
            method_name: Method (may contain '/' for nested routes)
            data: Payload, serialized with the client's serializer
            http_method: HTTP verb used for the invocation
            params: Query parameters forwarded to the target
            headers: Extra headers
            type_: Expected type of the response (bytes for raw body)

        Returns:
            DeferredResponse resolving to the deserialized response body
        """
        path = f"{INVOKE_PATH}/{_segment(app_id)}/method/{method_name.lstrip('/')}"
        content = self._serializer.serialize(data)
        return self._http.invoke_api(
            http_method, path, params=params, content=content, headers=headers
        ).map(lambda response: self._serializer.deserialize(response.body, type_))

    @property
    def http(self) -> DaprHttp:
        return self._http


def _discard(response: Response) -> None:
    return None
