# src/dapr_http/core/deferred.py
"""
Deferred result handles.

A handle wraps a call that has not happened yet. Creating the handle performs
no I/O; the call runs the first time the result is consumed, and every later
consumer sees the same outcome (value or exception).

Because the call runs at consumption time, two handles consumed out of the
order they were created observe the sidecar state as it is when each one is
consumed, not when it was issued.
"""

import asyncio
import threading
from types import TracebackType
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_PENDING = object()


class DeferredResponse(Generic[T]):
    """
    Lazy, single-shot result of a blocking call.

    Thread-safe: if several threads consume the handle at the same time,
    the call is executed once and all of them get its outcome.

    Example:
        >>> handle = dapr_http.invoke_api("GET", "v1.0/state/store/key")
        >>> # nothing has been sent yet
        >>> response = handle.result()  # request fires here
        >>> response is handle.result()  # cached, no second request
        True
    """

    def __init__(self, call: Callable[[], T]):
        self._call = call
        self._lock = threading.Lock()
        self._value: Any = _PENDING
        self._error: Optional[BaseException] = None
        self._traceback: Optional[TracebackType] = None

    def done(self) -> bool:
        """True once the call has executed (successfully or not)."""
        return self._value is not _PENDING or self._error is not None

    def result(self) -> T:
        """
        Execute the call if needed and return its result.

        Raises:
            Whatever the call raised (cached and re-raised on every consumption)
        """
        if not self.done():
            with self._lock:
                if not self.done():
                    try:
                        value = self._call()
                    except Exception as e:
                        self._error = e
                        self._traceback = e.__traceback__
                    else:
                        self._value = value
                    # release closure (session, body) once executed
                    self._call = None  # type: ignore[assignment]

        if self._error is not None:
            # restart from the original traceback on every consumption
            raise self._error.with_traceback(self._traceback)
        return self._value

    def map(self, fn: Callable[[T], R]) -> "DeferredResponse[R]":
        """Chain a transformation; nothing executes until the new handle is consumed."""
        return DeferredResponse(lambda: fn(self.result()))

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"<DeferredResponse {state}>"


class AsyncDeferredResponse(Generic[T]):
    """
    Lazy, single-shot result of a coroutine.

    The coroutine is created and scheduled on the first ``await``; later awaits
    share the same task.

    Example:
        >>> handle = async_dapr_http.invoke_api("GET", "v1.0/state/store/key")
        >>> response = await handle
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]):
        self._factory = factory
        self._task: Optional["asyncio.Future[T]"] = None

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    async def result(self) -> T:
        """Schedule the coroutine if needed and wait for its result."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._factory())
            self._factory = None  # type: ignore[assignment]
        return await asyncio.shield(self._task)

    def map(self, fn: Callable[[T], R]) -> "AsyncDeferredResponse[R]":
        """Chain a synchronous transformation of the result."""
        async def mapped() -> R:
            return fn(await self.result())
        return AsyncDeferredResponse(mapped)

    def __await__(self) -> Generator[Any, None, T]:
        return self.result().__await__()

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"<AsyncDeferredResponse {state}>"
