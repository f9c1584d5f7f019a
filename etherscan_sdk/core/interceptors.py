"""Ordered request/response hooks applied by the transport."""

from __future__ import annotations

from typing import Any, Callable

Params = dict[str, Any]
RequestInterceptor = Callable[[Params], Params]
ResponseInterceptor = Callable[[Any], Any]


class InterceptorChain:
    """
    Request interceptors transform the parameter dict before the request
    signature is computed, so they change cache and dedup identity.

    Response interceptors run on every returned value, cache hits included,
    and therefore must be idempotent.
    """

    def __init__(self) -> None:
        self._request: list[RequestInterceptor] = []
        self._response: list[ResponseInterceptor] = []

    def add_request_interceptor(self, fn: RequestInterceptor) -> None:
        self._request.append(fn)

    def add_response_interceptor(self, fn: ResponseInterceptor) -> None:
        self._response.append(fn)

    def apply_request(self, params: Params) -> Params:
        result = dict(params)
        for fn in self._request:
            result = fn(result)
        return result

    def apply_response(self, value: Any) -> Any:
        for fn in self._response:
            value = fn(value)
        return value

    def clear(self) -> None:
        self._request.clear()
        self._response.clear()

    def __len__(self) -> int:
        return len(self._request) + len(self._response)
