"""Shared plumbing for the API namespaces."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any, Callable, Protocol, TypeVar

from etherscan_sdk.exceptions import ClientDisposedError

if TYPE_CHECKING:
    from etherscan_sdk.core.transport import Transport

F = TypeVar("F", bound=Callable[..., Any])


class DisposalAware(Protocol):
    def check_disposed(self) -> None: ...


def checked(method: F) -> F:
    """
    Fail fast on a disposed client.

    The wrapper is synchronous: it checks disposal, then returns the
    coroutine, so ``client.account.get_balance(...)`` raises
    ClientDisposedError at call time rather than on first await.
    """

    @functools.wraps(method)
    def wrapper(self: BaseModule, *args: Any, **kwargs: Any) -> Any:
        self.check_disposed()
        return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class BaseModule:
    """
    One remote API module (``module=...`` query parameter).

    Subclasses set ``module`` and implement one ``@checked`` coroutine per
    remote action. Local validation always runs before ``_get``.
    """

    module: str = ""

    def __init__(self, transport: Transport, client: DisposalAware | None = None) -> None:
        self._transport = transport
        self._client = client

    @property
    def chain_id(self) -> int:
        return self._transport.chain_id

    def check_disposed(self) -> None:
        if self._client is not None:
            self._client.check_disposed()
        elif self._transport.closed:
            raise ClientDisposedError()

    async def _get(self, action: str, schema: Any, *, module: str | None = None, **params: Any) -> Any:
        query = {"module": module or self.module, "action": action, **params}
        return await self._transport.get(query, schema)
