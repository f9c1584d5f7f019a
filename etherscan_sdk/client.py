"""
EtherscanClient: the public entry point.

Usage:
    async with EtherscanClient(api_key="...", chain=EvmChainId.MAINNET) as client:
        wei = await client.account.get_balance("0xde0B295669a9FD93d5F28D9Ec85E40f4cb697BAe")

Every namespace method and every client method raises ClientDisposedError
once ``aclose()`` has run.
"""

from __future__ import annotations

import dataclasses
import os
from typing import Any

import httpx

from etherscan_sdk.chains import validate_chain_id
from etherscan_sdk.config import ClientConfig, validate_config
from etherscan_sdk.core.cache import LRUCache
from etherscan_sdk.core.interceptors import RequestInterceptor, ResponseInterceptor
from etherscan_sdk.core.ratelimit import RateLimiterRegistry
from etherscan_sdk.core.transport import Transport
from etherscan_sdk.exceptions import ClientDisposedError, ConfigInvalidError, ConfigMissingError
from etherscan_sdk.resources import (
    L2,
    Account,
    Block,
    Contract,
    GasTracker,
    Logs,
    Nametags,
    Proxy,
    Stats,
    Tokens,
    Transaction,
    Usage,
)

_TRANSPORT_FIELDS = frozenset(f.name for f in dataclasses.fields(ClientConfig().transport))


class EtherscanClient:
    """
    Typed async client for the Etherscan V2 multi-chain API.

    Args:
        api_key: Etherscan API key. Falls back to ``config.api.api_key``,
                 then the ETHERSCAN_API_KEY environment variable.
        chain: Chain id to route requests to. Defaults to ``config.api.chain_id``.
        config: ClientConfig; built-in defaults when omitted.
        registry: Rate limiter registry; the process-wide default when omitted.
        http_client: Pre-built httpx.AsyncClient (not closed by ``aclose()``).
        **transport_overrides: Any TransportConfig field, e.g. ``max_retries=0``.

    Raises:
        ConfigMissingError: No API key could be resolved.
        ConfigInvalidError: Unknown or out-of-range transport override.
    """

    def __init__(
        self,
        api_key: str | None = None,
        chain: int | None = None,
        config: ClientConfig | None = None,
        registry: RateLimiterRegistry | None = None,
        http_client: httpx.AsyncClient | None = None,
        **transport_overrides: Any,
    ) -> None:
        config = config or ClientConfig()
        key = api_key or config.api.api_key or os.environ.get("ETHERSCAN_API_KEY", "")
        if not key:
            raise ConfigMissingError(
                "API key is required. Pass api_key=..., set api.api_key in the config "
                "file, or export ETHERSCAN_API_KEY."
            )

        unknown = set(transport_overrides) - _TRANSPORT_FIELDS
        if unknown:
            raise ConfigInvalidError(f"Unknown transport option(s): {', '.join(sorted(unknown))}")

        chain_id = int(chain if chain is not None else config.api.chain_id)
        validate_chain_id(chain_id)

        config = dataclasses.replace(
            config, transport=dataclasses.replace(config.transport, **transport_overrides)
        )
        validate_config(config)

        transport_options = dataclasses.asdict(config.transport)
        cache = LRUCache(
            max_size=config.cache.max_size,
            default_ttl=config.cache.default_ttl,
            enabled=config.cache.enabled,
        )
        self._transport = Transport(
            chain_id,
            key,
            registry=registry,
            cache=cache,
            http_client=http_client,
            **transport_options,
        )
        self._disposed = False

        self.account = Account(self._transport, self)
        self.block = Block(self._transport, self)
        self.contract = Contract(self._transport, self)
        self.gas_tracker = GasTracker(self._transport, self)
        self.l2 = L2(self._transport, self)
        self.logs = Logs(self._transport, self)
        self.nametags = Nametags(self._transport, self)
        self.proxy = Proxy(self._transport, self)
        self.stats = Stats(self._transport, self)
        self.tokens = Tokens(self._transport, self)
        self.transaction = Transaction(self._transport, self)
        self.usage = Usage(self._transport, self)

    def __repr__(self) -> str:
        return f"EtherscanClient(chain_id={self.chain_id}, disposed={self._disposed})"

    async def __aenter__(self) -> EtherscanClient:
        self.check_disposed()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def chain_id(self) -> int:
        return self._transport.chain_id

    @property
    def disposed(self) -> bool:
        return self._disposed

    def check_disposed(self) -> None:
        if self._disposed:
            raise ClientDisposedError()

    # ── Cache ────────────────────────────────────────────────────────────────

    def cache_stats(self) -> dict[str, Any]:
        self.check_disposed()
        return self._transport.cache.stats()

    def clear_cache(self) -> None:
        self.check_disposed()
        self._transport.cache.clear()

    def cleanup_cache(self) -> int:
        """Drop expired entries now rather than on next read."""
        self.check_disposed()
        return self._transport.cache.cleanup()

    def update_cache_config(
        self,
        max_size: int | None = None,
        default_ttl: float | None = None,
        enabled: bool | None = None,
    ) -> None:
        self.check_disposed()
        self._transport.cache.update_config(
            max_size=max_size, default_ttl=default_ttl, enabled=enabled
        )

    # ── Interceptors ─────────────────────────────────────────────────────────

    def add_request_interceptor(self, fn: RequestInterceptor) -> None:
        """Transform query params before the request signature is computed."""
        self.check_disposed()
        self._transport.interceptors.add_request_interceptor(fn)

    def add_response_interceptor(self, fn: ResponseInterceptor) -> None:
        """Transform every returned value, cache hits included. Must be idempotent."""
        self.check_disposed()
        self._transport.interceptors.add_response_interceptor(fn)

    def clear_interceptors(self) -> None:
        self.check_disposed()
        self._transport.interceptors.clear()

    # ── Lifecycle ────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Release the rate limiter, drop cached state and close owned connections."""
        if self._disposed:
            return
        self._disposed = True
        await self._transport.aclose()

    async def dispose(self) -> None:
        await self.aclose()
