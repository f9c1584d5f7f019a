"""Tests for etherscan_sdk/client.py — construction, namespaces, disposal."""

from __future__ import annotations

import asyncio
import inspect
import time

import httpx
import pytest
import respx
from helpers import ADDR, ADDR2, API_KEY, FAST, ok

from etherscan_sdk import EtherscanClient, EvmChainId
from etherscan_sdk.config import ClientConfig
from etherscan_sdk.core.ratelimit import RateLimiterRegistry
from etherscan_sdk.core.transport import V2_ENDPOINT
from etherscan_sdk.exceptions import (
    ClientDisposedError,
    ConfigInvalidError,
    ConfigMissingError,
)
from etherscan_sdk.resources import (
    L2,
    Account,
    BaseModule,
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

NAMESPACES = {
    "account": Account,
    "block": Block,
    "contract": Contract,
    "gas_tracker": GasTracker,
    "l2": L2,
    "logs": Logs,
    "nametags": Nametags,
    "proxy": Proxy,
    "stats": Stats,
    "tokens": Tokens,
    "transaction": Transaction,
    "usage": Usage,
}


# ── Construction ──────────────────────────────────────────────────────────────


def test_missing_api_key_raises(registry: RateLimiterRegistry) -> None:
    with pytest.raises(ConfigMissingError, match="API key is required"):
        EtherscanClient(registry=registry)
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_api_key_from_env(
    registry: RateLimiterRegistry, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ETHERSCAN_API_KEY", "env-key")
    client = EtherscanClient(registry=registry, **FAST)
    assert "env-key" in registry
    await client.aclose()


@pytest.mark.asyncio
async def test_key_and_chain_from_config(registry: RateLimiterRegistry) -> None:
    config = ClientConfig()
    config.api.api_key = "config-key"
    config.api.chain_id = EvmChainId.POLYGON
    client = EtherscanClient(config=config, registry=registry)
    assert client.chain_id == 137
    assert "config-key" in registry
    await client.aclose()


@pytest.mark.asyncio
async def test_explicit_chain_overrides_config(registry: RateLimiterRegistry) -> None:
    config = ClientConfig()
    config.api.chain_id = 137
    client = EtherscanClient(api_key=API_KEY, chain=EvmChainId.BASE, config=config, registry=registry)
    assert client.chain_id == 8453
    await client.aclose()


def test_unknown_transport_option_rejected(registry: RateLimiterRegistry) -> None:
    with pytest.raises(ConfigInvalidError, match="retries"):
        EtherscanClient(api_key=API_KEY, registry=registry, retries=2)
    assert len(registry) == 0


@pytest.mark.parametrize(
    "override,match",
    [
        ({"requests_per_second": 0}, "requests_per_second"),
        ({"max_retries": -1}, "max_retries"),
        ({"timeout": 0}, "timeout"),
        ({"max_response_size": 0}, "max_response_size"),
    ],
)
def test_out_of_range_transport_option_rejected(
    registry: RateLimiterRegistry, override: dict, match: str
) -> None:
    with pytest.raises(ConfigInvalidError, match=match):
        EtherscanClient(api_key=API_KEY, registry=registry, **override)
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_namespaces_present(client: EtherscanClient) -> None:
    for name in (
        "account",
        "block",
        "contract",
        "gas_tracker",
        "l2",
        "logs",
        "nametags",
        "proxy",
        "stats",
        "tokens",
        "transaction",
        "usage",
    ):
        assert getattr(client, name).chain_id == 1
    await client.aclose()


def test_repr_hides_key(client: EtherscanClient) -> None:
    assert API_KEY not in repr(client)
    assert "chain_id=1" in repr(client)


# ── Shared limiter ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_clients_with_same_key_share_limiter(registry: RateLimiterRegistry) -> None:
    a = EtherscanClient(api_key=API_KEY, registry=registry, **FAST)
    b = EtherscanClient(api_key=API_KEY, chain=8453, registry=registry, **FAST)
    assert registry.ref_count(API_KEY) == 2
    limiter = registry.get(API_KEY)

    await a.aclose()
    assert registry.ref_count(API_KEY) == 1
    assert not limiter.stopped

    await b.aclose()
    assert registry.ref_count(API_KEY) == 0
    assert limiter.stopped


@pytest.mark.asyncio
@respx.mock
async def test_clients_with_same_key_are_paced_together(registry: RateLimiterRegistry) -> None:
    """At 10 req/s, four requests split over two clients span three 100ms gaps."""
    respx.get(V2_ENDPOINT).mock(return_value=httpx.Response(200, json=ok("1")))
    a = EtherscanClient(api_key=API_KEY, registry=registry, requests_per_second=10)
    b = EtherscanClient(api_key=API_KEY, chain=8453, registry=registry, requests_per_second=10)

    started = time.monotonic()
    await asyncio.gather(
        a.account.get_balance(ADDR),
        b.account.get_balance(ADDR),
        a.account.get_balance(ADDR2),
        b.account.get_balance(ADDR2),
    )
    assert time.monotonic() - started >= 0.28

    await a.aclose()
    await b.aclose()


# ── Disposal ──────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_disposed_client_fails_fast_at_call_time(client: EtherscanClient) -> None:
    await client.aclose()
    assert client.disposed
    # raised before a coroutine is even created
    with pytest.raises(ClientDisposedError):
        client.account.get_balance(ADDR)
    with pytest.raises(ClientDisposedError):
        client.proxy.get_block_number()
    with pytest.raises(ClientDisposedError):
        client.usage.get_chain_list()


def _namespace_methods() -> list[tuple[str, str]]:
    pairs = []
    for attr, cls in NAMESPACES.items():
        for name, _ in inspect.getmembers(cls, inspect.isfunction):
            if not name.startswith("_") and not hasattr(BaseModule, name):
                pairs.append((attr, name))
    return pairs


@pytest.mark.asyncio
@pytest.mark.parametrize("namespace,method", _namespace_methods())
async def test_every_namespace_method_fails_fast_when_disposed(
    client: EtherscanClient, namespace: str, method: str
) -> None:
    await client.aclose()
    bound = getattr(getattr(client, namespace), method)
    assert hasattr(bound, "__wrapped__"), f"{namespace}.{method} is not @checked"
    # the disposal check runs before arguments are bound or a coroutine exists
    with pytest.raises(ClientDisposedError):
        bound()


@pytest.mark.asyncio
async def test_disposed_client_rejects_client_methods(client: EtherscanClient) -> None:
    await client.dispose()
    for call in (
        client.cache_stats,
        client.clear_cache,
        client.cleanup_cache,
        client.update_cache_config,
        client.clear_interceptors,
        lambda: client.add_request_interceptor(lambda p: p),
        lambda: client.add_response_interceptor(lambda v: v),
    ):
        with pytest.raises(ClientDisposedError):
            call()


@pytest.mark.asyncio
async def test_aclose_is_idempotent(client: EtherscanClient, registry: RateLimiterRegistry) -> None:
    await client.aclose()
    await client.aclose()
    await client.dispose()
    assert registry.ref_count(API_KEY) == 0


@pytest.mark.asyncio
async def test_context_manager_closes(registry: RateLimiterRegistry) -> None:
    async with EtherscanClient(api_key=API_KEY, registry=registry, **FAST) as client:
        assert not client.disposed
    assert client.disposed
    with pytest.raises(ClientDisposedError):
        async with client:
            pass


# ── Cache / interceptors ──────────────────────────────────────────────────────


@pytest.mark.asyncio
@respx.mock
async def test_cache_controls(client: EtherscanClient) -> None:
    route = respx.get(V2_ENDPOINT).mock(return_value=httpx.Response(200, json=ok("5")))
    await client.account.get_balance(ADDR)
    await client.account.get_balance(ADDR)
    assert route.call_count == 1
    assert client.cache_stats()["size"] == 1

    client.clear_cache()
    await client.account.get_balance(ADDR)
    assert route.call_count == 2

    client.update_cache_config(enabled=False)
    await client.account.get_balance(ADDR)
    assert route.call_count == 3
    assert client.cleanup_cache() == 0
    await client.aclose()


@pytest.mark.asyncio
@respx.mock
async def test_client_interceptors(client: EtherscanClient) -> None:
    route = respx.get(V2_ENDPOINT).mock(return_value=httpx.Response(200, json=ok("5")))
    client.add_request_interceptor(lambda p: {**p, "tag": "earliest"})
    client.add_response_interceptor(lambda v: v * 2)
    assert await client.account.get_balance(ADDR) == 10
    assert route.calls.last.request.url.params["tag"] == "earliest"

    client.clear_interceptors()
    assert await client.account.get_balance(ADDR) == 5
    await client.aclose()
