"""Pytest fixtures shared across all etherscan_sdk tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers import API_KEY, FAST

from etherscan_sdk.client import EtherscanClient
from etherscan_sdk.core.ratelimit import RateLimiterRegistry
from etherscan_sdk.core.transport import Transport

_ENV_VARS = (
    "ETHERSCAN_API_KEY",
    "ETHERSCAN_CHAIN_ID",
    "ETHERSCAN_RATE_LIMIT",
    "ETHERSCAN_TIMEOUT",
    "ETHERSCAN_MAX_RETRIES",
    "ETHERSCAN_RETRY_DELAY",
    "ETHERSCAN_RESERVOIR",
    "ETHERSCAN_CACHE_TTL",
    "ETHERSCAN_CACHE_MAX_SIZE",
    "ETHERSCAN_CACHE_ENABLED",
    "ETHERSCAN_OUTPUT_FORMAT",
    "ETHERSCAN_ENV",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip ETHERSCAN_* variables and point config at a file that does not exist."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("ETHERSCAN_CONFIG_PATH", str(tmp_path / "missing.toml"))


@pytest.fixture
def registry() -> RateLimiterRegistry:
    """Isolated limiter registry so no limiter outlives a test."""
    return RateLimiterRegistry()


@pytest.fixture
def transport(registry: RateLimiterRegistry) -> Transport:
    return Transport(1, API_KEY, registry=registry, **FAST)


@pytest.fixture
def client(registry: RateLimiterRegistry) -> EtherscanClient:
    return EtherscanClient(api_key=API_KEY, chain=1, registry=registry, **FAST)
