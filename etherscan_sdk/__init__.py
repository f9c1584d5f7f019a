"""
etherscan_sdk: typed async client for the Etherscan V2 multi-chain API.

Usage:
    from etherscan_sdk import EtherscanClient, EvmChainId

    async with EtherscanClient(api_key="...", chain=EvmChainId.BASE) as client:
        txs = await client.account.get_tx_list("0x...", page=1, offset=100)
"""

from __future__ import annotations

__version__ = "0.1.0"

from etherscan_sdk.chains import EvmChainId
from etherscan_sdk.client import EtherscanClient
from etherscan_sdk.config import ClientConfig, load_config
from etherscan_sdk.core.ratelimit import RateLimiterRegistry, default_registry
from etherscan_sdk.exceptions import (
    APIError,
    ClientDisposedError,
    EtherscanError,
    NetworkError,
    RateLimitError,
    SchemaValidationError,
)

__all__ = [
    "APIError",
    "ClientConfig",
    "ClientDisposedError",
    "EtherscanClient",
    "EtherscanError",
    "EvmChainId",
    "NetworkError",
    "RateLimitError",
    "RateLimiterRegistry",
    "SchemaValidationError",
    "__version__",
    "default_registry",
    "load_config",
]
