"""
Request core for etherscan_sdk.

Usage:
    from etherscan_sdk.core import Transport, RateLimiterRegistry
    registry = RateLimiterRegistry()
    transport = Transport(chain_id=1, api_key=key, registry=registry)
    balance = await transport.get({"module": "account", "action": "balance", ...}, BigInt)
"""

from __future__ import annotations

from etherscan_sdk.core.cache import LRUCache
from etherscan_sdk.core.dedup import RequestDeduplicator
from etherscan_sdk.core.interceptors import InterceptorChain
from etherscan_sdk.core.ratelimit import RateLimiter, RateLimiterRegistry, default_registry
from etherscan_sdk.core.transport import CHAINLIST_URL, V2_ENDPOINT, Transport

__all__ = [
    "CHAINLIST_URL",
    "InterceptorChain",
    "LRUCache",
    "RateLimiter",
    "RateLimiterRegistry",
    "RequestDeduplicator",
    "Transport",
    "V2_ENDPOINT",
    "default_registry",
]
