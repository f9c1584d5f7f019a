"""Known chain ids and per-chain capability flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from etherscan_sdk.config import is_production
from etherscan_sdk.exceptions import UnsupportedChainError

logger = logging.getLogger(__name__)


class EvmChainId(IntEnum):
    MAINNET = 1
    SEPOLIA = 11155111
    HOLESKY = 17000
    BSC = 56
    BSC_TESTNET = 97
    POLYGON = 137
    POLYGON_AMOY = 80002
    BASE = 8453
    BASE_SEPOLIA = 84532
    ARBITRUM = 42161
    OPTIMISM = 10


SUPPORTED_CHAINS = frozenset(int(c) for c in EvmChainId)


@dataclass(frozen=True)
class ChainCapabilities:
    has_beacon_chain: bool = False
    has_token_approvals: bool = True


DEFAULT_CAPABILITIES = ChainCapabilities()

# Most L2s and sidechains have no beacon chain endpoints
CHAIN_CAPABILITIES: dict[int, ChainCapabilities] = {
    EvmChainId.MAINNET: ChainCapabilities(has_beacon_chain=True),
    EvmChainId.SEPOLIA: ChainCapabilities(has_beacon_chain=True),
    EvmChainId.HOLESKY: ChainCapabilities(has_beacon_chain=True),
}


def validate_chain_id(chain_id: int) -> None:
    """Warn (never fail) when chain_id is not in the known list."""
    if chain_id not in SUPPORTED_CHAINS and not is_production():
        logger.warning(
            "Chain ID %s is not in the known supported list. "
            "Calls may fail if Etherscan V2 does not support it.",
            chain_id,
        )


def get_capabilities(chain_id: int) -> ChainCapabilities:
    return CHAIN_CAPABILITIES.get(chain_id, DEFAULT_CAPABILITIES)


def require_capability(chain_id: int, capability: str, method: str) -> None:
    """
    Raise UnsupportedChainError if chain_id lacks `capability`.

    Called by namespace methods before any network I/O.
    """
    if not getattr(get_capabilities(chain_id), capability):
        raise UnsupportedChainError(chain_id, capability, method)
