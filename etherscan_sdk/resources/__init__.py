"""
API namespaces exposed on EtherscanClient.

Each class maps one-to-one onto remote actions; methods validate their
arguments locally, then delegate to the shared Transport.
"""

from __future__ import annotations

from etherscan_sdk.resources.account import Account
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.resources.block import Block
from etherscan_sdk.resources.contract import Contract
from etherscan_sdk.resources.gas_tracker import GasTracker
from etherscan_sdk.resources.l2 import L2
from etherscan_sdk.resources.logs import Logs
from etherscan_sdk.resources.nametags import Nametags
from etherscan_sdk.resources.proxy import Proxy
from etherscan_sdk.resources.stats import Stats
from etherscan_sdk.resources.tokens import Tokens
from etherscan_sdk.resources.transaction import Transaction
from etherscan_sdk.resources.usage import Usage

__all__ = [
    "Account",
    "BaseModule",
    "Block",
    "Contract",
    "GasTracker",
    "L2",
    "Logs",
    "Nametags",
    "Proxy",
    "Stats",
    "Tokens",
    "Transaction",
    "Usage",
    "checked",
]
