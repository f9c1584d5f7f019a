"""
Geth/Parity JSON-RPC proxy module.

Responses are JSON-RPC bodies (``{jsonrpc, id, result}``) rather than the
usual status envelope; an ``error`` member surfaces as APIError. Quantities
come back as 0x-hex strings and are returned unchanged unless noted.
"""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    EthBlock,
    EthTransaction,
    EthTransactionReceipt,
    HexString,
    NumberString,
)


class Proxy(BaseModule):
    module = "proxy"

    @checked
    async def get_block_number(self) -> str:
        return await self._get("eth_blockNumber", HexString)

    @checked
    async def get_block_by_number(self, tag: str, boolean: bool | None = None) -> EthBlock:
        """Block by hex number; ``boolean=True`` returns full transaction objects."""
        return await self._get("eth_getBlockByNumber", EthBlock, tag=tag, boolean=boolean)

    @checked
    async def get_uncle_by_block_number_and_index(self, tag: str, index: str) -> EthBlock:
        return await self._get("eth_getUncleByBlockNumberAndIndex", EthBlock, tag=tag, index=index)

    @checked
    async def get_block_transaction_count_by_number(self, tag: str) -> int | float:
        """Transaction count in a block, decoded from hex."""
        return await self._get("eth_getBlockTransactionCountByNumber", NumberString, tag=tag)

    @checked
    async def get_transaction_by_hash(self, txhash: str) -> EthTransaction:
        validators.tx_hash(txhash, "txhash")
        return await self._get("eth_getTransactionByHash", EthTransaction, txhash=txhash)

    @checked
    async def get_transaction_by_block_number_and_index(
        self, tag: str, index: str
    ) -> EthTransaction:
        return await self._get(
            "eth_getTransactionByBlockNumberAndIndex", EthTransaction, tag=tag, index=index
        )

    @checked
    async def get_transaction_count(self, address: str, tag: str | None = None) -> str:
        """Nonce of ``address`` as a hex string."""
        validators.address(address, "address")
        return await self._get("eth_getTransactionCount", HexString, address=address, tag=tag)

    @checked
    async def send_raw_transaction(self, hex: str) -> str:
        """Broadcast a signed transaction; returns its hash."""
        return await self._get("eth_sendRawTransaction", HexString, hex=hex)

    @checked
    async def get_transaction_receipt(self, txhash: str) -> EthTransactionReceipt:
        validators.tx_hash(txhash, "txhash")
        return await self._get("eth_getTransactionReceipt", EthTransactionReceipt, txhash=txhash)

    @checked
    async def call(self, to: str, data: str, tag: str | None = None) -> str:
        validators.address(to, "to")
        return await self._get("eth_call", HexString, to=to, data=data, tag=tag)

    @checked
    async def get_code(self, address: str, tag: str | None = None) -> str:
        validators.address(address, "address")
        return await self._get("eth_getCode", HexString, address=address, tag=tag)

    @checked
    async def get_storage_at(self, address: str, position: str, tag: str | None = None) -> str:
        validators.address(address, "address")
        return await self._get(
            "eth_getStorageAt", HexString, address=address, position=position, tag=tag
        )

    @checked
    async def get_gas_price(self) -> str:
        return await self._get("eth_gasPrice", HexString)

    @checked
    async def estimate_gas(
        self,
        to: str,
        data: str | None = None,
        value: str | None = None,
        gasPrice: str | None = None,
        gas: str | None = None,
    ) -> str:
        validators.address(to, "to")
        return await self._get(
            "eth_estimateGas", HexString, to=to, data=data, value=value, gasPrice=gasPrice, gas=gas
        )
