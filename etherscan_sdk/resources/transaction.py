"""Transaction module: execution and receipt status by hash."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import ReceiptStatus, TransactionStatus


class Transaction(BaseModule):
    module = "transaction"

    @checked
    async def get_status(self, txhash: str) -> TransactionStatus:
        """Contract execution status. ``isError == "0"`` means success."""
        validators.tx_hash(txhash, "txhash")
        return await self._get("getstatus", TransactionStatus, txhash=txhash)

    @checked
    async def get_receipt_status(self, txhash: str) -> ReceiptStatus:
        """Receipt status (post-Byzantium). ``status == "1"`` means success."""
        validators.tx_hash(txhash, "txhash")
        return await self._get("gettxreceiptstatus", ReceiptStatus, txhash=txhash)
