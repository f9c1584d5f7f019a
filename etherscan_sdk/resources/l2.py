"""L2 module: bridge, deposit and withdrawal transactions (chain-specific)."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import BridgeTransaction, Transaction

IntArg = int | str | None


class L2(BaseModule):
    module = "account"

    @checked
    async def get_txn_bridge(
        self,
        address: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[BridgeTransaction]:
        """Bridge transfers (Polygon PoS, Gnosis, BTTC)."""
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "txnbridge",
            list[BridgeTransaction],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_deposit_txs(
        self,
        address: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[Transaction]:
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "getdeposittxs",
            list[Transaction],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_withdrawal_txs(
        self,
        address: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[Transaction]:
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "getwithdrawaltxs",
            list[Transaction],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )
