"""
Account module: balances, transaction history and transfers by address.

API docs: https://docs.etherscan.io/api-endpoints/accounts
"""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.chains import require_capability
from etherscan_sdk.exceptions import SchemaValidationError
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    AccountBalance,
    BeaconWithdrawal,
    BigInt,
    ERC1155Transfer,
    FundedBy,
    InternalTransaction,
    MinedBlock,
    NFTTransfer,
    TokenTransfer,
    Transaction,
)

IntArg = int | str | None


class Account(BaseModule):
    module = "account"

    @checked
    async def get_balance(self, address: str, tag: str | None = None) -> int | dict[str, int]:
        """
        Native balance in wei.

        A single address returns an ``int``. A comma-separated list (up to
        20 addresses) is sent as one ``balancemulti`` call and returns
        ``{address: balance}``.
        """
        addresses = validators.address_list(address, "address")
        if not addresses:
            raise SchemaValidationError("At least one address is required")
        if len(addresses) == 1:
            return await self._get("balance", BigInt, address=addresses[0], tag=tag)
        return await self._balance_multi(addresses, tag or "latest")

    @checked
    async def get_balances(self, addresses: list[str], tag: str = "latest") -> dict[str, int]:
        """Balances for up to 20 addresses in one request."""
        if not addresses:
            raise SchemaValidationError("At least one address is required")
        if len(addresses) > validators.MAX_ADDRESSES:
            raise SchemaValidationError(
                f"Too many addresses in addresses (max: {validators.MAX_ADDRESSES})"
            )
        for i, addr in enumerate(addresses):
            validators.address(addr, f"addresses[{i}]")
        return await self._balance_multi(list(addresses), tag or "latest")

    @checked
    async def get_balance_history(self, address: str, blockno: int | str) -> int:
        """Balance at a historical block. Requires a paid API plan."""
        validators.address(address, "address")
        validators.block_number(blockno, "blockno")
        return await self._get("balancehistory", BigInt, address=address, blockno=blockno)

    @checked
    async def get_tx_list(
        self,
        address: str,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[Transaction]:
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "txlist",
            list[Transaction],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_token_tx(
        self,
        address: str,
        contractaddress: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[TokenTransfer]:
        """ERC-20 transfers, optionally filtered by token contract."""
        validators.token_transfer_query(address, contractaddress, startblock, endblock, page, offset)
        return await self._get(
            "tokentx",
            list[TokenTransfer],
            address=address,
            contractaddress=contractaddress,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_token_nft_tx(
        self,
        address: str,
        contractaddress: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[NFTTransfer]:
        """ERC-721 transfers, optionally filtered by token contract."""
        validators.token_transfer_query(address, contractaddress, startblock, endblock, page, offset)
        return await self._get(
            "tokennfttx",
            list[NFTTransfer],
            address=address,
            contractaddress=contractaddress,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_erc20_transfers(self, address: str, **kwargs) -> list[TokenTransfer]:
        return await self.get_token_tx(address, **kwargs)

    @checked
    async def get_erc721_transfers(self, address: str, **kwargs) -> list[NFTTransfer]:
        return await self.get_token_nft_tx(address, **kwargs)

    @checked
    async def get_token_1155_tx(
        self,
        address: str,
        contractaddress: str | None = None,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[ERC1155Transfer]:
        validators.token_transfer_query(address, contractaddress, startblock, endblock, page, offset)
        return await self._get(
            "token1155tx",
            list[ERC1155Transfer],
            address=address,
            contractaddress=contractaddress,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_tx_list_internal(
        self,
        address: str,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[InternalTransaction]:
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "txlistinternal",
            list[InternalTransaction],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_tx_list_internal_block_range(
        self,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[InternalTransaction]:
        """Internal transactions across all addresses within a block range."""
        validators.block_range(startblock, endblock, page, offset)
        return await self._get(
            "txlistinternal",
            list[InternalTransaction],
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_tx_list_internal_tx_hash(self, txhash: str) -> list[InternalTransaction]:
        validators.tx_hash(txhash, "txhash")
        return await self._get("txlistinternal", list[InternalTransaction], txhash=txhash)

    @checked
    async def get_mined_blocks(
        self,
        address: str,
        blocktype: str | None = None,
        page: IntArg = None,
        offset: IntArg = None,
    ) -> list[MinedBlock]:
        """Blocks (``blocktype="blocks"``) or uncles validated by ``address``."""
        validators.address(address, "address")
        validators.pagination(page, offset)
        return await self._get(
            "getminedblocks",
            list[MinedBlock],
            address=address,
            blocktype=blocktype,
            page=page,
            offset=offset,
        )

    @checked
    async def get_txs_beacon_withdrawal(
        self,
        address: str,
        startblock: IntArg = None,
        endblock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
        sort: str | None = None,
    ) -> list[BeaconWithdrawal]:
        """
        Beacon chain withdrawals to ``address``.

        Raises:
            UnsupportedChainError: Chain has no beacon chain.
        """
        require_capability(self.chain_id, "has_beacon_chain", "get_txs_beacon_withdrawal")
        validators.paginated_address_query(address, startblock, endblock, page, offset)
        return await self._get(
            "txsBeaconWithdrawal",
            list[BeaconWithdrawal],
            address=address,
            startblock=startblock,
            endblock=endblock,
            page=page,
            offset=offset,
            sort=sort,
        )

    @checked
    async def get_funded_by(self, address: str) -> FundedBy:
        """Address and transaction that first funded ``address``."""
        validators.address(address, "address")
        return await self._get("fundedby", FundedBy, address=address)

    # ──────────────────────────────────────────────────────────────
    # Private helpers
    # ──────────────────────────────────────────────────────────────

    async def _balance_multi(self, addresses: list[str], tag: str) -> dict[str, int]:
        rows = await self._get(
            "balancemulti", list[AccountBalance], address=",".join(addresses), tag=tag
        )
        return {row.account: row.balance for row in rows}
