"""
Token module: supply, balances, holders and per-address holdings.

Several actions live under other remote modules (``stats``, ``account``);
the ``module=`` override on each call reflects that.
"""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    BigInt,
    ERC20Holding,
    ERC721Holding,
    ERC721InventoryItem,
    NumberString,
    TokenHolder,
    TokenInfo,
)

IntArg = int | str | None


class Tokens(BaseModule):
    module = "token"

    @checked
    async def get_token_supply(self, contractaddress: str) -> int:
        validators.address(contractaddress, "contractaddress")
        return await self._get(
            "tokensupply", BigInt, module="stats", contractaddress=contractaddress
        )

    @checked
    async def get_token_balance(
        self, contractaddress: str, address: str, tag: str | None = None
    ) -> int:
        """ERC-20 balance of ``address`` in the token's smallest unit."""
        validators.address(contractaddress, "contractaddress")
        validators.address(address, "address")
        return await self._get(
            "tokenbalance",
            BigInt,
            module="account",
            contractaddress=contractaddress,
            address=address,
            tag=tag,
        )

    @checked
    async def get_token_supply_history(self, contractaddress: str, blockno: int | str) -> int:
        validators.address(contractaddress, "contractaddress")
        validators.block_number(blockno, "blockno")
        return await self._get(
            "tokensupplyhistory",
            BigInt,
            module="stats",
            contractaddress=contractaddress,
            blockno=blockno,
        )

    @checked
    async def get_token_balance_history(
        self, contractaddress: str, address: str, blockno: int | str
    ) -> int:
        validators.address(contractaddress, "contractaddress")
        validators.address(address, "address")
        validators.block_number(blockno, "blockno")
        return await self._get(
            "tokenbalancehistory",
            BigInt,
            module="account",
            contractaddress=contractaddress,
            address=address,
            blockno=blockno,
        )

    @checked
    async def get_token_holder_list(
        self, contractaddress: str, page: IntArg = None, offset: IntArg = None
    ) -> list[TokenHolder]:
        validators.address(contractaddress, "contractaddress")
        validators.pagination(page, offset)
        return await self._get(
            "tokenholderlist",
            list[TokenHolder],
            contractaddress=contractaddress,
            page=page,
            offset=offset,
        )

    @checked
    async def get_top_holders(
        self, contractaddress: str, offset: IntArg = None
    ) -> list[TokenHolder]:
        validators.address(contractaddress, "contractaddress")
        validators.pagination(None, offset)
        return await self._get(
            "topholders", list[TokenHolder], contractaddress=contractaddress, offset=offset
        )

    @checked
    async def get_token_holder_count(self, contractaddress: str) -> int | float:
        validators.address(contractaddress, "contractaddress")
        return await self._get("tokenholdercount", NumberString, contractaddress=contractaddress)

    @checked
    async def get_token_info(self, contractaddress: str) -> list[TokenInfo]:
        validators.address(contractaddress, "contractaddress")
        return await self._get("tokeninfo", list[TokenInfo], contractaddress=contractaddress)

    @checked
    async def get_address_token_balance(
        self, address: str, page: IntArg = None, offset: IntArg = None
    ) -> list[ERC20Holding]:
        """Every ERC-20 token held by ``address``."""
        validators.address(address, "address")
        validators.pagination(page, offset)
        return await self._get(
            "addresstokenbalance",
            list[ERC20Holding],
            module="account",
            address=address,
            page=page,
            offset=offset,
        )

    @checked
    async def get_address_token_nft_balance(
        self, address: str, page: IntArg = None, offset: IntArg = None
    ) -> list[ERC721Holding]:
        validators.address(address, "address")
        validators.pagination(page, offset)
        return await self._get(
            "addresstokennftbalance",
            list[ERC721Holding],
            module="account",
            address=address,
            page=page,
            offset=offset,
        )

    @checked
    async def get_address_token_nft_inventory(
        self,
        address: str,
        contractaddress: str,
        page: IntArg = None,
        offset: IntArg = None,
    ) -> list[ERC721InventoryItem]:
        validators.address(address, "address")
        validators.address(contractaddress, "contractaddress")
        validators.pagination(page, offset)
        return await self._get(
            "addresstokennftinventory",
            list[ERC721InventoryItem],
            module="account",
            address=address,
            contractaddress=contractaddress,
            page=page,
            offset=offset,
        )
