"""Stats module: supply, price, node/chain size and daily network series."""

from __future__ import annotations

from typing import Any

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    BigInt,
    ChainSize,
    DailyEthPrice,
    DailyHashrate,
    DailyNetworkDifficulty,
    DailyNetworkUtilization,
    DailyNewAddress,
    DailyTransactionCount,
    DailyTransactionFee,
    EthPrice,
    EthSupply2,
    NodeCount,
)


class Stats(BaseModule):
    module = "stats"

    @checked
    async def get_eth_supply(self) -> int:
        """Total ether supply in wei."""
        return await self._get("ethsupply", BigInt)

    @checked
    async def get_eth_supply2(self) -> EthSupply2:
        """Supply including staking rewards, burnt fees and withdrawals."""
        return await self._get("ethsupply2", EthSupply2)

    @checked
    async def get_eth_price(self) -> EthPrice:
        return await self._get("ethprice", EthPrice)

    @checked
    async def get_chain_size(
        self,
        startdate: str,
        enddate: str,
        clienttype: str | None = None,
        syncmode: str | None = None,
        sort: str | None = None,
    ) -> list[ChainSize]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "chainsize",
            list[ChainSize],
            startdate=startdate,
            enddate=enddate,
            clienttype=clienttype,
            syncmode=syncmode,
            sort=sort,
        )

    @checked
    async def get_node_count(self) -> NodeCount:
        return await self._get("nodecount", NodeCount)

    @checked
    async def get_daily_txn_fee(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyTransactionFee]:
        return await self._daily("dailytxnfee", list[DailyTransactionFee], startdate, enddate, sort)

    @checked
    async def get_daily_new_address(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyNewAddress]:
        return await self._daily("dailynewaddress", list[DailyNewAddress], startdate, enddate, sort)

    @checked
    async def get_daily_net_utilization(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyNetworkUtilization]:
        return await self._daily(
            "dailynetutilization", list[DailyNetworkUtilization], startdate, enddate, sort
        )

    @checked
    async def get_daily_avg_hashrate(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyHashrate]:
        return await self._daily("dailyavghashrate", list[DailyHashrate], startdate, enddate, sort)

    @checked
    async def get_daily_tx(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyTransactionCount]:
        return await self._daily("dailytx", list[DailyTransactionCount], startdate, enddate, sort)

    @checked
    async def get_daily_avg_net_difficulty(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyNetworkDifficulty]:
        return await self._daily(
            "dailyavgnetdifficulty", list[DailyNetworkDifficulty], startdate, enddate, sort
        )

    @checked
    async def get_eth_daily_price(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyEthPrice]:
        return await self._daily("ethdailyprice", list[DailyEthPrice], startdate, enddate, sort)

    async def _daily(
        self, action: str, schema: Any, startdate: str, enddate: str, sort: str | None
    ) -> Any:
        validators.date_range(startdate, enddate)
        return await self._get(action, schema, startdate=startdate, enddate=enddate, sort=sort)
