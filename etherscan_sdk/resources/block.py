"""Block module: rewards, countdowns, timestamp lookups and daily block stats."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    BlockCountdown,
    BlockReward,
    DailyBlockCount,
    DailyBlockRewards,
    DailyBlockSize,
    DailyBlockTime,
    DailyUncleBlockCount,
    NumberString,
)


class Block(BaseModule):
    module = "block"

    @checked
    async def get_block_reward(self, blockno: int | str) -> BlockReward:
        """Block and uncle rewards for ``blockno``."""
        validators.block_number(blockno, "blockno")
        return await self._get("getblockreward", BlockReward, blockno=blockno)

    @checked
    async def get_block_no_by_time(
        self, timestamp: int | str, closest: str | None = None
    ) -> int | float:
        """Block number mined closest to a unix ``timestamp`` (``closest``: before|after)."""
        return await self._get(
            "getblocknobytime", NumberString, timestamp=timestamp, closest=closest
        )

    @checked
    async def get_block_countdown(self, blockno: int | str) -> BlockCountdown:
        validators.block_number(blockno, "blockno")
        return await self._get("getblockcountdown", BlockCountdown, blockno=blockno)

    # Daily series live under module=stats on the remote side

    @checked
    async def get_daily_avg_block_size(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyBlockSize]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyavgblocksize",
            list[DailyBlockSize],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_block_count(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyBlockCount]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyblkcount",
            list[DailyBlockCount],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_block_rewards(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyBlockRewards]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyblockrewards",
            list[DailyBlockRewards],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_avg_block_time(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyBlockTime]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyavgblocktime",
            list[DailyBlockTime],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_uncle_block_count(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyUncleBlockCount]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyuncleblkcount",
            list[DailyUncleBlockCount],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )
