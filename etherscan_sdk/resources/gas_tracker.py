"""Gas tracker module."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import (
    DailyGasLimit,
    DailyGasPrice,
    DailyGasUsed,
    GasOracle,
    NumberString,
)


class GasTracker(BaseModule):
    module = "gastracker"

    @checked
    async def get_gas_estimate(self, gasprice: int | str | None = None) -> int | float:
        """Estimated confirmation time in seconds for ``gasprice`` (wei)."""
        return await self._get("gasestimate", NumberString, gasprice=gasprice)

    @checked
    async def get_gas_oracle(self) -> GasOracle:
        return await self._get("gasoracle", GasOracle)

    @checked
    async def get_daily_avg_gas_limit(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyGasLimit]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyavggaslimit",
            list[DailyGasLimit],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_avg_gas_price(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyGasPrice]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailyavggasprice",
            list[DailyGasPrice],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )

    @checked
    async def get_daily_gas_used(
        self, startdate: str, enddate: str, sort: str | None = None
    ) -> list[DailyGasUsed]:
        validators.date_range(startdate, enddate)
        return await self._get(
            "dailygasused",
            list[DailyGasUsed],
            module="stats",
            startdate=startdate,
            enddate=enddate,
            sort=sort,
        )
