"""Event log queries (``module=logs&action=getLogs``)."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import Log

IntArg = int | str | None


class Logs(BaseModule):
    module = "logs"

    @checked
    async def get_logs(
        self,
        address: str,
        fromBlock: IntArg = None,
        toBlock: IntArg = None,
        page: IntArg = None,
        offset: IntArg = None,
    ) -> list[Log]:
        validators.address(address, "address")
        validators.block_range(fromBlock, toBlock, page, offset)
        return await self._get(
            "getLogs",
            list[Log],
            address=address,
            fromBlock=fromBlock,
            toBlock=toBlock,
            page=page,
            offset=offset,
        )

    @checked
    async def get_logs_by_address_and_topics(
        self,
        address: str,
        fromBlock: IntArg = None,
        toBlock: IntArg = None,
        topic0: str | None = None,
        topic0_1_opr: str | None = None,
        topic1: str | None = None,
        page: IntArg = None,
        offset: IntArg = None,
    ) -> list[Log]:
        validators.address(address, "address")
        validators.block_range(fromBlock, toBlock, page, offset)
        return await self._get(
            "getLogs",
            list[Log],
            address=address,
            fromBlock=fromBlock,
            toBlock=toBlock,
            topic0=topic0,
            topic0_1_opr=topic0_1_opr,
            topic1=topic1,
            page=page,
            offset=offset,
        )

    @checked
    async def get_logs_by_topics(
        self,
        fromBlock: IntArg = None,
        toBlock: IntArg = None,
        topic0: str | None = None,
        topic1: str | None = None,
        topic2: str | None = None,
        topic3: str | None = None,
        topic0_1_opr: str | None = None,
        topic0_2_opr: str | None = None,
        topic0_3_opr: str | None = None,
        topic1_2_opr: str | None = None,
        topic1_3_opr: str | None = None,
        topic2_3_opr: str | None = None,
        page: IntArg = None,
        offset: IntArg = None,
    ) -> list[Log]:
        """
        Logs matching up to four topics across all contracts.

        ``topicX_Y_opr`` is ``and`` or ``or`` and combines topicX with topicY.
        """
        validators.block_range(fromBlock, toBlock, page, offset)
        return await self._get(
            "getLogs",
            list[Log],
            fromBlock=fromBlock,
            toBlock=toBlock,
            topic0=topic0,
            topic1=topic1,
            topic2=topic2,
            topic3=topic3,
            topic0_1_opr=topic0_1_opr,
            topic0_2_opr=topic0_2_opr,
            topic0_3_opr=topic0_3_opr,
            topic1_2_opr=topic1_2_opr,
            topic1_3_opr=topic1_3_opr,
            topic2_3_opr=topic2_3_opr,
            page=page,
            offset=offset,
        )
