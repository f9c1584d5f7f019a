"""Usage module: metadata about the API itself."""

from __future__ import annotations

from etherscan_sdk.core.transport import CHAINLIST_URL
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import ChainInfo, ChainList


class Usage(BaseModule):
    @checked
    async def get_chain_list(self) -> list[ChainInfo]:
        """Chains served by the V2 API. Direct JSON, no status envelope."""
        chain_list = await self._transport.request(CHAINLIST_URL, {}, ChainList)
        return chain_list.result
