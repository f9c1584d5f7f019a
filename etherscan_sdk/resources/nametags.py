"""Nametag module: labels and address tags (paid plans)."""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import AddressTag, LabelMasterListEntry

CSV_CONTENT_TYPES = ("text/csv", "text/plain")


class Nametags(BaseModule):
    module = "nametag"

    @checked
    async def get_label_master_list(self, format: str | None = None) -> list[LabelMasterListEntry]:
        return await self._get("getlabelmasterlist", list[LabelMasterListEntry], format=format)

    @checked
    async def get_export_address_tags(
        self, label: str | None = None, format: str | None = None
    ) -> str:
        """Address tags for ``label`` as raw CSV text."""
        return await self._transport.get(
            {"module": self.module, "action": "exportaddresstags", "label": label, "format": format},
            str,
            allowed_content_types=CSV_CONTENT_TYPES,
            response_type="text",
        )

    @checked
    async def get_address_tag(self, address: str) -> list[AddressTag]:
        validators.address(address, "address")
        return await self._get("getaddresstag", list[AddressTag], address=address)
