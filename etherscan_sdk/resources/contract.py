"""
Contract module: ABI and source lookups, creation info, verification.

The ABI and source-code actions return JSON encoded as a string inside
``result``; the ``Abi`` and ``SourceCodeList`` schemas decode it (with a
size cap) before validating.
"""

from __future__ import annotations

from etherscan_sdk import validators
from etherscan_sdk.resources.base import BaseModule, checked
from etherscan_sdk.schemas import Abi, AbiEntry, ContractCreation, SourceCode, SourceCodeList


class Contract(BaseModule):
    module = "contract"

    @checked
    async def get_abi(self, address: str) -> list[AbiEntry]:
        """Parsed ABI of a verified contract."""
        validators.address(address, "address")
        return await self._get("getabi", Abi, address=address)

    @checked
    async def get_source_code(self, address: str) -> list[SourceCode]:
        validators.address(address, "address")
        return await self._get("getsourcecode", SourceCodeList, address=address)

    @checked
    async def get_contract_creation(self, contractaddresses: str) -> list[ContractCreation]:
        """Creator and creation tx for a comma-separated list of contracts."""
        validators.address_list(contractaddresses, "contractaddresses")
        return await self._get(
            "getcontractcreation", list[ContractCreation], contractaddresses=contractaddresses
        )

    @checked
    async def verify_source_code(
        self,
        contractaddress: str,
        sourceCode: str | None = None,
        codeformat: str | None = None,
        contractname: str | None = None,
        compilerversion: str | None = None,
        optimizationUsed: str | None = None,
        runs: int | str | None = None,
        constructorArguments: str | None = None,
        evmVersion: str | None = None,
        licenseType: int | str | None = None,
    ) -> str:
        """Submit Solidity source for verification. Returns the verification GUID."""
        validators.address(contractaddress, "contractaddress")
        return await self._get(
            "verifysourcecode",
            str,
            contractaddress=contractaddress,
            sourceCode=sourceCode,
            codeformat=codeformat,
            contractname=contractname,
            compilerversion=compilerversion,
            optimizationUsed=optimizationUsed,
            runs=runs,
            constructorArguments=constructorArguments,
            evmVersion=evmVersion,
            licenseType=licenseType,
        )

    @checked
    async def verify_vyper(
        self,
        contractaddress: str,
        sourceCode: str | None = None,
        codeformat: str | None = None,
        contractname: str | None = None,
        compilerversion: str | None = None,
        optimizationUsed: str | None = None,
        constructorArguments: str | None = None,
    ) -> str:
        validators.address(contractaddress, "contractaddress")
        return await self._get(
            "verifysourcecode",
            str,
            contractaddress=contractaddress,
            sourceCode=sourceCode,
            codeformat=codeformat,
            contractname=contractname,
            compilerversion=compilerversion,
            optimizationUsed=optimizationUsed,
            constructorArguments=constructorArguments,
        )

    @checked
    async def verify_stylus(
        self,
        contractaddress: str,
        sourceCode: str | None = None,
        codeformat: str | None = None,
        contractname: str | None = None,
        compilerversion: str | None = None,
        licenseType: int | str | None = None,
    ) -> str:
        validators.address(contractaddress, "contractaddress")
        return await self._get(
            "verifysourcecode",
            str,
            contractaddress=contractaddress,
            sourceCode=sourceCode,
            codeformat=codeformat,
            contractname=contractname,
            compilerversion=compilerversion,
            licenseType=licenseType,
        )

    @checked
    async def verify_zksync_source_code(
        self,
        contractaddress: str,
        sourceCode: str | None = None,
        codeformat: str | None = None,
        contractname: str | None = None,
        compilerversion: str | None = None,
        zksolcVersion: str | None = None,
        compilermode: str | None = None,
        constructorArguments: str | None = None,
    ) -> str:
        validators.address(contractaddress, "contractaddress")
        return await self._get(
            "verifysourcecode",
            str,
            contractaddress=contractaddress,
            sourceCode=sourceCode,
            codeformat=codeformat,
            contractname=contractname,
            compilerversion=compilerversion,
            zksolcVersion=zksolcVersion,
            compilermode=compilermode,
            constructorArguments=constructorArguments,
        )

    @checked
    async def check_verify_status(self, guid: str) -> str:
        return await self._get("checkverifystatus", str, guid=guid)

    @checked
    async def verify_proxy_contract(
        self, address: str, expectedimplementation: str | None = None
    ) -> str:
        validators.address(address, "address")
        validators.address(expectedimplementation, "expectedimplementation")
        return await self._get(
            "verifyproxycontract",
            str,
            address=address,
            expectedimplementation=expectedimplementation,
        )

    @checked
    async def check_proxy_verification(self, guid: str) -> str:
        return await self._get("checkproxyverification", str, guid=guid)
