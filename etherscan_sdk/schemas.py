"""
Response schemas for etherscan_sdk.

Every remote JSON shape is described here as a pydantic model or annotated
type. Validation is a two-phase pipeline:

1. The transport parses the raw body into an ``Envelope`` (or takes the body
   as-is for direct endpoints).
2. The ``result`` payload is validated with a ``TypeAdapter`` built from one
   of the types below, which also converts wire strings into domain values
   (big integers, ``None`` for empty strings, parsed JSON for ABI payloads).

Monetary fields use ``BigInt``: a strict string → ``int`` conversion that
fails on anything it cannot parse exactly. A malformed balance is never
reported as zero and never passes through a float.
"""

from __future__ import annotations

import functools
import re
from typing import Annotated, Any, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainValidator,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from etherscan_sdk.exceptions import SchemaValidationError

_DECIMAL_RE = re.compile(r"-?[0-9]+")
_HEX_RE = re.compile(r"0x[0-9a-fA-F]+")
_FLOAT_RE = re.compile(r"-?[0-9]*\.[0-9]+(?:[eE][-+]?[0-9]+)?|-?[0-9]+[eE][-+]?[0-9]+")


# ── Scalar types ─────────────────────────────────────────────────────────────


def parse_bigint(value: Any) -> int:
    """Convert a decimal or 0x-hex string to an exact int; reject everything else."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid BigInt value: {value!r}")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid BigInt value: {value!r}")
    if _DECIMAL_RE.fullmatch(value):
        return int(value)
    if _HEX_RE.fullmatch(value):
        return int(value, 16)
    raise ValueError(f'Invalid BigInt value: "{value}"')


def parse_number_string(value: Any) -> int | float:
    """Counts and averages: decimal, hex or float strings. Garbage fails."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        if _DECIMAL_RE.fullmatch(value):
            return int(value)
        if _HEX_RE.fullmatch(value):
            return int(value, 16)
        if _FLOAT_RE.fullmatch(value):
            return float(value)
    raise ValueError(f'Invalid numeric value: "{value}"')


def _empty_to_none(value: Any) -> Any:
    return None if value == "" else value


def _json_payload(value: Any) -> Any:
    from etherscan_sdk.validators import safe_json_parse

    try:
        return safe_json_parse(value)
    except SchemaValidationError as e:
        raise ValueError(e.message) from e


BigInt = Annotated[int, PlainValidator(parse_bigint)]
NumberString = Annotated[Union[int, float], PlainValidator(parse_number_string)]
NullableString = Annotated[Union[str, None], BeforeValidator(_empty_to_none)]
HexString = Annotated[str, StringConstraints(pattern=r"^0x[a-fA-F0-9]+$")]
Address = Annotated[str, StringConstraints(pattern=r"^0x[a-fA-F0-9]{40}$")]
TxHash = Annotated[str, StringConstraints(pattern=r"^0x[a-fA-F0-9]{64}$")]


class _Record(BaseModel):
    """Record that keeps fields the remote adds beyond the documented ones."""

    model_config = ConfigDict(extra="allow")


# ── Envelope ─────────────────────────────────────────────────────────────────


class Envelope(BaseModel):
    """
    Canonical response wrapper.

    REST-style actions answer ``{status, message, result}``; the proxy module
    answers JSON-RPC ``{jsonrpc, id, result | error}`` without a status.
    """

    model_config = ConfigDict(extra="allow")

    status: Union[str, int, None] = None
    message: Union[str, None] = None
    result: Any = None
    error: Any = None

    @property
    def failed(self) -> bool:
        return str(self.status) == "0"


# ── Account ──────────────────────────────────────────────────────────────────


class Transaction(_Record):
    blockNumber: str
    timeStamp: str
    hash: str
    nonce: str
    blockHash: str
    transactionIndex: str
    from_: str = Field(alias="from")
    to: NullableString
    value: BigInt
    gas: str
    gasPrice: BigInt
    isError: str
    txreceipt_status: str
    input: str
    contractAddress: NullableString
    cumulativeGasUsed: str
    gasUsed: str
    confirmations: str


class TokenTransfer(_Record):
    """ERC-20 transfer."""

    blockNumber: str
    timeStamp: str
    hash: str
    nonce: str
    blockHash: str
    from_: str = Field(alias="from")
    contractAddress: str
    to: str
    value: BigInt
    tokenName: str
    tokenSymbol: str
    tokenDecimal: str
    transactionIndex: str
    gas: str
    gasPrice: BigInt
    gasUsed: str
    cumulativeGasUsed: str
    input: str
    confirmations: str


class NFTTransfer(_Record):
    """ERC-721 transfer."""

    blockNumber: str
    timeStamp: str
    hash: str
    nonce: str
    blockHash: str
    from_: str = Field(alias="from")
    contractAddress: str
    to: str
    tokenID: str
    tokenName: str
    tokenSymbol: str
    tokenDecimal: str
    transactionIndex: str
    gas: str
    gasPrice: BigInt
    gasUsed: str
    cumulativeGasUsed: str
    input: str
    confirmations: str


class ERC1155Transfer(_Record):
    blockNumber: str
    timeStamp: str
    hash: str
    nonce: str
    blockHash: str
    from_: str = Field(alias="from")
    contractAddress: str
    to: str
    tokenID: str
    tokenValue: BigInt
    tokenName: str
    tokenSymbol: str
    tokenDecimal: Union[str, None] = None  # some ERC-1155 tokens have no decimals
    transactionIndex: str
    gas: str
    gasPrice: BigInt
    gasUsed: str
    cumulativeGasUsed: str
    input: str
    confirmations: str


class InternalTransaction(_Record):
    blockNumber: str
    timeStamp: str
    hash: str
    from_: str = Field(alias="from")
    to: NullableString
    value: BigInt
    contractAddress: NullableString
    input: str
    type: str
    gas: str
    gasUsed: str
    traceId: str
    isError: str
    errCode: str


class AccountBalance(BaseModel):
    account: str
    balance: BigInt


class MinedBlock(_Record):
    blockNumber: str
    timeStamp: str
    blockReward: str


class BeaconWithdrawal(BaseModel):
    withdrawalIndex: str
    validatorIndex: str
    address: str
    amount: BigInt
    blockNumber: str
    timestamp: str


class FundedBy(BaseModel):
    block: int
    timeStamp: str
    fundingAddress: Address
    fundingTxn: TxHash
    value: BigInt


# ── Block ────────────────────────────────────────────────────────────────────


class UncleReward(BaseModel):
    miner: str
    unclePosition: str
    blockreward: BigInt


class BlockReward(BaseModel):
    blockNumber: str
    timeStamp: str
    blockMiner: str
    blockReward: BigInt
    uncles: list[UncleReward]
    uncleInclusionReward: BigInt


class BlockCountdown(BaseModel):
    CurrentBlock: str
    CountdownBlock: str
    RemainingBlock: NumberString
    EstimateTimeInSec: str


class DailyBlockSize(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    blockSize_bytes: NumberString


class DailyBlockTime(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    blockTime_sec: str


class DailyBlockCount(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    blockCount: NumberString
    blockRewards_Eth: str


class DailyBlockRewards(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    blockRewards_Eth: str


class DailyUncleBlockCount(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    uncleBlockCount: NumberString
    uncleBlockRewards_Eth: str


# ── Contract ─────────────────────────────────────────────────────────────────


class AbiParam(BaseModel):
    name: str
    type: str
    indexed: Union[bool, None] = None
    internalType: Union[str, None] = None


class AbiEntry(BaseModel):
    inputs: Union[list[AbiParam], None] = None
    name: Union[str, None] = None
    outputs: Union[list[AbiParam], None] = None
    stateMutability: Union[str, None] = None
    type: str
    anonymous: Union[bool, None] = None


class SourceCode(_Record):
    SourceCode: str
    ABI: str
    ContractName: str
    CompilerVersion: str
    OptimizationUsed: str
    Runs: str
    ConstructorArguments: str
    EVMVersion: str
    Library: str
    LicenseType: str
    Proxy: str
    Implementation: str
    SwarmSource: str


class ContractCreation(_Record):
    contractAddress: str
    contractCreator: str
    txHash: str


# The remote returns the ABI as a JSON-encoded string inside ``result``
Abi = Annotated[list[AbiEntry], BeforeValidator(_json_payload)]
SourceCodeList = Annotated[list[SourceCode], BeforeValidator(_json_payload)]


# ── Gas tracker ──────────────────────────────────────────────────────────────


class GasOracle(BaseModel):
    LastBlock: str
    SafeGasPrice: str
    ProposeGasPrice: str
    FastGasPrice: str
    suggestBaseFee: str
    gasUsedRatio: str


class DailyGasLimit(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    gasLimit: str


class DailyGasUsed(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    gasUsed: str


class DailyGasPrice(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    maxGasPrice_Wei: str
    minGasPrice_Wei: str
    avgGasPrice_Wei: str


# ── L2 ───────────────────────────────────────────────────────────────────────


def _lenient_bigint(value: Any) -> int | None:
    if value in (None, ""):
        return None
    return parse_bigint(value)


class BridgeTransaction(_Record):
    hash: str
    blockNumber: str
    timeStamp: str
    from_: str = Field(alias="from")
    address: Union[str, None] = None
    amount: Annotated[Union[int, None], PlainValidator(_lenient_bigint)] = None
    tokenName: Union[str, None] = None
    symbol: Union[str, None] = None
    contractAddress: Union[str, None] = None
    divisor: Union[str, None] = None


# ── Logs ─────────────────────────────────────────────────────────────────────


class Log(_Record):
    address: str
    topics: list[str]
    data: str
    blockNumber: str
    timeStamp: str
    gasPrice: str
    gasUsed: str
    logIndex: str
    transactionHash: str
    transactionIndex: str


# ── Nametags ─────────────────────────────────────────────────────────────────


class LabelMasterListEntry(BaseModel):
    labelname: str
    labelslug: str
    shortdescription: str
    notes: str
    lastupdatedtimestamp: int


class AddressTag(_Record):
    address: str
    nametag: str
    url: Union[str, None] = None
    labels: Union[list[str], None] = None
    labels_slug: Union[list[str], None] = None


# ── Proxy (JSON-RPC) ─────────────────────────────────────────────────────────


class EthTransaction(BaseModel):
    blockHash: NullableString
    blockNumber: NullableString
    from_: str = Field(alias="from")
    gas: HexString
    gasPrice: HexString
    hash: str
    input: str
    nonce: HexString
    to: NullableString
    transactionIndex: NullableString
    value: HexString
    v: HexString
    r: HexString
    s: HexString


class EthTransactionReceipt(BaseModel):
    transactionHash: str
    transactionIndex: HexString
    blockHash: str
    blockNumber: HexString
    from_: str = Field(alias="from")
    to: NullableString
    cumulativeGasUsed: HexString
    gasUsed: HexString
    contractAddress: NullableString
    logs: list[Log]
    logsBloom: str
    status: Union[HexString, None] = None


class EthBlock(BaseModel):
    number: NullableString
    hash: NullableString
    parentHash: str
    nonce: NullableString
    sha3Uncles: str
    logsBloom: NullableString
    transactionsRoot: str
    stateRoot: str
    receiptsRoot: str
    miner: str
    difficulty: HexString
    totalDifficulty: Union[HexString, None] = None
    extraData: str
    size: HexString
    gasLimit: HexString
    gasUsed: HexString
    timestamp: HexString
    transactions: list[Union[str, EthTransaction]]
    uncles: list[str]


# ── Stats ────────────────────────────────────────────────────────────────────


class EthPrice(BaseModel):
    ethbtc: str
    ethbtc_timestamp: str
    ethusd: str
    ethusd_timestamp: str


class EthSupply2(BaseModel):
    EthSupply: str
    Eth2Staking: str
    BurntFees: str
    WithdrawnTotal: str


class ChainSize(BaseModel):
    blockNumber: str
    chainTimeStamp: str
    chainSize: str


class NodeCount(BaseModel):
    UTCDate: str
    TotalNodeCount: str


class DailyTransactionCount(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    transactionCount: NumberString


class DailyNetworkUtilization(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    networkUtilization: str


class DailyNewAddress(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    newAddressCount: NumberString


class DailyTransactionFee(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    transactionFee_Eth: str


class DailyEthPrice(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    value: str


class DailyHashrate(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    networkHashRate: str


class DailyNetworkDifficulty(BaseModel):
    UTCDate: str
    unixTimeStamp: str
    networkDifficulty: str


# ── Tokens ───────────────────────────────────────────────────────────────────


class TokenHolder(_Record):
    TokenHolderAddress: str
    TokenHolderQuantity: BigInt


class TokenInfo(_Record):
    contractAddress: str
    tokenName: str
    symbol: str
    divisor: str
    tokenType: str
    totalSupply: BigInt
    blueCheckmark: str
    description: str
    website: str
    email: str
    blog: str
    reddit: str
    slack: str
    facebook: str
    twitter: str
    bitcointalk: str
    github: str
    telegram: str
    linkedin: str
    discord: str
    whitepaper: str
    tokenPriceUSD: str


class ERC20Holding(BaseModel):
    TokenAddress: str
    TokenName: str
    TokenSymbol: str
    TokenQuantity: BigInt
    TokenDivisor: str
    TokenPriceUSD: str


class ERC721Holding(BaseModel):
    TokenAddress: str
    TokenName: str
    TokenSymbol: str
    TokenId: str


class ERC721InventoryItem(BaseModel):
    TokenAddress: str
    TokenId: str


# ── Transaction ──────────────────────────────────────────────────────────────


class TransactionStatus(BaseModel):
    isError: str
    errDescription: str


class ReceiptStatus(BaseModel):
    status: str


# ── Usage (direct endpoint) ──────────────────────────────────────────────────


class ChainInfo(BaseModel):
    chainname: str
    chainid: str
    blockexplorer: str
    apiurl: str
    status: int
    comment: str


class ChainList(BaseModel):
    comments: str
    totalcount: int
    result: list[ChainInfo]


# ── Adapter helpers ──────────────────────────────────────────────────────────


@functools.lru_cache(maxsize=256)
def _cached_adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def get_adapter(schema: Any) -> TypeAdapter:
    """Return a (cached) TypeAdapter for a type, or the adapter itself."""
    if isinstance(schema, TypeAdapter):
        return schema
    try:
        return _cached_adapter(schema)
    except TypeError:  # unhashable type expression
        return TypeAdapter(schema)


def accepts_empty_list(adapter: TypeAdapter) -> bool:
    try:
        adapter.validate_python([])
    except ValidationError:
        return False
    return True


def format_validation_error(exc: ValidationError) -> str:
    """Join every issue as ``path: reason`` with ``; ``."""
    issues = []
    for err in exc.errors():
        path = ".".join(str(p) for p in err["loc"]) or "<root>"
        issues.append(f"{path}: {err['msg']}")
    return "; ".join(issues)


def validate(schema: Any, payload: Any, context: str = "response") -> Any:
    """Validate `payload` against `schema`; raise SchemaValidationError on failure."""
    adapter = get_adapter(schema)
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Failed to parse Etherscan {context}: {format_validation_error(e)}"
        ) from e
