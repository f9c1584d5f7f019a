"""
Local parameter validation for namespace methods.

Pure functions, no network I/O. Every failure raises SchemaValidationError
before a request is built. ``None`` means "parameter not supplied" and is
always accepted; required-ness is expressed by the method signatures.
"""

from __future__ import annotations

import json
import re
from datetime import date
from typing import Any

from etherscan_sdk.exceptions import SchemaValidationError

MAX_STRING_LENGTH = 10_000
MAX_ADDRESSES = 20
MAX_JSON_SIZE = 10 * 1024 * 1024
MAX_OFFSET = 10_000

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _check_length(value: str, field_name: str) -> None:
    if len(value) > MAX_STRING_LENGTH:
        raise SchemaValidationError(
            f"{field_name} exceeds maximum length of {MAX_STRING_LENGTH}"
        )


def _to_int(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        return int(value.strip())
    return None


def address(value: str | None, field_name: str = "address") -> None:
    """0x-prefixed, 40 hex chars."""
    if value is None:
        return
    if not isinstance(value, str):
        raise SchemaValidationError(f"Invalid {field_name}: {value!r}")
    _check_length(value, field_name)
    if not ADDRESS_RE.match(value):
        raise SchemaValidationError(f"Invalid {field_name}: {value}")


def address_list(value: str | None, field_name: str = "addresses") -> list[str]:
    """
    Comma-separated addresses, each valid, at most MAX_ADDRESSES.

    Returns the trimmed, non-empty addresses.
    """
    if value is None:
        return []
    _check_length(value, field_name)
    addresses = [a.strip() for a in value.split(",") if a.strip()]
    if len(addresses) > MAX_ADDRESSES:
        raise SchemaValidationError(
            f"Too many addresses in {field_name} (max: {MAX_ADDRESSES})"
        )
    for i, addr in enumerate(addresses):
        address(addr, f"{field_name}[{i}]")
    return addresses


def tx_hash(value: str | None, field_name: str = "hash") -> None:
    """0x-prefixed, 64 hex chars (32 bytes)."""
    if value is None:
        return
    if not isinstance(value, str):
        raise SchemaValidationError(f"Invalid {field_name}: {value!r}")
    _check_length(value, field_name)
    if not HASH_RE.match(value):
        raise SchemaValidationError(f"Invalid {field_name}: {value}")


def block_number(value: int | str | None, field_name: str = "block number") -> None:
    if value is None:
        return
    num = _to_int(value)
    if num is None or num < 0:
        raise SchemaValidationError(f"Invalid {field_name}: {value}")


def pagination(page: int | str | None = None, offset: int | str | None = None) -> None:
    if page is not None:
        p = _to_int(page)
        if p is None or p < 1:
            raise SchemaValidationError(f"Invalid page number: {page}")
    if offset is not None:
        o = _to_int(offset)
        if o is None or o < 1 or o > MAX_OFFSET:
            raise SchemaValidationError(f"Invalid offset: {offset} (must be 1-{MAX_OFFSET})")


def date_string(value: str | None, field_name: str) -> None:
    """Strict YYYY-MM-DD that is also a real calendar date."""
    if value is None:
        return
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise SchemaValidationError(
            f"Invalid date format for {field_name}: {value} (expected YYYY-MM-DD)"
        )
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise SchemaValidationError(f"Invalid date for {field_name}: {value}") from e


def date_range(startdate: str | None, enddate: str | None) -> None:
    date_string(startdate, "startdate")
    date_string(enddate, "enddate")


def paginated_address_query(
    address_: str | None,
    startblock: int | str | None = None,
    endblock: int | str | None = None,
    page: int | str | None = None,
    offset: int | str | None = None,
) -> None:
    address(address_, "address")
    block_range(startblock, endblock, page, offset)


def block_range(
    startblock: int | str | None = None,
    endblock: int | str | None = None,
    page: int | str | None = None,
    offset: int | str | None = None,
) -> None:
    block_number(startblock, "startblock")
    block_number(endblock, "endblock")
    pagination(page, offset)


def token_transfer_query(
    address_: str | None,
    contractaddress: str | None = None,
    startblock: int | str | None = None,
    endblock: int | str | None = None,
    page: int | str | None = None,
    offset: int | str | None = None,
) -> None:
    address(address_, "address")
    address(contractaddress, "contractaddress")
    block_range(startblock, endblock, page, offset)


def safe_json_parse(value: Any) -> Any:
    """Parse a JSON string payload with a size cap; non-strings pass through."""
    if not isinstance(value, str):
        return value
    if len(value) > MAX_JSON_SIZE:
        raise SchemaValidationError(
            f"JSON payload too large: {len(value)} bytes (max: {MAX_JSON_SIZE})"
        )
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise SchemaValidationError(f"Invalid JSON: {e.msg}") from e
