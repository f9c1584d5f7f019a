"""Output format routing for the etherscan-sdk CLI.

Converts results to the requested format: json or table.

Design rules:
- JSON: 2-space indent, utf-8. Integers beyond 2**53 are emitted as strings
  so JavaScript consumers do not silently round balances.
- Table: Rich-formatted. Lists of records become one row per record;
  a single record becomes a field/value table.
- pydantic models are dumped with their wire aliases (``from``, not ``from_``).

All functions return strings. The caller writes to stdout.
"""

from __future__ import annotations

import io
import json
from decimal import Decimal
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

VALID_FORMATS = {"json", "table"}

# largest integer a float64 represents exactly
MAX_SAFE_INTEGER = 2**53 - 1


class ResultEncoder(json.JSONEncoder):
    """JSON encoder for Decimal values and pydantic models."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, BaseModel):
            return to_jsonable(obj.model_dump(by_alias=True))
        return super().default(obj)


def to_jsonable(data: Any) -> Any:
    """Recursively convert models and unsafe integers into JSON-friendly values."""
    if isinstance(data, BaseModel):
        return to_jsonable(data.model_dump(by_alias=True))
    if isinstance(data, bool):
        return data
    if isinstance(data, int):
        return str(data) if abs(data) > MAX_SAFE_INTEGER else data
    if isinstance(data, dict):
        return {str(k): to_jsonable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(v) for v in data]
    return data


def format_output(data: Any, fmt: str) -> str:
    """
    Format data for stdout output.

    Args:
        data: Result value: model, list of models, dict, or scalar.
        fmt: "json" | "table"

    Raises:
        ValueError: If fmt is not a recognised format.
    """
    fmt = fmt.lower()
    if fmt not in VALID_FORMATS:
        raise ValueError(f"Unknown format {fmt!r}. Valid: {sorted(VALID_FORMATS)}")

    if fmt == "table":
        return format_table(data)
    return format_json(data)


# ── JSON ─────────────────────────────────────────────────────────────────────


def format_json(data: Any) -> str:
    """Pretty-print data as JSON (2-space indent)."""
    return json.dumps(to_jsonable(data), indent=2, cls=ResultEncoder, ensure_ascii=False)


# ── Table ────────────────────────────────────────────────────────────────────


def format_table(data: Any, title: str | None = None) -> str:
    """Format as a Rich terminal table."""
    buf = io.StringIO()
    console = Console(file=buf, highlight=False, markup=False, width=160)
    data = to_jsonable(data)

    if isinstance(data, list) and data and all(isinstance(row, dict) for row in data):
        _render_records(console, data, title)
    elif isinstance(data, dict):
        _render_fields(console, data, title)
    elif isinstance(data, list):
        for item in data:
            console.print(str(item))
    else:
        console.print(str(data))

    return buf.getvalue()


def _cell(value: Any) -> str:
    if value is None:
        return "—"
    if isinstance(value, (dict, list)):
        return json.dumps(value, cls=ResultEncoder)
    return str(value)


def _render_records(console: Console, rows: list[dict[str, Any]], title: str | None) -> None:
    columns: list[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    table = Table(title=title, show_header=True, header_style="bold blue")
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in columns))

    console.print(table)
    console.print(f"Rows: {len(rows)}")


def _render_fields(console: Console, data: dict[str, Any], title: str | None) -> None:
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(str(key), _cell(value))
    console.print(table)


def mask_api_key(key: str) -> str:
    """
    Mask an API key for safe display.

    'abcdefg123' → 'abcd****'
    '' → '****'
    """
    if not key or len(key) <= 4:
        return "****"
    return key[:4] + "****"
