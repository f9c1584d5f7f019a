"""Click CLI entry point for etherscan-sdk.

All commands are thin orchestration wrappers around EtherscanClient;
request logic lives in the client, transport and resources.

Exit codes:
  0 — success
  1 — generic error
  2 — API error, rate limit, invalid key, plan upgrade required
  3 — network error
  4 — data error (invalid input, schema mismatch, unsupported chain)
  5 — config error
  6 — transport contract error (endpoint, content type, size, HTTP status)
"""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import click

from etherscan_sdk import __version__
from etherscan_sdk.client import EtherscanClient
from etherscan_sdk.config import (
    ClientConfig,
    get_default_config_path,
    load_config,
    save_config,
)
from etherscan_sdk.exceptions import EtherscanError
from etherscan_sdk.output import format_output, mask_api_key

logger = logging.getLogger(__name__)


# ── Error handler ─────────────────────────────────────────────────────────────


def _output_error(err: EtherscanError | Exception) -> None:
    """Write error JSON to stderr and exit with the mapped code."""
    if isinstance(err, EtherscanError):
        payload = err.to_dict()
        payload.pop("status", None)
        exit_code = err.exit_code
    else:
        payload = {"error": "UNKNOWN_ERROR", "message": str(err), "details": {}}
        exit_code = 1
    sys.stderr.write(json.dumps(payload, default=str) + "\n")
    sys.stderr.flush()
    sys.exit(exit_code)


def _client_from_ctx(ctx: click.Context) -> EtherscanClient:
    if ctx.obj.get("config_error") is not None:
        raise ctx.obj["config_error"]
    config: ClientConfig = ctx.obj["config"]
    return EtherscanClient(chain=ctx.obj.get("chain"), config=config)


def _execute(ctx: click.Context, action: Callable[[EtherscanClient], Awaitable[Any]]) -> None:
    """Run ``action`` against a fresh client and print its result."""

    async def _run() -> Any:
        async with _client_from_ctx(ctx) as client:
            return await action(client)

    try:
        result = asyncio.run(_run())
    except EtherscanError as e:
        _output_error(e)
        return
    click.echo(format_output(result, ctx.obj["format"]))


# ── Root group ────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    envvar="ETHERSCAN_CONFIG_PATH",
    default=None,
    help="Config file path (default: ~/.etherscan_sdk/config.toml)",
)
@click.option("--chain", "chain_id", type=int, default=None, help="Chain id (default: config)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default=None,
    help="Output format (overrides config default)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests, retries and cache activity")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    chain_id: int | None,
    output_format: str | None,
    verbose: bool,
) -> None:
    """etherscan-sdk: query the Etherscan V2 multi-chain API."""
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        # httpx logs full request URLs, which carry the API key
        for name in ("httpx", "httpcore"):
            logging.getLogger(name).setLevel(logging.WARNING)

    ctx.obj["config_error"] = None
    try:
        config = load_config(config_path)
    except EtherscanError as e:
        # keep going with defaults so `config init --force` can repair the file
        logger.debug("Config load failed: %s", e)
        ctx.obj["config_error"] = e
        config = ClientConfig()

    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["chain"] = chain_id
    ctx.obj["format"] = output_format or config.output.default_format


# ── Query commands ────────────────────────────────────────────────────────────


@cli.command("balance")
@click.argument("addresses", nargs=-1, required=True)
@click.option("--tag", default=None, help="Block tag (default: latest)")
@click.pass_context
def balance_command(ctx: click.Context, addresses: tuple[str, ...], tag: str | None) -> None:
    """Native balance (wei) of one or more addresses (max 20)."""

    async def action(client: EtherscanClient) -> list[dict[str, Any]]:
        result = await client.account.get_balance(",".join(addresses), tag=tag)
        if isinstance(result, dict):
            return [{"address": addr, "balance": wei} for addr, wei in result.items()]
        return [{"address": addresses[0], "balance": result}]

    _execute(ctx, action)


@cli.command("txlist")
@click.argument("address")
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--offset", default=10, type=int, show_default=True)
@click.option("--sort", type=click.Choice(["asc", "desc"]), default="desc", show_default=True)
@click.pass_context
def txlist_command(ctx: click.Context, address: str, page: int, offset: int, sort: str) -> None:
    """Normal transactions for ADDRESS."""
    _execute(
        ctx,
        lambda client: client.account.get_tx_list(address, page=page, offset=offset, sort=sort),
    )


@cli.command("abi")
@click.argument("address")
@click.pass_context
def abi_command(ctx: click.Context, address: str) -> None:
    """ABI of a verified contract."""
    _execute(ctx, lambda client: client.contract.get_abi(address))


@cli.command("gas-oracle")
@click.pass_context
def gas_oracle_command(ctx: click.Context) -> None:
    """Safe, proposed and fast gas prices."""
    _execute(ctx, lambda client: client.gas_tracker.get_gas_oracle())


@cli.command("tx-status")
@click.argument("txhash")
@click.pass_context
def tx_status_command(ctx: click.Context, txhash: str) -> None:
    """Execution and receipt status of a transaction."""

    async def action(client: EtherscanClient) -> dict[str, Any]:
        status, receipt = await asyncio.gather(
            client.transaction.get_status(txhash),
            client.transaction.get_receipt_status(txhash),
        )
        return {
            "txhash": txhash,
            "is_error": status.isError == "1",
            "error_description": status.errDescription or None,
            "receipt_status": receipt.status,
        }

    _execute(ctx, action)


@cli.command("chains")
@click.pass_context
def chains_command(ctx: click.Context) -> None:
    """Chains supported by the Etherscan V2 API."""
    _execute(ctx, lambda client: client.usage.get_chain_list())


# ── Config commands ───────────────────────────────────────────────────────────


@cli.group("config")
def config_group() -> None:
    """Manage etherscan-sdk configuration."""


@config_group.command("init")
@click.option("--force", is_flag=True, help="Overwrite existing config")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Initialize default config at ~/.etherscan_sdk/config.toml."""
    provided = ctx.obj.get("config_path")
    config_path = Path(provided).expanduser() if provided else get_default_config_path()

    if config_path.exists() and not force:
        click.echo(
            json.dumps(
                {
                    "status": "already_exists",
                    "config_path": str(config_path),
                    "hint": "Use --force to reinitialize",
                }
            )
        )
        return

    status = "initialized"
    backup = None

    if config_path.exists() and force:
        backup = str(config_path) + ".bak"
        shutil.copy2(config_path, backup)
        status = "reinitialized"

    save_config(ClientConfig(), str(config_path))

    result: dict[str, Any] = {
        "status": status,
        "config_path": str(config_path),
    }
    if backup:
        result["backup"] = backup
    click.echo(json.dumps(result))


@config_group.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show current configuration (API key masked)."""
    if ctx.obj.get("config_error") is not None:
        _output_error(ctx.obj["config_error"])
        return
    config: ClientConfig = ctx.obj["config"]
    provided = ctx.obj.get("config_path")
    config_path = Path(provided).expanduser() if provided else get_default_config_path()

    result = {
        "config_path": str(config_path),
        "api": {
            "api_key": mask_api_key(config.api.api_key),
            "chain_id": config.api.chain_id,
        },
        "transport": {
            "requests_per_second": config.transport.requests_per_second,
            "timeout": config.transport.timeout,
            "max_retries": config.transport.max_retries,
            "retry_delay": config.transport.retry_delay,
            "reservoir": config.transport.reservoir,
            "max_response_size": config.transport.max_response_size,
            "allowed_base_urls": list(config.transport.allowed_base_urls),
        },
        "cache": {
            "max_size": config.cache.max_size,
            "default_ttl": config.cache.default_ttl,
            "enabled": config.cache.enabled,
        },
        "output": {
            "default_format": config.output.default_format,
        },
    }
    click.echo(format_output(result, ctx.obj["format"]))
