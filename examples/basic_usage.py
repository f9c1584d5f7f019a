"""Basic etherscan_sdk example.

Fetches a balance, the latest transactions and the gas oracle for an address.
Requires ETHERSCAN_API_KEY in the environment.
"""

import asyncio
import sys

from etherscan_sdk import EtherscanClient, EtherscanError, EvmChainId

WHALE = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"


async def main():
    """Print a short account summary on Ethereum mainnet."""
    async with EtherscanClient(chain=EvmChainId.MAINNET) as client:
        wei = await client.account.get_balance(WHALE)
        print(f"Balance: {wei / 10**18:,.4f} ETH ({wei} wei)")

        txs = await client.account.get_tx_list(WHALE, page=1, offset=5, sort="desc")
        print(f"\nLatest {len(txs)} transactions:")
        for tx in txs:
            print(f"  • {tx.hash[:12]}...  block {tx.blockNumber}  {tx.value} wei")

        oracle = await client.gas_tracker.get_gas_oracle()
        print(f"\nGas (gwei): safe {oracle.SafeGasPrice} / "
              f"propose {oracle.ProposeGasPrice} / fast {oracle.FastGasPrice}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except EtherscanError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        sys.exit(e.exit_code)
