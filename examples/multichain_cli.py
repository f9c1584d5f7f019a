"""Multi-chain balance check through the etherscan-sdk CLI.

Shows how scripts and agents consume the JSON output and exit codes.
"""

import json
import subprocess

ADDRESS = "0x742d35cc6634c0532925a3b844bc454e4438f44e"
CHAINS = {"Ethereum": 1, "Base": 8453, "Arbitrum": 42161}


def main():
    """Query the same address on several chains."""
    for name, chain_id in CHAINS.items():
        result = subprocess.run(
            ["etherscan-sdk", "--chain", str(chain_id), "balance", ADDRESS],
            capture_output=True,
            text=True,
        )

        if result.returncode != 0:
            error = json.loads(result.stderr)
            print(f"{name}: {error['error']} (exit {result.returncode})")
            continue

        rows = json.loads(result.stdout)
        print(f"{name}: {int(rows[0]['balance']) / 10**18:,.6f}")


if __name__ == "__main__":
    main()
