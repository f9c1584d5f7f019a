"""Constants and payload builders shared by the test modules."""

from __future__ import annotations

from typing import Any

API_KEY = "TESTKEY1234567890ABCDEFGHIJKLMNOP"
ADDR = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"
ADDR2 = "0x742d35cc6634c0532925a3b844bc454e4438f44e"
TX_HASH = "0x" + "ab" * 32

# fast limiter, no backoff: keeps the suite quick and deterministic
FAST = {"requests_per_second": 1000.0, "retry_delay": 0.0}


def ok(result: Any) -> dict[str, Any]:
    """Successful Etherscan envelope."""
    return {"status": "1", "message": "OK", "result": result}


def notok(result: Any, message: str = "NOTOK") -> dict[str, Any]:
    """Failed Etherscan envelope."""
    return {"status": "0", "message": message, "result": result}


def make_tx(**overrides: Any) -> dict[str, Any]:
    """Raw txlist row as returned by the remote API."""
    tx = {
        "blockNumber": "19000000",
        "timeStamp": "1700000000",
        "hash": TX_HASH,
        "nonce": "1",
        "blockHash": "0x" + "cd" * 32,
        "transactionIndex": "0",
        "from": ADDR,
        "to": ADDR2,
        "value": "1000000000000000000",
        "gas": "21000",
        "gasPrice": "20000000000",
        "isError": "0",
        "txreceipt_status": "1",
        "input": "0x",
        "contractAddress": "",
        "cumulativeGasUsed": "21000",
        "gasUsed": "21000",
        "confirmations": "100",
        "methodId": "0x",
        "functionName": "",
    }
    tx.update(overrides)
    return tx
