"""
Custom exception hierarchy for etherscan_sdk.

Every error carries a numeric ``status`` (HTTP-like), a short machine-readable
``code`` and a human-readable ``message``. The CLI maps each family to an exit
code and prints ``to_dict()`` as JSON on stderr.

Exit code mapping:
  1 — EtherscanError (generic)
  2 — APIError (API logic error, invalid key, rate limit, plan upgrade)
  3 — NetworkError (timeout, connection failure)
  4 — SchemaValidationError / UnsupportedChainError (bad input or payload)
  5 — ConfigError (missing/malformed config)
  6 — transport contract violations (endpoint, content type, size, HTTP
      status, disposed client)
"""

from __future__ import annotations

import re
from typing import Any

_KEYWORD_RE = re.compile(r"apikey|key|token", re.IGNORECASE)
_HEX_NEAR_KEYWORD_RE = re.compile(r"[a-fA-F0-9]{32,64}")
_LONG_HEX_RE = re.compile(r"[a-fA-F0-9]{64,}")
_PATH_RE = re.compile(r"/[\w\-/.]+")
_IPV4_RE = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")

PRODUCTION_PLACEHOLDER = {"error": "API error occurred"}


def _production() -> bool:
    # config imports this module, so resolve lazily
    from etherscan_sdk.config import is_production

    return is_production()


def sanitize_message(message: str) -> str:
    """
    Redact secrets, filesystem paths and IPv4 addresses from remote text.

    Hex runs of 32-64 chars are redacted when the text talks about a key or
    token; otherwise only runs of 64+ chars are.
    """
    if _KEYWORD_RE.search(message):
        sanitized = _HEX_NEAR_KEYWORD_RE.sub("[REDACTED]", message)
    else:
        sanitized = _LONG_HEX_RE.sub("[REDACTED]", message)
    sanitized = _PATH_RE.sub("[PATH]", sanitized)
    sanitized = _IPV4_RE.sub("[IP]", sanitized)
    return sanitized


class EtherscanError(Exception):
    """Base exception for all etherscan_sdk errors."""

    exit_code: int = 1
    status: int = 500
    code: str = "UNKNOWN_ERROR"

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }


# ── Network ──────────────────────────────────────────────────────────────────


class NetworkError(EtherscanError):
    """Network connectivity issue: retries exhausted or not retryable."""

    exit_code = 3
    status = 0
    code = "NETWORK_ERROR"


class NetworkTimeoutError(NetworkError):
    """Every attempt timed out."""

    status = 408
    code = "TIMEOUT_ERROR"


# ── Transport contract ───────────────────────────────────────────────────────


class HTTPStatusError(EtherscanError):
    """Remote returned a non-2xx status code."""

    exit_code = 6
    code = "HTTP_ERROR"

    def __init__(self, status: int, reason: str = "") -> None:
        super().__init__(f"HTTP {status}: {reason}".rstrip(": "), status=status)


class InvalidContentTypeError(EtherscanError):
    """Response content type is not JSON or one of the allowed alternates."""

    exit_code = 6
    code = "INVALID_CONTENT_TYPE"


class ResponseTooLargeError(EtherscanError):
    """Response body exceeds the configured byte budget."""

    exit_code = 6
    status = 413
    code = "RESPONSE_TOO_LARGE"

    def __init__(self, message: str = "Response size exceeds maximum allowed", **kwargs) -> None:
        super().__init__(message, **kwargs)


class InvalidEndpointError(EtherscanError):
    """Base URL is not in the configured allowlist."""

    exit_code = 6
    status = 400
    code = "INVALID_ENDPOINT"


class InsecureProtocolError(InvalidEndpointError):
    """Base URL does not use https."""

    code = "INSECURE_PROTOCOL"


class ClientDisposedError(EtherscanError):
    """Operation attempted on a client after aclose()/dispose()."""

    exit_code = 6
    code = "CLIENT_DISPOSED"

    def __init__(self, message: str = "Client has been disposed", **kwargs) -> None:
        super().__init__(message, **kwargs)


# ── API envelope errors ──────────────────────────────────────────────────────


class APIError(EtherscanError):
    """
    Remote service reported a business-level failure (``status == "0"``).

    The message is sanitized before it is stored. The raw ``result`` payload
    is kept for debugging but only exposed outside production mode.
    """

    exit_code = 2
    status = 200
    code = "API_LOGIC_ERROR"

    prefix = "Etherscan API Error: "

    def __init__(self, message: str, result: Any = None, **kwargs) -> None:
        super().__init__(f"{self.prefix}{sanitize_message(message or '')}", **kwargs)
        self._raw_result = result

    @property
    def result(self) -> Any:
        if _production():
            return dict(PRODUCTION_PLACEHOLDER)
        return self._raw_result

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if not _production():
            payload["details"] = {**self.details, "result": self._raw_result}
        return payload


class InvalidAPIKeyError(APIError):
    """API key was rejected by the remote service."""

    status = 401
    code = "INVALID_API_KEY"


class RateLimitError(APIError):
    """Remote rate limit reached."""

    prefix = ""
    status = 429
    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str = "Etherscan Rate Limit Reached", result: Any = None) -> None:
        super().__init__(message, result)


class PlanUpgradeRequiredError(APIError):
    """Endpoint is not available on the caller's API plan."""

    prefix = "Plan upgrade required: "
    status = 402
    code = "PLAN_UPGRADE_REQUIRED"

    def __init__(self, message: str, result: Any = None) -> None:
        super().__init__(message, result)
        self.original_message = sanitize_message(message or "")


# ── Data errors ──────────────────────────────────────────────────────────────


class SchemaValidationError(EtherscanError):
    """Input parameters or a response payload failed validation."""

    exit_code = 4
    code = "SCHEMA_VALIDATION_ERROR"


class UnsupportedChainError(EtherscanError):
    """Method requires a capability the selected chain lacks."""

    exit_code = 4
    status = 400
    code = "UNSUPPORTED_CHAIN"

    def __init__(self, chain_id: int, feature: str, method: str | None = None) -> None:
        if method:
            message = (
                f"Method {method} is not supported on chain {chain_id} "
                f"(missing {feature} capability)"
            )
        else:
            message = f"Feature '{feature}' is not supported on Chain ID {chain_id}."
        super().__init__(
            message, details={"chain_id": chain_id, "capability": feature, "method": method}
        )
        self.chain_id = chain_id
        self.feature = feature
        self.method = method


# ── Config ───────────────────────────────────────────────────────────────────


class ConfigError(EtherscanError):
    """Config file is missing or malformed."""

    exit_code = 5
    code = "CONFIG_ERROR"


class ConfigMissingError(ConfigError):
    """A required setting (usually the API key) is not configured."""

    code = "CONFIG_MISSING"


class ConfigInvalidError(ConfigError):
    """Config file exists but contains invalid TOML or invalid values."""

    code = "CONFIG_INVALID"
