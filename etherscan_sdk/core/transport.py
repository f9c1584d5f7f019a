"""
Request transport for the Etherscan V2 API.

Every namespace method funnels through ``Transport.request``:

    endpoint check → request interceptors → signature → cache
      → dedup → rate limiter → HTTP (with retry) → transport checks
      → envelope → schema → cache store → response interceptors

Design decisions:
- The raw HTTP call is the only thing retried. Once a typed error has been
  raised (bad status, envelope failure, validation) it propagates as-is.
- Concurrent identical requests share one network call; only validated
  values are cached, so a failure is never replayed from the cache.
- The API key is held as a ``SecretStr`` that cannot be rebound, and enters
  cache keys only as its SHA-256 digest.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable
from urllib.parse import urlencode

import httpx
from pydantic import SecretStr
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from etherscan_sdk.core.cache import LRUCache
from etherscan_sdk.core.dedup import RequestDeduplicator
from etherscan_sdk.core.interceptors import InterceptorChain
from etherscan_sdk.core.ratelimit import (
    DEFAULT_RESERVOIR,
    DEFAULT_RESERVOIR_REFRESH_INTERVAL,
    RateLimiter,
    RateLimiterRegistry,
    default_registry,
    hash_api_key,
)
from etherscan_sdk.exceptions import (
    APIError,
    ClientDisposedError,
    EtherscanError,
    HTTPStatusError,
    InsecureProtocolError,
    InvalidAPIKeyError,
    InvalidContentTypeError,
    InvalidEndpointError,
    NetworkError,
    NetworkTimeoutError,
    PlanUpgradeRequiredError,
    RateLimitError,
    ResponseTooLargeError,
    SchemaValidationError,
    sanitize_message,
)
from etherscan_sdk.schemas import Envelope, accepts_empty_list, get_adapter, validate

logger = logging.getLogger(__name__)

V2_ENDPOINT = "https://api.etherscan.io/v2/api"
CHAINLIST_URL = "https://api.etherscan.io/v2/chainlist"

DEFAULT_ALLOWED_BASE_URLS = ("https://api.etherscan.io",)
DEFAULT_MAX_RESPONSE_SIZE = 50 * 1024 * 1024

# status "0" messages that mean "empty result", not failure
EMPTY_RESULT_MESSAGES = frozenset({"No transactions found", "No records found", "No data found"})

_RATE_LIMIT_RE = re.compile(r"rate limit", re.IGNORECASE)
_PLAN_UPGRADE_RE = re.compile(r"upgrade.*plan|free.*not supported", re.IGNORECASE)
_INVALID_KEY_RE = re.compile(r"invalid api[ -]?key|missing.*api[ -]?key", re.IGNORECASE)

_TRANSIENT_TYPES = (
    httpx.TimeoutException,
    httpx.ConnectError,
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
)

# fallback for transports that surface OS errors as plain text
_TRANSIENT_MARKERS = (
    "econnreset",
    "etimedout",
    "enotfound",
    "econnrefused",
    "eai_again",
    "connection reset",
    "connection refused",
    "timed out",
    "name or service not known",
    "temporary failure in name resolution",
)

_MISSING = object()


def is_transient(exc: BaseException) -> bool:
    """True for network failures worth another attempt."""
    if isinstance(exc, EtherscanError):
        return False
    if isinstance(exc, _TRANSIENT_TYPES):
        return True
    text = str(exc).lower()
    return any(marker in text for marker in _TRANSIENT_MARKERS)


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TimeoutException):
        return True
    text = str(exc).lower()
    return "etimedout" in text or "timed out" in text


def _serialize(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _origin(url: str) -> tuple[str, str, int | None]:
    parsed = httpx.URL(url)
    return parsed.scheme, parsed.host, parsed.port


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Transient network error (%s), retrying in %.2fs (attempt %d)",
        type(exc).__name__,
        retry_state.next_action.sleep if retry_state.next_action else 0.0,
        retry_state.attempt_number,
    )


class Transport:
    """
    Shared request pipeline for one API key and one chain.

    Owns its cache, deduplicator and interceptor chain. The rate limiter is
    borrowed from ``registry`` and released exactly once by ``aclose()``.
    """

    def __init__(
        self,
        chain_id: int,
        api_key: str,
        *,
        requests_per_second: float = 3.0,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        allowed_base_urls: Iterable[str] = DEFAULT_ALLOWED_BASE_URLS,
        reservoir: int = DEFAULT_RESERVOIR,
        reservoir_refresh_interval: float = DEFAULT_RESERVOIR_REFRESH_INTERVAL,
        max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE,
        registry: RateLimiterRegistry | None = None,
        cache: LRUCache | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.__api_key = SecretStr(api_key)
        self._key_hash = hash_api_key(api_key)
        self.chain_id = int(chain_id)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.max_response_size = max_response_size
        self.allowed_base_urls = tuple(allowed_base_urls)
        self._allowed_origins = {_origin(u) for u in self.allowed_base_urls}

        self.cache = cache if cache is not None else LRUCache()
        self.dedup = RequestDeduplicator()
        self.interceptors = InterceptorChain()

        self._registry = registry if registry is not None else default_registry
        self._limiter = self._registry.acquire(
            api_key,
            requests_per_second,
            reservoir=reservoir,
            reservoir_refresh_interval=reservoir_refresh_interval,
        )

        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._closed = False

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "_Transport__api_key" and name in self.__dict__:
            raise AttributeError("API key cannot be reassigned")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return (
            f"Transport(chain_id={self.chain_id}, key_hash={self._key_hash[:8]}…, "
            f"closed={self._closed})"
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def limiter(self) -> RateLimiter:
        return self._limiter

    async def get(self, params: dict[str, Any], schema: Any, **opts: Any) -> Any:
        """Shorthand for ``request(V2_ENDPOINT, ...)``."""
        return await self.request(V2_ENDPOINT, params, schema, **opts)

    async def request(
        self,
        base_url: str,
        params: dict[str, Any],
        schema: Any,
        *,
        allowed_content_types: Iterable[str] = (),
        response_type: str = "json",
    ) -> Any:
        """
        Fetch ``base_url`` with ``params`` and return the validated result.

        Raises:
            ClientDisposedError: Transport was closed.
            InvalidEndpointError / InsecureProtocolError: base_url rejected.
            NetworkError / NetworkTimeoutError: Retries exhausted.
            HTTPStatusError, InvalidContentTypeError, ResponseTooLargeError:
                Response violated the transport contract.
            APIError (and subclasses): Envelope reported a failure.
            SchemaValidationError: Payload did not match ``schema``.
        """
        self._ensure_open()
        self._check_endpoint(base_url)

        params = self.interceptors.apply_request(params)
        canonical = base_url == V2_ENDPOINT
        key = self.signature(base_url, params)

        cached = self.cache.get(key, _MISSING)
        if cached is not _MISSING:
            logger.debug("Cache hit %s", key)
            return self.interceptors.apply_response(cached)
        logger.debug("Cache miss %s", key)

        content_types = tuple(allowed_content_types)

        async def load() -> Any:
            text, content_type = await self._limiter.schedule(
                self._fetch, base_url, self._query(params, canonical), content_types
            )
            value = self._decode(text, content_type, schema, canonical, response_type)
            # a request that outlives aclose() must not repopulate the cache
            if not self._closed:
                self.cache.set(key, value)
            return value

        value = await self.dedup.run(key, load)
        return self.interceptors.apply_response(value)

    def signature(self, base_url: str, params: dict[str, Any]) -> str:
        """Stable cache/dedup key. Carries the key digest, never the key."""
        items = [(k, _serialize(v)) for k, v in params.items() if v is not None]
        if base_url == V2_ENDPOINT:
            items += [("chainid", str(self.chain_id)), ("apikey", self._key_hash)]
        return f"{base_url}?{urlencode(sorted(items))}"

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._registry.release(self.__api_key.get_secret_value())
        self.cache.clear()
        self.dedup.clear()
        if self._owns_http:
            await self._http.aclose()

    # ──────────────────────────────────────────────────────────────
    # Private helpers
    # ──────────────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientDisposedError()

    def _check_endpoint(self, base_url: str) -> None:
        try:
            scheme, host, port = _origin(base_url)
        except httpx.InvalidURL as e:
            raise InvalidEndpointError(f"Invalid base URL: {base_url}") from e
        if scheme != "https":
            raise InsecureProtocolError(f"Base URL must use https: {base_url}")
        if (scheme, host, port) not in self._allowed_origins:
            raise InvalidEndpointError(f"Base URL not in allowlist: {base_url}")

    def _query(self, params: dict[str, Any], canonical: bool) -> list[tuple[str, str]]:
        query: list[tuple[str, str]] = []
        if canonical:
            query.append(("chainid", str(self.chain_id)))
            query.append(("apikey", self.__api_key.get_secret_value()))
        query.extend((k, _serialize(v)) for k, v in params.items() if v is not None)
        return query

    async def _fetch(
        self,
        base_url: str,
        query: list[tuple[str, str]],
        allowed_content_types: tuple[str, ...],
    ) -> tuple[str, str]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_incrementing(start=self.retry_delay, increment=self.retry_delay),
            retry=retry_if_exception(is_transient),
            before_sleep=_log_retry,
            reraise=True,
        )
        attempts = 0
        try:
            async for attempt in retrying:
                with attempt:
                    attempts += 1
                    return await self._send(base_url, query, allowed_content_types)
        except EtherscanError:
            raise
        except Exception as e:
            detail = sanitize_message(str(e) or type(e).__name__)
            if not is_transient(e):
                raise NetworkError(f"Network request failed: {detail}") from e
            if _is_timeout(e):
                raise NetworkTimeoutError(
                    f"Request timed out after {attempts} attempt(s): {detail}"
                ) from e
            raise NetworkError(f"Network request failed after {attempts} attempt(s): {detail}") from e
        raise NetworkError("Network request failed")  # pragma: no cover

    async def _send(
        self,
        base_url: str,
        query: list[tuple[str, str]],
        allowed_content_types: tuple[str, ...],
    ) -> tuple[str, str]:
        async with self._http.stream("GET", base_url, params=query) as response:
            if not 200 <= response.status_code < 300:
                raise HTTPStatusError(response.status_code, response.reason_phrase)

            content_type = response.headers.get("content-type", "").lower()
            accepted = ("application/json",) + tuple(t.lower() for t in allowed_content_types)
            if not any(t in content_type for t in accepted):
                raise InvalidContentTypeError(
                    f"Unexpected content type: {content_type or '<missing>'}"
                )

            length = response.headers.get("content-length")
            if length and length.isdigit() and int(length) > self.max_response_size:
                raise ResponseTooLargeError(
                    f"Response size {length} exceeds maximum of {self.max_response_size} bytes"
                )

            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > self.max_response_size:
                    raise ResponseTooLargeError(
                        f"Response body exceeds maximum of {self.max_response_size} bytes"
                    )
                chunks.append(chunk)

            charset = response.charset_encoding or "utf-8"
        try:
            text = b"".join(chunks).decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            raise SchemaValidationError(f"Response body is not valid {charset}") from e
        return text, content_type

    def _decode(
        self,
        text: str,
        content_type: str,
        schema: Any,
        canonical: bool,
        response_type: str,
    ) -> Any:
        if response_type == "text" and "application/json" not in content_type:
            return validate(schema, text)

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaValidationError(f"Invalid JSON response: {e.msg}") from e

        if not canonical:
            return validate(schema, payload)
        return self._unwrap(payload, schema)

    def _unwrap(self, payload: Any, schema: Any) -> Any:
        if not isinstance(payload, dict):
            raise SchemaValidationError(
                f"Failed to parse Etherscan response: expected a JSON object, "
                f"got {type(payload).__name__}"
            )
        envelope = validate(Envelope, payload, "envelope")

        if envelope.failed:
            self._raise_for_envelope(envelope)
            if accepts_empty_list(get_adapter(schema)):
                return []
            return None

        if envelope.status is None and envelope.error is not None:
            error = envelope.error
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise APIError(message or "JSON-RPC error", error)

        return validate(schema, envelope.result)

    @staticmethod
    def _raise_for_envelope(envelope: Envelope) -> None:
        """Raise the typed error for a failed envelope; return for empty results."""
        message = envelope.message or ""
        result = envelope.result
        result_text = result if isinstance(result, str) else ""

        if message in EMPTY_RESULT_MESSAGES:
            return

        combined = f"{message} {result_text}"
        if _RATE_LIMIT_RE.search(combined):
            raise RateLimitError(result=result)
        if _PLAN_UPGRADE_RE.search(combined):
            raise PlanUpgradeRequiredError(result_text or message, result)
        if _INVALID_KEY_RE.search(combined):
            raise InvalidAPIKeyError(result_text or message, result)
        raise APIError(result_text or message or "Unknown error", result)
