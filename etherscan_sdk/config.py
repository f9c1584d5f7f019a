"""
Config loading for etherscan_sdk.

Sources (in precedence order, highest first):
  1. Environment variables (ETHERSCAN_*)
  2. ~/.etherscan_sdk/config.toml
  3. Built-in defaults

Usage:
    from etherscan_sdk.config import load_config
    config = load_config()
    print(config.transport.requests_per_second)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import toml

from etherscan_sdk.exceptions import ConfigInvalidError

# Default config directory and file
DEFAULT_CONFIG_DIR = Path.home() / ".etherscan_sdk"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_ALLOWED_BASE_URLS = ("https://api.etherscan.io",)

# Environment variable → config key mapping
# Format: (env_var_name, dotted_config_path, type_converter)
_ENV_OVERRIDES: list[tuple[str, str, type]] = [
    ("ETHERSCAN_API_KEY", "api.api_key", str),
    ("ETHERSCAN_CHAIN_ID", "api.chain_id", int),
    ("ETHERSCAN_RATE_LIMIT", "transport.requests_per_second", float),
    ("ETHERSCAN_TIMEOUT", "transport.timeout", float),
    ("ETHERSCAN_MAX_RETRIES", "transport.max_retries", int),
    ("ETHERSCAN_RETRY_DELAY", "transport.retry_delay", float),
    ("ETHERSCAN_RESERVOIR", "transport.reservoir", int),
    ("ETHERSCAN_CACHE_TTL", "cache.default_ttl", float),
    ("ETHERSCAN_CACHE_MAX_SIZE", "cache.max_size", int),
    ("ETHERSCAN_OUTPUT_FORMAT", "output.default_format", str),
]

VALID_FORMATS = {"json", "table"}


def is_production() -> bool:
    """True when ETHERSCAN_ENV=production; hides raw remote payloads in errors."""
    return os.environ.get("ETHERSCAN_ENV", "").strip().lower() == "production"


@dataclass
class APIConfig:
    """Credential and routing configuration."""

    api_key: str = ""
    chain_id: int = 1


@dataclass
class TransportConfig:
    """Rate limiting, retry and response budget settings."""

    requests_per_second: float = 3.0
    timeout: float = 30.0                   # seconds per attempt
    max_retries: int = 3
    retry_delay: float = 1.0                # seconds; backoff = retry_delay * attempt
    reservoir: int = 100_000                # daily request quota
    reservoir_refresh_interval: float = 24 * 60 * 60.0
    max_response_size: int = 50 * 1024 * 1024
    allowed_base_urls: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_BASE_URLS))


@dataclass
class CacheConfig:
    """Validated-result cache settings."""

    max_size: int = 1000
    default_ttl: float = 300.0              # seconds
    enabled: bool = True


@dataclass
class OutputConfig:
    """CLI output formatting defaults."""

    default_format: str = "json"            # json | table


@dataclass
class ClientConfig:
    """Full configuration object. Passed to EtherscanClient and the CLI."""

    api: APIConfig = field(default_factory=APIConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(path: str | None = None) -> ClientConfig:
    """
    Load configuration from TOML file + environment variable overrides.

    Args:
        path: Override config file path. If None, uses ETHERSCAN_CONFIG_PATH
              env var or default (~/.etherscan_sdk/config.toml).

    Returns:
        ClientConfig with all values resolved. A missing file is not an
        error; defaults apply.

    Raises:
        ConfigInvalidError: Config file exists but is invalid TOML or values.
    """
    config_path = _resolve_config_path(path)

    raw: dict = {}
    if config_path.exists():
        try:
            raw = toml.load(str(config_path))
        except toml.TomlDecodeError as e:
            raise ConfigInvalidError(f"Invalid TOML in {config_path}: {e}") from e

    try:
        config = _dict_to_config(raw)
    except (ValueError, TypeError) as e:
        raise ConfigInvalidError(f"Invalid value in {config_path}: {e}") from e
    _apply_env_overrides(config)
    validate_config(config)

    return config


def save_config(config: ClientConfig, path: str | None = None) -> Path:
    """
    Serialize ClientConfig to TOML and write to disk.

    Returns the path where config was written.
    """
    config_path = _resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "api": {
            "api_key": config.api.api_key,
            "chain_id": config.api.chain_id,
        },
        "transport": {
            "requests_per_second": config.transport.requests_per_second,
            "timeout": config.transport.timeout,
            "max_retries": config.transport.max_retries,
            "retry_delay": config.transport.retry_delay,
            "reservoir": config.transport.reservoir,
            "reservoir_refresh_interval": config.transport.reservoir_refresh_interval,
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

    with open(config_path, "w") as f:
        toml.dump(data, f)

    return config_path


def get_default_config_path() -> Path:
    """Return the default config file path."""
    return DEFAULT_CONFIG_PATH


def validate_config(config: ClientConfig) -> None:
    """Validate config values. Raises ConfigInvalidError on invalid values."""
    t = config.transport
    if t.requests_per_second <= 0:
        raise ConfigInvalidError(
            f"transport.requests_per_second must be positive, got {t.requests_per_second}"
        )
    if t.timeout <= 0:
        raise ConfigInvalidError(f"transport.timeout must be positive, got {t.timeout}")
    if t.max_retries < 0:
        raise ConfigInvalidError(f"transport.max_retries must be >= 0, got {t.max_retries}")
    if t.retry_delay < 0:
        raise ConfigInvalidError(f"transport.retry_delay must be >= 0, got {t.retry_delay}")
    if t.reservoir < 1:
        raise ConfigInvalidError(f"transport.reservoir must be >= 1, got {t.reservoir}")
    if t.reservoir_refresh_interval <= 0:
        raise ConfigInvalidError(
            "transport.reservoir_refresh_interval must be positive, "
            f"got {t.reservoir_refresh_interval}"
        )
    if t.max_response_size < 1:
        raise ConfigInvalidError(
            f"transport.max_response_size must be >= 1, got {t.max_response_size}"
        )
    if config.cache.max_size < 1:
        raise ConfigInvalidError(f"cache.max_size must be >= 1, got {config.cache.max_size}")
    if config.cache.default_ttl < 0:
        raise ConfigInvalidError(
            f"cache.default_ttl must be non-negative, got {config.cache.default_ttl}"
        )
    if config.output.default_format not in VALID_FORMATS:
        raise ConfigInvalidError(
            f"output.default_format must be one of {VALID_FORMATS}, "
            f"got {config.output.default_format!r}"
        )


# ──────────────────────────────────────────────────────────────
# Private helpers
# ──────────────────────────────────────────────────────────────


def _resolve_config_path(path: str | None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get("ETHERSCAN_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _dict_to_config(raw: dict) -> ClientConfig:
    """Build ClientConfig from raw TOML dict, applying defaults for missing keys."""
    config = ClientConfig()
    defaults = TransportConfig()

    api = raw.get("api", {})
    config.api.api_key = api.get("api_key", "")
    config.api.chain_id = int(api.get("chain_id", 1))

    transport = raw.get("transport", {})
    config.transport.requests_per_second = float(
        transport.get("requests_per_second", defaults.requests_per_second)
    )
    config.transport.timeout = float(transport.get("timeout", defaults.timeout))
    config.transport.max_retries = int(transport.get("max_retries", defaults.max_retries))
    config.transport.retry_delay = float(transport.get("retry_delay", defaults.retry_delay))
    config.transport.reservoir = int(transport.get("reservoir", defaults.reservoir))
    config.transport.reservoir_refresh_interval = float(
        transport.get("reservoir_refresh_interval", defaults.reservoir_refresh_interval)
    )
    config.transport.max_response_size = int(
        transport.get("max_response_size", defaults.max_response_size)
    )
    config.transport.allowed_base_urls = list(
        transport.get("allowed_base_urls", defaults.allowed_base_urls)
    )

    cache = raw.get("cache", {})
    config.cache.max_size = int(cache.get("max_size", 1000))
    config.cache.default_ttl = float(cache.get("default_ttl", 300.0))
    config.cache.enabled = bool(cache.get("enabled", True))

    output = raw.get("output", {})
    config.output.default_format = output.get("default_format", "json")

    return config


def _apply_env_overrides(config: ClientConfig) -> None:
    """Apply environment variable overrides to a loaded config."""
    # ETHERSCAN_CACHE_ENABLED is a bool from string
    cache_enabled = os.environ.get("ETHERSCAN_CACHE_ENABLED")
    if cache_enabled is not None:
        config.cache.enabled = cache_enabled.lower() in ("1", "true", "yes")

    for env_var, dotted_key, converter in _ENV_OVERRIDES:
        val = os.environ.get(env_var)
        if val is None:
            continue
        section, key = dotted_key.split(".", 1)
        section_obj = getattr(config, section)
        try:
            setattr(section_obj, key, converter(val))
        except (ValueError, TypeError) as e:
            raise ConfigInvalidError(
                f"Invalid value for {env_var}: {e}"
            ) from e
