"""Tests for etherscan_sdk/config.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from etherscan_sdk.config import (
    ClientConfig,
    get_default_config_path,
    is_production,
    load_config,
    save_config,
)
from etherscan_sdk.exceptions import ConfigInvalidError

# ── load_config ───────────────────────────────────────────────────────────────


def test_load_config_returns_defaults_when_no_file(tmp_path: Path) -> None:
    """load_config should return defaults when config file doesn't exist."""
    config = load_config(str(tmp_path / "nonexistent.toml"))
    assert isinstance(config, ClientConfig)
    assert config.api.api_key == ""
    assert config.api.chain_id == 1
    assert config.transport.requests_per_second == 3.0
    assert config.transport.max_retries == 3
    assert config.transport.allowed_base_urls == ["https://api.etherscan.io"]
    assert config.cache.max_size == 1000
    assert config.output.default_format == "json"


def test_load_config_uses_env_path_when_none_given(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "from_env.toml"
    config_file.write_text("[api]\nchain_id = 8453\n")
    monkeypatch.setenv("ETHERSCAN_CONFIG_PATH", str(config_file))
    assert load_config().api.chain_id == 8453


def test_load_config_from_valid_toml(tmp_path: Path) -> None:
    """load_config should correctly parse a valid TOML config."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
[api]
api_key = "my_key_123"
chain_id = 137

[transport]
requests_per_second = 5
max_retries = 1
allowed_base_urls = ["https://api.etherscan.io", "https://mirror.example.org"]

[cache]
default_ttl = 60
enabled = false

[output]
default_format = "table"
""")
    config = load_config(str(config_file))
    assert config.api.api_key == "my_key_123"
    assert config.api.chain_id == 137
    assert config.transport.requests_per_second == 5.0
    assert config.transport.max_retries == 1
    assert config.transport.allowed_base_urls[1] == "https://mirror.example.org"
    assert config.cache.default_ttl == 60.0
    assert config.cache.enabled is False
    assert config.output.default_format == "table"


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    """load_config should raise ConfigInvalidError on bad TOML syntax."""
    config_file = tmp_path / "config.toml"
    config_file.write_text("this is not valid toml = [broken")
    with pytest.raises(ConfigInvalidError):
        load_config(str(config_file))


@pytest.mark.parametrize(
    "body",
    [
        "[transport]\nrequests_per_second = 0\n",
        "[transport]\nmax_retries = -1\n",
        "[transport]\ntimeout = -5\n",
        "[transport]\nreservoir = 0\n",
        "[cache]\nmax_size = 0\n",
        '[output]\ndefault_format = "xml"\n',
        '[api]\nchain_id = "mainnet"\n',
    ],
)
def test_load_config_invalid_values(tmp_path: Path, body: str) -> None:
    """Out-of-range or mistyped values raise ConfigInvalidError."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(body)
    with pytest.raises(ConfigInvalidError):
        load_config(str(config_file))


# ── Environment variable overrides ───────────────────────────────────────────


def test_env_override_api_key(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """ETHERSCAN_API_KEY env var overrides config file value."""
    config_file = tmp_path / "config.toml"
    config_file.write_text('[api]\napi_key = "file_key"')

    monkeypatch.setenv("ETHERSCAN_API_KEY", "env_key_xyz")
    assert load_config(str(config_file)).api.api_key == "env_key_xyz"


def test_env_override_transport_and_cache(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ETHERSCAN_RATE_LIMIT", "10")
    monkeypatch.setenv("ETHERSCAN_MAX_RETRIES", "0")
    monkeypatch.setenv("ETHERSCAN_CACHE_TTL", "15.5")
    monkeypatch.setenv("ETHERSCAN_CACHE_ENABLED", "false")
    config = load_config(str(tmp_path / "none.toml"))
    assert config.transport.requests_per_second == 10.0
    assert config.transport.max_retries == 0
    assert config.cache.default_ttl == 15.5
    assert config.cache.enabled is False


def test_env_override_invalid_type(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Invalid env var type should raise ConfigInvalidError."""
    monkeypatch.setenv("ETHERSCAN_CHAIN_ID", "not_a_number")
    with pytest.raises(ConfigInvalidError, match="ETHERSCAN_CHAIN_ID"):
        load_config(str(tmp_path / "none.toml"))


def test_env_override_validated(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ETHERSCAN_OUTPUT_FORMAT", "yaml")
    with pytest.raises(ConfigInvalidError):
        load_config(str(tmp_path / "none.toml"))


# ── save_config ───────────────────────────────────────────────────────────────


def test_save_then_load(tmp_path: Path) -> None:
    """A saved config loads back with the same values."""
    config = ClientConfig()
    config.api.api_key = "saved_key"
    config.api.chain_id = 42161
    config.cache.max_size = 50

    path = save_config(config, str(tmp_path / "nested" / "config.toml"))
    assert path.exists()

    loaded = load_config(str(path))
    assert loaded.api.api_key == "saved_key"
    assert loaded.api.chain_id == 42161
    assert loaded.cache.max_size == 50


def test_default_config_path() -> None:
    path = get_default_config_path()
    assert path.name == "config.toml"
    assert path.parent.name == ".etherscan_sdk"


def test_is_production(monkeypatch: pytest.MonkeyPatch) -> None:
    assert not is_production()
    monkeypatch.setenv("ETHERSCAN_ENV", "Production")
    assert is_production()
