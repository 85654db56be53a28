"""
Settings.from_env: defaults, flags and validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from backend_printwatch.config import Settings
from backend_printwatch.config.env import DEFAULT_TRANSFER_SOURCE, mask_rpc_url
from backend_printwatch.core.exceptions import ConfigurationError

MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SOURCE = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"


def test_defaults():
    s = Settings.from_env({"TOKEN_MINT_ADDRESS": MINT, "TRANSFER_SOURCE_ADDRESS": SOURCE})
    assert s.rpc_url == "https://api.mainnet-beta.solana.com"
    assert str(s.token_mint) == MINT
    assert str(s.token_program) == "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
    assert str(s.transfer_source) == SOURCE
    assert s.wallet_connection_mode == 0
    assert s.logging_enabled is False
    assert s.access_log_path == Path("logs/wallet_access.csv")
    assert s.rpc_commitment == "confirmed"
    assert s.signatures_limit == 1000
    assert s.api_port == 3000


def test_flags_only_enabled_by_one():
    base = {"TOKEN_MINT_ADDRESS": MINT, "TRANSFER_SOURCE_ADDRESS": SOURCE}
    on = Settings.from_env({**base, "WALLET_CONNECTION_MODE": "1", "LOGGING_ENABLED": "1"})
    assert on.wallet_connection_mode == 1
    assert on.logging_enabled is True
    off = Settings.from_env({**base, "WALLET_CONNECTION_MODE": "true", "LOGGING_ENABLED": "yes"})
    assert off.wallet_connection_mode == 0
    assert off.logging_enabled is False


def test_overrides():
    s = Settings.from_env({
        "TOKEN_MINT_ADDRESS": MINT,
        "TRANSFER_SOURCE_ADDRESS": SOURCE,
        "SOLANA_RPC_URL": " https://rpc.example/?api-key=secret ",
        "ACCESS_LOG_PATH": "/tmp/access.csv",
        "SIGNATURES_LIMIT": "25",
        "RPC_TIMEOUT_SEC": "2.5",
        "API_PORT": "8080",
    })
    assert s.rpc_url == "https://rpc.example/?api-key=secret"
    assert s.access_log_path == Path("/tmp/access.csv")
    assert s.signatures_limit == 25
    assert s.rpc_timeout_sec == 2.5
    assert s.api_port == 8080
    assert mask_rpc_url(s.rpc_url) == "https://rpc.example/?api-key=***"


def test_missing_mint_raises():
    with pytest.raises(ConfigurationError, match="TOKEN_MINT_ADDRESS"):
        Settings.from_env({"TRANSFER_SOURCE_ADDRESS": SOURCE})


def test_invalid_addresses_raise():
    with pytest.raises(ConfigurationError, match="TOKEN_MINT_ADDRESS"):
        Settings.from_env({"TOKEN_MINT_ADDRESS": "nope", "TRANSFER_SOURCE_ADDRESS": SOURCE})
    with pytest.raises(ConfigurationError, match="TOKEN_PROGRAM_ID"):
        Settings.from_env({
            "TOKEN_MINT_ADDRESS": MINT,
            "TRANSFER_SOURCE_ADDRESS": SOURCE,
            "TOKEN_PROGRAM_ID": "bad!",
        })


@pytest.mark.parametrize("limit", ["0", "1001", "many"])
def test_signatures_limit_bounds(limit):
    with pytest.raises(ConfigurationError, match="SIGNATURES_LIMIT"):
        Settings.from_env({
            "TOKEN_MINT_ADDRESS": MINT,
            "TRANSFER_SOURCE_ADDRESS": SOURCE,
            "SIGNATURES_LIMIT": limit,
        })


def test_default_source_constant():
    assert DEFAULT_TRANSFER_SOURCE == "DiSTRMum3xVhZkLE2LEF49Db7aVmcaViLQKs52XRT1s"


def test_log_format_and_level_from_env():
    base = {"TOKEN_MINT_ADDRESS": MINT, "TRANSFER_SOURCE_ADDRESS": SOURCE}
    s = Settings.from_env(base)
    assert (s.log_format, s.log_level) == ("json", "INFO")
    s = Settings.from_env({**base, "LOG_FORMAT": " CONSOLE ", "LOG_LEVEL": "warn"})
    assert s.log_format == "console"
    assert s.log_level == "WARNING"


@pytest.mark.parametrize("level", ["loud", "NOTSET", "15"])
def test_log_level_must_be_named_level(level):
    with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
        Settings.from_env({
            "TOKEN_MINT_ADDRESS": MINT,
            "TRANSFER_SOURCE_ADDRESS": SOURCE,
            "LOG_LEVEL": level,
        })
