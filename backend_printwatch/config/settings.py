"""
Application settings.

Settings is read once at startup and passed by reference into the services
and the FastAPI app factory. Nothing in the package reads configuration from
module globals after that.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from solders.pubkey import Pubkey

from backend_printwatch.config.env import (
    DEFAULT_ACCESS_LOG_PATH,
    DEFAULT_API_PORT,
    DEFAULT_TRANSFER_SOURCE,
    MAINNET_RPC_URL,
    TOKEN_PROGRAM_ID_STR,
    env_flag,
    load_printwatch_env,
)
from backend_printwatch.core.exceptions import ConfigurationError
from backend_printwatch.printwatch_logging.logger import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    level_value,
)

MAX_SIGNATURES_LIMIT = 1000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _required(environ: Mapping[str, str], key: str) -> str:
    value = (environ.get(key) or "").strip()
    if not value:
        raise ConfigurationError(f"{key} must be set")
    return value


def _pubkey(key: str, raw: str) -> Pubkey:
    try:
        return Pubkey.from_string(raw)
    except Exception as e:
        raise ConfigurationError(f"{key} is not a valid Solana address: {raw!r}") from e


def _number(environ: Mapping[str, str], key: str, default: str, cast: type) -> float | int:
    raw = (environ.get(key) or "").strip() or default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    """Typed service configuration."""

    rpc_url: str
    token_mint: Pubkey
    token_program: Pubkey
    transfer_source: Pubkey
    wallet_connection_mode: int = 0
    logging_enabled: bool = False
    access_log_path: Path = Path(DEFAULT_ACCESS_LOG_PATH)
    rpc_commitment: str = "confirmed"
    rpc_timeout_sec: float = 30.0
    signatures_limit: int = MAX_SIGNATURES_LIMIT
    api_host: str = "0.0.0.0"
    api_port: int = DEFAULT_API_PORT
    log_format: str = DEFAULT_LOG_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from a mapping (defaults to os.environ after loading .env).

        Raises:
            ConfigurationError: a required value is missing or malformed.
        """
        if environ is None:
            load_printwatch_env()
            environ = os.environ

        signatures_limit = int(_number(environ, "SIGNATURES_LIMIT", str(MAX_SIGNATURES_LIMIT), int))
        if not (1 <= signatures_limit <= MAX_SIGNATURES_LIMIT):
            raise ConfigurationError(
                f"SIGNATURES_LIMIT must be between 1 and {MAX_SIGNATURES_LIMIT}"
            )
        timeout = float(_number(environ, "RPC_TIMEOUT_SEC", "30", float))
        if timeout <= 0:
            raise ConfigurationError("RPC_TIMEOUT_SEC must be positive")
        raw_level = (environ.get("LOG_LEVEL") or "").strip() or DEFAULT_LOG_LEVEL
        value = level_value(raw_level)
        # canonical name (WARN -> WARNING) so uvicorn accepts it too
        log_level = logging.getLevelName(value) if value is not None else None
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL is not a logging level: {raw_level!r}")

        return cls(
            rpc_url=(environ.get("SOLANA_RPC_URL") or "").strip() or MAINNET_RPC_URL,
            token_mint=_pubkey("TOKEN_MINT_ADDRESS", _required(environ, "TOKEN_MINT_ADDRESS")),
            token_program=_pubkey(
                "TOKEN_PROGRAM_ID",
                (environ.get("TOKEN_PROGRAM_ID") or "").strip() or TOKEN_PROGRAM_ID_STR,
            ),
            transfer_source=_pubkey(
                "TRANSFER_SOURCE_ADDRESS",
                (environ.get("TRANSFER_SOURCE_ADDRESS") or "").strip() or DEFAULT_TRANSFER_SOURCE,
            ),
            wallet_connection_mode=1 if env_flag(environ.get("WALLET_CONNECTION_MODE")) else 0,
            logging_enabled=env_flag(environ.get("LOGGING_ENABLED")),
            access_log_path=Path(
                (environ.get("ACCESS_LOG_PATH") or "").strip() or DEFAULT_ACCESS_LOG_PATH
            ),
            rpc_commitment=(environ.get("RPC_COMMITMENT") or "").strip() or "confirmed",
            rpc_timeout_sec=timeout,
            signatures_limit=signatures_limit,
            api_host=(environ.get("API_HOST") or "").strip() or "0.0.0.0",
            api_port=int(_number(environ, "API_PORT", str(DEFAULT_API_PORT), int)),
            log_format=(environ.get("LOG_FORMAT") or "").strip().lower() or DEFAULT_LOG_FORMAT,
            log_level=log_level,
        )


def get_settings() -> Settings:
    """Load settings from the process environment (and .env)."""
    return Settings.from_env()
