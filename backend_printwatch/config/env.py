"""
Environment variable loading for PrintWatch.

- SOLANA_RPC_URL: RPC endpoint (read from .env)
- TOKEN_MINT_ADDRESS / TOKEN_PROGRAM_ID: token whose holdings are reported
- TRANSFER_SOURCE_ADDRESS: distributor address for daily transfer totals
- WALLET_CONNECTION_MODE / LOGGING_ENABLED: 0/1 flags
- Loads .env from project root when available.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_printwatch/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
TOKEN_PROGRAM_ID_STR = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
# PRINT distributor; source of the transfers summed by /get-daily-transfer-totals
DEFAULT_TRANSFER_SOURCE = "DiSTRMum3xVhZkLE2LEF49Db7aVmcaViLQKs52XRT1s"
DEFAULT_ACCESS_LOG_PATH = "logs/wallet_access.csv"
DEFAULT_API_PORT = 3000


def load_printwatch_env() -> None:
    """Load .env from project root without overriding the real environment."""
    load_dotenv(_ENV_PATH, override=False)


def env_flag(raw: str | None) -> bool:
    """Only the literal '1' enables a flag."""
    return (raw or "").strip() == "1"


def mask_rpc_url(url: str) -> str:
    """Hide api keys embedded in provider URLs before logging."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    if "api_key=" in url:
        return url.split("api_key=")[0] + "api_key=***"
    return url
