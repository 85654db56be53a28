"""
FastAPI server — read-only wallet lookups over Solana RPC.

Endpoints:
  GET /                           index page (Jinja2), wallet connection mode flag
  GET /get-wallet-info            configured token holdings + derived ATA
  GET /get-daily-transfer-totals  per-day SOL received from the distributor (7 days)
  GET /health                     liveness probe
Static files from public/ are served at the root.

Every failure on the data endpoints returns 500 with {error, details}.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from backend_printwatch.analytics.daily_transfers import DailyTransferService
from backend_printwatch.analytics.holdings import HoldingsService
from backend_printwatch.api_server.access_log import AccessLogger
from backend_printwatch.config import Settings
from backend_printwatch.printwatch_logging import get_logger, short_wallet
from backend_printwatch.solana_listener.rpc_client import SolanaRpcClient
from backend_printwatch.utils.wallet_utils import parse_pubkey

logger = get_logger(__name__)

_API_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = _API_DIR / "templates"
PUBLIC_DIR = _API_DIR / "public"

WALLET_INFO_ERROR = "Error fetching wallet info"
DAILY_TOTALS_ERROR = "Error fetching daily transfer totals"


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------

class SignificantToken(BaseModel):
    mint: str
    amount: float
    decimals: int
    tokenAccountAddress: str


class WalletInfoResponse(BaseModel):
    """GET /get-wallet-info response."""

    walletAddress: str = Field(..., description="Queried wallet (base58)")
    derivedATA: str = Field(..., description="Associated token account for the configured mint")
    significantTokens: list[SignificantToken] = Field(default_factory=list)


class DailyTotalItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="UTC day, YYYY-MM-DD")
    total: float = Field(..., description="SOL received that day")
    from_address: str = Field(..., alias="from", description="Source address")


class DailyTotalsResponse(BaseModel):
    """GET /get-daily-transfer-totals response, most recent day first."""

    dailyTotals: list[DailyTotalItem] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    details: str


def _error_response(message: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message, details=str(exc)).model_dump(),
    )


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def create_app(settings: Settings, ledger: Any = None) -> FastAPI:
    """
    Build the ASGI app for the given settings.

    Args:
        settings: Startup configuration; shared by every request.
        ledger: RPC client exposing get_signatures_for_address, get_transaction,
            get_token_accounts_by_owner and aclose. Defaults to SolanaRpcClient.
    """
    if ledger is None:
        ledger = SolanaRpcClient(
            settings.rpc_url,
            commitment=settings.rpc_commitment,
            request_timeout_sec=settings.rpc_timeout_sec,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "api_started",
            wallet_connection_mode=settings.wallet_connection_mode,
            logging_enabled=settings.logging_enabled,
        )
        yield
        await ledger.aclose()
        logger.info("api_stopped")

    app = FastAPI(
        title="PrintWatch API",
        description="Read-only wallet lookups: token holdings and daily transfer totals.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.ledger = ledger
    app.state.holdings = HoldingsService(settings, ledger)
    app.state.daily_transfers = DailyTransferService(settings, ledger)
    app.state.access_log = AccessLogger(settings.access_log_path, settings.logging_enabled)

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {"wallet_connection_mode": settings.wallet_connection_mode},
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness probe: API is up."""
        return {"status": "ok"}

    @app.get("/get-wallet-info", response_model=WalletInfoResponse)
    async def get_wallet_info(
        request: Request,
        address: str | None = Query(None, description="Solana wallet address (base58)"),
    ) -> Any:
        """
        Configured token holdings for a wallet plus its derived ATA.

        The access log row is written only after the address parses.
        """
        try:
            wallet = parse_pubkey(address)
            client_ip = request.client.host if request.client else None
            await app.state.access_log.alog_access(client_ip, str(wallet))

            result = await app.state.holdings.wallet_info(wallet)
            return WalletInfoResponse(
                walletAddress=result.wallet,
                derivedATA=result.derived_associated_address,
                significantTokens=[SignificantToken(**h.to_dict()) for h in result.holdings],
            )
        except Exception as e:
            logger.exception(
                "wallet_info_failed",
                wallet=short_wallet(address),
                error_code=getattr(e, "error_code", None),
                error=str(e),
            )
            return _error_response(WALLET_INFO_ERROR, e)

    @app.get("/get-daily-transfer-totals", response_model=DailyTotalsResponse)
    async def get_daily_transfer_totals(
        address: str | None = Query(None, description="Solana wallet address (base58)"),
    ) -> Any:
        """Per-day SOL received from the distributor over the last 7 days."""
        try:
            totals = await app.state.daily_transfers.daily_totals(address)
            return DailyTotalsResponse(
                dailyTotals=[DailyTotalItem(**t.to_dict()) for t in totals]
            )
        except Exception as e:
            logger.exception(
                "daily_totals_failed",
                wallet=short_wallet(address),
                error_code=getattr(e, "error_code", None),
                error=str(e),
            )
            return _error_response(DAILY_TOTALS_ERROR, e)

    # Mounted last so the routes above take precedence
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")

    return app
