"""
Token holdings lookup for one configured SPL mint.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from solders.pubkey import Pubkey

from backend_printwatch.config import Settings
from backend_printwatch.printwatch_logging import get_logger, short_wallet
from backend_printwatch.solana_listener.models import TokenAccountInfo
from backend_printwatch.utils.wallet_utils import (
    derive_associated_token_address,
    parse_pubkey,
)

logger = get_logger(__name__)

ListTokenAccounts = Callable[[str, str], Awaitable[list[TokenAccountInfo]]]


@dataclass(frozen=True)
class TokenHolding:
    mint: str
    amount: float
    decimals: int
    token_account_address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "mint": self.mint,
            "amount": self.amount,
            "decimals": self.decimals,
            "tokenAccountAddress": self.token_account_address,
        }


@dataclass(frozen=True)
class HoldingsResult:
    wallet: str
    derived_associated_address: str
    holdings: list[TokenHolding] = field(default_factory=list)


async def lookup_holdings(
    wallet: Pubkey,
    mint: Pubkey,
    token_program: Pubkey,
    list_token_accounts: ListTokenAccounts,
) -> HoldingsResult:
    """
    Derive wallet's ATA for mint and report its balance of mint.

    Only the first owned account whose mint matches is reported; accounts for
    other mints are ignored. Raw amounts are scaled by 10**decimals.
    """
    ata = derive_associated_token_address(wallet, mint, token_program)
    logger.debug("holdings_ata_derived", wallet=short_wallet(wallet), ata=str(ata))

    accounts = await list_token_accounts(str(wallet), str(token_program))
    mint_str = str(mint)
    match = next((a for a in accounts if a.mint == mint_str), None)

    holdings: list[TokenHolding] = []
    if match is not None:
        holdings.append(
            TokenHolding(
                mint=match.mint,
                amount=match.amount / (10 ** match.decimals),
                decimals=match.decimals,
                token_account_address=match.account_address,
            )
        )
    return HoldingsResult(
        wallet=str(wallet),
        derived_associated_address=str(ata),
        holdings=holdings,
    )


class HoldingsService:
    """Binds lookup_holdings to the configured mint, token program and RPC client."""

    def __init__(self, settings: Settings, ledger: Any) -> None:
        self._mint = settings.token_mint
        self._token_program = settings.token_program
        self._ledger = ledger

    async def wallet_info(self, wallet: Pubkey | str | None) -> HoldingsResult:
        wallet_key = parse_pubkey(wallet)
        logger.info("wallet_info_requested", wallet=short_wallet(wallet_key))
        result = await lookup_holdings(
            wallet_key,
            self._mint,
            self._token_program,
            self._ledger.get_token_accounts_by_owner,
        )
        logger.info(
            "wallet_info_computed",
            wallet=short_wallet(wallet_key),
            holding_count=len(result.holdings),
        )
        return result
