"""
Daily transfer totals: incoming SOL from one source address, per UTC day.

Walks a wallet's most recent signatures (newest first), fetches each
transaction in the trailing 7-day window one at a time, and sums the wallet's
positive lamport deltas on transactions where the source also appears.
Output is one DailyTotal per day, most recent day first.

Fetch errors are not caught here; one failed fetch fails the whole request.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Iterable

from solders.pubkey import Pubkey

from backend_printwatch.config import Settings
from backend_printwatch.printwatch_logging import get_logger, short_wallet
from backend_printwatch.solana_listener.models import SignatureInfo, TransactionBalances
from backend_printwatch.utils.wallet_utils import parse_pubkey

logger = get_logger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000
SEVEN_DAYS_SEC = 7 * 24 * 60 * 60

FetchTransaction = Callable[[str], Awaitable[TransactionBalances | None]]


@dataclass(frozen=True)
class DailyTotal:
    """Summed incoming amount (SOL) for one UTC calendar day."""

    date: str
    total: float
    source: str

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "total": self.total, "from": self.source}


def utc_day(block_time: int | None) -> str:
    """YYYY-MM-DD for a unix timestamp; a missing timestamp maps to the epoch day."""
    return datetime.fromtimestamp(block_time or 0, tz=timezone.utc).strftime("%Y-%m-%d")


async def aggregate_daily_totals(
    wallet: Pubkey | str,
    source: Pubkey | str,
    signatures: Iterable[SignatureInfo],
    fetch_tx: FetchTransaction,
    now_seconds: int,
    *,
    lamports_per_sol: int = LAMPORTS_PER_SOL,
) -> list[DailyTotal]:
    """
    Sum incoming transfers from source to wallet per UTC day over the last 7 days.

    Signatures whose block_time is older than now_seconds - 7 days are skipped
    without a fetch. Signatures with no block_time are still fetched. A
    transaction counts only if both addresses are among its account keys and the
    wallet's balance went up.
    """
    wallet_str = str(wallet)
    source_str = str(source)
    cutoff = now_seconds - SEVEN_DAYS_SEC

    # date -> summed lamports; kept as ints so sums are exact
    lamports_by_day: dict[str, int] = {}

    for sig in signatures:
        if sig.block_time is not None and sig.block_time < cutoff:
            continue

        logger.debug("daily_totals_processing_signature", signature=sig.signature[:44])
        tx = await fetch_tx(sig.signature)
        if tx is None:
            continue

        wallet_index = tx.index_of(wallet_str)
        source_index = tx.index_of(source_str)
        if wallet_index is None or source_index is None:
            continue

        delta = tx.lamport_delta(wallet_index)
        if delta is None or delta <= 0:
            continue

        date = utc_day(sig.block_time)
        lamports_by_day[date] = lamports_by_day.get(date, 0) + delta
        logger.debug(
            "daily_totals_transfer_added",
            date=date,
            amount_sol=delta / lamports_per_sol,
            source=short_wallet(source_str),
        )

    return [
        DailyTotal(date=date, total=lamports / lamports_per_sol, source=source_str)
        for date, lamports in sorted(lamports_by_day.items(), key=lambda kv: kv[0], reverse=True)
    ]


class DailyTransferService:
    """Binds the aggregation to configuration and an RPC client."""

    def __init__(
        self,
        settings: Settings,
        ledger: Any,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = settings.transfer_source
        self._limit = settings.signatures_limit
        self._ledger = ledger
        self._clock = clock

    async def daily_totals(self, wallet_address: str | None) -> list[DailyTotal]:
        """
        Daily totals for a wallet address string.

        Raises:
            InvalidAddressError: address missing or malformed.
            UpstreamRpcError: any RPC failure (no partial results).
        """
        wallet = parse_pubkey(wallet_address)
        wallet_short = short_wallet(wallet)
        logger.info("daily_totals_requested", wallet=wallet_short)

        signatures = await self._ledger.get_signatures_for_address(str(wallet), limit=self._limit)
        if not signatures:
            return []

        totals = await aggregate_daily_totals(
            wallet,
            self._source,
            signatures,
            self._ledger.get_transaction,
            int(self._clock()),
        )
        logger.info(
            "daily_totals_computed",
            wallet=wallet_short,
            signature_count=len(signatures),
            day_count=len(totals),
        )
        return totals
