"""
Analytics package — computations over ledger data.

Daily transfer totals from the distributor and token holdings per wallet.
"""

from backend_printwatch.analytics.daily_transfers import (
    DailyTotal,
    DailyTransferService,
    aggregate_daily_totals,
)
from backend_printwatch.analytics.holdings import (
    HoldingsResult,
    HoldingsService,
    TokenHolding,
    lookup_holdings,
)

__all__ = [
    "DailyTotal",
    "DailyTransferService",
    "HoldingsResult",
    "HoldingsService",
    "TokenHolding",
    "aggregate_daily_totals",
    "lookup_holdings",
]
