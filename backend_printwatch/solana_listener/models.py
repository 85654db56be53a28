"""
Data models for Solana RPC results.

Frozen dataclasses built from getSignaturesForAddress, getTransaction and
getTokenAccountsByOwner responses. Only the fields the services read are kept.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SignatureInfo:
    """
    Normalized transaction signature info from getSignaturesForAddress.

    Mirrors Solana RPC response fields. The RPC returns these newest first.
    """

    signature: str
    slot: int
    err: Any  # None if success; dict/object from RPC if failed
    block_time: int | None  # Unix timestamp; None if not available
    memo: str | None = None
    confirmation_status: str | None = None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureInfo":
        """Build from a single getSignaturesForAddress result item."""
        block_time = item.get("blockTime")
        return cls(
            signature=item["signature"],
            slot=int(item["slot"]),
            err=item.get("err"),
            block_time=int(block_time) if block_time is not None else None,
            memo=item.get("memo"),
            confirmation_status=item.get("confirmationStatus"),
        )


@dataclass(frozen=True)
class TransactionBalances:
    """Account keys with native (lamport) balances before and after one transaction."""

    signature: str | None
    account_keys: tuple[str, ...]
    pre_balances: tuple[int, ...]
    post_balances: tuple[int, ...]
    block_time: int | None = None

    def index_of(self, address: str) -> int | None:
        """Position of address in account_keys (first match), or None."""
        try:
            return self.account_keys.index(address)
        except ValueError:
            return None

    def lamport_delta(self, index: int) -> int | None:
        """post - pre for one account; None when balances do not cover index."""
        if index >= len(self.pre_balances) or index >= len(self.post_balances):
            return None
        return self.post_balances[index] - self.pre_balances[index]


@dataclass(frozen=True)
class TokenAccountInfo:
    """One SPL token account from getTokenAccountsByOwner (jsonParsed)."""

    account_address: str
    mint: str
    owner: str | None
    amount: int  # raw base units
    decimals: int
