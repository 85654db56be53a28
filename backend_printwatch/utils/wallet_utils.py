"""Wallet address utilities: validation and associated token account derivation."""

from __future__ import annotations

from typing import Any

from solders.pubkey import Pubkey

from backend_printwatch.core.exceptions import InvalidAddressError

ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")


def parse_pubkey(value: Any) -> Pubkey:
    """Parse a base58 address; raise InvalidAddressError when missing or malformed."""
    if isinstance(value, Pubkey):
        return value
    # no trimming: a padded address is malformed, not a different address
    raw = value if isinstance(value, str) else ""
    if not raw:
        raise InvalidAddressError("No address provided")
    try:
        return Pubkey.from_string(raw)
    except Exception as e:
        raise InvalidAddressError(f"Invalid public key input: {raw}") from e


def derive_associated_token_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program: Pubkey,
    *,
    allow_owner_off_curve: bool = False,
) -> Pubkey:
    """
    Derive the associated token account for (owner, mint) under token_program.

    Seeds: [owner, token_program, mint] under the Associated Token Account program.
    Owners that are themselves PDAs (off curve) are rejected unless allowed.
    """
    if not allow_owner_off_curve and not owner.is_on_curve():
        raise InvalidAddressError(f"Token owner is off curve: {owner}")
    seeds = [bytes(owner), bytes(token_program), bytes(mint)]
    ata, _ = Pubkey.find_program_address(seeds, ASSOCIATED_TOKEN_PROGRAM_ID)
    return ata
