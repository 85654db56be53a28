"""
Pytest fixtures for PrintWatch tests. An in-memory ledger replaces Solana RPC.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"


class FakeLedger:
    """
    Stand-in for SolanaRpcClient.

    signatures: list returned by get_signatures_for_address.
    transactions: signature -> TransactionBalances (missing key -> None).
    token_accounts: list returned by get_token_accounts_by_owner.
    fail_on: signature whose fetch raises `error`.
    """

    def __init__(self) -> None:
        self.signatures: list = []
        self.transactions: dict = {}
        self.token_accounts: list = []
        self.fail_on: str | None = None
        self.error: Exception | None = None
        self.fetched: list[str] = []
        self.signature_calls: list[tuple[str, int]] = []
        self.token_account_calls: list[tuple[str, str]] = []
        self.closed = False

    async def get_signatures_for_address(self, address: str, limit: int = 1000) -> list:
        self.signature_calls.append((address, limit))
        if self.error is not None and self.fail_on is None:
            raise self.error
        return list(self.signatures)

    async def get_transaction(self, signature: str):
        self.fetched.append(signature)
        if self.fail_on == signature and self.error is not None:
            raise self.error
        return self.transactions.get(signature)

    async def get_token_accounts_by_owner(self, owner: str, program_id: str) -> list:
        self.token_account_calls.append((owner, program_id))
        if self.error is not None and self.fail_on is None:
            raise self.error
        return list(self.token_accounts)

    async def aclose(self) -> None:
        self.closed = True


def new_pubkey() -> Pubkey:
    """Fresh on-curve address."""
    return Keypair().pubkey()


@pytest.fixture
def wallet() -> Pubkey:
    return new_pubkey()


@pytest.fixture
def source() -> Pubkey:
    return new_pubkey()


@pytest.fixture
def mint() -> Pubkey:
    return new_pubkey()


@pytest.fixture
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def settings(tmp_path: Path, source: Pubkey, mint: Pubkey):
    """Settings built directly (no env), access log under tmp_path."""
    from backend_printwatch.config import Settings

    return Settings(
        rpc_url="http://rpc.test",
        token_mint=mint,
        token_program=Pubkey.from_string(TOKEN_PROGRAM),
        transfer_source=source,
        wallet_connection_mode=0,
        logging_enabled=False,
        access_log_path=tmp_path / "logs" / "wallet_access.csv",
    )


@pytest.fixture
def client(settings, fake_ledger):
    """FastAPI TestClient over the fake ledger."""
    from fastapi.testclient import TestClient

    from backend_printwatch.api_server.server import create_app

    return TestClient(create_app(settings, ledger=fake_ledger))
