"""
Solana JSON-RPC client — the ledger primitives the services consume.

Thin async wrapper over httpx: one POST per call, no retries, no batching.
Any transport, HTTP or JSON-RPC failure is raised as UpstreamRpcError so the
caller can abort the whole request.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from backend_printwatch.core.exceptions import UpstreamRpcError
from backend_printwatch.printwatch_logging import get_logger, short_wallet
from backend_printwatch.solana_listener.models import (
    SignatureInfo,
    TokenAccountInfo,
    TransactionBalances,
)
from backend_printwatch.solana_listener.parser import (
    parse_signatures,
    parse_token_accounts,
    parse_transaction_balances,
)

logger = get_logger(__name__)

MAX_SIGNATURES_PER_REQUEST = 1000


class SolanaRpcClient:
    """
    Async Solana JSON-RPC client.

    Owns its httpx.AsyncClient unless one is passed in (tests pass a client
    backed by httpx.MockTransport). Call aclose() on shutdown.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        commitment: str = "confirmed",
        request_timeout_sec: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            rpc_url: Solana RPC HTTP endpoint (e.g. https://api.mainnet-beta.solana.com).
            commitment: processed | confirmed | finalized.
            request_timeout_sec: HTTP timeout for each RPC request.
            http_client: Optional shared client; not closed by aclose().
        """
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.strip()
        self._commitment = commitment
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(request_timeout_sec)
        )
        self._ids = itertools.count(1)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Perform one JSON-RPC call; raise UpstreamRpcError on transport or RPC error."""
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamRpcError(
                f"Solana RPC HTTP {e.response.status_code} for {method}",
                method=method,
                code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamRpcError(f"Solana RPC transport error for {method}: {e}", method=method) from e
        except ValueError as e:
            raise UpstreamRpcError(f"Solana RPC returned invalid JSON for {method}", method=method) from e

        if not isinstance(data, dict):
            raise UpstreamRpcError(f"Solana RPC returned unexpected payload for {method}", method=method)
        if "error" in data:
            err = data["error"] or {}
            message = err.get("message", err) if isinstance(err, dict) else err
            code = err.get("code") if isinstance(err, dict) else None
            raise UpstreamRpcError(
                f"Solana RPC error: {message} (code={code})", method=method, code=code
            )
        if "result" not in data:
            raise UpstreamRpcError("Solana RPC returned no result", method=method)
        return data["result"]

    async def get_signatures_for_address(
        self, address: str, limit: int = MAX_SIGNATURES_PER_REQUEST
    ) -> list[SignatureInfo]:
        """Most recent signatures for address, newest first (single page)."""
        if not (1 <= limit <= MAX_SIGNATURES_PER_REQUEST):
            raise ValueError(f"limit must be between 1 and {MAX_SIGNATURES_PER_REQUEST}")
        result = await self._call(
            "getSignaturesForAddress",
            [str(address), {"limit": limit, "commitment": self._commitment}],
        )
        infos = parse_signatures(result)
        logger.info(
            "rpc_signatures_fetched",
            wallet=short_wallet(address),
            signature_count=len(infos),
        )
        return infos

    async def get_transaction(self, signature: str) -> TransactionBalances | None:
        """Parsed transaction balances, or None if the node does not have it."""
        result = await self._call(
            "getTransaction",
            [
                str(signature),
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self._commitment,
                },
            ],
        )
        if result is None:
            logger.debug("rpc_transaction_missing", signature=str(signature)[:44])
            return None
        return parse_transaction_balances(result)

    async def get_token_accounts_by_owner(
        self, owner: str, program_id: str
    ) -> list[TokenAccountInfo]:
        """All token accounts owned by owner under program_id (jsonParsed)."""
        result = await self._call(
            "getTokenAccountsByOwner",
            [
                str(owner),
                {"programId": str(program_id)},
                {"encoding": "jsonParsed", "commitment": self._commitment},
            ],
        )
        accounts = parse_token_accounts(result)
        logger.info(
            "rpc_token_accounts_fetched",
            wallet=short_wallet(owner),
            account_count=len(accounts),
        )
        return accounts
