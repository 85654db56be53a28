"""
Solana RPC payload parser — raw JSON-RPC results to typed models.

Purely structural: no aggregation or filtering by business rules. Malformed
payloads yield None (or are skipped in list results) instead of raising.
"""

from __future__ import annotations

from typing import Any

from backend_printwatch.printwatch_logging import get_logger
from backend_printwatch.solana_listener.models import (
    SignatureInfo,
    TokenAccountInfo,
    TransactionBalances,
)

logger = get_logger(__name__)


def _get_account_keys(
    message: dict[str, Any],
    meta: dict[str, Any] | None = None,
) -> list[str]:
    """
    Resolve accountKeys to a list of base58 strings (handles json vs jsonParsed).

    jsonParsed keys are dicts that already include lookup-table addresses. For
    plain json encoding, meta.loadedAddresses (writable + readonly) is appended.
    """
    keys = message.get("accountKeys")
    if not keys:
        return []
    if isinstance(keys[0], str):
        out = list(keys)
        loaded = (meta or {}).get("loadedAddresses") or {}
        for role in ("writable", "readonly"):
            out.extend(addr for addr in loaded.get(role) or [] if isinstance(addr, str))
        return out
    return [k.get("pubkey", "") for k in keys if isinstance(k, dict)]


def _get_message_and_meta(raw: dict[str, Any]) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Return (transaction.message, meta) from a getTransaction result."""
    tx_obj = raw.get("transaction")
    if not tx_obj or not isinstance(tx_obj, dict):
        return None, None
    message = tx_obj.get("message")
    if not message or not isinstance(message, dict):
        return None, None
    meta = raw.get("meta")
    if not isinstance(meta, dict):
        meta = None
    return message, meta


def parse_signatures(raw: Any) -> list[SignatureInfo]:
    """Parse a getSignaturesForAddress result; order is preserved (newest first)."""
    items = raw if isinstance(raw, list) else []
    infos: list[SignatureInfo] = []
    for item in items:
        if not isinstance(item, dict) or "signature" not in item:
            continue
        try:
            infos.append(SignatureInfo.from_rpc_item(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("signature_item_skipped", error=str(e))
    return infos


def parse_transaction_balances(raw: Any) -> TransactionBalances | None:
    """
    Parse a getTransaction result into account keys and lamport balances.

    Returns None when the node has no transaction (null result) or when the
    transaction lacks meta or balance arrays.
    """
    if not isinstance(raw, dict):
        return None
    message, meta = _get_message_and_meta(raw)
    if not message or meta is None:
        return None
    pre = meta.get("preBalances")
    post = meta.get("postBalances")
    if not isinstance(pre, list) or not isinstance(post, list):
        return None
    account_keys = _get_account_keys(message, meta)
    if not account_keys:
        return None

    signatures = (raw.get("transaction") or {}).get("signatures") or []
    block_time = raw.get("blockTime")
    try:
        return TransactionBalances(
            signature=signatures[0] if signatures else None,
            account_keys=tuple(account_keys),
            pre_balances=tuple(int(b) for b in pre),
            post_balances=tuple(int(b) for b in post),
            block_time=int(block_time) if block_time is not None else None,
        )
    except (TypeError, ValueError) as e:
        logger.debug("transaction_balances_unparseable", error=str(e))
        return None


def parse_token_account(item: Any) -> TokenAccountInfo | None:
    """Parse one jsonParsed item: {pubkey, account: {data: {parsed: {info}}}}."""
    if not isinstance(item, dict):
        return None
    try:
        info = item.get("account", {}).get("data", {}).get("parsed", {}).get("info", {})
        token_amount = info.get("tokenAmount") or {}
        mint = info.get("mint")
        if not mint or not item.get("pubkey"):
            return None
        return TokenAccountInfo(
            account_address=str(item["pubkey"]),
            mint=str(mint),
            owner=info.get("owner"),
            amount=int(token_amount["amount"]),
            decimals=int(token_amount["decimals"]),
        )
    except (AttributeError, TypeError, KeyError, ValueError) as e:
        logger.debug("token_account_unparseable", error=str(e))
        return None


def parse_token_accounts(raw: Any) -> list[TokenAccountInfo]:
    """Parse a getTokenAccountsByOwner result ({context, value: [...]}) or bare list."""
    value = raw.get("value") if isinstance(raw, dict) else raw
    if not isinstance(value, list):
        return []
    accounts: list[TokenAccountInfo] = []
    for item in value:
        acct = parse_token_account(item)
        if acct is not None:
            accounts.append(acct)
    return accounts
