"""
Parser edge cases: plain json encoding, lookup-table addresses, malformed payloads.
"""

from __future__ import annotations

from backend_printwatch.solana_listener.parser import (
    parse_signatures,
    parse_token_accounts,
    parse_transaction_balances,
)


def test_plain_json_keys_append_loaded_addresses():
    raw = {
        "blockTime": None,
        "transaction": {"signatures": ["s"], "message": {"accountKeys": ["A", "B"]}},
        "meta": {
            "preBalances": [1, 2, 3, 4],
            "postBalances": [1, 2, 5, 4],
            "loadedAddresses": {"writable": ["C"], "readonly": ["D"]},
        },
    }
    tx = parse_transaction_balances(raw)
    assert tx is not None
    assert tx.account_keys == ("A", "B", "C", "D")
    assert tx.index_of("C") == 2
    assert tx.lamport_delta(2) == 2
    assert tx.index_of("Z") is None
    assert tx.block_time is None


def test_missing_balances_or_message_is_none():
    assert parse_transaction_balances(None) is None
    assert parse_transaction_balances({"meta": {"preBalances": [], "postBalances": []}}) is None
    assert parse_transaction_balances({
        "transaction": {"message": {"accountKeys": ["A"]}},
        "meta": {"preBalances": [1]},
    }) is None


def test_parse_signatures_non_list():
    assert parse_signatures(None) == []
    assert parse_signatures({"unexpected": True}) == []


def test_parse_token_accounts_bare_list_and_bad_amount():
    items = [
        {"pubkey": "acct", "account": {"data": {"parsed": {"info": {
            "mint": "M", "tokenAmount": {"amount": "12", "decimals": 1}}}}}},
        {"pubkey": "bad", "account": {"data": {"parsed": {"info": {
            "mint": "M", "tokenAmount": {"amount": "n/a", "decimals": 1}}}}}},
    ]
    accounts = parse_token_accounts(items)
    assert [a.account_address for a in accounts] == ["acct"]
    assert accounts[0].amount == 12
