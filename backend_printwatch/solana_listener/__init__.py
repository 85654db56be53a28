"""
Solana RPC access package.

Async JSON-RPC client plus the parsers and models that normalize its
responses for the analytics layer.
"""

from backend_printwatch.solana_listener.models import (
    SignatureInfo,
    TokenAccountInfo,
    TransactionBalances,
)
from backend_printwatch.solana_listener.rpc_client import SolanaRpcClient

__all__ = [
    "SignatureInfo",
    "SolanaRpcClient",
    "TokenAccountInfo",
    "TransactionBalances",
]
