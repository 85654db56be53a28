"""
PrintWatch backend.

Read-only HTTP service over Solana RPC: PRINT token holdings per wallet and
daily SOL distributions received from the distributor address.
"""

__version__ = "0.1.0"
