"""
Core package — shared exceptions.
"""

from backend_printwatch.core.exceptions import (
    ConfigurationError,
    InvalidAddressError,
    PrintwatchError,
    UpstreamRpcError,
)

__all__ = [
    "ConfigurationError",
    "InvalidAddressError",
    "PrintwatchError",
    "UpstreamRpcError",
]
