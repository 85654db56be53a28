"""
Application-level exceptions.

Every error the services raise derives from PrintwatchError and carries an
error_code. The HTTP layer maps all of them to a single 500 response shape;
the code is only used for logging.
"""

from __future__ import annotations


class PrintwatchError(Exception):
    """Base class for service errors."""

    error_code = "printwatch_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidAddressError(PrintwatchError):
    """Missing, malformed or off-curve Solana address."""

    error_code = "invalid_address"


class UpstreamRpcError(PrintwatchError):
    """Transport, HTTP or JSON-RPC failure from the Solana RPC provider."""

    error_code = "upstream_rpc"

    def __init__(self, message: str, *, method: str | None = None, code: int | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.code = code


class ConfigurationError(PrintwatchError):
    """Missing or invalid startup configuration."""

    error_code = "configuration"
