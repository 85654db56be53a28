"""
Structured logging for PrintWatch.

Use get_logger() in every module for aggregation-friendly JSON output.
"""

from backend_printwatch.printwatch_logging.logger import (
    configure_structlog,
    get_logger,
    short_wallet,
)

__all__ = ["configure_structlog", "get_logger", "short_wallet"]
