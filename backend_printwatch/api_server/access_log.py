"""
Wallet access log — append-only CSV of /get-wallet-info lookups.

One row per request: ISO 8601 UTC timestamp, client IP, queried address.
The file is never read back by the service.
"""

from __future__ import annotations

import csv
import io
import threading
from datetime import datetime, timezone
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from backend_printwatch.printwatch_logging import get_logger

logger = get_logger(__name__)


def _iso_now() -> str:
    """UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class AccessLogger:
    """Appends CSV rows when enabled; disabled instances do nothing."""

    def __init__(self, path: Path, enabled: bool) -> None:
        self.path = Path(path)
        self.enabled = enabled
        self._lock = threading.Lock()
        if enabled:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def log_access(self, ip_address: str | None, wallet_address: str | None) -> bool:
        """
        Append one row. Returns True if a row was written.

        Write failures are logged and do not propagate; the request that
        triggered the write still succeeds.
        """
        if not self.enabled or not wallet_address:
            return False
        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(
            [_iso_now(), ip_address or "", wallet_address]
        )
        try:
            with self._lock, self.path.open("a", encoding="utf-8", newline="") as f:
                f.write(buf.getvalue())
        except OSError as e:
            logger.error("access_log_write_failed", path=str(self.path), error=str(e))
            return False
        return True

    async def alog_access(self, ip_address: str | None, wallet_address: str | None) -> bool:
        """log_access on the threadpool so the file append never blocks the event loop."""
        if not self.enabled:
            return False
        return await run_in_threadpool(self.log_access, ip_address, wallet_address)
