"""
Test that printwatch_logging can be imported without circular import and logger works.
"""

from __future__ import annotations

import json

import pytest

from backend_printwatch.config import Settings
from backend_printwatch.printwatch_logging import configure_structlog, get_logger

MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


@pytest.fixture
def restore_logging():
    yield
    configure_structlog("json", "INFO")


def test_logging_import():
    """Import get_logger from printwatch_logging and use the logger."""
    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_json_lines_by_default(capsys, restore_logging):
    configure_structlog("json", "INFO")
    get_logger("test").info("json_line", key="value")
    line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert line["event_type"] == "json_line"
    assert line["key"] == "value"
    assert line["level"] == "info"


def test_settings_log_config_applies_to_existing_logger(capsys, restore_logging):
    """A logger made at import time follows LOG_FORMAT / LOG_LEVEL loaded later."""
    logger = get_logger("early")
    settings = Settings.from_env({
        "TOKEN_MINT_ADDRESS": MINT,
        "LOG_FORMAT": "console",
        "LOG_LEVEL": "WARNING",
    })
    configure_structlog(settings.log_format, settings.log_level)

    logger.info("quiet_event")
    logger.warning("loud_event")

    out = capsys.readouterr().out
    assert "quiet_event" not in out
    assert "loud_event" in out
    assert not out.lstrip().startswith("{")


def test_short_wallet():
    from backend_printwatch.printwatch_logging import short_wallet

    assert short_wallet("9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka") == "9QCfNuQuxct1Xk9y..."
    assert short_wallet("short") == "short"
    assert short_wallet(None) == ""
