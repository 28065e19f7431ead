import logging

import pytest

from xquant.errors import ConfigError
from xquant.logutils import (
    LOG_LEVEL_ENV,
    init_logging,
    log_error,
    log_order_cancelled,
    log_order_created,
    log_order_filled,
    log_trading_end,
    log_trading_start,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("debug", logging.DEBUG),
        ("WARN", logging.WARNING),
        ("error", logging.ERROR),
        ("verbose", logging.INFO),
    ],
)
def test_init_logging_reads_level(monkeypatch, raw, expected):
    monkeypatch.setenv(LOG_LEVEL_ENV, raw)
    assert init_logging() == expected
    assert logging.getLogger("xquant").level == expected


def test_init_logging_defaults_to_info(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert init_logging() == logging.INFO


def test_init_logging_does_not_stack_handlers(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    first = init_logging()
    count = len(logging.getLogger("xquant").handlers)
    second = init_logging()
    assert first == logging.INFO
    assert second == logging.INFO
    assert count >= 1
    assert len(logging.getLogger("xquant").handlers) == count


def test_trading_lifecycle_messages(caplog):
    caplog.set_level(logging.INFO, logger="xquant")
    log_trading_start("VWAP-BTCUSDT", "BTCUSDT")
    log_trading_end("VWAP-BTCUSDT", "BTCUSDT", "completed")
    assert len(caplog.records) == 2
    assert "VWAP-BTCUSDT" in caplog.records[0].getMessage()
    assert "completed" in caplog.records[1].getMessage()


def test_order_messages(caplog):
    caplog.set_level(logging.INFO, logger="xquant")
    log_order_created("o1", "BTCUSDT", "Buy", 1.5, 50000.0)
    log_order_filled("o1", "BTCUSDT", 0.25, 49999.5)
    log_order_cancelled("o2")
    created, filled, cancelled = (r.getMessage() for r in caplog.records)
    assert "o1" in created and "Buy" in created and "1.5" in created and "50000" in created
    assert "0.25" in filled and "49999.5" in filled
    assert "o2" in cancelled


def test_log_error(caplog):
    caplog.set_level(logging.INFO, logger="xquant")
    log_error("loading config", ConfigError("Missing parameter: 'period'"))
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert "loading config" in record.getMessage()
    assert "Missing parameter: 'period'" in record.getMessage()