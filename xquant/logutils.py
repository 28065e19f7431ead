"""Logging setup and trading event log helpers."""

from __future__ import annotations

import logging
import math
import os

logger = logging.getLogger("xquant")

LOG_LEVEL_ENV = "XQUANT_LOG"

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_handler: logging.Handler | None = None


def _num(value: float) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def init_logging() -> int:
    """Configure the package logger from the environment and return the level."""
    global _handler
    raw_level = os.environ.get(LOG_LEVEL_ENV, "info")
    level = _LEVELS.get(raw_level.lower(), logging.INFO)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(
            logging.Formatter(
                "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
        logger.addHandler(_handler)
    logger.setLevel(level)
    logger.info("Logging initialized: level = %s", raw_level)
    return level


def log_trading_start(strategy_name: str, symbol: str) -> None:
    logger.info("Strategy started: %s - symbol: %s", strategy_name, symbol)


def log_trading_end(strategy_name: str, symbol: str, result: str) -> None:
    logger.info("Strategy finished: %s - symbol: %s - result: %s", strategy_name, symbol, result)


def log_order_created(order_id: str, symbol: str, side: str, quantity: float, price: float) -> None:
    logger.info(
        "Order created: %s - symbol: %s - side: %s - quantity: %s - price: %s",
        order_id,
        symbol,
        side,
        _num(quantity),
        _num(price),
    )


def log_order_cancelled(order_id: str) -> None:
    logger.info("Order cancelled: %s", order_id)


def log_order_filled(order_id: str, symbol: str, quantity: float, price: float) -> None:
    logger.info(
        "Order filled: %s - symbol: %s - quantity: %s - price: %s",
        order_id,
        symbol,
        _num(quantity),
        _num(price),
    )


def log_error(context: str, error: BaseException) -> None:
    logger.error("Error - %s: %s", context, error)